"""Supplier extraction and lookup services."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from time import perf_counter

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from orientlink.gateway import ModelGateway, get_default_model_gateway
from orientlink.gateway.payloads import ProviderPayload, RiskAssessmentPayload, field_state, validate_payload
from orientlink.models.base import utc_now
from orientlink.models.supplier_profile import SupplierProfile
from orientlink.schemas.supplier import RiskAssessment, SupplierAnalysis

logger = logging.getLogger(__name__)

# Numeric attributes keep their stored value unless the model supplies a usable one.
_MERGE_ONLY_WHEN_PRESENT = ("moq", "price_per_unit", "delivery_time_days")


def analyze_supplier(
    db: Session,
    url: str,
    user_id: str,
    context: str | None = None,
    *,
    gateway: ModelGateway | None = None,
) -> SupplierAnalysis:
    """Extract supplier attributes for ``url`` and create or update its profile."""

    total_started = perf_counter()
    active_gateway = gateway or get_default_model_gateway()
    existing = find_supplier_by_url(db, url)

    started = perf_counter()
    raw_reply = active_gateway.extract_provider_info(url, context)
    payload = validate_payload(
        ProviderPayload,
        active_gateway.parse_json(raw_reply),
        required=("providerName", "productName"),
    )
    model_ms = (perf_counter() - started) * 1000.0

    started = perf_counter()
    supplier = existing if existing is not None else SupplierProfile(source_url=url)
    _merge_payload(supplier, payload, user_id=user_id)
    try:
        db.add(supplier)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("suppliers.persist_failed url=%s user_id=%s", url, user_id)
        raise
    db.refresh(supplier)
    persist_ms = (perf_counter() - started) * 1000.0

    logger.info(
        (
            "suppliers.analysis_completed supplier_id=%s url=%s created=%s "
            "model_ms=%.2f persist_ms=%.2f total_ms=%.2f"
        ),
        supplier.id,
        url,
        existing is None,
        model_ms,
        persist_ms,
        (perf_counter() - total_started) * 1000.0,
    )
    return _build_supplier_analysis(supplier, payload.risk_assessment)


def find_supplier_by_url(db: Session, url: str) -> SupplierProfile | None:
    """Return the profile stored for an exact source URL."""

    return db.scalar(select(SupplierProfile).where(SupplierProfile.source_url == url))


def get_supplier(db: Session, supplier_id: int) -> SupplierProfile | None:
    """Return one profile by id, or ``None`` when it does not exist."""

    return db.get(SupplierProfile, supplier_id)


def list_suppliers_for_user(db: Session, user_id: str) -> list[SupplierProfile]:
    """List a user's profiles, most recently created first."""

    stmt = (
        select(SupplierProfile)
        .where(SupplierProfile.user_id == user_id)
        .order_by(SupplierProfile.created_at.desc(), SupplierProfile.id.desc())
    )
    return list(db.scalars(stmt).all())


def search_suppliers_by_name(db: Session, name: str) -> list[SupplierProfile]:
    """Case-insensitive substring search on supplier name, newest first."""

    pattern = f"%{_escape_like(name.lower())}%"
    stmt = (
        select(SupplierProfile)
        .where(func.lower(SupplierProfile.provider_name).like(pattern, escape="\\"))
        .order_by(SupplierProfile.created_at.desc(), SupplierProfile.id.desc())
    )
    return list(db.scalars(stmt).all())


def search_suppliers_by_product(db: Session, user_id: str, product: str) -> list[SupplierProfile]:
    """Case-insensitive substring search on product name within one user's profiles."""

    pattern = f"%{_escape_like(product.lower())}%"
    stmt = (
        select(SupplierProfile)
        .where(
            SupplierProfile.user_id == user_id,
            func.lower(SupplierProfile.product_name).like(pattern, escape="\\"),
        )
        .order_by(SupplierProfile.created_at.desc(), SupplierProfile.id.desc())
    )
    return list(db.scalars(stmt).all())


def _merge_payload(supplier: SupplierProfile, payload: ProviderPayload, *, user_id: str) -> None:
    supplier.user_id = user_id
    supplier.provider_name = payload.provider_name
    supplier.product_name = payload.product_name
    supplier.currency = payload.currency
    supplier.certifications = list(payload.certifications)
    supplier.additional_info = payload.additional_info
    supplier.risk_assessment = (
        json.dumps(payload.risk_assessment.model_dump(by_alias=True), ensure_ascii=False)
        if payload.risk_assessment is not None
        else None
    )
    for field in _MERGE_ONLY_WHEN_PRESENT:
        if field_state(payload, field) == "present":
            setattr(supplier, field, getattr(payload, field))
    # Identical re-extractions would otherwise skip the onupdate hook.
    supplier.updated_at = utc_now()


def _build_supplier_analysis(
    supplier: SupplierProfile,
    risk: RiskAssessmentPayload | None,
) -> SupplierAnalysis:
    risk_assessment = RiskAssessment()
    if risk is not None:
        risk_assessment = RiskAssessment(
            overall_risk=risk.overall_risk or "unknown",
            warnings=list(risk.warnings),
            recommendation=risk.recommendation or "",
        )
    return SupplierAnalysis(
        provider_id=supplier.id,
        provider_name=supplier.provider_name,
        source_url=supplier.source_url,
        product_name=supplier.product_name,
        moq=supplier.moq,
        price_per_unit=supplier.price_per_unit,
        currency=supplier.currency,
        certifications=list(supplier.certifications or []),
        delivery_time_days=supplier.delivery_time_days,
        additional_info=supplier.additional_info,
        risk_assessment=risk_assessment,
        analyzed_at=datetime.now(timezone.utc),
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
