"""Message analysis orchestration and conversation history services."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from time import perf_counter

from sqlalchemy import select
from sqlalchemy.orm import Session

from orientlink.gateway import ModelGateway, get_default_model_gateway
from orientlink.gateway.payloads import AnalysisPayload, SuggestedResponsesPayload, validate_payload
from orientlink.models.conversation_record import ConversationRecord
from orientlink.models.supplier_profile import SupplierProfile
from orientlink.schemas.analysis import (
    AnalyzeRequest,
    AnalyzeResponse,
    BilingualResponse,
    InterpretationData,
    SuggestedResponses,
)

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_LANGUAGE = "es"
DEFAULT_TARGET_LANGUAGE = "zh"
ALERT_SEPARATOR = "; "


def analyze_message(
    db: Session,
    request: AnalyzeRequest,
    *,
    gateway: ModelGateway | None = None,
) -> AnalyzeResponse:
    """Translate, interpret and draft replies for one message, then log the exchange."""

    total_started = perf_counter()
    source_lang = request.source_language or DEFAULT_SOURCE_LANGUAGE
    target_lang = request.target_language or DEFAULT_TARGET_LANGUAGE

    supplier: SupplierProfile | None = None
    if request.provider_id is not None:
        supplier = db.get(SupplierProfile, request.provider_id)
        if supplier is None:
            logger.info("analysis.supplier_not_found provider_id=%s", request.provider_id)

    active_gateway = gateway or get_default_model_gateway()
    started = perf_counter()
    raw_reply = active_gateway.analyze_message(
        request.message_text,
        source_lang,
        target_lang,
        request.conversation_context,
    )
    payload = validate_payload(
        AnalysisPayload,
        active_gateway.parse_json(raw_reply),
        required=("translatedMessage", "interpretation", "suggestedResponses"),
    )
    model_ms = (perf_counter() - started) * 1000.0

    response = _build_analyze_response(payload, request.message_text, source_lang, target_lang)

    started = perf_counter()
    record = ConversationRecord(
        user_id=request.user_id,
        supplier_id=supplier.id if supplier is not None else None,
        original_message=request.message_text,
        translated_message=response.translated_message,
        source_language=source_lang,
        target_language=target_lang,
        ai_interpretation=response.interpretation.business_context,
        alerts=ALERT_SEPARATOR.join(response.alerts),
        suggested_responses=raw_reply,
        message_type="analysis",
    )
    try:
        db.add(record)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("analysis.persist_failed user_id=%s", request.user_id)
        raise
    db.refresh(record)
    persist_ms = (perf_counter() - started) * 1000.0

    response.conversation_id = record.id
    response.provider_id = record.supplier_id
    logger.info(
        (
            "analysis.completed conversation_id=%s user_id=%s supplier_id=%s alerts=%d "
            "model_ms=%.2f persist_ms=%.2f total_ms=%.2f"
        ),
        record.id,
        request.user_id,
        record.supplier_id,
        len(response.alerts),
        model_ms,
        persist_ms,
        (perf_counter() - total_started) * 1000.0,
    )
    return response


def list_conversations(
    db: Session,
    user_id: str,
    supplier_id: int | None = None,
) -> list[ConversationRecord]:
    """List a user's conversation records, optionally for one supplier, newest first."""

    stmt = select(ConversationRecord).where(ConversationRecord.user_id == user_id)
    if supplier_id is not None:
        stmt = stmt.where(ConversationRecord.supplier_id == supplier_id)
    stmt = stmt.order_by(ConversationRecord.created_at.desc(), ConversationRecord.id.desc())
    return list(db.scalars(stmt).all())


def list_recent_conversations(db: Session, user_id: str, since: datetime) -> list[ConversationRecord]:
    """List a user's records created at or after ``since``, newest first."""

    stmt = (
        select(ConversationRecord)
        .where(
            ConversationRecord.user_id == user_id,
            ConversationRecord.created_at >= since,
        )
        .order_by(ConversationRecord.created_at.desc(), ConversationRecord.id.desc())
    )
    return list(db.scalars(stmt).all())


def list_conversations_by_type(db: Session, message_type: str) -> list[ConversationRecord]:
    """List records carrying one message-type tag, newest first."""

    stmt = (
        select(ConversationRecord)
        .where(ConversationRecord.message_type == message_type)
        .order_by(ConversationRecord.created_at.desc(), ConversationRecord.id.desc())
    )
    return list(db.scalars(stmt).all())


def _build_analyze_response(
    payload: AnalysisPayload,
    original_message: str,
    source_lang: str,
    target_lang: str,
) -> AnalyzeResponse:
    interpretation = InterpretationData()
    if payload.interpretation is not None:
        interpretation = InterpretationData(
            business_context=payload.interpretation.business_context,
            sentiment=payload.interpretation.sentiment,
            key_terms=list(payload.interpretation.key_terms),
            risk_level=payload.interpretation.risk_level,
        )
    return AnalyzeResponse(
        original_message=original_message,
        translated_message=payload.translated_message,
        source_language=source_lang,
        target_language=target_lang,
        interpretation=interpretation,
        alerts=list(payload.alerts),
        suggested_responses=to_suggested_responses(payload.suggested_responses),
        timestamp=datetime.now(timezone.utc),
    )


def to_suggested_responses(payload: SuggestedResponsesPayload | None) -> SuggestedResponses:
    """Copy the tones present in the reply; missing or null tones stay unset."""

    result = SuggestedResponses()
    if payload is None:
        return result
    for tone in ("formal", "negotiator", "direct"):
        drafted = getattr(payload, tone)
        if drafted is not None:
            setattr(result, tone, BilingualResponse(zh=drafted.zh, es=drafted.es))
    return result
