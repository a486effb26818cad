"""Supplier extraction and lookup routes."""

from fastapi import APIRouter, Depends, Path, Query, Response
from sqlalchemy.orm import Session

from orientlink.db.dependencies import get_db
from orientlink.gateway import ModelGateway, get_default_model_gateway
from orientlink.routers.params import UserIdQuery
from orientlink.schemas.supplier import SupplierAnalysis, SupplierRead
from orientlink.services.suppliers import (
    analyze_supplier,
    get_supplier,
    list_suppliers_for_user,
    search_suppliers_by_name,
    search_suppliers_by_product,
)

router = APIRouter()


@router.get("/provider", response_model=SupplierAnalysis)
def analyze_provider(
    user_id: UserIdQuery,
    url: str = Query(..., min_length=1, max_length=1000),
    context: str | None = Query(default=None, max_length=3000),
    db: Session = Depends(get_db),
    gateway: ModelGateway = Depends(get_default_model_gateway),
) -> SupplierAnalysis:
    """Infer supplier attributes from a product URL and store the profile."""

    return analyze_supplier(db, url, user_id, context, gateway=gateway)


@router.get("/providers", response_model=list[SupplierRead])
def get_user_providers(
    user_id: UserIdQuery,
    db: Session = Depends(get_db),
) -> list[SupplierRead]:
    """List a user's supplier profiles, newest first."""

    return [SupplierRead.model_validate(supplier) for supplier in list_suppliers_for_user(db, user_id)]


@router.get("/provider/{provider_id}", response_model=SupplierRead)
def get_provider(
    provider_id: int = Path(...),
    db: Session = Depends(get_db),
):
    """Return one supplier profile, or an empty 404 when it does not exist."""

    supplier = get_supplier(db, provider_id)
    if supplier is None:
        return Response(status_code=404)
    return SupplierRead.model_validate(supplier)


@router.get("/providers/search", response_model=list[SupplierRead])
def search_providers(
    name: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
) -> list[SupplierRead]:
    """Case-insensitive partial match on supplier name."""

    return [SupplierRead.model_validate(supplier) for supplier in search_suppliers_by_name(db, name)]


@router.get("/providers/search/product", response_model=list[SupplierRead])
def search_providers_by_product(
    user_id: UserIdQuery,
    product: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
) -> list[SupplierRead]:
    """Case-insensitive partial match on product name within one user's profiles."""

    return [
        SupplierRead.model_validate(supplier)
        for supplier in search_suppliers_by_product(db, user_id, product)
    ]
