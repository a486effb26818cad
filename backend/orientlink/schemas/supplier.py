"""Supplier profile response schemas."""

from datetime import datetime

from pydantic import ConfigDict, Field

from orientlink.schemas.common import CamelModel


class RiskAssessment(CamelModel):
    """Model-produced risk reading for a supplier."""

    overall_risk: str = "unknown"
    warnings: list[str] = Field(default_factory=list)
    recommendation: str = ""


class SupplierRead(CamelModel):
    """Serialized supplier profile row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    provider_name: str | None
    source_url: str = Field(serialization_alias="alibabaUrl")
    product_name: str | None
    moq: int | None
    price_per_unit: float | None
    currency: str | None
    certifications: list[str]
    delivery_time_days: int | None
    additional_info: str | None
    risk_assessment: str | None
    created_at: datetime
    updated_at: datetime


class SupplierAnalysis(CamelModel):
    """Result of one supplier extraction request."""

    provider_id: int
    provider_name: str | None
    source_url: str = Field(serialization_alias="alibabaUrl")
    product_name: str | None
    moq: int | None = Field(default=None, gt=0)
    price_per_unit: float | None = Field(default=None, gt=0)
    currency: str | None
    certifications: list[str] = Field(default_factory=list)
    delivery_time_days: int | None = Field(default=None, gt=0)
    additional_info: str | None
    risk_assessment: RiskAssessment
    analyzed_at: datetime
