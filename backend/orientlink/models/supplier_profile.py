"""Supplier profile ORM model."""

from sqlalchemy import JSON, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from orientlink.models.base import Base, CreatedAtMixin, IdMixin, UpdatedAtMixin


class SupplierProfile(Base, IdMixin, CreatedAtMixin, UpdatedAtMixin):
    """Business attributes extracted for one supplier URL."""

    __tablename__ = "supplier_profiles"

    user_id: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    provider_name: Mapped[str | None] = mapped_column(String(500), nullable=True)
    source_url: Mapped[str] = mapped_column(String(1000), unique=True, nullable=False)
    product_name: Mapped[str | None] = mapped_column(String(500), nullable=True)
    moq: Mapped[int | None] = mapped_column(Integer, nullable=True)
    price_per_unit: Mapped[float | None] = mapped_column(Float, nullable=True)
    currency: Mapped[str | None] = mapped_column(String(50), nullable=True)
    certifications: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    delivery_time_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    additional_info: Mapped[str | None] = mapped_column(Text, nullable=True)
    risk_assessment: Mapped[str | None] = mapped_column(Text, nullable=True)
