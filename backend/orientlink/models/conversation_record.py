"""Conversation record ORM model."""

from typing import Literal

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from orientlink.models.base import Base, CreatedAtMixin, IdMixin

MessageType = Literal["analysis", "user_to_provider", "provider_to_user"]
MESSAGE_TYPE_VALUES: tuple[str, ...] = ("analysis", "user_to_provider", "provider_to_user")


class ConversationRecord(Base, IdMixin, CreatedAtMixin):
    """One analyzed message exchange. Rows are never modified after insert."""

    __tablename__ = "conversation_records"

    user_id: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    supplier_id: Mapped[int | None] = mapped_column(
        ForeignKey("supplier_profiles.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )
    original_message: Mapped[str] = mapped_column(Text, nullable=False)
    translated_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    source_language: Mapped[str] = mapped_column(String(50), nullable=False)
    target_language: Mapped[str] = mapped_column(String(50), nullable=False)
    ai_interpretation: Mapped[str | None] = mapped_column(Text, nullable=True)
    alerts: Mapped[str] = mapped_column(Text, default="", nullable=False)
    suggested_responses: Mapped[str | None] = mapped_column(Text, nullable=True)
    message_type: Mapped[str] = mapped_column(String(32), index=True, nullable=False)
