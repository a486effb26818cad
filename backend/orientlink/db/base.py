"""SQLAlchemy metadata registry import for Alembic."""

from orientlink.models import ConversationRecord, SupplierProfile
from orientlink.models.base import Base

__all__ = ["Base", "ConversationRecord", "SupplierProfile"]
