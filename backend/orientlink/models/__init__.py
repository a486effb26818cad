"""ORM models package exports."""

from orientlink.models.conversation_record import ConversationRecord
from orientlink.models.supplier_profile import SupplierProfile

__all__ = [
    "ConversationRecord",
    "SupplierProfile",
]
