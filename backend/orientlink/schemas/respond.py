"""Reply drafting request schema."""

from typing import Literal

from pydantic import Field, field_validator

from orientlink.schemas.common import CamelModel, require_not_blank

ToneFilter = Literal["formal", "negotiator", "direct", "all"]


class RespondRequest(CamelModel):
    """Payload for drafting replies in one or more tones."""

    context: str = Field(max_length=3000)
    response_type: ToneFilter | None = "all"
    user_intent: str | None = Field(default=None, max_length=1000)
    provider_id: int | None = None
    user_id: str

    @field_validator("context")
    @classmethod
    def _context_not_blank(cls, value: str) -> str:
        return require_not_blank(value, "Context cannot be empty")

    @field_validator("user_id")
    @classmethod
    def _user_not_blank(cls, value: str) -> str:
        return require_not_blank(value, "User ID cannot be empty")
