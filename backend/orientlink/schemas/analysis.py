"""Message analysis request/response schemas."""

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from orientlink.schemas.common import CamelModel, require_not_blank


class AnalyzeRequest(CamelModel):
    """Payload for analyzing one buyer or supplier message."""

    message_text: str = Field(max_length=5000)
    source_language: str | None = Field(default=None, max_length=50)
    target_language: str | None = Field(default=None, max_length=50)
    provider_id: int | None = None
    user_id: str
    conversation_context: str | None = Field(default=None, max_length=3000)

    @field_validator("message_text")
    @classmethod
    def _message_not_blank(cls, value: str) -> str:
        return require_not_blank(value, "Message text cannot be empty")

    @field_validator("user_id")
    @classmethod
    def _user_not_blank(cls, value: str) -> str:
        return require_not_blank(value, "User ID cannot be empty")


class BilingualResponse(CamelModel):
    """One drafted reply in Chinese with its Spanish rendering."""

    zh: str | None = None
    es: str | None = None


class SuggestedResponses(CamelModel):
    """Drafted replies keyed by tone. Tones the model did not return stay unset."""

    formal: BilingualResponse | None = None
    negotiator: BilingualResponse | None = None
    direct: BilingualResponse | None = None


class InterpretationData(CamelModel):
    """Business reading of a message."""

    business_context: str | None = None
    sentiment: str | None = None
    key_terms: list[str] = Field(default_factory=list)
    risk_level: str | None = None


class AnalyzeResponse(CamelModel):
    """Translation, interpretation, alerts and reply drafts for one message."""

    original_message: str
    translated_message: str | None
    source_language: str
    target_language: str
    interpretation: InterpretationData
    alerts: list[str] = Field(default_factory=list)
    suggested_responses: SuggestedResponses
    timestamp: datetime
    conversation_id: int | None = None
    provider_id: int | None = None


class ConversationRecordRead(CamelModel):
    """Serialized conversation record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    provider_id: int | None = Field(default=None, validation_alias="supplier_id")
    original_message: str
    translated_message: str | None
    source_language: str
    target_language: str
    ai_interpretation: str | None
    alerts: str
    suggested_responses: str | None
    message_type: str
    created_at: datetime
