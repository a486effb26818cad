"""Typed views over the JSON objects the model returns.

Each payload keeps track of which keys the model actually sent, so callers can
tell an absent key from an explicit ``null`` from a real value (see
``field_state``). Keys a flow cannot work without are checked up front and
reported as ``MalformedModelResponse`` instead of failing deep in the mapping.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Literal, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from orientlink.errors import MalformedModelResponse

logger = logging.getLogger(__name__)

FieldState = Literal["absent", "null", "present"]
PayloadT = TypeVar("PayloadT", bound="_Payload")

# Upper bounds of the supplier_profiles columns these values are stored in.
MAX_STORED_INT = 2**31 - 1
MAX_TEXT_LENGTHS = {"provider_name": 500, "product_name": 500, "currency": 50}


def field_state(payload: BaseModel, name: str) -> FieldState:
    """Classify a field as absent from the reply, explicitly null, or present."""

    if name not in payload.model_fields_set:
        return "absent"
    if getattr(payload, name) is None:
        return "null"
    return "present"


def _coerce_text(value: Any) -> Any:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _coerce_text_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, list):
        return [str(value)]
    return [str(_coerce_text(item)) for item in value if item is not None]


def _coerce_positive_number(value: Any, *, field: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        number = None
    elif isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.replace(",", "").strip())
        except ValueError:
            number = None
    else:
        number = None
    if number is None or not math.isfinite(number) or number <= 0:
        logger.warning("gateway.numeric_value_discarded field=%s value=%r", field, value)
        return None
    return number


def _coerce_bounded_text(value: Any, *, field: str, max_length: int) -> Any:
    value = _coerce_text(value)
    if isinstance(value, str) and len(value) > max_length:
        logger.warning("gateway.text_value_discarded field=%s length=%d", field, len(value))
        return None
    return value


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class BilingualPayload(_Payload):
    zh: str | None = None
    es: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _accept_plain_string(cls, data: Any) -> Any:
        # Older prompt revisions returned each tone as a bare Chinese string.
        if isinstance(data, str):
            return {"zh": data}
        return data

    @field_validator("zh", "es", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Any:
        return _coerce_text(value)


class SuggestedResponsesPayload(_Payload):
    formal: BilingualPayload | None = None
    negotiator: BilingualPayload | None = None
    direct: BilingualPayload | None = None


class InterpretationPayload(_Payload):
    business_context: str | None = None
    sentiment: str | None = None
    key_terms: list[str] = Field(default_factory=list)
    risk_level: str | None = None

    @field_validator("business_context", "sentiment", "risk_level", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Any:
        return _coerce_text(value)

    @field_validator("key_terms", mode="before")
    @classmethod
    def _terms(cls, value: Any) -> list[str]:
        return _coerce_text_list(value)


class AnalysisPayload(_Payload):
    """Reply to the message analysis prompt."""

    translated_message: str | None = None
    interpretation: InterpretationPayload | None = None
    alerts: list[str] = Field(default_factory=list)
    suggested_responses: SuggestedResponsesPayload | None = None

    @field_validator("translated_message", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Any:
        return _coerce_text(value)

    @field_validator("alerts", mode="before")
    @classmethod
    def _alerts(cls, value: Any) -> list[str]:
        return _coerce_text_list(value)


class RiskAssessmentPayload(_Payload):
    overall_risk: str | None = None
    warnings: list[str] = Field(default_factory=list)
    recommendation: str | None = None

    @field_validator("overall_risk", "recommendation", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Any:
        return _coerce_text(value)

    @field_validator("warnings", mode="before")
    @classmethod
    def _warnings(cls, value: Any) -> list[str]:
        return _coerce_text_list(value)


class ProviderPayload(_Payload):
    """Reply to the supplier extraction prompt."""

    provider_name: str | None = None
    product_name: str | None = None
    moq: int | None = None
    price_per_unit: float | None = None
    currency: str | None = None
    certifications: list[str] = Field(default_factory=list)
    delivery_time_days: int | None = None
    additional_info: str | None = None
    risk_assessment: RiskAssessmentPayload | None = None

    @field_validator("additional_info", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Any:
        return _coerce_text(value)

    @field_validator("provider_name", "product_name", "currency", mode="before")
    @classmethod
    def _bounded_text(cls, value: Any, info: ValidationInfo) -> Any:
        return _coerce_bounded_text(
            value,
            field=info.field_name,
            max_length=MAX_TEXT_LENGTHS[info.field_name],
        )

    @field_validator("certifications", mode="before")
    @classmethod
    def _certifications(cls, value: Any) -> list[str]:
        return [item.strip() for item in _coerce_text_list(value) if item.strip()]

    @field_validator("moq", "delivery_time_days", mode="before")
    @classmethod
    def _positive_int(cls, value: Any, info: ValidationInfo) -> int | None:
        number = _coerce_positive_number(value, field=info.field_name)
        if number is None:
            return None
        whole = int(number)
        if whole <= 0 or whole > MAX_STORED_INT:
            logger.warning("gateway.numeric_value_discarded field=%s value=%r", info.field_name, value)
            return None
        return whole

    @field_validator("price_per_unit", mode="before")
    @classmethod
    def _positive_float(cls, value: Any) -> float | None:
        return _coerce_positive_number(value, field="price_per_unit")


class ResponsesPayload(_Payload):
    """Reply to the reply drafting prompt."""

    responses: SuggestedResponsesPayload | None = None
    explanation: str | None = None

    @field_validator("explanation", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Any:
        return _coerce_text(value)


def validate_payload(
    payload_cls: type[PayloadT],
    data: dict[str, Any],
    *,
    required: tuple[str, ...] = (),
) -> PayloadT:
    """Check required wire keys are present, then validate into ``payload_cls``."""

    for key in required:
        if key not in data:
            raise MalformedModelResponse(f"Model response is missing required key '{key}'")
    try:
        return payload_cls.model_validate(data)
    except ValidationError as exc:
        raise MalformedModelResponse(
            f"Model response did not match the expected {payload_cls.__name__} shape: {exc}"
        ) from exc
