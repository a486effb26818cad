"""Common API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(CamelModel):
    """Uniform JSON envelope for failed requests."""

    timestamp: datetime
    status: int
    error: str
    message: str
    details: dict[str, str] | None = None


def require_not_blank(value: str | None, message: str) -> str | None:
    """Reject strings that are empty once whitespace is removed."""

    if value is not None and not value.strip():
        raise ValueError(message)
    return value
