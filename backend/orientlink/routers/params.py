"""Query parameter types shared by the route modules."""

from typing import Annotated

from fastapi import Query
from pydantic import AfterValidator

from orientlink.schemas.common import require_not_blank


def _user_id_not_blank(value: str) -> str:
    return require_not_blank(value, "User ID cannot be empty")


UserIdQuery = Annotated[
    str,
    Query(alias="userId", min_length=1),
    AfterValidator(_user_id_not_blank),
]
