"""Reply drafting service."""

from __future__ import annotations

import logging
from time import perf_counter

from orientlink.gateway import ModelGateway, get_default_model_gateway
from orientlink.gateway.payloads import ResponsesPayload, validate_payload
from orientlink.schemas.analysis import SuggestedResponses
from orientlink.schemas.respond import RespondRequest
from orientlink.services.analysis import to_suggested_responses

logger = logging.getLogger(__name__)


def generate_responses(
    request: RespondRequest,
    *,
    gateway: ModelGateway | None = None,
) -> SuggestedResponses:
    """Draft bilingual replies in the requested tone(s). Nothing is persisted."""

    started = perf_counter()
    tone_filter = request.response_type or "all"
    active_gateway = gateway or get_default_model_gateway()
    raw_reply = active_gateway.generate_responses(request.context, request.user_intent, tone_filter)
    payload = validate_payload(
        ResponsesPayload,
        active_gateway.parse_json(raw_reply),
        required=("responses",),
    )
    result = to_suggested_responses(payload.responses)
    if payload.explanation:
        logger.debug("responses.explanation user_id=%s text=%s", request.user_id, payload.explanation)
    logger.info(
        "responses.completed user_id=%s provider_id=%s tone_filter=%s tones=%s total_ms=%.2f",
        request.user_id,
        request.provider_id,
        tone_filter,
        ",".join(sorted(result.model_fields_set)) or "none",
        (perf_counter() - started) * 1000.0,
    )
    return result
