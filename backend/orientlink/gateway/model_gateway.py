"""Prompt construction and model invocation for every orchestration flow."""

from __future__ import annotations

import json
import logging
from time import perf_counter
from typing import Any

from orientlink.config import get_settings
from orientlink.errors import MalformedModelResponse
from orientlink.gateway.client import ChatCompletionClient, OpenAIChatClient
from orientlink.gateway.templates import (
    SYSTEM_PROMPT_VERSION,
    build_analysis_prompt,
    build_provider_extraction_prompt,
    build_response_prompt,
    get_system_prompt,
)

logger = logging.getLogger(__name__)


class ModelGateway:
    """Sends templated instructions to the language model under a shared system preamble.

    The gateway keeps no state between calls: every operation makes exactly one
    request through the configured client and returns the raw reply text.
    """

    def __init__(self, client: ChatCompletionClient) -> None:
        self._client = client

    @property
    def model_name(self) -> str:
        return str(getattr(self._client, "model", self._client.__class__.__name__))

    @property
    def prompt_version(self) -> str:
        return SYSTEM_PROMPT_VERSION

    def complete(self, prompt_body: str, *, operation: str = "complete") -> str:
        """Send ``prompt_body`` as the user turn after the system preamble."""

        messages = [
            {"role": "system", "content": get_system_prompt()},
            {"role": "user", "content": prompt_body},
        ]
        started = perf_counter()
        try:
            reply = self._client.complete(messages)
        except Exception:
            logger.exception(
                "gateway.call_failed operation=%s model=%s elapsed_ms=%.2f",
                operation,
                self.model_name,
                (perf_counter() - started) * 1000.0,
            )
            raise
        logger.info(
            "gateway.call_completed operation=%s model=%s reply_chars=%d elapsed_ms=%.2f",
            operation,
            self.model_name,
            len(reply),
            (perf_counter() - started) * 1000.0,
        )
        return reply

    def analyze_message(
        self,
        message: str,
        source_lang: str,
        target_lang: str,
        prior_context: str | None = None,
    ) -> str:
        """Ask for translation, interpretation, alerts and three reply drafts."""

        logger.info("gateway.analyze_message source_lang=%s target_lang=%s", source_lang, target_lang)
        prompt = build_analysis_prompt(message, source_lang, target_lang, prior_context)
        return self.complete(prompt, operation="analyze_message")

    def extract_provider_info(self, url: str, context: str | None = None) -> str:
        """Ask for structured supplier attributes inferred from ``url``."""

        logger.info("gateway.extract_provider_info url=%s", url)
        prompt = build_provider_extraction_prompt(url, context)
        return self.complete(prompt, operation="extract_provider_info")

    def generate_responses(self, context: str, intent: str | None, tone_filter: str) -> str:
        """Ask for bilingual reply drafts in the selected tone(s)."""

        logger.info("gateway.generate_responses tone_filter=%s", tone_filter)
        prompt = build_response_prompt(context, intent, tone_filter)
        return self.complete(prompt, operation="generate_responses")

    @staticmethod
    def parse_json(text: str) -> dict[str, Any]:
        """Decode a model reply into a JSON object."""

        try:
            decoded = json.loads(text)
        except (TypeError, json.JSONDecodeError) as exc:
            logger.error("gateway.malformed_reply reply_chars=%d", len(text or ""))
            raise MalformedModelResponse("Invalid JSON response from the language model") from exc
        if not isinstance(decoded, dict):
            raise MalformedModelResponse(
                f"Expected a JSON object from the language model, got {type(decoded).__name__}"
            )
        return decoded


def get_default_model_gateway() -> ModelGateway:
    """Return a gateway bound to the configured OpenAI client."""

    settings = get_settings()
    return ModelGateway(
        OpenAIChatClient(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            timeout_seconds=settings.openai_timeout_seconds,
            temperature=settings.openai_temperature,
            max_tokens=settings.openai_max_tokens,
        )
    )
