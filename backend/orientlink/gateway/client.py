"""Chat completion transport for the OpenAI-compatible API."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Protocol
from urllib import error as urllib_error
from urllib import request as urllib_request

from orientlink.errors import ModelCallError


class ChatCompletionClient(Protocol):
    """Protocol for chat completion providers."""

    def complete(self, messages: list[dict[str, str]]) -> str:
        """Return the assistant text for the provided system/user messages."""


@dataclass(slots=True)
class OpenAIChatClient:
    """Minimal OpenAI chat completions client using stdlib HTTP."""

    api_key: str | None
    model: str
    base_url: str = "https://api.openai.com/v1"
    timeout_seconds: int = 60
    temperature: float = 0.7
    max_tokens: int = 2000

    def complete(self, messages: list[dict[str, str]]) -> str:
        if not self.api_key:
            raise ModelCallError(
                "OPENAI_API_KEY is not configured. Set it in backend/.env before calling the model."
            )
        payload = {
            "model": self.model,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "response_format": {"type": "json_object"},
            "messages": messages,
        }
        url = f"{self.base_url.rstrip('/')}/chat/completions"
        req = urllib_request.Request(
            url=url,
            data=json.dumps(payload).encode("utf-8"),
            method="POST",
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
        )
        try:
            with urllib_request.urlopen(req, timeout=self.timeout_seconds) as resp:
                raw = resp.read().decode("utf-8")
        except urllib_error.HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="replace")
            raise ModelCallError(f"OpenAI HTTP {exc.code}: {detail}") from exc
        except urllib_error.URLError as exc:
            raise ModelCallError(f"OpenAI request failed: {exc.reason}") from exc
        except TimeoutError as exc:
            raise ModelCallError(f"OpenAI request timed out after {self.timeout_seconds}s") from exc

        try:
            decoded = json.loads(raw)
            message = decoded["choices"][0]["message"]
            refusal = message.get("refusal")
            if isinstance(refusal, str) and refusal.strip():
                raise ModelCallError(f"OpenAI refused the request: {refusal.strip()}")
            content = message["content"]
            if not isinstance(content, str) or not content.strip():
                raise TypeError("assistant message content missing")
            return content.strip()
        except ModelCallError:
            raise
        except (KeyError, IndexError, TypeError, AttributeError, json.JSONDecodeError) as exc:
            raise ModelCallError("OpenAI returned an unexpected chat response") from exc
