"""Unit tests for the reply drafting service."""

from __future__ import annotations

import json
import unittest

from orientlink.errors import MalformedModelResponse
from orientlink.gateway.model_gateway import ModelGateway
from orientlink.schemas.respond import RespondRequest
from orientlink.services.responses import generate_responses


class _StubChatClient:
    model = "stub-model"

    def __init__(self, reply: str) -> None:
        self.reply = reply
        self.calls: list[list[dict[str, str]]] = []

    def complete(self, messages: list[dict[str, str]]) -> str:
        self.calls.append(messages)
        return self.reply


class ResponseGenerationTests(unittest.TestCase):
    def test_formal_only_request_populates_only_formal(self) -> None:
        client = _StubChatClient(
            json.dumps(
                {
                    "responses": {"formal": {"zh": "尊敬的贵公司", "es": "Estimada empresa"}},
                    "explanation": "Formal register for a first contact.",
                }
            )
        )
        request = RespondRequest(context="First contact with supplier", responseType="formal", userId="user-1")

        result = generate_responses(request, gateway=ModelGateway(client))

        self.assertEqual(result.formal.zh, "尊敬的贵公司")
        self.assertIsNone(result.negotiator)
        self.assertIsNone(result.direct)
        self.assertEqual(
            result.model_dump(exclude_none=True, by_alias=True),
            {"formal": {"zh": "尊敬的贵公司", "es": "Estimada empresa"}},
        )
        self.assertIn("Response Type: formal", client.calls[0][1]["content"])

    def test_defaults_to_all_tones_and_skips_null_ones(self) -> None:
        client = _StubChatClient(
            json.dumps(
                {
                    "responses": {
                        "formal": {"zh": "您好", "es": "Buenos días"},
                        "negotiator": {"zh": "我们可以", "es": "Podemos"},
                        "direct": None,
                    }
                }
            )
        )
        request = RespondRequest(context="Supplier raised price", userIntent="Keep old price", userId="user-1")

        result = generate_responses(request, gateway=ModelGateway(client))

        self.assertIsNotNone(result.formal)
        self.assertIsNotNone(result.negotiator)
        self.assertIsNone(result.direct)
        self.assertIn("Response Type: all", client.calls[0][1]["content"])
        self.assertIn("User's Intent: Keep old price", client.calls[0][1]["content"])

    def test_null_response_type_falls_back_to_all(self) -> None:
        client = _StubChatClient(json.dumps({"responses": {}}))
        request = RespondRequest(context="Hello", responseType=None, userId="user-1")

        result = generate_responses(request, gateway=ModelGateway(client))

        self.assertEqual(result.model_dump(exclude_none=True), {})
        self.assertIn("Response Type: all", client.calls[0][1]["content"])

    def test_missing_responses_key_is_malformed(self) -> None:
        client = _StubChatClient(json.dumps({"explanation": "nothing"}))
        request = RespondRequest(context="Hello", userId="user-1")

        with self.assertRaises(MalformedModelResponse):
            generate_responses(request, gateway=ModelGateway(client))


if __name__ == "__main__":
    unittest.main()
