"""HTTP-level tests for the /api/v1 routes and the error envelope."""

from __future__ import annotations

import json
import os
import unittest

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, delete  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from orientlink.db.dependencies import get_db  # noqa: E402
from orientlink.errors import ModelCallError  # noqa: E402
from orientlink.gateway import get_default_model_gateway  # noqa: E402
from orientlink.gateway.model_gateway import ModelGateway  # noqa: E402
from orientlink.main import app  # noqa: E402
from orientlink.models.base import Base  # noqa: E402
from orientlink.models.conversation_record import ConversationRecord  # noqa: E402
from orientlink.models.supplier_profile import SupplierProfile  # noqa: E402

_ANALYSIS_REPLY = json.dumps(
    {
        "translatedMessage": "我需要500件",
        "interpretation": {
            "businessContext": "Order volume request.",
            "sentiment": "neutral",
            "keyTerms": ["MOQ"],
            "riskLevel": "low",
        },
        "alerts": ["Confirm MOQ"],
        "suggestedResponses": {
            "formal": {"zh": "您好", "es": "Estimado"},
            "negotiator": {"zh": "我们可以", "es": "Podemos"},
            "direct": {"zh": "我需要", "es": "Necesito"},
        },
    },
    ensure_ascii=False,
)

_PROVIDER_REPLY = json.dumps(
    {
        "providerName": "Shenzhen Tech Co.",
        "productName": "Wireless Earbuds",
        "moq": 500,
        "pricePerUnit": 3.5,
        "currency": "USD",
        "certifications": ["CE"],
        "deliveryTimeDays": 30,
        "additionalInfo": "OEM available",
        "riskAssessment": {"overallRisk": "medium", "warnings": ["Verify CE"], "recommendation": "Order samples."},
    }
)


class _StubChatClient:
    model = "stub-model"

    def __init__(self, reply: str) -> None:
        self.reply = reply
        self.calls: list[list[dict[str, str]]] = []

    def complete(self, messages: list[dict[str, str]]) -> str:
        self.calls.append(messages)
        return self.reply


class _FailingChatClient:
    def complete(self, messages: list[dict[str, str]]) -> str:
        _ = messages
        raise ModelCallError("OpenAI HTTP 500: boom")


class ApiRouteTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.engine = create_engine(
            "sqlite+pysqlite:///:memory:",
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        cls.SessionLocal = sessionmaker(bind=cls.engine, autoflush=False, autocommit=False, future=True)
        Base.metadata.create_all(cls.engine)

    @classmethod
    def tearDownClass(cls) -> None:
        Base.metadata.drop_all(cls.engine)
        cls.engine.dispose()

    def setUp(self) -> None:
        with self.SessionLocal() as db:
            db.execute(delete(ConversationRecord))
            db.execute(delete(SupplierProfile))
            db.commit()

        self.chat_client = _StubChatClient(_ANALYSIS_REPLY)

        def _override_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = _override_db
        app.dependency_overrides[get_default_model_gateway] = lambda: ModelGateway(self.chat_client)
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def test_analyze_returns_response_and_persists_record(self) -> None:
        resp = self.client.post("/api/v1/analyze", json={"messageText": "Necesito 500 piezas", "userId": "user-1"})

        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["originalMessage"], "Necesito 500 piezas")
        self.assertEqual(body["sourceLanguage"], "es")
        self.assertEqual(body["targetLanguage"], "zh")
        self.assertEqual(body["suggestedResponses"]["formal"], {"zh": "您好", "es": "Estimado"})
        self.assertEqual(body["interpretation"]["keyTerms"], ["MOQ"])
        self.assertIsInstance(body["conversationId"], int)

        history = self.client.get("/api/v1/conversations", params={"userId": "user-1"})
        self.assertEqual(history.status_code, 200)
        rows = history.json()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["alerts"], "Confirm MOQ")
        self.assertEqual(rows[0]["messageType"], "analysis")
        self.assertIsNone(rows[0]["providerId"])
        self.assertEqual(rows[0]["suggestedResponses"], _ANALYSIS_REPLY)

    def test_blank_message_is_rejected_before_model_call(self) -> None:
        resp = self.client.post("/api/v1/analyze", json={"messageText": "   ", "userId": "user-1"})

        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertEqual(body["status"], 400)
        self.assertEqual(body["error"], "Validation Failed")
        self.assertEqual(body["details"]["messageText"], "Message text cannot be empty")
        self.assertIn("timestamp", body)
        self.assertEqual(self.chat_client.calls, [])

    def test_missing_user_and_oversized_message_are_reported_per_field(self) -> None:
        resp = self.client.post("/api/v1/analyze", json={"messageText": "x" * 5001})

        self.assertEqual(resp.status_code, 400)
        details = resp.json()["details"]
        self.assertIn("messageText", details)
        self.assertIn("userId", details)

    def test_model_failure_maps_to_server_error_envelope(self) -> None:
        app.dependency_overrides[get_default_model_gateway] = lambda: ModelGateway(_FailingChatClient())

        resp = self.client.post("/api/v1/analyze", json={"messageText": "Hola", "userId": "user-1"})

        self.assertEqual(resp.status_code, 500)
        body = resp.json()
        self.assertEqual(body["error"], "Internal Server Error")
        self.assertEqual(body["message"], "OpenAI HTTP 500: boom")
        self.assertNotIn("details", body)

    def test_malformed_model_reply_maps_to_server_error(self) -> None:
        self.chat_client.reply = "not json at all"

        resp = self.client.post("/api/v1/analyze", json={"messageText": "Hola", "userId": "user-1"})

        self.assertEqual(resp.status_code, 500)
        self.assertIn("Invalid JSON", resp.json()["message"])

    def test_respond_omits_tones_the_model_did_not_return(self) -> None:
        self.chat_client.reply = json.dumps({"responses": {"formal": {"zh": "您好", "es": "Estimado"}}})

        resp = self.client.post(
            "/api/v1/respond",
            json={"context": "First contact", "responseType": "formal", "userId": "user-1"},
        )

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"formal": {"zh": "您好", "es": "Estimado"}})

    def test_respond_rejects_unknown_tone(self) -> None:
        resp = self.client.post(
            "/api/v1/respond",
            json={"context": "First contact", "responseType": "casual", "userId": "user-1"},
        )

        self.assertEqual(resp.status_code, 400)
        self.assertIn("responseType", resp.json()["details"])

    def test_provider_extraction_and_lookups(self) -> None:
        self.chat_client.reply = _PROVIDER_REPLY

        resp = self.client.get(
            "/api/v1/provider",
            params={"url": "https://example.com/p/1", "userId": "user-1"},
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["providerName"], "Shenzhen Tech Co.")
        self.assertEqual(body["riskAssessment"]["overallRisk"], "medium")
        self.assertIn("analyzedAt", body)
        self.assertEqual(body["alibabaUrl"], "https://example.com/p/1")
        provider_id = body["providerId"]

        listed = self.client.get("/api/v1/providers", params={"userId": "user-1"}).json()
        self.assertEqual([row["id"] for row in listed], [provider_id])
        self.assertEqual(listed[0]["alibabaUrl"], "https://example.com/p/1")
        self.assertNotIn("sourceUrl", listed[0])

        single = self.client.get(f"/api/v1/provider/{provider_id}")
        self.assertEqual(single.status_code, 200)
        self.assertEqual(single.json()["moq"], 500)

        found = self.client.get("/api/v1/providers/search", params={"name": "shenzhen"}).json()
        self.assertEqual([row["providerName"] for row in found], ["Shenzhen Tech Co."])

        by_product = self.client.get(
            "/api/v1/providers/search/product",
            params={"userId": "user-1", "product": "earbuds"},
        ).json()
        self.assertEqual(len(by_product), 1)

    def test_provider_extraction_requires_url(self) -> None:
        resp = self.client.get("/api/v1/provider", params={"userId": "user-1"})

        self.assertEqual(resp.status_code, 400)
        self.assertIn("url", resp.json()["details"])

    def test_unknown_provider_id_is_empty_404(self) -> None:
        resp = self.client.get("/api/v1/provider/999")

        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.content, b"")

    def test_conversations_by_type_validates_tag(self) -> None:
        self.assertEqual(
            self.client.get("/api/v1/conversations/by-type", params={"messageType": "analysis"}).status_code,
            200,
        )
        resp = self.client.get("/api/v1/conversations/by-type", params={"messageType": "gossip"})
        self.assertEqual(resp.status_code, 400)

    def test_wrong_method_uses_error_envelope(self) -> None:
        resp = self.client.get("/api/v1/analyze")

        self.assertEqual(resp.status_code, 405)
        body = resp.json()
        self.assertEqual(body["status"], 405)
        self.assertEqual(body["error"], "Method Not Allowed")
        self.assertEqual(body["message"], "Method Not Allowed")
        self.assertIn("timestamp", body)
        self.assertNotIn("detail", body)
        self.assertIn("POST", resp.headers["allow"])

    def test_unknown_path_uses_error_envelope(self) -> None:
        resp = self.client.get("/api/v1/nowhere")

        self.assertEqual(resp.status_code, 404)
        body = resp.json()
        self.assertEqual(body["status"], 404)
        self.assertEqual(body["error"], "Not Found")

    def test_blank_user_id_query_is_rejected(self) -> None:
        for path, params in (
            ("/api/v1/providers", {"userId": "   "}),
            ("/api/v1/conversations", {"userId": " "}),
            ("/api/v1/provider", {"userId": "  ", "url": "https://example.com/p/1"}),
        ):
            with self.subTest(path=path):
                resp = self.client.get(path, params=params)

                self.assertEqual(resp.status_code, 400)
                self.assertEqual(resp.json()["details"]["userId"], "User ID cannot be empty")
        self.assertEqual(self.chat_client.calls, [])

    def test_health(self) -> None:
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})


if __name__ == "__main__":
    unittest.main()
