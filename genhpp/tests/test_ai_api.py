"""
AI endpoint and flow tests.

The Gemini client is replaced by an in-process fake through
``app.dependency_overrides[require_ai_client]``, so no network calls happen.

Run: python -m pytest genhpp/tests/test_ai_api.py -v
"""

import base64

import pytest

from genhpp.ai import flows
from genhpp.ai.client import AIError, ModerationResponse, blocked_categories, parse_json_text
from genhpp.api.main import app
from genhpp.api.routes.ai import AI_FAILED_MESSAGE, AI_UNAVAILABLE_MESSAGE, require_ai_client


PNG_URI = "data:image/png;base64," + base64.b64encode(b"\x89PNG fake image").decode()

PROFIT_INSIGHTS = {
    "insights": {
        "summary": "Margin bisa naik dengan menekan biaya bahan.",
        "market_price_benchmark": "Rp 15.000 - Rp 20.000",
        "material_suggestions": ["Beli tepung dalam karung 25kg"],
        "efficiency_suggestions": ["Produksi dua batch sekaligus"],
        "pricing_strategy": "Naikkan harga bertahap 5%.",
    }
}


class FakeClient:
    """Records calls and answers with canned data."""

    def __init__(self, reply="Halo, ada yang bisa dibantu?", json_data=None, moderation=None, error=None):
        self.reply = reply
        self.json_data = json_data or {}
        self.moderation = moderation or ModerationResponse(payload={"is_safe": True})
        self.error = error
        self.calls = []

    async def chat(self, system_instruction, history, message):
        self.calls.append(("chat", system_instruction, history, message))
        if self.error:
            raise self.error
        return self.reply

    async def generate_json(self, system_instruction, prompt):
        self.calls.append(("generate_json", system_instruction, prompt))
        if self.error:
            raise self.error
        return self.json_data

    async def moderate_image(self, prompt, mime_type, data):
        self.calls.append(("moderate_image", mime_type, data))
        if self.error:
            raise self.error
        return self.moderation


@pytest.fixture
def fake_ai():
    """Install a FakeClient; tests may replace its attributes."""
    fake = FakeClient()
    app.dependency_overrides[require_ai_client] = lambda: fake
    yield fake
    app.dependency_overrides.pop(require_ai_client, None)


class TestChatEndpoints:
    def test_business_coach_splits_history(self, client, fake_ai):
        history = [
            {"role": "user", "content": "Halo"},
            {"role": "model", "content": "Halo juga!"},
            {"role": "user", "content": "Bagaimana menaikkan omzet?"},
        ]
        resp = client.post("/api/ai/business-coach", json={"history": history})
        assert resp.status_code == 200
        assert resp.json() == {"text": "Halo, ada yang bisa dibantu?"}

        _, system, previous, message = fake_ai.calls[0]
        assert "Teman Bisnis AI" in system
        assert len(previous) == 2
        assert message == "Bagaimana menaikkan omzet?"

    def test_business_coach_history_must_end_with_user(self, client, fake_ai):
        history = [{"role": "user", "content": "Halo"}, {"role": "model", "content": "Hai"}]
        assert client.post("/api/ai/business-coach", json={"history": history}).status_code == 422

    def test_business_coach_empty_history_rejected(self, client, fake_ai):
        assert client.post("/api/ai/business-coach", json={"history": []}).status_code == 422

    def test_consultant(self, client, fake_ai):
        resp = client.post("/api/ai/consultant", json={"prompt": "Harga bahan naik, apa yang harus saya lakukan?"})
        assert resp.status_code == 200
        _, system, history, message = fake_ai.calls[0]
        assert "Konsultan AI" in system
        assert history == []
        assert message.startswith("Harga bahan naik")

    def test_ai_error_returns_502(self, client, fake_ai):
        fake_ai.error = AIError("quota exceeded")
        resp = client.post("/api/ai/consultant", json={"prompt": "Halo"})
        assert resp.status_code == 502
        assert resp.json()["detail"] == AI_FAILED_MESSAGE

    def test_missing_api_key_returns_503(self, client, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        resp = client.post("/api/ai/consultant", json={"prompt": "Halo"})
        assert resp.status_code == 503
        assert resp.json()["detail"] == AI_UNAVAILABLE_MESSAGE


class TestStructuredFlows:
    def test_product_description(self, client, fake_ai):
        fake_ai.json_data = {"instagram": "IG copy", "tiktok": "TikTok copy", "marketplace": "Marketplace copy"}
        resp = client.post("/api/ai/product-description", json={"product_name": "Keripik Pedas"})
        assert resp.status_code == 200
        assert resp.json()["tiktok"] == "TikTok copy"
        assert "Keripik Pedas" in fake_ai.calls[0][2]

    def test_product_description_with_missing_field_is_502(self, client, fake_ai):
        fake_ai.json_data = {"instagram": "IG copy"}
        resp = client.post("/api/ai/product-description", json={"product_name": "Keripik"})
        assert resp.status_code == 502

    def test_profit_analysis(self, client, fake_ai):
        fake_ai.json_data = PROFIT_INSIGHTS
        resp = client.post(
            "/api/ai/profit-analysis",
            json={
                "product_name": "Bolu",
                "materials": [{"name": "Tepung", "cost": 12000, "qty": 1}],
                "labor_cost": 10000,
                "current_margin": 20,
                "target_margin": 35,
                "total_hpp": 22000,
                "product_quantity": 8,
            },
        )
        assert resp.status_code == 200
        assert resp.json()["insights"]["material_suggestions"] == ["Beli tepung dalam karung 25kg"]
        prompt = fake_ai.calls[0][2]
        assert "Tepung" in prompt
        assert "35" in prompt

    def test_profit_analysis_target_margin_bounds(self, client, fake_ai):
        resp = client.post(
            "/api/ai/profit-analysis",
            json={
                "product_name": "Bolu",
                "materials": [{"name": "Tepung", "cost": 12000, "qty": 1}],
                "current_margin": 20,
                "target_margin": 0,
                "total_hpp": 12000,
            },
        )
        assert resp.status_code == 422


class TestImageModeration:
    def test_safe_image(self, client, fake_ai):
        resp = client.post("/api/ai/moderate-image", json={"image_data_uri": PNG_URI})
        assert resp.json() == {"is_safe": True, "reason": None}
        assert fake_ai.calls[0][1] == "image/png"
        assert fake_ai.calls[0][2] == b"\x89PNG fake image"

    def test_blocked_by_safety_filter(self, client, fake_ai):
        fake_ai.moderation = ModerationResponse(blocked_categories=["SEXUALLY_EXPLICIT"])
        data = client.post("/api/ai/moderate-image", json={"image_data_uri": PNG_URI}).json()
        assert data["is_safe"] is False
        assert "SEXUALLY_EXPLICIT" in data["reason"]

    def test_model_judges_unsafe(self, client, fake_ai):
        fake_ai.moderation = ModerationResponse(payload={"is_safe": False, "reason": "Mengandung kekerasan."})
        data = client.post("/api/ai/moderate-image", json={"image_data_uri": PNG_URI}).json()
        assert data == {"is_safe": False, "reason": "Mengandung kekerasan."}

    def test_unsafe_without_reason_gets_default(self, client, fake_ai):
        fake_ai.moderation = ModerationResponse(payload={"is_safe": False})
        data = client.post("/api/ai/moderate-image", json={"image_data_uri": PNG_URI}).json()
        assert data["reason"] == flows.MODERATION_DEFAULT_UNSAFE_REASON

    def test_failure_is_reported_as_unsafe(self, client, fake_ai):
        fake_ai.error = AIError("timeout")
        resp = client.post("/api/ai/moderate-image", json={"image_data_uri": PNG_URI})
        assert resp.status_code == 200
        assert resp.json() == {"is_safe": False, "reason": flows.MODERATION_FAILED_REASON}

    def test_bad_base64_is_reported_as_unsafe(self, client, fake_ai):
        resp = client.post("/api/ai/moderate-image", json={"image_data_uri": "data:image/png;base64,@@@"})
        assert resp.json()["reason"] == flows.MODERATION_FAILED_REASON
        assert fake_ai.calls == []

    def test_non_data_uri_rejected(self, client, fake_ai):
        resp = client.post("/api/ai/moderate-image", json={"image_data_uri": "https://example.com/a.png"})
        assert resp.status_code == 422


class _Obj:
    def __init__(self, **kwargs):
        self.__dict__.update(kwargs)


class TestClientHelpers:
    def test_parse_json_text_strips_fence(self):
        assert parse_json_text('```json\n{"is_safe": true}\n```') == {"is_safe": True}

    def test_parse_json_text_rejects_non_object(self):
        with pytest.raises(AIError):
            parse_json_text("[1, 2]")
        with pytest.raises(AIError):
            parse_json_text("bukan json")

    def test_blocked_categories_from_prompt_feedback(self):
        rating = _Obj(category=_Obj(name="HARM_CATEGORY_HATE_SPEECH"), blocked=True)
        response = _Obj(prompt_feedback=_Obj(block_reason="SAFETY", safety_ratings=[rating]), candidates=[])
        assert blocked_categories(response) == ["HATE_SPEECH"]

    def test_blocked_categories_from_candidate(self):
        rating = _Obj(
            category=_Obj(name="HARM_CATEGORY_DANGEROUS_CONTENT"),
            probability=_Obj(name="HIGH"),
            blocked=False,
        )
        candidate = _Obj(finish_reason=_Obj(name="SAFETY"), safety_ratings=[rating])
        response = _Obj(prompt_feedback=_Obj(block_reason=None), candidates=[candidate])
        assert blocked_categories(response) == ["DANGEROUS_CONTENT"]

    def test_nothing_blocked(self):
        candidate = _Obj(finish_reason=_Obj(name="STOP"), safety_ratings=[])
        response = _Obj(prompt_feedback=_Obj(block_reason=None), candidates=[candidate])
        assert blocked_categories(response) == []
