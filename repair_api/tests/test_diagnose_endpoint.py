"""Tests for the diagnose and tools endpoints.

Covers:
  - POST /api/diagnose (success envelope, parts suggestion, failure envelope, bad body)
  - POST /v1/tools/normalize
  - GET  / and /health
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from repair_api.api.v1.endpoints.diagnose import get_diagnosis_service, get_llm_client
from repair_api.config import settings
from repair_api.main import app
from repair_api.services.diagnosis import DiagnosisService

FORM = {
    "year": "2014",
    "make": "Honda",
    "model": "Civic",
    "part": "O2 sensor",
    "code": "P0420",
    "notes": "Check engine light on",
    "provider": "openai",
    "modelName": "",
}


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.fixture()
def llm_client():
    mock = MagicMock()
    mock.generate_guide = AsyncMock(
        return_value='Sure, here it is: {"overview": "Replace the O2 sensor", '
        '"repair_steps": ["Unplug sensor", "Unscrew sensor"], "time_estimate": 1}'
    )
    mock.suggest_parts = AsyncMock(return_value=["Catalytic converter", "Exhaust gasket"])
    return mock


@pytest.fixture(autouse=True)
def override_service(llm_client):
    app.dependency_overrides[get_diagnosis_service] = lambda: DiagnosisService(llm_client)
    yield
    app.dependency_overrides.clear()


class TestDiagnoseEndpoint:
    def test_success_envelope(self, client, llm_client):
        resp = client.post("/api/diagnose", json=FORM)
        assert resp.status_code == 200

        body = resp.json()
        assert body["ok"] is True
        assert body["raw"] == llm_client.generate_guide.return_value

        data = body["data"]
        assert data["overview"] == "📝 Overview\nReplace the O2 sensor"
        assert data["repair_steps"] == ["🛠 Unplug sensor", "🛠 Unscrew sensor"]
        assert data["diagnostic_steps"] == []
        assert data["time_estimate"] == "⏱ Estimated Time\nN/A"
        assert data["cost_estimate"] == "💰 Estimated Cost\nN/A"
        assert len(data["parts"]) == 3
        assert all(link.startswith("🛒 https://") for link in data["parts"])
        assert len(data["videos"]) == 3
        assert all(link.startswith("🔧 https://www.youtube.com/") for link in data["videos"])

    def test_user_part_searched_first(self, client):
        data = client.post("/api/diagnose", json=FORM).json()["data"]
        assert data["parts"][0].endswith("2014%20Honda%20Civic%20O2%20sensor")
        assert data["parts"][1].endswith("Catalytic%20converter")
        assert data["parts"][2].endswith("Exhaust%20gasket")

    def test_prompt_built_from_form(self, client, llm_client):
        client.post("/api/diagnose", json=FORM)
        prompt = llm_client.generate_guide.call_args.args[0]
        assert "Vehicle: 2014 Honda Civic" in prompt
        assert "OBD-II Code: P0420" in prompt
        # blank modelName means "use the configured model"
        assert llm_client.generate_guide.call_args.kwargs["model"] is None

    def test_model_name_forwarded(self, client, llm_client):
        client.post("/api/diagnose", json={**FORM, "modelName": "llama-3.1-8b-instant"})
        assert llm_client.generate_guide.call_args.kwargs["model"] == "llama-3.1-8b-instant"

    def test_no_code_skips_parts_suggestion(self, client, llm_client):
        form = {k: v for k, v in FORM.items() if k != "code"}
        data = client.post("/api/diagnose", json=form).json()["data"]
        llm_client.suggest_parts.assert_not_called()
        assert all(link.endswith("O2%20sensor") for link in data["parts"])

    def test_parts_suggestion_disabled(self, client, llm_client):
        with patch.object(settings, "suggest_parts", False):
            client.post("/api/diagnose", json=FORM)
        llm_client.suggest_parts.assert_not_called()

    def test_prose_reply_still_succeeds(self, client, llm_client):
        llm_client.generate_guide.return_value = "I cannot help with that."
        body = client.post("/api/diagnose", json=FORM).json()
        assert body["ok"] is True
        assert body["data"]["overview"] == "📝 Overview\nI cannot help with that."

    def test_empty_form_accepted(self, client):
        resp = client.post("/api/diagnose", json={})
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["videos"] == []
        assert data["parts"] == []

    def test_llm_failure_returns_error_envelope(self, client, llm_client):
        llm_client.generate_guide.side_effect = RuntimeError("Groq error: 401 invalid key")
        resp = client.post("/api/diagnose", json=FORM)
        assert resp.status_code == 500
        assert resp.json() == {"ok": False, "error": "Groq error: 401 invalid key"}

    def test_parts_failure_returns_error_envelope(self, client, llm_client):
        llm_client.suggest_parts.side_effect = TimeoutError()
        resp = client.post("/api/diagnose", json=FORM)
        assert resp.status_code == 500
        assert resp.json() == {"ok": False, "error": "Unknown error"}

    def test_malformed_body_returns_error_envelope(self, client):
        resp = client.post(
            "/api/diagnose",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json() == {"ok": False, "error": "Invalid request body"}


class TestLLMClientDependency:
    def test_client_shared_across_requests(self):
        get_llm_client.cache_clear()
        try:
            assert get_llm_client() is get_llm_client()
        finally:
            get_llm_client.cache_clear()


class TestNormalizeTool:
    def test_embedded_json(self, client):
        resp = client.post(
            "/v1/tools/normalize",
            json={"text": 'ok: {"overview": "x", "parts": [1, true]}'},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["overview"] == "x"
        assert body["parts"] == ["1", "true"]
        assert body["time_estimate"] == "N/A"

    def test_prose(self, client):
        body = client.post("/v1/tools/normalize", json={"text": "no idea"}).json()
        assert body["overview"] == "no idea"
        assert body["repair_steps"] == []

    def test_schema_exact_reply_round_trips(self, client, complete_guide_dict):
        body = client.post(
            "/v1/tools/normalize", json={"text": json.dumps(complete_guide_dict)}
        ).json()
        assert body == complete_guide_dict

    def test_missing_text_is_422(self, client):
        assert client.post("/v1/tools/normalize", json={}).status_code == 422


class TestRootAndHealth:
    def test_root(self, client):
        body = client.get("/").json()
        assert body["health"] == "/health"

    def test_health_reports_missing_key(self, client):
        with patch.object(settings, "llm_api_key", None):
            body = client.get("/health").json()
        assert body["status"] == "degraded"
        assert body["llm"] == "missing_api_key"

    def test_health_with_key(self, client):
        with patch.object(settings, "llm_api_key", "k"):
            body = client.get("/health").json()
        assert body["status"] == "healthy"
