"""Tests for repair_api.config.Settings."""

from repair_api.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    monkeypatch.delenv("LLM_API_KEY", raising=False)
    monkeypatch.delenv("LLM_MODEL", raising=False)
    s = Settings(_env_file=None)
    assert s.llm_model == "llama-3.3-70b-versatile"
    assert s.llm_endpoint.startswith("https://api.groq.com/")
    assert s.has_llm_credentials is False


def test_groq_api_key_env(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "gsk_test")
    s = Settings(_env_file=None)
    assert s.llm_api_key == "gsk_test"
    assert s.has_llm_credentials is True


def test_blank_key_is_not_credentials():
    assert Settings(_env_file=None, llm_api_key="  ").has_llm_credentials is False


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("LLM_MODEL", "llama-3.1-8b-instant")
    monkeypatch.setenv("LLM_JSON_MODE", "false")
    monkeypatch.setenv("MAX_VIDEO_LINKS", "1")
    s = Settings(_env_file=None)
    assert s.llm_model == "llama-3.1-8b-instant"
    assert s.llm_json_mode is False
    assert s.max_video_links == 1
