"""Tests for environment-based settings."""
from chord_bridge.config import Settings


def test_defaults(monkeypatch):
    for name in ("OPENAI_API_KEY", "CHORD_BRIDGE_API_KEY", "CHORD_BRIDGE_TEMPERATURE", "CHORD_BRIDGE_PROVIDER"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.provider == "openai"
    assert settings.model_name == "gpt-4o-mini"
    assert settings.temperature == 0.5
    assert settings.default_bpm == 120
    assert settings.api_key is None
    assert settings.lenient_json is False


def test_openai_api_key_env(monkeypatch):
    monkeypatch.delenv("CHORD_BRIDGE_API_KEY", raising=False)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    assert Settings(_env_file=None).api_key == "sk-env"


def test_prefixed_env(monkeypatch):
    monkeypatch.setenv("CHORD_BRIDGE_TEMPERATURE", "0.2")
    monkeypatch.setenv("CHORD_BRIDGE_LENIENT_JSON", "true")
    settings = Settings(_env_file=None)
    assert settings.temperature == 0.2
    assert settings.lenient_json is True


def test_dotenv_file(tmp_path, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("CHORD_BRIDGE_API_KEY", raising=False)
    monkeypatch.delenv("CHORD_BRIDGE_MODEL_NAME", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("OPENAI_API_KEY=sk-dotenv\nCHORD_BRIDGE_MODEL_NAME=gpt-4o\n", encoding="utf-8")
    settings = Settings(_env_file=env_file)
    assert settings.api_key == "sk-dotenv"
    assert settings.model_name == "gpt-4o"
