"""Tests for environment-driven settings."""

from launchlens.core.config import Settings


def test_env_file_options_are_applied():
    assert Settings.model_config["env_file"] == ".env"
    assert Settings.model_config["extra"] == "ignore"


def test_upper_case_key_is_read_from_environment(monkeypatch):
    monkeypatch.delenv("groq_api_key", raising=False)
    monkeypatch.setenv("GROQ_API_KEY", "gsk-upper")

    config = Settings(_env_file=None)
    assert config.effective_api_key == "gsk-upper"


def test_env_overrides_defaults(monkeypatch):
    monkeypatch.setenv("PROVIDER_MODEL", "llama-3.1-8b-instant")
    monkeypatch.setenv("PARALLEL_SENTIMENT", "true")

    config = Settings(_env_file=None)
    assert config.provider_model == "llama-3.1-8b-instant"
    assert config.parallel_sentiment is True


def test_unknown_env_file_entries_are_ignored(tmp_path, monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    monkeypatch.delenv("groq_api_key", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("GROQ_API_KEY=gsk-file\nUNRELATED_SETTING=1\n", encoding="utf-8")

    config = Settings(_env_file=str(env_file))
    assert config.effective_api_key == "gsk-file"
