"""Tests for runtime configuration."""

from __future__ import annotations

from assistant_relay.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        for name in ("OPENAI_API_KEY", "ASSISTANT_ID", "TRANSCRIBE_MODEL", "PORT", "OPENAI_BASE_URL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.openai_api_key is None
        assert settings.assistant_id is None
        assert settings.transcribe_model == "whisper-1"
        assert settings.api_base_url == "https://api.openai.com/v1"
        assert settings.run_poll_interval_seconds == 1.0
        assert settings.app_port == 3000

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        monkeypatch.setenv("ASSISTANT_ID", "asst_env")
        monkeypatch.setenv("TRANSCRIBE_MODEL", "whisper-2")
        monkeypatch.setenv("PORT", "8099")
        monkeypatch.setenv("RUN_POLL_TIMEOUT_SECONDS", "30")

        settings = Settings(_env_file=None)

        assert settings.openai_api_key == "sk-env"
        assert settings.assistant_id == "asst_env"
        assert settings.transcribe_model == "whisper-2"
        assert settings.app_port == 8099
        assert settings.run_poll_timeout_seconds == 30.0

    def test_base_url_trailing_slash(self):
        settings = Settings(_env_file=None, OPENAI_BASE_URL="http://localhost:9000/v1/")
        assert settings.api_base_url == "http://localhost:9000/v1"
