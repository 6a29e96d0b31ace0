"""Runtime configuration for the assistant relay."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the assistant relay."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # OpenAI API (validated per request so the server can boot without them)
    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    assistant_id: str | None = Field(default=None, alias="ASSISTANT_ID")
    transcribe_model: str = Field(default="whisper-1", alias="TRANSCRIBE_MODEL")
    openai_base_url: str = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")

    # Per-call HTTP timeouts
    request_timeout_seconds: float = Field(default=30.0, alias="REQUEST_TIMEOUT_SECONDS", gt=0)
    transcribe_timeout_seconds: float = Field(default=120.0, alias="TRANSCRIBE_TIMEOUT_SECONDS", gt=0)

    # Run polling: fixed interval, bounded by an overall deadline
    run_poll_interval_seconds: float = Field(default=1.0, alias="RUN_POLL_INTERVAL_SECONDS", ge=0)
    run_poll_timeout_seconds: float = Field(default=120.0, alias="RUN_POLL_TIMEOUT_SECONDS", gt=0)

    # Filesystem
    upload_dir: str = Field(default="uploads", alias="UPLOAD_DIR")
    static_dir: str = Field(default="public", alias="STATIC_DIR")

    # FastAPI
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=3000, alias="PORT")
    debug: bool = Field(default=False, alias="DEBUG")

    @property
    def api_base_url(self) -> str:
        return self.openai_base_url.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    return Settings()
