"""Application settings using Pydantic BaseSettings."""

import logging
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

DEFAULT_COLORS = [
    "#3B82F6",
    "#EF4444",
    "#10B981",
    "#F59E0B",
    "#8B5CF6",
    "#EC4899",
    "#06B6D4",
    "#F97316",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Chart Stream"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    allowed_origins: list[str] = ["*"]

    # Stream
    stream_event_name: str = "chartjs"

    # Charts
    default_colors: list[str] = DEFAULT_COLORS
    fallback_chart_type: str = "bar"
    chart_title_from_source: bool = True

    # Replay
    sample_data_dir: str = "sample_data"
    replay_delay_ms: int = 50

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_VALID_LOG_LEVELS}, got '{v}'")
        return upper

    @field_validator("stream_event_name")
    @classmethod
    def validate_stream_event_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("stream_event_name must be a non-empty string")
        return stripped

    @model_validator(mode="after")
    def validate_replay_delay(self) -> "Settings":
        if self.replay_delay_ms < 0:
            raise ValueError(f"replay_delay_ms must be >= 0, got {self.replay_delay_ms}")
        return self

    @model_validator(mode="after")
    def warn_wildcard_origins(self) -> "Settings":
        if self.allowed_origins == ["*"]:
            logging.getLogger(__name__).warning(
                "allowed_origins is set to ['*']; consider restricting in production"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
