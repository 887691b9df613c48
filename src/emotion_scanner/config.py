"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    classifier_base_url: str
    classify_timeout_seconds: float | None = Field(default=10.0, gt=0)
    wallet_address: str | None = None
    camera_index: int = 0
    capture_width: int = 640
    capture_height: int = 480
    jpeg_quality: int = Field(default=70, ge=1, le=100)
    sample_interval_seconds: float = Field(default=1.5, gt=0)
    reward_pulse_seconds: float = Field(default=3.0, ge=0)
    log_level: str = "INFO"
    sampler_log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def normalize_wallet_address(raw: str | None) -> str | None:
    """Treat blank wallet values as collection mode."""
    if raw is None:
        return None
    cleaned = raw.strip()
    return cleaned or None
