"""Process configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .ai.openai_client import DEFAULT_BASE_URL, DEFAULT_IMAGE_MODEL, DEFAULT_TEXT_MODEL
from .media import DEFAULT_TIMEOUT_SECONDS


def _read_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _positive_float(raw: str | None, default: float) -> float:
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class Settings:
    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    text_model: str = DEFAULT_TEXT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    media_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = "INFO"

    @property
    def configured(self) -> bool:
        return bool(self.api_key)


def load_settings() -> Settings:
    return Settings(
        api_key=_read_env("API_KEY") or _read_env("OPENAI_API_KEY"),
        base_url=_read_env("AI_BASE_URL") or DEFAULT_BASE_URL,
        text_model=_read_env("AI_TEXT_MODEL") or DEFAULT_TEXT_MODEL,
        image_model=_read_env("AI_IMAGE_MODEL") or DEFAULT_IMAGE_MODEL,
        media_timeout_seconds=_positive_float(
            _read_env("MEDIA_TIMEOUT_SECONDS"), DEFAULT_TIMEOUT_SECONDS
        ),
        log_level=_read_env("LOG_LEVEL") or "INFO",
    )
