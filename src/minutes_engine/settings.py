from __future__ import annotations

"""Runtime configuration helpers for minutes-engine."""

import os
from dataclasses import dataclass

from .audio.types import LINEAR, RESAMPLE_METHODS

_BOOL_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _BOOL_TRUTHY


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class OpenAISettings:
    api_key: str | None
    organization: str | None
    base_url: str | None


@dataclass(frozen=True)
class LLMSettings:
    enabled: bool
    model: str
    temperature: float
    max_tokens: int
    timeout: float
    retry_limit: int
    retry_backoff_seconds: float


@dataclass(frozen=True)
class AudioSettings:
    compression_enabled: bool
    max_bytes: int
    max_duration_seconds: float | None
    target_sample_rate: int
    target_channels: int
    resample_method: str


@dataclass(frozen=True)
class Settings:
    openai: OpenAISettings
    llm: LLMSettings
    audio: AudioSettings
    log_level: str


def load_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""

    openai_settings = OpenAISettings(
        api_key=os.getenv("OPENAI_API_KEY"),
        organization=os.getenv("OPENAI_ORG_ID"),
        base_url=os.getenv("OPENAI_BASE_URL"),
    )

    llm_settings = LLMSettings(
        enabled=_env_bool("ENABLE_REAL_LLM", bool(openai_settings.api_key)),
        model=os.getenv("LLM_MODEL", "gpt-4o-audio-preview"),
        temperature=_env_float("LLM_TEMPERATURE", 0.2),
        max_tokens=_env_int("LLM_MAX_TOKENS", 8192),
        timeout=_env_float("LLM_REQUEST_TIMEOUT", 60.0),
        retry_limit=_env_int("LLM_RETRY_LIMIT", 1),
        retry_backoff_seconds=_env_float("LLM_RETRY_BACKOFF_SECONDS", 1.0),
    )

    max_duration = _env_float("AUDIO_MAX_DURATION_SECONDS", 0.0)
    target_sample_rate = _env_int("AUDIO_TARGET_SAMPLE_RATE", 16000)
    target_channels = _env_int("AUDIO_TARGET_CHANNELS", 1)
    resample_method = os.getenv("AUDIO_RESAMPLE_METHOD", LINEAR).strip().lower()
    audio_settings = AudioSettings(
        compression_enabled=_env_bool("AUDIO_COMPRESSION_ENABLED", True),
        max_bytes=_env_int("AUDIO_MAX_BYTES", 100 * 1024 * 1024),
        max_duration_seconds=max_duration if max_duration > 0 else None,
        target_sample_rate=target_sample_rate if target_sample_rate > 0 else 16000,
        target_channels=target_channels if target_channels > 0 else 1,
        resample_method=resample_method if resample_method in RESAMPLE_METHODS else LINEAR,
    )

    return Settings(
        openai=openai_settings,
        llm=llm_settings,
        audio=audio_settings,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


settings = load_settings()

__all__ = [
    "Settings",
    "LLMSettings",
    "OpenAISettings",
    "AudioSettings",
    "settings",
    "load_settings",
]
