from __future__ import annotations

"""OpenAI-compatible client used to turn meeting audio into minutes JSON."""

import asyncio
import base64
import logging
import mimetypes
from collections.abc import Sequence
from typing import Any, Dict, Optional

from openai import AsyncOpenAI

from .audio import AudioPayload
from .prompts import ANALYSIS_INSTRUCTION, SYSTEM_INSTRUCTION
from .settings import LLMSettings, OpenAISettings, settings

logger = logging.getLogger(__name__)

ChatMessage = Dict[str, Any]

_FORMAT_ALIASES = {
    "wave": "wav",
    "x-wav": "wav",
    "vnd.wave": "wav",
    "mpeg": "mp3",
    "mpeg3": "mp3",
    "x-mpeg-3": "mp3",
    "mp4": "m4a",
    "x-m4a": "m4a",
    "x-flac": "flac",
}


class LLMNotConfiguredError(RuntimeError):
    """Raised when trying to use the LLM client without runtime configuration."""


class MinutesGenerationError(RuntimeError):
    """Raised when the model could not produce a response after retries."""


def audio_format_for(content_type: Optional[str], filename: Optional[str] = None) -> str:
    """Map a MIME type (or failing that, a file name) to an ``input_audio`` format."""

    subtype = ""
    if content_type and "/" in content_type:
        subtype = content_type.split("/", 1)[1].split(";", 1)[0].strip().lower()
    if (not subtype or subtype == "octet-stream") and filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed and "/" in guessed:
            subtype = guessed.split("/", 1)[1].lower()
    if not subtype or subtype == "octet-stream":
        return "mp3"
    return _FORMAT_ALIASES.get(subtype, subtype)


def build_messages(
    audio_parts: Sequence[AudioPayload],
    *,
    instruction: str = ANALYSIS_INSTRUCTION,
    system_instruction: str = SYSTEM_INSTRUCTION,
) -> list[ChatMessage]:
    """Audio segments in upload order, followed by the text instruction."""

    content: list[dict[str, Any]] = []
    for part in audio_parts:
        content.append(
            {
                "type": "input_audio",
                "input_audio": {
                    "data": base64.b64encode(part.data).decode("ascii"),
                    "format": audio_format_for(part.content_type, part.filename),
                },
            }
        )
    content.append({"type": "text", "text": instruction})
    return [
        {"role": "system", "content": system_instruction},
        {"role": "user", "content": content},
    ]


class MinutesLLMClient:
    """Thin wrapper around AsyncOpenAI with retry-aware minutes generation."""

    def __init__(
        self,
        openai_cfg: Optional[OpenAISettings] = None,
        llm_cfg: Optional[LLMSettings] = None,
        *,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self._openai_cfg = openai_cfg or settings.openai
        self._llm_cfg = llm_cfg or settings.llm
        if client is None:
            api_key = self._openai_cfg.api_key
            if not api_key:
                raise LLMNotConfiguredError("OPENAI_API_KEY is required for real LLM usage")
            self._client = AsyncOpenAI(
                api_key=api_key,
                base_url=self._openai_cfg.base_url,
                organization=self._openai_cfg.organization,
            )
            self._owns_client = True
        else:
            self._client = client
            self._owns_client = False

    async def close(self) -> None:
        if self._owns_client:
            await self._client.close()

    async def generate_minutes(
        self,
        audio_parts: Sequence[AudioPayload],
        *,
        instruction: str = ANALYSIS_INSTRUCTION,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        extra_options: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Send every audio segment plus the instruction and return the raw model text."""

        if not audio_parts:
            raise ValueError("at least one audio segment is required")

        cfg = self._llm_cfg
        params: Dict[str, Any] = {
            "model": model or cfg.model,
            "messages": build_messages(audio_parts, instruction=instruction),
            "temperature": cfg.temperature,
            "max_tokens": cfg.max_tokens,
            "response_format": {"type": "json_object"},
            "timeout": timeout if timeout is not None else cfg.timeout,
        }
        if extra_options:
            params.update(extra_options)

        attempt = 0
        last_error: Exception | None = None
        total_attempts = cfg.retry_limit + 1

        while attempt < total_attempts:
            attempt += 1
            try:
                resp = await self._client.chat.completions.create(**params)
                logger.info(
                    "llm.minutes.complete",
                    extra={
                        "model": params.get("model"),
                        "attempt": attempt,
                        "segments": len(audio_parts),
                    },
                )
                for choice in getattr(resp, "choices", []):
                    message = getattr(choice, "message", None)
                    if not message:
                        continue
                    content = getattr(message, "content", None)
                    if isinstance(content, str) and content.strip():
                        return content.strip()
                logger.warning(
                    "llm.minutes.empty",
                    extra={"model": params.get("model"), "attempt": attempt},
                )
                raise MinutesGenerationError("minutes_no_content")
            except Exception as exc:
                last_error = exc
                logger.warning(
                    "llm.minutes.error",
                    extra={"attempt": attempt, "model": params.get("model"), "error": repr(exc)},
                )
                if attempt >= total_attempts:
                    break
                await asyncio.sleep(cfg.retry_backoff_seconds * attempt)

        raise MinutesGenerationError("minutes generation failed after retries") from last_error


__all__ = [
    "ChatMessage",
    "LLMNotConfiguredError",
    "MinutesGenerationError",
    "MinutesLLMClient",
    "audio_format_for",
    "build_messages",
]
