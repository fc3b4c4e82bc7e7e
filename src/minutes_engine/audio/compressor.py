from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .decoder import DEFAULT_MAX_BYTES, check_size, decode
from .errors import AudioProcessingError
from .resampler import resample
from .types import AudioBuffer, AudioPayload, CompressionResult, ResampleSpec
from .wav import encode_wav

logger = logging.getLogger(__name__)

WAV_CONTENT_TYPE = "audio/wav"


class AudioCompressor:
    """Shrinks uploads to mono 16-bit PCM WAV before they are sent upstream.

    Compression is an optimization only: whenever decoding, resampling or
    encoding fails, or the WAV would not be smaller, the original bytes are
    passed through untouched.
    """

    def __init__(
        self,
        *,
        spec: Optional[ResampleSpec] = None,
        max_bytes: int = DEFAULT_MAX_BYTES,
        max_duration_seconds: Optional[float] = None,
        enabled: bool = True,
    ) -> None:
        self._spec = spec or ResampleSpec()
        self._max_bytes = max_bytes
        self._max_duration_seconds = max_duration_seconds
        self._enabled = enabled

    @property
    def spec(self) -> ResampleSpec:
        return self._spec

    @property
    def enabled(self) -> bool:
        return self._enabled

    def transcode(self, data: bytes) -> tuple[bytes, AudioBuffer]:
        """Run guard, decode, resample and encode. Raises on any failure."""

        check_size(data, self._max_bytes)
        decoded = decode(data, max_duration_seconds=self._max_duration_seconds)
        buffer = resample(decoded, self._spec)
        return encode_wav(buffer), buffer

    def compress(self, payload: AudioPayload) -> CompressionResult:
        original_size = payload.size
        if not self._enabled:
            return self._passthrough(payload, reason="disabled")

        try:
            wav_bytes, buffer = self.transcode(payload.data)
        except AudioProcessingError as exc:
            logger.warning(
                "audio.compress.fallback",
                extra={"reason": exc.__class__.__name__, "error": str(exc), "bytes": original_size},
            )
            return self._passthrough(payload, reason=exc.__class__.__name__)
        except Exception as exc:  # pragma: no cover - unexpected decoder/numpy failure
            logger.exception("audio.compress.unexpected_error", extra={"bytes": original_size})
            return self._passthrough(payload, reason=exc.__class__.__name__)

        if len(wav_bytes) >= original_size:
            logger.info(
                "audio.compress.not_smaller",
                extra={"original_bytes": original_size, "compressed_bytes": len(wav_bytes)},
            )
            return self._passthrough(payload, reason="not_smaller")

        logger.info(
            "audio.compress.complete",
            extra={
                "original_bytes": original_size,
                "compressed_bytes": len(wav_bytes),
                "sample_rate": buffer.sample_rate,
                "channels": buffer.channels,
            },
        )
        return CompressionResult(
            data=wav_bytes,
            content_type=WAV_CONTENT_TYPE,
            compressed=True,
            original_size=original_size,
            sample_rate=buffer.sample_rate,
            channels=buffer.channels,
            duration_seconds=buffer.duration_seconds,
        )

    async def compress_async(self, payload: AudioPayload) -> CompressionResult:
        return await asyncio.to_thread(self.compress, payload)

    @staticmethod
    def _passthrough(payload: AudioPayload, *, reason: str) -> CompressionResult:
        return CompressionResult(
            data=payload.data,
            content_type=payload.content_type,
            compressed=False,
            original_size=payload.size,
            reason=reason,
        )
