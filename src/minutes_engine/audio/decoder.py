from __future__ import annotations

import io
import logging
from typing import Optional

import soundfile as sf

from .errors import DecodeError, SizeExceededError
from .types import AudioBuffer

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 100 * 1024 * 1024


def check_size(data: bytes, max_bytes: int = DEFAULT_MAX_BYTES) -> None:
    """Reject encoded input above ``max_bytes`` before any decode work happens."""

    if len(data) > max_bytes:
        raise SizeExceededError(
            "audio payload exceeds configured size limit",
            size=len(data),
            limit=max_bytes,
        )


def decode(data: bytes, *, max_duration_seconds: Optional[float] = None) -> AudioBuffer:
    """Decode a container/compressed byte stream into float32 frames.

    Anything libsndfile can read is accepted (WAV, FLAC, OGG/Vorbis, MP3 on
    recent builds). The sample rate reported by the container is authoritative.
    """

    if not data:
        raise DecodeError("empty audio payload")
    try:
        frames, sample_rate = sf.read(io.BytesIO(data), dtype="float32", always_2d=True)
    except Exception as exc:
        raise DecodeError("failed to decode audio; the file may be corrupted or in an unsupported format") from exc

    buffer = AudioBuffer(frames=frames, sample_rate=int(sample_rate))
    if max_duration_seconds and buffer.duration_seconds > max_duration_seconds:
        raise SizeExceededError(
            "audio duration exceeds configured limit",
            size=buffer.duration_seconds,
            limit=max_duration_seconds,
        )
    logger.debug(
        "audio.decode.complete",
        extra={
            "sample_rate": buffer.sample_rate,
            "channels": buffer.channels,
            "frames": buffer.length,
        },
    )
    return buffer


__all__ = ["DEFAULT_MAX_BYTES", "check_size", "decode"]
