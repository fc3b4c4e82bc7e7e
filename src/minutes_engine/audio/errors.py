from __future__ import annotations


class AudioProcessingError(Exception):
    """Base class for failures in the decode/resample/encode pipeline."""


class DecodeError(AudioProcessingError):
    """The byte stream is corrupted or in a format the decoder does not recognise."""


class SizeExceededError(AudioProcessingError):
    """Input is too large for safe in-memory processing."""

    def __init__(self, message: str, *, size: float, limit: float) -> None:
        super().__init__(message)
        self.size = size
        self.limit = limit


class ResampleError(AudioProcessingError):
    """The requested channel or rate conversion is not supported."""


class EncodeError(AudioProcessingError):
    """The buffer violates an invariant required for WAV serialization."""


__all__ = [
    "AudioProcessingError",
    "DecodeError",
    "SizeExceededError",
    "ResampleError",
    "EncodeError",
]
