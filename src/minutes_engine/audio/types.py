from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

import numpy as np

LINEAR = "linear"
SINC = "sinc"
RESAMPLE_METHODS = (LINEAR, SINC)


@dataclass(slots=True)
class AudioPayload:
    """Raw audio payload supplied by clients."""

    data: bytes
    content_type: str
    filename: Optional[str] = None
    extra: Mapping[str, str] | None = None

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(slots=True)
class AudioBuffer:
    """Decoded audio held as float32 frames of shape ``(frames, channels)``.

    Every channel has the same length by construction; use
    :meth:`from_channels` when starting from separate per-channel arrays.
    """

    frames: np.ndarray
    sample_rate: int

    def __post_init__(self) -> None:
        if self.sample_rate <= 0:
            raise ValueError("sample_rate must be positive")
        frames = np.asarray(self.frames, dtype=np.float32)
        if frames.ndim == 1:
            frames = frames[:, None]
        if frames.ndim != 2 or frames.shape[1] < 1:
            raise ValueError("frames must have shape (frames, channels)")
        self.frames = frames

    @classmethod
    def from_channels(cls, channels: Sequence[Sequence[float]], sample_rate: int) -> "AudioBuffer":
        arrays = [np.asarray(ch, dtype=np.float32) for ch in channels]
        if not arrays:
            raise ValueError("at least one channel is required")
        lengths = {len(a) for a in arrays}
        if len(lengths) != 1:
            raise ValueError(f"channels have unequal lengths: {sorted(lengths)}")
        return cls(frames=np.stack(arrays, axis=1), sample_rate=sample_rate)

    @property
    def channels(self) -> int:
        return int(self.frames.shape[1])

    @property
    def length(self) -> int:
        return int(self.frames.shape[0])

    @property
    def duration_seconds(self) -> float:
        return self.length / float(self.sample_rate)

    def channel(self, index: int) -> np.ndarray:
        return self.frames[:, index]


@dataclass(frozen=True, slots=True)
class ResampleSpec:
    target_sample_rate: int = 16000
    target_channels: int = 1
    method: str = LINEAR

    def __post_init__(self) -> None:
        if self.target_sample_rate <= 0:
            raise ValueError("target_sample_rate must be positive")
        if self.target_channels <= 0:
            raise ValueError("target_channels must be positive")
        if self.method not in RESAMPLE_METHODS:
            raise ValueError(f"unknown resample method: {self.method}")

    def output_length(self, input_length: int, input_rate: int) -> int:
        """ceil(input_length * target / input_rate) in exact integer arithmetic."""
        return -(-input_length * self.target_sample_rate // input_rate)


@dataclass(slots=True)
class CompressionResult:
    """Outcome of the optional compression stage for a single upload."""

    data: bytes
    content_type: str
    compressed: bool
    original_size: int
    reason: Optional[str] = None
    sample_rate: Optional[int] = None
    channels: Optional[int] = None
    duration_seconds: Optional[float] = None

    @property
    def size(self) -> int:
        return len(self.data)


__all__ = [
    "AudioPayload",
    "AudioBuffer",
    "ResampleSpec",
    "CompressionResult",
    "LINEAR",
    "SINC",
    "RESAMPLE_METHODS",
]
