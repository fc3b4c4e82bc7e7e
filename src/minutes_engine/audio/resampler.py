from __future__ import annotations

import numpy as np
import resampy

from .errors import ResampleError
from .types import SINC, AudioBuffer, ResampleSpec


def resample(buffer: AudioBuffer, spec: ResampleSpec | None = None) -> AudioBuffer:
    """Convert ``buffer`` to the rate and channel count described by ``spec``.

    Channels are mixed first, then the time axis is rescaled so that output
    index ``i`` reads input position ``i * input_rate / target_rate``. The
    output always holds ``ceil(length * target_rate / input_rate)`` frames.
    A buffer already in the target format is returned as is.
    """

    spec = spec or ResampleSpec()
    frames = _mix_channels(buffer.frames, spec.target_channels)
    source_rate = buffer.sample_rate
    target_rate = spec.target_sample_rate

    if source_rate == target_rate:
        if frames is buffer.frames:
            return buffer
        return AudioBuffer(frames=frames, sample_rate=target_rate)

    new_length = spec.output_length(buffer.length, source_rate)
    if spec.method == SINC:
        resampled = _resample_sinc(frames, source_rate, target_rate, new_length)
    else:
        resampled = _resample_linear(frames, source_rate, target_rate, new_length)
    return AudioBuffer(frames=resampled, sample_rate=target_rate)


def _mix_channels(frames: np.ndarray, target_channels: int) -> np.ndarray:
    channels = frames.shape[1]
    if channels == target_channels:
        return frames
    if target_channels == 1:
        return np.mean(frames, axis=1, keepdims=True, dtype=np.float32).astype(np.float32)
    if channels == 1:
        return np.repeat(frames, target_channels, axis=1)
    raise ResampleError(f"cannot convert {channels} channels to {target_channels}")


def _resample_linear(frames: np.ndarray, source_rate: int, target_rate: int, new_length: int) -> np.ndarray:
    channels = frames.shape[1]
    out = np.zeros((new_length, channels), dtype=np.float32)
    if new_length == 0 or frames.shape[0] == 0:
        return out
    positions = np.arange(new_length, dtype=np.float64) * source_rate / target_rate
    source_index = np.arange(frames.shape[0], dtype=np.float64)
    for ch in range(channels):
        # np.interp holds the last sample for positions past the final frame
        out[:, ch] = np.interp(positions, source_index, frames[:, ch].astype(np.float64))
    return out


def _resample_sinc(frames: np.ndarray, source_rate: int, target_rate: int, new_length: int) -> np.ndarray:
    channels = frames.shape[1]
    if new_length == 0 or frames.shape[0] == 0:
        return np.zeros((new_length, channels), dtype=np.float32)
    try:
        resampled = resampy.resample(frames, source_rate, target_rate, axis=0, filter="kaiser_fast")
    except ValueError as exc:
        raise ResampleError(str(exc)) from exc
    resampled = resampled.astype(np.float32)
    if resampled.shape[0] >= new_length:
        return np.ascontiguousarray(resampled[:new_length])
    padding = np.zeros((new_length - resampled.shape[0], channels), dtype=np.float32)
    return np.concatenate([resampled, padding], axis=0)


__all__ = ["resample"]
