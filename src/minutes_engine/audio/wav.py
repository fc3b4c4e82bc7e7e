from __future__ import annotations

import struct

import numpy as np

from .errors import EncodeError
from .types import AudioBuffer

WAV_HEADER_SIZE = 44
BITS_PER_SAMPLE = 16
SAMPLE_WIDTH = BITS_PER_SAMPLE // 8
PCM_FORMAT = 1
_MAX_CHUNK_SIZE = 0xFFFFFFFF
_HEADER_STRUCT = struct.Struct("<4sI4s4sIHHIIHH4sI")


def wav_header(*, channels: int, sample_rate: int, data_size: int) -> bytes:
    """Build the canonical 44-byte RIFF/WAVE header for 16-bit PCM."""

    try:
        return _HEADER_STRUCT.pack(
            b"RIFF",
            WAV_HEADER_SIZE - 8 + data_size,
            b"WAVE",
            b"fmt ",
            16,
            PCM_FORMAT,
            channels,
            sample_rate,
            sample_rate * channels * SAMPLE_WIDTH,
            channels * SAMPLE_WIDTH,
            BITS_PER_SAMPLE,
            b"data",
            data_size,
        )
    except struct.error as exc:
        raise EncodeError(f"header field out of range: {exc}") from exc


def to_pcm16(frames: np.ndarray) -> np.ndarray:
    """Clamp to [-1, 1] and scale asymmetrically to int16, truncating toward zero.

    Non-negative samples scale by 32767, negative ones by 32768, so both
    full-scale values are reachable. NaN becomes silence.
    """

    samples = np.nan_to_num(np.asarray(frames, dtype=np.float64), nan=0.0)
    samples = np.clip(samples, -1.0, 1.0)
    scaled = np.where(samples < 0, samples * 32768.0, samples * 32767.0)
    return scaled.astype("<i2")


def encode_wav(buffer: AudioBuffer) -> bytes:
    """Serialize ``buffer`` as a 16-bit little-endian PCM WAV blob.

    Frames are written row by row, which interleaves channels sample by
    sample (ch0, ch1, ..., ch0, ch1, ...).
    """

    frames = buffer.frames
    if frames.ndim != 2 or frames.shape[1] < 1:
        raise EncodeError("buffer frames must have shape (frames, channels)")
    channels = int(frames.shape[1])
    data_size = int(frames.shape[0]) * channels * SAMPLE_WIDTH
    if WAV_HEADER_SIZE - 8 + data_size > _MAX_CHUNK_SIZE:
        raise EncodeError("audio too long for a single RIFF chunk")

    header = wav_header(channels=channels, sample_rate=buffer.sample_rate, data_size=data_size)
    pcm = np.ascontiguousarray(to_pcm16(frames)).tobytes()
    if len(pcm) != data_size:
        raise EncodeError(f"pcm size mismatch: expected {data_size}, got {len(pcm)}")
    return header + pcm


__all__ = ["WAV_HEADER_SIZE", "encode_wav", "to_pcm16", "wav_header"]
