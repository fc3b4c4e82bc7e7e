"""Audio decoding, resampling and WAV encoding."""

from .compressor import AudioCompressor
from .decoder import DEFAULT_MAX_BYTES, check_size, decode
from .errors import AudioProcessingError, DecodeError, EncodeError, ResampleError, SizeExceededError
from .ingest import AudioIngestor, IngestLimits
from .resampler import resample
from .types import AudioBuffer, AudioPayload, CompressionResult, ResampleSpec
from .wav import encode_wav

__all__ = [
    "AudioBuffer",
    "AudioCompressor",
    "AudioIngestor",
    "AudioPayload",
    "AudioProcessingError",
    "CompressionResult",
    "DEFAULT_MAX_BYTES",
    "DecodeError",
    "EncodeError",
    "IngestLimits",
    "ResampleError",
    "ResampleSpec",
    "SizeExceededError",
    "check_size",
    "decode",
    "encode_wav",
    "resample",
]
