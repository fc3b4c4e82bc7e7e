from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .audio import AudioCompressor, AudioPayload, CompressionResult, ResampleSpec
from .llm_client import MinutesLLMClient
from .minutes import MeetingMinutes, MinutesReport, parse_minutes
from .settings import Settings, settings as runtime_settings

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AnalysisOutcome:
    report: MinutesReport
    compression: List[CompressionResult]
    source: str
    stats: Dict[str, Any] = field(default_factory=dict)


def compressor_from_settings(cfg: Settings) -> AudioCompressor:
    audio_cfg = cfg.audio
    return AudioCompressor(
        spec=ResampleSpec(
            target_sample_rate=audio_cfg.target_sample_rate,
            target_channels=audio_cfg.target_channels,
            method=audio_cfg.resample_method,
        ),
        max_bytes=audio_cfg.max_bytes,
        max_duration_seconds=audio_cfg.max_duration_seconds,
        enabled=audio_cfg.compression_enabled,
    )


class MinutesService:
    """Compresses uploads, asks the model for minutes and parses the reply."""

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        compressor: Optional[AudioCompressor] = None,
        llm_client_factory: Optional[Callable[[], MinutesLLMClient]] = None,
    ) -> None:
        self._settings = settings or runtime_settings
        self._compressor = compressor or compressor_from_settings(self._settings)
        self._llm_client_factory = llm_client_factory
        self._llm_client: Optional[MinutesLLMClient] = None

    @property
    def llm_enabled(self) -> bool:
        return self._settings.llm.enabled

    @property
    def compressor(self) -> AudioCompressor:
        return self._compressor

    async def analyze(self, payloads: Sequence[AudioPayload]) -> AnalysisOutcome:
        if not payloads:
            raise ValueError("no audio provided")

        started = time.perf_counter()
        results = [await self._compressor.compress_async(payload) for payload in payloads]
        compressed_at = time.perf_counter()

        parts = [
            AudioPayload(data=result.data, content_type=result.content_type, filename=payload.filename)
            for payload, result in zip(payloads, results)
        ]

        if self.llm_enabled:
            client = self._ensure_client()
            text = await client.generate_minutes(parts)
            report = parse_minutes(text)
            source = "llm"
        else:
            report = _mock_report(results)
            source = "mock"
        finished = time.perf_counter()

        stats = {
            "segments": len(results),
            "original_bytes": sum(r.original_size for r in results),
            "uploaded_bytes": sum(r.size for r in results),
            "compressed_segments": sum(1 for r in results if r.compressed),
            "compression_ms": round((compressed_at - started) * 1000.0, 1),
            "inference_ms": round((finished - compressed_at) * 1000.0, 1),
            "source": source,
        }
        logger.info("minutes.analyze.complete", extra=stats)
        return AnalysisOutcome(report=report, compression=results, source=source, stats=stats)

    async def close(self) -> None:
        if self._llm_client is not None:
            await self._llm_client.close()
            self._llm_client = None

    def _ensure_client(self) -> MinutesLLMClient:
        if self._llm_client is None:
            if self._llm_client_factory is not None:
                self._llm_client = self._llm_client_factory()
            else:
                self._llm_client = MinutesLLMClient(self._settings.openai, self._settings.llm)
        return self._llm_client


def _mock_report(results: Sequence[CompressionResult]) -> MinutesReport:
    total = sum(r.size for r in results)
    ko = MeetingMinutes(
        title="모의 회의록",
        date="N/A",
        summary=f"실제 모델이 비활성화되어 있습니다. 오디오 {len(results)}개 구간({total} 바이트)을 수신했습니다.",
    )
    en = MeetingMinutes(
        title="Mock meeting minutes",
        date="N/A",
        summary=f"The real model is disabled. Received {len(results)} audio segment(s) ({total} bytes).",
    )
    return MinutesReport(ko=ko, en=en)


__all__ = ["AnalysisOutcome", "MinutesService", "compressor_from_settings"]
