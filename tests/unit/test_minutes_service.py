import json
from typing import List

import pytest

from minutes_engine.audio.types import AudioPayload
from minutes_engine.minutes import MinutesParseError
from minutes_engine.minutes_service import MinutesService
from minutes_engine.settings import AudioSettings, LLMSettings, OpenAISettings, Settings


def _make_settings(*, enabled: bool, compression_enabled: bool = True) -> Settings:
    return Settings(
        openai=OpenAISettings(api_key=None, organization=None, base_url=None),
        llm=LLMSettings(
            enabled=enabled,
            model="dummy",
            temperature=0.0,
            max_tokens=128,
            timeout=1.0,
            retry_limit=0,
            retry_backoff_seconds=0.0,
        ),
        audio=AudioSettings(
            compression_enabled=compression_enabled,
            max_bytes=10 * 1024 * 1024,
            max_duration_seconds=None,
            target_sample_rate=16000,
            target_channels=1,
            resample_method="linear",
        ),
        log_level="INFO",
    )


class _StubLLMClient:
    def __init__(self, response: str) -> None:
        self._response = response
        self.calls: List[List[AudioPayload]] = []
        self.closed = False

    async def generate_minutes(self, audio_parts, **kwargs):
        self.calls.append(list(audio_parts))
        return self._response

    async def close(self) -> None:
        self.closed = True


@pytest.mark.asyncio
async def test_analyze_sends_compressed_audio_and_parses_reply(make_audio_file, sample_report_json):
    stub = _StubLLMClient("```json\n" + json.dumps(sample_report_json) + "\n```")
    service = MinutesService(settings=_make_settings(enabled=True), llm_client_factory=lambda: stub)
    original = make_audio_file(sample_rate=44100, channels=2, seconds=1.0)

    outcome = await service.analyze([AudioPayload(data=original, content_type="audio/wav", filename="m.wav")])

    assert outcome.source == "llm"
    assert outcome.report.en.title == "Weekly Sales Meeting"
    sent = stub.calls[0][0]
    assert sent.content_type == "audio/wav"
    assert len(sent.data) == 32044
    assert sent.filename == "m.wav"
    assert outcome.stats["compressed_segments"] == 1
    assert outcome.stats["uploaded_bytes"] == 32044


@pytest.mark.asyncio
async def test_analyze_forwards_original_bytes_when_decode_fails(sample_report_json):
    stub = _StubLLMClient(json.dumps(sample_report_json))
    service = MinutesService(settings=_make_settings(enabled=True), llm_client_factory=lambda: stub)
    original = b"not-really-an-mp3" * 32

    outcome = await service.analyze([AudioPayload(data=original, content_type="audio/mpeg")])

    sent = stub.calls[0][0]
    assert sent.data == original
    assert sent.content_type == "audio/mpeg"
    assert outcome.compression[0].reason == "DecodeError"


@pytest.mark.asyncio
async def test_analyze_keeps_segment_order():
    stub = _StubLLMClient(json.dumps({"ko": {}, "en": {}}))
    service = MinutesService(
        settings=_make_settings(enabled=True, compression_enabled=False),
        llm_client_factory=lambda: stub,
    )

    await service.analyze(
        [
            AudioPayload(data=b"one", content_type="audio/mpeg"),
            AudioPayload(data=b"two", content_type="audio/mpeg"),
        ]
    )

    assert [part.data for part in stub.calls[0]] == [b"one", b"two"]


@pytest.mark.asyncio
async def test_analyze_propagates_parse_errors():
    stub = _StubLLMClient("not json at all")
    service = MinutesService(settings=_make_settings(enabled=True), llm_client_factory=lambda: stub)

    with pytest.raises(MinutesParseError):
        await service.analyze([AudioPayload(data=b"abc", content_type="audio/mpeg")])


@pytest.mark.asyncio
async def test_analyze_uses_mock_report_when_llm_disabled():
    service = MinutesService(settings=_make_settings(enabled=False))

    outcome = await service.analyze([AudioPayload(data=b"abc", content_type="audio/mpeg")])

    assert outcome.source == "mock"
    assert outcome.report.en.title == "Mock meeting minutes"
    assert outcome.stats["segments"] == 1


@pytest.mark.asyncio
async def test_close_releases_llm_client():
    stub = _StubLLMClient(json.dumps({"ko": {}, "en": {}}))
    service = MinutesService(settings=_make_settings(enabled=True), llm_client_factory=lambda: stub)
    await service.analyze([AudioPayload(data=b"abc", content_type="audio/mpeg")])

    await service.close()

    assert stub.closed is True
