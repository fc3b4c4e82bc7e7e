import pytest

from minutes_engine.audio.errors import SizeExceededError
from minutes_engine.audio.ingest import AudioIngestor, IngestLimits


@pytest.mark.asyncio
async def test_audio_ingestor_allows_within_limit():
    ingestor = AudioIngestor(limits=IngestLimits(max_bytes=10))

    payload = await ingestor.from_bytes(data=b"12345", content_type="audio/wav", filename="a.wav")

    assert payload.content_type == "audio/wav"
    assert payload.data == b"12345"
    assert payload.filename == "a.wav"


@pytest.mark.asyncio
async def test_audio_ingestor_enforces_size_limit():
    ingestor = AudioIngestor(limits=IngestLimits(max_bytes=3))

    with pytest.raises(SizeExceededError):
        await ingestor.from_bytes(data=b"1234", content_type="audio/wav")


@pytest.mark.asyncio
async def test_audio_ingestor_rejects_empty_upload():
    ingestor = AudioIngestor(limits=IngestLimits(max_bytes=3))

    with pytest.raises(ValueError):
        await ingestor.from_bytes(data=b"", content_type="audio/wav")


@pytest.mark.asyncio
async def test_audio_ingestor_defaults_content_type_for_uploads():
    ingestor = AudioIngestor(limits=IngestLimits(max_bytes=10))

    async def reader() -> bytes:
        return b"abc"

    payload = await ingestor.from_upload(file_reader=reader, content_type=None)

    assert payload.content_type == "audio/mpeg"
    assert payload.data == b"abc"
