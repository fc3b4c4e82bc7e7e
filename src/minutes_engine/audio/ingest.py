from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from .decoder import check_size
from .types import AudioPayload

DEFAULT_CONTENT_TYPE = "audio/mpeg"


@dataclass(slots=True)
class IngestLimits:
    max_bytes: int


class AudioIngestor:
    """Parses uploaded files into AudioPayload objects."""

    def __init__(self, *, limits: IngestLimits) -> None:
        self._limits = limits

    @property
    def limits(self) -> IngestLimits:
        return self._limits

    async def from_bytes(
        self,
        *,
        data: bytes,
        content_type: Optional[str],
        filename: Optional[str] = None,
        meta: Optional[dict[str, Any]] = None,
    ) -> AudioPayload:
        if not data:
            raise ValueError("audio payload is empty")
        check_size(data, self._limits.max_bytes)
        return AudioPayload(
            data=data,
            content_type=content_type or DEFAULT_CONTENT_TYPE,
            filename=filename,
            extra=meta or {},
        )

    async def from_upload(
        self,
        *,
        file_reader: Callable[[], Awaitable[bytes]],
        content_type: Optional[str],
        filename: Optional[str] = None,
        meta: Optional[dict[str, Any]] = None,
    ) -> AudioPayload:
        data = await file_reader()
        return await self.from_bytes(data=data, content_type=content_type, filename=filename, meta=meta)
