import logging
import os
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse, Response

from . import __version__
from .audio import AudioIngestor, AudioPayload, IngestLimits, SizeExceededError
from .llm_client import LLMNotConfiguredError
from .minutes import MinutesParseError, MinutesReport
from .minutes_service import MinutesService
from .prompts import MINUTES_LOCALES
from .render import EXPORT_FORMATS, export_docx, export_filename, export_pdf, format_full_report
from .settings import settings as runtime_settings

app = FastAPI(title="minutes-engine")
logger = logging.getLogger(__name__)

minutes_service = MinutesService(settings=runtime_settings)
audio_ingestor = AudioIngestor(limits=IngestLimits(max_bytes=runtime_settings.audio.max_bytes))

_MEDIA_TYPES = {
    "txt": "text/plain; charset=utf-8",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "pdf": "application/pdf",
}


async def _read_uploads(files: List[UploadFile]) -> List[AudioPayload]:
    payloads: List[AudioPayload] = []
    for upload in files:
        payload = await audio_ingestor.from_upload(
            file_reader=upload.read,
            content_type=upload.content_type,
            filename=upload.filename,
        )
        logger.info(
            "analyze.upload.received",
            extra={"upload_name": upload.filename, "bytes": payload.size, "content_type": payload.content_type},
        )
        payloads.append(payload)
    return payloads


@app.get("/health")
async def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "service": "minutes-engine",
        "version": __version__,
        "llm_enabled": minutes_service.llm_enabled,
        "llm_model": runtime_settings.llm.model if minutes_service.llm_enabled else None,
        "compression_enabled": minutes_service.compressor.enabled,
    }


@app.post("/api/analyze")
async def analyze(file: Optional[List[UploadFile]] = File(None)) -> JSONResponse:
    if not file:
        return JSONResponse({"error": "No file provided"}, status_code=400)

    try:
        payloads = await _read_uploads(file)
    except SizeExceededError:
        limit_mb = audio_ingestor.limits.max_bytes // (1024 * 1024)
        return JSONResponse({"error": f"file exceeds {limit_mb}MB"}, status_code=413)
    except ValueError as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)

    try:
        outcome = await minutes_service.analyze(payloads)
    except MinutesParseError as exc:
        logger.error("analyze.parse_failed", extra={"error": str(exc)})
        return JSONResponse(
            {"error": "Failed to parse structured output", "rawText": exc.raw_text},
            status_code=500,
        )
    except LLMNotConfiguredError as exc:
        logger.error("analyze.llm_not_configured")
        return JSONResponse({"error": str(exc), "details": exc.__class__.__name__}, status_code=500)
    except Exception as exc:
        logger.exception("analyze.inference_failed")
        return JSONResponse(
            {"error": str(exc) or "Failed to analyze audio", "details": exc.__class__.__name__},
            status_code=502,
        )

    body = outcome.report.to_json()
    body["stats"] = outcome.stats
    return JSONResponse(body)


@app.post("/api/export/{fmt}")
async def export(fmt: str, report: MinutesReport, lang: str = "ko") -> Response:
    fmt = fmt.lower()
    if fmt not in EXPORT_FORMATS:
        raise HTTPException(status_code=400, detail=f"unsupported export format: {fmt}")
    if lang not in MINUTES_LOCALES:
        raise HTTPException(status_code=400, detail=f"unsupported language: {lang}")

    minutes = report.for_locale(lang)
    if fmt == "txt":
        content = format_full_report(minutes).encode("utf-8")
    elif fmt == "docx":
        content = export_docx(minutes)
    else:
        content = export_pdf(minutes, lang=lang)

    filename = export_filename(minutes, fmt)
    headers = {"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"}
    logger.info("export.complete", extra={"format": fmt, "lang": lang, "bytes": len(content)})
    return Response(content=content, media_type=_MEDIA_TYPES[fmt], headers=headers)


@app.on_event("shutdown")
async def _on_shutdown() -> None:
    await minutes_service.close()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=runtime_settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run("minutes_engine.app:app", host="0.0.0.0", port=int(os.getenv("PORT", "8100")), reload=False)
