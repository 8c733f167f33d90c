"""
HTTP API for sindhi-translator.

Routes:
- POST /api/translate  {text} -> {sindhi, urdu, english}
- POST /api/upload     multipart "file" (.txt, .docx) -> {text}
- POST /api/export     {sindhi, urdu, english, type} -> {url}
- GET  /exports/...    generated artifacts
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import BinaryIO

from fastapi import APIRouter, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from sindhi_translator.config import Settings, load_config
from sindhi_translator.errors import (
    ClientError,
    FileTooLargeError,
    NoFileError,
    UnsupportedFileTypeError,
)
from sindhi_translator.export import ExportPipeline, PdfRenderer
from sindhi_translator.ingest import SUPPORTED_EXTENSIONS, extract_text
from sindhi_translator.models import ExportFormat, ExportRequest, TranslationRecord
from sindhi_translator.translation import TranslationOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


class TranslateBody(BaseModel):
    text: str | None = None


class TranslateResponse(BaseModel):
    sindhi: str
    urdu: str
    english: str


class ExportBody(BaseModel):
    sindhi: str | None = None
    urdu: str | None = None
    english: str | None = None
    type: str | None = None


class ExportResponse(BaseModel):
    url: str


class UploadResponse(BaseModel):
    text: str


def _safe_filename(name: str) -> str:
    """Sanitize filename for filesystem compatibility."""
    name = Path(name).name
    return "".join(c if c.isalnum() or c in "._-" else "_" for c in name) or "upload"


def _copy_upload(source: BinaryIO, target: Path, limit_bytes: int) -> int:
    """Copy an upload to disk, stopping once it exceeds ``limit_bytes``."""
    written = 0
    with open(target, "wb") as out:
        while chunk := source.read(64 * 1024):
            written += len(chunk)
            if written > limit_bytes:
                raise FileTooLargeError()
            out.write(chunk)
    return written


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/translate", response_model=TranslateResponse)
async def translate(body: TranslateBody, request: Request) -> TranslateResponse:
    orchestrator: TranslationOrchestrator = request.app.state.orchestrator
    try:
        record = await orchestrator.translate(body.text)
    except ClientError:
        raise
    except Exception:
        logger.exception("Translate request failed")
        raise HTTPException(status_code=500, detail="Translation failed") from None

    wire = record.as_wire()
    return TranslateResponse(
        sindhi=wire["source"],
        urdu=wire["translation_a"],
        english=wire["translation_b"],
    )


@router.post("/upload", response_model=UploadResponse)
async def upload(request: Request, file: UploadFile | None = File(default=None)) -> UploadResponse:
    if file is None or not file.filename:
        raise NoFileError()
    if Path(file.filename).suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileTypeError()

    settings: Settings = request.app.state.settings
    settings.paths.uploads_dir.mkdir(parents=True, exist_ok=True)
    stored = settings.paths.uploads_dir / (
        f"{int(time.time() * 1000)}-{_safe_filename(file.filename)}"
    )
    limit = settings.server.max_upload_mb * 1024 * 1024

    try:
        await asyncio.to_thread(_copy_upload, file.file, stored, limit)
        result = await extract_text(stored)
    except ClientError:
        raise
    except Exception:
        logger.exception("Upload processing failed for %s", file.filename)
        raise HTTPException(status_code=500, detail="File processing failed") from None
    finally:
        stored.unlink(missing_ok=True)
        await file.close()

    logger.info(
        "Extracted %d words from %s via %s", result.word_count, file.filename, result.extractor
    )
    return UploadResponse(text=result.content)


@router.post("/export", response_model=ExportResponse)
async def export(body: ExportBody, request: Request) -> ExportResponse:
    pipeline: ExportPipeline = request.app.state.pipeline
    record = TranslationRecord.from_values(body.sindhi, body.urdu, body.english)
    try:
        artifact = await pipeline.export(ExportRequest(record=record, format=body.type))
    except ClientError:
        raise
    except Exception:
        logger.exception("Export failed (type=%s)", body.type)
        raise HTTPException(status_code=500, detail="Export failed") from None
    return ExportResponse(url=artifact.url)


async def _client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse({"error": "Invalid request body"}, status_code=400)


def log_font_report(pipeline: ExportPipeline) -> None:
    """Log whether the right-to-left PDF fonts are present."""
    renderer = pipeline.renderers.get(ExportFormat.PDF)
    if not isinstance(renderer, PdfRenderer):
        return
    for capability in renderer.resolve_fonts().values():
        if capability.available:
            logger.info("PDF font for %s script: %s", capability.script_name, capability.asset_path)
        else:
            logger.warning(
                "No font for %s script in %s; PDF exports will use the default font",
                capability.script_name,
                renderer.font_resolver.fonts_dir if renderer.font_resolver else "(none)",
            )


def create_app(
    settings: Settings | None = None,
    *,
    orchestrator: TranslationOrchestrator | None = None,
    pipeline: ExportPipeline | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings; loaded from config.yaml / environment if omitted.
        orchestrator: Translation orchestrator; built from settings if omitted.
        pipeline: Export pipeline; built from settings if omitted.
    """
    settings = settings or load_config()
    settings.ensure_directories()
    owns_orchestrator = orchestrator is None
    orchestrator = orchestrator or TranslationOrchestrator.from_settings(settings)
    pipeline = pipeline or ExportPipeline.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log_font_report(pipeline)
        if not settings.translation.api_key:
            logger.warning("No translation API key configured; translations will be empty")
        yield
        if owns_orchestrator:
            await orchestrator.aclose()

    app = FastAPI(title="sindhi-translator", lifespan=lifespan)
    app.state.settings = settings
    app.state.orchestrator = orchestrator
    app.state.pipeline = pipeline

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ClientError, _client_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(router)
    pipeline.exports_dir.mkdir(parents=True, exist_ok=True)
    app.mount(
        settings.server.exports_url_prefix,
        StaticFiles(directory=pipeline.exports_dir),
        name="exports",
    )
    if settings.paths.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.paths.static_dir, html=True), name="ui")

    return app
