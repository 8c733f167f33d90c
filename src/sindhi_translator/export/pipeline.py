"""
Export pipeline: validates an export request, picks the renderer for the
requested format, and produces a uniquely named artifact.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from sindhi_translator.errors import InvalidExportTypeError, NothingToExportError
from sindhi_translator.export.base import Renderer
from sindhi_translator.export.pdf import PdfRenderer
from sindhi_translator.export.text import PlainTextRenderer
from sindhi_translator.export.xlsx import SpreadsheetRenderer
from sindhi_translator.models import ExportArtifact, ExportFormat, ExportRequest
from sindhi_translator.styling.fonts import FontResolver

if TYPE_CHECKING:
    from sindhi_translator.config import Settings

logger = logging.getLogger(__name__)


class ExportPipeline:
    """Dispatches export requests to format renderers."""

    def __init__(
        self,
        exports_dir: Path | str,
        renderers: Mapping[ExportFormat, Renderer],
        *,
        url_prefix: str = "/exports",
    ) -> None:
        """
        Initialize the pipeline.

        Args:
            exports_dir: Directory artifacts are written to.
            renderers: Renderer per supported format.
            url_prefix: URL path the exports directory is served under.
        """
        self.exports_dir = Path(exports_dir)
        self.renderers = dict(renderers)
        self.url_prefix = "/" + url_prefix.strip("/")

    @classmethod
    def from_settings(cls, settings: Settings) -> ExportPipeline:
        """Build a pipeline with all three renderers from settings."""
        fields = settings.languages.record_fields()
        resolver = FontResolver(settings.paths.fonts_dir, settings.fonts.files)
        renderers: dict[ExportFormat, Renderer] = {
            ExportFormat.PDF: PdfRenderer(
                fields,
                font_resolver=resolver,
                title=settings.export.title,
                page_size=settings.export.page_size,
            ),
            ExportFormat.SPREADSHEET: SpreadsheetRenderer(
                fields, sheet_name=settings.export.sheet_name
            ),
            ExportFormat.PLAINTEXT: PlainTextRenderer(fields, title=settings.export.title),
        }
        return cls(
            settings.paths.exports_dir,
            renderers,
            url_prefix=settings.server.exports_url_prefix,
        )

    def artifact_name(self, export_format: ExportFormat) -> str:
        """Unique file name: millisecond timestamp plus a random suffix."""
        timestamp = int(time.time() * 1000)
        return f"export-{timestamp}-{uuid.uuid4().hex[:8]}{export_format.extension}"

    def resolve_format(self, value: ExportFormat | str | None) -> ExportFormat:
        export_format = value if isinstance(value, ExportFormat) else ExportFormat.parse(value)
        if export_format not in self.renderers:
            raise InvalidExportTypeError()
        return export_format

    async def export(
        self,
        request: ExportRequest,
        *,
        generated_at: datetime | None = None,
    ) -> ExportArtifact:
        """
        Render a record into the requested format.

        Args:
            request: Record plus format selector.
            generated_at: Timestamp printed in the document. Defaults to now.

        Returns:
            ExportArtifact pointing at a complete, closed file.

        Raises:
            NothingToExportError: If every field of the record is blank.
            InvalidExportTypeError: If the format is unknown.
            RenderError: If the artifact could not be written.
        """
        if not request.record.is_exportable:
            raise NothingToExportError()
        export_format = self.resolve_format(request.format)
        renderer = self.renderers[export_format]

        self.exports_dir.mkdir(parents=True, exist_ok=True)
        filename = self.artifact_name(export_format)
        path = self.exports_dir / filename
        generated_at = generated_at or datetime.now()

        await asyncio.to_thread(renderer.render, request.record, path, generated_at)

        size = path.stat().st_size
        logger.info("Created %s export %s (%d bytes)", export_format.value, filename, size)
        return ExportArtifact(
            format=export_format,
            filename=filename,
            path=path,
            url=f"{self.url_prefix}/{filename}",
            size_bytes=size,
            created_at=generated_at,
        )
