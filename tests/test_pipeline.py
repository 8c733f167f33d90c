"""Tests for the export pipeline."""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest
from openpyxl import load_workbook

from sindhi_translator.config import Settings
from sindhi_translator.errors import InvalidExportTypeError, NothingToExportError, RenderError
from sindhi_translator.export import ExportPipeline, PlainTextRenderer
from sindhi_translator.export.base import Renderer
from sindhi_translator.models import ExportFormat, ExportRequest, TranslationRecord
from tests.conftest import ENGLISH, FIXED_TIME, SINDHI, URDU

NAME_RE = re.compile(r"^export-\d{13}-[0-9a-f]{8}\.(pdf|xlsx|txt)$")


def _no_files(directory: Path) -> bool:
    return not directory.exists() or not any(directory.iterdir())


class ExplodingRenderer(Renderer):
    format = ExportFormat.PLAINTEXT

    def write(self, record: TranslationRecord, path: Path, generated_at: datetime) -> None:
        path.write_text("partial")
        raise OSError("disk full")


@pytest.fixture
def pipeline(settings: Settings) -> ExportPipeline:
    return ExportPipeline.from_settings(settings)


class TestExportPipeline:
    """Test ExportPipeline.export."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("fmt, ext", [("pdf", "pdf"), ("xlsx", "xlsx"), ("txt", "txt")])
    async def test_each_format_produces_artifact(
        self,
        pipeline: ExportPipeline,
        full_record: TranslationRecord,
        fmt: str,
        ext: str,
    ) -> None:
        artifact = await pipeline.export(ExportRequest(full_record, fmt))

        assert NAME_RE.match(artifact.filename)
        assert artifact.filename.endswith(f".{ext}")
        assert artifact.url == f"/exports/{artifact.filename}"
        assert artifact.path == pipeline.exports_dir / artifact.filename
        assert artifact.path.is_file()
        assert artifact.size_bytes == artifact.path.stat().st_size > 0

    @pytest.mark.asyncio
    async def test_txt_content(self, pipeline: ExportPipeline, full_record: TranslationRecord) -> None:
        artifact = await pipeline.export(
            ExportRequest(full_record, "txt"), generated_at=FIXED_TIME
        )
        content = artifact.path.read_text(encoding="utf-8")
        assert SINDHI in content and URDU in content and ENGLISH in content
        assert "Generated on: 2024-05-17 09:30:00" in content
        assert artifact.created_at == FIXED_TIME

    @pytest.mark.asyncio
    async def test_partial_record_xlsx(self, pipeline: ExportPipeline) -> None:
        record = TranslationRecord.from_values(SINDHI, "", ENGLISH)
        artifact = await pipeline.export(ExportRequest(record, "xlsx"))
        sheet = load_workbook(artifact.path).active
        assert sheet["B2"].value == "(No Urdu translation)"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("fmt", ["pdf", "xlsx", "txt"])
    async def test_nothing_to_export(self, pipeline: ExportPipeline, fmt: str) -> None:
        record = TranslationRecord.from_values("", "  ", None)
        with pytest.raises(NothingToExportError):
            await pipeline.export(ExportRequest(record, fmt))
        assert _no_files(pipeline.exports_dir)

    @pytest.mark.asyncio
    async def test_nothing_to_export_checked_before_type(self, pipeline: ExportPipeline) -> None:
        record = TranslationRecord.from_values("", "", "")
        with pytest.raises(NothingToExportError):
            await pipeline.export(ExportRequest(record, "docx"))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("fmt", [None, "", "docx"])
    async def test_invalid_type(
        self, pipeline: ExportPipeline, full_record: TranslationRecord, fmt: str | None
    ) -> None:
        with pytest.raises(InvalidExportTypeError):
            await pipeline.export(ExportRequest(full_record, fmt))
        assert _no_files(pipeline.exports_dir)

    @pytest.mark.asyncio
    async def test_format_without_renderer(self, tmp_path: Path, full_record: TranslationRecord) -> None:
        pipeline = ExportPipeline(tmp_path, {ExportFormat.PLAINTEXT: PlainTextRenderer()})
        with pytest.raises(InvalidExportTypeError):
            await pipeline.export(ExportRequest(full_record, "pdf"))

    @pytest.mark.asyncio
    async def test_failed_render_leaves_nothing(
        self, tmp_path: Path, full_record: TranslationRecord
    ) -> None:
        pipeline = ExportPipeline(tmp_path, {ExportFormat.PLAINTEXT: ExplodingRenderer()})
        with pytest.raises(RenderError, match="disk full"):
            await pipeline.export(ExportRequest(full_record, "txt"))
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_names_are_unique_within_one_millisecond(
        self, pipeline: ExportPipeline, full_record: TranslationRecord
    ) -> None:
        with patch("sindhi_translator.export.pipeline.time.time", return_value=1700000000.0):
            first = await pipeline.export(ExportRequest(full_record, "txt"))
            second = await pipeline.export(ExportRequest(full_record, "txt"))
        assert first.filename != second.filename
        assert first.path.is_file() and second.path.is_file()

    @pytest.mark.asyncio
    async def test_creates_missing_exports_dir(
        self, tmp_path: Path, full_record: TranslationRecord
    ) -> None:
        exports_dir = tmp_path / "new" / "exports"
        pipeline = ExportPipeline(
            exports_dir,
            {ExportFormat.PLAINTEXT: PlainTextRenderer()},
            url_prefix="files/",
        )
        artifact = await pipeline.export(ExportRequest(full_record, ExportFormat.PLAINTEXT))
        assert artifact.path.parent == exports_dir
        assert artifact.url.startswith("/files/export-")
