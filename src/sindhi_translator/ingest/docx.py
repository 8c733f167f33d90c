"""
Direct text extraction for DOCX files.

Uses python-docx to pull raw text out of the document body.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from docx import Document
from docx.opc.exceptions import PackageNotFoundError

from sindhi_translator.errors import ExtractionError
from sindhi_translator.ingest.base import ExtractionResult, TextExtractor


class DocxExtractor(TextExtractor):
    """
    Extract raw text from DOCX files using python-docx.

    Paragraphs and table cells are returned in document order, separated
    by blank lines. Formatting is discarded.
    """

    SUPPORTED_EXTENSIONS = frozenset({".docx"})

    @property
    def name(self) -> str:
        return "docx_direct"

    def _extract_raw_text(self, file_path: Path) -> tuple[str, dict[str, int]]:
        try:
            doc = Document(str(file_path))
        except PackageNotFoundError:
            raise ExtractionError("Invalid or corrupted DOCX file") from None
        except (KeyError, ValueError) as e:
            raise ExtractionError(f"Invalid or corrupted DOCX file: {e}") from e

        paragraphs = {para._element: para for para in doc.paragraphs}
        tables = {table._element: table for table in doc.tables}

        parts: list[str] = []
        for element in doc.element.body:
            if element in paragraphs:
                text = paragraphs[element].text.strip()
                if text:
                    parts.append(text)
            elif element in tables:
                for row in tables[element].rows:
                    for cell in row.cells:
                        text = cell.text.strip()
                        if text:
                            parts.append(text)

        metadata = {
            "paragraph_count": len(doc.paragraphs),
            "table_count": len(doc.tables),
        }
        return "\n\n".join(parts), metadata

    async def extract(self, file_path: Path) -> ExtractionResult:
        content, metadata = await asyncio.to_thread(self._extract_raw_text, file_path)
        return ExtractionResult(content=content, extractor=self.name, metadata=metadata)
