"""
Text extraction for uploaded documents.

Provides:
- PlainTextExtractor for .txt files
- DocxExtractor for .docx files
"""

from __future__ import annotations

from pathlib import Path

from sindhi_translator.errors import UnsupportedFileTypeError
from sindhi_translator.ingest.base import ExtractionResult, TextExtractor
from sindhi_translator.ingest.docx import DocxExtractor
from sindhi_translator.ingest.text import PlainTextExtractor

EXTRACTORS: tuple[TextExtractor, ...] = (PlainTextExtractor(), DocxExtractor())

SUPPORTED_EXTENSIONS = frozenset().union(*(e.SUPPORTED_EXTENSIONS for e in EXTRACTORS))


def get_extractor(file_path: Path | str) -> TextExtractor:
    """
    Pick the extractor for a file by its extension.

    Raises:
        UnsupportedFileTypeError: If no extractor handles the extension.
    """
    path = Path(file_path)
    for extractor in EXTRACTORS:
        if extractor.can_handle(path):
            return extractor
    raise UnsupportedFileTypeError()


async def extract_text(file_path: Path | str) -> ExtractionResult:
    """Extract text from a .txt or .docx file."""
    path = Path(file_path)
    return await get_extractor(path).extract(path)


__all__ = [
    "ExtractionResult",
    "TextExtractor",
    "PlainTextExtractor",
    "DocxExtractor",
    "SUPPORTED_EXTENSIONS",
    "get_extractor",
    "extract_text",
]
