"""
Direct text extraction for plain text files.

No conversion needed - just decodes the file content.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from sindhi_translator.errors import ExtractionError
from sindhi_translator.ingest.base import ExtractionResult, TextExtractor

# Tried in order; latin-1 accepts any byte sequence
ENCODINGS = ("utf-8-sig", "cp1252", "latin-1")


class PlainTextExtractor(TextExtractor):
    """
    Extract text from plain text files.

    This is a pass-through extractor that reads the file content, trying
    UTF-8 first and falling back to single-byte encodings.
    """

    SUPPORTED_EXTENSIONS = frozenset({".txt"})

    @property
    def name(self) -> str:
        return "text_direct"

    async def extract(self, file_path: Path) -> ExtractionResult:
        try:
            raw = await asyncio.to_thread(file_path.read_bytes)
        except OSError as e:
            raise ExtractionError(f"Cannot read {file_path.name}: {e}") from e

        for encoding in ENCODINGS:
            try:
                content = raw.decode(encoding)
            except UnicodeDecodeError:
                continue
            return ExtractionResult(
                content=content,
                extractor=self.name,
                metadata={"encoding": encoding, "file_size": len(raw)},
            )

        raise ExtractionError(f"Could not decode {file_path.name} with any supported encoding")
