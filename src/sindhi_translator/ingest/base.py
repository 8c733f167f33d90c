"""
Base classes and interfaces for document text extractors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class ExtractionResult:
    """Text extracted from an uploaded document."""

    content: str
    extractor: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """True when the document holds no visible text."""
        return not self.content or not self.content.strip()

    @property
    def word_count(self) -> int:
        """Whitespace-separated token count, reported in upload logs."""
        return len(self.content.split()) if self.content else 0


class TextExtractor(ABC):
    """Abstract base class for extractors."""

    SUPPORTED_EXTENSIONS: frozenset[str] = frozenset()

    @property
    @abstractmethod
    def name(self) -> str:
        """Extractor name."""
        ...

    def can_handle(self, file_path: Path) -> bool:
        """Check if this extractor can handle the given file type."""
        return file_path.suffix.lower() in self.SUPPORTED_EXTENSIONS

    @abstractmethod
    async def extract(self, file_path: Path) -> ExtractionResult:
        """
        Extract the full text of a document.

        Args:
            file_path: Path to the document.

        Returns:
            ExtractionResult with the document text.

        Raises:
            ExtractionError: If the document cannot be read.
        """
        ...
