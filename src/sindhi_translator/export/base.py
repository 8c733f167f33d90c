"""
Renderer interface shared by the export formats.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from sindhi_translator.errors import RenderError
from sindhi_translator.models import DEFAULT_FIELDS, ExportFormat, RecordField, TranslationRecord

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def generated_line(generated_at: datetime) -> str:
    return f"Generated on: {generated_at.strftime(TIMESTAMP_FORMAT)}"


class Renderer(ABC):
    """
    Serializes a TranslationRecord into one on-disk document format.

    Fields are laid out in the order of ``fields``; absent text is replaced
    by the field's placeholder. Output is written to a temporary file next
    to the target and moved into place only once complete.
    """

    format: ExportFormat

    def __init__(self, fields: Sequence[RecordField] = DEFAULT_FIELDS) -> None:
        self.fields = tuple(fields)

    @abstractmethod
    def write(self, record: TranslationRecord, path: Path, generated_at: datetime) -> None:
        """Write the document for ``record`` to ``path``."""
        ...

    def render(
        self,
        record: TranslationRecord,
        path: Path,
        generated_at: datetime | None = None,
    ) -> Path:
        """
        Render a record to ``path``.

        Args:
            record: Record to serialize.
            path: Final artifact path.
            generated_at: Timestamp printed in the document. Defaults to now.

        Returns:
            The artifact path.

        Raises:
            RenderError: If the artifact could not be fully written.
        """
        path = Path(path)
        tmp_path = path.with_name(f".{path.name}.part")
        try:
            self.write(record, tmp_path, generated_at or datetime.now())
            os.replace(tmp_path, path)
        except Exception as e:
            tmp_path.unlink(missing_ok=True)
            if isinstance(e, RenderError):
                raise
            raise RenderError(f"{self.format.value} export failed: {e}") from e
        return path
