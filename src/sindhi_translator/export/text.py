"""
Plain text exporter.

Fixed template: a ruled header, one labelled section per field, and a
generation timestamp. The same record always produces the same layout.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from sindhi_translator.export.base import Renderer, generated_line
from sindhi_translator.models import DEFAULT_FIELDS, ExportFormat, RecordField, TranslationRecord

RULE_WIDTH = 43
HEAVY_RULE = "=" * RULE_WIDTH
LIGHT_RULE = "-" * RULE_WIDTH


class PlainTextRenderer(Renderer):
    """Exports records to UTF-8 text files."""

    format = ExportFormat.PLAINTEXT

    def __init__(
        self,
        fields: Sequence[RecordField] = DEFAULT_FIELDS,
        *,
        title: str = "Translation Export",
    ) -> None:
        super().__init__(fields)
        self.title = title

    def render_text(self, record: TranslationRecord, generated_at: datetime) -> str:
        """Build the document body."""
        sections = [f"{field.label}:\n{field.text_for(record)}\n" for field in self.fields]

        parts = [HEAVY_RULE, self.title.upper(), HEAVY_RULE, ""]
        parts.append(f"\n{LIGHT_RULE}\n\n".join(sections))
        parts += [HEAVY_RULE, generated_line(generated_at), HEAVY_RULE, ""]
        return "\n".join(parts)

    def write(self, record: TranslationRecord, path: Path, generated_at: datetime) -> None:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(self.render_text(record, generated_at))
