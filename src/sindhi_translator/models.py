"""
Core data model: translation records, field layout, export formats and artifacts.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from sindhi_translator.errors import InvalidExportTypeError
from sindhi_translator.styling.fonts import is_rtl_language


def _clean(value: str | None) -> str | None:
    """Normalise blank values to None."""
    if value is None or not value.strip():
        return None
    return value


@dataclass(frozen=True)
class TranslationRecord:
    """
    Source text plus its two translations.

    A field is None when the text is unavailable (translation failed, or the
    caller sent nothing). Empty strings only appear at the wire boundary.
    """

    source: str | None = None
    translation_a: str | None = None
    translation_b: str | None = None

    @classmethod
    def from_values(
        cls,
        source: str | None,
        translation_a: str | None = None,
        translation_b: str | None = None,
    ) -> TranslationRecord:
        """Build a record from client-supplied values, treating blanks as absent."""
        return cls(_clean(source), _clean(translation_a), _clean(translation_b))

    @property
    def is_exportable(self) -> bool:
        """True when at least one field has non-blank text."""
        return any(_clean(getattr(self, attr)) for attr in RECORD_ATTRS)

    def get(self, attr: str) -> str | None:
        return _clean(getattr(self, attr))

    def as_wire(self) -> dict[str, str]:
        """Field values with absent text rendered as empty strings."""
        return {attr: getattr(self, attr) or "" for attr in RECORD_ATTRS}


RECORD_ATTRS = ("source", "translation_a", "translation_b")


@dataclass(frozen=True)
class RecordField:
    """
    Layout configuration for one record field.

    Renderers iterate over these in order instead of branching per field,
    so the label, placeholder and reading direction all come from here.
    """

    attr: str
    label: str
    language: str
    placeholder: str
    rtl: bool | None = None

    @property
    def is_rtl(self) -> bool:
        if self.rtl is not None:
            return self.rtl
        return is_rtl_language(self.language)

    def text_for(self, record: TranslationRecord) -> str:
        """Field text, or the placeholder when the field is absent."""
        return record.get(self.attr) or self.placeholder


DEFAULT_FIELDS: tuple[RecordField, ...] = (
    RecordField("source", "Sindhi", "sd", "(No Sindhi text)"),
    RecordField("translation_a", "Urdu", "ur", "(No Urdu translation)"),
    RecordField("translation_b", "English", "en", "(No English translation)"),
)


class ExportFormat(str, Enum):
    """Supported export formats. Values are the wire names."""

    PDF = "pdf"
    SPREADSHEET = "xlsx"
    PLAINTEXT = "txt"

    @property
    def extension(self) -> str:
        return f".{self.value}"

    @classmethod
    def parse(cls, value: str | None) -> ExportFormat:
        """
        Parse a client-supplied format selector.

        Accepts the wire names (pdf, xlsx, txt) and the long aliases
        (spreadsheet, plaintext), case-insensitively.

        Raises:
            InvalidExportTypeError: If the value is missing or unknown.
        """
        if not value:
            raise InvalidExportTypeError()
        key = value.strip().lower()
        key = _FORMAT_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise InvalidExportTypeError() from None


_FORMAT_ALIASES = {
    "spreadsheet": "xlsx",
    "excel": "xlsx",
    "plaintext": "txt",
    "text": "txt",
}


@dataclass(frozen=True)
class ExportRequest:
    """A record supplied by the caller plus the requested format selector.

    The format is kept as the raw client value so the pipeline can decide
    whether it is valid after checking the record.
    """

    record: TranslationRecord
    format: ExportFormat | str | None


@dataclass(frozen=True)
class ExportArtifact:
    """A fully written export file and the URL it is served under."""

    format: ExportFormat
    filename: str
    path: Path
    url: str
    size_bytes: int
    created_at: datetime
