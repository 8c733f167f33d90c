"""
sindhi-translator: Sindhi to Urdu/English translation with document export.

This package provides tools for:
- Translating Sindhi text into Urdu and English concurrently
- Extracting text from uploaded .txt and .docx files
- Exporting translations as PDF, XLSX or TXT with right-to-left layout
"""

__version__ = "0.1.0"

from sindhi_translator.config import Settings, load_config
from sindhi_translator.export import ExportPipeline
from sindhi_translator.models import (
    ExportArtifact,
    ExportFormat,
    ExportRequest,
    RecordField,
    TranslationRecord,
)
from sindhi_translator.translation import GoogleTranslateBackend, TranslationOrchestrator

__all__ = [
    # Config
    "Settings",
    "load_config",
    # Models
    "TranslationRecord",
    "RecordField",
    "ExportFormat",
    "ExportRequest",
    "ExportArtifact",
    # Translation
    "GoogleTranslateBackend",
    "TranslationOrchestrator",
    # Export
    "ExportPipeline",
]
