"""
Export module for sindhi-translator.

Provides renderers for PDF, XLSX and plain text, and the pipeline that
dispatches export requests to them.
"""

from sindhi_translator.export.base import Renderer
from sindhi_translator.export.pdf import PdfRenderer
from sindhi_translator.export.pipeline import ExportPipeline
from sindhi_translator.export.text import PlainTextRenderer
from sindhi_translator.export.xlsx import SpreadsheetRenderer

__all__ = [
    "Renderer",
    "PdfRenderer",
    "SpreadsheetRenderer",
    "PlainTextRenderer",
    "ExportPipeline",
]
