"""
PDF exporter for translation records.

Uses markdown-pdf (PyMuPDF Story) for PDF generation. Right-to-left fields
are set in a script-appropriate font loaded from the fonts directory when
one is available; otherwise they fall back to the default font, left-aligned.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Mapping, Sequence
from datetime import datetime
from pathlib import Path

from markdown_pdf import MarkdownPdf, Section

from sindhi_translator.export.base import Renderer, generated_line
from sindhi_translator.models import DEFAULT_FIELDS, ExportFormat, RecordField, TranslationRecord
from sindhi_translator.styling.fonts import (
    FontCapability,
    FontResolver,
    ScriptType,
    get_script_for_language,
)

logger = logging.getLogger(__name__)

BASE_CSS = """
@page {
    size: A4;
    margin: 50px;
}

body {
    font-family: sans-serif;
    color: #000000;
}

h1 {
    font-size: 20pt;
    color: #2c3e50;
    text-align: center;
    margin-bottom: 12px;
}

hr {
    border: none;
    border-top: 2px solid #3498db;
    margin: 12px 0 18px 0;
}

.label {
    font-family: sans-serif;
    font-size: 16pt;
    color: #2980b9;
    text-decoration: underline;
    margin-top: 18px;
    margin-bottom: 4px;
}

.field {
    font-size: 14pt;
    line-height: 1.4;
}

.ltr {
    font-family: sans-serif;
    text-align: left;
    direction: ltr;
}

.generated {
    font-family: sans-serif;
    font-size: 10pt;
    color: #7f8c8d;
    text-align: center;
    margin-top: 30px;
}
"""


def _escape_block(text: str) -> str:
    """Escape text for a single-line HTML block (no blank lines allowed)."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return html.escape(text).replace("\n", "<br>")


class PdfRenderer(Renderer):
    """
    Exports records to PDF files.

    Layout: centered title, horizontal rule, one underlined label and text
    block per field, centered generation timestamp.
    """

    format = ExportFormat.PDF

    def __init__(
        self,
        fields: Sequence[RecordField] = DEFAULT_FIELDS,
        *,
        font_resolver: FontResolver | None = None,
        title: str = "Translation Export",
        page_size: str = "A4",
    ) -> None:
        """
        Initialize the PDF exporter.

        Args:
            fields: Field layout in export order.
            font_resolver: Resolver for right-to-left font assets. Without one,
                every field uses the default font.
            title: Document title.
            page_size: Paper size name understood by PyMuPDF.
        """
        super().__init__(fields)
        self.font_resolver = font_resolver
        self.title = title
        self.page_size = page_size

    def resolve_fonts(self) -> dict[ScriptType, FontCapability]:
        """Resolve fonts for the scripts of all right-to-left fields."""
        capabilities: dict[ScriptType, FontCapability] = {}
        if self.font_resolver is None:
            return capabilities
        for field in self.fields:
            if not field.is_rtl:
                continue
            script = get_script_for_language(field.language)
            if script not in capabilities:
                capabilities[script] = self.font_resolver.resolve(script)
        return capabilities

    def _field_css(self, capabilities: Mapping[ScriptType, FontCapability]) -> str:
        css = ""
        for capability in capabilities.values():
            if not capability.available or capability.asset_path is None:
                continue
            css += f"""
@font-face {{
    font-family: '{capability.family}';
    src: url({capability.asset_path.name});
}}

.rtl-{capability.script_name} {{
    font-family: '{capability.family}', sans-serif;
    text-align: right;
    direction: rtl;
}}
"""
        return css

    def _field_block(
        self,
        field: RecordField,
        record: TranslationRecord,
        capabilities: Mapping[ScriptType, FontCapability],
    ) -> str:
        text = _escape_block(field.text_for(record))
        if field.is_rtl:
            capability = capabilities.get(get_script_for_language(field.language))
            if capability is not None and capability.available:
                return (
                    f'<div class="field rtl-{capability.script_name}" dir="rtl">{text}</div>'
                )
        return f'<div class="field ltr">{text}</div>'

    def build_markdown(
        self,
        record: TranslationRecord,
        generated_at: datetime,
        capabilities: Mapping[ScriptType, FontCapability],
    ) -> str:
        """Build the markdown (with inline HTML blocks) for one record."""
        parts = [f"# {self.title}", "---"]
        for field in self.fields:
            parts.append(f'<p class="label">{html.escape(field.label)}:</p>')
            parts.append(self._field_block(field, record, capabilities))
        parts.append(f'<p class="generated">{generated_line(generated_at)}</p>')
        return "\n\n".join(parts) + "\n"

    def _build_pdf(
        self,
        record: TranslationRecord,
        generated_at: datetime,
        capabilities: Mapping[ScriptType, FontCapability],
    ) -> MarkdownPdf:
        root = "."
        if self.font_resolver is not None and any(c.available for c in capabilities.values()):
            root = str(self.font_resolver.fonts_dir)

        pdf = MarkdownPdf(toc_level=0)
        pdf.add_section(
            Section(
                self.build_markdown(record, generated_at, capabilities),
                toc=False,
                root=root,
                paper_size=self.page_size,
            ),
            user_css=BASE_CSS + self._field_css(capabilities),
        )
        pdf.meta["title"] = self.title
        pdf.meta["author"] = "sindhi-translator"
        return pdf

    def write(self, record: TranslationRecord, path: Path, generated_at: datetime) -> None:
        capabilities = self.resolve_fonts()
        for capability in capabilities.values():
            logger.debug(
                "PDF font for %s script: %s",
                capability.script_name,
                capability.asset_path if capability.available else "default (missing)",
            )

        try:
            pdf = self._build_pdf(record, generated_at, capabilities)
        except Exception as e:
            if not any(c.available for c in capabilities.values()):
                raise
            # A broken font file must not block the export
            logger.warning("Custom font failed (%s); using default font", e)
            pdf = self._build_pdf(record, generated_at, {})

        pdf.save(str(path))
