"""
Spreadsheet (XLSX) exporter.

Writes one header row with the field labels and one data row with the
field values. Right-to-left fields are flagged with RTL reading order and
right-aligned; the others are left-aligned.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from sindhi_translator.export.base import Renderer
from sindhi_translator.models import DEFAULT_FIELDS, ExportFormat, RecordField, TranslationRecord

# Excel reading order values (0 = context, 1 = left-to-right, 2 = right-to-left)
READING_ORDER_LTR = 1
READING_ORDER_RTL = 2

COLUMN_WIDTH = 40
HEADER_ROW_HEIGHT = 25
DATA_ROW_HEIGHT = 60

# Color scheme
HEADER_FONT = Font(bold=True, size=14, color="FFFFFFFF")
HEADER_FILL = PatternFill(fill_type="solid", fgColor="FF2980B9")
DATA_FONT = Font(size=12)
_THIN = Side(style="thin")
CELL_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)


class SpreadsheetRenderer(Renderer):
    """Exports records to a single-sheet workbook."""

    format = ExportFormat.SPREADSHEET

    def __init__(
        self,
        fields: Sequence[RecordField] = DEFAULT_FIELDS,
        *,
        sheet_name: str = "Translations",
    ) -> None:
        super().__init__(fields)
        self.sheet_name = sheet_name

    def build_workbook(self, record: TranslationRecord) -> Workbook:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = self.sheet_name

        for column, field in enumerate(self.fields, start=1):
            sheet.column_dimensions[get_column_letter(column)].width = COLUMN_WIDTH

            header = sheet.cell(row=1, column=column, value=field.label)
            header.font = HEADER_FONT
            header.fill = HEADER_FILL
            header.alignment = Alignment(horizontal="center", vertical="center")
            header.border = CELL_BORDER

            cell = sheet.cell(row=2, column=column)
            cell.value = ILLEGAL_CHARACTERS_RE.sub("", field.text_for(record))
            # Text beginning with "=" must stay text, not become a formula
            if cell.data_type == "f":
                cell.data_type = "s"
            cell.font = DATA_FONT
            cell.border = CELL_BORDER
            if field.is_rtl:
                cell.alignment = Alignment(
                    horizontal="right",
                    vertical="top",
                    wrap_text=True,
                    readingOrder=READING_ORDER_RTL,
                )
            else:
                cell.alignment = Alignment(
                    horizontal="left",
                    vertical="top",
                    wrap_text=True,
                    readingOrder=READING_ORDER_LTR,
                )

        sheet.row_dimensions[1].height = HEADER_ROW_HEIGHT
        sheet.row_dimensions[2].height = DATA_ROW_HEIGHT
        return workbook

    def write(self, record: TranslationRecord, path: Path, generated_at: datetime) -> None:
        workbook = self.build_workbook(record)
        workbook.properties.created = generated_at
        workbook.save(path)
