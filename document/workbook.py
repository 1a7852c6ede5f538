"""
openpyxl rendition of the template document model.

    Workbook            → WorkbookDocument
      defined names     → fields (workbook-scoped names holding a constant)
      worksheet tables  → WorksheetTable, worksheets in order
        cells           → WorksheetCell, text lines as paragraphs

A table is declared by its ``comment`` when set, otherwise by its
``displayName`` (Excel forbids brackets and braces in display names, so
table calls with a source or options live in the comment).

Growing a table past its bottom or right edge inserts whole sheet rows or
columns right after it, then moves the ranges openpyxl does not move on
its own: the table itself, other tables and merged ranges further down or
right.
"""

from __future__ import annotations

import logging
import re
from copy import copy
from typing import Any, List, Optional

from openpyxl.cell.cell import MergedCell
from openpyxl.styles import Side
from openpyxl.utils import range_boundaries
from openpyxl.workbook.defined_name import DefinedName
from openpyxl.worksheet.cell_range import CellRange
from openpyxl.worksheet.table import Table, TableColumn

from document.base import TemplateCell, TemplateDocument, TemplateTable
from dto.table_configuration import BorderSide

logger = logging.getLogger(__name__)

PARAGRAPH_SEPARATOR = "\n"

_FONT_PROPERTIES = (
    "name", "sz", "b", "i", "u", "strike", "color", "vertAlign", "charset",
    "outline", "shadow", "condense", "extend", "family", "scheme",
)
_ALIGNMENT_PROPERTIES = (
    "horizontal", "vertical", "textRotation", "wrapText", "shrinkToFit",
    "indent", "relativeIndent", "justifyLastLine", "readingOrder",
)


# ---------------------------------------------------------------------------
# Field constants
# ---------------------------------------------------------------------------

_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

_NOT_A_CONSTANT = object()


def encode_constant(value: Any) -> str:
    """Return the defined-name formula text storing *value*."""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float)):
        return str(value)
    text = "" if value is None else str(value)
    return '"' + text.replace('"', '""') + '"'


def decode_constant(text: Optional[str]) -> Any:
    """
    Return the value of a constant defined-name formula.

    Returns ``_NOT_A_CONSTANT`` for ranges, formulas and anything else
    that is not a plain text, number or boolean literal.
    """
    if text is None:
        return _NOT_A_CONSTANT
    text = text.strip()
    if text.startswith("="):
        text = text[1:].strip()

    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        inner = text[1:-1]
        if '"' in inner.replace('""', ""):
            return _NOT_A_CONSTANT
        return inner.replace('""', '"')
    if text.upper() in ("TRUE", "FALSE"):
        return text.upper() == "TRUE"
    if _NUMBER_RE.match(text):
        if any(ch in text for ch in ".eE"):
            return float(text)
        return int(text)
    return _NOT_A_CONSTANT


# ---------------------------------------------------------------------------
# Cells
# ---------------------------------------------------------------------------


class WorksheetCell(TemplateCell):
    """
    Wraps an openpyxl cell.

    Merged cells other than the top-left anchor report content so they are
    never picked as write targets, and ignore every text write.
    """

    def __init__(self, cell):
        self.cell = cell

    def __repr__(self) -> str:
        return f"<WorksheetCell {self.cell.parent.title}!{self.cell.coordinate}>"

    @property
    def is_merged(self) -> bool:
        return isinstance(self.cell, MergedCell)

    @property
    def writable(self) -> bool:
        return not self.is_merged

    # -- text ---------------------------------------------------------

    def paragraphs(self) -> List[str]:
        value = self.cell.value
        if value is None:
            return []
        return str(value).split(PARAGRAPH_SEPARATOR)

    def has_content(self) -> bool:
        if self.is_merged:
            return True
        return any(self.paragraphs())

    def _write(self, paragraphs: List[str]) -> None:
        if self.is_merged:
            logger.warning("Ignoring write to merged cell %s", self.cell.coordinate)
            return
        self.cell.value = PARAGRAPH_SEPARATOR.join(paragraphs) if paragraphs else None

    def clear(self) -> None:
        self._write([])

    def add_paragraph(self, text: str) -> None:
        self._write(self.paragraphs() + [text])

    def set_paragraph(self, index: int, text: str) -> None:
        paragraphs = self.paragraphs()
        paragraphs[index] = text
        self._write(paragraphs)

    def remove_paragraph(self, index: int) -> None:
        paragraphs = self.paragraphs()
        del paragraphs[index]
        self._write(paragraphs)

    # -- formatting ---------------------------------------------------

    # openpyxl keeps no public handle on the whole style array, which is
    # the cell's style identity
    @property
    def style(self) -> Any:
        return copy(self.cell._style) if self.cell._style is not None else None

    def set_style(self, style: Any) -> None:
        self.cell._style = copy(style) if style is not None else None

    def copy_paragraph_style(self, source: TemplateCell) -> None:
        src = source.cell

        font = copy(self.cell.font)
        for prop in _FONT_PROPERTIES:
            value = getattr(src.font, prop)
            if value is not None:
                setattr(font, prop, copy(value))
        self.cell.font = font

        alignment = copy(self.cell.alignment)
        for prop in _ALIGNMENT_PROPERTIES:
            value = getattr(src.alignment, prop)
            if value is not None:
                setattr(alignment, prop, value)
        self.cell.alignment = alignment

    def border(self, side: BorderSide) -> Optional[Side]:
        value = getattr(self.cell.border, BorderSide(side).value)
        return copy(value) if value is not None else None

    def set_border(self, side: BorderSide, border: Optional[Side]) -> None:
        updated = copy(self.cell.border)
        setattr(updated, BorderSide(side).value, copy(border) if border is not None else Side())
        self.cell.border = updated


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


def _set_table_ref(table: Table, ref: str) -> None:
    table.ref = ref
    if table.autoFilter is not None and table.autoFilter.ref:
        table.autoFilter.ref = ref


def _add_table_columns(table: Table, amount: int) -> None:
    # tables without columns get them from the header row on save
    if not table.tableColumns:
        return
    names = {column.name for column in table.tableColumns}
    next_id = max(column.id for column in table.tableColumns) + 1
    for _ in range(amount):
        name = f"Column{next_id}"
        while name in names:
            next_id += 1
            name = f"Column{next_id}"
        table.tableColumns.append(TableColumn(id=next_id, name=name))
        names.add(name)
        next_id += 1


def _shift_merged_ranges(worksheet, selects, row_shift: int = 0, col_shift: int = 0) -> None:
    # ranges are hashed by position, so take them out of the set to move them
    moving = [merged for merged in worksheet.merged_cells.ranges if selects(merged)]
    for merged in moving:
        worksheet.merged_cells.remove(merged)
        merged.shift(col_shift=col_shift, row_shift=row_shift)
        worksheet.merged_cells.add(merged)


class WorksheetTable(TemplateTable):
    """Wraps an openpyxl worksheet table."""

    def __init__(self, worksheet, table: Table):
        self.worksheet = worksheet
        self.table = table

    def __repr__(self) -> str:
        return f"<WorksheetTable {self.table.displayName} {self.worksheet.title}!{self.table.ref}>"

    @property
    def declared_name(self) -> Optional[str]:
        return self.table.comment or self.table.displayName

    @property
    def _bounds(self):
        return range_boundaries(self.table.ref)

    @property
    def row_count(self) -> int:
        _, min_row, _, max_row = self._bounds
        return max_row - min_row + 1

    @property
    def column_count(self) -> int:
        min_col, _, max_col, _ = self._bounds
        return max_col - min_col + 1

    def row_length(self, row: int) -> int:
        return self.column_count

    def column_length(self, column: int) -> int:
        return self.row_count

    def cell(self, column: int, row: int) -> WorksheetCell:
        if column < 0 or row < 0:
            raise IndexError(f"Negative table coordinate ({column}, {row})")
        if row >= self.row_count:
            self._grow_rows(row + 1 - self.row_count)
        if column >= self.column_count:
            self._grow_columns(column + 1 - self.column_count)
        min_col, min_row, _, _ = self._bounds
        return WorksheetCell(self.worksheet.cell(row=min_row + row, column=min_col + column))

    # -- growth -------------------------------------------------------

    def _grow_rows(self, amount: int) -> None:
        min_col, min_row, max_col, max_row = self._bounds
        logger.debug("Growing table %s by %d row(s)", self.table.displayName, amount)
        self.worksheet.insert_rows(max_row + 1, amount)

        for other in self.worksheet.tables.values():
            if other is self.table:
                continue
            cr = CellRange(other.ref)
            if cr.min_row > max_row:
                cr.shift(row_shift=amount)
            elif cr.max_row > max_row:
                cr.expand(down=amount)
            else:
                continue
            _set_table_ref(other, cr.coord)

        _shift_merged_ranges(self.worksheet, lambda merged: merged.min_row > max_row, row_shift=amount)

        grown = CellRange(min_col=min_col, min_row=min_row, max_col=max_col, max_row=max_row + amount)
        _set_table_ref(self.table, grown.coord)

    def _grow_columns(self, amount: int) -> None:
        min_col, min_row, max_col, max_row = self._bounds
        logger.debug("Growing table %s by %d column(s)", self.table.displayName, amount)
        self.worksheet.insert_cols(max_col + 1, amount)

        for other in self.worksheet.tables.values():
            if other is self.table:
                continue
            cr = CellRange(other.ref)
            if cr.min_col > max_col:
                cr.shift(col_shift=amount)
            elif cr.max_col > max_col:
                cr.expand(right=amount)
                _add_table_columns(other, amount)
            else:
                continue
            _set_table_ref(other, cr.coord)

        _shift_merged_ranges(self.worksheet, lambda merged: merged.min_col > max_col, col_shift=amount)

        grown = CellRange(min_col=min_col, min_row=min_row, max_col=max_col + amount, max_row=max_row)
        _set_table_ref(self.table, grown.coord)
        _add_table_columns(self.table, amount)


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


class WorkbookDocument(TemplateDocument):
    """
    Usage::

        document = WorkbookDocument(openpyxl.load_workbook("template.xlsx"))
        for table in document.tables():
            print(table.declared_name, table.row_count, table.column_count)
    """

    def __init__(self, workbook):
        self.workbook = workbook

    def tables(self) -> List[WorksheetTable]:
        return [
            WorksheetTable(worksheet, table)
            for worksheet in self.workbook.worksheets
            for table in worksheet.tables.values()
        ]

    def field_names(self) -> List[str]:
        names = []
        for name, defined_name in self.workbook.defined_names.items():
            if defined_name.is_reserved:
                continue
            if decode_constant(defined_name.value) is _NOT_A_CONSTANT:
                continue
            names.append(name)
        return names

    def set_field(self, name: str, value: Any) -> None:
        self.workbook.defined_names[name] = DefinedName(name, attr_text=encode_constant(value))

    def field_value(self, name: str) -> Any:
        defined_name = self.workbook.defined_names.get(name)
        if defined_name is None:
            return None
        value = decode_constant(defined_name.value)
        return None if value is _NOT_A_CONSTANT else value
