"""Shared fixtures: small in-memory workbooks with declared tables."""

from typing import List, Optional, Sequence

import pytest
from openpyxl import Workbook
from openpyxl.worksheet.table import Table

from document.workbook import WorkbookDocument, WorksheetTable
from dto.binding_context import BindingContext


def add_table(
    worksheet,
    ref: str,
    display_name: str,
    declared_name: Optional[str] = None,
    rows: Optional[Sequence[Sequence[object]]] = None,
) -> Table:
    """
    Add a table over *ref*, declared through its comment when
    *declared_name* is given, and write *rows* from its top-left cell.
    """
    table = Table(displayName=display_name, ref=ref, comment=declared_name)
    worksheet.add_table(table)
    if rows:
        first = worksheet[ref.split(":")[0]]
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                worksheet.cell(row=first.row + r, column=first.column + c, value=value)
    return table


def column_values(table: WorksheetTable, column: int) -> List[object]:
    return [table.cell(column, row).cell.value for row in range(table.row_count)]


def row_values(table: WorksheetTable, row: int) -> List[object]:
    return [table.cell(column, row).cell.value for column in range(table.column_count)]


@pytest.fixture
def workbook():
    wb = Workbook()
    wb.active.title = "Sheet"
    return wb


@pytest.fixture
def worksheet(workbook):
    return workbook.active


@pytest.fixture
def document(workbook):
    return WorkbookDocument(workbook)


@pytest.fixture
def context():
    return BindingContext()
