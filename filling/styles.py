"""
Formatting propagation for filled tables.

Style sources form an L-shaped band right after the header coordinate:
the first ``sCol`` columns and the first ``sRow`` rows of the body.  Every
body cell is mapped back onto that band periodically:

    sCol == 0   rows repeat every sRow            (i, j % sRow + hRow)
    sRow == 0   columns repeat every sCol         (i % sCol + hCol, j)
    otherwise   step back diagonally by whole periods until inside the band

Both the band styles and the closing border are snapshotted before the
first write, since growing the grid shifts formatting around.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from document.base import TemplateTable
from dto.coordinate import TableCoordinate
from dto.table_configuration import (
    BorderSection,
    BorderSide,
    ContentDirection,
    LastBorderSource,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Cell styles
# ---------------------------------------------------------------------------


def collect_cell_styles(
    table: TemplateTable,
    header: TableCoordinate,
    style_offset: TableCoordinate,
) -> Dict[str, Any]:
    """Snapshot the style of every style-source cell, keyed by coordinate key."""
    h_col, h_row = header.column, header.row
    s_col, s_row = style_offset.column, style_offset.row

    styles: Dict[str, Any] = {}
    for i in range(h_col, table.column_count):
        for j in range(h_row, table.row_count):
            in_band = (s_col and i - h_col < s_col) or (s_row and j - h_row < s_row)
            if in_band:
                styles[TableCoordinate(column=i, row=j).key] = table.cell(i, j).style
    return styles


def style_source_coordinate(
    column: int,
    row: int,
    header: TableCoordinate,
    style_offset: TableCoordinate,
) -> TableCoordinate:
    h_col, h_row = header.column, header.row
    s_col, s_row = style_offset.column, style_offset.row

    if s_col == 0:
        return TableCoordinate(column=column, row=row % s_row + h_row)
    if s_row == 0:
        return TableCoordinate(column=column % s_col + h_col, row=row)
    jumps = min((column - h_col) // s_col, (row - h_row) // s_row)
    return TableCoordinate(column=column - jumps * s_col, row=row - jumps * s_row)


def propagate_styles(
    table: TemplateTable,
    header: TableCoordinate,
    style_offset: TableCoordinate,
    styles: Dict[str, Any],
) -> int:
    """
    Apply snapshotted styles to every body cell from the header to the
    table end.  Returns the number of styled cells.

    Band cells also map onto the band, so they are restyled last: the
    paragraph style of the other cells is copied from the band while it is
    still untouched, and the band itself only takes the snapshot.
    """
    band = []
    styled = 0
    for i in range(header.column, table.column_count):
        for j in range(header.row, table.row_count):
            source = style_source_coordinate(i, j, header, style_offset)
            if source.key not in styles:
                continue
            if TableCoordinate(column=i, row=j).key in styles:
                band.append((i, j, source))
                continue
            cell = table.cell(i, j)
            cell.set_style(styles[source.key])
            cell.copy_paragraph_style(table.cell(source.column, source.row))
            styled += 1

    for i, j, source in band:
        table.cell(i, j).set_style(styles[source.key])
        styled += 1
    return styled


# ---------------------------------------------------------------------------
# Closing border
# ---------------------------------------------------------------------------


def collect_last_border(
    table: TemplateTable,
    header: TableCoordinate,
    source: LastBorderSource,
) -> Tuple[bool, Optional[Any]]:
    """
    Resolve the closing border descriptor.

    Returns ``(found, border)``; ``found`` is False when the configuration
    names a header edge the table does not have.
    """
    h_col, h_row = header.column, header.row
    side = source.side
    leading = side in (BorderSide.LEFT, BorderSide.TOP)

    if source.section == BorderSection.HEADER:
        if leading:
            return True, table.cell(0, 0).border(side)
        if h_col != 0 and h_row != 0:
            return False, None
        column = (h_col or table.column_count) - 1
        row = (h_row or table.row_count) - 1
        return True, table.cell(column, row).border(side)

    if leading:
        return True, table.cell(h_col, h_row).border(side)
    return True, table.cell(table.column_count - 1, table.row_count - 1).border(side)


def propagate_last_border(
    table: TemplateTable,
    header: TableCoordinate,
    direction: ContentDirection,
    border: Any,
) -> int:
    """Set *border* on the trailing edge of the filled region."""
    last_column = table.column_count - 1
    last_row = table.row_count - 1

    if direction == ContentDirection.VERTICAL:
        side = BorderSide.BOTTOM
        cells = table.cell_range(header.column, last_row, last_column, last_row)
    else:
        side = BorderSide.RIGHT
        cells = table.cell_range(last_column, header.row, last_column, last_row)

    for cell in cells:
        cell.set_border(side, border)
    logger.debug("Closing %s border applied to %d cell(s)", side.value, len(cells))
    return len(cells)
