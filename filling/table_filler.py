"""
Per-table fill algorithm.

For one template table:
  1. Parse the declared name into a ``TableCall``        (bad name → static)
  2. Look up the bound data source                       (none → static)
  3. Validate geometry, degrading optional features
  4. Snapshot band styles and the closing border
  5. Build the data matrix, categorical or positional    (all empty → static)
  6. Walk categories along the outer axis and their data along the inner
     axis, applying the fill and write behaviors cell by cell
  7. Emit the summary fields and propagate formatting

VERTICAL tables lay categories out as columns, HORIZONTAL ones as rows.
The walk is written once in axis-neutral terms: ``x`` runs over
categories, ``y`` over the data inside a category.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from data_sources.base import TableDataSource
from document.base import TemplateCell, TemplateDocument, TemplateTable
from dto.binding_context import BindingContext
from dto.fill_result import TableFillResult, TableStatus
from dto.table_call import TableCall
from dto.table_configuration import (
    BorderSection,
    ContentDirection,
    ContentStructure,
    FillBehavior,
    TableConfiguration,
    WriteBehavior,
)
from exceptions import IllegalTableCallRepresentation
from filling.styles import (
    collect_cell_styles,
    collect_last_border,
    propagate_last_border,
    propagate_styles,
)
from notation.table_call import TableCallParser
from resolution.rendering import render_value

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Cell policy
# ---------------------------------------------------------------------------

# (fill behavior, target occupied) → action
_WRITE, _SKIP, _STEP = "write", "skip", "step"

_FILL_ACTIONS: Dict[tuple, str] = {
    (FillBehavior.WRITE, False): _WRITE,
    (FillBehavior.WRITE, True): _WRITE,
    (FillBehavior.SKIP, False): _WRITE,
    (FillBehavior.SKIP, True): _SKIP,
    (FillBehavior.STEP, False): _WRITE,
    (FillBehavior.STEP, True): _STEP,
}


def _overwrite(cell: TemplateCell, text: str) -> None:
    cell.clear()
    cell.add_paragraph(text)


def _append(cell: TemplateCell, text: str) -> None:
    paragraphs = cell.paragraphs()
    if not paragraphs:
        _overwrite(cell, text)
        return
    cell.set_paragraph(len(paragraphs) - 1, paragraphs[-1] + text)


def _prepend(cell: TemplateCell, text: str) -> None:
    paragraphs = cell.paragraphs()
    if not paragraphs:
        _overwrite(cell, text)
        return
    cell.set_paragraph(0, text + paragraphs[0])


_WRITERS: Dict[WriteBehavior, Callable[[TemplateCell, str], None]] = {
    WriteBehavior.OVERWRITE: _overwrite,
    WriteBehavior.APPEND: _append,
    WriteBehavior.PREPEND: _prepend,
}


# ---------------------------------------------------------------------------
# Filler
# ---------------------------------------------------------------------------


class TableFiller:
    """
    Fills template tables of one document from a binding context.

    Usage::

        filler = TableFiller(document, context)
        for table in document.tables():
            result = filler.fill(table)
    """

    def __init__(
        self,
        document: TemplateDocument,
        context: BindingContext,
        parser: Optional[TableCallParser] = None,
    ):
        self.document = document
        self.context = context
        self.parser = parser or TableCallParser()

    def fill(self, table: TemplateTable) -> TableFillResult:
        declared_name = table.declared_name
        result = TableFillResult(declared_name=declared_name)

        try:
            call = self.parser.parse(declared_name)
        except IllegalTableCallRepresentation as exc:
            logger.warning(
                "Table name %r does not conform to table call notation, assumed to be a static table (%s)",
                declared_name,
                exc.details.get("reason"),
            )
            result.degradations.append("notation")
            return result

        result.table_name = call.table_name
        result.source_name = call.source_name

        source = self.context.data_sources.get(call.source_name)
        if source is None:
            logger.warning(
                "No matching data source '%s' was found for table '%s', assumed to be a static table",
                call.source_name,
                call.table_name,
            )
            result.degradations.append("no_data_source")
            return result

        return self._fill_bound(table, call, source, result)

    # -- steps --------------------------------------------------------

    def _validate(self, table: TemplateTable, call: TableCall, result: TableFillResult) -> TableConfiguration:
        config = call.configuration
        h_col, h_row = config.header.column, config.header.row
        n_rows, n_cols = table.row_count, table.column_count
        updates: Dict[str, Any] = {}

        if config.structure == ContentStructure.CATEGORICAL and (h_row >= n_rows or h_col >= n_cols):
            logger.error(
                "Header (%d,%d) lies outside table '%s' (%d x %d), default category order assumed",
                h_col, h_row, call.table_name, n_cols, n_rows,
            )
            updates["structure"] = ContentStructure.POSITIONAL
            result.degradations.append("forced_positional")

        offset = config.style_offset
        if offset is not None and (
            (offset.column == 0 and offset.row == 0)
            or h_row + offset.row > n_rows
            or h_col + offset.column > n_cols
        ):
            logger.error(
                "Table dimensions of '%s' do not fit style offset (%d,%d) after header (%d,%d), default cell style will be used",
                call.table_name, offset.column, offset.row, h_col, h_row,
            )
            updates["style_offset"] = None
            result.degradations.append("styles_disabled")

        border = config.last_border
        if border is not None and border.section == BorderSection.BODY and (n_rows == h_row or n_cols == h_col):
            logger.error(
                "Table '%s' has no body cells to take the closing border from, border will not be copied",
                call.table_name,
            )
            updates["last_border"] = None
            result.degradations.append("border_disabled")

        return config.model_copy(update=updates) if updates else config

    def _category_order(self, table: TemplateTable, config: TableConfiguration, table_name: str) -> List[Optional[str]]:
        """Read (and consume) category labels from the template's header cells."""
        h_col, h_row = config.header.column, config.header.row
        if config.direction == ContentDirection.VERTICAL:
            cells = table.cell_range(h_col, h_row, table.row_length(h_row) - 1, h_row)
        else:
            cells = table.cell_range(h_col, h_row, h_col, table.column_length(h_col) - 1)

        labels: List[Optional[str]] = []
        for index, cell in enumerate(cells):
            paragraphs = cell.paragraphs()
            if not paragraphs or not paragraphs[0].strip():
                logger.warning(
                    "Header cell %d of table '%s' has no category label, its category will be empty",
                    index, table_name,
                )
                labels.append(None)
                continue
            cell.remove_paragraph(0)
            labels.append(paragraphs[0].strip())
        return labels

    def _fill_bound(
        self,
        table: TemplateTable,
        call: TableCall,
        source: TableDataSource,
        result: TableFillResult,
    ) -> TableFillResult:
        config = self._validate(table, call, result)
        header = config.header

        styles = None
        if config.style_offset is not None:
            styles = collect_cell_styles(table, header, config.style_offset)

        border_found, last_border = False, None
        if config.last_border is not None:
            border_found, last_border = collect_last_border(table, header, config.last_border)
            if not border_found:
                logger.error(
                    "Table '%s' has no far header edge at header (%d,%d) to take the %s border from, border will not be copied",
                    call.table_name, header.column, header.row, config.last_border.side.value,
                )
                result.degradations.append("border_disabled")

        if config.structure == ContentStructure.CATEGORICAL:
            data = source.get_data(self._category_order(table, config, call.table_name))
        else:
            data = source.get_data()
        data = [category or [] for category in (data or [])]

        depth = max((len(category) for category in data), default=0)
        is_empty = depth == 0
        self.document.set_field(f"{call.source_name}_isEmpty", is_empty)
        if is_empty:
            logger.warning(
                "Data source for table '%s' is empty, assumed to be a static table", call.table_name
            )
            result.status = TableStatus.EMPTY
            return result
        self.document.set_field(f"{call.table_name}_dataSize", len(data))
        self.document.set_field(f"{call.table_name}_dataDepth", depth)

        n_data = self._write_data(table, config, call.table_name, data)

        result.n_row = table.row_count
        result.n_col = table.column_count
        result.n_data = n_data
        self.document.set_field(f"{call.table_name}_nRow", result.n_row)
        self.document.set_field(f"{call.table_name}_nCol", result.n_col)
        self.document.set_field(f"{call.table_name}_nData", n_data)

        if styles is not None:
            propagate_styles(table, header, config.style_offset, styles)
        if border_found:
            propagate_last_border(table, header, config.direction, last_border)

        result.status = TableStatus.FILLED
        logger.info(
            "Filled table '%s' from '%s': %d cell(s) written, now %d x %d",
            call.table_name, call.source_name, n_data, result.n_col, result.n_row,
        )
        return result

    def _write_data(
        self,
        table: TemplateTable,
        config: TableConfiguration,
        table_name: str,
        data: List[List[Any]],
    ) -> int:
        h_col, h_row = config.header.column, config.header.row
        vertical = config.direction == ContentDirection.VERTICAL
        if vertical:
            start_x, start_y = h_col, h_row
            dim_x, dim_y = table.row_length(h_row), table.column_length(h_col)
        else:
            start_x, start_y = h_row, h_col
            dim_x, dim_y = table.column_length(h_col), table.row_length(h_row)

        def cell_at(x: int, y: int) -> TemplateCell:
            return table.cell(x, y) if vertical else table.cell(y, x)

        space_x = dim_x - start_x if start_y > 0 else -1
        limit_x = len(data)
        if space_x > 0:
            if space_x < limit_x:
                limit_x = space_x
                logger.warning(
                    "Too many data categories for the space of table '%s', %d category(ies) beyond the table limits ignored",
                    table_name, len(data) - space_x,
                )
            elif space_x > limit_x:
                logger.warning(
                    "Too few data categories for the space of table '%s', the remaining space will be empty",
                    table_name,
                )

        writer = _WRITERS.get(config.write_behavior)
        n_data = 0
        for i in range(limit_x):
            x = start_x + i
            category = data[i]

            space_y = dim_y - start_y if start_x > 0 else -1
            limit_y = len(category)
            overflow_reported = False
            if 0 < space_y < limit_y:
                limit_y = space_y
                logger.warning(
                    "Data category %d has more data than the space of table '%s' allows, remaining data ignored",
                    x, table_name,
                )
                overflow_reported = True

            j, y = 0, start_y
            while j < limit_y:
                cell = cell_at(x, y)
                action = _FILL_ACTIONS.get((config.fill_behavior, cell.has_content()))

                if action == _STEP:
                    j += 1
                elif action == _SKIP:
                    # same datum retried on the next cell
                    if space_y > 0:
                        remaining = dim_y - y - 1
                        if remaining < limit_y - j:
                            limit_y = j + remaining
                            if not overflow_reported:
                                logger.warning(
                                    "Data category %d has more data than the space of table '%s' allows, remaining data ignored",
                                    x, table_name,
                                )
                                overflow_reported = True
                elif action == _WRITE and not cell.writable:
                    logger.warning(
                        "Cell (%d,%d) of table '%s' cannot be written, datum dropped",
                        x if vertical else y, y if vertical else x, table_name,
                    )
                    j += 1
                elif action == _WRITE:
                    n_data += 1
                    if writer is None:
                        logger.error("Attempted to use unimplemented write behavior: %s", config.write_behavior)
                    else:
                        writer(cell, render_value(category[j], self.context.locale))
                    j += 1
                else:
                    logger.error("Attempted to use unimplemented fill behavior: %s", config.fill_behavior)
                    j += 1
                y += 1
        return n_data
