"""
Abstract document model consumed by the fill engine.

    TemplateDocument
      ├─ fields          named scalar slots (set_field / field_value)
      └─ tables()        TemplateTable, in document order
           └─ cell(c, r) TemplateCell: paragraphs, style, borders

Coordinates are zero-based ``(column, row)`` pairs relative to the table.
Asking a table for a cell past its edge grows the table to include it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional

from dto.table_configuration import BorderSide


class TemplateCell(ABC):
    """One grid cell holding zero or more paragraphs of text."""

    @abstractmethod
    def paragraphs(self) -> List[str]:
        ...

    @abstractmethod
    def has_content(self) -> bool:
        """True if any paragraph holds text."""
        ...

    @property
    def writable(self) -> bool:
        """False for cells that ignore text writes."""
        return True

    @abstractmethod
    def clear(self) -> None:
        ...

    @abstractmethod
    def add_paragraph(self, text: str) -> None:
        ...

    @abstractmethod
    def set_paragraph(self, index: int, text: str) -> None:
        ...

    @abstractmethod
    def remove_paragraph(self, index: int) -> None:
        ...

    @property
    @abstractmethod
    def style(self) -> Any:
        """Opaque style identity, only meaningful to ``set_style``."""
        ...

    @abstractmethod
    def set_style(self, style: Any) -> None:
        ...

    @abstractmethod
    def copy_paragraph_style(self, source: "TemplateCell") -> None:
        """Copy the paragraph properties *source* sets onto this cell."""
        ...

    @abstractmethod
    def border(self, side: BorderSide) -> Any:
        ...

    @abstractmethod
    def set_border(self, side: BorderSide, border: Any) -> None:
        ...


class TemplateTable(ABC):
    """A rectangular grid of cells with a declared name."""

    @property
    @abstractmethod
    def declared_name(self) -> Optional[str]:
        ...

    @property
    @abstractmethod
    def row_count(self) -> int:
        ...

    @property
    @abstractmethod
    def column_count(self) -> int:
        ...

    @abstractmethod
    def row_length(self, row: int) -> int:
        """Number of cells in *row*."""
        ...

    @abstractmethod
    def column_length(self, column: int) -> int:
        """Number of cells in *column*."""
        ...

    @abstractmethod
    def cell(self, column: int, row: int) -> TemplateCell:
        ...

    def cell_range(self, start_column: int, start_row: int, end_column: int, end_row: int) -> List[TemplateCell]:
        """Cells of the inclusive rectangle, column by column."""
        return [
            self.cell(column, row)
            for column in range(start_column, end_column + 1)
            for row in range(start_row, end_row + 1)
        ]


class TemplateDocument(ABC):
    """A fillable document: named fields plus tables."""

    @abstractmethod
    def tables(self) -> List[TemplateTable]:
        ...

    @abstractmethod
    def field_names(self) -> Iterable[str]:
        ...

    @abstractmethod
    def set_field(self, name: str, value: Any) -> None:
        """Create or overwrite the field *name*."""
        ...

    @abstractmethod
    def field_value(self, name: str) -> Any:
        """Return the value stored in field *name*, or ``None``."""
        ...
