"""
Base class for all table data sources.

A data source produces *categories*: ordered lists of cell values, each
bound to one position along a table's primary axis (one column when the
table is filled vertically, one row when filled horizontally).  It answers
two questions:
  1. **get_data()** — every category, in the source's natural order.
  2. **get_data(labels)** — one category per label, in label order.
     Labels the source does not know (and ``None`` labels) yield an empty
     category, so the result always lines up with the template's headers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence


class TableDataSource(ABC):
    """Interface that every table data source must implement."""

    @abstractmethod
    def categories(self) -> List[List[Any]]:
        """Return all categories in natural order."""
        ...

    @abstractmethod
    def category(self, label: str) -> Optional[List[Any]]:
        """Return the category named *label*, or ``None`` if there is none."""
        ...

    def get_data(self, category_order: Optional[Sequence[Optional[str]]] = None) -> List[List[Any]]:
        if category_order is None:
            return [list(values) for values in self.categories()]

        data: List[List[Any]] = []
        for label in category_order:
            values = self.category(label) if label is not None else None
            data.append(list(values) if values is not None else [])
        return data
