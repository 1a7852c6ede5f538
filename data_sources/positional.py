from __future__ import annotations

from itertools import zip_longest
from typing import Any, List, Optional, Sequence

from data_sources.base import TableDataSource


class PositionalTableData(TableDataSource):
    """
    Categories given in order, optionally labelled.

    Without labels the source can only be read in natural order; every
    label lookup yields an empty category.
    """

    def __init__(
        self,
        categories: Sequence[Sequence[Any]],
        labels: Optional[Sequence[str]] = None,
    ):
        self._categories: List[List[Any]] = [
            list(values) if values is not None else [] for values in categories
        ]
        if labels is not None and len(labels) != len(self._categories):
            raise ValueError(
                f"Got {len(labels)} label(s) for {len(self._categories)} categories"
            )
        self._labels: List[str] = list(labels) if labels is not None else []

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[Any]],
        labels: Optional[Sequence[str]] = None,
    ) -> "PositionalTableData":
        """
        Build a source from row-major records, one category per field.

        Short records are padded with ``None``.
        """
        categories = [list(column) for column in zip_longest(*rows)]
        return cls(categories, labels=labels)

    def categories(self) -> List[List[Any]]:
        return self._categories

    def category(self, label: str) -> Optional[List[Any]]:
        if label in self._labels:
            return self._categories[self._labels.index(label)]
        return None
