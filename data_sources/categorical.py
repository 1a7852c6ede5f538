from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from data_sources.base import TableDataSource


class CategoricalTableData(TableDataSource):
    """
    Categories keyed by label.

    Natural order is the mapping's insertion order::

        CategoricalTableData({"name": ["Ana", "Rui"], "age": [21, 25]})
    """

    def __init__(self, data: Mapping[str, Sequence[Any]]):
        self._data: Dict[str, List[Any]] = {
            label: list(values) if values is not None else []
            for label, values in data.items()
        }

    @property
    def labels(self) -> List[str]:
        return list(self._data)

    def categories(self) -> List[List[Any]]:
        return list(self._data.values())

    def category(self, label: str) -> Optional[List[Any]]:
        return self._data.get(label)
