from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from data_sources.base import TableDataSource
from exceptions import AttributeChainResolutionFailure
from resolution.attribute_chain import AttributeResolver

logger = logging.getLogger(__name__)


class ObjectTableData(TableDataSource):
    """
    Categories read from a list of application objects.

    Each category is an attribute path resolved against every object, so
    ``ObjectTableData(people, ["name", "address.city"])`` yields one
    category of names and one of cities.  Categories are labelled by their
    attribute path.
    """

    def __init__(
        self,
        objects: Sequence[Any],
        categories: Sequence[str],
        resolver: Optional[AttributeResolver] = None,
    ):
        self.objects = list(objects)
        self.paths = list(categories)
        self.resolver = resolver or AttributeResolver()

    def _resolve_category(self, path: str) -> Optional[List[Any]]:
        values: List[Any] = []
        failures = 0
        for index, obj in enumerate(self.objects):
            try:
                values.append(self.resolver.resolve(obj, path))
            except AttributeChainResolutionFailure as exc:
                logger.warning(
                    "Could not resolve '%s' on object %d: %s", path, index, exc.message
                )
                values.append(None)
                failures += 1

        if self.objects and failures == len(self.objects):
            return None
        return values

    def categories(self) -> List[List[Any]]:
        return [self._resolve_category(path) or [] for path in self.paths]

    def category(self, label: str) -> Optional[List[Any]]:
        if label not in self.paths:
            return None
        return self._resolve_category(label)
