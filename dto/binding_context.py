"""
Everything a fill reads from the caller: scalar parameters, named table
data sources, and the rendering locale.

The context is immutable.  Every ``with_*`` / ``without_*`` call returns a
new context, so a context captured at the start of a fill can never change
underneath it.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel

from data_sources.base import TableDataSource
from exceptions import IllegalTemplateDataSourceName, IllegalTemplateParameterName
from notation.names import is_valid_parameter_name, is_valid_source_name
from resolution.constants import ATTRIBUTE_SEPARATOR, DEFAULT_LOCALE


class BindingContext(BaseModel):
    parameters: Dict[str, Any] = {}
    data_sources: Dict[str, TableDataSource] = {}
    locale: str = DEFAULT_LOCALE

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    # -- parameters ---------------------------------------------------

    def with_parameter(self, name: str, value: Any, separator: str = ATTRIBUTE_SEPARATOR) -> "BindingContext":
        if not is_valid_parameter_name(name, separator):
            raise IllegalTemplateParameterName(name)
        return self.model_copy(update={"parameters": {**self.parameters, name: value}})

    def without_parameter(self, name: str) -> "BindingContext":
        parameters = {k: v for k, v in self.parameters.items() if k != name}
        return self.model_copy(update={"parameters": parameters})

    def without_parameters(self, names: Optional[Iterable[str]] = None) -> "BindingContext":
        """Drop the given parameters, or all of them when *names* is None."""
        if names is None:
            return self.model_copy(update={"parameters": {}})
        dropped = set(names)
        parameters = {k: v for k, v in self.parameters.items() if k not in dropped}
        return self.model_copy(update={"parameters": parameters})

    # -- data sources -------------------------------------------------

    def with_data_source(
        self,
        name: str,
        source: TableDataSource,
        separator: str = ATTRIBUTE_SEPARATOR,
    ) -> "BindingContext":
        if not is_valid_source_name(name, separator):
            raise IllegalTemplateDataSourceName(name)
        if not isinstance(source, TableDataSource):
            raise TypeError(f"Expected a TableDataSource for {name!r}, got {type(source).__name__}")
        return self.model_copy(update={"data_sources": {**self.data_sources, name: source}})

    def without_data_source(self, name: str) -> "BindingContext":
        sources = {k: v for k, v in self.data_sources.items() if k != name}
        return self.model_copy(update={"data_sources": sources})

    def without_data_sources(self, names: Optional[Iterable[str]] = None) -> "BindingContext":
        """Drop the given data sources, or all of them when *names* is None."""
        if names is None:
            return self.model_copy(update={"data_sources": {}})
        dropped = set(names)
        sources = {k: v for k, v in self.data_sources.items() if k not in dropped}
        return self.model_copy(update={"data_sources": sources})

    # -- locale -------------------------------------------------------

    def with_locale(self, locale: str) -> "BindingContext":
        return self.model_copy(update={"locale": locale})
