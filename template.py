"""
Workbook template.

A ``Template`` holds the bytes of an authored workbook and the binding
context (parameters, table data sources, locale) to fill it with.  Every
instance is filled on a freshly loaded copy of the workbook, so one
template can produce any number of instances.

Usage::

    template = Template("report.xlsx", locale="pt_PT")
    template.add_parameter("title", "Person Registry")
    template.add_table_data_source("person", CategoricalTableData({...}))
    template.save_instance("report_filled.xlsx")
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional, Tuple, Union

import openpyxl
from openpyxl import Workbook

from data_sources.base import TableDataSource
from document.workbook import WorkbookDocument
from dto.binding_context import BindingContext
from dto.fill_result import DocumentFillResult
from exceptions import DocumentLoadError, DocumentSaveError
from filling.document_filler import DocumentFiller
from resolution.attribute_chain import AttributeResolver

logger = logging.getLogger(__name__)

DocumentSource = Union[str, Path, bytes, BinaryIO]


def _read_source(source: DocumentSource) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, (str, Path)):
        return Path(source).read_bytes()
    return source.read()


class Template:
    def __init__(
        self,
        source: Optional[DocumentSource] = None,
        locale: Optional[str] = None,
        context: Optional[BindingContext] = None,
        resolver: Optional[AttributeResolver] = None,
    ):
        self._document: Optional[bytes] = None
        self.resolver = resolver or AttributeResolver()
        self.context = context or BindingContext()
        if locale is not None:
            self.context = self.context.with_locale(locale)
        if source is not None:
            self.set_document(source)

    # -- document -----------------------------------------------------

    def set_document(self, source: DocumentSource) -> None:
        """
        Read the template workbook from a path, bytes or binary stream.

        The workbook is parsed once here so a broken template fails early.
        """
        try:
            data = _read_source(source)
            openpyxl.load_workbook(BytesIO(data)).close()
        except Exception as exc:
            raise DocumentLoadError(
                f"Could not read template workbook: {exc}",
                details={"source": str(source) if isinstance(source, (str, Path)) else type(source).__name__},
            ) from exc
        self._document = data
        logger.info("Loaded template workbook (%d bytes)", len(data))

    @property
    def document(self) -> Optional[bytes]:
        return self._document

    # -- binding context ----------------------------------------------

    @property
    def locale(self) -> str:
        return self.context.locale

    def set_locale(self, locale: str) -> None:
        self.context = self.context.with_locale(locale)

    @property
    def parameters(self) -> Dict[str, Any]:
        return dict(self.context.parameters)

    @property
    def table_data_sources(self) -> Dict[str, TableDataSource]:
        return dict(self.context.data_sources)

    def add_parameter(self, name: str, value: Any) -> None:
        self.context = self.context.with_parameter(name, value, self.resolver.separator)

    def add_parameters(self, parameters: Dict[str, Any]) -> None:
        context = self.context
        for name, value in parameters.items():
            context = context.with_parameter(name, value, self.resolver.separator)
        self.context = context

    def remove_parameter(self, name: str) -> None:
        self.context = self.context.without_parameter(name)

    def clear_parameters(self) -> None:
        self.context = self.context.without_parameters()

    def add_table_data_source(self, name: str, source: TableDataSource) -> None:
        self.context = self.context.with_data_source(name, source, self.resolver.separator)

    def remove_table_data_source(self, name: str) -> None:
        self.context = self.context.without_data_source(name)

    def clear_table_data_sources(self) -> None:
        self.context = self.context.without_data_sources()

    # -- instances ----------------------------------------------------

    def instantiate(self) -> Tuple[Workbook, DocumentFillResult]:
        """Fill a fresh copy of the template and return it with its fill report."""
        if self._document is None:
            raise DocumentLoadError("No template workbook has been set")

        context = self.context
        try:
            workbook = openpyxl.load_workbook(BytesIO(self._document))
        except Exception as exc:
            raise DocumentLoadError(f"Could not read template workbook: {exc}") from exc

        report = DocumentFiller(context, self.resolver).fill(WorkbookDocument(workbook))
        return workbook, report

    def get_instance(self) -> Workbook:
        workbook, _ = self.instantiate()
        return workbook

    def get_instance_bytes(self) -> bytes:
        buffer = BytesIO()
        self.save_instance(buffer)
        return buffer.getvalue()

    def save_instance(self, destination: Union[str, Path, BinaryIO]) -> DocumentFillResult:
        workbook, report = self.instantiate()
        try:
            workbook.save(destination)
        except Exception as exc:
            raise DocumentSaveError(
                f"Could not write filled workbook: {exc}",
                details={"destination": str(destination) if isinstance(destination, (str, Path)) else type(destination).__name__},
            ) from exc
        logger.info("Filled workbook written to %s", destination)
        return report
