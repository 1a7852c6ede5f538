"""
Whole-document fill: scalar fields first, then every table in document
order.  Tables are independent; a table that fails unexpectedly is logged
and reported, and the remaining tables are still filled.
"""

from __future__ import annotations

import logging
from typing import Optional

from document.base import TemplateDocument
from dto.binding_context import BindingContext
from dto.fill_result import DocumentFillResult, TableFillResult, TableStatus
from filling.fields import fill_fields
from filling.table_filler import TableFiller
from notation.table_call import TableCallParser
from resolution.attribute_chain import AttributeResolver

logger = logging.getLogger(__name__)


class DocumentFiller:
    def __init__(
        self,
        context: BindingContext,
        resolver: Optional[AttributeResolver] = None,
        parser: Optional[TableCallParser] = None,
    ):
        self.context = context
        self.resolver = resolver or AttributeResolver()
        self.parser = parser or TableCallParser(self.resolver.separator)

    def fill(self, document: TemplateDocument) -> DocumentFillResult:
        report = DocumentFillResult()
        report.fields_filled, report.fields_failed = fill_fields(document, self.context, self.resolver)

        filler = TableFiller(document, self.context, self.parser)
        for table in document.tables():
            try:
                report.tables.append(filler.fill(table))
            except Exception:
                logger.exception(
                    "Failed to fill table %r, leaving it as far as it got", table.declared_name
                )
                report.tables.append(
                    TableFillResult(declared_name=table.declared_name, status=TableStatus.FAILED)
                )

        logger.info(
            "Filled %d of %d table(s)", len(report.filled_tables), len(report.tables)
        )
        return report
