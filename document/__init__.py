from document.base import TemplateCell, TemplateDocument, TemplateTable
from document.workbook import WorkbookDocument, WorksheetCell, WorksheetTable

__all__ = [
    "TemplateCell",
    "TemplateDocument",
    "TemplateTable",
    "WorkbookDocument",
    "WorksheetCell",
    "WorksheetTable",
]
