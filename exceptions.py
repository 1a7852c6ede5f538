"""
Exceptions raised while binding data into a workbook template.

Only the registration errors (illegal parameter / data-source names) and
the load/save errors are meant to reach the caller; the others are caught
by the fill pipeline, logged, and turned into a degraded result.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class TemplateError(Exception):
    """Base exception for template binding errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class AttributeChainResolutionFailure(TemplateError):
    """An attribute path could not be resolved against a root value."""


class IllegalTableCallRepresentation(TemplateError):
    """A declared table name does not follow the table call notation."""

    def __init__(self, declared_name: Optional[str], reason: str):
        super().__init__(
            message=f"Illegal table call representation {declared_name!r}: {reason}",
            details={"declared_name": declared_name, "reason": reason},
        )


class IllegalTemplateParameterName(TemplateError):
    """A parameter name contains the attribute separator or is not a string."""

    def __init__(self, name: Any):
        super().__init__(
            message=f"Illegal template parameter name: {name!r}",
            details={
                "name": name,
                "suggestion": "Parameter names must be non-empty and must not contain the attribute separator",
            },
        )


class IllegalTemplateDataSourceName(TemplateError):
    """A data source name does not follow the table source name notation."""

    def __init__(self, name: Any):
        super().__init__(
            message=f"Illegal template data source name: {name!r}",
            details={
                "name": name,
                "suggestion": "Use letters, digits, '_' or '-', starting with a letter or '_'",
            },
        )


class DocumentLoadError(TemplateError):
    """The template workbook could not be read."""


class DocumentSaveError(TemplateError):
    """A filled workbook could not be written."""
