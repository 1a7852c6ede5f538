"""
Validation of the names callers register with a template.
"""

from __future__ import annotations

import re
from typing import Any

from resolution.constants import ATTRIBUTE_SEPARATOR

# Display and data-source names inside a table call.
NAME_PATTERN = r"[A-Za-z_][A-Za-z0-9_\-]*"

_NAME_RE = re.compile(NAME_PATTERN)


def is_valid_source_name(name: Any, separator: str = ATTRIBUTE_SEPARATOR) -> bool:
    """Return True if *name* can be used as a table data source name."""
    return (
        isinstance(name, str)
        and _NAME_RE.fullmatch(name) is not None
        and separator not in name
    )


def is_valid_parameter_name(name: Any, separator: str = ATTRIBUTE_SEPARATOR) -> bool:
    """Return True if *name* can be used as a template parameter name."""
    return isinstance(name, str) and bool(name) and separator not in name
