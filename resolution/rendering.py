"""
Rendering of bound values as document text.

Values that carry localized content expose ``get_content(locale)``; the
rendered text is that content for the requested locale, falling back to
the value's default content and finally to ``str(value)``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from resolution.constants import DEFAULT_LOCALE

logger = logging.getLogger(__name__)


def _localized_content(value: Any, locale: str) -> Optional[Any]:
    get_content = getattr(value, "get_content", None)
    if not callable(get_content):
        return None
    try:
        content = get_content(locale)
    except TypeError:
        content = None
    if content is None:
        try:
            content = get_content()
        except TypeError:
            content = None
    return content


def render_value(value: Any, locale: Optional[str] = None) -> str:
    """Return the text written into a cell or field for *value*."""
    if value is None:
        return ""
    try:
        content = _localized_content(value, locale or DEFAULT_LOCALE)
    except Exception:
        logger.warning(
            "Failed to read localized content of %s, using its string form",
            type(value).__name__,
            exc_info=True,
        )
        content = None
    if content is not None:
        return str(content)
    return str(value)
