from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from document.base import TemplateDocument
from dto.binding_context import BindingContext
from exceptions import AttributeChainResolutionFailure
from resolution.attribute_chain import AttributeResolver
from resolution.rendering import render_value

logger = logging.getLogger(__name__)


def fill_fields(
    document: TemplateDocument,
    context: BindingContext,
    resolver: AttributeResolver,
) -> Tuple[List[str], Dict[str, str]]:
    """
    Set every document field whose name is an attribute chain over the
    context parameters.

    Unresolvable fields are logged and left as authored.  Returns the
    filled names and the failure message of each unresolved one.
    """
    filled: List[str] = []
    failed: Dict[str, str] = {}
    for name in list(document.field_names()):
        try:
            value = resolver.resolve(context.parameters, name)
        except AttributeChainResolutionFailure as exc:
            logger.error("Field '%s' could not be filled: %s", name, exc.message)
            failed[name] = exc.message
            continue
        document.set_field(name, render_value(value, context.locale))
        filled.append(name)
    logger.info("Filled %d field(s), %d left unresolved", len(filled), len(failed))
    return filled, failed
