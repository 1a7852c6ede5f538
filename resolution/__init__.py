from resolution.attribute_chain import (
    AttributeResolver,
    NOT_FOUND,
    lookup_mapping,
    lookup_member,
    resolve_attribute_chain,
)
from resolution.rendering import render_value

__all__ = [
    "AttributeResolver",
    "NOT_FOUND",
    "lookup_mapping",
    "lookup_member",
    "resolve_attribute_chain",
    "render_value",
]
