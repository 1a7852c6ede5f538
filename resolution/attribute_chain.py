"""
Attribute chain resolution.

An attribute chain is a path such as ``"person.address.city"``: a sequence
of names joined by the attribute separator.  Resolution walks the path
from a root value, asking each intermediate value for the next name
through an ordered list of lookup strategies:

  1. ``lookup_mapping`` — the value is a mapping holding the name as a key.
  2. ``lookup_member``  — the value is an object exposing an accessor
     (``getName`` / ``get_name``, ``isName`` / ``is_name``,
     ``hasName`` / ``has_name``), a zero-argument method called exactly
     ``name``, or a public attribute called ``name``.

A strategy returns ``NOT_FOUND`` when it does not apply, so callers can
register their own strategies ahead of (or instead of) the built-in ones.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any, Callable, List, Optional, Sequence

from exceptions import AttributeChainResolutionFailure
from resolution.constants import ATTRIBUTE_SEPARATOR


class _NotFound:
    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = _NotFound()

LookupStrategy = Callable[[Any, str], Any]

_REQUIRED_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)


# ---------------------------------------------------------------------------
# Lookup strategies
# ---------------------------------------------------------------------------


def lookup_mapping(value: Any, name: str) -> Any:
    """Return ``value[name]`` if *value* is a mapping containing *name*."""
    if not isinstance(value, Mapping):
        return NOT_FOUND
    try:
        if name in value:
            return value[name]
    except TypeError:
        # mappings whose keys cannot be compared with strings
        pass
    return NOT_FOUND


def _accessor_names(name: str) -> List[str]:
    capitalized = name[0].upper() + name[1:]
    names: List[str] = []
    for prefix in ("get", "is", "has"):
        names.append(f"{prefix}{capitalized}")
        names.append(f"{prefix}_{name}")
    return names


def _invoke(method: Callable[[], Any], name: str) -> Any:
    try:
        signature = inspect.signature(method)
    except (TypeError, ValueError):
        signature = None

    if signature is not None:
        required = [
            p.name
            for p in signature.parameters.values()
            if p.kind in _REQUIRED_KINDS and p.default is inspect.Parameter.empty
        ]
        if required:
            raise AttributeChainResolutionFailure(
                f"Could not resolve attribute chain. Method matching '{name}' requires arguments.",
                details={"attribute": name, "arguments": required},
            )

    try:
        return method()
    except Exception as exc:
        raise AttributeChainResolutionFailure(
            "Could not resolve attribute chain. Exception occurred while "
            f"evaluating the method matching '{name}'.",
            details={"attribute": name},
        ) from exc


def _read_member(value: Any, member_name: str, name: str) -> Any:
    try:
        return getattr(value, member_name, NOT_FOUND)
    except Exception as exc:
        raise AttributeChainResolutionFailure(
            "Could not resolve attribute chain. Exception occurred while "
            f"reading the attribute matching '{name}'.",
            details={"attribute": name},
        ) from exc


def lookup_member(value: Any, name: str) -> Any:
    """
    Resolve *name* on an arbitrary object.

    Accessors are tried first, then a method or attribute with the exact
    name.  Accessors must be routines; a plain attribute that happens to be
    called ``getName`` is ignored.
    """
    if name.startswith("_"):
        raise AttributeChainResolutionFailure(
            f"Could not resolve attribute chain. Attribute '{name}' is not accessible.",
            details={"attribute": name},
        )

    for accessor in _accessor_names(name):
        member = _read_member(value, accessor, name)
        if member is not NOT_FOUND and inspect.isroutine(member):
            return _invoke(member, name)

    member = _read_member(value, name, name)
    if member is NOT_FOUND:
        return NOT_FOUND
    if inspect.isroutine(member):
        return _invoke(member, name)
    return member


DEFAULT_STRATEGIES: Sequence[LookupStrategy] = (lookup_mapping, lookup_member)


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class AttributeResolver:
    """
    Resolves attribute chains against a root value.

    Usage::

        resolver = AttributeResolver()
        city = resolver.resolve({"person": person}, "person.address.city")
    """

    def __init__(
        self,
        separator: str = ATTRIBUTE_SEPARATOR,
        strategies: Optional[Sequence[LookupStrategy]] = None,
    ):
        if not separator:
            raise ValueError("The attribute separator cannot be empty")
        self.separator = separator
        self.strategies = tuple(strategies or DEFAULT_STRATEGIES)

    def split(self, path: Optional[str]) -> List[str]:
        if path is None:
            raise AttributeChainResolutionFailure("Attribute chain string representation is None.")
        if not isinstance(path, str) or not path:
            raise AttributeChainResolutionFailure(
                f"Attribute chain string representation {path!r} is not a non-empty string.",
                details={"path": path},
            )
        return path.split(self.separator)

    def resolve(self, root: Any, path: Optional[str]) -> Any:
        """
        Return the value reached by following *path* from *root*.

        Raises ``AttributeChainResolutionFailure`` if any name along the
        path cannot be resolved.
        """
        result = root
        for name in self.split(path):
            if result is None:
                raise AttributeChainResolutionFailure(
                    f"Could not resolve attribute chain. Object containing '{name}' is None.",
                    details={"path": path, "attribute": name},
                )
            if not name:
                raise AttributeChainResolutionFailure(
                    f"Attribute chain {path!r} contains an empty attribute name.",
                    details={"path": path},
                )
            result = self._lookup(result, name, path)
        return result

    def _lookup(self, value: Any, name: str, path: str) -> Any:
        for strategy in self.strategies:
            found = strategy(value, name)
            if found is not NOT_FOUND:
                return found
        raise AttributeChainResolutionFailure(
            f"No match was found for '{name}'.",
            details={"path": path, "attribute": name, "type": type(value).__name__},
        )


_default_resolver = AttributeResolver()


def resolve_attribute_chain(root: Any, path: Optional[str]) -> Any:
    """Resolve *path* against *root* with the default resolver."""
    return _default_resolver.resolve(root, path)
