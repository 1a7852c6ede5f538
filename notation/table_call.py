"""
Table call notation.

A template table declares how it is bound through its name:

    Persons                                   display name = source name, defaults
    Persons[person]                           explicit data source
    Persons[person]{structure=categorical;header=0,1;style=0,2;border=body:bottom}

Grammar (whitespace around tokens is ignored, keywords are case-insensitive):

    declared  := name [ "[" name "]" ] [ "{" option ( ";" option )* "}" ]
    option    := direction=vertical|horizontal
               | structure=positional|categorical
               | fill=write|skip|step
               | write=overwrite|append|prepend
               | header=<column>,<row>
               | style=<column>,<row>
               | border=header|body:left|top|right|bottom

``format_table_call`` writes the canonical form: the source is always
explicit and only options that differ from the defaults are listed, in the
order above.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from pydantic import ValidationError

from dto.coordinate import TableCoordinate
from dto.table_call import TableCall
from dto.table_configuration import (
    BorderSection,
    BorderSide,
    ContentDirection,
    ContentStructure,
    FillBehavior,
    LastBorderSource,
    TableConfiguration,
    WriteBehavior,
)
from exceptions import IllegalTableCallRepresentation
from notation.names import NAME_PATTERN, is_valid_source_name
from resolution.constants import ATTRIBUTE_SEPARATOR

_CALL_RE = re.compile(
    r"^\s*(?P<table>{name})\s*"
    r"(?:\[\s*(?P<source>{name})\s*\])?\s*"
    r"(?:\{{(?P<options>[^{{}}]*)\}})?\s*$".format(name=NAME_PATTERN)
)

_DEFAULTS = TableConfiguration()


# ---------------------------------------------------------------------------
# Option values
# ---------------------------------------------------------------------------


def _parse_enum(enum_cls: Type, text: str) -> Any:
    try:
        return enum_cls(text.strip().lower())
    except ValueError:
        allowed = "|".join(member.value for member in enum_cls)
        raise ValueError(f"expected one of {allowed}, got {text.strip()!r}") from None


def _parse_coordinate(text: str) -> TableCoordinate:
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"expected '<column>,<row>', got {text.strip()!r}")
    return TableCoordinate(column=int(parts[0]), row=int(parts[1]))


def _parse_border(text: str) -> LastBorderSource:
    section, sep, side = text.partition(":")
    if not sep:
        raise ValueError(f"expected '<section>:<side>', got {text.strip()!r}")
    return LastBorderSource(
        section=_parse_enum(BorderSection, section),
        side=_parse_enum(BorderSide, side),
    )


# option keyword → (configuration field, value parser), in canonical order
_OPTIONS: Dict[str, Tuple[str, Callable[[str], Any]]] = {
    "direction": ("direction", lambda text: _parse_enum(ContentDirection, text)),
    "structure": ("structure", lambda text: _parse_enum(ContentStructure, text)),
    "fill": ("fill_behavior", lambda text: _parse_enum(FillBehavior, text)),
    "write": ("write_behavior", lambda text: _parse_enum(WriteBehavior, text)),
    "header": ("header", _parse_coordinate),
    "style": ("style_offset", _parse_coordinate),
    "border": ("last_border", _parse_border),
}


def _format_option(value: Any) -> str:
    if isinstance(value, TableCoordinate):
        return f"{value.column},{value.row}"
    if isinstance(value, LastBorderSource):
        return f"{value.section.value}:{value.side.value}"
    return value.value


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class TableCallParser:
    """
    Parses declared table names into ``TableCall`` objects and back.

    Usage::

        parser = TableCallParser()
        call = parser.parse("Persons[person]{header=0,1}")
        parser.format(call)   # "Persons[person]{header=0,1}"
    """

    def __init__(self, separator: str = ATTRIBUTE_SEPARATOR):
        self.separator = separator

    def is_valid_source_name(self, name: Any) -> bool:
        return is_valid_source_name(name, self.separator)

    def parse(self, declared_name: Optional[str]) -> TableCall:
        """
        Parse a declared table name.

        Raises ``IllegalTableCallRepresentation`` if the name does not
        follow the table call notation.
        """
        if not isinstance(declared_name, str):
            raise IllegalTableCallRepresentation(declared_name, "the declared name is not a string")

        match = _CALL_RE.match(declared_name)
        if match is None:
            raise IllegalTableCallRepresentation(declared_name, "it does not match the table call notation")

        table_name = match.group("table")
        source_name = match.group("source") or table_name
        for name in (table_name, source_name):
            if not self.is_valid_source_name(name):
                raise IllegalTableCallRepresentation(
                    declared_name, f"{name!r} contains the attribute separator {self.separator!r}"
                )

        try:
            overrides = self._parse_options(match.group("options") or "")
            configuration = TableConfiguration(**overrides)
        except (ValueError, ValidationError) as exc:
            raise IllegalTableCallRepresentation(declared_name, str(exc)) from exc

        return TableCall(
            table_name=table_name,
            source_name=source_name,
            configuration=configuration,
        )

    @staticmethod
    def _parse_options(text: str) -> Dict[str, Any]:
        overrides: Dict[str, Any] = {}
        seen: List[str] = []
        for segment in text.split(";"):
            if not segment.strip():
                continue
            key, sep, value = segment.partition("=")
            key = key.strip().lower()
            if not sep:
                raise ValueError(f"option {segment.strip()!r} has no value")
            if key not in _OPTIONS:
                raise ValueError(f"unknown option {key!r}")
            if key in seen:
                raise ValueError(f"option {key!r} is given more than once")
            seen.append(key)
            field, parse_value = _OPTIONS[key]
            overrides[field] = parse_value(value)
        return overrides

    def format(self, call: TableCall) -> str:
        """Return the canonical declared name of *call*."""
        for name in (call.table_name, call.source_name):
            if not self.is_valid_source_name(name):
                raise IllegalTableCallRepresentation(
                    call.table_name, f"{name!r} is not a valid table call name"
                )

        options: List[str] = []
        for key, (field, _) in _OPTIONS.items():
            value = getattr(call.configuration, field)
            if value is not None and value != getattr(_DEFAULTS, field):
                options.append(f"{key}={_format_option(value)}")

        text = f"{call.table_name}[{call.source_name}]"
        if options:
            text += "{" + ";".join(options) + "}"
        return text


_default_parser = TableCallParser()


def parse_table_call(declared_name: Optional[str]) -> TableCall:
    return _default_parser.parse(declared_name)


def format_table_call(call: TableCall) -> str:
    return _default_parser.format(call)
