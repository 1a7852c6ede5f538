"""
Layout policy of a bound table.

    TableConfiguration
      ├─ direction       VERTICAL: categories advance across columns, data runs down rows
      │                  HORIZONTAL: categories advance down rows, data runs across columns
      ├─ structure       POSITIONAL: categories in data-source order
      │                  CATEGORICAL: categories in the order of the template's header labels
      ├─ fill_behavior   what to do with a target cell that already has content
      ├─ write_behavior  how new text combines with existing cell text
      ├─ header          first data cell
      ├─ style_offset    period of the style-source cells, relative to the header
      └─ last_border     where the closing border of the filled region is copied from
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from dto.coordinate import TableCoordinate


class ContentDirection(str, Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class ContentStructure(str, Enum):
    POSITIONAL = "positional"
    CATEGORICAL = "categorical"


class FillBehavior(str, Enum):
    WRITE = "write"
    SKIP = "skip"
    STEP = "step"


class WriteBehavior(str, Enum):
    OVERWRITE = "overwrite"
    APPEND = "append"
    PREPEND = "prepend"


class BorderSection(str, Enum):
    HEADER = "header"
    BODY = "body"


class BorderSide(str, Enum):
    LEFT = "left"
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"


class LastBorderSource(BaseModel):
    """Table section and cell side the closing border is read from."""

    section: BorderSection
    side: BorderSide

    model_config = {"frozen": True}


class TableConfiguration(BaseModel):
    direction: ContentDirection = ContentDirection.VERTICAL
    structure: ContentStructure = ContentStructure.POSITIONAL
    fill_behavior: FillBehavior = FillBehavior.WRITE
    write_behavior: WriteBehavior = WriteBehavior.OVERWRITE
    header: TableCoordinate = TableCoordinate(column=0, row=0)
    style_offset: Optional[TableCoordinate] = None
    last_border: Optional[LastBorderSource] = None

    model_config = {"frozen": True}
