from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class TableStatus(str, Enum):
    FILLED = "filled"
    STATIC = "static"   # left untouched: bad notation or no data source
    EMPTY = "empty"     # data source bound, but every category was empty
    FAILED = "failed"


class TableFillResult(BaseModel):
    """Outcome of filling one template table."""

    declared_name: Optional[str] = None
    table_name: Optional[str] = None
    source_name: Optional[str] = None
    status: TableStatus = TableStatus.STATIC
    n_row: int = 0
    n_col: int = 0
    n_data: int = 0
    degradations: List[str] = Field(default_factory=list)


class DocumentFillResult(BaseModel):
    """Report of a whole document fill, serialised by the CLI."""

    fields_filled: List[str] = Field(default_factory=list)
    fields_failed: Dict[str, str] = Field(default_factory=dict)
    tables: List[TableFillResult] = Field(default_factory=list)

    @property
    def filled_tables(self) -> List[TableFillResult]:
        return [t for t in self.tables if t.status == TableStatus.FILLED]
