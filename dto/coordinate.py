from pydantic import BaseModel, Field


class TableCoordinate(BaseModel):
    """Zero-based (column, row) position inside a template table."""

    column: int = Field(ge=0)
    row: int = Field(ge=0)

    model_config = {"frozen": True}

    @property
    def key(self) -> str:
        """Stable string key, e.g. ``"2,5"``."""
        return f"{self.column},{self.row}"

    def __str__(self) -> str:
        return self.key
