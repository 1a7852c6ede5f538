from filling.document_filler import DocumentFiller
from filling.fields import fill_fields
from filling.styles import (
    collect_cell_styles,
    collect_last_border,
    propagate_last_border,
    propagate_styles,
    style_source_coordinate,
)
from filling.table_filler import TableFiller

__all__ = [
    "DocumentFiller",
    "TableFiller",
    "collect_cell_styles",
    "collect_last_border",
    "fill_fields",
    "propagate_last_border",
    "propagate_styles",
    "style_source_coordinate",
]
