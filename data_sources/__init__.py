from data_sources.base import TableDataSource
from data_sources.categorical import CategoricalTableData
from data_sources.objects import ObjectTableData
from data_sources.positional import PositionalTableData

__all__ = [
    "CategoricalTableData",
    "ObjectTableData",
    "PositionalTableData",
    "TableDataSource",
]
