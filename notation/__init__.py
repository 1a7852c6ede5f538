from notation.names import is_valid_parameter_name, is_valid_source_name
from notation.table_call import TableCallParser, format_table_call, parse_table_call

__all__ = [
    "TableCallParser",
    "format_table_call",
    "is_valid_parameter_name",
    "is_valid_source_name",
    "parse_table_call",
]
