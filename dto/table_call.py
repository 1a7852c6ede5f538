from pydantic import BaseModel

from dto.table_configuration import TableConfiguration


class TableCall(BaseModel):
    """Parsed identity of a template table: who it is, where its data comes from, how to lay it out."""

    table_name: str
    source_name: str
    configuration: TableConfiguration = TableConfiguration()

    model_config = {"frozen": True}
