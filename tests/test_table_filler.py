import logging

import pytest

from conftest import add_table, column_values, row_values
from data_sources.categorical import CategoricalTableData
from data_sources.positional import PositionalTableData
from dto.fill_result import TableStatus
from dto.table_configuration import WriteBehavior
from filling import table_filler
from filling.table_filler import TableFiller


def fill_first(document, context):
    table = document.tables()[0]
    return TableFiller(document, context).fill(table), table


class TestWriteBehavior:
    @pytest.mark.parametrize(
        "option, expected",
        [("overwrite", "new"), ("append", "oldnew"), ("prepend", "newold")],
    )
    def test_existing_text(self, worksheet, document, context, option, expected):
        add_table(worksheet, "A1:A2", "Items", f"Items[items]{{header=0,1;write={option}}}", [["Header"], ["old"]])
        context = context.with_data_source("items", PositionalTableData([["new"]]))

        result, table = fill_first(document, context)

        assert column_values(table, 0) == ["Header", expected]
        assert result.n_data == 1

    def test_append_on_empty_cell_overwrites(self, worksheet, document, context):
        add_table(worksheet, "A1:A2", "Items", "Items[items]{header=0,1;write=append}", [["Header"]])
        context = context.with_data_source("items", PositionalTableData([["new"]]))

        _, table = fill_first(document, context)

        assert column_values(table, 0) == ["Header", "new"]

    def test_append_extends_last_line(self, worksheet, document, context):
        add_table(worksheet, "A1:A2", "Items", "Items[items]{header=0,1;write=append}", [["Header"], ["a\nb"]])
        context = context.with_data_source("items", PositionalTableData([["!"]]))

        _, table = fill_first(document, context)

        assert table.cell(0, 1).paragraphs() == ["a", "b!"]

    def test_unimplemented_write_behavior_is_logged(self, worksheet, document, context, caplog, monkeypatch):
        monkeypatch.delitem(table_filler._WRITERS, WriteBehavior.APPEND)
        add_table(worksheet, "A1:A2", "Items", "Items[items]{header=0,1;write=append}", [["Header"], ["old"]])
        context = context.with_data_source("items", PositionalTableData([["new"]]))

        result, table = fill_first(document, context)

        assert column_values(table, 0) == ["Header", "old"]
        assert result.n_data == 1
        assert "unimplemented write behavior" in caplog.text


class TestFillBehavior:
    def test_skip_reuses_datum(self, worksheet, document, context):
        add_table(worksheet, "A1:A4", "Items", "Items[items]{header=0,1;fill=skip}", [["H"], [None], ["taken"], [None]])
        context = context.with_data_source("items", PositionalTableData([["a", "b"]]))

        result, table = fill_first(document, context)

        assert column_values(table, 0) == ["H", "a", "taken", "b"]
        assert result.n_data == 2

    def test_skip_shrinks_constrained_space(self, worksheet, document, context, caplog):
        add_table(
            worksheet, "A1:B4", "Items", "Items[items]{header=1,1;fill=skip}",
            [["", "H"], [None, None], [None, "taken"], [None, None]],
        )
        context = context.with_data_source("items", PositionalTableData([["a", "b", "c"]]))

        result, table = fill_first(document, context)

        assert column_values(table, 1) == ["H", "a", "taken", "b"]
        assert result.n_data == 2
        assert table.row_count == 4
        assert "more data than the space" in caplog.text

    def test_step_consumes_datum(self, worksheet, document, context):
        add_table(worksheet, "A1:A4", "Items", "Items[items]{header=0,1;fill=step}", [["H"], [None], ["taken"], [None]])
        context = context.with_data_source("items", PositionalTableData([["a", "b", "c"]]))

        result, table = fill_first(document, context)

        assert column_values(table, 0) == ["H", "a", "taken", "c"]
        assert result.n_data == 2

    def test_write_ignores_existing_content(self, worksheet, document, context):
        add_table(worksheet, "A1:A3", "Items", "Items[items]{header=0,1}", [["H"], ["x"], ["y"]])
        context = context.with_data_source("items", PositionalTableData([["a", "b"]]))

        _, table = fill_first(document, context)

        assert column_values(table, 0) == ["H", "a", "b"]

    def test_merged_cells_are_not_counted(self, worksheet, document, context, caplog):
        add_table(worksheet, "A1:B3", "Items", "Items[items]{header=0,1}", [["H1", "H2"]])
        worksheet.merge_cells("A2:B2")
        context = context.with_data_source("items", PositionalTableData([["a"], ["b"]]))

        result, _ = fill_first(document, context)

        assert worksheet["A2"].value == "a"
        assert result.n_data == 1
        assert document.field_value("Items_nData") == 1
        assert "cannot be written" in caplog.text
        assert "Ignoring write to merged cell" not in caplog.text


class TestStructure:
    def test_categorical_follows_header_order(self, worksheet, document, context):
        add_table(worksheet, "A1:B3", "Grades", "Grades[grades]{structure=categorical}", [["C1", "C2"]])
        context = context.with_data_source("grades", CategoricalTableData({"C2": [10], "C1": [20, 21]}))

        result, table = fill_first(document, context)

        assert column_values(table, 0) == ["20", "21", None]
        assert column_values(table, 1) == ["10", None, None]
        assert result.n_data == 3

    def test_categorical_blank_header_gives_empty_category(self, worksheet, document, context, caplog):
        add_table(worksheet, "A1:B3", "Grades", "Grades[grades]{structure=categorical}", [["C1", " "]])
        context = context.with_data_source("grades", CategoricalTableData({"C1": [1]}))

        _, table = fill_first(document, context)

        assert column_values(table, 0) == ["1", None, None]
        assert "has no category label" in caplog.text

    def test_categorical_header_outside_table_forces_positional(self, worksheet, document, context, caplog):
        add_table(worksheet, "A1:B2", "Grades", "Grades[grades]{structure=categorical;header=0,5}")
        context = context.with_data_source("grades", PositionalTableData([["a"]]))

        with caplog.at_level(logging.ERROR):
            result, _ = fill_first(document, context)

        assert "forced_positional" in result.degradations
        assert "default category order assumed" in caplog.text

    def test_horizontal_direction(self, worksheet, document, context, caplog):
        add_table(worksheet, "A1:D2", "Person", "Person[person]{direction=horizontal;header=1,0}", [["Name"]])
        context = context.with_data_source("person", PositionalTableData([["x", "y", "z"]]))

        result, table = fill_first(document, context)

        assert row_values(table, 0) == ["Name", "x", "y", "z"]
        assert row_values(table, 1) == [None, None, None, None]
        assert "Too few data categories" in caplog.text


class TestSpace:
    def test_inner_overflow_is_truncated(self, worksheet, document, context, caplog):
        add_table(worksheet, "A1:B4", "Items", "Items[items]{header=1,1}")
        context = context.with_data_source("items", PositionalTableData([["1", "2", "3", "4", "5"]]))

        result, table = fill_first(document, context)

        assert column_values(table, 1) == [None, "1", "2", "3"]
        assert result.n_data == 3
        assert table.row_count == 4
        assert document.field_value("Items_nData") == 3
        assert "more data than the space" in caplog.text

    def test_outer_overflow_is_truncated(self, worksheet, document, context, caplog):
        add_table(worksheet, "A1:B4", "Items", "Items[items]{header=1,1}")
        context = context.with_data_source("items", PositionalTableData([["a"], ["b"], ["c"]]))

        result, table = fill_first(document, context)

        assert table.column_count == 2
        assert result.n_data == 1
        assert "Too many data categories" in caplog.text

    def test_unconstrained_table_grows(self, worksheet, document, context):
        add_table(worksheet, "A1:A2", "Items", "Items[items]{header=0,1}", [["H"]])
        context = context.with_data_source("items", PositionalTableData([["a", "b", "c"]]))

        result, table = fill_first(document, context)

        assert table.table.ref == "A1:A4"
        assert column_values(table, 0) == ["H", "a", "b", "c"]
        assert result.n_row == 4
        assert document.field_value("Items_nRow") == 4


class TestOutcome:
    def test_empty_dataset_writes_nothing(self, worksheet, document, context, caplog):
        add_table(worksheet, "A1:A2", "Items", "Items[items]{header=0,1}", [["H"], ["keep"]])
        context = context.with_data_source("items", CategoricalTableData({"a": [], "b": []}))

        result, table = fill_first(document, context)

        assert result.status == TableStatus.EMPTY
        assert document.field_value("items_isEmpty") is True
        assert column_values(table, 0) == ["H", "keep"]
        assert document.field_value("Items_nData") is None

    def test_summary_fields(self, worksheet, document, context):
        add_table(worksheet, "A1:B3", "Items", "Items[items]{header=0,1}")
        context = context.with_data_source("items", PositionalTableData([["a", "b"], ["c"]]))

        result, _ = fill_first(document, context)

        assert result.status == TableStatus.FILLED
        assert document.field_value("items_isEmpty") is False
        assert document.field_value("Items_dataSize") == 2
        assert document.field_value("Items_dataDepth") == 2
        assert document.field_value("Items_nRow") == 3
        assert document.field_value("Items_nCol") == 2
        assert document.field_value("Items_nData") == 3

    def test_bad_notation_leaves_table_static(self, worksheet, document, context, caplog):
        add_table(worksheet, "A1:A2", "Items", "Items{color=red}", [["H"]])

        result, table = fill_first(document, context)

        assert result.status == TableStatus.STATIC
        assert result.degradations == ["notation"]
        assert "does not conform to table call notation" in caplog.text

    def test_unknown_source_leaves_table_static(self, worksheet, document, context, caplog):
        add_table(worksheet, "A1:A2", "Items", rows=[["H"]])

        result, table = fill_first(document, context)

        assert result.status == TableStatus.STATIC
        assert result.source_name == "Items"
        assert column_values(table, 0) == ["H", None]
        assert "No matching data source 'Items'" in caplog.text
