import pytest

from data_sources.categorical import CategoricalTableData
from dto.binding_context import BindingContext
from exceptions import IllegalTemplateDataSourceName, IllegalTemplateParameterName


class TestParameters:
    def test_with_parameter_returns_new_context(self):
        context = BindingContext()
        updated = context.with_parameter("title", "Registry")
        assert updated.parameters == {"title": "Registry"}
        assert context.parameters == {}

    def test_name_with_separator_is_rejected(self):
        with pytest.raises(IllegalTemplateParameterName):
            BindingContext().with_parameter("person.name", "Ana")

    def test_custom_separator(self):
        context = BindingContext().with_parameter("person.name", "Ana", separator="/")
        assert context.parameters["person.name"] == "Ana"

    def test_removal(self):
        context = BindingContext().with_parameter("a", 1).with_parameter("b", 2)
        assert context.without_parameter("a").parameters == {"b": 2}
        assert context.without_parameters(["a", "b"]).parameters == {}
        assert context.without_parameters().parameters == {}

    def test_context_is_frozen(self):
        with pytest.raises(Exception):
            BindingContext().locale = "pt_PT"


class TestDataSources:
    def test_with_data_source(self):
        source = CategoricalTableData({"name": ["Ana"]})
        context = BindingContext().with_data_source("person", source)
        assert context.data_sources["person"] is source

    @pytest.mark.parametrize("name", ["person.list", "1st", ""])
    def test_illegal_names(self, name):
        with pytest.raises(IllegalTemplateDataSourceName):
            BindingContext().with_data_source(name, CategoricalTableData({}))

    def test_non_source_is_rejected(self):
        with pytest.raises(TypeError):
            BindingContext().with_data_source("person", {"name": ["Ana"]})

    def test_removal(self):
        context = (
            BindingContext()
            .with_data_source("a", CategoricalTableData({}))
            .with_data_source("b", CategoricalTableData({}))
        )
        assert list(context.without_data_source("a").data_sources) == ["b"]
        assert context.without_data_sources().data_sources == {}


def test_with_locale():
    assert BindingContext().with_locale("pt_PT").locale == "pt_PT"
