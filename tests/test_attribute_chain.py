import pytest

from exceptions import AttributeChainResolutionFailure
from resolution.attribute_chain import (
    NOT_FOUND,
    AttributeResolver,
    lookup_member,
    resolve_attribute_chain,
)
from resolution.rendering import render_value


class Person:
    def __init__(self, name, address=None):
        self._name = name
        self.address = address
        self._secret = "hidden"

    def getName(self):
        return self._name

    def is_adult(self):
        return True

    def greet(self, other):
        return f"hi {other}"

    def explode(self):
        raise RuntimeError("boom")


class Address:
    city = "Lisbon"


class Localized:
    def __init__(self, texts):
        self.texts = texts

    def get_content(self, locale=None):
        return self.texts.get(locale)

    def __str__(self):
        return "localized"


class TestResolve:
    def test_nested_mapping(self):
        assert resolve_attribute_chain({"a": {"b": 5}}, "a.b") == 5

    def test_none_intermediate_fails(self):
        with pytest.raises(AttributeChainResolutionFailure) as exc_info:
            resolve_attribute_chain({"a": None}, "a.b")
        assert "'b' is None" in exc_info.value.message

    def test_getter_is_used(self):
        assert resolve_attribute_chain(Person("X"), "name") == "X"

    def test_snake_case_predicate(self):
        assert resolve_attribute_chain(Person("X"), "adult") is True

    def test_mixed_mapping_and_object_chain(self):
        root = {"person": Person("Ana", address=Address())}
        assert resolve_attribute_chain(root, "person.address.city") == "Lisbon"

    def test_private_attribute_is_not_accessible(self):
        with pytest.raises(AttributeChainResolutionFailure, match="not accessible"):
            resolve_attribute_chain(Person("X"), "_secret")

    def test_missing_name_fails(self):
        with pytest.raises(AttributeChainResolutionFailure, match="No match was found for 'age'"):
            resolve_attribute_chain(Person("X"), "age")

    def test_method_requiring_arguments_fails(self):
        with pytest.raises(AttributeChainResolutionFailure, match="requires arguments"):
            resolve_attribute_chain(Person("X"), "greet")

    def test_raising_method_is_chained(self):
        with pytest.raises(AttributeChainResolutionFailure) as exc_info:
            resolve_attribute_chain(Person("X"), "explode")
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.parametrize("path", [None, ""])
    def test_empty_path_fails(self, path):
        with pytest.raises(AttributeChainResolutionFailure):
            resolve_attribute_chain({}, path)

    def test_empty_component_fails(self):
        with pytest.raises(AttributeChainResolutionFailure, match="empty attribute name"):
            resolve_attribute_chain({"a": {"b": 1}}, "a..b")

    def test_mapping_value_may_be_none(self):
        assert resolve_attribute_chain({"a": None}, "a") is None


class TestResolver:
    def test_custom_separator(self):
        resolver = AttributeResolver(separator="/")
        assert resolver.resolve({"a.b": {"c": 1}}, "a.b/c") == 1

    def test_custom_strategy_runs_first(self):
        def shout(value, name):
            return name.upper() if name == "word" else NOT_FOUND

        resolver = AttributeResolver(strategies=[shout, lookup_member])
        assert resolver.resolve(object(), "word") == "WORD"

    def test_empty_separator_is_rejected(self):
        with pytest.raises(ValueError):
            AttributeResolver(separator="")


class TestRenderValue:
    def test_none_renders_empty(self):
        assert render_value(None) == ""

    def test_plain_value(self):
        assert render_value(42) == "42"

    def test_localized_content(self):
        value = Localized({"pt_PT": "olá", None: "hello"})
        assert render_value(value, "pt_PT") == "olá"

    def test_localized_content_falls_back_to_default(self):
        value = Localized({None: "hello"})
        assert render_value(value, "fr_FR") == "hello"

    def test_no_content_falls_back_to_str(self):
        assert render_value(Localized({}), "fr_FR") == "localized"
