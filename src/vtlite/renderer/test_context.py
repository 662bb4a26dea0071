"""Tests for context building and text interpolation."""

from vtlite.expr.builtins import INTEGER
from vtlite.renderer import assign, create_context, interpolate


def test_integer_builtin_cannot_be_overridden():
    context = create_context({"Integer": "should be ignored", "a": 1})
    assert context["Integer"] is INTEGER
    assert context["Integer"].member("parseInt")("42") == 42
    assert context["a"] == 1


def test_create_context_without_values():
    assert set(create_context()) == {"Integer"}


def test_create_context_copies_caller_mapping():
    """Renders never mutate the mapping the caller passed in."""
    values = {"a": 1}
    context = create_context(values)
    context["a"] = 2
    assert values == {"a": 1}


def test_assign_drops_reserved_names():
    context = create_context()
    assert assign(context, "Integer", 0) is False
    assert context["Integer"] is INTEGER
    assert assign(context, "x", 0) is True
    assert context["x"] == 0


def test_interpolate_replaces_references():
    assert interpolate("$a-$b!", {"a": "x", "b": 2}) == "x-2!"


def test_interpolate_absent_values_are_empty():
    assert interpolate("[$missing][$none]", {"none": None}) == "[][]"


def test_interpolate_leaves_other_text_alone():
    text = "cost: $ 5, 100% #tag"
    assert interpolate(text, {}) == text


def test_interpolate_stops_at_non_identifier_characters():
    """Dotted access is not interpolated in text; only the bare name is."""
    assert interpolate("$user.name", {"user": "ada"}) == "ada.name"
