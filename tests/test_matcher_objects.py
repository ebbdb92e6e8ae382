"""Matching against mapping patterns and their control keys."""

from __future__ import annotations

import datetime
from types import SimpleNamespace

import pytest

from shapecheck import MISSING, PatternError, ValidationError, compile_pattern
from shapecheck.matcher import strict_equals

from ._helpers import Observable


def test_end_to_end_scenario(bare_matcher):
    pattern = {"a": "string", "b": "number", "c": {"__required": False, "__type": "number"}}
    bare_matcher.match({"a": "s", "b": 5}, pattern)

    with pytest.raises(ValidationError) as excinfo:
        bare_matcher.match({"a": "s", "b": "5"}, pattern)
    assert str(excinfo.value) == "configObject.b should have number type!"


def test_non_required_property_may_be_missing(bare_matcher, test_object):
    bare_matcher.match(test_object, {"xxx": {"__required": False, "__type": "number"}})


def test_non_required_property_is_still_checked(bare_matcher, test_object):
    with pytest.raises(ValidationError, match=r"^configObject\.a should have number type!$"):
        bare_matcher.match(test_object, {"a": {"__required": False, "__type": "number"}})


def test_required_by_default(bare_matcher, test_object):
    with pytest.raises(ValidationError, match=r"^configObject\.xxx is mandatory!$"):
        bare_matcher.match(test_object, {"xxx": {}})
    with pytest.raises(ValidationError, match=r"^configObject\.xxx is mandatory!$"):
        bare_matcher.match(test_object, {"xxx": {"__required": True}})
    bare_matcher.match(test_object, {"c": {}})


def test_nullable_object(bare_matcher):
    bare_matcher.match({"n": None}, {"n": {"__nullable": True, "x": "number"}})
    with pytest.raises(ValidationError, match=r"^configObject\.n shouldn't be null!$"):
        bare_matcher.match({"n": None}, {"n": {"x": "number"}})


def test_correct_substructure(matcher, test_object):
    matcher.match(test_object, {"g": {"g1": "string", "g2": "observable number", "g3": "number"}})


def test_substructure_needs_an_object(bare_matcher, test_object):
    with pytest.raises(ValidationError, match=r"^configObject\.a should have object type!$"):
        bare_matcher.match(test_object, {"a": {"xxx": "number"}})


def test_missing_inner_property(bare_matcher, test_object):
    with pytest.raises(ValidationError, match=r"^configObject\.g\.xxx is mandatory!$"):
        bare_matcher.match(test_object, {"g": {"xxx": "number"}})


def test_array_elements(bare_matcher):
    pattern = {"items": {"__type": "array", "__elements": {"id": "number", "tags": "array string"}}}
    bare_matcher.match({"items": [{"id": 1, "tags": []}, {"id": 2, "tags": ["a"]}]}, pattern)

    with pytest.raises(ValidationError, match=r"^configObject\.items\[1\]\.tags\[0\] should have string type!$"):
        bare_matcher.match({"items": [{"id": 1, "tags": []}, {"id": 2, "tags": [3]}]}, pattern)


def test_array_without_elements_pattern(bare_matcher):
    bare_matcher.match({"items": [1, "a", None]}, {"items": {"__type": "array"}})


def test_observable_value(matcher, test_object):
    pattern = {
        "h": {
            "__type": "observable",
            "__value": {
                "h1": {"__type": "observable", "__value": "number"},
                "h2": "string",
            },
        },
    }
    matcher.match(test_object, pattern)


def test_observable_value_error_path(matcher, test_object):
    pattern = {"h": {"__type": "observable", "__value": {"h1": "observable string"}}}
    with pytest.raises(ValidationError, match=r"^configObject\.h\(\)\.h1\(\) should have string type!$"):
        matcher.match(test_object, pattern)


def test_observable_properties_are_read_from_the_wrapper(matcher):
    observable = Observable(1)
    observable.subscribe = lambda callback: None
    matcher.match({"o": observable}, {"o": {"__type": "observable", "subscribe": "function"}})
    with pytest.raises(ValidationError, match=r"^configObject\.o\.dispose is mandatory!$"):
        matcher.match({"o": observable}, {"o": {"__type": "observable", "dispose": "function"}})


def test_function_properties(bare_matcher):
    def handler():
        return None

    handler.retries = 3
    bare_matcher.match({"on_load": handler}, {"on_load": {"__type": "function", "retries": "number"}})


def test_attribute_objects(bare_matcher):
    options = SimpleNamespace(host="localhost", port=8080, created=datetime.date(2024, 5, 1))
    bare_matcher.match(options, {"host": "string", "port": "number", "created": "date"})
    with pytest.raises(ValidationError, match=r"^configObject\.user is mandatory!$"):
        bare_matcher.match(options, {"user": "string"})


def test_properties_ignored_for_scalar_types(bare_matcher):
    bare_matcher.match({"n": 5}, {"n": {"__type": "number", "anything": "string"}})


class TestAllowedValues:

    def test_member_passes_regardless_of_type(self, bare_matcher):
        bare_matcher.match(True, {"__allowedValues": [1, "x", True], "__type": "string"})
        bare_matcher.match("x", {"__allowedValues": [1, "x", True]})

    def test_non_member_fails(self, bare_matcher):
        with pytest.raises(ValidationError, match=r"^configObject\.mode value is not among the allowed ones!$"):
            bare_matcher.match({"mode": "fast"}, {"mode": {"__allowedValues": ["slow", "safe"]}})

    def test_booleans_never_equal_numbers(self, bare_matcher):
        with pytest.raises(ValidationError, match="not among the allowed ones"):
            bare_matcher.match(1, {"__allowedValues": [True]})
        with pytest.raises(ValidationError, match="not among the allowed ones"):
            bare_matcher.match(False, {"__allowedValues": [0]})

    def test_presence_rules_still_apply(self, bare_matcher):
        bare_matcher.match({}, {"m": {"__allowedValues": [1], "__required": False}})
        bare_matcher.match({"m": None}, {"m": {"__allowedValues": [1], "__nullable": True}})
        with pytest.raises(ValidationError, match=r"^configObject\.m is mandatory!$"):
            bare_matcher.match({}, {"m": {"__allowedValues": [1]}})

    def test_null_as_allowed_value_requires_nullable(self, bare_matcher):
        with pytest.raises(ValidationError, match="shouldn't be null"):
            bare_matcher.match(None, {"__allowedValues": [None]})

    def test_must_be_an_array(self, bare_matcher):
        with pytest.raises(PatternError, match="'__allowedValues' has to be an array"):
            bare_matcher.match(1, {"__allowedValues": 1})


@pytest.mark.parametrize(
    "value, literal, expected",
    [(1, 1, True), (1, 1.0, True), (True, True, True), (True, 1, False), (0, False, False), ("1", 1, False)],
)
def test_strict_equals(value, literal, expected):
    assert strict_equals(value, literal) is expected


class TestDottedKeys:

    @pytest.mark.parametrize(
        "value",
        [
            {"g": {"g2": 12}},
            {"g": {"g2": "12"}},
            {"g": {}},
            {"g": None},
            {"g": 5},
            {},
        ],
    )
    def test_equivalent_to_nested_patterns(self, bare_matcher, value):
        def outcome(pattern):
            try:
                bare_matcher.match(value, pattern)
            except ValidationError as exc:
                return str(exc)
            return None

        assert outcome({"g.g2": "number"}) == outcome({"g": {"g2": "number"}})

    def test_intermediate_segment_must_be_an_object(self, bare_matcher):
        with pytest.raises(ValidationError, match=r"^configObject\.g should have object type!$"):
            bare_matcher.match({"g": 5}, {"g.g2": "number"})

    def test_leaf_error_path(self, bare_matcher):
        with pytest.raises(ValidationError, match=r"^configObject\.g\.g2 should have number type!$") as excinfo:
            bare_matcher.match({"g": {"g2": "x"}}, {"g.g2": "number"})
        assert excinfo.value.pointer == ("g", "g2")

    def test_deep_paths_with_observables(self, matcher, test_object):
        matcher.match(test_object, {"g.g2": "observable number", "g.g3": "number"})

    def test_optional_leaf(self, bare_matcher):
        bare_matcher.match({"g": {}}, {"g.g2": "optional number"})


def test_precompiled_pattern_is_reusable(bare_matcher):
    compiled = compile_pattern({"a": "string"})
    bare_matcher.match({"a": "x"}, compiled)
    with pytest.raises(ValidationError):
        bare_matcher.match({"a": 1}, compiled)


def test_missing_value_passed_explicitly(bare_matcher):
    bare_matcher.match(MISSING, {"__required": False})
