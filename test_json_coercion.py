#!/usr/bin/env python3
"""
Unit tests for JSON coercion and dual-casing field lookup.
"""
from common.json_coercion import as_dict, as_list, dumps_compact, format_number, parse_maybe_json, to_number
from common.terminology import FieldMapping, PrepressTerminology, build_strategies, lookup


def test_parse_maybe_json_passes_structured_values_through():
    payload = {"Pages": [1, 2]}
    assert parse_maybe_json(payload) is payload
    assert parse_maybe_json([1, 2]) == [1, 2]
    assert parse_maybe_json(3) == 3


def test_parse_maybe_json_parses_strings():
    assert parse_maybe_json('{"Success": true}') == {"Success": True}
    assert parse_maybe_json('  [1, 2]  ') == [1, 2]


def test_parse_maybe_json_never_raises():
    for bad in (None, "", "   ", "{not json", "[1, 2", "undefined"):
        print(f'  Parsing {bad!r}')
        assert parse_maybe_json(bad) is None


def test_deeply_nested_json_degrades_to_none():
    deep = "[" * 100000 + "]" * 100000
    assert parse_maybe_json(deep) is None
    assert as_dict(deep) == {}


def test_as_list_and_as_dict_defaults():
    assert as_list(None) == []
    assert as_list("abc") == []
    assert as_list({"a": 1}) == []
    assert as_list((1, 2)) == [1, 2]

    assert as_dict('{"BleedSize": 3}') == {"BleedSize": 3}
    assert as_dict("[1]") == {}
    assert as_dict(None) == {}


def test_to_number():
    assert to_number("210") == 210
    assert isinstance(to_number("210"), int)
    assert to_number(" 297.5 ") == 297.5
    assert to_number(210.0) == 210
    assert isinstance(to_number(210.0), int)
    assert to_number("abc") is None
    assert to_number("") is None
    assert to_number(True) is None
    assert to_number("nan") is None
    assert to_number(None) is None


def test_format_number_drops_trailing_zero():
    assert format_number(210.0) == "210"
    assert format_number(3.5) == "3.5"
    assert format_number("3") == "3"


def test_dumps_compact_keeps_markers_searchable():
    text = dumps_compact([{"Success": True, "Status": "completed", "Name": "Épreuve"}])
    assert '"Success":true' in text
    assert '"Status":"completed"' in text
    assert "Épreuve" in text


def test_lookup_prefers_pascal_case():
    mapping = FieldMapping("message", "msg", build_strategies("message"), default="")
    assert mapping.key_strategies == ["Message", "message"]
    assert lookup({"Message": "A", "message": "B"}, mapping) == "A"
    assert lookup({"Message": None, "message": "B"}, mapping) == "B"
    assert lookup({}, mapping) == ""
    assert lookup("not a dict", mapping) == ""


def test_validation_field_defaults():
    assert PrepressTerminology.validation_field({}, "level") == 0
    assert PrepressTerminology.validation_field({"fieldName": "x"}, "field_name") == "x"
    assert PrepressTerminology.validation_field({"FieldName": "X", "fieldName": "x"}, "field_name") == "X"


def test_dumps_compact_gives_empty_text_for_deep_nesting():
    nested = []
    for _ in range(100000):
        nested = [nested]
    assert dumps_compact(nested) == ""
