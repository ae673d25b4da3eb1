"""Tests for the safe JSON codec."""

from __future__ import annotations

import json
import math
from datetime import datetime

from dunechar import safe_json
from dunechar.model.entities import Trait
from dunechar.model.generic_set import GenericSet


class TestSafeDumps:
    """Tests for dumps with the safe replacer."""

    def test_plain_values_unchanged(self) -> None:
        assert safe_json.dumps({"a": [1, "b", None, True]}) == '{"a": [1, "b", null, true]}'

    def test_nan_and_infinities(self) -> None:
        text = safe_json.dumps([math.nan, math.inf, -math.inf])
        assert json.loads(text) == ["[NaN]", "[+Inf]", "[-Inf]"]

    def test_big_integers(self) -> None:
        assert safe_json.dumps(2**64) == '"18446744073709551616n"'
        assert safe_json.dumps(-(2**60)) == '"-1152921504606846976n"'
        assert safe_json.dumps(2**53 - 1) == "9007199254740991"

    def test_callables_in_lists_become_null(self) -> None:
        assert safe_json.dumps([1, print, 2]) == "[1, null, 2]"

    def test_callables_in_objects_are_dropped(self) -> None:
        assert safe_json.dumps({"a": 1, "f": print}) == '{"a": 1}'

    def test_dates(self) -> None:
        assert safe_json.dumps(datetime(2024, 1, 2, 3, 4, 5)) == '"2024-01-02T03:04:05"'

    def test_sets(self) -> None:
        assert safe_json.dumps({"s": {1}}) == '{"s": [1]}'

    def test_dataclasses(self) -> None:
        assert json.loads(safe_json.dumps(Trait("Thief"))) == {
            "name": "Thief",
            "description": None,
            "count": 1,
            "is_trait": True,
        }

    def test_objects_with_to_json(self) -> None:
        assert json.loads(safe_json.dumps(GenericSet([1, 2]))) == {
            "equality": "same_value_zero",
            "members": [1, 2],
        }

    def test_passes_keyword_arguments(self) -> None:
        assert safe_json.dumps({"b": 1, "a": 2}, sort_keys=True) == '{"a": 2, "b": 1}'


class TestSafeLoads:
    """Tests for loads with the safe reviver."""

    def test_round_trip(self) -> None:
        value = {"big": 2**64, "small": -(2**60), "nan": math.nan, "inf": math.inf, "n": 10}
        restored = safe_json.loads(safe_json.dumps(value))
        assert restored["big"] == 2**64
        assert restored["small"] == -(2**60)
        assert math.isnan(restored["nan"])
        assert restored["inf"] == math.inf
        assert restored["n"] == 10

    def test_nested_values(self) -> None:
        assert safe_json.loads('{"a": ["5n", {"b": "[-Inf]"}]}') == {"a": [5, {"b": -math.inf}]}

    def test_without_reviver(self) -> None:
        assert safe_json.loads('"[NaN]"', reviver=None) == "[NaN]"


class TestReviver:
    """Tests for safe_json_reviver."""

    def test_big_integer_tokens(self) -> None:
        assert safe_json.safe_json_reviver("", "5n") == 5
        assert safe_json.safe_json_reviver("", "+5n") == 5
        assert safe_json.safe_json_reviver("", "-5n") == -5

    def test_other_strings_unchanged(self) -> None:
        assert safe_json.safe_json_reviver("", "5nn") == "5nn"
        assert safe_json.safe_json_reviver("", "n") == "n"
        assert safe_json.safe_json_reviver("", "Paul") == "Paul"

    def test_non_strings_unchanged(self) -> None:
        assert safe_json.safe_json_reviver("a", 5) == 5


class TestCreateJsonReplacer:
    """Tests for create_json_replacer."""

    def test_fields_only_returns_list(self) -> None:
        assert safe_json.create_json_replacer(fields=["name"]) == ["name"]

    def test_field_list(self) -> None:
        text = safe_json.dumps({"name": "Paul", "count": 2}, replacer=["name"])
        assert text == '{"name": "Paul"}'

    def test_filter_and_replacer(self) -> None:
        replacer = safe_json.create_json_replacer(
            filter=lambda value, key: isinstance(value, int) and not isinstance(value, bool),
            replacer=lambda key, value: value * 2,
        )
        assert safe_json.dumps({"a": 1, "b": "x"}, replacer=replacer) == '{"a": 2, "b": "x"}'

    def test_ignore(self) -> None:
        replacer = safe_json.create_json_replacer(ignore=lambda value, key: key == "secret")
        assert safe_json.dumps({"name": "Paul", "secret": "s"}, replacer=replacer) == (
            '{"name": "Paul"}'
        )

    def test_fields_with_ignore(self) -> None:
        replacer = safe_json.create_json_replacer(fields=["name"], ignore=lambda value, key: False)
        assert safe_json.dumps({"name": "Paul", "count": 2}, replacer=replacer) == (
            '{"name": "Paul"}'
        )

    def test_ignored_top_value(self) -> None:
        replacer = safe_json.create_json_replacer(ignore=lambda value, key: key == "")
        assert safe_json.dumps({"a": 1}, replacer=replacer) == "null"
