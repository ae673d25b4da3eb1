"""Tests for the safe integer gatekeepers."""

from __future__ import annotations

import math

import pytest

from dunechar.errors import CharacterAssertionError, IntegerConversionError
from dunechar.model.integer import (
    MAX_SAFE_INTEGER,
    MIN_SAFE_INTEGER,
    assert_integer,
    is_integer,
    to_integer,
)

VALID = [
    MIN_SAFE_INTEGER,
    -(2**32),
    -1,
    "-1",
    0,
    "0",
    1,
    "1",
    255,
    2**32,
    MAX_SAFE_INTEGER,
    3.0,
    " 42 ",
]

INVALID = [
    math.nan,
    math.inf,
    -math.inf,
    2**53,
    -(2**53),
    None,
    "a",
    "",
    "   ",
    "1.5",
    True,
    1.5,
    [],
]


class TestIsInteger:
    """Tests for is_integer."""

    @pytest.mark.parametrize("value", VALID)
    def test_accepts_safe_integers(self, value: object) -> None:
        assert is_integer(value)

    @pytest.mark.parametrize("value", INVALID)
    def test_rejects_other_values(self, value: object) -> None:
        assert not is_integer(value)


class TestToInteger:
    """Tests for to_integer."""

    def test_converts_numeric_string(self) -> None:
        assert to_integer("42") == 42
        assert to_integer(" -7 ") == -7

    def test_converts_integral_float_to_int(self) -> None:
        result = to_integer(3.0)
        assert result == 3
        assert isinstance(result, int)

    @pytest.mark.parametrize("value", INVALID)
    def test_raises_for_invalid_value(self, value: object) -> None:
        with pytest.raises(IntegerConversionError):
            to_integer(value)

    def test_error_is_a_type_error(self) -> None:
        """Callers catching TypeError should catch conversion errors."""
        with pytest.raises(TypeError):
            to_integer("a")


class TestAssertInteger:
    """Tests for assert_integer."""

    def test_passes_for_valid_value(self) -> None:
        assert_integer(MAX_SAFE_INTEGER)
        assert_integer("12")

    def test_raises_assertion_error(self) -> None:
        with pytest.raises(CharacterAssertionError):
            assert_integer(2**53)
        with pytest.raises(AssertionError):
            assert_integer(None)
