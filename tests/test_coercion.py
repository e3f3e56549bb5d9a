"""Tests for loose value coercion."""

from __future__ import annotations

import math

import pytest

from stylegraph.evaluator.coercion import (
    format_number,
    loose_equals,
    number_or,
    or_default,
    to_number,
    to_string,
    truthy,
)


class TestToNumber:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, 0.0),
            (True, 1.0),
            (False, 0.0),
            (7, 7.0),
            ("", 0.0),
            ("  3.5  ", 3.5),
            ("0x1f", 31.0),
            ("1e3", 1000.0),
            (".5", 0.5),
            ("-Infinity", -math.inf),
            ([], 0.0),
            (["4"], 4.0),
        ],
    )
    def test_coerces(self, value, expected):
        assert to_number(value) == expected

    @pytest.mark.parametrize("value", ["abc", "12px", {}, [1, 2], "0x"])
    def test_nan(self, value):
        assert math.isnan(to_number(value))


class TestTruthy:
    @pytest.mark.parametrize("value", [True, 1, -0.5, "0", "false", {}, []])
    def test_truthy(self, value):
        assert truthy(value) is True

    @pytest.mark.parametrize("value", [None, False, 0, 0.0, float("nan"), ""])
    def test_falsy(self, value):
        assert truthy(value) is False

    def test_or_default_keeps_truthy(self):
        assert or_default("x", "y") == "x"
        assert or_default(0, "y") == "y"

    def test_number_or_treats_zero_as_missing(self):
        assert number_or(0, 1) == 1
        assert number_or("2", 1) == 2


class TestLooseEquals:
    @pytest.mark.parametrize(
        "a, b, expected",
        [
            (1, "1", True),
            (0, "", True),
            (0, False, True),
            (True, "1", True),
            ("true", True, False),
            (None, None, True),
            (None, 0, False),
            (None, "", False),
            ("a", "a", True),
            (1.0, 1, True),
            (float("nan"), float("nan"), False),
            ([1, 2], "1,2", True),
        ],
    )
    def test_table(self, a, b, expected):
        assert loose_equals(a, b) is expected

    def test_objects_compare_by_identity(self):
        style = {"color": "red"}
        assert loose_equals(style, style) is True
        assert loose_equals(style, {"color": "red"}) is False


class TestFormatting:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (5.0, "5"),
            (0.5, "0.5"),
            (-2.25, "-2.25"),
            (0.1 + 0.2, "0.30000000000000004"),
            (1e21, "1e+21"),
            (1e20, "100000000000000000000"),
            (1e-7, "1e-7"),
            (0.000001, "0.000001"),
            (1.5e-10, "1.5e-10"),
            (-0.0, "0"),
            (math.inf, "Infinity"),
            (math.nan, "NaN"),
        ],
    )
    def test_format_number(self, value, expected):
        assert format_number(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "null"),
            (True, "true"),
            (3, "3"),
            (2.0, "2"),
            ({"a": 1}, "[object Object]"),
            ([1, None, "x"], "1,,x"),
        ],
    )
    def test_to_string(self, value, expected):
        assert to_string(value) == expected
