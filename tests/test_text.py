"""Tests for text normalization helpers."""

from datetime import datetime

import pytest

from food_variety.text import (
    format_date,
    format_date_with_time,
    normalize_for_comparison,
    normalize_name,
    suffix_with_ordinal,
)


def test_normalize_name_trims_and_lowercases() -> None:
    assert normalize_name("  Green Apple \n") == "green apple"
    assert normalize_name("") == ""


def test_normalize_for_comparison_removes_spaces() -> None:
    assert normalize_for_comparison(" Green  Apple ") == "greenapple"
    assert normalize_for_comparison("green apple") == normalize_for_comparison("greenapple")


@pytest.mark.parametrize("text", ["", "  ", "Peanut Butter", " a b c ", "ÄPFEL  Kuchen"])
def test_normalize_for_comparison_is_idempotent(text: str) -> None:
    once = normalize_for_comparison(text)
    assert normalize_for_comparison(once) == once


@pytest.mark.parametrize(
    ("number", "expected"),
    [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (12, "12th"),
     (13, "13th"), (21, "21st"), (22, "22nd"), (23, "23rd"), (111, "111th")],
)
def test_suffix_with_ordinal(number: int, expected: str) -> None:
    assert suffix_with_ordinal(number) == expected


def test_format_dates() -> None:
    value = datetime(2024, 1, 7, 9, 5)

    assert format_date(value) == "January 7th, 2024"
    assert format_date_with_time(value) == "January 7th, 09:05"
