"""Tests for weekly recurrence evaluation."""

from __future__ import annotations

from datetime import date, timedelta
from itertools import combinations

import pytest

from habitvision.constants import WEEKDAY_NAMES
from habitvision.services.recurrence import (
    format_frequency,
    is_due,
    normalize_frequency,
    weekday_name,
)

TUESDAY = date(2024, 6, 11)


def _all_subsets():
    for size in range(len(WEEKDAY_NAMES) + 1):
        for subset in combinations(WEEKDAY_NAMES, size):
            yield set(subset)


def test_weekday_name_uses_monday_start_week():
    monday = date(2024, 6, 10)
    names = [weekday_name(monday + timedelta(days=offset)) for offset in range(7)]
    assert names == list(WEEKDAY_NAMES)


def test_is_due_matches_membership_for_every_subset():
    subsets = list(_all_subsets())
    assert len(subsets) == 128

    for subset in subsets:
        assert is_due(subset, TUESDAY) == ("tuesday" in subset)


def test_empty_pattern_is_never_due():
    start = date(2024, 1, 1)
    assert not any(is_due(set(), start + timedelta(days=n)) for n in range(14))


def test_is_due_ignores_habit_age():
    # A date far in the past is still evaluated purely by weekday.
    assert is_due({"tuesday"}, date(1999, 12, 28))


def test_normalize_frequency_dedupes_and_orders():
    assert normalize_frequency(["Friday", "monday", "friday"]) == ["monday", "friday"]


def test_normalize_frequency_rejects_unknown_days():
    with pytest.raises(ValueError, match="funday"):
        normalize_frequency(["monday", "funday"])


@pytest.mark.parametrize(
    ("frequency", "label"),
    [
        (WEEKDAY_NAMES, "Every day"),
        ((), "Never"),
        (WEEKDAY_NAMES[:5], "Weekdays"),
        (("sunday", "saturday"), "Weekends"),
        (("friday", "monday", "wednesday"), "Mon, Wed, Fri"),
    ],
)
def test_format_frequency(frequency, label):
    assert format_frequency(frequency) == label
