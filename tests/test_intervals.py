from __future__ import annotations

from datetime import date, datetime

import pytest

from core.services.grouping.intervals import (
    as_date,
    contiguous_runs,
    day_count,
    is_adjacent,
    overlaps,
    run_containing,
    span,
    touches,
)


def test_as_date_accepts_iso_strings_and_dates():
    assert as_date("2026-02-01") == date(2026, 2, 1)
    assert as_date(" 2026-02-01 ") == date(2026, 2, 1)
    assert as_date(date(2026, 2, 1)) == date(2026, 2, 1)
    assert as_date(datetime(2026, 2, 1, 23, 30)) == date(2026, 2, 1)
    assert type(as_date(datetime(2026, 2, 1, 23, 30))) is date
    with pytest.raises(ValueError):
        as_date(20260201)


def test_day_count_is_inclusive():
    assert day_count(date(2026, 2, 1), date(2026, 2, 1)) == 1
    assert day_count(date(2026, 2, 27), date(2026, 3, 2)) == 4


def test_adjacency_crosses_month_and_year_ends():
    assert is_adjacent(date(2026, 2, 28), date(2026, 3, 1))
    assert is_adjacent(date(2025, 12, 31), date(2026, 1, 1))
    assert not is_adjacent(date(2026, 2, 1), date(2026, 2, 3))
    assert not is_adjacent(date(2026, 2, 2), date(2026, 2, 1))


def test_overlaps_and_touches():
    a = (date(2026, 2, 1), date(2026, 2, 3))
    gap_of_one = (date(2026, 2, 5), date(2026, 2, 6))
    adjacent = (date(2026, 2, 4), date(2026, 2, 6))
    inside = (date(2026, 2, 2), date(2026, 2, 2))

    assert overlaps(*a, *inside)
    assert not overlaps(*a, *adjacent)
    assert touches(*a, *adjacent)
    assert touches(*adjacent, *a)
    assert not touches(*a, *gap_of_one)


def test_contiguous_runs_ignore_order_and_duplicates():
    days = [date(2026, 2, 5), date(2026, 2, 1), date(2026, 2, 2), date(2026, 2, 2), date(2026, 2, 4)]

    assert contiguous_runs(days) == [
        (date(2026, 2, 1), date(2026, 2, 2)),
        (date(2026, 2, 4), date(2026, 2, 5)),
    ]
    assert contiguous_runs([]) == []


def test_run_containing_widens_to_whole_runs():
    days = [date(2026, 2, d) for d in (1, 2, 3, 5, 6, 9)]

    assert run_containing(days, date(2026, 2, 2), date(2026, 2, 2)) == (date(2026, 2, 1), date(2026, 2, 3))
    assert run_containing(days, date(2026, 2, 3), date(2026, 2, 5)) == (date(2026, 2, 1), date(2026, 2, 6))
    # range extending past the last live day shrinks to it
    assert run_containing(days, date(2026, 2, 5), date(2026, 2, 8)) == (date(2026, 2, 5), date(2026, 2, 6))
    assert run_containing(days, date(2026, 2, 7), date(2026, 2, 8)) is None


def test_span():
    assert span([]) is None
    assert span([date(2026, 2, 3), date(2026, 2, 1)]) == (date(2026, 2, 1), date(2026, 2, 3))
