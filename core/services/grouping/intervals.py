from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, List, Tuple, Union

DateLike = Union[date, datetime, str]

# Python dates order exactly like their ISO "YYYY-MM-DD" strings, so every
# comparison below can be done on `date` values directly.


def as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip())
    raise ValueError(f"Unsupported date value: {value!r}")


def day_count(start: date, end: date) -> int:
    """Inclusive number of days in [start, end]."""
    return (end - start).days + 1


def next_day(day: date) -> date:
    return day + timedelta(days=1)


def prev_day(day: date) -> date:
    return day - timedelta(days=1)


def is_adjacent(first: date, second: date) -> bool:
    return next_day(first) == second


def overlaps(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    return start_a <= end_b and start_b <= end_a


def touches(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """Overlapping or separated by no calendar gap."""
    return start_a <= next_day(end_b) and start_b <= next_day(end_a)


def span(days: Iterable[date]) -> Tuple[date, date] | None:
    ordered = sorted(days)
    if not ordered:
        return None
    return ordered[0], ordered[-1]


def contiguous_runs(days: Iterable[date]) -> List[Tuple[date, date]]:
    """Maximal gap-free runs of the given dates, as inclusive (start, end) pairs."""
    runs: List[Tuple[date, date]] = []
    for day in sorted(set(days)):
        if runs and is_adjacent(runs[-1][1], day):
            runs[-1] = (runs[-1][0], day)
        else:
            runs.append((day, day))
    return runs


def run_containing(days: Iterable[date], start: date, end: date) -> Tuple[date, date] | None:
    """
    The contiguous run(s) of `days` that intersect [start, end], widened to
    one span. Returns None when no day falls inside [start, end].
    """
    hit: List[Tuple[date, date]] = [
        run for run in contiguous_runs(days) if overlaps(run[0], run[1], start, end)
    ]
    if not hit:
        return None
    return hit[0][0], hit[-1][1]


__all__ = [
    "DateLike",
    "as_date",
    "day_count",
    "next_day",
    "prev_day",
    "is_adjacent",
    "overlaps",
    "touches",
    "span",
    "contiguous_runs",
    "run_containing",
]
