"""Same-bay overlap detection between schedule bars.

Every lookup is a linear scan, so a full batch is O(n^2).  That is fine for
bay rosters with tens to a few hundred bars; thousands of bars would want a
per-bay interval index instead.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from src.shared.models import ScheduleBar


def ranges_overlap(
    start1: datetime, end1: datetime, start2: datetime, end2: datetime,
) -> bool:
    """Closed-interval intersection; touching endpoints count."""
    return not (end1 < start2 or start1 > end2)


def is_contending(bar: ScheduleBar, other: ScheduleBar) -> bool:
    return (
        other.bay_id == bar.bay_id
        and other.id != bar.id
        and ranges_overlap(bar.start_date, bar.end_date, other.start_date, other.end_date)
    )


def find_overlapping(
    bar: ScheduleBar, all_bars: Sequence[ScheduleBar],
) -> list[ScheduleBar]:
    return [other for other in all_bars if is_contending(bar, other)]


def count_overlapping(bar: ScheduleBar, all_bars: Sequence[ScheduleBar]) -> int:
    """Number of other bars in the same bay whose dates intersect *bar*."""
    return sum(1 for other in all_bars if is_contending(bar, other))
