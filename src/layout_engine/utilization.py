"""Team staffing and weekly utilization summaries."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Sequence

from src.shared.models import (
    Bay,
    ScheduleBar,
    TeamCapacitySummary,
    UtilizationStatus,
)

from .capacity import resolve_team_capacity
from .config import DEFAULT_CONFIG, LayoutConfig
from .constants import (
    DAYS_PER_WEEK,
    DEFAULT_HOURS_PER_WEEK,
    GOOD_UTILIZATION_THRESHOLD,
    HIGH_UTILIZATION_THRESHOLD,
    OVER_CAPACITY_THRESHOLD,
)
from .contention import ranges_overlap

logger = logging.getLogger(__name__)


def utilization_status(percentage: float) -> UtilizationStatus:
    if percentage > OVER_CAPACITY_THRESHOLD:
        return UtilizationStatus.OVER_CAPACITY
    if percentage > HIGH_UTILIZATION_THRESHOLD:
        return UtilizationStatus.HIGH
    if percentage > GOOD_UTILIZATION_THRESHOLD:
        return UtilizationStatus.GOOD
    return UtilizationStatus.AVAILABLE


def weekly_hours_for_bar(bar: ScheduleBar) -> float:
    """Spread *bar*'s total hours evenly over its span, per 7-day week."""
    if not bar.total_hours:
        return 0.0
    span_days = math.ceil((bar.end_date - bar.start_date).total_seconds() / 86400)
    span_days = max(span_days, 1)
    return bar.total_hours / span_days * DAYS_PER_WEEK


def summarize_team_capacity(
    team_name: str,
    all_bays: Sequence[Bay],
    all_bars: Sequence[ScheduleBar],
    week_start: datetime,
    *,
    config: LayoutConfig | None = None,
) -> TeamCapacitySummary:
    config = config or DEFAULT_CONFIG
    bays = [b for b in all_bays if b.team == team_name]
    bay_ids = [b.id for b in bays]

    assembly = sum(b.assembly_staff_count or 0 for b in bays)
    electrical = sum(b.electrical_staff_count or 0 for b in bays)
    if bays:
        hours_per_week = bays[0].hours_per_person_per_week or DEFAULT_HOURS_PER_WEEK
        weekly_capacity = resolve_team_capacity(bays[0], all_bays, config=config)
    else:
        hours_per_week = DEFAULT_HOURS_PER_WEEK
        weekly_capacity = config.default_team_capacity

    team_bars = [bar for bar in all_bars if bar.bay_id in bay_ids]
    active_projects = {bar.project_id for bar in team_bars}

    week_end = week_start + timedelta(days=DAYS_PER_WEEK - 1)
    this_week = [
        bar for bar in team_bars
        if ranges_overlap(bar.start_date, bar.end_date, week_start, week_end)
    ]
    estimated = sum(weekly_hours_for_bar(bar) for bar in this_week)

    if weekly_capacity > 0:
        # half-up rounding, capped at 100
        utilization = min(100, math.floor(estimated / weekly_capacity * 100 + 0.5))
    else:
        utilization = 0

    summary = TeamCapacitySummary(
        team_name=team_name,
        bay_ids=bay_ids,
        assembly_staff_count=assembly,
        electrical_staff_count=electrical,
        hours_per_week=hours_per_week,
        weekly_capacity=weekly_capacity,
        active_project_count=len(active_projects),
        estimated_weekly_hours=estimated,
        utilization_percentage=utilization,
        status=utilization_status(utilization),
    )
    logger.debug(
        "Team %s: %d bays, %.1f h/week capacity, %.1f h this week -> %d%% (%s)",
        team_name, len(bays), weekly_capacity, estimated, utilization, summary.status.value,
    )
    return summary


def summarize_all_teams(
    all_bays: Sequence[Bay],
    all_bars: Sequence[ScheduleBar],
    week_start: datetime,
    *,
    config: LayoutConfig | None = None,
) -> list[TeamCapacitySummary]:
    """One summary per distinct team, in roster order.  Team-less bays are skipped."""
    seen: list[str] = []
    for bay in all_bays:
        if bay.team and bay.team not in seen:
            seen.append(bay.team)
    return [
        summarize_team_capacity(team, all_bays, all_bars, week_start, config=config)
        for team in seen
    ]
