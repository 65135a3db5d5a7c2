"""Per-bar phase width computation with capacity-aware PROD expansion.

Only the production segment is widened.  The expansion factor is
``production_hours / capacity_per_project`` (weeks of the team's share of
capacity the PROD work alone consumes), clamped to ``[1, ceiling]``.

Every degenerate input degrades to a default instead of raising: a layout
pass must not abort because one project's data is incomplete.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Callable, Optional, Sequence

from src.shared.models import Bay, PhaseWidthDiagnostics, ScheduleBar

from .capacity import resolve_team_capacity
from .config import DEFAULT_CONFIG, LayoutConfig
from .constants import MIN_EXPANSION_FACTOR
from .contention import count_overlapping

logger = logging.getLogger(__name__)

LayoutObserver = Callable[[PhaseWidthDiagnostics], None]


def clamp_expansion(raw: float, ceiling: float) -> float:
    return min(max(raw, MIN_EXPANSION_FACTOR), ceiling)


def _find_bay(bay_id: int, all_bays: Sequence[Bay]) -> Optional[Bay]:
    return next((b for b in all_bays if b.id == bay_id), None)


def _notify(observer: Optional[LayoutObserver], diag: PhaseWidthDiagnostics) -> None:
    if observer is None:
        return
    try:
        observer(diag)
    except Exception:
        logger.exception("Layout observer failed for bar %s", diag.bar_id)


def compute_phase_widths(
    bar: ScheduleBar,
    all_bars: Sequence[ScheduleBar],
    all_bays: Sequence[Bay],
    *,
    config: LayoutConfig | None = None,
    observer: LayoutObserver | None = None,
) -> ScheduleBar:
    """Return a copy of *bar* with the six phase widths and expansion factor set."""
    config = config or DEFAULT_CONFIG
    total_width = bar.width

    bay = _find_bay(bar.bay_id, all_bays)
    if bay is None:
        logger.warning("Bar %s references unknown bay %s, using default capacity",
                       bar.id, bar.bay_id)
        team_capacity = config.default_team_capacity
    else:
        team_capacity = resolve_team_capacity(bay, all_bays, config=config)

    overlap_count = count_overlapping(bar, all_bars)
    if overlap_count > 0:
        # +1: the bar itself also claims a share of the team
        capacity_per_project = team_capacity / (overlap_count + 1)
    else:
        capacity_per_project = team_capacity

    production_hours: Optional[float] = None
    raw_expansion: Optional[float] = None
    hours = bar.total_hours
    if hours and math.isfinite(hours) and capacity_per_project > 0:
        production_hours = hours * (bar.production_percentage / 100)
        raw_expansion = production_hours / capacity_per_project
        factor = clamp_expansion(raw_expansion, config.expansion_ceiling)
    else:
        factor = MIN_EXPANSION_FACTOR

    pct_total = bar.percentage_total
    if not math.isclose(pct_total, 100, abs_tol=1e-6):
        logger.debug("Bar %s phase percentages sum to %.1f, not 100", bar.id, pct_total)

    logger.debug(
        "Bar %s: capacity=%.1f overlaps=%d per_project=%.1f prod_hours=%s raw=%s factor=%.2f",
        bar.id, team_capacity, overlap_count, capacity_per_project,
        production_hours, raw_expansion, factor,
    )
    _notify(observer, PhaseWidthDiagnostics(
        bar_id=bar.id,
        bay_found=bay is not None,
        team_capacity=team_capacity,
        overlap_count=overlap_count,
        capacity_per_project=capacity_per_project,
        production_hours=production_hours,
        raw_expansion=raw_expansion,
        capacity_expansion_factor=factor,
    ))

    return replace(
        bar,
        fab_width=(bar.fab_percentage / 100) * total_width,
        paint_width=(bar.paint_percentage / 100) * total_width,
        production_width=(bar.production_percentage / 100) * total_width * factor,
        it_width=(bar.it_percentage / 100) * total_width,
        ntc_width=(bar.ntc_percentage / 100) * total_width,
        qc_width=(bar.qc_percentage / 100) * total_width,
        capacity_expansion_factor=factor,
    )
