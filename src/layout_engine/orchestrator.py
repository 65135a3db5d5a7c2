"""Top-level layout orchestrator.

``compute_layout`` is the single entry-point called by the bay schedule
view.  It lays out every bar, optionally summarizes team utilization for a
week, and returns everything in a ``LayoutResult``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence

from src.shared.models import (
    Bay,
    LayoutResult,
    ScheduleBar,
    TeamCapacitySummary,
)

from .batch import update_all
from .config import DEFAULT_CONFIG, LayoutConfig
from .phase_widths import LayoutObserver
from .utilization import summarize_all_teams

logger = logging.getLogger(__name__)


def _build_text_summary(
    bars: list[ScheduleBar],
    team_summaries: list[TeamCapacitySummary],
    config: LayoutConfig,
) -> str:
    lines = [
        f"Bay Schedule Layout (policy={config.capacity_policy.value}, "
        f"ceiling={config.expansion_ceiling:g})\n"
    ]

    for bar in sorted(bars, key=lambda b: (b.bay_id, b.start_date, b.id)):
        factor = bar.capacity_expansion_factor or 1.0
        tag = "  EXPANDED" if factor > 1 else ""
        if factor >= config.expansion_ceiling:
            tag = "  AT CEILING"
        label = bar.project_number or f"#{bar.project_id}"
        lines.append(
            f"Bay {bar.bay_id} | {label} | "
            f"{bar.start_date.strftime('%b %d')} -> {bar.end_date.strftime('%b %d')} | "
            f"x{factor:.2f} | PROD {bar.production_width or 0:.1f} of {bar.width:.1f}{tag}"
        )

    expanded = sum(1 for b in bars if (b.capacity_expansion_factor or 1.0) > 1)
    lines.append(f"\nExpanded PROD: {expanded}/{len(bars)}")

    for t in team_summaries:
        lines.append(
            f"  Team {t.team_name}: {t.total_staff_count} staff | "
            f"{t.weekly_capacity:.0f} h/week | {t.active_project_count} projects | "
            f"{t.utilization_percentage}% ({t.status.value})"
        )

    return "\n".join(lines)


def compute_layout(
    bars: Sequence[ScheduleBar],
    bays: Sequence[Bay],
    *,
    config: LayoutConfig | None = None,
    week_start: datetime | None = None,
    observer: LayoutObserver | None = None,
    now: datetime | None = None,
) -> LayoutResult:
    """Lay out *bars* and return them with a text summary.

    Team utilization is only summarized when *week_start* is given.
    """
    config = config or DEFAULT_CONFIG

    laid_out = update_all(bars, bays, config=config, observer=observer)

    team_summaries: list[TeamCapacitySummary] = []
    if week_start is not None:
        team_summaries = summarize_all_teams(bays, bars, week_start, config=config)

    text = _build_text_summary(laid_out, team_summaries, config)

    return LayoutResult(
        bars=laid_out,
        text_summary=text,
        team_summaries=team_summaries,
        generated_at=now or datetime.now(timezone.utc),
    )
