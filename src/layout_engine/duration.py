"""Recommended schedule duration for a project placed on a bay."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Mapping, Optional, Sequence

from src.shared.models import Bay, DurationEstimate

from .capacity import resolve_team_capacity
from .config import DEFAULT_CONFIG, LayoutConfig
from .constants import PRODUCTION_RELATED_PHASES
from .exact_fit import PercentValue, resolve_percentages

logger = logging.getLogger(__name__)


def recommend_duration(
    total_hours: Optional[float],
    percentages: Optional[Mapping[str, PercentValue]],
    bay: Optional[Bay],
    all_bays: Sequence[Bay],
    start_date: datetime,
    *,
    config: LayoutConfig | None = None,
) -> DurationEstimate | None:
    """Weeks the team needs for the production-related phases (PROD, IT, NTC, QC).

    FAB and PAINT are done outside the bay and do not count.  Returns
    ``None`` when the project has no labor-hour estimate.
    """
    if not total_hours or total_hours <= 0:
        return None
    config = config or DEFAULT_CONFIG

    pct = resolve_percentages(percentages)
    related_pct = sum(pct[phase] for phase in PRODUCTION_RELATED_PHASES)
    production_hours = total_hours * (related_pct / 100)

    if bay is None:
        team_capacity = config.default_team_capacity
    else:
        team_capacity = resolve_team_capacity(bay, all_bays, config=config)

    weeks = math.ceil(production_hours / team_capacity)
    end_date = start_date + timedelta(weeks=weeks)

    logger.debug(
        "Duration: %.0f h x %.0f%% = %.0f production h at %.1f h/week -> %d weeks",
        total_hours, related_pct, production_hours, team_capacity, weeks,
    )
    return DurationEstimate(
        total_hours=total_hours,
        production_related_percentage=related_pct,
        production_hours=production_hours,
        team_capacity=team_capacity,
        recommended_weeks=weeks,
        start_date=start_date,
        end_date=end_date,
    )
