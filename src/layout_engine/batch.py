"""Batch phase-width update over a whole bar collection."""

from __future__ import annotations

import logging
from typing import Sequence

from src.shared.models import Bay, ScheduleBar

from .config import LayoutConfig
from .phase_widths import LayoutObserver, compute_phase_widths

logger = logging.getLogger(__name__)


def update_all(
    bars: Sequence[ScheduleBar],
    all_bays: Sequence[Bay],
    *,
    config: LayoutConfig | None = None,
    observer: LayoutObserver | None = None,
) -> list[ScheduleBar]:
    """Lay out every bar against the original snapshot of *bars*.

    Contention is always measured on the input list, never on partially
    updated results, so output does not depend on iteration order.
    """
    snapshot = list(bars)
    updated = [
        compute_phase_widths(bar, snapshot, all_bays, config=config, observer=observer)
        for bar in snapshot
    ]
    expanded = sum(1 for b in updated if b.capacity_expansion_factor > 1)
    logger.info("Laid out %d bars (%d with expanded PROD)", len(updated), expanded)
    return updated
