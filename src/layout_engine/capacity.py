"""Team capacity resolution (labor hours per week) for a bay."""

from __future__ import annotations

import logging
from typing import Sequence

from src.shared.models import Bay, CapacityPolicy

from .config import DEFAULT_CONFIG, LayoutConfig
from .constants import (
    DEFAULT_ASSEMBLY_STAFF,
    DEFAULT_ELECTRICAL_STAFF,
    DEFAULT_HOURS_PER_WEEK,
)

logger = logging.getLogger(__name__)


def team_bays(bay: Bay, all_bays: Sequence[Bay]) -> list[Bay]:
    """Bays sharing *bay*'s team, in roster order.

    Falls back to ``[bay]`` when the roster does not contain the team.
    """
    matching = [b for b in all_bays if b.team == bay.team]
    return matching or [bay]


def _representative_capacity(bays: list[Bay]) -> float:
    # staff are pooled per team: only the first team row counts
    first = bays[0]
    assembly = first.assembly_staff_count or DEFAULT_ASSEMBLY_STAFF
    electrical = first.electrical_staff_count or DEFAULT_ELECTRICAL_STAFF
    hours = first.hours_per_person_per_week or DEFAULT_HOURS_PER_WEEK
    return (assembly + electrical) * hours


def _summed_capacity(bays: list[Bay]) -> float:
    staff = sum(
        (b.assembly_staff_count or 0) + (b.electrical_staff_count or 0)
        for b in bays
    )
    hours = DEFAULT_HOURS_PER_WEEK
    for b in bays:
        if b.hours_per_person_per_week is not None:
            hours = b.hours_per_person_per_week
    return staff * hours


def resolve_team_capacity(
    bay: Bay,
    all_bays: Sequence[Bay],
    policy: CapacityPolicy | None = None,
    *,
    config: LayoutConfig | None = None,
) -> float:
    """Weekly labor-hour capacity of the team owning *bay*.

    Always returns a positive number; bays without a team, and teams whose
    staffing works out to zero, get ``config.default_team_capacity``.
    """
    config = config or DEFAULT_CONFIG
    policy = policy or config.capacity_policy

    if not bay.team:
        logger.debug("Bay %s has no team, using default capacity %.1f",
                     bay.id, config.default_team_capacity)
        return config.default_team_capacity

    bays = team_bays(bay, all_bays)
    if policy is CapacityPolicy.SUMMED:
        capacity = _summed_capacity(bays)
    else:
        capacity = _representative_capacity(bays)

    if capacity <= 0:
        logger.warning(
            "Team %s resolved to non-positive capacity (%.1f), using default %.1f",
            bay.team, capacity, config.default_team_capacity,
        )
        return config.default_team_capacity

    logger.debug("Team %s capacity %.1f h/week (%s, %d bays)",
                 bay.team, capacity, policy.value, len(bays))
    return float(capacity)
