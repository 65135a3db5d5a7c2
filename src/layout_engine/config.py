"""Layout settings loaded from the environment (``.env`` supported).

Variables::

    LAYOUT_EXPANSION_CEILING       upper bound of the PROD expansion factor (>= 1)
    LAYOUT_CAPACITY_POLICY         "representative" or "summed"
    LAYOUT_DEFAULT_TEAM_CAPACITY   hours/week used when no team capacity resolves
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from src.shared.models import CapacityPolicy

from .constants import DEFAULT_EXPANSION_CEILING, DEFAULT_TEAM_CAPACITY, MIN_EXPANSION_FACTOR

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutConfig:
    expansion_ceiling: float = DEFAULT_EXPANSION_CEILING
    capacity_policy: CapacityPolicy = CapacityPolicy.REPRESENTATIVE
    default_team_capacity: float = float(DEFAULT_TEAM_CAPACITY)

    def __post_init__(self) -> None:
        # NaN fails both checks
        if not self.expansion_ceiling >= MIN_EXPANSION_FACTOR:
            raise ValueError(
                f"expansion_ceiling must be >= {MIN_EXPANSION_FACTOR}, got {self.expansion_ceiling}"
            )
        if not self.default_team_capacity > 0:
            raise ValueError(
                f"default_team_capacity must be > 0, got {self.default_team_capacity}"
            )


DEFAULT_CONFIG = LayoutConfig()


def _read_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _read_policy(name: str, default: CapacityPolicy) -> CapacityPolicy:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return CapacityPolicy(raw.strip().lower())
    except ValueError:
        valid = ", ".join(p.value for p in CapacityPolicy)
        raise ValueError(f"{name} must be one of: {valid}, got {raw!r}") from None


def load_layout_config(env_path: str | None = None) -> LayoutConfig:
    """Build a ``LayoutConfig`` from the environment.

    Args:
        env_path: Optional path to a .env file.  If None, the default
                  dotenv search is used.

    Raises:
        ValueError: If a variable is present but malformed or out of range.
    """
    if env_path:
        load_dotenv(env_path)
    else:
        load_dotenv()

    config = LayoutConfig(
        expansion_ceiling=_read_float("LAYOUT_EXPANSION_CEILING", DEFAULT_EXPANSION_CEILING),
        capacity_policy=_read_policy("LAYOUT_CAPACITY_POLICY", CapacityPolicy.REPRESENTATIVE),
        default_team_capacity=_read_float(
            "LAYOUT_DEFAULT_TEAM_CAPACITY", float(DEFAULT_TEAM_CAPACITY)
        ),
    )
    logger.info(
        "Layout config: ceiling=%.1f policy=%s default_capacity=%.1f",
        config.expansion_ceiling, config.capacity_policy.value, config.default_team_capacity,
    )
    return config
