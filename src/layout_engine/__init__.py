"""Capacity-aware phase layout for bay schedule bars."""

from .batch import update_all
from .capacity import resolve_team_capacity
from .config import LayoutConfig, load_layout_config
from .contention import count_overlapping, find_overlapping
from .orchestrator import compute_layout
from .phase_widths import compute_phase_widths

__all__ = [
    "LayoutConfig",
    "compute_layout",
    "compute_phase_widths",
    "count_overlapping",
    "find_overlapping",
    "load_layout_config",
    "resolve_team_capacity",
    "update_all",
]
