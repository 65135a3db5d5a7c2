"""Domain dataclasses shared across the layout engine and its callers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class CapacityPolicy(Enum):
    REPRESENTATIVE = "representative"
    SUMMED = "summed"


class UtilizationStatus(Enum):
    AVAILABLE = "available"
    GOOD = "good_utilization"
    HIGH = "high_utilization"
    OVER_CAPACITY = "over_capacity"


# ---------------------------------------------------------------------------
# Domain dataclasses
# ---------------------------------------------------------------------------

@dataclass
class Bay:
    id: int
    name: str = ""
    bay_number: int = 0
    team: Optional[str] = None
    assembly_staff_count: Optional[int] = None
    electrical_staff_count: Optional[int] = None
    hours_per_person_per_week: Optional[float] = None


@dataclass
class ScheduleBar:
    """A project's placement on a bay timeline.

    The ``*_width`` fields and ``capacity_expansion_factor`` are derived on
    every layout pass and are never persisted.
    """
    id: int
    project_id: int
    bay_id: int
    start_date: datetime
    end_date: datetime
    width: float
    fab_percentage: float
    paint_percentage: float
    production_percentage: float
    it_percentage: float
    ntc_percentage: float
    qc_percentage: float
    total_hours: Optional[float] = None
    project_name: str = ""
    project_number: str = ""
    left: float = 0.0
    color: str = ""
    row: int = 0
    fab_width: Optional[float] = None
    paint_width: Optional[float] = None
    production_width: Optional[float] = None
    it_width: Optional[float] = None
    ntc_width: Optional[float] = None
    qc_width: Optional[float] = None
    capacity_expansion_factor: Optional[float] = None

    @property
    def percentage_total(self) -> float:
        return (
            self.fab_percentage + self.paint_percentage
            + self.production_percentage + self.it_percentage
            + self.ntc_percentage + self.qc_percentage
        )

    @property
    def is_laid_out(self) -> bool:
        return self.capacity_expansion_factor is not None

    def to_render_dict(self) -> dict:
        """Field names as read by the bay schedule renderer."""
        return {
            "id": self.id,
            "projectId": self.project_id,
            "bayId": self.bay_id,
            "width": self.width,
            "left": self.left,
            "row": self.row,
            "fabWidth": self.fab_width,
            "paintWidth": self.paint_width,
            "productionWidth": self.production_width,
            "itWidth": self.it_width,
            "ntcWidth": self.ntc_width,
            "qcWidth": self.qc_width,
            "capacityExpansionFactor": self.capacity_expansion_factor,
        }


@dataclass
class PhaseWidthDiagnostics:
    """Intermediate values of one phase-width computation, for observers."""
    bar_id: int
    bay_found: bool
    team_capacity: float
    overlap_count: int
    capacity_per_project: float
    production_hours: Optional[float]
    raw_expansion: Optional[float]
    capacity_expansion_factor: float


@dataclass
class PhaseSegment:
    phase: str
    left: float
    width: float

    @property
    def right(self) -> float:
        return self.left + self.width


@dataclass
class ExactFitWidths:
    fab_width: int
    paint_width: int
    prod_width: int
    it_width: int
    ntc_width: int
    qc_width: float
    total_width: float
    exact_match: bool


@dataclass
class ProdAlignedLayout:
    widths: ExactFitWidths
    bar_left_offset: int
    bar_visual_width: float
    bar_actual_width: float
    segments: list[PhaseSegment] = field(default_factory=list)
    prod_start_position: int = 0


@dataclass
class DurationEstimate:
    total_hours: float
    production_related_percentage: float
    production_hours: float
    team_capacity: float
    recommended_weeks: int
    start_date: datetime
    end_date: datetime


@dataclass
class TeamCapacitySummary:
    team_name: str
    bay_ids: list[int]
    assembly_staff_count: int
    electrical_staff_count: int
    hours_per_week: float
    weekly_capacity: float
    active_project_count: int
    estimated_weekly_hours: float
    utilization_percentage: int
    status: UtilizationStatus

    @property
    def total_staff_count(self) -> int:
        return self.assembly_staff_count + self.electrical_staff_count


@dataclass
class LayoutResult:
    """Returned by the layout orchestrator to the rendering layer."""
    bars: list[ScheduleBar]
    text_summary: str
    team_summaries: list[TeamCapacitySummary] = field(default_factory=list)
    generated_at: Optional[datetime] = None
