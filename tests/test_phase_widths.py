"""Phase width calculation with capacity-aware PROD expansion.

Covers the Alpha team scenario (87 h/week, 1000 h project), the shared-bay
scenario (80 h/week split between two overlapping bars) and the degrade-to-
default paths for missing bays and missing hours.

Usage:
    uv run pytest tests/test_phase_widths.py
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable

import pytest

from src.shared.models import Bay, PhaseWidthDiagnostics, ScheduleBar
from src.layout_engine.config import LayoutConfig
from src.layout_engine.phase_widths import clamp_expansion, compute_phase_widths


def _dt(month: int, day: int, hour: int = 8) -> datetime:
    return datetime(2026, month, day, hour, 0, 0, tzinfo=timezone.utc)


def _make_bay(
    bay_id: int, team: str | None,
    assembly: int | None = None, electrical: int | None = None,
    hours: float | None = None,
) -> Bay:
    return Bay(
        id=bay_id,
        name=f"Bay {bay_id}",
        team=team,
        assembly_staff_count=assembly,
        electrical_staff_count=electrical,
        hours_per_person_per_week=hours,
    )


def _make_bar(
    bar_id: int, bay_id: int,
    start: datetime | None = None, end: datetime | None = None,
    total_hours: float | None = None, width: float = 500,
    production: float = 60, fab: float = 10, paint: float = 5,
    it: float = 10, ntc: float = 5, qc: float = 10,
) -> ScheduleBar:
    return ScheduleBar(
        id=bar_id,
        project_id=1000 + bar_id,
        bay_id=bay_id,
        start_date=start or _dt(3, 1),
        end_date=end or _dt(4, 1),
        width=width,
        fab_percentage=fab,
        paint_percentage=paint,
        production_percentage=production,
        it_percentage=it,
        ntc_percentage=ntc,
        qc_percentage=qc,
        total_hours=total_hours,
        project_number=f"PRJ-{bar_id:03d}",
    )


ALPHA = _make_bay(1, "Alpha", assembly=2, electrical=1, hours=29)  # 87 h/week
BETA = _make_bay(2, "Beta", assembly=2, electrical=2, hours=20)    # 80 h/week


def _collect() -> tuple[list[PhaseWidthDiagnostics], Callable[[PhaseWidthDiagnostics], None]]:
    seen: list[PhaseWidthDiagnostics] = []
    return seen, seen.append


# ------------------------------------------------------------------
# Scenarios
# ------------------------------------------------------------------

def test_alpha_scenario_clamps_to_default_ceiling():
    bar = _make_bar(1, ALPHA.id, total_hours=1000, production=60, width=500)
    seen, observer = _collect()

    out = compute_phase_widths(bar, [bar], [ALPHA], observer=observer)

    diag = seen[0]
    assert diag.team_capacity == 87
    assert diag.overlap_count == 0
    assert diag.capacity_per_project == 87
    assert diag.production_hours == pytest.approx(600)
    assert diag.raw_expansion == pytest.approx(6.8966, rel=1e-4)
    assert out.capacity_expansion_factor == 5
    assert out.production_width == pytest.approx(0.6 * 500 * 5)


def test_alpha_scenario_with_ceiling_ten():
    bar = _make_bar(1, ALPHA.id, total_hours=1000, production=60, width=500)
    config = LayoutConfig(expansion_ceiling=10)

    out = compute_phase_widths(bar, [bar], [ALPHA], config=config)

    assert out.capacity_expansion_factor == pytest.approx(600 / 87)
    assert out.production_width == pytest.approx(0.6 * 500 * 600 / 87)


def test_overlapping_bars_split_team_capacity():
    a = _make_bar(1, BETA.id, _dt(3, 1), _dt(3, 31), total_hours=400, production=50)
    b = _make_bar(2, BETA.id, _dt(3, 1), _dt(3, 31), total_hours=100, production=50)
    seen, observer = _collect()

    out = compute_phase_widths(a, [a, b], [BETA], observer=observer)

    diag = seen[0]
    assert diag.team_capacity == 80
    assert diag.overlap_count == 1
    assert diag.capacity_per_project == 40
    assert diag.production_hours == 200
    assert diag.raw_expansion == 5
    assert out.capacity_expansion_factor == 5


def test_missing_bay_uses_default_capacity():
    bar = _make_bar(1, bay_id=99, total_hours=116, production=100,
                    fab=0, paint=0, it=0, ntc=0, qc=0)
    seen, observer = _collect()

    out = compute_phase_widths(bar, [bar], [ALPHA], observer=observer)

    assert seen[0].bay_found is False
    assert seen[0].team_capacity == 58
    assert out.capacity_expansion_factor == pytest.approx(2.0)
    assert out.production_width == pytest.approx(500 * 2.0)


def test_team_less_bay_uses_default_capacity():
    bay = _make_bay(3, None, assembly=10, electrical=10, hours=40)
    bar = _make_bar(1, bay.id, total_hours=174, production=100,
                    fab=0, paint=0, it=0, ntc=0, qc=0)
    out = compute_phase_widths(bar, [bar], [bay])
    assert out.capacity_expansion_factor == pytest.approx(3.0)


# ------------------------------------------------------------------
# Properties
# ------------------------------------------------------------------

def test_no_hours_gives_proportional_widths():
    bar = _make_bar(1, ALPHA.id, total_hours=None, width=640)

    out = compute_phase_widths(bar, [bar], [ALPHA])

    assert out.capacity_expansion_factor == 1
    assert out.fab_width == (10 / 100) * 640
    assert out.paint_width == (5 / 100) * 640
    assert out.production_width == (60 / 100) * 640 * 1.0
    assert out.it_width == (10 / 100) * 640
    assert out.ntc_width == (5 / 100) * 640
    assert out.qc_width == (10 / 100) * 640


def test_zero_hours_is_treated_as_missing():
    bar = _make_bar(1, ALPHA.id, total_hours=0)
    out = compute_phase_widths(bar, [bar], [ALPHA])
    assert out.capacity_expansion_factor == 1


def test_small_project_is_never_contracted():
    bar = _make_bar(1, ALPHA.id, total_hours=10, production=60)
    out = compute_phase_widths(bar, [bar], [ALPHA])
    assert out.capacity_expansion_factor == 1
    assert out.production_width == pytest.approx(0.6 * 500)


@pytest.mark.parametrize("hours", [1, 100, 1_000, 1_000_000, 1e12])
@pytest.mark.parametrize("ceiling", [5, 10])
def test_factor_stays_within_bounds(hours, ceiling):
    bar = _make_bar(1, ALPHA.id, total_hours=hours)
    out = compute_phase_widths(bar, [bar], [ALPHA], config=LayoutConfig(expansion_ceiling=ceiling))
    assert 1 <= out.capacity_expansion_factor <= ceiling


def test_only_production_is_expanded():
    bar = _make_bar(1, ALPHA.id, total_hours=5000)
    plain = compute_phase_widths(replace(bar, total_hours=None), [bar], [ALPHA])
    expanded = compute_phase_widths(bar, [bar], [ALPHA])

    assert expanded.capacity_expansion_factor == 5
    assert expanded.fab_width == plain.fab_width
    assert expanded.paint_width == plain.paint_width
    assert expanded.it_width == plain.it_width
    assert expanded.ntc_width == plain.ntc_width
    assert expanded.qc_width == plain.qc_width
    assert expanded.production_width == pytest.approx(plain.production_width * 5)


def test_percentages_not_summing_to_100_are_tolerated():
    bar = _make_bar(1, ALPHA.id, fab=50, paint=50, production=50, it=50, ntc=50, qc=50)
    out = compute_phase_widths(bar, [bar], [ALPHA])
    total = (out.fab_width + out.paint_width + out.production_width
             + out.it_width + out.ntc_width + out.qc_width)
    assert total == pytest.approx(3 * 500)


def test_input_bar_is_not_mutated():
    bar = _make_bar(1, ALPHA.id, total_hours=1000)
    out = compute_phase_widths(bar, [bar], [ALPHA])
    assert bar.production_width is None
    assert bar.capacity_expansion_factor is None
    assert out is not bar
    assert out.id == bar.id
    assert out.project_number == bar.project_number


def test_failing_observer_does_not_abort_layout():
    def broken(_diag):
        raise RuntimeError("boom")

    bar = _make_bar(1, ALPHA.id, total_hours=1000)
    out = compute_phase_widths(bar, [bar], [ALPHA], observer=broken)
    assert out.capacity_expansion_factor == 5


def test_render_dict_uses_renderer_field_names():
    bar = _make_bar(1, ALPHA.id, total_hours=None)
    data = compute_phase_widths(bar, [bar], [ALPHA]).to_render_dict()
    for key in ("fabWidth", "paintWidth", "productionWidth", "itWidth", "ntcWidth", "qcWidth"):
        assert data[key] is not None
    assert data["capacityExpansionFactor"] == 1
    assert data["bayId"] == ALPHA.id


def test_clamp_expansion():
    assert clamp_expansion(0.2, 5) == 1
    assert clamp_expansion(3.5, 5) == 3.5
    assert clamp_expansion(12, 5) == 5


@pytest.mark.parametrize("hours", [float("nan"), float("inf")])
def test_non_finite_hours_are_treated_as_missing(hours):
    bar = _make_bar(1, ALPHA.id, total_hours=hours)
    seen, observer = _collect()

    out = compute_phase_widths(bar, [bar], [ALPHA], observer=observer)

    assert out.capacity_expansion_factor == 1
    assert out.production_width == pytest.approx(0.6 * 500)
    assert seen[0].production_hours is None


def test_percentage_totals_do_not_warn(caplog):
    near_100 = _make_bar(1, ALPHA.id, fab=33.3, paint=33.3, production=33.4,
                         it=0, ntc=0, qc=0)
    company_split = _make_bar(2, ALPHA.id, fab=27, paint=7, production=60,
                              it=7, ntc=7, qc=7)

    with caplog.at_level("DEBUG", logger="src.layout_engine.phase_widths"):
        compute_phase_widths(near_100, [near_100], [ALPHA])
        compute_phase_widths(company_split, [company_split], [ALPHA])

    assert not [r for r in caplog.records if r.levelname == "WARNING"]
    notes = [r.getMessage() for r in caplog.records if "not 100" in r.getMessage()]
    # only the 115 % split is reported
    assert len(notes) == 1
    assert notes[0].startswith("Bar 2 ")
