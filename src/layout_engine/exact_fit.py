"""Exact-fit segment layout for whole-unit (pixel) renderers.

Percentages are normalized to 100 and the first five widths floored; QC
takes the remainder so the segments sum to the bar width exactly.  The
PROD-aligned variant shifts the bar left so PROD starts at the scheduled
start date with FAB and PAINT drawn before it.
"""

from __future__ import annotations

import logging
import math
from typing import Mapping, Optional, Union

from src.shared.models import (
    ExactFitWidths,
    PhaseSegment,
    ProdAlignedLayout,
    ScheduleBar,
)

from .constants import DEFAULT_PHASE_PERCENTAGES, PHASES_ORDER

logger = logging.getLogger(__name__)

PercentValue = Union[float, int, str, None]


def bar_percentages(bar: ScheduleBar) -> dict[str, float]:
    return {
        "fab": bar.fab_percentage,
        "paint": bar.paint_percentage,
        "production": bar.production_percentage,
        "it": bar.it_percentage,
        "ntc": bar.ntc_percentage,
        "qc": bar.qc_percentage,
    }


def _parse_percent(value: PercentValue, default: float) -> float:
    """Parse *value* as a number; empty, zero or unparseable means *default*."""
    if value is None:
        return default
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(parsed) or parsed == 0:
        return default
    return parsed


def resolve_percentages(
    percentages: Optional[Mapping[str, PercentValue]],
) -> dict[str, float]:
    """Phase -> percentage, filling gaps from the company standard split."""
    if not percentages:
        return dict(DEFAULT_PHASE_PERCENTAGES)
    return {
        phase: _parse_percent(percentages.get(phase), DEFAULT_PHASE_PERCENTAGES[phase])
        for phase in PHASES_ORDER
    }


def calculate_exact_fit_phase_widths(
    total_width: float,
    percentages: Optional[Mapping[str, PercentValue]] = None,
) -> ExactFitWidths:
    pct = resolve_percentages(percentages)
    total_pct = sum(pct.values())
    if total_pct <= 0:
        logger.warning("Non-positive percentage total %.1f, using standard split", total_pct)
        pct = dict(DEFAULT_PHASE_PERCENTAGES)
        total_pct = sum(pct.values())
    normalize = 1.0 if total_pct == 100 else 100 / total_pct

    floored = {
        phase: math.floor(total_width * (pct[phase] * normalize / 100))
        for phase in PHASES_ORDER[:-1]
    }
    qc_width = total_width - sum(floored.values())
    widths_sum = sum(floored.values()) + qc_width

    return ExactFitWidths(
        fab_width=floored["fab"],
        paint_width=floored["paint"],
        prod_width=floored["production"],
        it_width=floored["it"],
        ntc_width=floored["ntc"],
        qc_width=qc_width,
        total_width=total_width,
        exact_match=widths_sum == total_width,
    )


def _segments_from_widths(widths: list[tuple[str, float]]) -> list[PhaseSegment]:
    segments: list[PhaseSegment] = []
    cursor = 0.0
    for phase, width in widths:
        segments.append(PhaseSegment(phase=phase, left=cursor, width=width))
        cursor += width
    return segments


def calculate_prod_aligned_positions(
    total_width: float,
    percentages: Optional[Mapping[str, PercentValue]] = None,
) -> ProdAlignedLayout:
    widths = calculate_exact_fit_phase_widths(total_width, percentages)
    bar_left_offset = -(widths.fab_width + widths.paint_width)

    segments = _segments_from_widths([
        ("fab", widths.fab_width),
        ("paint", widths.paint_width),
        ("production", widths.prod_width),
        ("it", widths.it_width),
        ("ntc", widths.ntc_width),
        ("qc", widths.qc_width),
    ])

    return ProdAlignedLayout(
        widths=widths,
        bar_left_offset=bar_left_offset,
        bar_visual_width=total_width,
        bar_actual_width=total_width - bar_left_offset,
        segments=segments,
        prod_start_position=0,
    )


def phase_segments(bar: ScheduleBar) -> list[PhaseSegment]:
    """Contiguous left/width segments of an already laid-out bar."""
    if not bar.is_laid_out:
        return []
    return _segments_from_widths([
        ("fab", bar.fab_width),
        ("paint", bar.paint_width),
        ("production", bar.production_width),
        ("it", bar.it_width),
        ("ntc", bar.ntc_width),
        ("qc", bar.qc_width),
    ])
