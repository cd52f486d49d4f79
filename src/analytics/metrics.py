"""
src/analytics/metrics.py
────────────────────────
Derived metrics from raw inspection readings.

  Polarization Index (PI)          = IR(10 min) / IR(1 min)    per phase
  Dielectric Absorption Ratio (DAR) = IR(1 min) / IR(30 sec)   per phase

A ratio whose denominator is absent or zero is undefined and returned as
None, never as 0 or inf. The display helpers at the bottom of the module
decide whether an undefined value is shown as "N/A" or as 0.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from numbers import Real

import numpy as np

from config.equipment import PHASES
from config.status import UNDEFINED_LABEL, Band
from config.thresholds import BRUSH_MONITOR_MM, BRUSH_REPLACE_MM, SLIP_RING_IR_MIN_GOHM
from src.analytics.classifier import MeasurementKind, classify, classify_optional
from src.data.models import (
    CarbonBrushRecord,
    PhaseReadings,
    ThermographySession,
    WindingResistanceRecord,
)


@dataclass(frozen=True)
class PointStats:
    min: float
    max: float
    mean: float
    count: int


# ── Ratio helpers ─────────────────────────────────────────────────────────────

def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _ratio(numerator: float | None, denominator: float | None) -> float | None:
    if not _is_number(numerator) or not _is_number(denominator) or denominator == 0:
        return None
    result = numerator / denominator
    return result if math.isfinite(result) else None


def compute_phase_pi(one_min: float | None, ten_min: float | None) -> float | None:
    """PI for a single phase: IR(10 min) / IR(1 min)."""
    return _ratio(ten_min, one_min)


def compute_phase_pis(readings: PhaseReadings) -> dict[str, float | None]:
    return {
        phase: compute_phase_pi(readings.reading(phase, "1min"), readings.reading(phase, "10min"))
        for phase in PHASES
    }


def compute_pi(readings: PhaseReadings) -> float | None:
    """
    Mean PI across the U, V and W phases.

    Phases whose 1-minute reading is absent or zero, or whose ratio is not
    finite, are dropped before averaging. None when every phase is dropped.
    """
    ratios = [r for r in compute_phase_pis(readings).values() if r is not None]
    if not ratios:
        return None
    return float(np.mean(ratios))


def compute_phase_dar(thirty_sec: float | None, one_min: float | None) -> float | None:
    """DAR for a single phase: IR(1 min) / IR(30 sec)."""
    return _ratio(one_min, thirty_sec)


def compute_dar(readings: PhaseReadings) -> dict[str, float | None]:
    """Per-phase DAR keyed by phase ("ug", "vg", "wg")."""
    return {
        phase: compute_phase_dar(readings.reading(phase, "30sec"), readings.reading(phase, "1min"))
        for phase in PHASES
    }


# ── Aggregates ────────────────────────────────────────────────────────────────

def aggregate(points: Mapping[str, object]) -> PointStats | None:
    """
    Min / max / mean over the numeric values of a point mapping.

    Non-numeric, missing and non-finite entries are excluded rather than
    counted as zero. Returns None when no numeric value remains.
    """
    values = [float(v) for v in points.values() if _is_number(v)]
    if not values:
        return None
    arr = np.asarray(values, dtype=float)
    return PointStats(
        min=float(arr.min()),
        max=float(arr.max()),
        mean=float(arr.mean()),
        count=len(values),
    )


def average_ir_1min(readings: PhaseReadings) -> float | None:
    """Mean of the available 1-minute IR readings across phases."""
    return _mean_or_none(readings.reading(phase, "1min") for phase in PHASES)


def _mean_or_none(values: Iterable[float | None]) -> float | None:
    stats = aggregate(dict(enumerate(values)))
    return stats.mean if stats else None


# ── Record-level status ───────────────────────────────────────────────────────

def min_brush_measurement(record: CarbonBrushRecord) -> float | None:
    stats = aggregate(record.measurements)
    return stats.min if stats else None


def brush_band(record: CarbonBrushRecord) -> Band | None:
    return classify_optional(min_brush_measurement(record), MeasurementKind.BRUSH_WEAR)


def slip_ring_band(record: CarbonBrushRecord) -> Band | None:
    return classify_optional(record.slip_ring_ir, MeasurementKind.SLIP_RING_IR)


def carbon_brush_status(record: CarbonBrushRecord) -> str:
    """Status text used in lists and spreadsheets."""
    min_brush = min_brush_measurement(record)
    if min_brush is None:
        return "No Measurements"
    if min_brush < BRUSH_REPLACE_MM:
        return f"Replace Required (H<{BRUSH_REPLACE_MM:g}mm)"
    if record.slip_ring_ir is not None and record.slip_ring_ir < SLIP_RING_IR_MIN_GOHM:
        return f"IR Below Limit (<{SLIP_RING_IR_MIN_GOHM:.1f} GΩ)"
    if min_brush < BRUSH_MONITOR_MM:
        return "Monitor"
    return "Good"


def needs_attention(record: CarbonBrushRecord) -> bool:
    """True when the brushes or the slip-ring insulation call for action."""
    min_brush = min_brush_measurement(record)
    if min_brush is not None and min_brush < BRUSH_MONITOR_MM:
        return True
    return record.slip_ring_ir is not None and record.slip_ring_ir < SLIP_RING_IR_MIN_GOHM


def winding_ir_band(record: WindingResistanceRecord) -> Band | None:
    return classify_optional(average_ir_1min(record.ir_values), MeasurementKind.WINDING_IR)


def winding_pi(record: WindingResistanceRecord) -> float | None:
    return compute_pi(record.ir_values)


def winding_dar(record: WindingResistanceRecord) -> dict[str, float | None]:
    if record.dar_values is None:
        return {phase: None for phase in PHASES}
    return compute_dar(record.dar_values)


@dataclass(frozen=True)
class TemperatureSummary:
    total: int
    normal: int
    warning: int
    critical: int
    stats: PointStats | None

    @property
    def worst(self) -> Band | None:
        if self.critical:
            return Band.CRITICAL
        if self.warning:
            return Band.WARNING
        if self.normal:
            return Band.NORMAL
        return None


def temperature_summary(session: ThermographySession) -> TemperatureSummary:
    """Band counts and aggregate statistics over the measured points."""
    temps = {
        f"{p.group or ''}:{p.point}": p.temperature
        for p in session.points
        if p.temperature is not None
    }
    bands = [classify(t, MeasurementKind.TEMPERATURE) for t in temps.values()]
    return TemperatureSummary(
        total=len(bands),
        normal=bands.count(Band.NORMAL),
        warning=bands.count(Band.WARNING),
        critical=bands.count(Band.CRITICAL),
        stats=aggregate(temps),
    )


# ── Display helpers ───────────────────────────────────────────────────────────

def display_metric(value: float | None, digits: int = 2, undefined: str = UNDEFINED_LABEL) -> str:
    """Format a metric, showing `undefined` instead of a misleading zero."""
    if value is None:
        return undefined
    return f"{value:.{digits}f}"


def metric_or_zero(value: float | None) -> float:
    """Numeric rendering for contexts (exports, form echoes) that expect 0."""
    return 0.0 if value is None else value
