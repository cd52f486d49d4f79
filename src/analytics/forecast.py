"""
src/analytics/forecast.py
─────────────────────────
Brush replacement forecasting.

Each inspection is reduced to its worst brush (the minimum measurement), a
least-squares line is fitted over (days since first inspection, value) and
the line is extrapolated from the latest inspection to the critical height.

No forecast is produced from fewer than two inspections, from inspections
that all share one date, or from a flat or rising trend.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

import numpy as np

from config.thresholds import BRUSH_REPLACE_MM
from src.analytics.metrics import min_brush_measurement
from src.data.models import CarbonBrushRecord

# Slopes this close to zero are floating-point noise from np.polyfit on a
# flat series, not wear.
_FLAT_SLOPE = 1e-9


@dataclass(frozen=True)
class WearPoint:
    date: date
    value: float


@dataclass(frozen=True)
class WearForecast:
    predicted_date: date
    wear_rate_per_day: float  # positive = material lost per day
    days_remaining: float
    current_value: float
    confidence: float  # R² of the fit, in percent

    @property
    def wear_rate_per_month(self) -> float:
        return self.wear_rate_per_day * 30.0


def history_from_records(records: Iterable[CarbonBrushRecord]) -> list[WearPoint]:
    """One WearPoint per inspection (worst brush), sorted by date ascending."""
    points = []
    for record in records:
        worst = min_brush_measurement(record)
        if worst is not None:
            points.append(WearPoint(date=record.inspection_date, value=worst))
    return sorted(points, key=lambda p: p.date)


def forecast_replacement(
    history: Iterable[WearPoint],
    critical_threshold: float = BRUSH_REPLACE_MM,
) -> WearForecast | None:
    """
    Project the date at which the measurement reaches `critical_threshold`.

    Args:
        history: (date, value) points for a single piece of equipment
        critical_threshold: value at which replacement is due (25 mm for brushes)

    Returns:
        WearForecast, or None when no meaningful projection exists.
    """
    points = sorted(history, key=lambda p: p.date)
    if len(points) < 2:
        return None

    first = points[0].date
    x = np.array([(p.date - first).days for p in points], dtype=float)
    y = np.array([p.value for p in points], dtype=float)

    if x[-1] - x[0] <= 0 or not np.all(np.isfinite(y)):
        return None

    slope, intercept = np.polyfit(x, y, 1)
    if slope >= -_FLAT_SLOPE:
        return None

    current = float(y[-1])
    rate = -float(slope)
    days_remaining = max(0.0, (current - critical_threshold) / rate)
    # very slow wear projects past the last representable date
    if not math.isfinite(days_remaining) or days_remaining > (date.max - points[-1].date).days:
        return None

    return WearForecast(
        predicted_date=points[-1].date + timedelta(days=int(days_remaining)),
        wear_rate_per_day=rate,
        days_remaining=round(days_remaining, 1),
        current_value=current,
        confidence=round(_r_squared(x, y, slope, intercept) * 100.0, 1),
    )


def forecast_for_records(
    records: Iterable[CarbonBrushRecord],
    critical_threshold: float = BRUSH_REPLACE_MM,
) -> WearForecast | None:
    """Convenience wrapper: records of one tag → forecast."""
    return forecast_replacement(history_from_records(records), critical_threshold)


def _r_squared(x: np.ndarray, y: np.ndarray, slope: float, intercept: float) -> float:
    ss_tot = float(np.sum((y - y.mean()) ** 2))
    if ss_tot == 0.0:
        return 1.0
    ss_res = float(np.sum((y - (slope * x + intercept)) ** 2))
    return max(0.0, 1.0 - ss_res / ss_tot)
