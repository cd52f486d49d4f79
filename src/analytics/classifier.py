"""
src/analytics/classifier.py
───────────────────────────
Threshold classifier.

Maps a raw measurement to a status band for its measurement kind. The scales
themselves live in config/thresholds.py; this module only locates a value
among the cut points.

The two insulation-resistance scales (slip ring pass/fail and the three-band
winding scale) are kept as separate kinds and are never merged.
"""
from __future__ import annotations

import math
from bisect import bisect_left, bisect_right
from enum import Enum

from config import thresholds
from config.status import (
    BAND_COLORS,
    BAND_DESCRIPTIONS,
    BAND_LABELS,
    UNDEFINED_COLOR,
    UNDEFINED_LABEL,
    Band,
)
from config.thresholds import Scale


class MeasurementKind(str, Enum):
    BRUSH_WEAR = "brush_wear"
    SLIP_RING_IR = "slip_ring_ir"
    WINDING_IR = "winding_ir"
    POLARIZATION_INDEX = "polarization_index"
    DIELECTRIC_ABSORPTION = "dielectric_absorption"
    TEMPERATURE = "temperature"


SCALES: dict[MeasurementKind, Scale] = {
    MeasurementKind.BRUSH_WEAR: thresholds.BRUSH_WEAR,
    MeasurementKind.SLIP_RING_IR: thresholds.SLIP_RING_IR,
    MeasurementKind.WINDING_IR: thresholds.WINDING_IR,
    MeasurementKind.POLARIZATION_INDEX: thresholds.POLARIZATION_INDEX,
    MeasurementKind.DIELECTRIC_ABSORPTION: thresholds.DIELECTRIC_ABSORPTION,
    MeasurementKind.TEMPERATURE: thresholds.TEMPERATURE,
}


def get_scale(kind: MeasurementKind) -> Scale:
    return SCALES[MeasurementKind(kind)]


def classify(value: float, kind: MeasurementKind) -> Band:
    """
    Return the status band for `value` on the scale of `kind`.

    Bands are closed on their lower bound (a value equal to a cut point belongs
    to the band above it) except on upper-inclusive scales such as temperature.
    ±inf fall into the outermost bands; NaN is treated as the lowest band.
    """
    scale = get_scale(kind)
    value = float(value)
    if math.isnan(value):
        return scale.bands[0]
    if scale.upper_inclusive:
        idx = bisect_left(scale.bounds, value)
    else:
        idx = bisect_right(scale.bounds, value)
    return scale.bands[idx]


def classify_optional(value: float | None, kind: MeasurementKind) -> Band | None:
    """Classify a possibly undefined metric; undefined stays undefined."""
    if value is None:
        return None
    return classify(value, kind)


# ── Presentation helpers ──────────────────────────────────────────────────────

def band_color(band: Band | None) -> str:
    if band is None:
        return UNDEFINED_COLOR
    return BAND_COLORS[band]


def band_label(band: Band | None) -> str:
    if band is None:
        return UNDEFINED_LABEL
    return BAND_LABELS[band]


def band_description(band: Band | None) -> str:
    if band is None:
        return ""
    return BAND_DESCRIPTIONS[band]


def get_value_color(value: float | None, kind: MeasurementKind) -> str:
    return band_color(classify_optional(value, kind))


def scale_legend(kind: MeasurementKind) -> list[tuple[str, str]]:
    """
    Human-readable ranges for a scale, e.g. [("< 25 mm", "Critical"), ...].
    """
    scale = get_scale(kind)
    unit = f" {scale.unit}" if scale.unit else ""
    lo_op, hi_op = ("≤", ">") if scale.upper_inclusive else ("<", "≥")
    legend: list[tuple[str, str]] = []
    bounds = scale.bounds
    for i, band in enumerate(scale.bands):
        if i == 0:
            text = f"{lo_op} {bounds[0]:g}{unit}"
        elif i == len(bounds):
            text = f"{hi_op} {bounds[-1]:g}{unit}"
        else:
            text = f"{bounds[i - 1]:g}–{bounds[i]:g}{unit}"
        legend.append((text, BAND_LABELS[band]))
    return legend
