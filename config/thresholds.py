"""
config/thresholds.py
────────────────────
Measurement limits for brush wear, insulation resistance and temperature.

Brush height (mm):           < 25 Critical · 25–32 Warning · ≥ 32 Good
Slip-ring IR (GΩ):           < 2.0 Poor · ≥ 2.0 Good
Winding IR, 1 min (GΩ):      < 1 Poor · 1–10 Acceptable · ≥ 10 Good
Polarization Index:          < 1.5 Poor · 1.5–2.0 Acceptable · 2.0–4.0 Good · ≥ 4.0 Excellent
Dielectric Absorption Ratio: < 1.25 Poor · 1.25–1.6 Acceptable · 1.6–4.0 Good · ≥ 4.0 Excellent
Component temperature (°C):  ≤ 60 Normal · 60–80 Warning · > 80 Critical

Every cut point belongs to the upper band, except temperature where a
reading equal to a cut point stays in the lower band.
"""
from dataclasses import dataclass

from config.status import Band


@dataclass(frozen=True)
class Scale:
    """Ascending cut points and the bands between them (lowest band first)."""
    unit: str
    bounds: tuple[float, ...]
    bands: tuple[Band, ...]
    upper_inclusive: bool = False  # True → value == bound stays in the lower band

    def __post_init__(self) -> None:
        if len(self.bands) != len(self.bounds) + 1:
            raise ValueError("a scale needs exactly one more band than cut points")
        if list(self.bounds) != sorted(self.bounds):
            raise ValueError("scale cut points must be ascending")


BRUSH_WEAR = Scale(
    unit="mm",
    bounds=(25.0, 32.0),
    bands=(Band.CRITICAL, Band.WARNING, Band.GOOD),
)

SLIP_RING_IR = Scale(
    unit="GΩ",
    bounds=(2.0,),
    bands=(Band.POOR, Band.GOOD),
)

WINDING_IR = Scale(
    unit="GΩ",
    bounds=(1.0, 10.0),
    bands=(Band.POOR, Band.ACCEPTABLE, Band.GOOD),
)

POLARIZATION_INDEX = Scale(
    unit="",
    bounds=(1.5, 2.0, 4.0),
    bands=(Band.POOR, Band.ACCEPTABLE, Band.GOOD, Band.EXCELLENT),
)

DIELECTRIC_ABSORPTION = Scale(
    unit="",
    bounds=(1.25, 1.6, 4.0),
    bands=(Band.POOR, Band.ACCEPTABLE, Band.GOOD, Band.EXCELLENT),
)

TEMPERATURE = Scale(
    unit="°C",
    bounds=(60.0, 80.0),
    bands=(Band.NORMAL, Band.WARNING, Band.CRITICAL),
    upper_inclusive=True,
)

# Carbon brush record status (list/export view)
BRUSH_REPLACE_MM = 25.0
BRUSH_MONITOR_MM = 30.0
SLIP_RING_IR_MIN_GOHM = 2.0

# Slip ring thickness reference range (mm)
SLIP_RING_THICKNESS_RANGE = (12.0, 15.0)
