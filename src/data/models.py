"""
src/data/models.py
──────────────────
Pydantic v2 data models for equipment and inspection records.

Derived values (PI, DAR, status bands, forecasts) are never part of these
models; they are recomputed from the raw readings on every read.
"""

from datetime import date, datetime
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, Field, field_validator

from config.equipment import DEFAULT_EQUIPMENT_TYPE


class RecordKind(str, Enum):
    CARBON_BRUSH = "carbon-brush"
    WINDING_RESISTANCE = "winding-resistance"
    THERMOGRAPHY = "thermography"


class ThermographyKind(str, Enum):
    ESP = "esp"
    LRS = "lrs"


class Equipment(BaseModel):
    id: int | None = None
    tag_no: str = Field(min_length=1, max_length=64)
    equipment_name: str = ""
    equipment_type: str = DEFAULT_EQUIPMENT_TYPE
    location: str | None = None
    installation_date: date | None = None
    created_at: datetime | None = None

    @field_validator("tag_no")
    @classmethod
    def _strip_tag(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("tag number is required")
        return v


class PhaseReadings(BaseModel):
    """Timed insulation-resistance readings (GΩ) per phase against ground."""
    ug_30sec: float | None = Field(default=None, ge=0.0)
    ug_1min: float | None = Field(default=None, ge=0.0)
    ug_10min: float | None = Field(default=None, ge=0.0)
    vg_30sec: float | None = Field(default=None, ge=0.0)
    vg_1min: float | None = Field(default=None, ge=0.0)
    vg_10min: float | None = Field(default=None, ge=0.0)
    wg_30sec: float | None = Field(default=None, ge=0.0)
    wg_1min: float | None = Field(default=None, ge=0.0)
    wg_10min: float | None = Field(default=None, ge=0.0)

    def reading(self, phase: str, interval: str) -> float | None:
        return getattr(self, f"{phase}_{interval}", None)


class CarbonBrushRecord(BaseModel):
    id: int | None = None
    tag_no: str = Field(min_length=1)
    equipment_name: str = ""
    brush_type: str = "C80X"
    inspection_date: date
    work_order_no: str | None = None
    done_by: str | None = None
    measurements: dict[str, float] = Field(default_factory=dict)  # position → mm
    slip_ring_thickness: float | None = Field(default=None, ge=0.0)
    slip_ring_ir: float | None = Field(default=None, ge=0.0)  # GΩ at 1 minute
    remarks: str | None = None
    created_at: datetime | None = None

    kind: ClassVar[RecordKind] = RecordKind.CARBON_BRUSH

    @field_validator("measurements")
    @classmethod
    def _non_negative(cls, v: dict[str, float]) -> dict[str, float]:
        for position, value in v.items():
            if value < 0:
                raise ValueError(f"measurement {position} cannot be negative")
        return v


class WindingResistanceRecord(BaseModel):
    id: int | None = None
    tag_no: str = Field(min_length=1)  # motor number
    equipment_name: str = ""
    equipment_type: str = DEFAULT_EQUIPMENT_TYPE
    inspection_date: date
    done_by: str | None = None
    winding_resistance: dict[str, float | None] = Field(default_factory=dict)  # ry/yb/rb → Ω
    ir_values: PhaseReadings = Field(default_factory=PhaseReadings)
    dar_values: PhaseReadings | None = None
    remarks: str | None = None
    created_at: datetime | None = None

    kind: ClassVar[RecordKind] = RecordKind.WINDING_RESISTANCE


class TemperaturePoint(BaseModel):
    group: str | None = None  # transformer number for ESP sessions
    point: str = Field(min_length=1)
    description: str = ""
    temperature: float | None = Field(default=None, ge=-50.0, le=500.0)


class ThermographySession(BaseModel):
    id: int | None = None
    session_kind: ThermographyKind = ThermographyKind.ESP
    tag_no: str = Field(min_length=1)
    equipment_name: str = ""
    equipment_type: str = ""
    inspection_date: date
    done_by: str | None = None
    remarks: str | None = None
    points: list[TemperaturePoint] = Field(default_factory=list)
    created_at: datetime | None = None

    kind: ClassVar[RecordKind] = RecordKind.THERMOGRAPHY


InspectionRecord = CarbonBrushRecord | WindingResistanceRecord | ThermographySession

RECORD_MODELS: dict[RecordKind, type[BaseModel]] = {
    RecordKind.CARBON_BRUSH: CarbonBrushRecord,
    RecordKind.WINDING_RESISTANCE: WindingResistanceRecord,
    RecordKind.THERMOGRAPHY: ThermographySession,
}
