"""
src/services/forms.py
─────────────────────
Conversion of raw Dash form values into validated record models.

Dash inputs hand back None, "" or strings for empty or partially typed
fields. Everything here maps those to None (never to 0) before the pydantic
models see them, so an unmeasured point stays unmeasured.
"""
from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from datetime import date

from pydantic import ValidationError

from config.equipment import ESP_TEMPERATURE_POINTS
from src.data.models import (
    CarbonBrushRecord,
    PhaseReadings,
    TemperaturePoint,
    ThermographyKind,
    ThermographySession,
    WindingResistanceRecord,
)


def parse_float(value: object) -> float | None:
    """Number from an input value; None for blanks and unparseable text."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    text = str(value).strip().replace(",", ".")
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def clean_text(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_date(value: object) -> date | None:
    """dcc.DatePickerSingle value (ISO string, possibly with a time part)."""
    text = clean_text(value)
    if text is None:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def keyed_values(ids: Sequence[dict], values: Sequence[object]) -> dict[str, float | None]:
    """Zip pattern-matching ids ({"type": ..., "index": key}) with their values."""
    return {i["index"]: parse_float(v) for i, v in zip(ids, values)}


def matches_filter(query: object, *fields: object) -> bool:
    """Case-insensitive substring match of a table filter against any field."""
    needle = clean_text(query)
    if needle is None:
        return True
    needle = needle.lower()
    return any(needle in str(f).lower() for f in fields if f is not None)


def format_validation_error(exc: ValidationError) -> list[str]:
    """One readable line per failing field."""
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "record"
        messages.append(f"{field}: {err['msg']}")
    return messages


# ── Record builders ───────────────────────────────────────────────────────────
# Each raises pydantic.ValidationError on invalid input.

def build_carbon_brush_record(
    tag_no: object,
    equipment_name: object,
    brush_type: object,
    inspection_date: object,
    work_order_no: object,
    done_by: object,
    measurements: dict[str, float | None],
    slip_ring_thickness: object,
    slip_ring_ir: object,
    remarks: object,
) -> CarbonBrushRecord:
    return CarbonBrushRecord(
        tag_no=clean_text(tag_no) or "",
        equipment_name=clean_text(equipment_name) or "",
        brush_type=clean_text(brush_type) or "C80X",
        inspection_date=parse_date(inspection_date),
        work_order_no=clean_text(work_order_no),
        done_by=clean_text(done_by),
        measurements={pos: v for pos, v in measurements.items() if v is not None},
        slip_ring_thickness=parse_float(slip_ring_thickness),
        slip_ring_ir=parse_float(slip_ring_ir),
        remarks=clean_text(remarks),
    )


def phase_readings(values: dict[str, float | None]) -> PhaseReadings:
    """PhaseReadings from {"ug_1min": ..., ...}; unknown keys are ignored."""
    known = PhaseReadings.model_fields
    return PhaseReadings(**{k: v for k, v in values.items() if k in known})


def build_winding_record(
    tag_no: object,
    equipment_name: object,
    equipment_type: object,
    inspection_date: object,
    done_by: object,
    winding_resistance: dict[str, float | None],
    ir_values: dict[str, float | None],
    dar_values: dict[str, float | None],
    remarks: object,
) -> WindingResistanceRecord:
    dar = phase_readings(dar_values) if any(v is not None for v in dar_values.values()) else None
    return WindingResistanceRecord(
        tag_no=clean_text(tag_no) or "",
        equipment_name=clean_text(equipment_name) or "",
        equipment_type=clean_text(equipment_type) or "Motor",
        inspection_date=parse_date(inspection_date),
        done_by=clean_text(done_by),
        winding_resistance=winding_resistance,
        ir_values=phase_readings(ir_values),
        dar_values=dar,
        remarks=clean_text(remarks),
    )


def esp_points(temperatures: dict[str, float | None]) -> list[TemperaturePoint]:
    """
    Temperature points from {"TF1|mccb_ic_r_phase": 45.0, ...}.

    Points without a reading are kept (temperature None) so the session shows
    which points were not measured.
    """
    points = []
    for key, temp in temperatures.items():
        group, _, field_name = key.partition("|")
        points.append(TemperaturePoint(
            group=group,
            point=field_name,
            description=ESP_TEMPERATURE_POINTS.get(field_name, field_name),
            temperature=temp,
        ))
    return points


def lrs_points(
    names: Iterable[object],
    descriptions: Iterable[object],
    temperatures: Iterable[object],
) -> list[TemperaturePoint]:
    """Free-form LRS points; rows without a point name are skipped."""
    points = []
    for name, desc, temp in zip(names, descriptions, temperatures):
        point = clean_text(name)
        if point is None:
            continue
        points.append(TemperaturePoint(
            point=point,
            description=clean_text(desc) or "",
            temperature=parse_float(temp),
        ))
    return points


def build_thermography_session(
    session_kind: ThermographyKind | str,
    tag_no: object,
    equipment_name: object,
    equipment_type: object,
    inspection_date: object,
    done_by: object,
    points: list[TemperaturePoint],
    remarks: object,
) -> ThermographySession:
    return ThermographySession(
        session_kind=ThermographyKind(session_kind),
        tag_no=clean_text(tag_no) or "",
        equipment_name=clean_text(equipment_name) or "",
        equipment_type=clean_text(equipment_type) or "",
        inspection_date=parse_date(inspection_date),
        done_by=clean_text(done_by),
        points=points,
        remarks=clean_text(remarks),
    )
