"""
src/data/seed.py
────────────────
Demo data generator for a fresh database.

Generates:
  - The demo equipment catalog (motors, ESP panels, starters, fans)
  - Monthly carbon brush inspections per motor with linear wear + noise
  - Quarterly winding resistance / insulation tests per motor
  - ESP and LRS thermography sessions

Design:
  - Reproducible with SIMULATION_SEED for consistent demos
  - Each motor gets its own brush height and wear rate, so the forecast page shows a spread of
    healthy, monitor and replace-soon brushes
  - Insulation slowly ages: 1-minute IR drifts down, PI stays mostly healthy
"""
from __future__ import annotations

import logging
from datetime import date, timedelta

import numpy as np

from config.equipment import (
    BRUSH_POSITIONS,
    DEMO_EQUIPMENT,
    ESP_CODES,
    ESP_TEMPERATURE_POINTS,
    LRS_DEMO_POINTS,
    PHASES,
    TRANSFORMERS,
    WINDING_PAIRS,
)
from config.settings import settings
from src.data.models import (
    CarbonBrushRecord,
    Equipment,
    PhaseReadings,
    TemperaturePoint,
    ThermographyKind,
    ThermographySession,
    WindingResistanceRecord,
)

logger = logging.getLogger(__name__)

TECHNICIANS = ["R. Kumar", "S. Patel", "A. Singh", "M. Rao"]

# ── Baselines ─────────────────────────────────────────────────────────────────

NEW_BRUSH_MM = 50.0
BRUSH_NOISE_MM = 0.4
INITIAL_BRUSH_MM = (36.0, NEW_BRUSH_MM)
END_FLOOR_MM = 24.0

IR_1MIN_GOHM = (8.0, 25.0)
WINDING_OHM = 0.42

ESP_BASE_TEMP_C = 45.0
LRS_BASE_TEMP_C = 38.0


def _motors() -> list[dict]:
    return [eq for eq in DEMO_EQUIPMENT if eq["equipment_type"] == "Motor"]


def _inspection_dates(start: date, end: date, every_days: int) -> list[date]:
    dates = []
    d = start
    while d <= end:
        dates.append(d)
        d += timedelta(days=every_days)
    return dates


# ── Record generators ─────────────────────────────────────────────────────────

def _brush_record(
    eq: dict,
    inspection_date: date,
    height: float,
    rng: np.random.Generator,
) -> CarbonBrushRecord:
    measurements = {
        pos: round(float(np.clip(height + rng.normal(0, BRUSH_NOISE_MM), 15.0, NEW_BRUSH_MM)), 1)
        for pos in BRUSH_POSITIONS
    }
    return CarbonBrushRecord(
        tag_no=eq["tag_no"],
        equipment_name=eq["equipment_name"],
        inspection_date=inspection_date,
        work_order_no=f"WO-{inspection_date:%y%m}-{int(rng.integers(100, 999))}",
        done_by=str(rng.choice(TECHNICIANS)),
        measurements=measurements,
        slip_ring_thickness=round(float(rng.uniform(12.0, 15.0)), 1),
        slip_ring_ir=round(float(rng.uniform(1.5, 6.0)), 2),
    )


def _phase_readings(ir_1min: float, pi: float, dar: float, rng: np.random.Generator) -> PhaseReadings:
    values: dict[str, float] = {}
    for phase in PHASES:
        one_min = max(0.1, ir_1min * float(rng.uniform(0.9, 1.1)))
        values[f"{phase}_1min"] = round(one_min, 2)
        values[f"{phase}_30sec"] = round(one_min / dar, 2)
        values[f"{phase}_10min"] = round(one_min * pi * float(rng.uniform(0.95, 1.05)), 2)
    return PhaseReadings(**values)


def _winding_record(
    eq: dict,
    inspection_date: date,
    age_fraction: float,
    ir_start: float,
    rng: np.random.Generator,
) -> WindingResistanceRecord:
    ir_1min = ir_start * (1.0 - 0.5 * age_fraction)
    pi = float(rng.uniform(1.8, 3.2))
    dar = float(rng.uniform(1.2, 1.7))
    return WindingResistanceRecord(
        tag_no=eq["tag_no"],
        equipment_name=eq["equipment_name"],
        equipment_type=eq["equipment_type"],
        inspection_date=inspection_date,
        done_by=str(rng.choice(TECHNICIANS)),
        winding_resistance={
            pair: round(WINDING_OHM + float(rng.normal(0, 0.005)), 4) for pair in WINDING_PAIRS
        },
        ir_values=_phase_readings(ir_1min, pi, dar, rng),
        dar_values=_phase_readings(ir_1min, pi, dar, rng),
    )


def _esp_session(code: str, inspection_date: date, rng: np.random.Generator) -> ThermographySession:
    points = []
    for tf in TRANSFORMERS:
        for field_name, label in ESP_TEMPERATURE_POINTS.items():
            temp = ESP_BASE_TEMP_C + rng.normal(0, 8.0)
            if rng.random() < 0.05:
                temp += rng.uniform(20.0, 45.0)  # occasional hot spot
            points.append(TemperaturePoint(
                group=tf,
                point=field_name,
                description=label,
                temperature=round(float(temp), 1),
            ))
    return ThermographySession(
        session_kind=ThermographyKind.ESP,
        tag_no=code,
        equipment_name=f"ESP MCC Panel {code.split('-')[-1]}",
        equipment_type="ESP - MCC Panel",
        inspection_date=inspection_date,
        done_by=str(rng.choice(TECHNICIANS)),
        points=points,
    )


def _lrs_session(eq: dict, inspection_date: date, rng: np.random.Generator) -> ThermographySession:
    return ThermographySession(
        session_kind=ThermographyKind.LRS,
        tag_no=eq["tag_no"],
        equipment_name=eq["equipment_name"],
        equipment_type=eq["equipment_type"],
        inspection_date=inspection_date,
        done_by=str(rng.choice(TECHNICIANS)),
        points=[
            TemperaturePoint(
                point=point,
                description=description,
                temperature=round(float(LRS_BASE_TEMP_C + rng.normal(0, 10.0)), 1),
            )
            for point, description in LRS_DEMO_POINTS
        ],
    )


# ── Public API ────────────────────────────────────────────────────────────────

def generate_demo_records(
    seed: int = settings.SIMULATION_SEED,
    days: int = settings.HISTORY_DAYS,
    today: date | None = None,
) -> dict[str, list]:
    """
    Generate the demo catalog and `days` of inspection history.

    Returns dict with keys "equipment", "carbon_brush", "winding_resistance"
    and "thermography"; nothing is written to the database.
    """
    rng = np.random.default_rng(seed)
    end = today or date.today()
    start = end - timedelta(days=days)

    equipment = [Equipment(**eq) for eq in DEMO_EQUIPMENT]
    brush: list[CarbonBrushRecord] = []
    winding: list[WindingResistanceRecord] = []
    thermo: list[ThermographySession] = []

    for eq in _motors():
        # Brushes fitted at the start of the window at a random height, worn
        # linearly so the last inspection lands between the limit and new
        initial = float(rng.uniform(*INITIAL_BRUSH_MM))
        rate = float(rng.uniform(0.3, 1.0)) * (initial - END_FLOOR_MM) / max(days, 1)
        for d in _inspection_dates(start, end, 30):
            brush.append(_brush_record(eq, d, initial - rate * (d - start).days, rng))

        ir_start = float(rng.uniform(*IR_1MIN_GOHM))
        for d in _inspection_dates(start, end, 90):
            age = (d - start).days / max(days, 1)
            winding.append(_winding_record(eq, d, age, ir_start, rng))

    for d in _inspection_dates(start, end, 60):
        for code in ESP_CODES[:3]:
            thermo.append(_esp_session(code, d, rng))
        for eq in DEMO_EQUIPMENT:
            if eq["equipment_type"] == "Liquid Resistor Starter":
                thermo.append(_lrs_session(eq, d, rng))

    return {
        "equipment": equipment,
        "carbon_brush": brush,
        "winding_resistance": winding,
        "thermography": thermo,
    }


def seed_database(seed: int = settings.SIMULATION_SEED, days: int = settings.HISTORY_DAYS) -> None:
    """Write the demo catalog and history to the store."""
    # Import here to avoid circular deps
    from src.data import store

    demo = generate_demo_records(seed=seed, days=days)
    for eq in demo["equipment"]:
        if store.get_equipment_by_tag(eq.tag_no) is None:
            store.create_equipment(eq)
    n_records = 0
    for key in ("carbon_brush", "winding_resistance", "thermography"):
        for record in demo[key]:
            store.insert_record(record)
            n_records += 1
    logger.info("Seeded %d equipment and %d inspection records", len(demo["equipment"]), n_records)
