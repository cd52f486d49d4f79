"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the Maintenance Tracker test suite.
"""
import os
import pytest
import numpy as np
from datetime import date

# Use in-memory SQLite for tests, no demo data and no mail
os.environ.setdefault("DATABASE_URL", ":memory:")
os.environ.setdefault("HISTORY_DAYS", "7")
os.environ.setdefault("SIMULATION_SEED", "42")
os.environ.setdefault("SEED_DEMO_DATA", "false")
os.environ.setdefault("SMTP_HOST", "")


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def today() -> date:
    return date(2024, 6, 1)


@pytest.fixture
def db():
    """Empty store; every test starts from clean tables."""
    from src.data import store
    store.initialize_db(force_reseed=True, seed=False)
    return store


@pytest.fixture
def full_measurements() -> dict:
    from config.equipment import BRUSH_POSITIONS
    return {pos: 40.0 for pos in BRUSH_POSITIONS}


@pytest.fixture
def brush_record(today, full_measurements):
    from src.data.models import CarbonBrushRecord
    return CarbonBrushRecord(
        tag_no="BO.3161.04.M1",
        equipment_name="Induration Fan Motor",
        inspection_date=today,
        work_order_no="WO-2406-101",
        done_by="R. Kumar",
        measurements={**full_measurements, "3B_outer": 28.5},
        slip_ring_thickness=13.2,
        slip_ring_ir=4.1,
    )


@pytest.fixture
def winding_record(today):
    from src.data.models import PhaseReadings, WindingResistanceRecord
    return WindingResistanceRecord(
        tag_no="BO.3161.05.M1",
        equipment_name="Cooling Fan Motor",
        inspection_date=today,
        done_by="S. Patel",
        winding_resistance={"ry": 0.421, "yb": 0.419, "rb": 0.420},
        ir_values=PhaseReadings(
            ug_1min=10.0, ug_10min=25.0,   # PI 2.5
            vg_1min=8.0, vg_10min=24.0,    # PI 3.0
            wg_1min=0.0, wg_10min=20.0,    # undefined, dropped
        ),
        dar_values=PhaseReadings(
            ug_30sec=8.0, ug_1min=12.0,    # DAR 1.5
            vg_30sec=10.0, vg_1min=17.0,   # DAR 1.7
        ),
    )


@pytest.fixture
def esp_session(today):
    from src.data.models import TemperaturePoint, ThermographyKind, ThermographySession
    return ThermographySession(
        session_kind=ThermographyKind.ESP,
        tag_no="ESP-01",
        equipment_name="ESP MCC Panel 1",
        equipment_type="ESP - MCC Panel",
        inspection_date=today,
        done_by="A. Singh",
        points=[
            TemperaturePoint(group="TF1", point="mccb_ic_r_phase", description="MCCB I/C R-Phase", temperature=45.0),
            TemperaturePoint(group="TF1", point="mccb_ic_b_phase", description="MCCB I/C B-Phase", temperature=60.0),
            TemperaturePoint(group="TF2", point="mccb_ic_r_phase", description="MCCB I/C R-Phase", temperature=72.5),
            TemperaturePoint(group="TF2", point="mccb_ic_b_phase", description="MCCB I/C B-Phase", temperature=91.0),
            TemperaturePoint(group="TF3", point="mccb_ic_r_phase", description="MCCB I/C R-Phase", temperature=None),
        ],
    )
