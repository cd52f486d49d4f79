"""
tests/test_seed.py
───────────────────
Tests for the demo data generator.
"""
from datetime import timedelta

from config.equipment import BRUSH_POSITIONS, DEMO_EQUIPMENT
from src.analytics.forecast import forecast_for_records
from src.analytics.metrics import compute_pi, min_brush_measurement
from src.data.models import Equipment, RecordKind, ThermographyKind
from src.data.seed import generate_demo_records, seed_database


class TestGenerateDemoRecords:
    def test_reproducible(self, today):
        a = generate_demo_records(seed=7, days=180, today=today)
        b = generate_demo_records(seed=7, days=180, today=today)
        assert a["carbon_brush"] == b["carbon_brush"]
        assert a["thermography"] == b["thermography"]

    def test_different_seed_differs(self, today):
        a = generate_demo_records(seed=1, days=180, today=today)
        b = generate_demo_records(seed=2, days=180, today=today)
        assert a["carbon_brush"] != b["carbon_brush"]

    def test_catalog(self, today):
        demo = generate_demo_records(seed=42, days=30, today=today)
        assert [eq.tag_no for eq in demo["equipment"]] == [eq["tag_no"] for eq in DEMO_EQUIPMENT]

    def test_dates_within_window(self, today):
        demo = generate_demo_records(seed=42, days=365, today=today)
        for key in ("carbon_brush", "winding_resistance", "thermography"):
            for record in demo[key]:
                assert today - timedelta(days=365) <= record.inspection_date <= today

    def test_brush_records_complete_and_above_limit(self, today):
        demo = generate_demo_records(seed=42, days=365, today=today)
        motors = {eq["tag_no"] for eq in DEMO_EQUIPMENT if eq["equipment_type"] == "Motor"}
        assert {r.tag_no for r in demo["carbon_brush"]} == motors
        for record in demo["carbon_brush"]:
            assert set(record.measurements) == set(BRUSH_POSITIONS)
            assert min_brush_measurement(record) > 20.0

    def test_every_motor_has_a_forecast(self, today):
        demo = generate_demo_records(seed=42, days=365, today=today)
        for tag in {r.tag_no for r in demo["carbon_brush"]}:
            records = [r for r in demo["carbon_brush"] if r.tag_no == tag]
            assert forecast_for_records(records) is not None

    def test_winding_pi_defined(self, today):
        demo = generate_demo_records(seed=42, days=365, today=today)
        assert demo["winding_resistance"]
        for record in demo["winding_resistance"]:
            assert compute_pi(record.ir_values) is not None
            assert record.dar_values is not None

    def test_thermography_sessions(self, today):
        demo = generate_demo_records(seed=42, days=365, today=today)
        kinds = {s.session_kind for s in demo["thermography"]}
        assert kinds == {ThermographyKind.ESP, ThermographyKind.LRS}
        esp = next(s for s in demo["thermography"] if s.session_kind == ThermographyKind.ESP)
        assert len(esp.points) == 21  # 3 transformers x 7 points


class TestSeedDatabase:
    def test_writes_catalog_and_records(self, db):
        seed_database(seed=42, days=90)
        assert len(db.list_equipment()) == len(DEMO_EQUIPMENT)
        assert db.count_records(RecordKind.CARBON_BRUSH) > 0
        assert db.count_records(RecordKind.WINDING_RESISTANCE) > 0
        assert db.count_records(RecordKind.THERMOGRAPHY) > 0

    def test_keeps_existing_equipment(self, db):
        db.create_equipment(Equipment(tag_no="CF-01", equipment_name="Renamed fan"))
        seed_database(seed=42, days=30)
        assert db.get_equipment_by_tag("CF-01").equipment_name == "Renamed fan"
        assert len(db.list_equipment()) == len(DEMO_EQUIPMENT)
