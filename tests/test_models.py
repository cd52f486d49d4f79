"""
tests/test_models.py
─────────────────────
Tests for Pydantic v2 data models.
"""
import pytest
from pydantic import ValidationError

from src.data.models import (
    RECORD_MODELS,
    CarbonBrushRecord,
    Equipment,
    PhaseReadings,
    RecordKind,
    TemperaturePoint,
    ThermographyKind,
    ThermographySession,
    WindingResistanceRecord,
)


class TestEquipment:
    def test_defaults(self):
        eq = Equipment(tag_no="CF-01")
        assert eq.equipment_type == "Motor"
        assert eq.id is None
        assert eq.location is None

    def test_tag_is_stripped(self):
        assert Equipment(tag_no="  CF-01 ").tag_no == "CF-01"

    def test_blank_tag_rejected(self):
        with pytest.raises(ValidationError):
            Equipment(tag_no="   ")


class TestCarbonBrushRecord:
    def test_valid(self, brush_record):
        assert brush_record.kind == RecordKind.CARBON_BRUSH
        assert len(brush_record.measurements) == 30
        assert brush_record.brush_type == "C80X"

    def test_negative_measurement_rejected(self, today):
        with pytest.raises(ValidationError):
            CarbonBrushRecord(tag_no="M1", inspection_date=today, measurements={"1A_inner": -1.0})

    def test_negative_slip_ring_ir_rejected(self, today):
        with pytest.raises(ValidationError):
            CarbonBrushRecord(tag_no="M1", inspection_date=today, slip_ring_ir=-0.5)

    def test_date_required(self):
        with pytest.raises(ValidationError):
            CarbonBrushRecord(tag_no="M1")

    def test_json_round_trip_keeps_missing_points_missing(self, today):
        record = CarbonBrushRecord(tag_no="M1", inspection_date=today, measurements={"2B_center": 33.0})
        again = CarbonBrushRecord.model_validate_json(record.model_dump_json())
        assert again.measurements == {"2B_center": 33.0}
        assert again.slip_ring_ir is None


class TestWindingResistanceRecord:
    def test_valid(self, winding_record):
        assert winding_record.kind == RecordKind.WINDING_RESISTANCE
        assert winding_record.ir_values.reading("ug", "10min") == 25.0
        assert winding_record.ir_values.reading("wg", "30sec") is None

    def test_unknown_reading_is_none(self):
        assert PhaseReadings().reading("xg", "1min") is None

    def test_negative_reading_rejected(self):
        with pytest.raises(ValidationError):
            PhaseReadings(ug_1min=-2.0)

    def test_dar_values_optional(self, today):
        record = WindingResistanceRecord(tag_no="M1", inspection_date=today)
        assert record.dar_values is None
        assert record.equipment_type == "Motor"


class TestThermographySession:
    def test_valid(self, esp_session):
        assert esp_session.kind == RecordKind.THERMOGRAPHY
        assert esp_session.session_kind == ThermographyKind.ESP
        assert len(esp_session.points) == 5

    def test_point_name_required(self):
        with pytest.raises(ValidationError):
            TemperaturePoint(point="", temperature=40.0)

    def test_temperature_range(self):
        with pytest.raises(ValidationError):
            TemperaturePoint(point="P1", temperature=900.0)

    def test_session_kind_from_string(self, today):
        session = ThermographySession(session_kind="lrs", tag_no="LRS-01", inspection_date=today)
        assert session.session_kind == ThermographyKind.LRS
        assert session.points == []


class TestRecordModels:
    def test_every_kind_has_a_model(self):
        assert set(RECORD_MODELS) == set(RecordKind)
        for kind, model in RECORD_MODELS.items():
            assert model.kind == kind
