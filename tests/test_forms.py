"""
tests/test_forms.py
────────────────────
Tests for form value parsing and record builders.
"""
from datetime import date

import pytest
from pydantic import ValidationError

from config.equipment import BRUSH_POSITIONS
from src.data.models import ThermographyKind
from src.services.forms import (
    build_carbon_brush_record,
    build_thermography_session,
    build_winding_record,
    clean_text,
    esp_points,
    format_validation_error,
    keyed_values,
    lrs_points,
    matches_filter,
    parse_date,
    parse_float,
)


class TestParsing:
    @pytest.mark.parametrize("raw,expected", [
        (None, None),
        ("", None),
        ("   ", None),
        ("abc", None),
        ("nan", None),
        (float("inf"), None),
        (True, None),
        (0, 0.0),
        ("0", 0.0),
        ("31.5", 31.5),
        ("31,5", 31.5),
        (" 12 ", 12.0),
    ])
    def test_parse_float(self, raw, expected):
        assert parse_float(raw) == expected

    def test_zero_is_not_blank(self):
        assert parse_float("0") is not None

    def test_clean_text(self):
        assert clean_text("  WO-1 ") == "WO-1"
        assert clean_text("   ") is None
        assert clean_text(None) is None

    def test_parse_date(self):
        assert parse_date("2024-05-01") == date(2024, 5, 1)
        assert parse_date("2024-05-01T00:00:00") == date(2024, 5, 1)
        assert parse_date("01/05/2024") is None
        assert parse_date(None) is None

    def test_keyed_values(self):
        ids = [{"type": "cb-measure", "index": "1A_inner"}, {"type": "cb-measure", "index": "1A_outer"}]
        assert keyed_values(ids, ["30.2", None]) == {"1A_inner": 30.2, "1A_outer": None}


class TestMatchesFilter:
    def test_blank_query_matches_everything(self):
        assert matches_filter(None, "CF-01")
        assert matches_filter("  ", "CF-01")

    def test_case_insensitive_substring(self):
        assert matches_filter("cooler", "CF-01", "Primary Cooler Fan")
        assert not matches_filter("kiln", "CF-01", "Primary Cooler Fan")

    def test_none_fields_ignored(self):
        assert not matches_filter("none", None, "CF-01")


class TestFormatValidationError:
    def test_one_line_per_field(self):
        with pytest.raises(ValidationError) as exc:
            build_carbon_brush_record("", "", "", None, None, None, {}, None, "-1", None)
        messages = format_validation_error(exc.value)
        assert any(m.startswith("tag_no") for m in messages)
        assert any(m.startswith("inspection_date") for m in messages)
        assert any(m.startswith("slip_ring_ir") for m in messages)


class TestCarbonBrushBuilder:
    def test_blank_points_are_dropped(self):
        measurements = {pos: None for pos in BRUSH_POSITIONS}
        measurements["1A_inner"] = 33.0
        record = build_carbon_brush_record(
            " BO.3161.04.M1 ", "Fan", "", "2024-05-01", "", "R. Kumar", measurements, "13", "", "  ",
        )
        assert record.tag_no == "BO.3161.04.M1"
        assert record.brush_type == "C80X"
        assert record.measurements == {"1A_inner": 33.0}
        assert record.slip_ring_thickness == 13.0
        assert record.slip_ring_ir is None
        assert record.work_order_no is None
        assert record.remarks is None


class TestWindingBuilder:
    def test_dar_none_when_blank(self):
        record = build_winding_record(
            "M-1", "", "", "2024-05-01", None,
            {"ry": 0.42, "yb": None, "rb": None},
            {"ug_1min": 10.0, "ug_10min": 25.0},
            {"ug_30sec": None, "ug_1min": None},
            None,
        )
        assert record.dar_values is None
        assert record.equipment_type == "Motor"
        assert record.ir_values.reading("ug", "10min") == 25.0

    def test_dar_kept_when_any_reading(self):
        record = build_winding_record(
            "M-1", "", "", "2024-05-01", None, {}, {}, {"vg_30sec": 10.0, "vg_1min": None}, None,
        )
        assert record.dar_values.reading("vg", "30sec") == 10.0

    def test_unknown_reading_keys_ignored(self):
        record = build_winding_record(
            "M-1", "", "", "2024-05-01", None, {}, {"ug_1min": 5.0, "bogus": 1.0}, {}, None,
        )
        assert record.ir_values.reading("ug", "1min") == 5.0


class TestThermographyBuilders:
    def test_esp_points_keep_unmeasured(self):
        points = esp_points({"TF1|mccb_ic_r_phase": 45.0, "TF2|mccb_c_og1": None})
        assert [(p.group, p.point) for p in points] == [("TF1", "mccb_ic_r_phase"), ("TF2", "mccb_c_og1")]
        assert points[0].description == "MCCB I/C R-Phase"
        assert points[1].temperature is None

    def test_lrs_skips_unnamed_rows(self):
        points = lrs_points(["P1", "", None, "P4"], ["Terminal R", "x", "y", ""], ["55", "60", "61", ""])
        assert [p.point for p in points] == ["P1", "P4"]
        assert points[0].temperature == 55.0
        assert points[1].temperature is None

    def test_session(self):
        session = build_thermography_session(
            "lrs", "LRS-01", "Starter 1", "Liquid Resistor Starter", "2024-05-01", "A. Singh",
            lrs_points(["P1"], [""], ["48"]), "",
        )
        assert session.session_kind == ThermographyKind.LRS
        assert session.points[0].temperature == 48.0
        assert session.remarks is None
