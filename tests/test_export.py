"""
tests/test_export.py
─────────────────────
Tests for the Excel export (pandas + openpyxl).
"""
import io
from datetime import date

import pandas as pd
import pytest
from openpyxl import load_workbook

from src.data.models import Equipment, RecordKind
from src.services.export import (
    SHEET_NAMES,
    build_equipment_spreadsheet,
    build_spreadsheet,
    equipment_to_frame,
    export_filename,
    record_filename,
    records_to_frame,
)


def _read(data: bytes) -> dict[str, pd.DataFrame]:
    return pd.read_excel(io.BytesIO(data), sheet_name=None, engine="openpyxl")


class TestRecordFrames:
    def test_carbon_brush_columns(self, brush_record):
        df = records_to_frame(RecordKind.CARBON_BRUSH, [brush_record])
        row = df.iloc[0]
        assert row["TAG NO"] == "BO.3161.04.M1"
        assert row["3B Outer (mm)"] == 28.5
        assert row["1A Inner (mm)"] == 40.0
        assert row["Status"] == "Monitor"
        assert list(df.columns)[-1] == "Remarks"

    def test_unmeasured_point_is_blank(self, brush_record):
        record = brush_record.model_copy(update={"measurements": {"1A_inner": 35.0}})
        df = records_to_frame(RecordKind.CARBON_BRUSH, [record])
        assert pd.isna(df.iloc[0]["5B Outer (mm)"])

    def test_winding_derived_columns(self, winding_record):
        row = records_to_frame(RecordKind.WINDING_RESISTANCE, [winding_record]).iloc[0]
        assert row["PI (mean)"] == pytest.approx(2.75)
        assert row["PI Status"] == "Good"
        assert row["DAR U-G"] == pytest.approx(1.5)
        assert pd.isna(row["DAR W-G"])
        assert pd.isna(row["PI W-G"])

    def test_thermography_one_row_per_point(self, esp_session):
        df = records_to_frame(RecordKind.THERMOGRAPHY, [esp_session])
        assert len(df) == 5
        assert list(df["Status"]) == ["Normal", "Normal", "Warning", "Critical", "N/A"]
        assert set(df["Type"]) == {"ESP"}

    def test_session_without_points_keeps_a_row(self, esp_session):
        df = records_to_frame(RecordKind.THERMOGRAPHY, [esp_session.model_copy(update={"points": []})])
        assert len(df) == 1


class TestBuildSpreadsheet:
    def test_single_record(self, brush_record):
        sheets = _read(build_spreadsheet(brush_record))
        assert list(sheets) == [SHEET_NAMES[RecordKind.CARBON_BRUSH]]
        assert len(sheets[SHEET_NAMES[RecordKind.CARBON_BRUSH]]) == 1

    def test_one_sheet_per_kind(self, brush_record, winding_record, esp_session):
        sheets = _read(build_spreadsheet([esp_session, brush_record, winding_record, brush_record]))
        assert list(sheets) == [
            SHEET_NAMES[RecordKind.THERMOGRAPHY],
            SHEET_NAMES[RecordKind.CARBON_BRUSH],
            SHEET_NAMES[RecordKind.WINDING_RESISTANCE],
        ]
        assert len(sheets[SHEET_NAMES[RecordKind.CARBON_BRUSH]]) == 2

    def test_empty_list(self):
        sheets = _read(build_spreadsheet([]))
        assert list(sheets) == ["Records"]

    def test_header_frozen_and_widths(self, brush_record):
        wb = load_workbook(io.BytesIO(build_spreadsheet([brush_record])))
        ws = wb[SHEET_NAMES[RecordKind.CARBON_BRUSH]]
        assert ws.freeze_panes == "A2"
        assert ws.column_dimensions["B"].width == 25  # Equipment Name


class TestEquipmentExport:
    def test_counts(self):
        equipment = [Equipment(tag_no="M-1", equipment_name="Fan motor"), Equipment(tag_no="M-2")]
        counts = {"M-1": {"carbon-brush": 3, "thermography": 1}}
        df = equipment_to_frame(equipment, counts)
        assert list(df["Total Inspections"]) == [4, 0]
        assert df.iloc[1]["Location"] == "Not specified"

    def test_workbook(self):
        sheets = _read(build_equipment_spreadsheet([Equipment(tag_no="M-1")]))
        assert list(sheets) == ["Equipment List"]
        assert sheets["Equipment List"].iloc[0]["TAG NO"] == "M-1"


class TestFilenames:
    def test_export_filename(self):
        on = date(2024, 5, 1)
        assert export_filename(RecordKind.CARBON_BRUSH, on=on) == "carbon-brush-2024-05-01.xlsx"
        assert export_filename(RecordKind.THERMOGRAPHY, filtered=True, on=on) == "thermography-filtered-2024-05-01.xlsx"
        assert export_filename("equipment", on=on) == "equipment-2024-05-01.xlsx"

    def test_record_filename(self, brush_record, today):
        assert record_filename(brush_record, on=today) == "carbon-brush-BO.3161.04.M1-2024-06-01.xlsx"

    def test_record_filename_sanitizes_tag(self, brush_record, today):
        record = brush_record.model_copy(update={"tag_no": "M 1/2"})
        assert record_filename(record, on=today) == "carbon-brush-M_1_2-2024-06-01.xlsx"
