"""
src/services/export.py
──────────────────────
Excel export of inspection records and the equipment list.

One sheet per record type, header row frozen, fixed column widths. Readings
are written as numbers (blank when not measured); status columns are derived
from the raw readings at export time.
"""
from __future__ import annotations

import io
from collections.abc import Iterable, Sequence
from datetime import date

import pandas as pd
from openpyxl.utils import get_column_letter

from config.equipment import BRUSH_POSITIONS, PHASE_LABELS, PHASES, WINDING_PAIR_LABELS, WINDING_PAIRS
from src.analytics.classifier import MeasurementKind, band_label, classify_optional
from src.analytics.metrics import (
    average_ir_1min,
    carbon_brush_status,
    compute_phase_pis,
    compute_pi,
    winding_dar,
)
from src.data.models import (
    CarbonBrushRecord,
    Equipment,
    InspectionRecord,
    RecordKind,
    ThermographySession,
    WindingResistanceRecord,
)

SHEET_NAMES: dict[RecordKind, str] = {
    RecordKind.CARBON_BRUSH: "Carbon Brush Inspections",
    RecordKind.WINDING_RESISTANCE: "Winding Resistance Tests",
    RecordKind.THERMOGRAPHY: "Thermography Records",
}

DEFAULT_WIDTH = 15
WIDE_COLUMNS = {"Equipment Name": 25, "Remarks": 30, "Status": 24, "Description": 25}


def _position_label(position: str) -> str:
    # "1A_inner" -> "1A Inner (mm)"
    brush, face = position.split("_")
    return f"{brush} {face.capitalize()} (mm)"


# ── Row builders ──────────────────────────────────────────────────────────────

def _carbon_brush_rows(records: Iterable[CarbonBrushRecord]) -> list[dict]:
    rows = []
    for r in records:
        row = {
            "TAG NO": r.tag_no,
            "Equipment Name": r.equipment_name,
            "Brush Type": r.brush_type,
            "Inspection Date": r.inspection_date,
            "Work Order No": r.work_order_no or "",
            "Done By": r.done_by or "",
        }
        for pos in BRUSH_POSITIONS:
            row[_position_label(pos)] = r.measurements.get(pos)
        row["Slip Ring Thickness (mm)"] = r.slip_ring_thickness
        row["Slip Ring IR 1 min (GΩ)"] = r.slip_ring_ir
        row["Status"] = carbon_brush_status(r)
        row["Remarks"] = r.remarks or ""
        rows.append(row)
    return rows


def _winding_rows(records: Iterable[WindingResistanceRecord]) -> list[dict]:
    rows = []
    for r in records:
        row = {
            "Motor No": r.tag_no,
            "Equipment Name": r.equipment_name,
            "Equipment Type": r.equipment_type,
            "Inspection Date": r.inspection_date,
            "Done By": r.done_by or "",
        }
        for pair in WINDING_PAIRS:
            row[f"Winding Resistance {WINDING_PAIR_LABELS[pair]} (Ω)"] = r.winding_resistance.get(pair)
        for phase in PHASES:
            label = PHASE_LABELS[phase]
            row[f"IR {label} 1 min (GΩ)"] = r.ir_values.reading(phase, "1min")
            row[f"IR {label} 10 min (GΩ)"] = r.ir_values.reading(phase, "10min")
        for phase, pi in compute_phase_pis(r.ir_values).items():
            row[f"PI {PHASE_LABELS[phase]}"] = pi
        pi = compute_pi(r.ir_values)
        row["PI (mean)"] = pi
        row["PI Status"] = band_label(classify_optional(pi, MeasurementKind.POLARIZATION_INDEX))
        for phase, dar in winding_dar(r).items():
            row[f"DAR {PHASE_LABELS[phase]}"] = dar
        avg_ir = average_ir_1min(r.ir_values)
        row["Avg IR 1 min (GΩ)"] = avg_ir
        row["Status"] = band_label(classify_optional(avg_ir, MeasurementKind.WINDING_IR))
        row["Remarks"] = r.remarks or ""
        rows.append(row)
    return rows


def _thermography_rows(records: Iterable[ThermographySession]) -> list[dict]:
    """One row per temperature point."""
    rows = []
    for s in records:
        base = {
            "Type": s.session_kind.value.upper(),
            "TAG NO": s.tag_no,
            "Equipment Name": s.equipment_name,
            "Inspection Date": s.inspection_date,
            "Done By": s.done_by or "",
        }
        if not s.points:
            rows.append({**base, "Group": "", "Point": "", "Description": "",
                         "Temperature (°C)": None, "Status": "", "Remarks": s.remarks or ""})
            continue
        for p in s.points:
            rows.append({
                **base,
                "Group": p.group or "",
                "Point": p.point,
                "Description": p.description,
                "Temperature (°C)": p.temperature,
                "Status": band_label(classify_optional(p.temperature, MeasurementKind.TEMPERATURE)),
                "Remarks": s.remarks or "",
            })
    return rows


_ROW_BUILDERS = {
    RecordKind.CARBON_BRUSH: _carbon_brush_rows,
    RecordKind.WINDING_RESISTANCE: _winding_rows,
    RecordKind.THERMOGRAPHY: _thermography_rows,
}


def records_to_frame(kind: RecordKind | str, records: Iterable[InspectionRecord]) -> pd.DataFrame:
    """Tabular view of records of one kind, in export column order."""
    return pd.DataFrame(_ROW_BUILDERS[RecordKind(kind)](records))


def equipment_to_frame(equipment: Iterable[Equipment], counts: dict[str, dict[str, int]] | None = None) -> pd.DataFrame:
    counts = counts or {}
    rows = []
    for eq in equipment:
        c = counts.get(eq.tag_no, {})
        brush = c.get(RecordKind.CARBON_BRUSH.value, 0)
        winding = c.get(RecordKind.WINDING_RESISTANCE.value, 0)
        thermo = c.get(RecordKind.THERMOGRAPHY.value, 0)
        rows.append({
            "TAG NO": eq.tag_no,
            "Equipment Name": eq.equipment_name,
            "Equipment Type": eq.equipment_type,
            "Location": eq.location or "Not specified",
            "Installation Date": eq.installation_date,
            "Carbon Brush Records": brush,
            "Winding Resistance Records": winding,
            "Thermography Records": thermo,
            "Total Inspections": brush + winding + thermo,
        })
    return pd.DataFrame(rows)


# ── Workbook ──────────────────────────────────────────────────────────────────

def _write_sheet(writer: pd.ExcelWriter, df: pd.DataFrame, sheet_name: str) -> None:
    df.to_excel(writer, sheet_name=sheet_name, index=False)
    ws = writer.sheets[sheet_name]
    ws.freeze_panes = "A2"
    for idx, column in enumerate(df.columns, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = WIDE_COLUMNS.get(
            column, max(DEFAULT_WIDTH, min(len(str(column)) + 2, 28))
        )


def build_spreadsheet(records: InspectionRecord | Sequence[InspectionRecord]) -> bytes:
    """
    Workbook bytes for one record or a list of records.

    Records are grouped by type, one sheet per type, in first-seen order.
    An empty list still produces a workbook with a single empty sheet.
    """
    if not isinstance(records, Sequence):
        records = [records]

    grouped: dict[RecordKind, list[InspectionRecord]] = {}
    for record in records:
        grouped.setdefault(record.kind, []).append(record)

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        if not grouped:
            _write_sheet(writer, pd.DataFrame(columns=["No records"]), "Records")
        for kind, items in grouped.items():
            _write_sheet(writer, records_to_frame(kind, items), SHEET_NAMES[kind])
    return buffer.getvalue()


def build_equipment_spreadsheet(
    equipment: Iterable[Equipment],
    counts: dict[str, dict[str, int]] | None = None,
) -> bytes:
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        _write_sheet(writer, equipment_to_frame(equipment, counts), "Equipment List")
    return buffer.getvalue()


def export_filename(kind: RecordKind | str, filtered: bool = False, on: date | None = None) -> str:
    """e.g. carbon-brush-filtered-2024-05-01.xlsx"""
    prefix = kind.value if isinstance(kind, RecordKind) else str(kind)
    day = (on or date.today()).isoformat()
    return f"{prefix}-{'filtered-' if filtered else ''}{day}.xlsx"


def record_filename(record: InspectionRecord, on: date | None = None) -> str:
    """Single-record report, e.g. carbon-brush-BO.3161.04.M1-2024-05-01.xlsx"""
    tag = "".join(c if c.isalnum() or c in ".-_" else "_" for c in record.tag_no) or "unknown"
    return f"{record.kind.value}-{tag}-{(on or date.today()).isoformat()}.xlsx"
