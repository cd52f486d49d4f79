"""
src/callbacks/winding_resistance.py
────────────────────────────────────
Winding resistance page callbacks.

PI and DAR are recomputed from the raw readings on every change and on every
table refresh; nothing derived is written back to the store.
"""
from __future__ import annotations

import logging

from dash import ALL, Input, Output, State, ctx, dcc, html, no_update
from pydantic import ValidationError

from src.analytics.classifier import MeasurementKind, classify_optional, get_value_color
from src.analytics.metrics import average_ir_1min, compute_pi, display_metric, winding_ir_band, winding_pi
from src.data import store
from src.data.models import RecordKind, WindingResistanceRecord
from src.layout.components.feedback import error_alert, saved_alert
from src.layout.components.pi_gauge import pi_figure
from src.layout.components.record_table import record_table
from src.layout.components.scan_panel import scan_found, scan_not_found
from src.layout.components.status_badge import status_badge
from src.pages.winding_resistance import derived_metrics_panel
from src.qr.resolver import resolve_qr_payload
from src.services.export import build_spreadsheet, export_filename, record_filename
from src.services.forms import (
    build_winding_record,
    clean_text,
    format_validation_error,
    keyed_values,
    matches_filter,
    phase_readings,
)
from src.services.records import submit_record

logger = logging.getLogger(__name__)

ACCENT = "#58a6ff"


def filter_records(records: list[WindingResistanceRecord], query: str | None) -> list[WindingResistanceRecord]:
    return [
        r for r in records
        if matches_filter(query, r.tag_no, r.equipment_name, r.equipment_type, r.done_by)
    ]


def register(app) -> None:

    # ── Scan / motor selection ────────────────────────────────────────────────
    @app.callback(
        [
            Output("wr-tag", "value"),
            Output("wr-name", "value"),
            Output("wr-type", "value"),
            Output("wr-scan-result", "children"),
        ],
        Input("wr-scan-btn", "n_clicks"),
        Input("wr-scan-input", "value"),
        Input("wr-tag", "value"),
        prevent_initial_call=True,
    )
    def select_equipment(n_clicks, scanned, tag_no):
        if ctx.triggered_id in ("wr-scan-btn", "wr-scan-input"):
            raw = clean_text(scanned)
            if raw is None:
                return no_update, no_update, no_update, no_update
            equipment = resolve_qr_payload(raw, store.list_equipment())
            if equipment is None:
                logger.info("Unresolved QR scan %r", raw[:60])
                return no_update, no_update, no_update, scan_not_found(raw)
            return equipment.tag_no, equipment.equipment_name, equipment.equipment_type, scan_found(equipment)

        tag = clean_text(tag_no)
        known = store.get_equipment_by_tag(tag) if tag else None
        if known is None:
            return no_update, no_update, no_update, no_update
        return no_update, known.equipment_name, known.equipment_type, no_update

    # ── Live PI / DAR ─────────────────────────────────────────────────────────
    @app.callback(
        [
            Output("wr-pi-gauge", "figure"),
            Output("wr-live-metrics", "children"),
        ],
        Input({"type": "wr-ir", "index": ALL}, "value"),
        Input({"type": "wr-dar", "index": ALL}, "value"),
        State({"type": "wr-ir", "index": ALL}, "id"),
        State({"type": "wr-dar", "index": ALL}, "id"),
    )
    def update_derived(ir_values, dar_values, ir_ids, dar_ids):
        # Out-of-range input (negative) shows as N/A until corrected
        try:
            ir = phase_readings(keyed_values(ir_ids, ir_values))
        except ValidationError:
            ir = phase_readings({})
        try:
            dar = phase_readings(keyed_values(dar_ids, dar_values))
        except ValidationError:
            dar = None
        return pi_figure(compute_pi(ir)), derived_metrics_panel(ir, dar)

    # ── Submit ────────────────────────────────────────────────────────────────
    @app.callback(
        Output("wr-feedback", "children"),
        Input("wr-save", "n_clicks"),
        State("wr-tag", "value"),
        State("wr-name", "value"),
        State("wr-type", "value"),
        State("wr-date", "date"),
        State("wr-done-by", "value"),
        State({"type": "wr-res", "index": ALL}, "value"),
        State({"type": "wr-res", "index": ALL}, "id"),
        State({"type": "wr-ir", "index": ALL}, "value"),
        State({"type": "wr-ir", "index": ALL}, "id"),
        State({"type": "wr-dar", "index": ALL}, "value"),
        State({"type": "wr-dar", "index": ALL}, "id"),
        State("wr-remarks", "value"),
        prevent_initial_call=True,
    )
    def save_test(n_clicks, tag_no, name, equipment_type, inspection_date, done_by,
                  res_values, res_ids, ir_values, ir_ids, dar_values, dar_ids, remarks):
        try:
            record = build_winding_record(
                tag_no, name, equipment_type, inspection_date, done_by,
                keyed_values(res_ids, res_values),
                keyed_values(ir_ids, ir_values),
                keyed_values(dar_ids, dar_values),
                remarks,
            )
            stored = submit_record(record)
        except ValidationError as exc:
            return error_alert(format_validation_error(exc))
        except store.StoreError as exc:
            logger.exception("Saving winding resistance test failed")
            return error_alert(str(exc))
        return saved_alert(
            f"Saved test for {stored.tag_no} (PI {display_metric(winding_pi(stored))})",
            href=f"/{RecordKind.WINDING_RESISTANCE.value}/{stored.id}",
        )

    # ── Records table ─────────────────────────────────────────────────────────
    @app.callback(
        Output("wr-table", "children"),
        Input("wr-filter", "value"),
        Input("wr-feedback", "children"),
    )
    def update_table(query, _feedback):
        rows = []
        for r in filter_records(store.get_records(RecordKind.WINDING_RESISTANCE), query):
            pi = winding_pi(r)
            rows.append([
                dcc.Link(r.inspection_date.isoformat(), href=f"/{RecordKind.WINDING_RESISTANCE.value}/{r.id}",
                         style={"color": ACCENT}),
                r.tag_no,
                r.equipment_name,
                display_metric(average_ir_1min(r.ir_values)),
                html.Span(display_metric(pi), style={"color": get_value_color(pi, MeasurementKind.POLARIZATION_INDEX)}),
                status_badge(classify_optional(pi, MeasurementKind.POLARIZATION_INDEX)),
                status_badge(winding_ir_band(r)),
            ])
        return record_table(
            ["Date", "Motor", "Name", "Avg IR GΩ", "PI", "PI Status", "IR Status"],
            rows,
            empty_text="No tests match the filter.",
        )

    # ── Exports ───────────────────────────────────────────────────────────────
    @app.callback(
        Output("wr-export-download", "data"),
        Input("wr-export-btn", "n_clicks"),
        State("wr-filter", "value"),
        prevent_initial_call=True,
    )
    def export_records(n_clicks, query):
        records = filter_records(store.get_records(RecordKind.WINDING_RESISTANCE), query)
        filtered = clean_text(query) is not None
        return dcc.send_bytes(build_spreadsheet(records), export_filename(RecordKind.WINDING_RESISTANCE, filtered))

    @app.callback(
        Output("wr-detail-download", "data"),
        Input("wr-detail-export-btn", "n_clicks"),
        State("wr-detail-id", "data"),
        prevent_initial_call=True,
    )
    def export_detail(n_clicks, record_id):
        record = store.get_record(RecordKind.WINDING_RESISTANCE, record_id) if n_clicks else None
        if record is None:
            return no_update
        return dcc.send_bytes(build_spreadsheet(record), record_filename(record))
