"""
src/callbacks/carbon_brush.py
──────────────────────────────
Carbon brush page callbacks: QR scan, live status, submit, table, exports.
"""
from __future__ import annotations

import logging

import dash_bootstrap_components as dbc
from dash import ALL, Input, Output, State, ctx, dcc, html, no_update
from pydantic import ValidationError

from config.equipment import BRUSH_POSITIONS
from src.analytics.classifier import MeasurementKind, classify_optional
from src.analytics.forecast import WearForecast, forecast_for_records, history_from_records
from src.analytics.metrics import (
    aggregate,
    carbon_brush_status,
    display_metric,
    min_brush_measurement,
)
from src.data import store
from src.data.models import CarbonBrushRecord, RecordKind
from src.layout.components.feedback import error_alert, saved_alert
from src.layout.components.kpi_card import metric_tile
from src.layout.components.record_table import record_table
from src.layout.components.scan_panel import scan_found, scan_not_found
from src.layout.components.status_badge import status_text_badge
from src.layout.components.wear_chart import forecast_summary, wear_figure
from src.qr.resolver import resolve_qr_payload
from src.services.export import build_spreadsheet, export_filename, record_filename
from src.services.forms import (
    build_carbon_brush_record,
    clean_text,
    format_validation_error,
    keyed_values,
    matches_filter,
    parse_float,
)
from src.services.records import submit_record

logger = logging.getLogger(__name__)

MUTED = "#8b949e"
ACCENT = "#58a6ff"
HISTORY_ROWS = 5


def _link(record: CarbonBrushRecord, text: str) -> dcc.Link:
    return dcc.Link(text, href=f"/{RecordKind.CARBON_BRUSH.value}/{record.id}", style={"color": ACCENT})


def history_panel(tag_no: str) -> html.Div:
    """Latest inspections of one tag plus its replacement forecast."""
    records = store.get_records(RecordKind.CARBON_BRUSH, tag_no=tag_no)
    if not records:
        return html.Div(f"No previous inspections for {tag_no}.", style={"color": MUTED, "fontSize": ".8rem"})

    history = history_from_records(records)
    forecast = forecast_for_records(records)
    rows = [
        [_link(r, r.inspection_date.isoformat()), display_metric(min_brush_measurement(r), 1),
         status_text_badge(carbon_brush_status(r))]
        for r in records[:HISTORY_ROWS]
    ]
    return html.Div(
        [
            record_table(["Date", "Min mm", "Status"], rows),
            html.Div("Replacement Forecast", className="chart-title", style={"marginTop": "12px"}),
            forecast_summary(forecast),
            dcc.Graph(figure=wear_figure(history, forecast), config={"displayModeBar": False}),
        ]
    )


def live_status(measurements: dict[str, float | None], slip_ring_ir: float | None) -> dbc.Row:
    """Min height, slip ring band and status for the values typed so far."""
    entered = {pos: v for pos, v in measurements.items() if v is not None}
    stats = aggregate(entered)
    min_mm = stats.min if stats else None
    # Unvalidated values: the status only reads measurements and slip_ring_ir
    draft = CarbonBrushRecord.model_construct(measurements=entered, slip_ring_ir=slip_ring_ir)
    return dbc.Row(
        [
            dbc.Col(metric_tile("Measured", f"{len(entered)}/{len(BRUSH_POSITIONS)}"), xs=3),
            dbc.Col(metric_tile("Min", display_metric(min_mm, 1),
                                classify_optional(min_mm, MeasurementKind.BRUSH_WEAR), "mm"), xs=3),
            dbc.Col(metric_tile("Slip IR", display_metric(slip_ring_ir),
                                classify_optional(slip_ring_ir, MeasurementKind.SLIP_RING_IR), "GΩ"), xs=3),
            dbc.Col(html.Div(status_text_badge(carbon_brush_status(draft)), style={"paddingTop": "14px"}), xs=3),
        ],
        className="g-2",
    )


def forecasts_by_tag(records: list[CarbonBrushRecord]) -> dict[str, WearForecast]:
    by_tag: dict[str, list[CarbonBrushRecord]] = {}
    for record in records:
        by_tag.setdefault(record.tag_no, []).append(record)
    forecasts = {}
    for tag, items in by_tag.items():
        forecast = forecast_for_records(items)
        if forecast is not None:
            forecasts[tag] = forecast
    return forecasts


def filter_records(records: list[CarbonBrushRecord], query: str | None) -> list[CarbonBrushRecord]:
    return [
        r for r in records
        if matches_filter(query, r.tag_no, r.equipment_name, r.done_by, r.work_order_no, carbon_brush_status(r))
    ]


def register(app) -> None:

    # ── Scan / tag selection ──────────────────────────────────────────────────
    @app.callback(
        [
            Output("cb-tag", "value"),
            Output("cb-name", "value"),
            Output("cb-scan-result", "children"),
            Output("cb-history", "children"),
        ],
        Input("cb-scan-btn", "n_clicks"),
        Input("cb-scan-input", "value"),
        Input("cb-tag", "value"),
        prevent_initial_call=True,
    )
    def select_equipment(n_clicks, scanned, tag_no):
        if ctx.triggered_id in ("cb-scan-btn", "cb-scan-input"):
            raw = clean_text(scanned)
            if raw is None:
                return no_update, no_update, no_update, no_update
            equipment = resolve_qr_payload(raw, store.list_equipment())
            if equipment is None:
                logger.info("Unresolved QR scan %r", raw[:60])
                return no_update, no_update, scan_not_found(raw), no_update
            return equipment.tag_no, equipment.equipment_name, scan_found(equipment), history_panel(equipment.tag_no)

        tag = clean_text(tag_no)
        if tag is None:
            return no_update, no_update, no_update, no_update
        known = store.get_equipment_by_tag(tag)
        name = known.equipment_name if known is not None else no_update
        return no_update, name, no_update, history_panel(tag)

    # ── Live status ───────────────────────────────────────────────────────────
    @app.callback(
        Output("cb-live-status", "children"),
        Input({"type": "cb-measure", "index": ALL}, "value"),
        Input("cb-slip-ir", "value"),
        State({"type": "cb-measure", "index": ALL}, "id"),
    )
    def update_live_status(values, slip_ir, ids):
        return live_status(keyed_values(ids, values), parse_float(slip_ir))

    # ── Submit ────────────────────────────────────────────────────────────────
    @app.callback(
        Output("cb-feedback", "children"),
        Input("cb-save", "n_clicks"),
        State("cb-tag", "value"),
        State("cb-name", "value"),
        State("cb-brush-type", "value"),
        State("cb-date", "date"),
        State("cb-wo", "value"),
        State("cb-done-by", "value"),
        State({"type": "cb-measure", "index": ALL}, "value"),
        State({"type": "cb-measure", "index": ALL}, "id"),
        State("cb-slip-thickness", "value"),
        State("cb-slip-ir", "value"),
        State("cb-remarks", "value"),
        prevent_initial_call=True,
    )
    def save_inspection(n_clicks, tag_no, name, brush_type, inspection_date, work_order, done_by,
                        values, ids, slip_thickness, slip_ir, remarks):
        try:
            record = build_carbon_brush_record(
                tag_no, name, brush_type, inspection_date, work_order, done_by,
                keyed_values(ids, values), slip_thickness, slip_ir, remarks,
            )
            stored = submit_record(record)
        except ValidationError as exc:
            return error_alert(format_validation_error(exc))
        except store.StoreError as exc:
            logger.exception("Saving carbon brush inspection failed")
            return error_alert(str(exc))
        return saved_alert(
            f"Saved inspection for {stored.tag_no} ({carbon_brush_status(stored)})",
            href=f"/{RecordKind.CARBON_BRUSH.value}/{stored.id}",
        )

    # ── Records table ─────────────────────────────────────────────────────────
    @app.callback(
        Output("cb-table", "children"),
        Input("cb-filter", "value"),
        Input("cb-feedback", "children"),
    )
    def update_table(query, _feedback):
        records = store.get_records(RecordKind.CARBON_BRUSH)
        forecasts = forecasts_by_tag(records)
        rows = []
        for r in filter_records(records, query):
            forecast = forecasts.get(r.tag_no)
            rows.append([
                _link(r, r.inspection_date.isoformat()),
                r.tag_no,
                r.equipment_name,
                display_metric(min_brush_measurement(r), 1),
                display_metric(r.slip_ring_ir),
                status_text_badge(carbon_brush_status(r)),
                forecast.predicted_date.isoformat() if forecast else "",
            ])
        return record_table(
            ["Date", "Tag", "Name", "Min mm", "Slip IR GΩ", "Status", "Forecast"],
            rows,
            empty_text="No inspections match the filter.",
        )

    # ── Exports ───────────────────────────────────────────────────────────────
    @app.callback(
        Output("cb-export-download", "data"),
        Input("cb-export-btn", "n_clicks"),
        State("cb-filter", "value"),
        prevent_initial_call=True,
    )
    def export_records(n_clicks, query):
        records = filter_records(store.get_records(RecordKind.CARBON_BRUSH), query)
        filtered = clean_text(query) is not None
        return dcc.send_bytes(build_spreadsheet(records), export_filename(RecordKind.CARBON_BRUSH, filtered))

    @app.callback(
        Output("cb-detail-download", "data"),
        Input("cb-detail-export-btn", "n_clicks"),
        State("cb-detail-id", "data"),
        prevent_initial_call=True,
    )
    def export_detail(n_clicks, record_id):
        record = store.get_record(RecordKind.CARBON_BRUSH, record_id) if n_clicks else None
        if record is None:
            return no_update
        return dcc.send_bytes(build_spreadsheet(record), record_filename(record))
