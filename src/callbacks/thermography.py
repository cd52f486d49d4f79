"""
src/callbacks/thermography.py
──────────────────────────────
Thermography page callbacks: ESP and LRS session forms, sessions table, exports.
"""
from __future__ import annotations

import logging

from dash import ALL, Input, Output, State, dcc, html, no_update
from pydantic import ValidationError

from src.analytics.classifier import MeasurementKind, band_label, get_value_color
from src.analytics.metrics import display_metric, temperature_summary
from src.data import store
from src.data.models import RecordKind, TemperaturePoint, ThermographyKind, ThermographySession
from src.layout.components.feedback import error_alert, saved_alert
from src.layout.components.record_table import record_table
from src.layout.components.status_badge import status_badge
from src.pages.thermography import LRS_TYPE, summary_tiles
from src.services.export import build_spreadsheet, export_filename, record_filename
from src.services.forms import (
    build_thermography_session,
    clean_text,
    esp_points,
    format_validation_error,
    keyed_values,
    lrs_points,
    matches_filter,
    parse_float,
)
from src.services.records import submit_record

logger = logging.getLogger(__name__)

ACCENT = "#58a6ff"
ESP_TYPE = "ESP - MCC Panel"


def filter_sessions(
    sessions: list[ThermographySession],
    kind: str | None,
    query: str | None,
) -> list[ThermographySession]:
    return [
        s for s in sessions
        if (not kind or kind == "all" or s.session_kind.value == kind)
        and matches_filter(query, s.tag_no, s.equipment_name, s.done_by)
    ]


def _save_session(
    session_kind: ThermographyKind,
    tag_no,
    inspection_date,
    done_by,
    points: list[TemperaturePoint],
    remarks,
    default_type: str,
):
    """Shared submit path for both session forms; returns feedback children."""
    if not any(p.temperature is not None for p in points):
        return error_alert("Enter at least one temperature reading.")
    tag = clean_text(tag_no)
    known = store.get_equipment_by_tag(tag) if tag else None
    try:
        session = build_thermography_session(
            session_kind,
            tag,
            known.equipment_name if known else tag,
            known.equipment_type if known else default_type,
            inspection_date,
            done_by,
            points,
            remarks,
        )
        stored = submit_record(session)
    except ValidationError as exc:
        return error_alert(format_validation_error(exc))
    except store.StoreError as exc:
        logger.exception("Saving %s thermography session failed", session_kind.value)
        return error_alert(str(exc))
    summary = temperature_summary(stored)
    return saved_alert(
        f"Saved {session_kind.value.upper()} session for {stored.tag_no} "
        f"({summary.total} points, {band_label(summary.worst)})",
        href=f"/{RecordKind.THERMOGRAPHY.value}/{stored.id}",
    )


def register(app) -> None:

    # ── ESP live summary ──────────────────────────────────────────────────────
    @app.callback(
        Output("esp-live-summary", "children"),
        Input({"type": "esp-temp", "index": ALL}, "value"),
    )
    def update_esp_summary(values):
        return summary_tiles([parse_float(v) for v in values])

    # ── Submit ────────────────────────────────────────────────────────────────
    @app.callback(
        Output("esp-feedback", "children"),
        Input("esp-save", "n_clicks"),
        State("esp-tag", "value"),
        State("esp-date", "date"),
        State("esp-done-by", "value"),
        State({"type": "esp-temp", "index": ALL}, "value"),
        State({"type": "esp-temp", "index": ALL}, "id"),
        State("esp-remarks", "value"),
        prevent_initial_call=True,
    )
    def save_esp(n_clicks, tag_no, inspection_date, done_by, values, ids, remarks):
        try:
            points = esp_points(keyed_values(ids, values))
        except ValidationError as exc:
            return error_alert(format_validation_error(exc))
        return _save_session(ThermographyKind.ESP, tag_no, inspection_date, done_by, points, remarks, ESP_TYPE)

    @app.callback(
        Output("lrs-feedback", "children"),
        Input("lrs-save", "n_clicks"),
        State("lrs-tag", "value"),
        State("lrs-date", "date"),
        State("lrs-done-by", "value"),
        State({"type": "lrs-point", "index": ALL}, "value"),
        State({"type": "lrs-desc", "index": ALL}, "value"),
        State({"type": "lrs-temp", "index": ALL}, "value"),
        State("lrs-remarks", "value"),
        prevent_initial_call=True,
    )
    def save_lrs(n_clicks, tag_no, inspection_date, done_by, names, descriptions, temps, remarks):
        try:
            points = lrs_points(names, descriptions, temps)
        except ValidationError as exc:
            return error_alert(format_validation_error(exc))
        return _save_session(ThermographyKind.LRS, tag_no, inspection_date, done_by, points, remarks, LRS_TYPE)

    # ── Sessions table ────────────────────────────────────────────────────────
    @app.callback(
        Output("th-table", "children"),
        Input("th-kind-filter", "value"),
        Input("th-filter", "value"),
        Input("esp-feedback", "children"),
        Input("lrs-feedback", "children"),
    )
    def update_table(kind, query, _esp_feedback, _lrs_feedback):
        rows = []
        for s in filter_sessions(store.get_records(RecordKind.THERMOGRAPHY), kind, query):
            summary = temperature_summary(s)
            hottest = summary.stats.max if summary.stats else None
            rows.append([
                dcc.Link(s.inspection_date.isoformat(), href=f"/{RecordKind.THERMOGRAPHY.value}/{s.id}",
                         style={"color": ACCENT}),
                s.session_kind.value.upper(),
                s.tag_no,
                s.equipment_name,
                str(summary.total),
                html.Span(display_metric(hottest, 1),
                          style={"color": get_value_color(hottest, MeasurementKind.TEMPERATURE)}),
                status_badge(summary.worst),
            ])
        return record_table(
            ["Date", "Type", "Tag", "Name", "Points", "Max °C", "Worst"],
            rows,
            empty_text="No sessions match the filter.",
        )

    # ── Exports ───────────────────────────────────────────────────────────────
    @app.callback(
        Output("th-export-download", "data"),
        Input("th-export-btn", "n_clicks"),
        State("th-kind-filter", "value"),
        State("th-filter", "value"),
        prevent_initial_call=True,
    )
    def export_sessions(n_clicks, kind, query):
        sessions = filter_sessions(store.get_records(RecordKind.THERMOGRAPHY), kind, query)
        filtered = clean_text(query) is not None or kind not in (None, "all")
        return dcc.send_bytes(build_spreadsheet(sessions), export_filename(RecordKind.THERMOGRAPHY, filtered))

    @app.callback(
        Output("th-detail-download", "data"),
        Input("th-detail-export-btn", "n_clicks"),
        State("th-detail-id", "data"),
        prevent_initial_call=True,
    )
    def export_detail(n_clicks, record_id):
        record = store.get_record(RecordKind.THERMOGRAPHY, record_id) if n_clicks else None
        if record is None:
            return no_update
        return dcc.send_bytes(build_spreadsheet(record), record_filename(record))
