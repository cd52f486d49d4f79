"""
src/callbacks/equipment.py
───────────────────────────
Equipment list, registration and QR download callbacks.
"""
from __future__ import annotations

import logging
from collections import Counter

from dash import Input, Output, State, ctx, dcc, no_update
from pydantic import ValidationError

from src.data import store
from src.data.models import Equipment, RecordKind
from src.layout.components.feedback import error_alert, saved_alert
from src.layout.components.record_table import record_table
from src.qr.codes import equipment_qr_payload, qr_png
from src.services.export import build_equipment_spreadsheet, export_filename
from src.services.forms import clean_text, format_validation_error, matches_filter, parse_date

logger = logging.getLogger(__name__)

ACCENT = "#58a6ff"


def record_counts() -> dict[str, dict[str, int]]:
    """{tag_no: {kind: n}} over all stored records."""
    counts: dict[str, Counter] = {}
    for kind in RecordKind:
        for record in store.get_records(kind):
            counts.setdefault(record.tag_no, Counter())[kind.value] += 1
    return {tag: dict(c) for tag, c in counts.items()}


def filter_equipment(equipment: list[Equipment], query: str | None) -> list[Equipment]:
    return [
        eq for eq in equipment
        if matches_filter(query, eq.tag_no, eq.equipment_name, eq.equipment_type, eq.location)
    ]


def register(app) -> None:

    # ── Registration ──────────────────────────────────────────────────────────
    @app.callback(
        Output("eq-new-feedback", "children"),
        Input("eq-new-save", "n_clicks"),
        State("eq-new-tag", "value"),
        State("eq-new-name", "value"),
        State("eq-new-type", "value"),
        State("eq-new-location", "value"),
        State("eq-new-installed", "date"),
        prevent_initial_call=True,
    )
    def save_equipment(n_clicks, tag_no, name, equipment_type, location, installed):
        try:
            equipment = Equipment(
                tag_no=clean_text(tag_no) or "",
                equipment_name=clean_text(name) or "",
                equipment_type=equipment_type,
                location=clean_text(location),
                installation_date=parse_date(installed),
            )
            created = store.create_equipment(equipment)
        except ValidationError as exc:
            return error_alert(format_validation_error(exc))
        except store.DuplicateTagError as exc:
            return error_alert(str(exc))
        return saved_alert(f"Registered {created.tag_no}", href=f"/equipment/{created.id}")

    # ── List ──────────────────────────────────────────────────────────────────
    @app.callback(
        Output("eq-table", "children"),
        Input("eq-filter", "value"),
        Input("eq-new-feedback", "children"),
    )
    def update_table(query, _feedback):
        counts = record_counts()
        rows = []
        for eq in filter_equipment(store.list_equipment(), query):
            c = counts.get(eq.tag_no, {})
            rows.append([
                dcc.Link(eq.tag_no, href=f"/equipment/{eq.id}", style={"color": ACCENT}),
                eq.equipment_name,
                eq.equipment_type,
                eq.location or "-",
                str(c.get(RecordKind.CARBON_BRUSH.value, 0)),
                str(c.get(RecordKind.WINDING_RESISTANCE.value, 0)),
                str(c.get(RecordKind.THERMOGRAPHY.value, 0)),
            ])
        return record_table(
            ["Tag", "Name", "Type", "Location", "Brush", "Winding", "Thermo"],
            rows,
            empty_text="No equipment matches the filter.",
        )

    # ── Downloads ─────────────────────────────────────────────────────────────
    @app.callback(
        Output("eq-export-download", "data"),
        Input("eq-export-btn", "n_clicks"),
        State("eq-filter", "value"),
        prevent_initial_call=True,
    )
    def export_equipment(n_clicks, query):
        equipment = filter_equipment(store.list_equipment(), query)
        filtered = clean_text(query) is not None
        logger.info("Exporting %d equipment rows", len(equipment))
        return dcc.send_bytes(
            build_equipment_spreadsheet(equipment, record_counts()),
            export_filename("equipment", filtered=filtered),
        )

    @app.callback(
        Output("eq-qr-download", "data"),
        Input("eq-qr-download-btn", "n_clicks"),
        State("eq-detail-id", "data"),
        prevent_initial_call=True,
    )
    def download_qr(n_clicks, equipment_id):
        if not n_clicks or ctx.triggered_id != "eq-qr-download-btn":
            return no_update
        equipment = store.get_equipment(equipment_id)
        if equipment is None:
            return no_update
        return dcc.send_bytes(qr_png(equipment_qr_payload(equipment)), f"qr-{equipment.tag_no}.png")
