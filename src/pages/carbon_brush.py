"""
src/pages/carbon_brush.py
──────────────────────────
Carbon brush inspection pages.

  layout()                  : scan panel, inspection form, history + forecast,
                              filterable record table with Excel export
  detail_layout(record_id)  : one inspection with banded measurements
"""
from __future__ import annotations

from datetime import date

import dash_bootstrap_components as dbc
from dash import dcc, html

from config.equipment import BRUSH_FACES, BRUSH_HOLDERS, BRUSH_REFERENCE, BRUSH_SIDES, BRUSH_TYPES
from config.thresholds import SLIP_RING_THICKNESS_RANGE
from src.analytics.classifier import MeasurementKind, classify_optional, get_value_color, scale_legend
from src.analytics.forecast import forecast_for_records
from src.analytics.metrics import (
    brush_band,
    carbon_brush_status,
    display_metric,
    min_brush_measurement,
    slip_ring_band,
)
from src.data import store
from src.data.models import RecordKind
from src.layout.components.kpi_card import metric_tile
from src.layout.components.record_table import field_label
from src.layout.components.scan_panel import scan_panel
from src.layout.components.status_badge import status_badge, status_text_badge
from src.layout.components.wear_chart import forecast_summary
from src.qr.codes import qr_data_uri, record_url

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"
ACCENT = "#58a6ff"

_INPUT_STYLE = {"width": "70px", "fontSize": ".78rem", "padding": "2px 4px"}


def _tag_datalist(list_id: str) -> html.Datalist:
    return html.Datalist(
        id=list_id,
        children=[html.Option(value=eq.tag_no, label=eq.equipment_name) for eq in store.list_equipment()],
    )


def _measurement_grid() -> html.Table:
    """Holders 1–5 as rows; A and B brushes × inner/center/outer as columns."""
    header = html.Tr(
        [html.Th("Holder")]
        + [html.Th(f"{side} {face}", style={"fontWeight": "400"}) for side in BRUSH_SIDES for face in BRUSH_FACES],
        style={"color": MUTED, "fontSize": ".65rem", "textTransform": "uppercase"},
    )
    rows = [
        html.Tr(
            [html.Td(holder, style={"color": ACCENT, "fontWeight": "700"})]
            + [
                html.Td(dcc.Input(
                    id={"type": "cb-measure", "index": f"{holder}{side}_{face}"},
                    type="number", min=0, step=0.1, debounce=True, style=_INPUT_STYLE,
                ))
                for side in BRUSH_SIDES
                for face in BRUSH_FACES
            ]
        )
        for holder in BRUSH_HOLDERS
    ]
    return html.Table([html.Thead(header), html.Tbody(rows)], style={"width": "100%"})


def _legend(kind: MeasurementKind) -> html.Div:
    return html.Div(
        " · ".join(f"{label} {text}" for text, label in scale_legend(kind)),
        style={"fontSize": ".68rem", "color": MUTED, "marginTop": "4px"},
    )


def layout() -> html.Div:
    lo, hi = SLIP_RING_THICKNESS_RANGE
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Carbon Brush Inspection", className="page-title"),
                    html.P("Brush height at 30 points, slip ring condition and replacement forecast",
                           className="page-subtitle"),
                ],
                className="page-header",
            ),
            dbc.Row(
                [
                    # ── Form ──────────────────────────────────────────────────
                    dbc.Col(
                        [
                            scan_panel("cb"),
                            html.Div(
                                [
                                    html.Div("Inspection", className="chart-title"),
                                    dbc.Row(
                                        [
                                            dbc.Col([field_label("Tag No"),
                                                     dbc.Input(id="cb-tag", list="cb-tag-options", size="sm", debounce=True),
                                                     _tag_datalist("cb-tag-options")], md=4),
                                            dbc.Col([field_label("Equipment Name"), dbc.Input(id="cb-name", size="sm")], md=4),
                                            dbc.Col([field_label("Brush Type"),
                                                     dcc.Dropdown(id="cb-brush-type",
                                                                  options=[{"label": t, "value": t} for t in BRUSH_TYPES],
                                                                  value=BRUSH_TYPES[0], clearable=False,
                                                                  className="dark-dropdown")], md=4),
                                        ],
                                        className="g-2",
                                    ),
                                    dbc.Row(
                                        [
                                            dbc.Col([field_label("Inspection Date"),
                                                     dcc.DatePickerSingle(id="cb-date", date=date.today().isoformat(),
                                                                          display_format="YYYY-MM-DD")], md=4),
                                            dbc.Col([field_label("Work Order No"), dbc.Input(id="cb-wo", size="sm")], md=4),
                                            dbc.Col([field_label("Done By"), dbc.Input(id="cb-done-by", size="sm")], md=4),
                                        ],
                                        className="g-2 mt-1",
                                    ),
                                    html.Div("Brush Height (mm)", className="chart-title", style={"marginTop": "12px"}),
                                    html.Div(
                                        f"Reference H ≥ {BRUSH_REFERENCE['height_min']:g} · B {BRUSH_REFERENCE['breadth']:g}"
                                        f" · L {BRUSH_REFERENCE['length']:g}",
                                        style={"fontSize": ".68rem", "color": MUTED, "marginBottom": "4px"},
                                    ),
                                    _measurement_grid(),
                                    _legend(MeasurementKind.BRUSH_WEAR),
                                    dbc.Row(
                                        [
                                            dbc.Col([field_label(f"Slip Ring Thickness (mm, {lo:g}–{hi:g})"),
                                                     dbc.Input(id="cb-slip-thickness", type="number", min=0, step=0.1, size="sm")], md=6),
                                            dbc.Col([field_label("Slip Ring IR 1 min (GΩ)"),
                                                     dbc.Input(id="cb-slip-ir", type="number", min=0, step=0.01, size="sm"),
                                                     _legend(MeasurementKind.SLIP_RING_IR)], md=6),
                                        ],
                                        className="g-2 mt-2",
                                    ),
                                    field_label("Remarks"),
                                    dbc.Textarea(id="cb-remarks", size="sm"),
                                    html.Div(id="cb-live-status", style={"marginTop": "10px"}),
                                    html.Div(
                                        dbc.Button("Save Inspection", id="cb-save", n_clicks=0, color="primary", size="sm"),
                                        style={"marginTop": "12px"},
                                    ),
                                    html.Div(id="cb-feedback", style={"marginTop": "8px"}),
                                ],
                                className="chart-card",
                                style={"marginTop": "12px"},
                            ),
                        ],
                        md=8,
                    ),
                    # ── Previous inspections + forecast ───────────────────────
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Previous Inspections", className="chart-title"),
                                html.Div(id="cb-history",
                                         children=html.Div("Select or scan a tag to see its history.",
                                                           style={"color": MUTED, "fontSize": ".8rem"})),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                ],
                className="g-3 mb-3",
            ),
            # ── Records table ─────────────────────────────────────────────────
            html.Div(
                [
                    dbc.Row(
                        [
                            dbc.Col(html.Div("Inspection Records", className="chart-title"), md=4),
                            dbc.Col(dbc.Input(id="cb-filter", placeholder="Filter by tag, name or status",
                                              size="sm", debounce=True), md=5),
                            dbc.Col(dbc.Button("Export Excel", id="cb-export-btn", n_clicks=0,
                                               color="secondary", outline=True, size="sm"), md=3),
                        ],
                        className="g-2 mb-2",
                    ),
                    dcc.Download(id="cb-export-download"),
                    html.Div(id="cb-table"),
                ],
                className="chart-card",
            ),
        ],
        style={"padding": "1.5rem"},
    )


# ── Detail page ───────────────────────────────────────────────────────────────

def _banded_cell(value: float | None) -> html.Td:
    return html.Td(
        display_metric(value, 1, undefined="-"),
        style={"color": get_value_color(value, MeasurementKind.BRUSH_WEAR), "fontWeight": "600",
               "textAlign": "center", "padding": "4px"},
    )


def detail_layout(record_id: int) -> html.Div:
    record = store.get_record(RecordKind.CARBON_BRUSH, record_id)
    if record is None:
        return html.Div(
            [
                html.H2("Inspection not found", className="page-title"),
                dcc.Link("Back to carbon brush records", href="/carbon-brush", style={"color": ACCENT}),
            ],
            style={"padding": "1.5rem"},
        )

    grid_header = html.Tr(
        [html.Th("Holder")] + [html.Th(f"{s} {f}") for s in BRUSH_SIDES for f in BRUSH_FACES],
        style={"color": MUTED, "fontSize": ".65rem", "textTransform": "uppercase"},
    )
    grid_rows = [
        html.Tr([html.Td(h, style={"color": ACCENT, "fontWeight": "700"})]
                + [_banded_cell(record.measurements.get(f"{h}{s}_{f}")) for s in BRUSH_SIDES for f in BRUSH_FACES])
        for h in BRUSH_HOLDERS
    ]
    forecast = forecast_for_records(store.get_records(RecordKind.CARBON_BRUSH, tag_no=record.tag_no))
    status = carbon_brush_status(record)

    return html.Div(
        [
            dcc.Store(id="cb-detail-id", data=record.id),
            html.Div(
                [
                    html.H2(f"{record.tag_no} · {record.inspection_date.isoformat()}", className="page-title"),
                    html.P(record.equipment_name, className="page-subtitle"),
                ],
                className="page-header",
            ),
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div([html.Span("Status  "), status_text_badge(status)], className="chart-title"),
                                dbc.Row(
                                    [
                                        dbc.Col(metric_tile("Min brush", display_metric(min_brush_measurement(record), 1),
                                                            brush_band(record), "mm"), xs=6, md=3),
                                        dbc.Col(metric_tile("Slip ring IR", display_metric(record.slip_ring_ir),
                                                            slip_ring_band(record), "GΩ"), xs=6, md=3),
                                        dbc.Col(metric_tile("Slip ring thickness",
                                                            display_metric(record.slip_ring_thickness, 1), None, "mm"),
                                                xs=6, md=3),
                                        dbc.Col(metric_tile("Brush type", record.brush_type), xs=6, md=3),
                                    ],
                                    className="g-2 mb-3",
                                ),
                                html.Table([html.Thead(grid_header), html.Tbody(grid_rows)], style={"width": "100%"}),
                                html.Div(
                                    [
                                        html.Div(f"Work order: {record.work_order_no or '-'}"),
                                        html.Div(f"Done by: {record.done_by or '-'}"),
                                        html.Div(f"Remarks: {record.remarks or '-'}"),
                                    ],
                                    style={"fontSize": ".8rem", "color": MUTED, "marginTop": "12px"},
                                ),
                            ],
                            className="chart-card",
                        ),
                        md=8,
                    ),
                    dbc.Col(
                        [
                            html.Div(
                                [
                                    html.Div("Replacement Forecast", className="chart-title"),
                                    forecast_summary(forecast),
                                    html.Div(status_badge(classify_optional(min_brush_measurement(record),
                                                                            MeasurementKind.BRUSH_WEAR)),
                                             style={"marginTop": "8px"}),
                                ],
                                className="chart-card",
                            ),
                            html.Div(
                                [
                                    html.Div("Record QR", className="chart-title"),
                                    html.Img(src=qr_data_uri(record_url(RecordKind.CARBON_BRUSH, record.id)),
                                             style={"width": "150px", "background": "white", "padding": "6px"}),
                                    html.Div(
                                        dbc.Button("Download Excel", id="cb-detail-export-btn", n_clicks=0,
                                                   color="secondary", outline=True, size="sm"),
                                        style={"marginTop": "8px"},
                                    ),
                                    dcc.Download(id="cb-detail-download"),
                                ],
                                className="chart-card",
                                style={"marginTop": "12px"},
                            ),
                        ],
                        md=4,
                    ),
                ],
                className="g-3",
            ),
        ],
        style={"padding": "1.5rem"},
    )
