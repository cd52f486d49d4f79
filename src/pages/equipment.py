"""
src/pages/equipment.py
───────────────────────
Equipment catalog pages.

  layout(tag)               : registration form + filterable equipment list
  detail_layout(equipment)  : QR tag, inspection history and brush forecast
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from config.equipment import DEFAULT_EQUIPMENT_TYPE, EQUIPMENT_TYPES
from src.analytics.classifier import band_label
from src.analytics.forecast import forecast_replacement, history_from_records
from src.analytics.metrics import carbon_brush_status, compute_pi, display_metric, temperature_summary
from src.data import store
from src.data.models import RecordKind
from src.layout.components.record_table import field_label, record_table
from src.layout.components.status_badge import status_badge, status_text_badge
from src.layout.components.wear_chart import forecast_summary, wear_figure
from src.qr.codes import equipment_qr_payload, qr_data_uri

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"
ACCENT = "#58a6ff"


def layout(tag: str | None = None) -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Equipment", className="page-title"),
                    html.P("Equipment master list and QR tags", className="page-subtitle"),
                ],
                className="page-header",
            ),
            dbc.Row(
                [
                    # ── Registration form ─────────────────────────────────────
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Register Equipment", className="chart-title"),
                                field_label("Tag No"),
                                dbc.Input(id="eq-new-tag", value=tag or "", placeholder="e.g. BO.3161.04.M1", size="sm"),
                                field_label("Equipment Name"),
                                dbc.Input(id="eq-new-name", size="sm"),
                                field_label("Equipment Type"),
                                dcc.Dropdown(
                                    id="eq-new-type",
                                    options=[{"label": t, "value": t} for t in EQUIPMENT_TYPES],
                                    value=DEFAULT_EQUIPMENT_TYPE,
                                    clearable=False,
                                    className="dark-dropdown",
                                ),
                                field_label("Location"),
                                dbc.Input(id="eq-new-location", size="sm"),
                                field_label("Installation Date"),
                                dcc.DatePickerSingle(id="eq-new-installed", display_format="YYYY-MM-DD"),
                                html.Div(
                                    dbc.Button("Save Equipment", id="eq-new-save", n_clicks=0, color="primary", size="sm"),
                                    style={"marginTop": "12px"},
                                ),
                                html.Div(id="eq-new-feedback", style={"marginTop": "8px"}),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                    # ── Equipment list ────────────────────────────────────────
                    dbc.Col(
                        html.Div(
                            [
                                dbc.Row(
                                    [
                                        dbc.Col(html.Div("Equipment List", className="chart-title"), md=4),
                                        dbc.Col(
                                            dbc.Input(id="eq-filter", placeholder="Filter by tag, name or type",
                                                      size="sm", debounce=True),
                                            md=5,
                                        ),
                                        dbc.Col(
                                            dbc.Button("Export Excel", id="eq-export-btn", n_clicks=0,
                                                       color="secondary", outline=True, size="sm"),
                                            md=3,
                                        ),
                                    ],
                                    className="g-2 mb-2",
                                ),
                                dcc.Download(id="eq-export-download"),
                                html.Div(id="eq-table"),
                            ],
                            className="chart-card",
                        ),
                        md=8,
                    ),
                ],
                className="g-3",
            ),
        ],
        style={"padding": "1.5rem"},
    )


# ── Detail page ───────────────────────────────────────────────────────────────

def _info_row(label: str, value: str) -> html.Div:
    return html.Div(
        [
            html.Span(label, style={"color": MUTED, "fontSize": ".7rem", "textTransform": "uppercase", "width": "130px", "display": "inline-block"}),
            html.Span(value or "-", style={"fontSize": ".85rem"}),
        ],
        style={"padding": "2px 0"},
    )


def _link(kind: RecordKind, record_id: int, text: str) -> dcc.Link:
    return dcc.Link(text, href=f"/{kind.value}/{record_id}", style={"color": ACCENT})


def detail_layout(equipment_id: int) -> html.Div:
    equipment = store.get_equipment(equipment_id)
    if equipment is None:
        return html.Div(
            [
                html.H2("Equipment not found", className="page-title"),
                dcc.Link("Back to equipment list", href="/equipment", style={"color": ACCENT}),
            ],
            style={"padding": "1.5rem"},
        )

    brush = store.get_records(RecordKind.CARBON_BRUSH, tag_no=equipment.tag_no)
    winding = store.get_records(RecordKind.WINDING_RESISTANCE, tag_no=equipment.tag_no)
    thermo = store.get_records(RecordKind.THERMOGRAPHY, tag_no=equipment.tag_no)

    history = history_from_records(brush)
    forecast = forecast_replacement(history)

    brush_rows = [
        [_link(RecordKind.CARBON_BRUSH, r.id, r.inspection_date.isoformat()), r.done_by or "-",
         status_text_badge(carbon_brush_status(r))]
        for r in brush
    ]
    winding_rows = [
        [_link(RecordKind.WINDING_RESISTANCE, r.id, r.inspection_date.isoformat()), r.done_by or "-",
         display_metric(compute_pi(r.ir_values))]
        for r in winding
    ]
    thermo_rows = []
    for s in thermo:
        summary = temperature_summary(s)
        thermo_rows.append([
            _link(RecordKind.THERMOGRAPHY, s.id, s.inspection_date.isoformat()),
            s.session_kind.value.upper(),
            status_badge(summary.worst, band_label(summary.worst)),
        ])

    return html.Div(
        [
            dcc.Store(id="eq-detail-id", data=equipment.id),
            html.Div(
                [
                    html.H2(equipment.tag_no, className="page-title"),
                    html.P(equipment.equipment_name, className="page-subtitle"),
                ],
                className="page-header",
            ),
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Details", className="chart-title"),
                                _info_row("Type", equipment.equipment_type),
                                _info_row("Location", equipment.location or ""),
                                _info_row("Installed", equipment.installation_date.isoformat() if equipment.installation_date else ""),
                                _info_row("Inspections", str(len(brush) + len(winding) + len(thermo))),
                                html.Hr(style={"borderColor": BORDER}),
                                html.Div("QR Tag", className="chart-title"),
                                html.Img(src=qr_data_uri(equipment_qr_payload(equipment)),
                                         style={"width": "180px", "background": "white", "padding": "6px"}),
                                html.Div(
                                    dbc.Button("Download QR", id="eq-qr-download-btn", n_clicks=0,
                                               color="secondary", outline=True, size="sm"),
                                    style={"marginTop": "8px"},
                                ),
                                dcc.Download(id="eq-qr-download"),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Brush Replacement Forecast", className="chart-title"),
                                forecast_summary(forecast),
                                dcc.Graph(figure=wear_figure(history, forecast), config={"displayModeBar": False}),
                            ],
                            className="chart-card",
                        ),
                        md=8,
                    ),
                ],
                className="g-3 mb-3",
            ),
            dbc.Row(
                [
                    dbc.Col(html.Div([html.Div("Carbon Brush", className="chart-title"),
                                      record_table(["Date", "Done By", "Status"], brush_rows)],
                                     className="chart-card"), md=4),
                    dbc.Col(html.Div([html.Div("Winding Resistance", className="chart-title"),
                                      record_table(["Date", "Done By", "PI"], winding_rows)],
                                     className="chart-card"), md=4),
                    dbc.Col(html.Div([html.Div("Thermography", className="chart-title"),
                                      record_table(["Date", "Type", "Worst"], thermo_rows)],
                                     className="chart-card"), md=4),
                ],
                className="g-3",
            ),
        ],
        style={"padding": "1.5rem"},
    )
