"""
src/pages/thermography.py
──────────────────────────
Thermography pages.

ESP sessions record a fixed set of points for each transformer of a
precipitator; LRS sessions record free-form points on a liquid resistor
starter. Every reading is banded on the temperature scale.
"""
from __future__ import annotations

from datetime import date

import dash_bootstrap_components as dbc
from dash import dcc, html

from config.equipment import ESP_CODES, ESP_TEMPERATURE_POINTS, LRS_POINT_SLOTS, TRANSFORMERS
from config.status import Band
from src.analytics.classifier import MeasurementKind, band_label, classify_optional, get_value_color, scale_legend
from src.analytics.metrics import display_metric, temperature_summary
from src.data import store
from src.data.models import Equipment, RecordKind, ThermographyKind
from src.layout.components.kpi_card import metric_tile
from src.layout.components.record_table import field_label, record_table
from src.layout.components.status_badge import status_badge
from src.qr.codes import qr_data_uri, record_url
from src.qr.resolver import merge_known_identifiers

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"
ACCENT = "#58a6ff"

_INPUT_STYLE = {"width": "80px", "fontSize": ".78rem", "padding": "2px 4px"}
LRS_TYPE = "Liquid Resistor Starter"


def esp_code_options(equipment: list[Equipment]) -> list[str]:
    """Static ESP codes followed by ESP-type equipment tags from the catalog."""
    return merge_known_identifiers(
        ESP_CODES,
        [eq.tag_no for eq in equipment if eq.equipment_type.startswith("ESP")],
    )


def lrs_tag_options(equipment: list[Equipment]) -> list[str]:
    return [eq.tag_no for eq in equipment if eq.equipment_type == LRS_TYPE]


def _legend() -> html.Div:
    return html.Div(
        " · ".join(f"{label} {text}" for text, label in scale_legend(MeasurementKind.TEMPERATURE)),
        style={"fontSize": ".68rem", "color": MUTED, "marginTop": "4px"},
    )


def _esp_grid() -> html.Table:
    header = html.Tr(
        [html.Th("Point")] + [html.Th(tf) for tf in TRANSFORMERS],
        style={"color": MUTED, "fontSize": ".65rem", "textTransform": "uppercase"},
    )
    rows = [
        html.Tr(
            [html.Td(label, style={"fontSize": ".78rem"})]
            + [
                html.Td(dcc.Input(id={"type": "esp-temp", "index": f"{tf}|{field_name}"},
                                  type="number", step=0.1, style=_INPUT_STYLE))
                for tf in TRANSFORMERS
            ]
        )
        for field_name, label in ESP_TEMPERATURE_POINTS.items()
    ]
    return html.Table([html.Thead(header), html.Tbody(rows)], style={"width": "100%"})


def _lrs_grid() -> html.Table:
    header = html.Tr(
        [html.Th("Point"), html.Th("Description"), html.Th("°C")],
        style={"color": MUTED, "fontSize": ".65rem", "textTransform": "uppercase"},
    )
    rows = [
        html.Tr([
            html.Td(dcc.Input(id={"type": "lrs-point", "index": i}, type="text", style=_INPUT_STYLE)),
            html.Td(dcc.Input(id={"type": "lrs-desc", "index": i}, type="text",
                              style={**_INPUT_STYLE, "width": "220px"})),
            html.Td(dcc.Input(id={"type": "lrs-temp", "index": i}, type="number", step=0.1, style=_INPUT_STYLE)),
        ])
        for i in range(LRS_POINT_SLOTS)
    ]
    return html.Table([html.Thead(header), html.Tbody(rows)])


def _session_header(prefix: str, tag_label: str, options: list[str]) -> dbc.Row:
    return dbc.Row(
        [
            dbc.Col([field_label(tag_label),
                     dcc.Dropdown(id=f"{prefix}-tag", options=[{"label": o, "value": o} for o in options],
                                  className="dark-dropdown")], md=4),
            dbc.Col([field_label("Inspection Date"),
                     dcc.DatePickerSingle(id=f"{prefix}-date", date=date.today().isoformat(),
                                          display_format="YYYY-MM-DD")], md=4),
            dbc.Col([field_label("Done By"), dbc.Input(id=f"{prefix}-done-by", size="sm")], md=4),
        ],
        className="g-2",
    )


def layout() -> html.Div:
    equipment = store.list_equipment()
    esp_tab = html.Div(
        [
            _session_header("esp", "ESP Code", esp_code_options(equipment)),
            html.Div("Temperatures (°C)", className="chart-title", style={"marginTop": "12px"}),
            _esp_grid(),
            _legend(),
            field_label("Remarks"),
            dbc.Textarea(id="esp-remarks", size="sm"),
            html.Div(id="esp-live-summary", style={"marginTop": "10px"}),
            html.Div(dbc.Button("Save ESP Session", id="esp-save", n_clicks=0, color="primary", size="sm"),
                     style={"marginTop": "12px"}),
            html.Div(id="esp-feedback", style={"marginTop": "8px"}),
        ],
        style={"padding": "12px 0"},
    )
    lrs_tab = html.Div(
        [
            _session_header("lrs", "LRS Tag", lrs_tag_options(equipment)),
            html.Div("Points", className="chart-title", style={"marginTop": "12px"}),
            _lrs_grid(),
            _legend(),
            field_label("Remarks"),
            dbc.Textarea(id="lrs-remarks", size="sm"),
            html.Div(dbc.Button("Save LRS Session", id="lrs-save", n_clicks=0, color="primary", size="sm"),
                     style={"marginTop": "12px"}),
            html.Div(id="lrs-feedback", style={"marginTop": "8px"}),
        ],
        style={"padding": "12px 0"},
    )

    return html.Div(
        [
            html.Div(
                [
                    html.H2("Thermography", className="page-title"),
                    html.P("ESP transformer panels and liquid resistor starters", className="page-subtitle"),
                ],
                className="page-header",
            ),
            html.Div(
                dbc.Tabs(
                    [
                        dbc.Tab(esp_tab, label="ESP", tab_id="tab-esp"),
                        dbc.Tab(lrs_tab, label="LRS", tab_id="tab-lrs"),
                    ],
                    active_tab="tab-esp",
                ),
                className="chart-card mb-3",
            ),
            html.Div(
                [
                    dbc.Row(
                        [
                            dbc.Col(html.Div("Sessions", className="chart-title"), md=3),
                            dbc.Col(dcc.Dropdown(id="th-kind-filter",
                                                 options=[{"label": "All", "value": "all"},
                                                          {"label": "ESP", "value": ThermographyKind.ESP.value},
                                                          {"label": "LRS", "value": ThermographyKind.LRS.value}],
                                                 value="all", clearable=False, className="dark-dropdown"), md=2),
                            dbc.Col(dbc.Input(id="th-filter", placeholder="Filter by tag or name",
                                              size="sm", debounce=True), md=4),
                            dbc.Col(dbc.Button("Export Excel", id="th-export-btn", n_clicks=0,
                                               color="secondary", outline=True, size="sm"), md=3),
                        ],
                        className="g-2 mb-2",
                    ),
                    dcc.Download(id="th-export-download"),
                    html.Div(id="th-table"),
                ],
                className="chart-card",
            ),
        ],
        style={"padding": "1.5rem"},
    )


def summary_tiles(points_temps: list[float | None]) -> dbc.Row:
    """Counts per temperature band over the entered readings."""
    temps = [t for t in points_temps if t is not None]
    bands = [classify_optional(t, MeasurementKind.TEMPERATURE) for t in temps]
    hottest = max(temps) if temps else None
    return dbc.Row(
        [
            dbc.Col(metric_tile("Measured", str(len(temps))), xs=3),
            dbc.Col(metric_tile("Max", display_metric(hottest, 1),
                                classify_optional(hottest, MeasurementKind.TEMPERATURE), "°C"), xs=3),
            dbc.Col(metric_tile("Warning", str(bands.count(Band.WARNING))), xs=3),
            dbc.Col(metric_tile("Critical", str(bands.count(Band.CRITICAL))), xs=3),
        ],
        className="g-2",
    )


# ── Detail page ───────────────────────────────────────────────────────────────

def detail_layout(record_id: int) -> html.Div:
    session = store.get_record(RecordKind.THERMOGRAPHY, record_id)
    if session is None:
        return html.Div(
            [
                html.H2("Session not found", className="page-title"),
                dcc.Link("Back to thermography", href="/thermography", style={"color": ACCENT}),
            ],
            style={"padding": "1.5rem"},
        )

    summary = temperature_summary(session)
    rows = [
        [
            p.group or "-",
            p.description or p.point,
            html.Span(display_metric(p.temperature, 1),
                      style={"color": get_value_color(p.temperature, MeasurementKind.TEMPERATURE), "fontWeight": "600"}),
            status_badge(classify_optional(p.temperature, MeasurementKind.TEMPERATURE)),
        ]
        for p in session.points
    ]
    stats = summary.stats
    return html.Div(
        [
            dcc.Store(id="th-detail-id", data=session.id),
            html.Div(
                [
                    html.H2(f"{session.tag_no} · {session.inspection_date.isoformat()}", className="page-title"),
                    html.P(f"{session.session_kind.value.upper()} thermography · {session.equipment_name}",
                           className="page-subtitle"),
                ],
                className="page-header",
            ),
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div([html.Span("Overall  "), status_badge(summary.worst, band_label(summary.worst))],
                                         className="chart-title"),
                                dbc.Row(
                                    [
                                        dbc.Col(metric_tile("Min", display_metric(stats.min if stats else None, 1), None, "°C"), xs=4),
                                        dbc.Col(metric_tile("Mean", display_metric(stats.mean if stats else None, 1), None, "°C"), xs=4),
                                        dbc.Col(metric_tile("Max", display_metric(stats.max if stats else None, 1),
                                                            classify_optional(stats.max if stats else None,
                                                                              MeasurementKind.TEMPERATURE), "°C"), xs=4),
                                    ],
                                    className="g-2 mb-3",
                                ),
                                record_table(["Group", "Point", "°C", "Status"], rows),
                                html.Div(
                                    [
                                        html.Div(f"Done by: {session.done_by or '-'}"),
                                        html.Div(f"Remarks: {session.remarks or '-'}"),
                                    ],
                                    style={"fontSize": ".8rem", "color": MUTED, "marginTop": "12px"},
                                ),
                            ],
                            className="chart-card",
                        ),
                        md=8,
                    ),
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Record QR", className="chart-title"),
                                html.Img(src=qr_data_uri(record_url(RecordKind.THERMOGRAPHY, session.id)),
                                         style={"width": "150px", "background": "white", "padding": "6px"}),
                                html.Div(
                                    dbc.Button("Download Excel", id="th-detail-export-btn", n_clicks=0,
                                               color="secondary", outline=True, size="sm"),
                                    style={"marginTop": "8px"},
                                ),
                                dcc.Download(id="th-detail-download"),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                ],
                className="g-3",
            ),
        ],
        style={"padding": "1.5rem"},
    )
