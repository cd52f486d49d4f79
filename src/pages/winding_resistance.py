"""
src/pages/winding_resistance.py
────────────────────────────────
Winding resistance and insulation test pages.

The form recomputes PI and DAR on every keystroke; neither value is stored.
"""
from __future__ import annotations

from datetime import date

import dash_bootstrap_components as dbc
from dash import dcc, html

from config.equipment import (
    DEFAULT_EQUIPMENT_TYPE,
    EQUIPMENT_TYPES,
    PHASE_LABELS,
    PHASES,
    WINDING_PAIR_LABELS,
    WINDING_PAIRS,
)
from src.analytics.classifier import MeasurementKind, band_label, classify_optional, get_value_color
from src.analytics.metrics import (
    average_ir_1min,
    compute_dar,
    compute_phase_pis,
    display_metric,
    winding_dar,
    winding_ir_band,
    winding_pi,
)
from src.data import store
from src.data.models import PhaseReadings, RecordKind
from src.layout.components.kpi_card import metric_tile
from src.layout.components.pi_gauge import pi_gauge
from src.layout.components.record_table import field_label, record_table
from src.layout.components.scan_panel import scan_panel
from src.layout.components.status_badge import status_badge
from src.qr.codes import qr_data_uri, record_url

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"
ACCENT = "#58a6ff"

_INPUT_STYLE = {"width": "90px", "fontSize": ".78rem", "padding": "2px 4px"}
IR_INTERVALS = [("30sec", "30 s"), ("1min", "1 min"), ("10min", "10 min")]
DAR_INTERVALS = [("30sec", "30 s"), ("1min", "1 min")]


def _reading_grid(id_type: str, intervals: list[tuple[str, str]]) -> html.Table:
    header = html.Tr(
        [html.Th("Phase")] + [html.Th(label) for _, label in intervals],
        style={"color": MUTED, "fontSize": ".65rem", "textTransform": "uppercase"},
    )
    rows = [
        html.Tr(
            [html.Td(PHASE_LABELS[phase], style={"color": ACCENT, "fontWeight": "700"})]
            + [
                html.Td(dcc.Input(id={"type": id_type, "index": f"{phase}_{interval}"},
                                  type="number", min=0, step=0.01, style=_INPUT_STYLE))
                for interval, _ in intervals
            ]
        )
        for phase in PHASES
    ]
    return html.Table([html.Thead(header), html.Tbody(rows)])


def layout() -> html.Div:
    tags = store.list_equipment()
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Winding Resistance & Insulation", className="page-title"),
                    html.P("Winding resistance, insulation resistance, Polarization Index and DAR",
                           className="page-subtitle"),
                ],
                className="page-header",
            ),
            dbc.Row(
                [
                    dbc.Col(
                        [
                            scan_panel("wr"),
                            html.Div(
                                [
                                    html.Div("Test", className="chart-title"),
                                    dbc.Row(
                                        [
                                            dbc.Col([field_label("Motor No"),
                                                     dbc.Input(id="wr-tag", list="wr-tag-options", size="sm", debounce=True),
                                                     html.Datalist(id="wr-tag-options",
                                                                   children=[html.Option(value=eq.tag_no) for eq in tags])], md=4),
                                            dbc.Col([field_label("Equipment Name"), dbc.Input(id="wr-name", size="sm")], md=4),
                                            dbc.Col([field_label("Equipment Type"),
                                                     dcc.Dropdown(id="wr-type",
                                                                  options=[{"label": t, "value": t} for t in EQUIPMENT_TYPES],
                                                                  value=DEFAULT_EQUIPMENT_TYPE, clearable=False,
                                                                  className="dark-dropdown")], md=4),
                                        ],
                                        className="g-2",
                                    ),
                                    dbc.Row(
                                        [
                                            dbc.Col([field_label("Inspection Date"),
                                                     dcc.DatePickerSingle(id="wr-date", date=date.today().isoformat(),
                                                                          display_format="YYYY-MM-DD")], md=4),
                                            dbc.Col([field_label("Done By"), dbc.Input(id="wr-done-by", size="sm")], md=4),
                                        ],
                                        className="g-2 mt-1",
                                    ),
                                    html.Div("Winding Resistance (Ω)", className="chart-title", style={"marginTop": "12px"}),
                                    dbc.Row(
                                        [
                                            dbc.Col([field_label(WINDING_PAIR_LABELS[pair]),
                                                     dcc.Input(id={"type": "wr-res", "index": pair}, type="number",
                                                               min=0, step=0.0001, style=_INPUT_STYLE)], xs=4)
                                            for pair in WINDING_PAIRS
                                        ],
                                        className="g-2",
                                    ),
                                    dbc.Row(
                                        [
                                            dbc.Col([html.Div("Insulation Resistance (GΩ)", className="chart-title",
                                                              style={"marginTop": "12px"}),
                                                     _reading_grid("wr-ir", IR_INTERVALS)], md=7),
                                            dbc.Col([html.Div("DAR Readings (GΩ)", className="chart-title",
                                                              style={"marginTop": "12px"}),
                                                     _reading_grid("wr-dar", DAR_INTERVALS)], md=5),
                                        ],
                                        className="g-2",
                                    ),
                                    field_label("Remarks"),
                                    dbc.Textarea(id="wr-remarks", size="sm"),
                                    html.Div(
                                        dbc.Button("Save Test", id="wr-save", n_clicks=0, color="primary", size="sm"),
                                        style={"marginTop": "12px"},
                                    ),
                                    html.Div(id="wr-feedback", style={"marginTop": "8px"}),
                                ],
                                className="chart-card",
                                style={"marginTop": "12px"},
                            ),
                        ],
                        md=8,
                    ),
                    # ── Live derived metrics ──────────────────────────────────
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Derived Metrics", className="chart-title"),
                                dcc.Graph(id="wr-pi-gauge", config={"displayModeBar": False}, style={"height": "200px"}),
                                html.Div(id="wr-live-metrics"),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                ],
                className="g-3 mb-3",
            ),
            html.Div(
                [
                    dbc.Row(
                        [
                            dbc.Col(html.Div("Test Records", className="chart-title"), md=4),
                            dbc.Col(dbc.Input(id="wr-filter", placeholder="Filter by motor, name or type",
                                              size="sm", debounce=True), md=5),
                            dbc.Col(dbc.Button("Export Excel", id="wr-export-btn", n_clicks=0,
                                               color="secondary", outline=True, size="sm"), md=3),
                        ],
                        className="g-2 mb-2",
                    ),
                    dcc.Download(id="wr-export-download"),
                    html.Div(id="wr-table"),
                ],
                className="chart-card",
            ),
        ],
        style={"padding": "1.5rem"},
    )


def derived_metrics_panel(ir_values: PhaseReadings, dar_values: PhaseReadings | None) -> html.Div:
    """Per-phase PI and DAR with bands; undefined values show as N/A."""
    phase_pis = compute_phase_pis(ir_values)
    dars = compute_dar(dar_values) if dar_values is not None else dict.fromkeys(PHASES)
    rows = []
    for phase in PHASES:
        pi = phase_pis[phase]
        dar = dars[phase]
        rows.append([
            PHASE_LABELS[phase],
            html.Span(display_metric(pi), style={"color": get_value_color(pi, MeasurementKind.POLARIZATION_INDEX)}),
            html.Span(display_metric(dar), style={"color": get_value_color(dar, MeasurementKind.DIELECTRIC_ABSORPTION)}),
        ])
    avg_ir = average_ir_1min(ir_values)
    return html.Div(
        [
            record_table(["Phase", "PI", "DAR"], rows),
            html.Div(
                metric_tile("Avg IR 1 min", display_metric(avg_ir),
                            classify_optional(avg_ir, MeasurementKind.WINDING_IR), "GΩ"),
                style={"marginTop": "8px"},
            ),
        ]
    )


# ── Detail page ───────────────────────────────────────────────────────────────

def detail_layout(record_id: int) -> html.Div:
    record = store.get_record(RecordKind.WINDING_RESISTANCE, record_id)
    if record is None:
        return html.Div(
            [
                html.H2("Test not found", className="page-title"),
                dcc.Link("Back to winding resistance records", href="/winding-resistance", style={"color": ACCENT}),
            ],
            style={"padding": "1.5rem"},
        )

    pi = winding_pi(record)
    ir_band = winding_ir_band(record)
    ir_rows = [
        [PHASE_LABELS[phase]]
        + [display_metric(record.ir_values.reading(phase, interval)) for interval, _ in IR_INTERVALS]
        for phase in PHASES
    ]
    res_rows = [
        [WINDING_PAIR_LABELS[pair], display_metric(record.winding_resistance.get(pair), 4)]
        for pair in WINDING_PAIRS
    ]
    dar_band_rows = [
        [PHASE_LABELS[phase], display_metric(dar),
         status_badge(classify_optional(dar, MeasurementKind.DIELECTRIC_ABSORPTION))]
        for phase, dar in winding_dar(record).items()
    ]

    return html.Div(
        [
            dcc.Store(id="wr-detail-id", data=record.id),
            html.Div(
                [
                    html.H2(f"{record.tag_no} · {record.inspection_date.isoformat()}", className="page-title"),
                    html.P(f"{record.equipment_name} · {record.equipment_type}", className="page-subtitle"),
                ],
                className="page-header",
            ),
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div([html.Span("Insulation  "), status_badge(ir_band)], className="chart-title"),
                                record_table(["Phase"] + [label for _, label in IR_INTERVALS], ir_rows),
                                html.Div("Winding Resistance (Ω)", className="chart-title", style={"marginTop": "12px"}),
                                record_table(["Pair", "Ω"], res_rows),
                                html.Div("Dielectric Absorption Ratio", className="chart-title", style={"marginTop": "12px"}),
                                record_table(["Phase", "DAR", "Status"], dar_band_rows),
                                html.Div(
                                    [
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
                                    pi_gauge(pi),
                                    html.Div(band_label(classify_optional(pi, MeasurementKind.POLARIZATION_INDEX)),
                                             style={"textAlign": "center", "color": MUTED, "fontSize": ".8rem"}),
                                ],
                                className="chart-card",
                            ),
                            html.Div(
                                [
                                    html.Div("Record QR", className="chart-title"),
                                    html.Img(src=qr_data_uri(record_url(RecordKind.WINDING_RESISTANCE, record.id)),
                                             style={"width": "150px", "background": "white", "padding": "6px"}),
                                    html.Div(
                                        dbc.Button("Download Excel", id="wr-detail-export-btn", n_clicks=0,
                                                   color="secondary", outline=True, size="sm"),
                                        style={"marginTop": "8px"},
                                    ),
                                    dcc.Download(id="wr-detail-download"),
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
