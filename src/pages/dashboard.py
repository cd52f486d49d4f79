"""
src/pages/dashboard.py
───────────────────────
Maintenance dashboard page.

Static structure; counters, chart and attention list injected via callbacks.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"


def layout() -> html.Div:
    return html.Div(
        [
            # ── Page header ───────────────────────────────────────────────────
            html.Div(
                [
                    html.H2("Maintenance Dashboard", className="page-title"),
                    html.P(
                        "Inspection activity and equipment needing attention",
                        className="page-subtitle",
                    ),
                ],
                className="page-header",
            ),
            # ── KPI banner (dynamic) ──────────────────────────────────────────
            html.Div(id="dashboard-kpi-banner", className="mb-4"),
            dbc.Row(
                [
                    # ── Inspections per month ─────────────────────────────────
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Inspections per Month", className="chart-title"),
                                dcc.Graph(id="dashboard-monthly-chart", config={"displayModeBar": False}),
                            ],
                            className="chart-card",
                        ),
                        md=8,
                    ),
                    # ── Attention list ────────────────────────────────────────
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Needs Attention", className="chart-title"),
                                html.P(
                                    "Latest carbon brush inspection below 30 mm or slip ring IR below 2.0 GΩ",
                                    style={"fontSize": ".7rem", "color": MUTED},
                                ),
                                html.Div(id="dashboard-attention-list"),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                ],
                className="g-3 mb-3",
            ),
            # ── Upcoming brush replacements ───────────────────────────────────
            html.Div(
                [
                    html.Div("Brush Replacement Forecast", className="chart-title"),
                    html.Div(id="dashboard-forecast-table"),
                ],
                className="chart-card",
            ),
        ],
        style={"padding": "1.5rem"},
    )
