"""
src/layout/main.py
───────────────────
Main application layout composition.

Contains:
  - dcc.Location for routing (pathname + ?tag= query from unresolved scans)
  - dcc.Interval for dashboard refresh
  - Navbar + page content container
"""
from dash import dcc, html

from config.settings import settings
from src.layout.navbar import create_navbar


def create_layout() -> html.Div:
    """Assemble the root application layout."""
    return html.Div(
        [
            # ── Routing ───────────────────────────────────────────────────────
            dcc.Location(id="url", refresh=False),

            # ── Dashboard refresh interval ────────────────────────────────────
            dcc.Interval(
                id="interval-refresh",
                interval=settings.REFRESH_INTERVAL_MS,
                n_intervals=0,
            ),

            # ── Navigation bar ────────────────────────────────────────────────
            create_navbar(),

            # ── Page content ──────────────────────────────────────────────────
            html.Div(
                id="page-content",
                style={"minHeight": "calc(100vh - 60px)"},
            ),

            # ── Footer ────────────────────────────────────────────────────────
            html.Footer(
                [
                    html.Span("Electrical Maintenance Tracker"),
                    html.Span(" · "),
                    html.Span("Carbon brush · Winding resistance · Thermography"),
                ],
                style={
                    "textAlign": "center",
                    "padding": ".7rem",
                    "fontSize": ".72rem",
                    "color": "#8b949e",
                    "borderTop": "1px solid #30363d",
                    "marginTop": "2rem",
                },
            ),
        ],
        style={"backgroundColor": "#0d1117", "minHeight": "100vh", "color": "#c9d1d9"},
    )
