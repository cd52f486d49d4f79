"""
src/callbacks/dashboard.py
───────────────────────────
Dashboard page callbacks. Refreshed on the shared interval.
"""
from __future__ import annotations

import logging

import dash_bootstrap_components as dbc
import plotly.graph_objects as go
from dash import Input, Output, dcc

from config.settings import settings
from src.analytics.forecast import forecast_for_records
from src.analytics.metrics import carbon_brush_status, display_metric, min_brush_measurement
from src.data import store
from src.data.models import RecordKind
from src.layout.components.kpi_card import kpi_card
from src.layout.components.record_table import record_table
from src.layout.components.status_badge import status_text_badge
from src.services.records import dashboard_stats, latest_carbon_brush_by_tag

logger = logging.getLogger(__name__)

CARD_BG = "#161b22"
GRID_CLR = "#30363d"
MUTED = "#8b949e"
ACCENT = "#58a6ff"
PLOTLY_TMPL = "plotly_dark"

_KIND_COLORS = {
    RecordKind.CARBON_BRUSH.value: "#58a6ff",
    RecordKind.WINDING_RESISTANCE.value: "#2ea44f",
    RecordKind.THERMOGRAPHY.value: "#e8a020",
}
_KIND_LABELS = {
    RecordKind.CARBON_BRUSH.value: "Carbon Brush",
    RecordKind.WINDING_RESISTANCE.value: "Winding Resistance",
    RecordKind.THERMOGRAPHY.value: "Thermography",
}


def monthly_figure() -> go.Figure:
    """Stacked bar chart of inspections per month and record type."""
    df = store.get_inspection_log(days=settings.HISTORY_DAYS)
    fig = go.Figure()
    if not df.empty:
        df["month"] = df["inspection_date"].dt.to_period("M").dt.to_timestamp()
        counts = df.groupby(["month", "kind"]).size().unstack(fill_value=0)
        for kind in counts.columns:
            fig.add_bar(
                x=counts.index,
                y=counts[kind],
                name=_KIND_LABELS.get(kind, kind),
                marker_color=_KIND_COLORS.get(kind, ACCENT),
                hovertemplate="%{x|%b %Y}<br>%{y} inspections<extra></extra>",
            )
    fig.update_layout(
        template=PLOTLY_TMPL,
        barmode="stack",
        paper_bgcolor=CARD_BG,
        plot_bgcolor=CARD_BG,
        margin={"l": 10, "r": 10, "t": 20, "b": 10},
        font={"color": "#c9d1d9", "size": 11},
        xaxis={"gridcolor": GRID_CLR},
        yaxis={"gridcolor": GRID_CLR},
        legend={"bgcolor": "rgba(0,0,0,0)", "font": {"size": 10}, "orientation": "h", "y": -0.15},
        height=280,
    )
    return fig


def register(app) -> None:

    @app.callback(
        [
            Output("dashboard-kpi-banner", "children"),
            Output("dashboard-monthly-chart", "figure"),
            Output("dashboard-attention-list", "children"),
            Output("dashboard-forecast-table", "children"),
        ],
        Input("interval-refresh", "n_intervals"),
    )
    def update_dashboard(n_intervals: int):
        stats = dashboard_stats()
        critical_color = "#da3633" if stats.critical_equipment else "#2ea44f"

        kpi_banner = dbc.Row(
            [
                dbc.Col(kpi_card("Equipment", str(stats.total_equipment), ACCENT), xs=6, md=3),
                dbc.Col(kpi_card("Total Inspections", str(stats.total_records),
                                 sub_label=f"{stats.carbon_brush_records} brush · "
                                           f"{stats.winding_resistance_records} winding · "
                                           f"{stats.thermography_records} thermo"), xs=6, md=3),
                dbc.Col(kpi_card("Last 30 Days", str(stats.recent_inspections), "#2ea44f"), xs=6, md=3),
                dbc.Col(kpi_card("Needs Attention", str(stats.critical_equipment), critical_color,
                                 highlight=bool(stats.critical_equipment)), xs=6, md=3),
            ],
            className="g-3",
        )

        latest = latest_carbon_brush_by_tag()
        attention_rows = [
            [
                dcc.Link(tag, href=f"/carbon-brush/{latest[tag].id}", style={"color": ACCENT}),
                display_metric(min_brush_measurement(latest[tag]), 1),
                status_text_badge(carbon_brush_status(latest[tag])),
            ]
            for tag in stats.attention_tags
        ]
        attention = record_table(["Tag", "Min mm", "Status"], attention_rows,
                                 empty_text="All equipment within limits.")

        forecasts = []
        for tag in latest:
            forecast = forecast_for_records(store.get_records(RecordKind.CARBON_BRUSH, tag_no=tag))
            if forecast is not None:
                forecasts.append((tag, forecast))
        forecasts.sort(key=lambda item: item[1].predicted_date)
        forecast_rows = [
            [tag, f.predicted_date.isoformat(), f"{f.days_remaining:.0f}",
             f"{f.wear_rate_per_month:.2f}", f"{f.current_value:.1f}"]
            for tag, f in forecasts
        ]
        forecast_table = record_table(
            ["Tag", "Predicted Replacement", "Days Left", "mm / Month", "Current mm"],
            forecast_rows,
            empty_text="No equipment has enough declining brush history for a forecast.",
        )

        logger.debug("Dashboard refreshed (%d critical)", stats.critical_equipment)
        return kpi_banner, monthly_figure(), attention, forecast_table
