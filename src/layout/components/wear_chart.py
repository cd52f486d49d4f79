"""
src/layout/components/wear_chart.py
────────────────────────────────────
Brush wear history chart with forecast projection.
"""
from __future__ import annotations

from collections.abc import Sequence
from datetime import timedelta

import plotly.graph_objects as go
from dash import html

from config.thresholds import BRUSH_MONITOR_MM, BRUSH_REPLACE_MM
from src.analytics.forecast import WearForecast, WearPoint

CARD_BG = "#161b22"
GRID_CLR = "#30363d"
MUTED = "#8b949e"
ACCENT = "#58a6ff"
PLOTLY_TMPL = "plotly_dark"


def _base_layout(title: str = "") -> dict:
    return {
        "template": PLOTLY_TMPL,
        "paper_bgcolor": CARD_BG,
        "plot_bgcolor": CARD_BG,
        "margin": {"l": 10, "r": 10, "t": 30, "b": 10},
        "font": {"color": "#c9d1d9", "size": 11},
        "title": {"text": title, "font": {"size": 12, "color": MUTED}},
        "xaxis": {"gridcolor": GRID_CLR, "showgrid": True},
        "yaxis": {"gridcolor": GRID_CLR, "showgrid": True, "title": "mm"},
        "legend": {"bgcolor": "rgba(0,0,0,0)", "font": {"size": 10}},
        "height": 260,
    }


def wear_figure(history: Sequence[WearPoint], forecast: WearForecast | None) -> go.Figure:
    """Minimum brush height per inspection, limit lines and the projected line."""
    fig = go.Figure()
    if not history:
        fig.update_layout(**_base_layout("No carbon brush inspections"))
        return fig

    fig.add_scatter(
        x=[p.date for p in history],
        y=[p.value for p in history],
        mode="lines+markers",
        line={"color": ACCENT, "width": 1.8},
        name="Min brush height",
        hovertemplate="%{x|%d/%m/%Y}<br>%{y:.1f} mm<extra></extra>",
    )
    if forecast is not None:
        last = history[-1]
        end = last.date + timedelta(days=forecast.days_remaining)
        fig.add_scatter(
            x=[last.date, end],
            y=[last.value, last.value - forecast.wear_rate_per_day * forecast.days_remaining],
            mode="lines",
            line={"color": "#e8a020", "width": 1.5, "dash": "dot"},
            name="Projection",
            hovertemplate="%{x|%d/%m/%Y}<br>%{y:.1f} mm<extra></extra>",
        )

    fig.add_hline(y=BRUSH_REPLACE_MM, line_dash="solid", line_color="#da3633", line_width=1,
                  annotation_text=f"Replace ({BRUSH_REPLACE_MM:g} mm)", annotation_font_color="#da3633",
                  annotation_font_size=9)
    fig.add_hline(y=BRUSH_MONITOR_MM, line_dash="dot", line_color="#e8a020", line_width=1,
                  annotation_text=f"Monitor ({BRUSH_MONITOR_MM:g} mm)", annotation_font_color="#e8a020",
                  annotation_font_size=9)
    fig.update_layout(**_base_layout())
    return fig


def forecast_summary(forecast: WearForecast | None) -> html.Div:
    """Forecast text; an explanation instead of a date when none exists."""
    if forecast is None:
        return html.Div(
            "Not enough declining history to forecast a replacement date.",
            style={"color": MUTED, "fontSize": ".8rem"},
        )
    days = forecast.days_remaining
    color = "#da3633" if days < 30 else "#e8a020" if days < 90 else "#2ea44f"
    return html.Div(
        [
            html.Div(
                [
                    html.Span(forecast.predicted_date.strftime("%d %b %Y"),
                              style={"fontSize": "1.3rem", "fontWeight": "700", "color": color}),
                    html.Span(f"  in {days:.0f} days", style={"fontSize": ".8rem", "color": MUTED}),
                ]
            ),
            html.Div(
                f"Wear rate {forecast.wear_rate_per_month:.2f} mm/month · "
                f"current {forecast.current_value:.1f} mm · fit R² {forecast.confidence:.0f}%",
                style={"fontSize": ".72rem", "color": MUTED, "marginTop": "4px"},
            ),
        ]
    )
