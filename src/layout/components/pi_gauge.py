"""
src/layout/components/pi_gauge.py
──────────────────────────────────
Polarization Index gauge using Plotly indicator chart.
"""
from __future__ import annotations

import plotly.graph_objects as go
from dash import dcc

from config.status import BAND_BG
from src.analytics.classifier import (
    MeasurementKind,
    band_color,
    classify_optional,
    get_scale,
)

CARD_BG = "#161b22"
MUTED = "#8b949e"
GAUGE_MAX = 5.0


def pi_figure(pi: float | None, title: str = "Polarization Index", height: int = 200) -> go.Figure:
    """
    Gauge figure for a PI value. Steps follow the PI scale; an undefined PI
    shows an empty gauge with "N/A".
    """
    scale = get_scale(MeasurementKind.POLARIZATION_INDEX)
    edges = [0.0, *scale.bounds, GAUGE_MAX]
    steps = [
        {"range": [edges[i], edges[i + 1]], "color": BAND_BG[band]}
        for i, band in enumerate(scale.bands)
    ]
    color = band_color(classify_optional(pi, MeasurementKind.POLARIZATION_INDEX))

    indicator = go.Indicator(
        mode="gauge+number" if pi is not None else "gauge",
        value=min(pi, GAUGE_MAX) if pi is not None else 0.0,
        number={"valueformat": ".2f", "font": {"color": color, "size": 28}},
        title={"text": title if pi is not None else f"{title}<br>N/A", "font": {"color": MUTED, "size": 12}},
        gauge={
            "axis": {
                "range": [0, GAUGE_MAX],
                "tickwidth": 1,
                "tickcolor": "#30363d",
                "tickfont": {"color": MUTED, "size": 9},
            },
            "bar": {"color": color if pi is not None else "rgba(0,0,0,0)", "thickness": 0.25},
            "bgcolor": "rgba(0,0,0,0)",
            "borderwidth": 0,
            "steps": steps,
            "threshold": {
                "line": {"color": "#da3633", "width": 2},
                "thickness": 0.75,
                "value": scale.bounds[0],
            },
        },
    )
    fig = go.Figure(indicator)
    fig.update_layout(
        paper_bgcolor=CARD_BG,
        plot_bgcolor=CARD_BG,
        margin=dict(l=20, r=20, t=50, b=20),
        height=height,
        font=dict(color="#c9d1d9"),
    )
    return fig


def pi_gauge(pi: float | None, title: str = "Polarization Index", height: int = 200, graph_id: str | None = None) -> dcc.Graph:
    kwargs = {"id": graph_id} if graph_id else {}
    return dcc.Graph(
        figure=pi_figure(pi, title, height),
        config={"displayModeBar": False},
        style={"height": f"{height}px"},
        **kwargs,
    )
