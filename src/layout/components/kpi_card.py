"""
src/layout/components/kpi_card.py
──────────────────────────────────
KPI and metric cards. Colors follow the status band when one is given.
"""
from __future__ import annotations

from dash import html

from config.status import Band
from src.analytics.classifier import band_color

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"
TEXT = "#c9d1d9"


def kpi_card(
    label: str,
    value: str,
    color: str = TEXT,
    sub_label: str = "",
    highlight: bool = False,
) -> html.Div:
    """
    Dashboard counter card.

    Args:
        label: Metric name (shown above value)
        value: Formatted value string
        color: Value text color
        sub_label: Small secondary label below value
        highlight: Draw the border in the value color
    """
    children = [
        html.Div(label, style={"fontSize": ".68rem", "color": MUTED, "textTransform": "uppercase", "letterSpacing": ".06em"}),
        html.Div(value, style={"fontSize": "1.6rem", "fontWeight": "700", "color": color, "lineHeight": "1.2", "marginTop": "2px"}),
    ]
    if sub_label:
        children.append(html.Div(sub_label, style={"fontSize": ".68rem", "color": MUTED, "marginTop": "2px"}))

    return html.Div(
        children,
        style={
            "backgroundColor": CARD_BG,
            "border": f"1px solid {color if highlight else BORDER}",
            "borderRadius": "8px",
            "padding": "14px 16px",
            "minWidth": "120px",
        },
    )


def metric_tile(label: str, value: str, band: Band | None = None, unit: str = "") -> html.Div:
    """Small labelled value coloured by its band (muted when undefined)."""
    return html.Div(
        [
            html.Div(label, style={"fontSize": ".62rem", "color": MUTED, "textTransform": "uppercase"}),
            html.Div(
                [
                    html.Span(value, style={"fontSize": "1rem", "fontWeight": "700", "color": band_color(band)}),
                    html.Span(f" {unit}" if unit else "", style={"fontSize": ".7rem", "color": MUTED}),
                ]
            ),
        ],
        style={"padding": "6px 8px", "border": f"1px solid {BORDER}", "borderRadius": "6px"},
    )
