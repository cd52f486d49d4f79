"""
src/layout/components/status_badge.py
──────────────────────────────────────
Status band badge component.
"""
from __future__ import annotations

from dash import html

from config.status import Band
from src.analytics.classifier import band_color, band_description, band_label


def status_badge(band: Band | None, text: str | None = None) -> html.Span:
    """Inline band badge with color-coded border; "N/A" when undefined."""
    color = band_color(band)
    return html.Span(
        text or band_label(band),
        title=band_description(band),
        style={
            "fontSize": ".65rem",
            "fontWeight": "700",
            "color": color,
            "border": f"1px solid {color}",
            "borderRadius": "4px",
            "padding": "1px 7px",
            "whiteSpace": "nowrap",
        },
    )


def status_text_badge(status: str) -> html.Span:
    """Badge for the carbon brush status text used in lists and exports."""
    if status.startswith("Replace"):
        band = Band.CRITICAL
    elif status.startswith("IR Below"):
        band = Band.POOR
    elif status == "Monitor":
        band = Band.WARNING
    elif status == "Good":
        band = Band.GOOD
    else:
        band = None
    return status_badge(band, status)
