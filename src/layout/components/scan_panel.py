"""
src/layout/components/scan_panel.py
────────────────────────────────────
QR scan panel shared by the record forms.

The camera and image decoding happen outside the app (phone scanner, USB
scanner in keyboard mode); the panel takes the decoded text and resolves it
against the equipment catalog.
"""
from __future__ import annotations

from urllib.parse import quote

import dash_bootstrap_components as dbc
from dash import dcc, html

from src.data.models import Equipment

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"
ACCENT = "#58a6ff"


def scan_panel(prefix: str) -> html.Div:
    """Input + resolve button. Component ids are `{prefix}-scan-*`."""
    return html.Div(
        [
            html.Div("Scan Equipment QR", className="chart-title"),
            dbc.InputGroup(
                [
                    dbc.Input(
                        id=f"{prefix}-scan-input",
                        placeholder="Scan or paste QR code text, URL or tag number",
                        type="text",
                        debounce=True,
                    ),
                    dbc.Button("Resolve", id=f"{prefix}-scan-btn", n_clicks=0, color="primary", outline=True),
                ],
                size="sm",
            ),
            html.Div(id=f"{prefix}-scan-result", style={"marginTop": "8px", "fontSize": ".8rem"}),
        ],
        className="chart-card",
        style={"backgroundColor": CARD_BG, "border": f"1px solid {BORDER}", "borderRadius": "8px", "padding": "12px"},
    )


def scan_found(equipment: Equipment) -> html.Div:
    known = "" if equipment.id is not None else " (not yet registered; created on save)"
    return html.Div(
        [
            html.Span("✓ ", style={"color": "#2ea44f"}),
            html.Span(equipment.tag_no, style={"color": ACCENT, "fontWeight": "700"}),
            html.Span(f" · {equipment.equipment_name or equipment.equipment_type}{known}", style={"color": MUTED}),
        ]
    )


def scan_not_found(raw: str) -> html.Div:
    """Unresolved scan: offer to register the scanned text as a new tag."""
    return html.Div(
        [
            html.Span("No equipment matches ", style={"color": "#e8a020"}),
            html.Code(raw[:60]),
            html.Span(". "),
            dcc.Link("Register it as new equipment", href=f"/equipment?tag={quote(raw.strip())}",
                     style={"color": ACCENT}),
        ]
    )
