"""
src/layout/components/record_table.py
──────────────────────────────────────
Plain HTML tables for record lists, styled like the rest of the dark UI.
"""
from __future__ import annotations

from collections.abc import Sequence

from dash import html

MUTED = "#8b949e"
BORDER = "#30363d"


def record_table(headers: Sequence[str], rows: Sequence[Sequence], empty_text: str = "No records found.") -> html.Div:
    """Table with an uppercase muted header row; cells may be strings or components."""
    if not rows:
        return html.Div(empty_text, style={"color": MUTED, "padding": "20px", "textAlign": "center"})

    head = html.Thead(
        html.Tr(
            [html.Th(h, style={"padding": "6px 8px"}) for h in headers],
            style={"color": MUTED, "fontSize": ".65rem", "textTransform": "uppercase", "borderBottom": f"1px solid {BORDER}"},
        )
    )
    body = html.Tbody(
        [
            html.Tr(
                [html.Td(cell, style={"padding": "6px 8px", "fontSize": ".8rem"}) for cell in row],
                style={"borderBottom": f"1px solid {BORDER}"},
            )
            for row in rows
        ]
    )
    return html.Div(
        html.Table([head, body], style={"width": "100%", "borderCollapse": "collapse"}),
        style={"overflowX": "auto"},
    )


def field_label(text: str) -> html.Label:
    return html.Label(
        text,
        style={"fontSize": ".72rem", "color": MUTED, "textTransform": "uppercase", "marginBottom": "2px"},
    )
