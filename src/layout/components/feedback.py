"""
src/layout/components/feedback.py
──────────────────────────────────
Form submission feedback alerts.
"""
from __future__ import annotations

from collections.abc import Sequence

import dash_bootstrap_components as dbc
from dash import dcc, html


def saved_alert(text: str, href: str | None = None) -> dbc.Alert:
    children: list = [html.Span(text)]
    if href:
        children += [html.Span(" · "), dcc.Link("Open record", href=href, className="alert-link")]
    return dbc.Alert(children, color="success", dismissable=True, duration=8000,
                     style={"fontSize": ".8rem", "padding": "6px 12px"})


def error_alert(messages: str | Sequence[str], title: str = "Could not save") -> dbc.Alert:
    if isinstance(messages, str):
        messages = [messages]
    return dbc.Alert(
        [
            html.Div(title, style={"fontWeight": "700"}),
            html.Ul([html.Li(m) for m in messages], style={"margin": "4px 0 0", "paddingLeft": "18px"}),
        ],
        color="danger",
        dismissable=True,
        style={"fontSize": ".8rem", "padding": "6px 12px"},
    )
