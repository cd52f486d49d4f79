"""
src/callbacks/navigation.py — Page routing and navbar callbacks.
"""
from __future__ import annotations

import logging
import re
from urllib.parse import parse_qs

from dash import Input, Output, State, html

logger = logging.getLogger(__name__)

_DETAIL_ROUTE = re.compile(r"^/(equipment|carbon-brush|winding-resistance|thermography)/(\d+)/?$")


def _not_found(pathname: str) -> html.Div:
    return html.Div(
        [
            html.H2("Page not found", className="page-title"),
            html.P(pathname, className="page-subtitle"),
        ],
        style={"padding": "1.5rem"},
    )


def resolve_page(pathname: str | None, search: str | None = None):
    """Layout for a URL path (plus query string for the equipment form)."""
    from src.pages import carbon_brush, dashboard, equipment, thermography, winding_resistance

    path = (pathname or "/").rstrip("/") or "/"
    routes = {
        "/": dashboard.layout,
        "/dashboard": dashboard.layout,
        "/carbon-brush": carbon_brush.layout,
        "/winding-resistance": winding_resistance.layout,
        "/thermography": thermography.layout,
    }
    if path in routes:
        return routes[path]()
    if path == "/equipment":
        tag = parse_qs((search or "").lstrip("?")).get("tag", [None])[0]
        return equipment.layout(tag=tag)

    match = _DETAIL_ROUTE.match(path)
    if match:
        section, record_id = match.group(1), int(match.group(2))
        details = {
            "equipment": equipment.detail_layout,
            "carbon-brush": carbon_brush.detail_layout,
            "winding-resistance": winding_resistance.detail_layout,
            "thermography": thermography.detail_layout,
        }
        return details[section](record_id)

    logger.debug("No route for %s", pathname)
    return _not_found(pathname or "")


def register(app) -> None:
    """Register routing + navbar callbacks."""

    # ── Page routing ──────────────────────────────────────────────────────────
    @app.callback(
        Output("page-content", "children"),
        Input("url", "pathname"),
        Input("url", "search"),
    )
    def display_page(pathname: str, search: str):
        return resolve_page(pathname, search)

    # ── Navbar collapse ───────────────────────────────────────────────────────
    @app.callback(
        Output("navbar-collapse", "is_open"),
        Input("navbar-toggler", "n_clicks"),
        State("navbar-collapse", "is_open"),
        prevent_initial_call=True,
    )
    def toggle_navbar(n_clicks: int, is_open: bool) -> bool:
        return not is_open
