"""
src/layout/navbar.py
─────────────────────
Navigation bar with one link per section.
"""

import dash_bootstrap_components as dbc
from dash import html

NAV_BG = "#0d1117"
BORDER = "#30363d"
ACCENT = "#58a6ff"

NAV_LINKS = [
    ("Dashboard", "/", "nav-dashboard", "exact"),
    ("Equipment", "/equipment", "nav-equipment", "partial"),
    ("Carbon Brush", "/carbon-brush", "nav-carbon-brush", "partial"),
    ("Winding Resistance", "/winding-resistance", "nav-winding-resistance", "partial"),
    ("Thermography", "/thermography", "nav-thermography", "partial"),
]


def create_navbar() -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            [
                # Brand
                dbc.NavbarBrand(
                    [
                        html.Span("⚡", style={"marginRight": "8px", "fontSize": "1.1rem"}),
                        html.Span(
                            "Maintenance Tracker", style={"fontWeight": "700", "letterSpacing": ".04em"}
                        ),
                    ],
                    href="/",
                    style={"color": ACCENT, "textDecoration": "none"},
                ),
                dbc.NavbarToggler(id="navbar-toggler", n_clicks=0),
                dbc.Collapse(
                    dbc.Nav(
                        [
                            dbc.NavItem(dbc.NavLink(label, href=href, id=nav_id, active=active))
                            for label, href, nav_id, active in NAV_LINKS
                        ],
                        className="ms-auto",
                        navbar=True,
                    ),
                    id="navbar-collapse",
                    navbar=True,
                    is_open=False,
                ),
            ],
            fluid=True,
        ),
        color=NAV_BG,
        dark=True,
        sticky="top",
        style={"borderBottom": f"1px solid {BORDER}", "padding": ".5rem 1rem"},
    )
