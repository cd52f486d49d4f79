"""
app.py
──────
Electrical Maintenance Tracker — Application Entry Point.

Startup sequence:
  1. Configure logging, initialize the SQLite DB (seeded with demo history)
  2. Create Dash app with DARKLY bootstrap theme
  3. Register all callbacks
  4. Run dev server (or expose `server` for gunicorn in production)
"""
import logging

import dash
import dash_bootstrap_components as dbc

from config.settings import settings
from src.data.store import initialize_db
from src.layout.main import create_layout

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ── 1. Database ───────────────────────────────────────────────────────────────
logger.info("Initializing database at %s", settings.DATABASE_URL)
initialize_db()
logger.info("Database ready.")

# ── 2. Dash app ───────────────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    external_stylesheets=[dbc.themes.DARKLY],
    suppress_callback_exceptions=True,
    meta_tags=[{"name": "viewport", "content": "width=device-width, initial-scale=1"}],
    title="Maintenance Tracker",
)

server = app.server  # gunicorn entry point
app.layout = create_layout()

# ── 3. Register callbacks ─────────────────────────────────────────────────────
from src.callbacks import (  # noqa: E402
    carbon_brush,
    dashboard,
    equipment,
    navigation,
    thermography,
    winding_resistance,
)

navigation.register(app)
dashboard.register(app)
equipment.register(app)
carbon_brush.register(app)
winding_resistance.register(app)
thermography.register(app)

# ── 4. Run ────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    app.run(
        debug=settings.DEBUG,
        host=settings.HOST,
        port=settings.PORT,
    )
