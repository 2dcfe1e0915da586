# app.py

import logging

import dash
from dash import html
import dash_bootstrap_components as dbc

import config
from cache_config import cache

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

# ----------------- Initialize Dash App -----------------
app = dash.Dash(
    __name__,
    use_pages=True,
    external_stylesheets=[dbc.themes.BOOTSTRAP],
    suppress_callback_exceptions=True
)
app.title = "CGPA Leaderboard"

# ----------------- Server & Cache -----------------
server = app.server
cache.init_app(server)

# ----------------- Layout -----------------
app.layout = dbc.Container([
    dbc.NavbarSimple(
        brand="🎓 Student CGPA Leaderboard",
        color="primary",
        dark=True,
        className="mb-4 rounded"
    ),

    html.Div(dash.page_container)
], fluid=True)

# ----------------- Run App -----------------
if __name__ == '__main__':
    app.run(debug=config.DEBUG)
