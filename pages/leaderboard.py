# pages/leaderboard.py
# CGPA leaderboard: filters, name search, sorting, pagination and grouped chart

import logging
import os

import dash  # for dash.ctx in callbacks
from dash import html, dcc, Input, Output, State, callback
import dash_bootstrap_components as dbc
import plotly.graph_objects as go

import config
from cache_config import cache
from data_processing import DatasetLoadError, load_students, filter_options
from utils.leaderboard_engine import (
    ALL, DEFAULT_INPUTS, build_view, criteria_from_inputs, filter_students,
    navigate, total_pages,
)
from utils.presentation import build_chart_figure, table_rows

logger = logging.getLogger(__name__)

dash.register_page(__name__, path="/", name="Leaderboard")

TABLE_COLUMNS = ["Rank", "Student Name", "Course", "Section", "Semester", "CGPA"]

SORT_OPTIONS = [
    {"label": "CGPA (High to Low)", "value": "cgpa_desc"},
    {"label": "CGPA (Low to High)", "value": "cgpa_asc"},
    {"label": "Semester (High to Low)", "value": "semester_desc"},
    {"label": "Semester (Low to High)", "value": "semester_asc"},
    {"label": "Name (A-Z)", "value": "name_asc"},
]

CHART_OPTIONS = [
    {"label": "CGPA Distribution", "value": "cgpa"},
    {"label": "Course", "value": "course"},
    {"label": "Section", "value": "section"},
    {"label": "Semester", "value": "semester"},
]

PAGE_BUTTONS = {"prev-page": -1, "next-page": 1}

FILTER_IDS = [
    ("course-filter", "value"),
    ("section-filter", "value"),
    ("semester-filter", "value"),
    ("min-cgpa", "value"),
    ("max-cgpa", "value"),
    ("search-name", "value"),
    ("sort-by", "value"),
    ("chart-by", "value"),
]


# ==================== Data ====================

@cache.memoize()
def _read_students(path, mtime):
    return load_students(path)


def get_students(path):
    """Loaded dataset for path; parsed once per file version."""
    try:
        mtime = os.path.getmtime(path)
    except OSError:
        mtime = None
    return _read_students(path, mtime)


def _options(all_label, values):
    return [{"label": all_label, "value": ALL}] + [{"label": str(v), "value": v} for v in values]


def turn_page(trigger, page, path, criteria):
    """Page number after a control fires: prev/next step within bounds, anything else is page 1."""
    if trigger not in PAGE_BUTTONS:
        return 1

    try:
        df = get_students(path)
    except DatasetLoadError:
        return 1

    pages = total_pages(len(filter_students(df, criteria)), config.ROWS_PER_PAGE)
    return navigate(page or 1, PAGE_BUTTONS[trigger], pages)


def _error_row():
    return [html.Tr(html.Td("Error loading data", colSpan=len(TABLE_COLUMNS),
                            className="text-center text-danger"))]


# ==================== Layout ====================

def _filter_col(label, control, md=2):
    return dbc.Col([dbc.Label(label, className="small text-muted mb-1"), control], md=md, xs=12)


layout = dbc.Container([
    html.Div(id="leaderboard-top"),

    html.Div([
        html.H3("🏆 CGPA Leaderboard", className="text-center fw-bold mb-2"),
        html.P("Filter, search and compare students by CGPA.",
               className="text-center text-muted mb-3"),
        html.Div([
            html.A("📊 Go to chart", href="#leaderboard-chart", className="btn btn-outline-primary btn-sm"),
        ], className="text-center mb-2"),
    ]),

    # Controls
    dbc.Card(dbc.CardBody([
        dbc.Row([
            _filter_col("Course", dcc.Dropdown(
                id="course-filter", options=_options("All Courses", []),
                value=ALL, clearable=False)),
            _filter_col("Section", dcc.Dropdown(
                id="section-filter", options=_options("All Sections", []),
                value=ALL, clearable=False)),
            _filter_col("Semester", dcc.Dropdown(
                id="semester-filter", options=_options("All Semesters", []),
                value=ALL, clearable=False)),
            _filter_col("Min CGPA", dbc.Input(
                id="min-cgpa", type="number", min=0, max=10, step=0.01, placeholder="0")),
            _filter_col("Max CGPA", dbc.Input(
                id="max-cgpa", type="number", min=0, max=10, step=0.01, placeholder="10")),
            _filter_col("Sort By", dcc.Dropdown(
                id="sort-by", options=SORT_OPTIONS,
                value=DEFAULT_INPUTS["sort_by"], clearable=False)),
        ], className="g-2 mb-2"),
        dbc.Row([
            dbc.Col(dbc.Input(id="search-name", type="text",
                              placeholder="Search by student name…"), md=10, xs=12),
            dbc.Col(dbc.Button("Reset", id="reset-filters", color="secondary",
                               outline=True, className="w-100"), md=2, xs=12),
        ], className="g-2"),
    ]), className="shadow-sm mb-3"),

    # Leaderboard table
    dbc.Card(dbc.CardBody([
        dbc.Table([
            html.Thead(html.Tr([html.Th(c) for c in TABLE_COLUMNS])),
            html.Tbody(id="leaderboard-body"),
        ], hover=True, responsive=True, className="leaderboard-table mb-0"),
        dbc.Alert("No students match the current filters.", id="no-results",
                  color="light", className="text-center d-none mt-3"),
        html.Div([
            dbc.Button("‹ Prev", id="prev-page", color="primary", outline=True, size="sm"),
            html.Span(id="page-info", className="mx-3 small text-muted"),
            dbc.Button("Next ›", id="next-page", color="primary", outline=True, size="sm"),
        ], id="pagination-controls", className="d-flex justify-content-center align-items-center mt-3"),
    ]), className="shadow-sm mb-4"),

    # Chart
    dbc.Card(dbc.CardBody([
        dbc.Row([
            dbc.Col(html.H5(id="chart-title", className="fw-bold mb-0"), md=8),
            dbc.Col(dcc.Dropdown(id="chart-by", options=CHART_OPTIONS,
                                 value="cgpa", clearable=False), md=4),
        ], className="align-items-center mb-2"),
        dcc.Graph(id="leaderboard-chart", style={"height": "420px"}),
        html.Div(html.A("⬆️ Back to top", href="#leaderboard-top",
                        className="btn btn-outline-secondary btn-sm"), className="text-center mt-2"),
    ]), className="shadow-sm"),

    # Stores
    dcc.Store(id="dataset-path", data=config.CSV_FILE_PATH),
    dcc.Store(id="current-page", data=1),
], fluid=True, className="pb-4")


# ==================== Callbacks ====================

@callback(
    Output("course-filter", "options"),
    Output("section-filter", "options"),
    Output("semester-filter", "options"),
    Input("dataset-path", "data"),
)
def populate_filters(path):
    """Dropdown options from the distinct values in the loaded dataset."""
    try:
        df = get_students(path)
    except DatasetLoadError as e:
        logger.warning("Filters left empty: %s", e)
        df = None

    opts = filter_options(df)
    return (
        _options("All Courses", opts["courses"]),
        _options("All Sections", opts["sections"]),
        _options("All Semesters", opts["semesters"]),
    )


@callback(
    Output("course-filter", "value"),
    Output("section-filter", "value"),
    Output("semester-filter", "value"),
    Output("min-cgpa", "value"),
    Output("max-cgpa", "value"),
    Output("search-name", "value"),
    Output("sort-by", "value"),
    Input("reset-filters", "n_clicks"),
    prevent_initial_call=True,
)
def reset_filters(n_clicks):
    """Reset all filter controls to defaults."""
    d = DEFAULT_INPUTS
    return d["course"], d["section"], d["semester"], d["min_cgpa"], d["max_cgpa"], d["search"], d["sort_by"]


@callback(
    Output("current-page", "data"),
    Input("prev-page", "n_clicks"),
    Input("next-page", "n_clicks"),
    *[Input(i, p) for i, p in FILTER_IDS],
    State("current-page", "data"),
    State("dataset-path", "data"),
)
def change_page(prev_clicks, next_clicks, course, section, semester,
                min_cgpa, max_cgpa, search, sort_by, chart_by, page, path):
    """Prev/next move one page within bounds; any filter change goes back to page 1."""
    criteria = criteria_from_inputs(course, section, semester, min_cgpa, max_cgpa, search, sort_by)
    return turn_page(dash.ctx.triggered_id, page, path, criteria)


@callback(
    Output("leaderboard-body", "children"),
    Output("no-results", "className"),
    Output("pagination-controls", "className"),
    Output("page-info", "children"),
    Output("prev-page", "disabled"),
    Output("next-page", "disabled"),
    Output("leaderboard-chart", "figure"),
    Output("chart-title", "children"),
    *[Input(i, p) for i, p in FILTER_IDS],
    Input("current-page", "data"),
    State("dataset-path", "data"),
)
def render_leaderboard(course, section, semester, min_cgpa, max_cgpa,
                       search, sort_by, chart_by, page, path):
    """Rebuild the ranked view, the visible page and the chart from the full dataset."""
    no_results_hidden = "text-center d-none mt-3"
    controls_hidden = "d-none"

    try:
        df = get_students(path)
    except DatasetLoadError:
        logger.exception("Error loading CSV %s", path)
        return _error_row(), no_results_hidden, controls_hidden, "", True, True, go.Figure(), ""

    criteria = criteria_from_inputs(course, section, semester, min_cgpa, max_cgpa, search, sort_by)
    view = build_view(df, criteria, chart_by or "cgpa", page or 1, config.ROWS_PER_PAGE)
    info = view.pagination

    body = [
        html.Tr([
            html.Td(r["rank"], className="fw-medium"),
            html.Td(r["name"], className="fw-semibold"),
            html.Td(r["course"]),
            html.Td(r["section"]),
            html.Td(r["semester"]),
            html.Td(r["cgpa"], className="text-end fw-bold text-primary"),
        ], className=r["class"])
        for r in table_rows(view.page_rows)
    ]

    no_results_cls = "text-center mt-3" if view.ranked.empty else no_results_hidden
    controls_cls = (
        "d-flex justify-content-center align-items-center mt-3"
        if info.show_controls else controls_hidden
    )
    page_text = f"Page {info.current_page} of {info.total_pages}"

    return (
        body, no_results_cls, controls_cls, page_text,
        not info.has_prev, not info.has_next,
        build_chart_figure(view.chart), view.chart.title,
    )
