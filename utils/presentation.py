import plotly.graph_objects as go

from data_processing import CGPA_COL, COURSE_COL, NAME_COL, SECTION_COL, SEMESTER_COL
from utils.leaderboard_engine import MAX_CGPA, RANK_COL

MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}
PODIUM_CLASSES = {1: "row-gold", 2: "row-silver", 3: "row-bronze"}

COUNT_COLOR = 'rgba(54, 162, 235, 0.6)'
AVERAGE_COLOR = 'rgba(255, 99, 132, 0.6)'


# ---------- Row helpers ----------
def gpa_class(cgpa):
    if cgpa >= 8.5:
        return 'gpa-high'
    if cgpa >= 7.5:
        return 'gpa-good'
    if cgpa >= 6:
        return 'gpa-mid'
    if cgpa >= 4:
        return 'gpa-low'
    return 'gpa-fail'


def medal(rank):
    """Medal for the podium, plain rank number otherwise."""
    if rank in MEDALS:
        return f"{MEDALS[rank]} {rank}"
    return str(rank)


def row_class(rank, cgpa):
    return PODIUM_CLASSES.get(rank) or gpa_class(cgpa)


def table_rows(page_rows):
    """Display-ready dicts for one page of ranked students."""
    rows = []
    for rec in page_rows.to_dict("records"):
        rank = int(rec[RANK_COL])
        cgpa = float(rec[CGPA_COL])
        rows.append({
            "rank": medal(rank),
            "name": rec[NAME_COL],
            "course": rec[COURSE_COL],
            "section": rec[SECTION_COL],
            "semester": int(rec[SEMESTER_COL]),
            "cgpa": f"{cgpa:.2f}",
            "class": row_class(rank, cgpa),
        })
    return rows


# ---------- Chart ----------
def build_chart_figure(series):
    """
    Grouped bars on two y-axes: student count on the left,
    average CGPA (0-10) on the right when the series carries averages.
    """
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=series.labels, y=series.counts, name="Number of Students",
        marker_color=COUNT_COLOR, offsetgroup="count", yaxis="y",
    ))

    if series.averages is not None:
        fig.add_trace(go.Bar(
            x=series.labels, y=series.averages, name="Average CGPA",
            marker_color=AVERAGE_COLOR, offsetgroup="average", yaxis="y2",
        ))

    fig.update_layout(
        title=series.title, title_x=0.5,
        template="plotly_white",
        barmode="group",
        bargap=0.2,
        xaxis=dict(title=series.axis_title, type="category"),
        yaxis=dict(title="Number of Students", rangemode="tozero"),
        yaxis2=dict(
            title="Average CGPA", overlaying="y", side="right",
            range=[0, MAX_CGPA], tickformat=".1f", showgrid=False,
            visible=series.averages is not None,
        ),
        legend=dict(orientation="h", y=1.1),
    )
    return fig
