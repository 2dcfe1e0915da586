import math
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

import numpy as np
import pandas as pd

import config
from data_processing import (
    CGPA_COL, COURSE_COL, NAME_COL, SECTION_COL, SEMESTER_COL, STUDENT_COLUMNS,
    convert_semester,
)
from utils.name_matcher import collation_key, match_score, matches_all_tokens, search_tokens

ALL = "all"

RANK_COL = "Rank"
SCORE_COL = "Match_Score"
RANKED_COLUMNS = [RANK_COL] + STUDENT_COLUMNS + [SCORE_COL]

MIN_CGPA = 0.0
MAX_CGPA = 10.0

# sort key -> (column, ascending)
SORT_KEYS = {
    "cgpa_desc": (CGPA_COL, False),
    "cgpa_asc": (CGPA_COL, True),
    "semester_desc": (SEMESTER_COL, False),
    "semester_asc": (SEMESTER_COL, True),
    "name_asc": (NAME_COL, True),
}
DEFAULT_SORT = "cgpa_desc"

CGPA_BUCKETS = [f"{i}-{i + 1}" for i in range(10)]

GROUP_COLUMNS = {
    "course": COURSE_COL,
    "section": SECTION_COL,
    "semester": SEMESTER_COL,
}
CHART_TITLES = {
    "cgpa": "CGPA Distribution",
    "course": "Students by Course",
    "section": "Students by Section",
    "semester": "Students by Semester",
}


# ==================== Types ====================

@dataclass(frozen=True)
class FilterCriteria:
    course: str = ALL
    section: str = ALL
    semester: str = ALL
    min_cgpa: float = MIN_CGPA
    max_cgpa: float = MAX_CGPA
    search: str = ""
    sort_by: str = DEFAULT_SORT


DEFAULT_CRITERIA = FilterCriteria()


class PaginationInfo(NamedTuple):
    current_page: int
    total_pages: int
    has_prev: bool
    has_next: bool
    show_controls: bool


class ChartSeries(NamedTuple):
    labels: List[str]
    counts: List[int]
    averages: Optional[List[float]]
    title: str
    axis_title: str


class LeaderboardView(NamedTuple):
    ranked: pd.DataFrame
    page_rows: pd.DataFrame
    pagination: PaginationInfo
    chart: ChartSeries


# ==================== Criteria ====================

def _parse_bound(value, default):
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        bound = float(value)
    except (TypeError, ValueError):
        return default
    return default if math.isnan(bound) else bound


def _selector(value):
    if value is None or str(value).strip() == "":
        return ALL
    return value


def criteria_from_inputs(course=None, section=None, semester=None,
                         min_cgpa=None, max_cgpa=None, search=None, sort_by=None):
    """Build FilterCriteria from raw control values; blanks fall back to defaults."""
    return FilterCriteria(
        course=_selector(course),
        section=_selector(section),
        semester=_selector(semester),
        min_cgpa=_parse_bound(min_cgpa, MIN_CGPA),
        max_cgpa=_parse_bound(max_cgpa, MAX_CGPA),
        search=search or "",
        sort_by=sort_by or DEFAULT_SORT,
    )


# Control values the reset button restores
DEFAULT_INPUTS = {
    "course": ALL,
    "section": ALL,
    "semester": ALL,
    "min_cgpa": None,
    "max_cgpa": None,
    "search": "",
    "sort_by": DEFAULT_SORT,
}


# ==================== Filter / Sort / Rank ====================

def filter_students(all_students, criteria=DEFAULT_CRITERIA):
    """
    Derive the ranked view from the full dataset.

    Keeps rows with a recognized semester whose name contains every search
    token and that pass the course / section / semester / CGPA range filters,
    sorts them on a single stable key and numbers them 1..N in RANK_COL.
    SCORE_COL is attached for reference only; it does not affect the result.
    The input frame is left untouched.
    """
    if all_students is None or all_students.empty:
        return pd.DataFrame(columns=RANKED_COLUMNS)

    df = all_students
    term = (criteria.search or "").lower().strip()
    tokens = search_tokens(term)

    mask = df[SEMESTER_COL] != 0
    if tokens:
        mask &= df[NAME_COL].map(lambda n: matches_all_tokens(n, tokens)).astype(bool)
    if criteria.course != ALL:
        mask &= df[COURSE_COL] == criteria.course
    if criteria.section != ALL:
        mask &= df[SECTION_COL] == criteria.section
    if criteria.semester != ALL:
        mask &= df[SEMESTER_COL] == convert_semester(criteria.semester)
    mask &= (df[CGPA_COL] >= criteria.min_cgpa) & (df[CGPA_COL] <= criteria.max_cgpa)

    out = df[mask].copy()
    out[SCORE_COL] = [match_score(n, term) for n in out[NAME_COL]]
    out[SCORE_COL] = out[SCORE_COL].astype(int)

    if criteria.sort_by in SORT_KEYS:
        col, ascending = SORT_KEYS[criteria.sort_by]
        key = (lambda s: s.map(collation_key)) if col == NAME_COL else None
        out = out.sort_values(col, ascending=ascending, kind="mergesort", key=key)

    out = out.reset_index(drop=True)
    out.insert(0, RANK_COL, np.arange(1, len(out) + 1))
    return out[RANKED_COLUMNS]


# ==================== Pagination ====================

def total_pages(count, size=config.ROWS_PER_PAGE):
    return math.ceil(count / size) if count > 0 else 0


def paginate(ranked, page=1, size=config.ROWS_PER_PAGE):
    """Rows [(page-1)*size, page*size) of the ranked view."""
    start = (page - 1) * size
    return ranked.iloc[start:start + size]


def navigate(page, delta, pages):
    """Move by delta pages; stepping outside 1..pages leaves the page unchanged."""
    target = page + delta
    if target < 1 or target > pages:
        return page
    return target


def pagination_info(page, pages):
    return PaginationInfo(
        current_page=page,
        total_pages=pages,
        has_prev=page > 1,
        has_next=page < pages,
        show_controls=pages > 1,
    )


# ==================== Aggregation ====================

def aggregate(filtered, mode="cgpa"):
    """
    Chart series for the filtered view.
      * cgpa                      -> counts in ten one-point buckets, no averages
      * course / section / semester -> count and mean CGPA per distinct value
    """
    if mode == "cgpa":
        cgpa = filtered[CGPA_COL].to_numpy(dtype=float) if len(filtered) else np.array([])
        buckets = np.clip(np.floor(cgpa), 0, 9).astype(int)
        counts = np.bincount(buckets, minlength=len(CGPA_BUCKETS))
        return ChartSeries(
            labels=list(CGPA_BUCKETS),
            counts=[int(c) for c in counts],
            averages=None,
            title=CHART_TITLES[mode],
            axis_title="CGPA Range",
        )

    if mode not in GROUP_COLUMNS:
        raise ValueError(f"Unknown chart grouping: {mode!r}")

    col = GROUP_COLUMNS[mode]
    if len(filtered):
        grouped = (
            filtered.groupby(col, sort=True)[CGPA_COL]
            .agg(["count", "sum"])
        )
    else:
        grouped = pd.DataFrame(columns=["count", "sum"])

    return ChartSeries(
        labels=[str(v) for v in grouped.index],
        counts=[int(c) for c in grouped["count"]],
        averages=[float(s) / int(c) for s, c in zip(grouped["sum"], grouped["count"])],
        title=CHART_TITLES[mode],
        axis_title=col,
    )


# ==================== View ====================

def build_view(all_students, criteria=DEFAULT_CRITERIA, chart_by="cgpa",
               page=1, size=config.ROWS_PER_PAGE):
    """Everything the leaderboard page renders for one set of inputs."""
    ranked = filter_students(all_students, criteria)
    pages = total_pages(len(ranked), size)
    page = min(max(page, 1), max(pages, 1))
    return LeaderboardView(
        ranked=ranked,
        page_rows=paginate(ranked, page, size),
        pagination=pagination_info(page, pages),
        chart=aggregate(ranked, chart_by),
    )
