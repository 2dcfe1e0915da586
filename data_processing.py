import logging
import re

import pandas as pd

logger = logging.getLogger(__name__)

# Column names as they appear in the CSV header
NAME_COL = "Student Name"
COURSE_COL = "Course Name"
SECTION_COL = "Section"
SEMESTER_COL = "Semester"
CGPA_COL = "CGPA"

STUDENT_COLUMNS = [NAME_COL, COURSE_COL, SECTION_COL, SEMESTER_COL, CGPA_COL]
TEXT_COLUMNS = [NAME_COL, COURSE_COL, SECTION_COL]

MISSING = "N/A"
MAX_SEMESTER = 10

ROMAN_SEMESTERS = {
    'I': 1, 'II': 2, 'III': 3, 'IV': 4, 'V': 5,
    'VI': 6, 'VII': 7, 'VIII': 8, 'IX': 9, 'X': 10,
}

_LEADING_INT = re.compile(r"^[+-]?\d+")
_LEADING_FLOAT = re.compile(r"^[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class DatasetLoadError(RuntimeError):
    """The student CSV could not be read or parsed."""


# =====================================================
# PER-FIELD COERCION
# =====================================================
def _is_blank(value):
    if isinstance(value, str):
        return value == ""
    return value is None or bool(pd.isna(value))


def convert_semester(value):
    """
    Map a semester label to an integer.
    '7' -> 7, 'III' -> 3, ' vi ' -> 6, '' / None / 'xyz' -> 0.
    A leading number wins over the rest of the text ('3rd' -> 3).
    """
    if _is_blank(value):
        return 0

    text = str(value).strip().upper()
    match = _LEADING_INT.match(text)
    if match:
        return int(match.group())

    return ROMAN_SEMESTERS.get(text, 0)


def parse_cgpa(value):
    """
    Read the leading number of a CGPA cell, 0.0 when there is none.
    'Infinity' reads as inf so the row falls outside every CGPA range.
    """
    if _is_blank(value):
        return 0.0

    match = _LEADING_FLOAT.match(str(value).strip())
    if not match:
        return 0.0

    return float(match.group())


def clean_text(value):
    """Trimmed string, or 'N/A' for a missing or blank cell."""
    if _is_blank(value):
        return MISSING
    text = str(value).strip()
    return text if text else MISSING


# =====================================================
# DATASET LOADER
# =====================================================
def normalize_students(raw):
    """
    Turn raw header-keyed rows into the student frame.
    ✔ Missing columns fall back to defaults
    ✔ Semester normalized to 0-10 (0 = unrecognized)
    ✔ CGPA coerced to float
    Never fails on a single bad row.
    """
    raw = pd.DataFrame(raw)
    df = pd.DataFrame(index=range(len(raw)))

    for col in TEXT_COLUMNS:
        source = raw[col] if col in raw.columns else pd.Series([None] * len(raw))
        df[col] = [clean_text(v) for v in source]

    semesters = raw[SEMESTER_COL] if SEMESTER_COL in raw.columns else [None] * len(raw)
    df[SEMESTER_COL] = [convert_semester(v) for v in semesters]
    # anything outside the known range can never be filtered or charted
    df.loc[(df[SEMESTER_COL] < 0) | (df[SEMESTER_COL] > MAX_SEMESTER), SEMESTER_COL] = 0
    df[SEMESTER_COL] = df[SEMESTER_COL].astype(int)

    cgpas = raw[CGPA_COL] if CGPA_COL in raw.columns else [None] * len(raw)
    df[CGPA_COL] = pd.Series([parse_cgpa(v) for v in cgpas], dtype=float)

    return df[STUDENT_COLUMNS]


def load_students(source):
    """
    Read the whole CSV (path or file-like) and return the normalized frame.
    Raises DatasetLoadError when the resource cannot be read or parsed.
    """
    try:
        raw = pd.read_csv(source, dtype=str, keep_default_na=False, skip_blank_lines=True)
    except pd.errors.EmptyDataError:
        logger.warning("Dataset %s is empty", source)
        raw = pd.DataFrame(columns=STUDENT_COLUMNS)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise DatasetLoadError(f"Could not load student data from {source}") from e

    raw.columns = [str(c).strip() for c in raw.columns]
    missing = [c for c in STUDENT_COLUMNS if c not in raw.columns]
    if missing:
        logger.warning("Dataset is missing columns %s; defaults will be used", missing)

    df = normalize_students(raw)
    invalid = int((df[SEMESTER_COL] == 0).sum())
    logger.info("Loaded %d students (%d with unrecognized semester)", len(df), invalid)
    return df


# =====================================================
# FILTER OPTIONS
# =====================================================
def filter_options(df):
    """Distinct course / section / semester values for the filter dropdowns."""
    if df is None or df.empty:
        return {"courses": [], "sections": [], "semesters": []}

    semesters = sorted(int(s) for s in df[SEMESTER_COL].unique() if s > 0)
    return {
        "courses": sorted(df[COURSE_COL].unique()),
        "sections": sorted(df[SECTION_COL].unique()),
        "semesters": semesters,
    }
