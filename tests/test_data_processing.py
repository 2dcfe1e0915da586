import io

import pytest

from data_processing import (
    CGPA_COL, COURSE_COL, NAME_COL, SECTION_COL, SEMESTER_COL, STUDENT_COLUMNS,
    DatasetLoadError, clean_text, convert_semester, filter_options, load_students,
    normalize_students, parse_cgpa,
)


@pytest.mark.parametrize("label, expected", [
    ("III", 3),
    ("7", 7),
    ("", 0),
    (None, 0),
    ("xyz", 0),
    ("  vi ", 6),
    ("X", 10),
    ("viii", 8),
    ("3rd", 3),
    (4, 4),
])
def test_convert_semester(label, expected):
    assert convert_semester(label) == expected


@pytest.mark.parametrize("text, expected", [
    ("8.75", 8.75),
    (" 9 ", 9.0),
    ("7.5/10", 7.5),
    ("", 0.0),
    ("n/a", 0.0),
    (None, 0.0),
    (".5", 0.5),
    ("Infinity", float("inf")),
    ("-Infinity", float("-inf")),
])
def test_parse_cgpa(text, expected):
    assert parse_cgpa(text) == pytest.approx(expected)


def test_clean_text_defaults_blank_values():
    assert clean_text("  Ann  ") == "Ann"
    assert clean_text("") == "N/A"
    assert clean_text("   ") == "N/A"
    assert clean_text(None) == "N/A"


def test_normalize_students_coerces_each_field(raw_rows):
    df = normalize_students(raw_rows)

    assert list(df.columns) == STUDENT_COLUMNS
    assert df[SEMESTER_COL].tolist() == [1, 2]
    assert df[CGPA_COL].tolist() == [8.0, 9.5]
    assert df[NAME_COL].tolist() == ["Ann", "Bob"]


def test_normalize_students_out_of_range_semester_is_invalid():
    df = normalize_students([
        {"Student Name": "A", "Course Name": "C", "Section": "S", "Semester": "12", "CGPA": "5"},
        {"Student Name": "B", "Course Name": "C", "Section": "S", "Semester": "-1", "CGPA": "5"},
    ])
    assert df[SEMESTER_COL].tolist() == [0, 0]


def test_load_students_from_csv():
    csv = io.StringIO(
        "Student Name,Course Name,Section,Semester,CGPA\n"
        "  Ann ,CS,A,I,8.0\n"
        "\n"
        "Bob,CS, B ,2,9.5\n"
        ",,,,\n"
    )
    df = load_students(csv)

    assert len(df) == 3
    assert df.loc[0, NAME_COL] == "Ann"
    assert df.loc[1, SECTION_COL] == "B"
    assert df.loc[2, NAME_COL] == "N/A"
    assert df.loc[2, SEMESTER_COL] == 0
    assert df.loc[2, CGPA_COL] == 0.0


def test_load_students_missing_columns_use_defaults():
    csv = io.StringIO("Student Name,Semester,CGPA\nAnn,II,7.1\n")
    df = load_students(csv)

    assert df.loc[0, COURSE_COL] == "N/A"
    assert df.loc[0, SECTION_COL] == "N/A"
    assert df.loc[0, SEMESTER_COL] == 2


def test_load_students_empty_file_gives_empty_frame():
    df = load_students(io.StringIO(""))
    assert df.empty
    assert list(df.columns) == STUDENT_COLUMNS


def test_load_students_missing_file(tmp_path):
    with pytest.raises(DatasetLoadError):
        load_students(tmp_path / "missing.csv")


def test_load_students_malformed_csv():
    csv = io.StringIO("a,b\n1,2\n3,4,5,6\n")
    with pytest.raises(DatasetLoadError) as excinfo:
        load_students(csv)
    assert excinfo.value.__cause__ is not None


def test_filter_options_sorted_and_skip_invalid_semesters(class_list):
    opts = filter_options(class_list)

    assert opts["courses"] == ["CSE", "ECE", "ME"]
    assert opts["sections"] == ["A", "B"]
    assert opts["semesters"] == [3, 5, 7, 10]


def test_filter_options_without_data():
    assert filter_options(None) == {"courses": [], "sections": [], "semesters": []}
