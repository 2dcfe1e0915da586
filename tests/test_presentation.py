import pytest

from utils.leaderboard_engine import aggregate, filter_students
from utils.presentation import build_chart_figure, gpa_class, medal, row_class, table_rows


@pytest.mark.parametrize("cgpa, expected", [
    (9.7, "gpa-high"),
    (8.5, "gpa-high"),
    (7.5, "gpa-good"),
    (6.0, "gpa-mid"),
    (4.0, "gpa-low"),
    (3.99, "gpa-fail"),
])
def test_gpa_class(cgpa, expected):
    assert gpa_class(cgpa) == expected


def test_medal_and_row_class():
    assert medal(1) == "🥇 1"
    assert medal(3) == "🥉 3"
    assert medal(4) == "4"
    assert row_class(2, 3.0) == "row-silver"
    assert row_class(4, 9.0) == "gpa-high"


def test_table_rows(students):
    rows = table_rows(filter_students(students))

    assert [r["name"] for r in rows] == ["Bob", "Ann"]
    assert rows[0]["cgpa"] == "9.50"
    assert rows[0]["class"] == "row-gold"
    assert rows[1]["rank"] == "🥈 2"
    assert rows[1]["semester"] == 1


def test_cgpa_chart_has_counts_only(class_list):
    fig = build_chart_figure(aggregate(filter_students(class_list), "cgpa"))

    assert len(fig.data) == 1
    assert fig.layout.title.text == "CGPA Distribution"
    assert sum(fig.data[0].y) == 6


def test_grouped_chart_uses_second_axis(class_list):
    fig = build_chart_figure(aggregate(filter_students(class_list), "course"))

    assert len(fig.data) == 2
    assert fig.data[1].yaxis == "y2"
    assert list(fig.layout.yaxis2.range) == [0, 10]
    assert list(fig.data[0].x) == ["CSE", "ECE", "ME"]
