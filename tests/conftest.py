import os
import tempfile

import pandas as pd
import pytest

# keep the memoized dataset out of the working tree
os.environ.setdefault("LEADERBOARD_CACHE_DIR", tempfile.mkdtemp(prefix="leaderboard-cache-"))

from data_processing import normalize_students  # noqa: E402


@pytest.fixture
def raw_rows():
    return [
        {"Student Name": "Ann", "Course Name": "CS", "Section": "A", "Semester": "I", "CGPA": "8.0"},
        {"Student Name": "Bob", "Course Name": "CS", "Section": "B", "Semester": "2", "CGPA": "9.5"},
    ]


@pytest.fixture
def students(raw_rows):
    return normalize_students(raw_rows)


@pytest.fixture
def class_list():
    return normalize_students([
        {"Student Name": "Aarav Sharma", "Course Name": "CSE", "Section": "A", "Semester": "III", "CGPA": "9.12"},
        {"Student Name": "Diya Patel", "Course Name": "CSE", "Section": "B", "Semester": "3", "CGPA": "8.74"},
        {"Student Name": "Rohan Mehta", "Course Name": "ECE", "Section": "A", "Semester": "V", "CGPA": "7.95"},
        {"Student Name": "Ananya Iyer", "Course Name": "ECE", "Section": "B", "Semester": "5", "CGPA": "9.48"},
        {"Student Name": "kabir Singh", "Course Name": "ME", "Section": "A", "Semester": "VII", "CGPA": "6.31"},
        {"Student Name": "Isha Reddy", "Course Name": "ME", "Section": "A", "Semester": "10", "CGPA": "8.74"},
        {"Student Name": "Ghost Row", "Course Name": "CSE", "Section": "A", "Semester": "", "CGPA": "9.99"},
        {"Student Name": "Bad Semester", "Course Name": "ECE", "Section": "B", "Semester": "xyz", "CGPA": "8.00"},
    ])


@pytest.fixture
def big_class():
    rows = [
        {"Student Name": f"Student {i:03d}", "Course Name": "CSE", "Section": "A",
         "Semester": "1", "CGPA": str(round(5 + (i % 50) / 10, 2))}
        for i in range(250)
    ]
    return normalize_students(pd.DataFrame(rows))
