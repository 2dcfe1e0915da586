import os

# ----------------- Dataset -----------------
# CSV with a header row: Student Name, Course Name, Section, Semester, CGPA
CSV_FILE_PATH = os.environ.get("LEADERBOARD_CSV", "mit_cgpa.csv")

# ----------------- Leaderboard -----------------
ROWS_PER_PAGE = int(os.environ.get("LEADERBOARD_ROWS_PER_PAGE", "100"))

# ----------------- Runtime -----------------
LOG_LEVEL = os.environ.get("LEADERBOARD_LOG_LEVEL", "INFO")
DEBUG = os.environ.get("LEADERBOARD_DEBUG", "1") == "1"

# ----------------- Cache -----------------
CACHE_DIR = os.environ.get("LEADERBOARD_CACHE_DIR", "cache-directory")
