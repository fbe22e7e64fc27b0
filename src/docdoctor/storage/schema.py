"""SQLite schema for the problems table."""

TABLE = "problems"

SCHEMA = """
CREATE TABLE IF NOT EXISTS problems (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    problem_type INTEGER NOT NULL,
    file_path TEXT NOT NULL,
    function_signature TEXT,
    function_name TEXT NOT NULL,
    line_number INTEGER DEFAULT 1,
    column_number INTEGER DEFAULT 1,
    problem_description TEXT,
    function_snippet TEXT,
    check_timestamp TEXT NOT NULL,
    status INTEGER DEFAULT 0
);
"""

# Columns that may be missing from a file created by an older build.
# Only nullable or defaulted columns can be added to an existing table.
ADDITIVE_COLUMNS = [
    ("function_signature", "TEXT"),
    ("line_number", "INTEGER DEFAULT 1"),
    ("column_number", "INTEGER DEFAULT 1"),
    ("problem_description", "TEXT"),
    ("function_snippet", "TEXT"),
    ("status", "INTEGER DEFAULT 0"),
]
