"""SQLite storage implementation for docdoctor."""

from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Any, Iterator

from docdoctor.errors import (
    NotFoundError, NotInitializedError, OpenError, ReadError, WriteError,
)
from docdoctor.models import FIELD_NAMES, PROBLEM_FIELDS, Problem
from docdoctor.storage.interface import Storage
from docdoctor.storage.schema import ADDITIVE_COLUMNS, SCHEMA, TABLE

log = logging.getLogger(__name__)

_INSERT_SQL = "INSERT INTO problems ({}) VALUES ({})".format(
    ", ".join(FIELD_NAMES), ", ".join("?" for _ in FIELD_NAMES),
)
_SELECT_ALL_SQL = "SELECT id, {} FROM problems ORDER BY status ASC, id DESC".format(
    ", ".join(FIELD_NAMES),
)


class SQLiteStorage(Storage):
    """SQLite-based problem store owning a single connection.

    Starts uninitialized unless a path is given. ``open`` on an already open
    store closes the old connection first.
    """

    def __init__(self, db_path: str | None = None):
        self._db_path: str | None = None
        self._conn: sqlite3.Connection | None = None
        if db_path is not None:
            self.open(db_path)

    def __enter__(self) -> SQLiteStorage:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # --- Lifecycle ---

    def open(self, db_path: str) -> None:
        if self._conn is not None:
            log.info("Reopening: closing previous connection to %s", self._db_path)
            self.close()

        conn: sqlite3.Connection | None = None
        created: list[str] = []
        try:
            if db_path != ":memory:":
                parent = os.path.dirname(os.path.abspath(db_path))
                created = _missing_dirs(parent)
                os.makedirs(parent, exist_ok=True)
            conn = sqlite3.connect(db_path)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA busy_timeout=5000")
            self._init_schema(conn)
        except (sqlite3.Error, OSError, ValueError, TypeError) as e:
            if conn is not None:
                conn.close()
            _remove_dirs(created)
            log.warning("Failed to open database %s: %s", db_path, e)
            raise OpenError(f"failed to open database {db_path}: {e}") from e

        self._conn = conn
        self._db_path = db_path
        log.info("Database initialized: %s", db_path)

    def _init_schema(self, conn: sqlite3.Connection) -> None:
        """Create the problems table, or add missing columns to an existing one."""
        row = conn.execute(
            "SELECT count(*) FROM sqlite_master WHERE type='table' AND name=?",
            (TABLE,),
        ).fetchone()
        if row[0] == 0:
            conn.executescript(SCHEMA)
            conn.commit()
            return

        existing_cols = {r[1] for r in conn.execute(f"PRAGMA table_info({TABLE})")}
        for col_name, col_type in ADDITIVE_COLUMNS:
            if col_name not in existing_cols:
                log.info("Adding missing column %s.%s", TABLE, col_name)
                conn.execute(f"ALTER TABLE {TABLE} ADD COLUMN {col_name} {col_type}")
        conn.commit()

    def close(self) -> None:
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None
        log.info("Database closed: %s", self._db_path)
        self._db_path = None

    def is_open(self) -> bool:
        return self._conn is not None

    def path(self) -> str | None:
        return self._db_path

    # --- Helpers ---

    def _require_open(self, operation: str) -> sqlite3.Connection:
        if self._conn is None:
            raise NotInitializedError(operation)
        return self._conn

    @contextmanager
    def _write(self, operation: str) -> Iterator[sqlite3.Connection]:
        """Run one write as its own transaction, wrapping engine errors."""
        conn = self._require_open(operation)
        try:
            yield conn
            conn.commit()
        except (sqlite3.Error, OverflowError, ValueError) as e:
            conn.rollback()
            raise WriteError(f"{operation} failed: {e}") from e

    @staticmethod
    def _row_to_problem(row: sqlite3.Row) -> Problem:
        problem = Problem(id=row["id"])
        for name, kind, _ in PROBLEM_FIELDS:
            value = row[name]
            if kind is str:
                value = "" if value is None else str(value)
            else:
                value = _int_column(value)
            setattr(problem, name, value)
        return problem

    # --- Problem CRUD ---

    def insert_problem(self, problem: Problem) -> int:
        with self._write("insert") as conn:
            cur = conn.execute(_INSERT_SQL, problem.row_values())
        problem.id = cur.lastrowid
        log.info("Inserted problem with ID: %d", problem.id)
        return problem.id

    def list_problems(self) -> list[Problem]:
        conn = self._require_open("list")
        try:
            rows = conn.execute(_SELECT_ALL_SQL).fetchall()
        except sqlite3.Error as e:
            raise ReadError(f"list failed: {e}") from e
        problems = [self._row_to_problem(r) for r in rows]
        log.info("Loaded %d problems", len(problems))
        return problems

    def update_status(self, problem_id: int, status: int) -> int:
        with self._write("update_status") as conn:
            cur = conn.execute(
                "UPDATE problems SET status = ? WHERE id = ?", (status, problem_id),
            )
        log.info("Updated %d row(s), id=%d, status=%d", cur.rowcount, problem_id, status)
        if cur.rowcount == 0:
            raise NotFoundError(f"problem not found: {problem_id}")
        return cur.rowcount

    def clear_problems(self) -> int:
        with self._write("clear") as conn:
            cur = conn.execute("DELETE FROM problems")
        log.info("All problems cleared (%d)", cur.rowcount)
        return cur.rowcount


def _int_column(value: Any) -> int:
    """Read an INTEGER column; NULL and non-numeric values read as 0."""
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _missing_dirs(path: str) -> list[str]:
    """Directories on the way to path (path included) that do not exist yet, outermost first."""
    missing: list[str] = []
    while not os.path.isdir(path):
        missing.append(path)
        head = os.path.dirname(path)
        if head == path:
            break
        path = head
    missing.reverse()
    return missing


def _remove_dirs(created: list[str]) -> None:
    """Undo directories made by a failed open, innermost first, while they are empty."""
    for path in reversed(created):
        if not os.path.isdir(path):
            continue
        try:
            os.rmdir(path)
        except OSError as e:
            log.warning("Could not remove directory %s: %s", path, e)
            return
