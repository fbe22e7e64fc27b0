"""Host-facing problem store.

``ProblemStore`` is the call surface a host process uses. Every failure is
absorbed here and reported as a sentinel: ``FAILURE`` (-1) for integer
results, ``None`` for listings. The exception behind the most recent
failure is kept on ``last_error`` for diagnostics only.

Typical use::

    with ProblemStore() as store:
        if store.open(".doc-doctor/problems.db") != 0:
            ...
        pid = store.insert('{"file_path": "a.c", "function_name": "f"}')
        listing = store.list_all()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from docdoctor.codec import decode_problem, encode_problems
from docdoctor.errors import NotInitializedError, StoreError
from docdoctor.storage.interface import Storage
from docdoctor.storage.sqlite_store import SQLiteStorage

log = logging.getLogger(__name__)

FAILURE = -1
SUCCESS = 0


class Snapshot:
    """Holds the most recent serialized listing.

    Only ``ProblemStore.list_all`` replaces its contents; other operations
    leave it untouched.
    """

    def __init__(self) -> None:
        self._text: str | None = None

    @property
    def text(self) -> str | None:
        return self._text

    def replace(self, text: str) -> None:
        self._text = text


@dataclass
class BatchResult:
    inserted: int = 0
    failed: int = 0

    @property
    def ok(self) -> bool:
        return self.failed == 0


class ProblemStore:
    """Explicitly owned store handle with sentinel-valued operations."""

    def __init__(self, storage: Storage | None = None) -> None:
        self._storage = storage if storage is not None else SQLiteStorage()
        self._snapshot = Snapshot()
        self.last_error: StoreError | None = None

    def __enter__(self) -> ProblemStore:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._storage.is_open()

    @property
    def snapshot(self) -> str | None:
        """Text returned by the last successful list_all, if any."""
        return self._snapshot.text

    def _fail(self, err: StoreError) -> None:
        self.last_error = err
        log.warning("%s", err)

    def _check_open(self, operation: str) -> None:
        if not self._storage.is_open():
            raise NotInitializedError(operation)

    # --- Operations ---

    def open(self, path: str) -> int:
        """Open or create the store at path. Returns 0, or -1 on failure."""
        try:
            self._storage.open(path)
        except StoreError as e:
            self._fail(e)
            return FAILURE
        self.last_error = None
        return SUCCESS

    def insert(self, document: str | bytes) -> int:
        """Insert one JSON problem document. Returns its new id, or -1."""
        try:
            self._check_open("insert")
            problem = decode_problem(document)
            problem_id = self._storage.insert_problem(problem)
        except StoreError as e:
            self._fail(e)
            return FAILURE
        self.last_error = None
        return problem_id

    def list_all(self) -> str | None:
        """Serialize every problem and keep the text in the snapshot.

        Returns the JSON array text, or None on failure (the snapshot then
        keeps its previous contents).
        """
        try:
            self._check_open("list")
            text = encode_problems(self._storage.list_problems())
        except StoreError as e:
            self._fail(e)
            return None
        self._snapshot.replace(text)
        self.last_error = None
        return text

    def update_status(self, problem_id: int, status: int) -> int:
        """Set one problem's status. Returns 0, or -1 if missing or on error."""
        try:
            self._check_open("update_status")
            self._storage.update_status(problem_id, status)
        except StoreError as e:
            self._fail(e)
            return FAILURE
        self.last_error = None
        return SUCCESS

    def clear_all(self) -> int:
        """Delete every problem. Returns 0, or -1 on failure."""
        try:
            self._check_open("clear")
            self._storage.clear_problems()
        except StoreError as e:
            self._fail(e)
            return FAILURE
        self.last_error = None
        return SUCCESS

    def replace_all(self, documents: Iterable[str | bytes]) -> BatchResult:
        """Clear the store, then insert each document.

        A document that fails to insert is counted and skipped; the rest
        of the batch still goes in.
        """
        result = BatchResult()
        self.clear_all()
        for document in documents:
            if self.insert(document) == FAILURE:
                result.failed += 1
            else:
                result.inserted += 1
        log.info("Stored %d problems, %d failed", result.inserted, result.failed)
        return result

    def close(self) -> None:
        """Release the connection. Safe to call at any time."""
        self._storage.close()
