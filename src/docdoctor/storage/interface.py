"""Storage interface (abstract base) for docdoctor."""

from __future__ import annotations

from abc import ABC, abstractmethod

from docdoctor.models import Problem


class Storage(ABC):
    """Abstract base class defining all problem storage operations.

    Every operation except ``open`` and ``close`` raises
    ``NotInitializedError`` when no connection is held.
    """

    # --- Lifecycle ---

    @abstractmethod
    def open(self, db_path: str) -> None:
        """Open (or create) the store at db_path, closing any held connection."""

    @abstractmethod
    def close(self) -> None:
        """Release the connection. No-op when none is held."""

    @abstractmethod
    def is_open(self) -> bool:
        """Return True while a connection is held."""

    @abstractmethod
    def path(self) -> str | None:
        """Return the open database file path, or None."""

    # --- Problem CRUD ---

    @abstractmethod
    def insert_problem(self, problem: Problem) -> int:
        """Insert a problem and return its newly assigned id."""

    @abstractmethod
    def list_problems(self) -> list[Problem]:
        """All problems, open before resolved, newest first within a status."""

    @abstractmethod
    def update_status(self, problem_id: int, status: int) -> int:
        """Set the status of one problem. Returns rows changed (at least 1)."""

    @abstractmethod
    def clear_problems(self) -> int:
        """Delete every problem. Returns rows deleted."""
