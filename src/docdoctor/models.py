"""Problem data model and the field-default rules applied on decode."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


# --- ProblemType constants ---

class ProblemType:
    PARAM_MISSING = 1
    RETURN_MISSING = 2
    BRIEF_MISSING = 3
    CONTENT_CHANGED = 4
    SYNTAX_ERROR = 5

    _LABELS = {
        PARAM_MISSING: "param-missing",
        RETURN_MISSING: "return-missing",
        BRIEF_MISSING: "brief-missing",
        CONTENT_CHANGED: "content-changed",
        SYNTAX_ERROR: "syntax-error",
    }

    @classmethod
    def label(cls, t: int) -> str:
        return cls._LABELS.get(t, f"type-{t}")


# --- ProblemStatus constants ---

class ProblemStatus:
    OPEN = 0
    RESOLVED = 1


# --- Field defaults ---

# (name, kind, default) for every Problem field except id, in column order.
# Decode substitutes the default whenever a key is absent or has the wrong shape.
PROBLEM_FIELDS: tuple[tuple[str, type, Any], ...] = (
    ("problem_type", int, 0),
    ("file_path", str, ""),
    ("function_signature", str, ""),
    ("function_name", str, ""),
    ("line_number", int, 1),
    ("column_number", int, 1),
    ("problem_description", str, ""),
    ("function_snippet", str, ""),
    ("check_timestamp", str, ""),
    ("status", int, ProblemStatus.OPEN),
)

FIELD_NAMES: tuple[str, ...] = tuple(name for name, _, _ in PROBLEM_FIELDS)


def coerce_field(value: Any, kind: type, default: Any) -> Any:
    """Return value if it has the shape of kind, otherwise default.

    Booleans are not integers here, and integral floats (``3.0``) are.
    """
    if kind is int:
        if isinstance(value, bool):
            return default
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return default
    if isinstance(value, str):
        return value
    return default


# --- Helper: ISO-8601 timestamps ---

def now_utc() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    """Format datetime as ISO-8601 with millisecond precision and Z suffix."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


# --- Dataclasses ---

@dataclass
class Problem:
    """One documentation finding about a single function."""

    id: int = 0
    problem_type: int = 0
    file_path: str = ""
    function_signature: str = ""
    function_name: str = ""
    line_number: int = 1
    column_number: int = 1
    problem_description: str = ""
    function_snippet: str = ""
    check_timestamp: str = ""
    status: int = ProblemStatus.OPEN

    @property
    def is_open(self) -> bool:
        return self.status == ProblemStatus.OPEN

    def to_dict(self) -> dict[str, Any]:
        """Wire form: all eleven keys, always present."""
        d: dict[str, Any] = {"id": self.id}
        for name in FIELD_NAMES:
            d[name] = getattr(self, name)
        return d

    def row_values(self) -> tuple[Any, ...]:
        """Column values for INSERT, in PROBLEM_FIELDS order."""
        return tuple(getattr(self, name) for name in FIELD_NAMES)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Problem:
        """Build a Problem from a wire mapping, applying field defaults.

        ``id`` is taken when present and integral; stores assign their own
        id on insert regardless.
        """
        values = {
            name: coerce_field(d.get(name), kind, default)
            for name, kind, default in PROBLEM_FIELDS
        }
        values["id"] = coerce_field(d.get("id"), int, 0)
        return cls(**values)
