"""Utility functions for the docdoctor CLI."""

from __future__ import annotations

import json

from docdoctor.models import (
    Problem, ProblemStatus, ProblemType, format_timestamp, now_utc,
)


def status_symbol(status: int) -> str:
    """Return a symbol for status display."""
    symbols = {
        ProblemStatus.OPEN: " ",
        ProblemStatus.RESOLVED: "x",
    }
    return symbols.get(status, "?")


def truncate(s: str, max_len: int = 60) -> str:
    """Truncate a string with ellipsis."""
    if len(s) <= max_len:
        return s
    return s[:max_len - 3] + "..."


def format_location(problem: Problem) -> str:
    """file:line:column, as editors expect."""
    return f"{problem.file_path}:{problem.line_number}:{problem.column_number}"


def format_problem_row(problem: Problem, long_format: bool = False) -> str:
    """Format a problem as a single-line row for list display."""
    sym = status_symbol(problem.status)
    kind = ProblemType.label(problem.problem_type)
    desc = truncate(problem.problem_description, 50)
    row = f"[{sym}] {problem.id:>5} {kind:<16} {format_location(problem)}  {problem.function_name}"
    if desc:
        row += f"  {desc}"
    if long_format and problem.function_signature:
        row += f"\n        {truncate(problem.function_signature, 70)}"
    return row


def stamp_document(document: str) -> str:
    """Fill in check_timestamp with the current time when a document lacks one.

    Text that is not a JSON object is returned unchanged so the store can
    reject it.
    """
    try:
        data = json.loads(document)
    except (ValueError, RecursionError):
        return document
    if not isinstance(data, dict) or data.get("check_timestamp"):
        return document
    data["check_timestamp"] = format_timestamp(now_utc())
    return json.dumps(data, ensure_ascii=False)
