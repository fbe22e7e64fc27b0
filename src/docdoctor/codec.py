"""Wire codec - JSON text to Problem records and back.

Decoding is lenient: absent or wrongly-typed fields take the defaults from
``models.PROBLEM_FIELDS``. Only a document that is not a JSON object at all
is rejected. Encoding always emits every field.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from docdoctor.errors import MalformedDocumentError, ReadError
from docdoctor.models import Problem


def decode_problem(document: str | bytes) -> Problem:
    """Parse one wire document into a Problem (id left at 0)."""
    try:
        data = json.loads(document)
    except (ValueError, TypeError, RecursionError) as e:
        raise MalformedDocumentError(f"JSON parse error: {e}") from e
    if not isinstance(data, dict):
        raise MalformedDocumentError(
            f"JSON parse error: expected object, got {type(data).__name__}"
        )
    problem = Problem.from_dict(data)
    problem.id = 0
    return problem


def encode_problems(problems: Iterable[Problem]) -> str:
    """Serialize problems, in the given order, as a compact JSON array."""
    try:
        return json.dumps(
            [p.to_dict() for p in problems],
            ensure_ascii=False, separators=(",", ":"),
        )
    except (TypeError, ValueError) as e:
        raise ReadError(f"failed to serialize problems: {e}") from e


def decode_listing(text: str) -> list[Problem]:
    """Parse a serialized listing (as produced by encode_problems)."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(f"JSON parse error: {e}") from e
    if not isinstance(data, list):
        raise MalformedDocumentError("listing must be a JSON array")
    return [Problem.from_dict(item) for item in data if isinstance(item, dict)]


def split_documents(text: str) -> list[str]:
    """Split a batch into single documents.

    Accepts either one JSON array of objects or JSON-lines (one document
    per non-blank line). Lines are returned untouched so that a bad line
    fails on its own at insert time.
    """
    stripped = text.strip()
    if not stripped:
        return []
    if stripped.startswith("["):
        try:
            items: Any = json.loads(stripped)
        except json.JSONDecodeError as e:
            raise MalformedDocumentError(f"JSON parse error: {e}") from e
        return [json.dumps(item, ensure_ascii=False) for item in items]
    return [line.strip() for line in stripped.splitlines() if line.strip()]
