"""
Schema Validation Utilities

Validates serialized ledger and question payloads before they are
turned back into frozen models.

- JSON Schema definitions (`ledger.schema.json`, `question.schema.json`)
  live next to this module and are loaded lazily
- Required fields and the schema version are checked first so the
  common failures get a readable message
- Everything else (types, ranges, canonical numbering) is checked by
  `jsonschema`; its errors are re-raised as `ValidationError` with a
  "questions[1].task_number" style path
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

import jsonschema


# Schema version constants
LEDGER_SCHEMA_VERSION = 2  # v2 adds marks_source and offset


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _join_path(prefix: str, parts: Iterable[Any]) -> str:
    """Render a jsonschema path as "questions[1].task_number"."""
    path = prefix
    for part in parts:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path


def _check_schema(data: Any, name: str, path: str) -> None:
    schema = _load_schema(name)
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(
            f"Schema validation failed: {e.message}",
            path=_join_path(path, e.absolute_path),
            errors=[e.message]
        ) from e


def validate_question(data: dict[str, Any], path: str = "") -> None:
    """
    Validate a serialized question against question.schema.json.

    Args:
        data: Question dictionary to validate
        path: Location of the payload for error messages

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("question must be a dict", path=path)

    required = ["number", "task_number", "text"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing]
        )

    _check_schema(data, "question", path)


def validate_ledger(data: dict[str, Any]) -> None:
    """
    Validate a serialized ledger (schema version, tasks and questions).

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("ledger must be a dict")

    version = data.get("schema_version")
    if version != LEDGER_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported ledger schema version: {version} (expected {LEDGER_SCHEMA_VERSION})",
            path="schema_version"
        )

    _check_schema(data, "ledger", "")

    for i, question in enumerate(data.get("questions", [])):
        validate_question(question, f"questions[{i}]")
