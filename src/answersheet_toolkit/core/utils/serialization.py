"""
Serialization Utilities

Provides to/from JSON utilities for the question ledger.

- `serialize_*` and `deserialize_*` functions wrap the models'
  `to_dict()` / `from_dict()` with schema validation
- Ledger files carry a schema_version; JSONL files hold one question
  per line for streaming consumers
- Derived values (task keys, totals) are never stored
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..models.ledger import QuestionLedger
from ..models.questions import Question
from ..schemas.validator import (
    LEDGER_SCHEMA_VERSION,
    ValidationError,
    validate_ledger,
    validate_question,
)


# ─────────────────────────────────────────────────────────────────────────────
# Question Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_question(question: Question) -> dict[str, Any]:
    """Serialize a Question to a dictionary."""
    return question.to_dict()


def deserialize_question(data: dict[str, Any], *, validate: bool = True) -> Question:
    """
    Deserialize a Question from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate structure first

    Returns:
        Question instance

    Raises:
        ValidationError: If validate=True and data is invalid
        ValueError: If the model rejects the data
    """
    if validate:
        validate_question(data)
    return Question.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# Ledger Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_ledger(ledger: QuestionLedger) -> dict[str, Any]:
    """
    Serialize a ledger with its schema version.

    Returns:
        Dictionary suitable for JSON serialization
    """
    data = {"schema_version": LEDGER_SCHEMA_VERSION}
    data.update(ledger.to_dict())
    return data


def deserialize_ledger(data: dict[str, Any], *, validate: bool = True) -> QuestionLedger:
    """
    Deserialize a ledger from a dictionary.

    Raises:
        ValidationError: If validate=True and data is invalid, or the
            model invariants reject it
    """
    if validate:
        validate_ledger(data)
    try:
        return QuestionLedger.from_dict(data)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"Invalid ledger: {e}", errors=[str(e)])


def save_ledger_json(ledger: QuestionLedger, path: Path) -> None:
    """
    Save a ledger to a JSON file.

    Args:
        ledger: Ledger to save
        path: Output path
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_ledger(ledger), f, indent=2, ensure_ascii=False)


def load_ledger_json(path: Path, *, validate: bool = True) -> QuestionLedger:
    """
    Load a ledger from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If the payload is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Ledger file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON: {e}", path=str(path), errors=[str(e)])

    return deserialize_ledger(data, validate=validate)


# ─────────────────────────────────────────────────────────────────────────────
# JSONL Utilities
# ─────────────────────────────────────────────────────────────────────────────

def load_questions_jsonl(path: Path, *, validate: bool = True) -> list[Question]:
    """
    Load questions from a JSONL file.

    Args:
        path: Path to questions.jsonl file
        validate: Whether to validate each question

    Returns:
        List of Question instances in file order

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If any question is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Questions file not found: {path}")

    questions = []
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue

            try:
                data = json.loads(line)
                questions.append(deserialize_question(data, validate=validate))
            except (json.JSONDecodeError, ValidationError, ValueError, TypeError) as e:
                raise ValidationError(
                    f"Error parsing line {line_no}: {e}",
                    path=str(path),
                    errors=[str(e)]
                )

    return questions


def save_questions_jsonl(questions, path: Path) -> None:
    """
    Save questions to a JSONL file.

    Args:
        questions: Iterable of Question instances (a QuestionLedger works)
        path: Output path for questions.jsonl
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        for question in questions:
            f.write(json.dumps(serialize_question(question), ensure_ascii=False))
            f.write("\n")
