"""
Utils Package

Serialization helpers for ledgers and questions.
"""

from .serialization import (
    serialize_question,
    deserialize_question,
    serialize_ledger,
    deserialize_ledger,
    save_ledger_json,
    load_ledger_json,
    load_questions_jsonl,
    save_questions_jsonl,
)

__all__ = [
    "serialize_question",
    "deserialize_question",
    "serialize_ledger",
    "deserialize_ledger",
    "save_ledger_json",
    "load_ledger_json",
    "load_questions_jsonl",
    "save_questions_jsonl",
]
