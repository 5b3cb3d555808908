"""
Schemas Package

JSON Schema validation for serialized ledgers and questions.
"""

from .validator import (
    validate_question,
    validate_ledger,
    ValidationError,
    LEDGER_SCHEMA_VERSION,
)

__all__ = [
    "validate_question",
    "validate_ledger",
    "ValidationError",
    "LEDGER_SCHEMA_VERSION",
]
