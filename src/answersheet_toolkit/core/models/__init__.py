"""
Core Models Package

Immutable, validated data models shared by the extractor and the
answer stage.

All models in this package are frozen dataclasses. A parse of one
document creates them once; nothing downstream mutates them, so a
ledger can be handed to concurrent answer workers without copying.
"""

from .marks import Marks, DEFAULT_MARKS
from .tasks import TaskSection, task_key
from .questions import Question, PartKind, format_number, split_number
from .ledger import QuestionLedger

__all__ = [
    "Marks",
    "DEFAULT_MARKS",
    "TaskSection",
    "task_key",
    "Question",
    "PartKind",
    "format_number",
    "split_number",
    "QuestionLedger",
]
