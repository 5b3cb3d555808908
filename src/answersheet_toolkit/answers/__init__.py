"""Answer collection for extracted questions."""

from .collector import (
    AnswerGenerator,
    AnswerSheet,
    collect_answers,
    count_words,
    fallback_answer,
)

__all__ = [
    "AnswerGenerator",
    "AnswerSheet",
    "collect_answers",
    "count_words",
    "fallback_answer",
]
