"""
Module: answers.collector

Purpose:
    Collects one answer per extracted question from a pluggable answer
    generator and groups them by task for document assembly. A failing
    generator never aborts the sheet: the question gets a placeholder
    answer sized to its mark value.

Key Functions:
    - collect_answers(): Run the generator over a QuestionLedger
    - fallback_answer(): Placeholder bullets for a failed question
    - count_words(): Total words across grouped answers

Key Classes:
    - AnswerGenerator: Protocol for the answer source
    - AnswerSheet: Answers grouped by task key

Dependencies:
    - concurrent.futures (std): Parallel generator calls
    - answersheet_toolkit.core.models: Question, QuestionLedger

Used By:
    - Answer sheet rendering (outside this package)
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Protocol, Tuple

from answersheet_toolkit.core.models.ledger import QuestionLedger
from answersheet_toolkit.core.models.questions import Question

logger = logging.getLogger(__name__)

FALLBACK_EXTRA_POINTS = 3


class AnswerGenerator(Protocol):
    """Produces the answer text for one question."""

    def __call__(self, question: Question, context: str) -> str:
        ...


@dataclass
class AnswerSheet:
    """
    Answers grouped by task.

    Attributes:
        answers: task_key -> {question number -> answer}, in ledger order.
        fallbacks: (task_key, number) of answers that are placeholders.
    """
    answers: Dict[str, Dict[str, str]] = field(default_factory=dict)
    fallbacks: List[Tuple[str, str]] = field(default_factory=list)

    def get(self, question: Question) -> Optional[str]:
        return self.answers.get(question.task_key, {}).get(question.number)

    def word_count(self) -> int:
        return count_words(self.answers)

    @property
    def answer_count(self) -> int:
        return sum(len(group) for group in self.answers.values())

    def to_dict(self) -> dict:
        return {
            "answers": {key: dict(group) for key, group in self.answers.items()},
            "fallbacks": [list(item) for item in self.fallbacks],
            "word_count": self.word_count(),
        }


def count_words(answers: Mapping[str, Mapping[str, str]]) -> int:
    """Total whitespace-separated words over every answer."""
    return sum(
        len(answer.split())
        for group in answers.values()
        for answer in group.values()
    )


def fallback_answer(question: Question) -> str:
    """
    Placeholder answer used when the generator fails.

    Gives marks + 3 bullet points so the sheet keeps its shape.

    Example:
        >>> fallback_answer(q).splitlines()[0]
        '• Key Point 1: This answer would cover Fire Safety with practical examples and clear explanations.'
    """
    bullets = question.marks + FALLBACK_EXTRA_POINTS
    return "\n".join(
        f"• Key Point {i}: This answer would cover {question.task_title} "
        f"with practical examples and clear explanations."
        for i in range(1, bullets + 1)
    )


def _answer_one(
    generator: AnswerGenerator,
    question: Question,
    context: str,
) -> Tuple[str, bool]:
    """Returns (answer, is_fallback)."""
    try:
        return generator(question, context), False
    except Exception as e:
        logger.warning(
            f"Answer generation failed for {question.task_key} {question.number}: {e}",
            extra={"task_number": question.task_number, "question_number": question.number},
        )
        return fallback_answer(question), True


def collect_answers(
    ledger: QuestionLedger,
    generator: AnswerGenerator,
    *,
    document_text: str = "",
    context_chars: int = 2000,
    max_workers: int = 1,
) -> AnswerSheet:
    """
    Generate an answer for every question in the ledger.

    Args:
        ledger: Extracted questions.
        generator: Called as generator(question, context) per question.
        document_text: Source text; its first context_chars characters
            are passed to the generator as context.
        context_chars: Length of the context excerpt.
        max_workers: Parallel generator calls. 1 runs sequentially.

    Returns:
        AnswerSheet grouped by task key in ledger order, regardless of
        the order generator calls finish in.

    Raises:
        ValueError: If max_workers < 1 or context_chars < 0.
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be at least 1: {max_workers}")
    if context_chars < 0:
        raise ValueError(f"context_chars cannot be negative: {context_chars}")

    context = document_text[:context_chars]
    questions = list(ledger)
    logger.info(f"Generating answers for {len(questions)} questions")

    if max_workers > 1 and len(questions) > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(questions))) as pool:
            futures = [pool.submit(_answer_one, generator, q, context) for q in questions]
            results = [future.result() for future in futures]
    else:
        # Sequential - no thread overhead
        results = [_answer_one(generator, q, context) for q in questions]

    sheet = AnswerSheet()
    for question, (answer, is_fallback) in zip(questions, results):
        sheet.answers.setdefault(question.task_key, {})[question.number] = answer
        if is_fallback:
            sheet.fallbacks.append((question.task_key, question.number))

    logger.info(
        f"Collected {sheet.answer_count} answers ({len(sheet.fallbacks)} fallbacks, "
        f"{sheet.word_count()} words)"
    )
    return sheet
