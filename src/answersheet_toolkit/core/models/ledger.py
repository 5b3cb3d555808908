"""
Module: ledger

Purpose:
    Provides the QuestionLedger dataclass - the ordered collection of
    Question records produced by one parse of one document. Task order is
    the order tasks appear in the text; within a task, questions are in
    marker offset order. The ledger is the only structure handed forward
    to answer generation and document assembly.

Key Functions:
    - QuestionLedger.group_by_task(): Ordered task_key -> questions mapping
    - QuestionLedger.get(task_number, number): Lookup by hierarchical key
    - QuestionLedger.total_marks: Sum of question marks
    - QuestionLedger.to_dict() / QuestionLedger.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - .questions.Question
    - .tasks.TaskSection

Used By:
    - extractor.pipeline
    - core.utils.serialization
    - answers.collector
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from .questions import Question
from .tasks import TaskSection


@dataclass(frozen=True)
class QuestionLedger:
    """
    Ordered, read-only sequence of Question records.

    Attributes:
        questions: Questions in (task order, offset order)
        tasks: Every task section located, including tasks that
            contributed no questions

    Invariants:
        - No two questions share a number within the same task_number

    Example:
        >>> ledger = extract_questions(text)
        >>> [q.number for q in ledger]
        ['1(a)', '1(b)']
        >>> list(ledger.group_by_task())
        ['Task 1: Fire Safety']
    """

    questions: Tuple[Question, ...] = ()
    tasks: Tuple[TaskSection, ...] = ()

    def __post_init__(self) -> None:
        """Validate ledger uniqueness on construction."""
        seen = set()
        for question in self.questions:
            key = (question.task_number, question.number)
            if key in seen:
                raise ValueError(
                    f"Duplicate question {question.number} in task {question.task_number}"
                )
            seen.add(key)

    # ─────────────────────────────────────────────────────────────────────────
    # Sequence Protocol
    # ─────────────────────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self.questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(self.questions)

    def __getitem__(self, index: int) -> Question:
        return self.questions[index]

    @property
    def is_empty(self) -> bool:
        return not self.questions

    # ─────────────────────────────────────────────────────────────────────────
    # Query Methods
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def numbers(self) -> List[str]:
        return [q.number for q in self.questions]

    @property
    def total_marks(self) -> int:
        return sum(q.marks for q in self.questions)

    def for_task(self, task_number: int) -> List[Question]:
        """Questions of one task, in ledger order."""
        return [q for q in self.questions if q.task_number == task_number]

    def get(self, task_number: int, number: str) -> Optional[Question]:
        """
        Find a question by its hierarchical key.

        Args:
            task_number: Task the question belongs to
            number: Canonical number like "1(a)"

        Returns:
            Matching Question or None
        """
        for question in self.questions:
            if question.task_number == task_number and question.number == number:
                return question
        return None

    def group_by_task(self) -> Dict[str, List[Question]]:
        """
        Group questions by "Task N: Title", preserving ledger order.

        Tasks that produced no questions are not included.
        """
        groups: Dict[str, List[Question]] = {}
        for question in self.questions:
            groups.setdefault(question.task_key, []).append(question)
        return groups

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "tasks": [task.to_dict() for task in self.tasks],
            "questions": [q.to_dict() for q in self.questions],
        }

    @classmethod
    def from_dict(cls, data: dict) -> QuestionLedger:
        return cls(
            questions=tuple(Question.from_dict(q) for q in data.get("questions", [])),
            tasks=tuple(TaskSection.from_dict(t) for t in data.get("tasks", [])),
        )

    def __repr__(self) -> str:
        return (
            f"QuestionLedger(tasks={len(self.tasks)}, questions={len(self.questions)}, "
            f"marks={self.total_marks})"
        )
