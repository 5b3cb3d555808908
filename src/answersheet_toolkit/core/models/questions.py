"""
Module: questions

Purpose:
    Provides the Question dataclass - one record of the question ledger.
    Carries the canonical hierarchical number ("1", "1(a)", "1(a)(ii)"),
    task metadata, cleaned body text, task preamble and mark value.
    Immutable once created by the extractor.

Key Functions:
    - Question.kind: QUESTION / LETTER / ROMAN from the number
    - Question.task_key: "Task N: Title" grouping key
    - Question.full_question: Prompt form "Task N: Title\\n<number> <text>"
    - Question.to_dict() / Question.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - re (std)
    - .tasks.task_key

Used By:
    - core.models.ledger.QuestionLedger
    - core.utils.serialization
    - extractor.pipeline
    - answers.collector
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .marks import DEFAULT_MARKS, MarkSource
from .tasks import task_key


# Questions shorter than this (after cleanup) are noise, never records
MIN_TEXT_LENGTH = 10

NUMBER_RE = re.compile(r"^(\d+)(?:\(([a-z])\)(?:\(([ivxlcdm]+)\))?)?$")


class PartKind(str, Enum):
    """Level of a question in the task hierarchy."""
    QUESTION = "question"  # Flat question (e.g., "4")
    LETTER = "letter"      # Letter sub-part (e.g., "1(a)")
    ROMAN = "roman"        # Roman numeral sub-part (e.g., "3(a)(ii)")

    def __str__(self) -> str:
        return self.value


def format_number(task_number: int, letter: Optional[str] = None, roman: Optional[str] = None) -> str:
    """
    Build a canonical question number.

    Example:
        >>> format_number(3, "a", "ii")
        '3(a)(ii)'
    """
    number = str(task_number)
    if letter:
        number += f"({letter})"
        if roman:
            number += f"({roman})"
    return number


def split_number(number: str) -> tuple[int, Optional[str], Optional[str]]:
    """
    Split a canonical number into (task, letter, roman).

    Raises:
        ValueError: If the number is not in canonical form
    """
    match = NUMBER_RE.match(number)
    if not match:
        raise ValueError(f"Not a canonical question number: {number!r}")
    return int(match.group(1)), match.group(2), match.group(3)


@dataclass(frozen=True)
class Question:
    """
    Resolved question record (immutable).

    This is the structure handed to the answer generator and, grouped by
    task, to the document renderer.

    Attributes:
        number: Canonical id like "1(a)" or "3(a)(ii)"
        task_number: Task the question belongs to
        task_title: Title from the task header
        text: Cleaned question body
        preamble: Task-level introduction shared by all questions of the task
        marks: Point value (default 8 when no annotation was found)
        marks_source: "explicit" or "default"
        offset: Absolute offset of the question marker in the source text

    Invariants:
        - task_number >= 1
        - marks >= 1
        - len(text) > 10
        - number starts with task_number
    """

    number: str
    task_number: int
    task_title: str
    text: str
    preamble: str = ""
    marks: int = DEFAULT_MARKS
    marks_source: MarkSource = "default"
    offset: int = 0

    def __post_init__(self) -> None:
        """Validate question on construction."""
        if self.task_number < 1:
            raise ValueError(f"task_number must be positive: {self.task_number}")
        if self.marks < 1:
            raise ValueError(f"marks must be positive: {self.marks}")
        if len(self.text) <= MIN_TEXT_LENGTH:
            raise ValueError(f"Question {self.number} text too short: {self.text!r}")
        task, _, _ = split_number(self.number)
        if task != self.task_number:
            raise ValueError(
                f"Question {self.number} does not belong to task {self.task_number}"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def letter(self) -> Optional[str]:
        return split_number(self.number)[1]

    @property
    def roman(self) -> Optional[str]:
        return split_number(self.number)[2]

    @property
    def kind(self) -> PartKind:
        _, letter, roman = split_number(self.number)
        if roman:
            return PartKind.ROMAN
        if letter:
            return PartKind.LETTER
        return PartKind.QUESTION

    @property
    def task_key(self) -> str:
        return task_key(self.task_number, self.task_title)

    @property
    def full_question(self) -> str:
        """Question as presented to the answer generator."""
        return f"{self.task_key}\n{self.number} {self.text}"

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to dictionary for JSON storage.

        Returns:
            Dict representation
        """
        return {
            "number": self.number,
            "task_number": self.task_number,
            "task_title": self.task_title,
            "text": self.text,
            "preamble": self.preamble,
            "marks": self.marks,
            "marks_source": self.marks_source,
            "offset": self.offset,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Question:
        """
        Deserialize from dictionary.

        Args:
            data: Dict representation

        Returns:
            Question instance
        """
        return cls(
            number=data["number"],
            task_number=data["task_number"],
            task_title=data.get("task_title", ""),
            text=data["text"],
            preamble=data.get("preamble", ""),
            marks=data.get("marks", DEFAULT_MARKS),
            marks_source=data.get("marks_source", "explicit" if "marks" in data else "default"),
            offset=data.get("offset", 0),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"Question({self.number!r}, task={self.task_number}, marks={self.marks})"
