"""
Module: tasks

Purpose:
    Provides the TaskSection dataclass - a contiguous slice of the source
    text introduced by a "Task N: Title" header. Sections are derived once
    per document parse and keep the order they appear in the text.

Key Functions:
    - TaskSection.key: "Task N: Title" grouping key
    - TaskSection.body(text): Slice the section body out of the source text

Dependencies:
    - dataclasses (std)

Used By:
    - extractor.detection.tasks
    - core.models.ledger.QuestionLedger
"""

from __future__ import annotations

from dataclasses import dataclass


def task_key(task_number: int, title: str) -> str:
    """Grouping key shared by questions of one task, e.g. "Task 1: Fire Safety"."""
    return f"Task {task_number}: {title}"


@dataclass(frozen=True, slots=True)
class TaskSection:
    """
    Located task section (immutable).

    Attributes:
        task_number: Positive task number from the header
        title: Trimmed header title (may be empty)
        start: Offset of the first character after the header line match
        end: Offset of the next task header, or the end of the text
        header_offset: Offset of the "Task N:" header itself

    Invariants:
        - task_number > 0
        - 0 <= header_offset <= start <= end
    """

    task_number: int
    title: str
    start: int
    end: int
    header_offset: int = 0

    def __post_init__(self) -> None:
        if self.task_number < 1:
            raise ValueError(f"task_number must be positive: {self.task_number}")
        if not (0 <= self.header_offset <= self.start <= self.end):
            raise ValueError(
                f"Invalid task range: header={self.header_offset}, "
                f"start={self.start}, end={self.end}"
            )

    @property
    def key(self) -> str:
        return task_key(self.task_number, self.title)

    @property
    def length(self) -> int:
        return self.end - self.start

    def body(self, text: str) -> str:
        """Return this section's body from the source text it was located in."""
        return text[self.start:self.end]

    def to_dict(self) -> dict:
        return {
            "task_number": self.task_number,
            "title": self.title,
            "start": self.start,
            "end": self.end,
            "header_offset": self.header_offset,
        }

    @classmethod
    def from_dict(cls, data: dict) -> TaskSection:
        return cls(
            task_number=data["task_number"],
            title=data.get("title", ""),
            start=data["start"],
            end=data["end"],
            header_offset=data.get("header_offset", data["start"]),
        )

    def __repr__(self) -> str:
        return f"TaskSection({self.task_number}, {self.title!r}, {self.start}-{self.end})"
