"""
Module: marks

Purpose:
    Provides the Marks dataclass - the validated value object for the point
    weight of a question. Tracks both the value and whether it was read
    from a "(N)" annotation or fell back to the default.

Key Functions:
    - Marks.explicit(value): Create marks from a detected annotation
    - Marks.default(value): Create marks from the configured fallback

Dependencies:
    - dataclasses (std)
    - typing (std)

Used By:
    - extractor.detection.marks
    - core.models.questions.Question
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


MarkSource = Literal["explicit", "default"]

DEFAULT_MARKS = 8


@dataclass(frozen=True, slots=True)
class Marks:
    """
    Validated mark information for a single question.

    Attributes:
        value: Positive integer mark value
        source: How this mark was determined
            - "explicit": Read from a parenthesized "(N)" in the question body
            - "default": No usable annotation, fallback value applied

    Invariants:
        - value >= 1
        - source is one of the valid literals

    Example:
        >>> m = Marks.explicit(6)
        >>> m.value
        6
        >>> Marks.default().value
        8
    """

    value: int
    source: MarkSource

    def __post_init__(self) -> None:
        """Validate marks on construction."""
        if self.value < 1:
            raise ValueError(f"Marks must be positive: {self.value}")
        if self.source not in ("explicit", "default"):
            raise ValueError(f"Invalid mark source: {self.source}")

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def explicit(cls, value: int) -> Marks:
        """
        Create marks from a detected "(N)" annotation.

        Args:
            value: The mark value detected

        Returns:
            Marks with source="explicit"
        """
        return cls(value=value, source="explicit")

    @classmethod
    def default(cls, value: int = DEFAULT_MARKS) -> Marks:
        """
        Fallback marks for a question with no usable annotation.

        Args:
            value: The configured default (8 unless overridden)

        Returns:
            Marks with source="default"
        """
        return cls(value=value, source="default")

    @property
    def is_explicit(self) -> bool:
        return self.source == "explicit"

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"Marks({self.value}, {self.source!r})"
