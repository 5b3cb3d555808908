"""
Module: extractor.detection.marks

Purpose:
    Mark value detection - reads the "(N)" point annotation from a
    question body. Runs on the raw span, before cleanup strips the
    annotation from the display text.

Key Functions:
    - detect_marks(): First parenthesized integer, or the default

Dependencies:
    - re (std)
    - answersheet_toolkit.core.models: Marks

Used By:
    - extractor.pipeline: Assigns marks to each question
"""

from __future__ import annotations

import re

from answersheet_toolkit.core.models.marks import DEFAULT_MARKS, Marks

MARK_ANNOTATION_RE = re.compile(r"\((\d+)\)")


def detect_marks(raw_body: str, default: int = DEFAULT_MARKS) -> Marks:
    """
    Infer the point value of a question from its uncleaned body.

    The first "(digits)" anywhere in the body is the mark value. A body
    with no annotation, or whose first annotation is not a positive
    integer, gets the default.

    Args:
        raw_body: Question span before cleanup.
        default: Fallback value. Defaults to 8.

    Returns:
        Marks with source "explicit" or "default".

    Example:
        >>> detect_marks(" Explain fire drills. (6)\\n").value
        6
        >>> detect_marks(" Explain the process.").source
        'default'
    """
    match = MARK_ANNOTATION_RE.search(raw_body)
    if match:
        value = int(match.group(1))
        if value > 0:
            return Marks.explicit(value)
    return Marks.default(default)
