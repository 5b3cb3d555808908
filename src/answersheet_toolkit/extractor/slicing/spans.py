"""
Module: extractor.slicing.spans

Purpose:
    Carves question bodies out of a task section. Each body runs from the
    end of its marker to the start of the next marker (or the section
    end). Text before the first marker is the task preamble.

Key Functions:
    - extract_spans(): Preamble plus one QuestionSpan per marker
    - clean_body(): Strip mark annotations, notes and blank lines

Key Classes:
    - QuestionSpan: Immutable raw/cleaned body for one marker

Dependencies:
    - re (std)
    - extractor.detection.markers: Marker

Used By:
    - extractor.pipeline: Builds Question records from spans
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..detection.markers import Marker

# Cleanup passes, applied in this order
TRAILING_MARKS_RE = re.compile(r"\(\d+\)\s*$", re.MULTILINE)
NOTE_BLOCK_RE = re.compile(r"^[ \t]*Note:.*", re.IGNORECASE | re.MULTILINE | re.DOTALL)
BLANK_LINES_RE = re.compile(r"^\s*\n+", re.MULTILINE)


@dataclass(frozen=True)
class QuestionSpan:
    """
    Body of one question within a task section.

    Attributes:
        marker: Resolved marker that opens the question.
        start: Section offset where the body begins (marker end).
        end: Section offset where the body ends (exclusive).
        raw: Uncleaned body, used for mark detection.
        text: Cleaned body.
    """
    marker: Marker
    start: int
    end: int
    raw: str
    text: str

    @property
    def number(self) -> str:
        return self.marker.candidate_id


def clean_body(raw: str) -> str:
    """
    Clean a raw question body for display.

    Removes line-ending "(N)" mark annotations, everything from the
    first line starting with "Note:" onwards, and blank lines, then
    strips surrounding whitespace.

    Example:
        >>> clean_body(" Explain fire drills. (6)\\n\\nNote: see appendix")
        'Explain fire drills.'
    """
    text = TRAILING_MARKS_RE.sub("", raw)
    text = NOTE_BLOCK_RE.sub("", text)
    text = BLANK_LINES_RE.sub("", text)
    return text.strip()


def extract_spans(section: str, markers: Sequence[Marker]) -> Tuple[str, List[QuestionSpan]]:
    """
    Split a task section at its resolved markers.

    Args:
        section: Task section text.
        markers: Resolved markers sorted by offset.

    Returns:
        (preamble, spans). The preamble is the stripped text before the
        first marker (the whole section when there are no markers).
        Spans are in marker order; a span whose next marker starts
        before it ends is empty.
    """
    if not markers:
        return section.strip(), []

    preamble = section[:markers[0].offset].strip()

    spans: List[QuestionSpan] = []
    for i, marker in enumerate(markers):
        end = markers[i + 1].offset if i + 1 < len(markers) else len(section)
        start = min(marker.end, end)
        raw = section[start:end]
        spans.append(QuestionSpan(marker=marker, start=start, end=end, raw=raw, text=clean_body(raw)))

    return preamble, spans
