"""
Module: extractor.structuring.resolver

Purpose:
    Resolves located markers into the reading-order outline of one task.
    Assigns ids to continuation markers, removes duplicates and orders
    the survivors by text offset.

Key Functions:
    - resolve_markers(): Scan-order markers in, offset-ordered unique markers out

Key Classes:
    - ParentStack: Most recent open letter / roman parts, in offset order

Dependencies:
    - extractor.detection.markers: Marker, MarkerStyle
    - extractor.diagnostics: Optional issue recording

Used By:
    - extractor.pipeline: Resolves markers for each task section
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from answersheet_toolkit.core.models.questions import format_number
from ..detection.markers import Marker, MarkerStyle
from ..diagnostics import DiagnosticsCollector

logger = logging.getLogger(__name__)


class ParentStack:
    """
    Open parents while walking markers in offset order.

    Holds at most one letter-level entry with at most one roman-level
    entry above it. Opening a letter pops everything; opening a roman
    pops back to the letter it belongs to.
    """

    def __init__(self) -> None:
        self._stack: List[Tuple[str, str]] = []  # (level, token)

    def open_letter(self, letter: str) -> None:
        self._stack = [("letter", letter)]

    def open_roman(self, letter: str, roman: str) -> None:
        if self.letter != letter:
            self.open_letter(letter)
        self._stack = self._stack[:1] + [("roman", roman)]

    @property
    def letter(self) -> Optional[str]:
        """Nearest open letter, or None."""
        for level, token in reversed(self._stack):
            if level == "letter":
                return token
        return None

    def __len__(self) -> int:
        return len(self._stack)


def _reading_order(marker: Marker) -> Tuple[int, int]:
    # Longer match first so "3 (a) (i)" is seen before "3 (a)" at the same offset
    return (marker.offset, -len(marker.matched_text))


def resolve_markers(
    markers: List[Marker],
    task_number: int,
    *,
    diagnostics: Optional[DiagnosticsCollector] = None,
    base_offset: int = 0,
) -> List[Marker]:
    """
    Turn scan-order markers into the task's reading-order outline.

    Steps:
    1. Walk markers by offset with a ParentStack. Explicit letter and
       nested markers open their letter; a "(b)" continuation becomes
       "N(b)" and opens b; a "(ii)" continuation attaches to the nearest
       open letter, or is dropped when there is none.
    2. Deduplicate by candidate id. The marker found first in scan order
       (strategy order, then text order) wins.
    3. Of several markers sharing an offset, only the longest match is
       kept; the shorter one was the header of its nested part.
    4. A task with any lettered marker drops its standalone marker.

    Args:
        markers: Markers in scan order, as returned by locate_markers().
        task_number: Task the markers belong to.
        diagnostics: Optional collector for dropped markers.
        base_offset: Section start in the source text, for diagnostics spans.

    Returns:
        New list of resolved markers, unique by candidate_id, sorted by offset.

    Example:
        >>> resolved = resolve_markers(locate_markers(section, 3), 3)
        >>> [m.candidate_id for m in resolved]
        ['3(a)(i)', '3(a)(ii)']
    """
    parents = ParentStack()
    resolved: List[Tuple[int, Marker]] = []

    by_offset = sorted(enumerate(markers), key=lambda item: (_reading_order(item[1]), item[0]))
    for rank, marker in by_offset:
        if marker.style == MarkerStyle.ROMAN_CONTINUATION:
            letter = parents.letter
            if letter is None:
                logger.debug(f"Task {task_number}: orphaned ({marker.label}) at index {marker.offset}")
                if diagnostics is not None:
                    diagnostics.add_orphan_roman(
                        task_number,
                        marker.label,
                        (base_offset + marker.offset, base_offset + marker.end),
                    )
                continue
            marker = replace(
                marker,
                candidate_id=format_number(task_number, letter, marker.label),
                parent_letter=letter,
            )
            parents.open_roman(letter, marker.label)
        elif marker.style == MarkerStyle.LETTER_CONTINUATION:
            marker = replace(marker, candidate_id=format_number(task_number, marker.label))
            parents.open_letter(marker.label)
        elif marker.style == MarkerStyle.NESTED:
            parents.open_roman(marker.parent_letter, marker.label)
        elif marker.style in (MarkerStyle.LETTERED, MarkerStyle.COMPACT):
            parents.open_letter(marker.label)

        resolved.append((rank, marker))

    # First found in scan order wins
    winners: Dict[str, Marker] = {}
    for _, marker in sorted(resolved, key=lambda item: item[0]):
        kept = winners.get(marker.candidate_id)
        if kept is None:
            winners[marker.candidate_id] = marker
            continue
        logger.debug(
            f"Task {task_number}: duplicate {marker.candidate_id} from {marker.style} "
            f"at index {marker.offset} (kept {kept.style} at index {kept.offset})"
        )
        if diagnostics is not None:
            diagnostics.add_duplicate_marker(
                task_number,
                marker.candidate_id,
                str(kept.style),
                str(marker.style),
                (base_offset + marker.offset, base_offset + marker.end),
            )

    ordered: List[Marker] = []
    for marker in sorted(winners.values(), key=_reading_order):
        if ordered and ordered[-1].offset == marker.offset:
            continue
        ordered.append(marker)

    if any(m.is_lettered for m in ordered):
        for marker in [m for m in ordered if not m.is_lettered]:
            logger.debug(f"Task {task_number}: discarding standalone marker, task is lettered")
            if diagnostics is not None:
                diagnostics.add_standalone_discarded(
                    task_number,
                    (base_offset + marker.offset, base_offset + marker.end),
                )
        ordered = [m for m in ordered if m.is_lettered]

    return ordered
