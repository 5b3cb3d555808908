"""
Module: extractor.detection.markers

Purpose:
    Question marker detection - finds every plausible question boundary
    inside one task section. Exam text extracted from PDFs mixes several
    marker styles ("1 (a)", "1(a)", "(b)", "1 (a) (i)", "(ii)", "4 Explain")
    and rarely uses one style consistently, so each style is a separate
    MarkerStrategy and all primary strategies are applied to every section.

Key Functions:
    - locate_markers(): Run the ordered strategies over a task section

Key Classes:
    - Marker: Immutable dataclass for a located marker
    - MarkerStyle: Which strategy produced a marker
    - MarkerStrategy: One marker pattern, runnable in isolation

Dependencies:
    - re (std)
    - extractor.config: Roman numeral classification

Used By:
    - extractor.structuring.resolver: Resolves ids and reading order
    - extractor.pipeline: Orchestrates detection per task
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from answersheet_toolkit.core.models.questions import format_number
from ..config import ExtractionConfig

logger = logging.getLogger(__name__)


class MarkerStyle(str, Enum):
    """Strategy that located a marker."""
    LETTERED = "lettered"                        # "1 (a)"
    COMPACT = "compact"                          # "1(a)"
    NESTED = "nested"                            # "1 (a) (i)"
    LETTER_CONTINUATION = "letter_continuation"  # "(b)" alone on a line
    ROMAN_CONTINUATION = "roman_continuation"    # "(ii)" alone on a line
    STANDALONE = "standalone"                    # "4 Explain..."

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Marker:
    """
    Located question boundary within a task section.

    Continuation markers are created without a candidate_id; the
    resolver produces a new resolved Marker for them, it never edits one.

    Attributes:
        offset: Start of the match within the task section (the newline).
        matched_text: Literal matched text; the question body starts after it.
        style: Strategy that found the marker (diagnostics only).
        candidate_id: Implied question number, e.g. "3(a)(ii)". None until
            a continuation marker is resolved.
        label: Bare letter ("a") or roman token ("ii") of the marker.
        is_nested: True for roman-numeral sub-parts.
        parent_letter: Enclosing letter of a nested marker.

    Example:
        >>> m = Marker(offset=0, matched_text="\\n1 (a)", style=MarkerStyle.LETTERED,
        ...            candidate_id="1(a)", label="a")
        >>> m.end
        6
    """
    offset: int
    matched_text: str
    style: MarkerStyle
    candidate_id: Optional[str] = None
    label: Optional[str] = None
    is_nested: bool = False
    parent_letter: Optional[str] = None

    @property
    def end(self) -> int:
        """Offset where the question body begins."""
        return self.offset + len(self.matched_text)

    @property
    def is_continuation(self) -> bool:
        return self.style in (MarkerStyle.LETTER_CONTINUATION, MarkerStyle.ROMAN_CONTINUATION)

    @property
    def is_resolved(self) -> bool:
        return self.candidate_id is not None

    @property
    def is_lettered(self) -> bool:
        """True for any marker below task level (letter or roman)."""
        return self.style is not MarkerStyle.STANDALONE


MarkerBuilder = Callable[[re.Match, int, ExtractionConfig], Optional[Marker]]


@dataclass(frozen=True)
class MarkerStrategy:
    """
    One marker pattern.

    Attributes:
        style: Style tag given to every marker this strategy finds.
        template: Regex source; "{n}" is replaced by the escaped task number.
        flags: Regex flags.
        fallback: Only tried when the primary strategies resolve nothing.
        first_only: Keep only the first match.
    """
    style: MarkerStyle
    template: str
    flags: int = re.IGNORECASE
    fallback: bool = False
    first_only: bool = False

    def pattern(self, task_number: int) -> re.Pattern:
        return re.compile(self.template.replace("{n}", re.escape(str(task_number))), self.flags)

    def find(
        self,
        section: str,
        task_number: int,
        config: Optional[ExtractionConfig] = None,
    ) -> List[Marker]:
        """
        Run this strategy alone over a task section.

        Args:
            section: Task section text (starts right after the header).
            task_number: Task number the markers must carry.
            config: Extraction config (roman numeral set).

        Returns:
            Markers in text order.
        """
        config = config or ExtractionConfig()
        build = _BUILDERS[self.style]
        markers: List[Marker] = []
        for match in self.pattern(task_number).finditer(section):
            marker = build(match, task_number, config)
            if marker is None:
                continue
            markers.append(marker)
            logger.debug(
                f"Found with {self.style}: {marker.candidate_id or '(' + marker.label + ')'} "
                f"at index {marker.offset}"
            )
            if self.first_only:
                break
        return markers


# ─────────────────────────────────────────────────────────────────────────────
# Builders (one per style)
# ─────────────────────────────────────────────────────────────────────────────

def _build_letter(style: MarkerStyle) -> MarkerBuilder:
    def build(match: re.Match, task_number: int, config: ExtractionConfig) -> Marker:
        letter = match.group(1).lower()
        return Marker(
            offset=match.start(),
            matched_text=match.group(0),
            style=style,
            candidate_id=format_number(task_number, letter),
            label=letter,
        )
    return build


def _build_nested(match: re.Match, task_number: int, config: ExtractionConfig) -> Optional[Marker]:
    letter = match.group(1).lower()
    roman = match.group(2).lower()
    if not config.is_roman(roman):
        return None
    return Marker(
        offset=match.start(),
        matched_text=match.group(0),
        style=MarkerStyle.NESTED,
        candidate_id=format_number(task_number, letter, roman),
        label=roman,
        is_nested=True,
        parent_letter=letter,
    )


def _build_letter_continuation(match: re.Match, task_number: int, config: ExtractionConfig) -> Optional[Marker]:
    token = match.group(1).lower()
    if len(token) != 1 or config.is_roman(token):
        return None
    return Marker(
        offset=match.start(),
        matched_text=match.group(0),
        style=MarkerStyle.LETTER_CONTINUATION,
        label=token,
    )


def _build_roman_continuation(match: re.Match, task_number: int, config: ExtractionConfig) -> Optional[Marker]:
    token = match.group(1).lower()
    if not config.is_roman(token):
        return None
    return Marker(
        offset=match.start(),
        matched_text=match.group(0),
        style=MarkerStyle.ROMAN_CONTINUATION,
        label=token,
        is_nested=True,
    )


def _build_standalone(match: re.Match, task_number: int, config: ExtractionConfig) -> Marker:
    return Marker(
        offset=match.start(),
        matched_text=match.group(0),
        style=MarkerStyle.STANDALONE,
        candidate_id=format_number(task_number),
    )


_BUILDERS: Dict[MarkerStyle, MarkerBuilder] = {
    MarkerStyle.LETTERED: _build_letter(MarkerStyle.LETTERED),
    MarkerStyle.COMPACT: _build_letter(MarkerStyle.COMPACT),
    MarkerStyle.NESTED: _build_nested,
    MarkerStyle.LETTER_CONTINUATION: _build_letter_continuation,
    MarkerStyle.ROMAN_CONTINUATION: _build_roman_continuation,
    MarkerStyle.STANDALONE: _build_standalone,
}


_CONTINUATION = r"\n\s*\(\s*([a-z]+)\s*\)"

# Scan order is duplicate precedence: explicit forms before continuations
MARKER_STRATEGIES = (
    MarkerStrategy(MarkerStyle.LETTERED, r"\n\s*{n}\s+\(\s*([a-z])\s*\)"),
    MarkerStrategy(MarkerStyle.COMPACT, r"\n\s*{n}\(\s*([a-z])\s*\)"),
    MarkerStrategy(
        MarkerStyle.NESTED,
        r"\n\s*{n}\s*\(\s*([a-z])\s*\)\s*\(\s*([ivxlcdm]+)\s*\)",
    ),
    MarkerStrategy(MarkerStyle.LETTER_CONTINUATION, _CONTINUATION),
    MarkerStrategy(MarkerStyle.ROMAN_CONTINUATION, _CONTINUATION),
    # Case-sensitive: the question must start with a capitalised word
    MarkerStrategy(
        MarkerStyle.STANDALONE,
        r"\n\s*{n}\s+(?=[A-Z])",
        flags=0,
        fallback=True,
        first_only=True,
    ),
)


def get_strategy(style: MarkerStyle) -> MarkerStrategy:
    """Return the registered strategy for a style."""
    for strategy in MARKER_STRATEGIES:
        if strategy.style == style:
            return strategy
    raise KeyError(style)


def locate_markers(
    section: str,
    task_number: int,
    config: Optional[ExtractionConfig] = None,
    *,
    fallback: bool = False,
) -> List[Marker]:
    """
    Find question markers in one task section.

    Applies every primary strategy (or, with fallback=True, only the
    fallback strategies) in MARKER_STRATEGIES order. The result is in
    scan order: strategy order first, text order within a strategy.
    It is not deduplicated; that is the resolver's job.

    Args:
        section: Task section text.
        task_number: Task number anchoring the numbered patterns.
        config: Extraction config.
        fallback: Run the fallback strategies instead of the primary ones.

    Returns:
        Fresh list of Marker. Empty when nothing matched.

    Example:
        >>> markers = locate_markers("\\n1 (a) Explain.\\n(b) Describe.", 1)
        >>> [(m.style.value, m.candidate_id) for m in markers]
        [('lettered', '1(a)'), ('letter_continuation', None)]
    """
    config = config or ExtractionConfig()
    markers: List[Marker] = []
    for strategy in MARKER_STRATEGIES:
        if strategy.fallback != fallback:
            continue
        markers.extend(strategy.find(section, task_number, config))
    return markers
