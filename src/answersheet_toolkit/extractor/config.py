"""
Module: extractor.config

Purpose:
    Configuration dataclass for the extraction pipeline. Provides
    immutable settings for the mark fallback, the noise threshold and the
    set of roman numerals recognised as nested sub-parts.

Key Classes:
    - ExtractionConfig: Main configuration for extraction

Dependencies:
    - dataclasses: For frozen dataclass support

Used By:
    - extractor.pipeline: Uses ExtractionConfig for pipeline settings
    - extractor.detection.markers: Roman numeral classification
"""

from dataclasses import dataclass
from typing import Tuple

from answersheet_toolkit.core.models.marks import DEFAULT_MARKS
from answersheet_toolkit.core.models.questions import MIN_TEXT_LENGTH


ROMAN_NUMERALS = (
    "i", "ii", "iii", "iv", "v", "vi", "vii", "viii", "ix", "x",
    "xi", "xii", "xiii", "xiv", "xv", "xvi", "xvii", "xviii", "xix", "xx",
)


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Configuration for question extraction.

    Attributes:
        default_marks: Mark value used when a body has no "(N)" annotation (default 8)
        min_text_length: Cleaned bodies of this length or shorter are dropped (default 10)
        roman_numerals: Tokens treated as nested sub-part numerals, stored
            lowercased (default i-xx)
        allow_standalone: Fall back to "N Capitalised..." questions for tasks
            without lettered parts (default True)
        run_diagnostics: Create a DiagnosticsCollector when the caller did
            not pass one (default False)
    """
    default_marks: int = DEFAULT_MARKS
    min_text_length: int = MIN_TEXT_LENGTH
    roman_numerals: Tuple[str, ...] = ROMAN_NUMERALS
    allow_standalone: bool = True
    run_diagnostics: bool = False

    def __post_init__(self) -> None:
        if self.default_marks < 1:
            raise ValueError(f"default_marks must be positive: {self.default_marks}")
        if self.min_text_length < MIN_TEXT_LENGTH:
            raise ValueError(
                f"min_text_length cannot be below {MIN_TEXT_LENGTH}: {self.min_text_length}"
            )
        if not self.roman_numerals:
            raise ValueError("roman_numerals cannot be empty")
        # Frozen, so normalise through object.__setattr__
        object.__setattr__(
            self, "roman_numerals", tuple(n.lower() for n in self.roman_numerals)
        )

    def is_roman(self, token: str) -> bool:
        return token.lower() in self.roman_numerals
