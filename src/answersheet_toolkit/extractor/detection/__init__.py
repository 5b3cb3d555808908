"""
Module: extractor.detection

Purpose:
    Detection subpackage for locating question elements in exam text.
    Contains modules for task headers, question markers and mark values.

Key Modules:
    - tasks: "Task N: Title" section detection
    - markers: Question marker strategies ("1 (a)", "(b)", "(ii)", ...)
    - marks: Mark value detection ("(N)" annotations)

Used By:
    - extractor.pipeline: Orchestrates detection modules
"""

from .tasks import find_task_sections
from .markers import (
    Marker,
    MarkerStyle,
    MarkerStrategy,
    MARKER_STRATEGIES,
    get_strategy,
    locate_markers,
)
from .marks import detect_marks

__all__ = [
    "find_task_sections",
    "Marker",
    "MarkerStyle",
    "MarkerStrategy",
    "MARKER_STRATEGIES",
    "get_strategy",
    "locate_markers",
    "detect_marks",
]
