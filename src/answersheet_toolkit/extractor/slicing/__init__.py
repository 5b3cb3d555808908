"""
Module: extractor.slicing

Purpose:
    Slicing subpackage. Cuts task sections into question bodies and the
    shared task preamble.
"""

from .spans import QuestionSpan, clean_body, extract_spans

__all__ = ["QuestionSpan", "clean_body", "extract_spans"]
