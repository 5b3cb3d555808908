"""
Module: extractor.structuring

Purpose:
    Structuring subpackage. Converts flat marker detections into the
    id-unique, reading-order outline of a task.
"""

from .resolver import ParentStack, resolve_markers

__all__ = ["ParentStack", "resolve_markers"]
