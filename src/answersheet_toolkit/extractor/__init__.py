"""
Module: extractor

Purpose:
    Extraction pipeline for turning exam paper text into an ordered
    outline of tasks, questions, lettered parts and roman sub-parts
    with their mark values.

Key Functions:
    - extract_questions(): Main entry point for text
    - extract_question_paper(): Main entry point for documents

Key Classes:
    - ExtractionConfig: Configuration for extraction settings
    - ExtractionResult: Container for extraction output
    - DiagnosticsCollector: Records everything extraction skipped

Dependencies:
    - fitz (PyMuPDF): PDF text extraction
    - docx (python-docx): DOCX text extraction
    - answersheet_toolkit.core.models: Question, QuestionLedger

Used By:
    - answersheet_toolkit.answers: Answer collection
    - scripts/extract_questions.py
"""

from .config import ExtractionConfig
from .diagnostics import DiagnosticsCollector, DetectionDiagnosticsReport, DetectionIssue
from .pipeline import ExtractionResult, extract_question_paper, extract_questions
from .utils.document import UnsupportedDocumentError, load_document_text

__all__ = [
    "extract_questions",
    "extract_question_paper",
    "ExtractionConfig",
    "ExtractionResult",
    "DiagnosticsCollector",
    "DetectionDiagnosticsReport",
    "DetectionIssue",
    "UnsupportedDocumentError",
    "load_document_text",
]
