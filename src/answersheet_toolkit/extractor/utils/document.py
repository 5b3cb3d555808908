"""
Module: extractor.utils.document

Purpose:
    Raw text extraction from exam paper documents. Produces the plain
    text the extraction engine consumes: line breaks are kept because
    question markers are anchored to line starts.

Key Functions:
    - load_document_text(): Text from a .pdf, .docx or .txt file
    - extract_pdf_text(): Text from an open PyMuPDF document
    - extract_docx_text(): Text from a .docx file

Dependencies:
    - fitz (PyMuPDF): PDF text extraction
    - docx (python-docx): DOCX paragraph text

Used By:
    - extractor.pipeline.extract_question_paper
    - scripts/extract_questions.py
"""

from __future__ import annotations

import logging
from pathlib import Path

import docx
import fitz

logger = logging.getLogger(__name__)

PDF_SUFFIXES = (".pdf",)
DOCX_SUFFIXES = (".docx",)
TEXT_SUFFIXES = (".txt", ".text", ".md")


class UnsupportedDocumentError(ValueError):
    """Raised for a document type the loader cannot read."""


def extract_pdf_text(doc: fitz.Document) -> str:
    """
    Extract plain text from every page of an open PDF.

    Pages are joined with a newline so a marker at the top of a page
    still starts a line.

    Args:
        doc: Open PyMuPDF document.

    Returns:
        Text of all pages in page order.

    Raises:
        ValueError: If doc is closed or empty.
    """
    if doc.is_closed:
        raise ValueError("Document is closed")
    if doc.page_count == 0:
        raise ValueError("Document has no pages")

    return "\n".join(page.get_text("text") or "" for page in doc)


def extract_docx_text(path: Path) -> str:
    """Extract paragraph text from a .docx file, one paragraph per line."""
    document = docx.Document(str(path))
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


def load_document_text(path: Path) -> str:
    """
    Load the raw text of an exam paper.

    Args:
        path: Path to a .pdf, .docx or plain text file.

    Returns:
        Extracted text.

    Raises:
        FileNotFoundError: If the file does not exist.
        UnsupportedDocumentError: If the suffix is not supported.

    Example:
        >>> text = load_document_text(Path("paper.pdf"))
        >>> text.count("Task")
        4
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")

    suffix = path.suffix.lower()
    if suffix in PDF_SUFFIXES:
        with fitz.open(path) as doc:
            text = extract_pdf_text(doc)
    elif suffix in DOCX_SUFFIXES:
        text = extract_docx_text(path)
    elif suffix in TEXT_SUFFIXES:
        text = path.read_text(encoding="utf-8")
    else:
        raise UnsupportedDocumentError(
            f"Unsupported document type: {suffix or path.name} "
            f"(expected one of {PDF_SUFFIXES + DOCX_SUFFIXES + TEXT_SUFFIXES})"
        )

    logger.debug(f"Loaded {len(text)} characters from {path.name}")
    return text
