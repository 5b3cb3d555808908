"""Document loading helpers for the extractor."""

from .document import (
    UnsupportedDocumentError,
    extract_docx_text,
    extract_pdf_text,
    load_document_text,
)

__all__ = [
    "UnsupportedDocumentError",
    "extract_docx_text",
    "extract_pdf_text",
    "load_document_text",
]
