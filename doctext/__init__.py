"""Plain-text extraction from PDF and DOCX documents with OCR fallback.

Packages:
- doctext.docs: buffer, extractors, dispatcher and result record
- doctext.ocr: Tesseract adapter for embedded images
"""

from doctext.config import ExtractionConfig, MAX_TEXT_LEN, MIN_TEXT_LEN
from doctext.docs import (
    ErrorResult,
    TextResult,
    dispatch,
    encode_result,
    extract_docx,
    extract_pdf,
    run,
)
from doctext.sniff import ContentKind, sniff

__version__ = "0.1.0"

__all__ = [
    "ExtractionConfig",
    "MAX_TEXT_LEN",
    "MIN_TEXT_LEN",
    "ErrorResult",
    "TextResult",
    "dispatch",
    "encode_result",
    "extract_docx",
    "extract_pdf",
    "run",
    "ContentKind",
    "sniff",
]
