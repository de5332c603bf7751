"""
Entry point and compatibility facade for the PDF/DOCX → text pipeline.

Reads one document from stdin and prints one JSON record to stdout.

Packages:
- doctext.docs: bounded buffer, PDF/DOCX extractors, dispatcher, result record
- doctext.ocr: Tesseract adapter used when a PDF carries too little text
- doctext.sniff: magic-number content sniffing
"""

from __future__ import annotations

# Configuration
from doctext.config import (
    ExtractionConfig,
    configure_dependencies,
    configure_logging,
)

# Sniffing
from doctext.sniff import ContentKind, sniff

# OCR adapter
from doctext.ocr.reader import (
    recognize,
    make_recognizer,
    preprocess_image_for_ocr as _preprocess_image_for_ocr,
)

# Document pipeline (PDF, DOCX)
from doctext.docs import (
    BoundedTextBuffer,
    TextResult,
    ErrorResult,
    encode_result,
    extract_pdf,
    extract_docx,
    dispatch,
    run,
)

from doctext.cli import main as _cli

__all__ = [
    # config
    "ExtractionConfig",
    "configure_dependencies",
    "configure_logging",
    # sniffing
    "ContentKind",
    "sniff",
    # ocr
    "recognize",
    "make_recognizer",
    "_preprocess_image_for_ocr",
    # documents
    "BoundedTextBuffer",
    "TextResult",
    "ErrorResult",
    "encode_result",
    "extract_pdf",
    "extract_docx",
    "dispatch",
    "run",
]


if __name__ == "__main__":
    raise SystemExit(_cli())
