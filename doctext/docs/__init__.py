"""Document extraction layer (PDF, DOCX).

Exposes:
- Result model: TextResult, ErrorResult, encode_result
- Bounded accumulator: BoundedTextBuffer
- Extractors: extract_pdf (with OCR fallback), extract_docx
- Dispatcher: dispatch, run
"""

from .buffer import BoundedTextBuffer
from .model import ErrorResult, ExtractionResult, TextResult, encode_result
from .pdf_io import extract_pdf
from .docx_io import extract_docx
from .pipeline import dispatch, lower_priority, run

__all__ = [
    "BoundedTextBuffer",
    "ErrorResult",
    "ExtractionResult",
    "TextResult",
    "encode_result",
    "extract_pdf",
    "extract_docx",
    "dispatch",
    "lower_priority",
    "run",
]
