from __future__ import annotations

import os
from typing import Callable, Dict, Optional

from loguru import logger

from doctext.config import DEFAULT_CONFIG, ExtractionConfig
from doctext.errors import (
    ExtractionError,
    InvalidInputLength,
    UnknownFileKind,
    UnsupportedFileType,
)
from doctext.ocr.reader import Recognizer
from doctext.sniff import ContentKind, kind_name, sniff

from .docx_io import extract_docx
from .model import ErrorResult, ExtractionResult, TextResult
from .pdf_io import extract_pdf

Extractor = Callable[[bytes, Optional[Recognizer], ExtractionConfig], str]


def _extract_pdf(data: bytes, recognize: Optional[Recognizer], config: ExtractionConfig) -> str:
    return extract_pdf(data, recognize=recognize, config=config)


def _extract_docx(data: bytes, recognize: Optional[Recognizer], config: ExtractionConfig) -> str:
    return extract_docx(data, config=config)


EXTRACTORS: Dict[ContentKind, Extractor] = {
    ContentKind.PDF: _extract_pdf,
    ContentKind.DOCX: _extract_docx,
}


def lower_priority() -> None:
    """Move this process to the batch scheduling class; failures are ignored."""
    try:
        os.sched_setscheduler(0, os.SCHED_BATCH, os.sched_param(0))
    except (AttributeError, OSError) as e:
        logger.debug(f"Could not lower scheduling priority: {e}")


def dispatch(
    data: bytes,
    recognize: Optional[Recognizer] = None,
    config: Optional[ExtractionConfig] = None,
) -> str:
    """Validate, sniff and route one document to its extractor.

    Doxygen:
    - @param data: Whole input document.
    - @param recognize: OCR callable for PDF image fallback; defaults to Tesseract.
    - @param config: Extraction limits and OCR settings.
    - @return: Extracted text.
    - @throws ExtractionError: Any terminal failure of the run.
    """
    cfg = config or DEFAULT_CONFIG
    if len(data) < cfg.min_input_len or len(data) > cfg.max_input_len:
        raise InvalidInputLength("invalid input length")

    lower_priority()

    kind = sniff(data)
    if kind is None:
        raise UnknownFileKind("unknown file kind")
    logger.debug(f"Sniffed {kind_name(kind)} ({len(data)} bytes)")

    extractor = EXTRACTORS.get(kind) if isinstance(kind, ContentKind) else None
    if extractor is None:
        raise UnsupportedFileType(kind_name(kind))
    return extractor(data, recognize, cfg)


def run(
    data: bytes,
    recognize: Optional[Recognizer] = None,
    config: Optional[ExtractionConfig] = None,
) -> ExtractionResult:
    """Dispatch a document and fold any extraction failure into an ErrorResult."""
    try:
        return TextResult(dispatch(data, recognize=recognize, config=config))
    except ExtractionError as e:
        logger.debug(f"Extraction failed: {e}")
        return ErrorResult(str(e))
