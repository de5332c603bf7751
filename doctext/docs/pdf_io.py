from __future__ import annotations

import io
from typing import Iterator, List, Optional, Tuple

from loguru import logger
from pypdf import PdfReader
from pypdf.generic import IndirectObject, StreamObject

from doctext.config import DEFAULT_CONFIG, ExtractionConfig
from doctext.errors import ParseError
from doctext.ocr.reader import Recognizer, make_recognizer
from doctext.sniff import is_ocr_image, sniff

from .buffer import BoundedTextBuffer


def load_pdf(data: bytes) -> PdfReader:
    try:
        return PdfReader(io.BytesIO(data))
    except Exception as e:
        raise ParseError(f"failed to read input as pdf: {e}") from e


def iter_page_texts(reader: PdfReader) -> Iterator[str]:
    """Yield the embedded text of each page in page order.

    Doxygen:
    - @param reader: Parsed PDF.
    - @return: Iterator of page texts ('' for pages without text).
    - @throws ParseError: If the page tree or a content stream cannot be read.
    """
    try:
        count = len(reader.pages)
    except Exception as e:
        raise ParseError(f"failed to extract text: {e}") from e
    for index in range(count):
        try:
            text = reader.pages[index].extract_text() or ""
        except Exception as e:
            raise ParseError(f"failed to extract text: {e}") from e
        yield text


def _object_refs(reader: PdfReader) -> List[Tuple[int, int]]:
    # xref maps generation -> {object number: offset}
    refs = [(idnum, generation) for generation, entries in reader.xref.items() for idnum in entries]
    return sorted(refs)


def iter_image_streams(reader: PdfReader) -> Iterator[Tuple[int, bytes]]:
    """Yield (object number, stream data) for every image XObject in the file.

    Objects are visited in ascending object number, independent of page
    order. Objects that fail to resolve or decode are skipped.
    """
    for idnum, generation in _object_refs(reader):
        try:
            obj = reader.get_object(IndirectObject(idnum, generation, reader))
        except Exception as e:
            logger.debug(f"Skipping object {idnum} {generation}: {e}")
            continue
        if not isinstance(obj, StreamObject):
            continue
        try:
            if "/Subtype" not in obj or obj["/Subtype"] != "/Image":
                continue
            # decoded on purpose: Flate-wrapped JPEGs and CCITT (as TIFF) become sniffable
            data = obj.get_data()
        except Exception as e:
            logger.debug(f"Skipping image stream {idnum} {generation}: {e}")
            continue
        yield idnum, data


def ocr_images(reader: PdfReader, buf: BoundedTextBuffer, recognize: Recognizer) -> int:
    """Append OCR text of every recognizable image stream to `buf`.

    Doxygen:
    - @param reader: Parsed PDF.
    - @param buf: Target buffer; every result goes through its bounded append.
    - @param recognize: OCR callable taking image bytes.
    - @return: Number of images submitted to OCR.
    - @throws OcrFailure: From `recognize`; aborts the remaining images.
    """
    submitted = 0
    for idnum, data in iter_image_streams(reader):
        if not data:
            continue
        kind = sniff(data)
        if not is_ocr_image(kind):
            logger.debug(f"Image stream {idnum} is not an OCR image ({kind}), skipped")
            continue
        buf.append(recognize(data))
        submitted += 1
    return submitted


def extract_pdf(
    data: bytes,
    recognize: Optional[Recognizer] = None,
    config: Optional[ExtractionConfig] = None,
) -> str:
    """Extract text from a PDF, falling back to OCR of its images.

    Page text is used as is when its trimmed length reaches the minimum.
    Otherwise it is discarded and the text recognized in the file's image
    streams replaces it.

    Doxygen:
    - @param data: PDF bytes.
    - @param recognize: OCR callable; defaults to Tesseract with `config`.
    - @param config: Extraction limits and OCR settings.
    - @return: Extracted text.
    - @throws ParseError, TextTooLong, InsufficientText, OcrFailure
    """
    cfg = config or DEFAULT_CONFIG
    reader = load_pdf(data)
    buf = BoundedTextBuffer(cfg.max_text_len)

    for text in iter_page_texts(reader):
        buf.append(text)

    if buf.trimmed_len() >= cfg.min_text_len:
        return buf.text

    logger.debug(f"Native text too short ({buf.trimmed_len()} bytes), falling back to OCR")
    buf.clear()
    submitted = ocr_images(reader, buf, recognize or make_recognizer(cfg))
    logger.debug(f"OCR over {submitted} image(s) produced {len(buf)} bytes")

    return buf.validate(cfg.min_text_len)
