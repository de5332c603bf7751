from __future__ import annotations

import io
from typing import Optional

from docx import Document as DocxDocument
from docx.oxml.ns import qn
from docx.table import Table, _Cell
from docx.text.paragraph import Paragraph
from loguru import logger

from doctext.config import DEFAULT_CONFIG, ExtractionConfig
from doctext.errors import ParseError

from .buffer import BoundedTextBuffer

_W_P = qn("w:p")
_W_TBL = qn("w:tbl")
_W_T = qn("w:t")
_W_BR = qn("w:br")
_W_TAB = qn("w:tab")


def extract_run(buf: BoundedTextBuffer, run) -> None:
    """Linearize one run: text as is, breaks as newlines, tabs as tabs."""
    for child in run._r:
        if child.tag == _W_T:
            buf.append(child.text or "")
        elif child.tag == _W_BR:
            buf.append("\n")
        elif child.tag == _W_TAB:
            buf.append("\t")


def extract_paragraph(buf: BoundedTextBuffer, para: Paragraph) -> None:
    # the terminating newline goes before the paragraph content
    buf.append("\n")
    for run in para.runs:
        extract_run(buf, run)


def extract_table(buf: BoundedTextBuffer, table: Table) -> None:
    """Linearize a table row by row, one tab after each cell.

    Only paragraphs placed directly in a cell are read; nested tables are
    ignored. Merged cells are visited once.
    """
    for row in table.rows:
        for tc in row._tr.tc_lst:
            cell = _Cell(tc, table)
            for para in cell.paragraphs:
                extract_paragraph(buf, para)
            buf.append("\t")
    buf.append("\n")


def load_docx(data: bytes):
    try:
        return DocxDocument(io.BytesIO(data))
    except Exception as e:
        raise ParseError(f"failed to read input as docx: {e}") from e


def extract_docx(data: bytes, config: Optional[ExtractionConfig] = None) -> str:
    """Extract the body text of a DOCX document.

    Doxygen:
    - @param data: DOCX bytes.
    - @param config: Extraction limits.
    - @return: Linearized text of paragraphs and tables in document order.
    - @throws ParseError: If the package cannot be read as DOCX.
    - @throws TextTooLong: On the append that crosses the upper limit.
    - @throws InsufficientText: If the trimmed text is below the minimum.
    """
    cfg = config or DEFAULT_CONFIG
    docx = load_docx(data)
    body = docx.element.body
    buf = BoundedTextBuffer(cfg.max_text_len)

    paragraphs = tables = 0
    # a document.xml without <w:body> reads as an empty document
    children = body.iterchildren() if body is not None else ()
    for child in children:
        if child.tag == _W_P:
            extract_paragraph(buf, Paragraph(child, docx._body))
            paragraphs += 1
        elif child.tag == _W_TBL:
            extract_table(buf, Table(child, docx._body))
            tables += 1
    logger.debug(f"DOCX body: {paragraphs} paragraph(s), {tables} table(s), {len(buf)} bytes")

    return buf.validate(cfg.min_text_len)
