"""Command line entry point: one document in, one JSON line out."""

from __future__ import annotations

import sys
from typing import BinaryIO, List, Optional

from doctext.config import ExtractionConfig, OCR_MODES, configure_dependencies, configure_logging
from doctext.docs.model import ErrorResult, ExtractionResult, encode_result
from doctext.docs.pipeline import run
from doctext.errors import EncodingError, IoError
from doctext.ocr.reader import make_recognizer


def read_input(path: Optional[str] = None, stream: Optional[BinaryIO] = None) -> bytes:
    """Read the whole document from `path`, or from `stream` (stdin by default)."""
    try:
        if path:
            with open(path, "rb") as f:
                return f.read()
        return (stream or sys.stdin.buffer).read()
    except OSError as e:
        raise IoError(f"failed to read input: {e}") from e


def extract(path: Optional[str], config: ExtractionConfig, stream: Optional[BinaryIO] = None) -> ExtractionResult:
    try:
        data = read_input(path, stream)
    except IoError as e:
        return ErrorResult(str(e))
    return run(data, recognize=make_recognizer(config), config=config)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI for text extraction.

    --file / -f: Read the document from a path instead of stdin
    --lang: Tesseract languages (default: eng)
    --ocr-mode: OCR preprocessing mode: 'raw' for clean images, 'auto' for scans (default: raw)
    --tesseract: Path to tesseract executable (optional)
    --timeout: Per-image OCR timeout seconds (<=0 means no timeout)
    --verbose / -v: Debug diagnostics on stderr
    """
    import argparse

    parser = argparse.ArgumentParser(description="Extract plain text from a PDF or DOCX document read from stdin.")
    parser.add_argument("--file", "-f", type=str, help="Path to input document (default: read stdin)")
    parser.add_argument("--lang", type=str, default="eng", help="Tesseract languages (default: eng)")
    parser.add_argument("--ocr-mode", type=str, default="raw", choices=list(OCR_MODES), help="OCR preprocessing mode: 'raw' for clean images, 'auto' for scanned docs (default: raw)")
    parser.add_argument("--tesseract", type=str, help="Path to tesseract executable (optional)")
    parser.add_argument("--timeout", type=float, default=0.0, help="Per-image OCR timeout in seconds (default: 0, no timeout)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug diagnostics to stderr")

    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else "WARNING")
    config = ExtractionConfig(
        lang=args.lang,
        ocr_mode=args.ocr_mode,
        tesseract_cmd=args.tesseract,
        ocr_timeout=args.timeout,
    )
    configure_dependencies(config)

    result = extract(args.file, config)
    try:
        line = encode_result(result)
    except EncodingError as e:
        print(str(e), file=sys.stderr)
        return 0
    print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
