import os
import sys
from dataclasses import dataclass
from typing import Optional

import pytesseract
from loguru import logger

MIN_INPUT_LEN = 256
MAX_INPUT_LEN = 5 * 1024 * 1024

MIN_TEXT_LEN = 256
MAX_TEXT_LEN = 32_768

OCR_MODES = ("raw", "auto")


@dataclass
class ExtractionConfig:
    """Tunables for one extraction run.

    Doxygen:
    - @param lang: Tesseract languages, e.g. 'eng' or 'rus+eng'.
    - @param ocr_mode: 'raw' feeds the decoded image as is, 'auto' cleans it up for scanned pages.
    - @param tesseract_cmd: Path to the tesseract executable; None keeps pytesseract's lookup on PATH.
    - @param ocr_timeout: Seconds per recognition call; None or <= 0 means no timeout.
    """

    lang: str = "eng"
    ocr_mode: str = "raw"
    tesseract_cmd: Optional[str] = None
    ocr_timeout: Optional[float] = None
    min_input_len: int = MIN_INPUT_LEN
    max_input_len: int = MAX_INPUT_LEN
    min_text_len: int = MIN_TEXT_LEN
    max_text_len: int = MAX_TEXT_LEN

    def __post_init__(self) -> None:
        if self.ocr_mode not in OCR_MODES:
            raise ValueError(f"ocr_mode must be one of {', '.join(OCR_MODES)}. Got: '{self.ocr_mode}'.")
        if self.ocr_timeout is not None and self.ocr_timeout <= 0:
            self.ocr_timeout = None


DEFAULT_CONFIG = ExtractionConfig()


def configure_dependencies(config: ExtractionConfig) -> None:
    """Point pytesseract at the configured Tesseract executable, if any."""
    if not config.tesseract_cmd:
        return

    tess_abs = os.path.abspath(config.tesseract_cmd)
    if os.path.exists(tess_abs):
        pytesseract.pytesseract.tesseract_cmd = tess_abs
    else:
        logger.warning(f"Tesseract path does not exist: {tess_abs}")


def configure_logging(level: str = "WARNING") -> None:
    """Send all diagnostics to stderr; stdout is reserved for the result record."""
    logger.remove()
    logger.add(sys.stderr, level=level, format="{time:HH:mm:ss} | {level: <8} | {name}:{function} - {message}")
