"""OCR adapter built on top of pytesseract, Pillow and OpenCV.

This module provides:
- Decoding raw image bytes into a Pillow image.
- Optional cleanup of scanned images before recognition.
- Plain-text recognition with lossy UTF-8 decoding of the engine output.
"""

from __future__ import annotations

import io
from typing import Callable, Optional

import cv2
import numpy as np
import pytesseract
from loguru import logger
from PIL import Image, UnidentifiedImageError

from doctext.config import DEFAULT_CONFIG, ExtractionConfig
from doctext.errors import OcrFailure

Recognizer = Callable[[bytes], str]


def load_image(image_bytes: bytes) -> Image.Image:
    """Decode image bytes with Pillow.

    Doxygen:
    - @param image_bytes: Encoded image (PNG, JPEG, TIFF, GIF or WEBP).
    - @return: Loaded Pillow image (first frame for animated/multi-page images).
    - @throws OcrFailure: If Pillow cannot decode the data or the image exceeds its pixel limit.
    """
    try:
        img = Image.open(io.BytesIO(image_bytes))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError, EOFError) as e:
        raise OcrFailure(f"failed to read image for ocr: {e}") from e
    return img


def preprocess_image_for_ocr(img_bgr: np.ndarray) -> np.ndarray:
    """Preprocess a BGR image to improve OCR accuracy on scans.

    Doxygen:
    - @param img_bgr: Input image in BGR format.
    - @return: Preprocessed BGR image.
    """
    gray = cv2.cvtColor(img_bgr, cv2.COLOR_BGR2GRAY)
    gray = cv2.bilateralFilter(gray, d=7, sigmaColor=50, sigmaSpace=50)
    th = cv2.adaptiveThreshold(gray, 255, cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
                               cv2.THRESH_BINARY, 31, 10)
    th = cv2.medianBlur(th, 3)
    return cv2.cvtColor(th, cv2.COLOR_GRAY2BGR)


def prepare_image(img: Image.Image, ocr_mode: str = "raw"):
    """Return the object handed to Tesseract for the given mode."""
    if ocr_mode != "auto":
        return img
    bgr = cv2.cvtColor(np.array(img.convert("RGB")), cv2.COLOR_RGB2BGR)
    cleaned = preprocess_image_for_ocr(bgr)
    return cv2.cvtColor(cleaned, cv2.COLOR_BGR2RGB)


def recognize(image_bytes: bytes, config: Optional[ExtractionConfig] = None) -> str:
    """Recognize text in one image.

    Empty input is a no-op. Any failure to decode the image or to run
    Tesseract raises OcrFailure, which aborts the whole document.

    Doxygen:
    - @param image_bytes: Raw bytes of an already sniffed image.
    - @param config: Language, preprocessing mode and timeout.
    - @return: Recognized text; malformed UTF-8 from the engine is dropped.
    - @throws OcrFailure: On decode errors, a missing engine, or a Tesseract error.
    """
    if not image_bytes:
        return ""
    cfg = config or DEFAULT_CONFIG

    img = load_image(image_bytes)
    target = prepare_image(img, cfg.ocr_mode)

    try:
        raw = pytesseract.image_to_string(
            target,
            lang=cfg.lang,
            timeout=cfg.ocr_timeout or 0,
            output_type=pytesseract.Output.BYTES,
        )
    except pytesseract.TesseractNotFoundError as e:
        raise OcrFailure(f"failed to run ocr: {e}") from e
    except (pytesseract.TesseractError, RuntimeError, OSError) as e:
        raise OcrFailure(f"ocr failed: {e}") from e

    if isinstance(raw, str):
        text = raw
    else:
        text = bytes(raw).decode("utf-8", errors="ignore")
    logger.debug(f"Recognized {len(text)} characters from {len(image_bytes)} image bytes")
    return text


def make_recognizer(config: Optional[ExtractionConfig] = None) -> Recognizer:
    """Bind a config to `recognize` so extractors can call it with bytes only."""
    cfg = config or DEFAULT_CONFIG

    def _recognize(image_bytes: bytes) -> str:
        return recognize(image_bytes, cfg)

    return _recognize
