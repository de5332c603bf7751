"""OCR (Optical Character Recognition) adapter.

Recognizes text in embedded images through pytesseract, with optional
OpenCV cleanup for scanned pages.
"""

from .reader import (
    Recognizer,
    load_image,
    preprocess_image_for_ocr,
    prepare_image,
    recognize,
    make_recognizer,
)

__all__ = [
    "Recognizer",
    "load_image",
    "preprocess_image_for_ocr",
    "prepare_image",
    "recognize",
    "make_recognizer",
]
