"""Content sniffing by magic numbers.

The classification is derived from the bytes only; file names and external
metadata are never consulted.
"""

from __future__ import annotations

import io
import zipfile
from enum import Enum
from typing import Optional, Union

import filetype


class ContentKind(str, Enum):
    PDF = "application/pdf"
    DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    PNG = "image/png"
    JPEG = "image/jpeg"
    TIFF = "image/tiff"
    GIF = "image/gif"
    WEBP = "image/webp"

    @property
    def mime(self) -> str:
        return self.value


OCR_IMAGE_KINDS = frozenset({
    ContentKind.PNG,
    ContentKind.JPEG,
    ContentKind.TIFF,
    ContentKind.GIF,
    ContentKind.WEBP,
})

_BY_MIME = {kind.value: kind for kind in ContentKind}

_ZIP_MIME = "application/zip"
_DOCX_MAIN_PART = "word/document.xml"


def _is_docx_container(data: bytes) -> bool:
    # magic matching only looks at the first few archive entries
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            return _DOCX_MAIN_PART in archive.namelist()
    except (zipfile.BadZipFile, OSError, ValueError):
        return False


def sniff(data: bytes) -> Optional[Union[ContentKind, str]]:
    """Classify a byte buffer.

    Doxygen:
    - @param data: Buffer to inspect; the whole buffer is read only for ZIP archives.
    - @return: A ContentKind for recognized document/image kinds, the raw MIME
      string for anything else the matcher knows, or None.
    """
    if not data:
        return None
    guessed = filetype.guess(data)
    if guessed is None:
        return None
    if guessed.mime == _ZIP_MIME and _is_docx_container(data):
        return ContentKind.DOCX
    return _BY_MIME.get(guessed.mime, guessed.mime)


def is_ocr_image(kind: Optional[Union[ContentKind, str]]) -> bool:
    return kind in OCR_IMAGE_KINDS


def kind_name(kind: Union[ContentKind, str]) -> str:
    return kind.mime if isinstance(kind, ContentKind) else str(kind)


__all__ = [
    "ContentKind",
    "OCR_IMAGE_KINDS",
    "sniff",
    "is_ocr_image",
    "kind_name",
]
