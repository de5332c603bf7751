"""Exception hierarchy for the extraction pipeline.

Every error is terminal for the current document. The message of each
exception is what ends up in the ``error`` field of the output record.
"""

from __future__ import annotations


class ExtractionError(Exception):
    """Base class for all failures reported in the output record."""


class InvalidInputLength(ExtractionError):
    pass


class UnknownFileKind(ExtractionError):
    pass


class UnsupportedFileType(ExtractionError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"unsupported file type: {kind}")
        self.kind = kind


class ParseError(ExtractionError):
    pass


class TextTooLong(ExtractionError):
    def __init__(self, length: int) -> None:
        super().__init__(f"invalid text length: {length}")
        self.length = length


class InsufficientText(ExtractionError):
    def __init__(self, length: int) -> None:
        super().__init__(f"invalid text length: {length}")
        self.length = length


class OcrFailure(ExtractionError):
    pass


class IoError(ExtractionError):
    pass


class EncodingError(ExtractionError):
    """The output record itself could not be serialized (reported on stderr)."""


__all__ = [
    "ExtractionError",
    "InvalidInputLength",
    "UnknownFileKind",
    "UnsupportedFileType",
    "ParseError",
    "TextTooLong",
    "InsufficientText",
    "OcrFailure",
    "IoError",
    "EncodingError",
]
