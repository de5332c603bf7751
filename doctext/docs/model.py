from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Dict, Union

from doctext.errors import EncodingError


@dataclass(frozen=True)
class TextResult:
    text: str

    def to_record(self) -> Dict[str, str]:
        return {"type": "Text", "text": self.text}


@dataclass(frozen=True)
class ErrorResult:
    error: str

    def to_record(self) -> Dict[str, str]:
        return {"type": "Error", "error": self.error}


ExtractionResult = Union[TextResult, ErrorResult]


def encode_result(result: ExtractionResult) -> str:
    """Serialize a result into a single JSON line (without the trailing newline).

    Doxygen:
    - @param result: TextResult or ErrorResult.
    - @return: JSON object with a "type" tag and exactly one payload field.
    - @throws EncodingError: If the record cannot be represented as UTF-8 JSON.
    """
    try:
        line = json.dumps(result.to_record(), ensure_ascii=False, separators=(",", ":"))
        # lone surrogates survive json.dumps but cannot be written out
        line.encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"failed to encode result: {exc}") from exc
    return line
