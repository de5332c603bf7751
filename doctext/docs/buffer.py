from __future__ import annotations

from typing import List

from doctext.config import MAX_TEXT_LEN, MIN_TEXT_LEN
from doctext.errors import InsufficientText, TextTooLong


class BoundedTextBuffer:
    """Text accumulator with a hard upper limit on its UTF-8 byte length.

    Every append is a checkpoint: crossing the limit raises TextTooLong on the
    append that crossed it. The lower limit is only checked by validate().
    """

    def __init__(self, limit: int = MAX_TEXT_LEN) -> None:
        self.limit = int(limit)
        self._parts: List[str] = []
        self._size = 0

    def append(self, s: str) -> None:
        if not s:
            return
        self._parts.append(s)
        self._size += len(s.encode("utf-8", errors="surrogatepass"))
        if self._size > self.limit:
            raise TextTooLong(self._size)

    def clear(self) -> None:
        self._parts = []
        self._size = 0

    @property
    def text(self) -> str:
        if len(self._parts) > 1:
            self._parts = ["".join(self._parts)]
        return self._parts[0] if self._parts else ""

    def __len__(self) -> int:
        return self._size

    def trimmed_len(self) -> int:
        return len(self.text.strip().encode("utf-8", errors="surrogatepass"))

    def validate(self, min_len: int = MIN_TEXT_LEN) -> str:
        """Return the buffered text if its trimmed length is within bounds.

        Doxygen:
        - @param min_len: Minimum trimmed byte length.
        - @return: The full (untrimmed) buffered text.
        - @throws InsufficientText: If the trimmed text is shorter than `min_len`.
        - @throws TextTooLong: If the trimmed text is longer than the limit.
        """
        effective = self.trimmed_len()
        if effective < min_len:
            raise InsufficientText(effective)
        if effective > self.limit:
            raise TextTooLong(effective)
        return self.text
