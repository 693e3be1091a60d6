"""Immutable text model exposing pure edit operations."""

from __future__ import annotations

from enum import Enum
from typing import Iterator, Optional, Tuple

from .rope import Rope

Span = Tuple[int, int]


class CharacterCategory(Enum):
    """Coarse code-point classes used to find word boundaries."""

    ALPHABET = "alphabet"
    NUMERIC = "numeric"
    OTHER = "other"
    NON_ASCII = "non_ascii"


def categorize_code_point(code_point: int) -> CharacterCategory:
    if code_point > 255:
        return CharacterCategory.NON_ASCII
    if 97 <= code_point <= 122 or 65 <= code_point <= 90:
        return CharacterCategory.ALPHABET
    if 48 <= code_point <= 57:
        return CharacterCategory.NUMERIC
    return CharacterCategory.OTHER


def sorted_couple(a: int, b: int) -> Span:
    return (b, a) if a > b else (a, b)


class TextModel:
    """Editable document value.

    Every edit returns ``(new_model, new_position)`` and leaves the receiver
    untouched. Offsets passed in are clamped to ``[0, len(model)]``.
    """

    MAX_ROPE_DEPTH = 48

    __slots__ = ("_rope", "_text", "version")

    def __init__(self, text: str = "", *, version: int = 0) -> None:
        self._rope = Rope(text)
        self._text: Optional[str] = text
        self.version = version

    @classmethod
    def from_text(cls, text: str) -> "TextModel":
        return cls(text)

    @classmethod
    def _from_rope(cls, rope: Rope, version: int) -> "TextModel":
        if rope.depth > cls.MAX_ROPE_DEPTH:
            rope = rope.rebalance()
        model = cls.__new__(cls)
        model._rope = rope
        model._text = None
        model.version = version
        return model

    @property
    def text(self) -> str:
        if self._text is None:
            self._text = str(self._rope)
        return self._text

    @property
    def rope(self) -> Rope:
        return self._rope

    def __len__(self) -> int:
        return len(self._rope)

    def __repr__(self) -> str:
        return f"TextModel(length={len(self)}, version={self.version})"

    def chunks(self) -> Iterator[str]:
        return self._rope.iter_chunks()

    def substring(self, start: int, end: Optional[int] = None) -> str:
        return self._rope.substring(start, end)

    def clamp_position(self, position: int) -> int:
        return max(0, min(position, len(self._rope)))

    def clamp_range(self, span: Span) -> Span:
        a, b = span
        return sorted_couple(self.clamp_position(a), self.clamp_position(b))

    def insert(self, position: int, text: str) -> Tuple["TextModel", int]:
        position = self.clamp_position(position)
        if not text:
            return self, position
        rope = self._rope.insert(position, text)
        return self._from_rope(rope, self.version + 1), position + len(text)

    def delete_backward(self, position: int) -> Tuple["TextModel", int]:
        position = self.clamp_position(position)
        return self.strip(position - 1, position)

    def delete_forward(self, position: int) -> Tuple["TextModel", int]:
        position = self.clamp_position(position)
        return self.strip(position, position + 1)

    def strip(self, begin: int, end: int) -> Tuple["TextModel", int]:
        """Remove ``[begin, end)`` after sorting and clamping both ends."""

        begin, end = self.clamp_range((begin, end))
        if begin == end:
            return self, begin
        rope = self._rope.remove(begin, end)
        return self._from_rope(rope, self.version + 1), begin

    def _category_at(self, position: int) -> Optional[CharacterCategory]:
        code_point = self._rope.char_code_at(position)
        if code_point is None:
            return None
        return categorize_code_point(code_point)

    def get_word_including_position(self, position: int) -> Optional[Span]:
        """Span of the same-category run around ``position``.

        The pair is oriented towards the nearer edge: ``(first, last + 1)``
        when ``position`` sits closer to the start of the run, otherwise the
        reversed ``(last + 1, first)``. Equidistant positions get the
        reversed pair. Returns ``None`` when there is no character at the
        clamped position.
        """

        position = self.clamp_position(position)
        category = self._category_at(position)
        if category is None:
            return None

        length = len(self._rope)
        first = position
        while first - 1 >= 0 and self._category_at(first - 1) is category:
            first -= 1
        last = position
        while last + 1 < length and self._category_at(last + 1) is category:
            last += 1

        if position - first < last - position:
            return (first, last + 1)
        return (last + 1, first)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TextModel):
            return NotImplemented
        return self.text == other.text

    __hash__ = None  # type: ignore[assignment]


__all__ = [
    "CharacterCategory",
    "TextModel",
    "categorize_code_point",
    "sorted_couple",
]
