"""Persistent rope used as the backing store of ``TextModel``.

A rope node is either a leaf holding a ``str`` chunk or an internal node
holding exactly two child ropes. Nodes are never restructured after they are
returned to a caller, so untouched subtrees are shared freely between the old
and the new rope produced by an edit.
"""

from __future__ import annotations

import math
from typing import Iterator, Optional, Tuple, Union

from .validation import ensure_position, ensure_range

_Children = Tuple["Rope", "Rope"]


def _clamp_index(value: Optional[float], length: int) -> int:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return 0
    if value < 0:
        return 0
    if value > length:
        return length
    return int(value)


class Rope:
    """Balanced binary tree of string chunks.

    ``Rope(text)`` wraps a string, splitting it at the midpoint while a leaf
    would exceed ``SPLIT_LENGTH``. ``Rope(left, right)`` joins two ropes and
    collapses the pair into a single leaf when it is shorter than
    ``JOIN_LENGTH``.
    """

    SPLIT_LENGTH = 1000
    JOIN_LENGTH = 500
    REBALANCE_RATIO = 1.2

    __slots__ = ("_data", "_length", "_depth")

    def __init__(self, a: Union[str, "Rope"], b: Optional["Rope"] = None) -> None:
        self._data: Union[str, _Children]
        if isinstance(a, str) and b is None:
            self._data = a
            self._length = len(a)
        elif isinstance(a, Rope) and isinstance(b, Rope):
            self._data = (a, b)
            self._length = len(a) + len(b)
        else:
            raise TypeError(
                "Rope expects a string or two ropes, got "
                f"({type(a).__name__}, {type(b).__name__})"
            )
        self._adjust()

    def _adjust(self) -> None:
        # Only ever called from __init__, before the node is visible.
        if isinstance(self._data, str):
            if self._length > self.SPLIT_LENGTH:
                divide = self._length // 2
                self._data = (Rope(self._data[:divide]), Rope(self._data[divide:]))
        elif self._length < self.JOIN_LENGTH:
            left, right = self._data
            self._data = str(left) + str(right)

        if isinstance(self._data, str):
            self._depth = 0
        else:
            left, right = self._data
            self._depth = max(left._depth, right._depth) + 1

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        if isinstance(self._data, str):
            return self._data
        return "".join(self.iter_chunks())

    def __repr__(self) -> str:
        return f"Rope(length={self._length}, depth={self._depth})"

    @property
    def length(self) -> int:
        return self._length

    @property
    def depth(self) -> int:
        """Height of the tree; a leaf has depth 0."""

        return self._depth

    @property
    def is_leaf(self) -> bool:
        return isinstance(self._data, str)

    @property
    def children(self) -> Optional[_Children]:
        if isinstance(self._data, str):
            return None
        return self._data

    def iter_chunks(self) -> Iterator[str]:
        """Yield leaf chunks in document order."""

        stack: list[Rope] = [self]
        while stack:
            node = stack.pop()
            if isinstance(node._data, str):
                if node._data:
                    yield node._data
            else:
                left, right = node._data
                stack.append(right)
                stack.append(left)

    def insert(self, position: int, value: str) -> "Rope":
        """Return a rope with ``value`` inserted before ``position``."""

        ensure_position(position, self._length)
        if not value:
            return self
        if isinstance(self._data, str):
            return Rope(self._data[:position] + value + self._data[position:])
        left, right = self._data
        if position < len(left):
            return Rope(left.insert(position, value), right)
        return Rope(left, right.insert(position - len(left), value))

    def remove(self, start: int, end: int) -> "Rope":
        """Return a rope without the half-open range ``[start, end)``."""

        ensure_range(start, end, self._length)
        if start == end:
            return self
        if isinstance(self._data, str):
            return Rope(self._data[:start] + self._data[end:])

        left, right = self._data
        left_length = len(left)
        left_start = min(start, left_length)
        left_end = min(end, left_length)
        right_start = max(0, min(start - left_length, len(right)))
        right_end = max(0, min(end - left_length, len(right)))
        return Rope(
            left.remove(left_start, left_end) if left_start < left_length else left,
            right.remove(right_start, right_end) if right_end > 0 else right,
        )

    def substring(self, start: Optional[float], end: Optional[float] = None) -> str:
        """Text in ``[start, end)``; bounds are clamped, never raised on."""

        low = _clamp_index(start, self._length)
        high = self._length if end is None else _clamp_index(end, self._length)
        if low >= high:
            return ""
        if isinstance(self._data, str):
            return self._data[low:high]

        left, right = self._data
        left_length = len(left)
        parts = []
        if low < left_length:
            parts.append(left.substring(low, min(high, left_length)))
        if high > left_length:
            parts.append(right.substring(max(low - left_length, 0), high - left_length))
        return "".join(parts)

    def substr(self, start: Optional[float], length: Optional[float] = None) -> str:
        """Up to ``length`` characters from ``start``; a negative start counts from the end."""

        if start is None or (isinstance(start, float) and math.isnan(start)):
            start = 0
        if start < 0:
            start = max(self._length + start, 0)
        if length is None:
            return self.substring(start)
        if isinstance(length, float) and math.isnan(length):
            length = 0
        return self.substring(start, start + max(length, 0))

    def char_at(self, position: Optional[float]) -> str:
        if position is None or (isinstance(position, float) and math.isnan(position)):
            position = 0
        return self.substring(position, position + 1)

    def char_code_at(self, position: Optional[float]) -> Optional[int]:
        char = self.char_at(position)
        return ord(char) if char else None

    def rebuild(self) -> "Rope":
        """Return an evenly split rope holding the same text."""

        if isinstance(self._data, str):
            return self
        return Rope(str(self))

    def rebalance(self) -> "Rope":
        """Rebuild every subtree whose halves differ by more than ``REBALANCE_RATIO``."""

        if isinstance(self._data, str):
            return self
        left, right = self._data
        if self._is_unbalanced(len(left), len(right)):
            return self.rebuild()
        new_left = left.rebalance()
        new_right = right.rebalance()
        if new_left is left and new_right is right:
            return self
        return Rope(new_left, new_right)

    @classmethod
    def _is_unbalanced(cls, left_length: int, right_length: int) -> bool:
        low, high = sorted((left_length, right_length))
        if low == 0:
            return True
        return high / low > cls.REBALANCE_RATIO


__all__ = ["Rope"]
