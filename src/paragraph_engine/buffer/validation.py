"""Bounds checks shared by the strict rope entry points."""

from __future__ import annotations


class RopeRangeError(ValueError):
    """Raised when an insert/remove receives offsets outside the rope."""

    def __init__(
        self,
        message: str,
        *,
        start: int | None = None,
        end: int | None = None,
        length: int | None = None,
    ) -> None:
        super().__init__(message)
        self.start = start
        self.end = end
        self.length = length


def ensure_position(position: int, length: int) -> int:
    if position < 0 or position > length:
        raise RopeRangeError(
            "position is not within rope bounds", start=position, length=length
        )
    return position


def ensure_range(start: int, end: int, length: int) -> tuple[int, int]:
    if start < 0 or start > length:
        raise RopeRangeError(
            "start is not within rope bounds", start=start, end=end, length=length
        )
    if end < 0 or end > length:
        raise RopeRangeError(
            "end is not within rope bounds", start=start, end=end, length=length
        )
    if start > end:
        raise RopeRangeError(
            "start is greater than end", start=start, end=end, length=length
        )
    return start, end
