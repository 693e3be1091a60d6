"""Contracts for the external line-shaping service."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Protocol, Sequence, Union


class RectHeightStyle(Enum):
    TIGHT = "tight"
    MAX = "max"


class RectWidthStyle(Enum):
    TIGHT = "tight"
    MAX = "max"


class LineLayout(Protocol):
    """Geometry of one laid-out paragraph.

    Offsets are Python ``str`` indices (code points), the unit ``TextModel``
    uses. Engines built on UTF-16 shapers must convert at this boundary,
    otherwise carets drift after astral characters such as emoji.
    """

    def get_rects_for_range(
        self,
        begin: int,
        end: int,
        height_style: RectHeightStyle,
        width_style: RectWidthStyle,
    ) -> Sequence[Sequence[float]]:
        """Return ``(x0, y0, x1, y1)`` boxes covering ``[begin, end)`` in reading order."""
        ...

    def get_glyph_position_at_coordinate(self, x: float, y: float) -> int:
        """Return the glyph boundary offset nearest to ``(x, y)``."""
        ...

    def get_height(self) -> float:
        ...


class LayoutEngine(Protocol):
    """Shapes text for a given width."""

    def layout(self, text: Union[str, Iterable[str]], width: float) -> LineLayout:
        """Lay out ``text`` (a string or an iterable of chunks) at ``width``."""
        ...


__all__ = ["LayoutEngine", "LineLayout", "RectHeightStyle", "RectWidthStyle"]
