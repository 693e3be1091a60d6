"""Fixed-cell layout engine.

Every character occupies one ``char_width`` x ``line_height`` cell. Lines
break at ``\\n`` and wrap greedily once a row holds ``width // char_width``
characters. Terminal hosts use it with unit cells; the tests use it because
its geometry is easy to predict.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Sequence, Tuple, Union

from .protocol import RectHeightStyle, RectWidthStyle

Rect = Tuple[float, float, float, float]


class LineSpan(NamedTuple):
    """Offsets ``[start, end)`` of one visual row, newline excluded."""

    start: int
    end: int
    newline: bool

    @property
    def length(self) -> int:
        return self.end - self.start


def _break_lines(text: str, columns: int) -> List[LineSpan]:
    lines: List[LineSpan] = []
    start = 0
    for index, char in enumerate(text):
        if char == "\n":
            lines.append(LineSpan(start, index, True))
            start = index + 1
        elif index - start == columns:
            lines.append(LineSpan(start, index, False))
            start = index
    lines.append(LineSpan(start, len(text), False))
    return lines


@dataclass(frozen=True, slots=True)
class MonospaceLayout:
    text_length: int
    lines: Tuple[LineSpan, ...]
    char_width: float
    line_height: float

    def get_rects_for_range(
        self,
        begin: int,
        end: int,
        height_style: RectHeightStyle = RectHeightStyle.MAX,
        width_style: RectWidthStyle = RectWidthStyle.TIGHT,
    ) -> Sequence[Rect]:
        # Uniform cells: height and width styles produce the same boxes.
        del height_style, width_style
        begin = max(0, min(begin, self.text_length))
        end = max(0, min(end, self.text_length))
        rects: List[Rect] = []
        if begin >= end:
            return rects

        for row, line in enumerate(self.lines):
            if line.start >= end:
                break
            top = row * self.line_height
            bottom = top + self.line_height
            seg_start = max(begin, line.start)
            seg_end = min(end, line.end)
            if seg_start < seg_end:
                rects.append(
                    (
                        (seg_start - line.start) * self.char_width,
                        top,
                        (seg_end - line.start) * self.char_width,
                        bottom,
                    )
                )
            elif line.newline and begin <= line.end < end:
                x = line.length * self.char_width
                rects.append((x, top, x, bottom))
        return rects

    def get_glyph_position_at_coordinate(self, x: float, y: float) -> int:
        row = int(y // self.line_height) if y > 0 else 0
        line = self.lines[min(row, len(self.lines) - 1)]
        column = int(x / self.char_width + 0.5) if x > 0 else 0
        return line.start + min(column, line.length)

    def get_height(self) -> float:
        return len(self.lines) * self.line_height


class MonospaceLayoutEngine:
    """``LayoutEngine`` implementation over a uniform character grid."""

    def __init__(self, *, char_width: float = 1.0, line_height: float = 1.0) -> None:
        if char_width <= 0 or line_height <= 0:
            raise ValueError("char_width and line_height must be positive")
        self.char_width = char_width
        self.line_height = line_height

    def layout(self, text: Union[str, Iterable[str]], width: float) -> MonospaceLayout:
        if not isinstance(text, str):
            text = "".join(text)
        columns = max(1, int(width // self.char_width))
        return MonospaceLayout(
            text_length=len(text),
            lines=tuple(_break_lines(text, columns)),
            char_width=self.char_width,
            line_height=self.line_height,
        )


__all__ = ["LineSpan", "MonospaceLayout", "MonospaceLayoutEngine"]
