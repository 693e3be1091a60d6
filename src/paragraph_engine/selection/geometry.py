"""Caret and highlight geometry derived from (model, selection, layout).

Geometry is never stored as editor state: it is recomputed whenever any of
its three inputs changes, so it cannot go stale after an edit or a resize.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence, Tuple

from paragraph_engine.buffer import TextModel
from paragraph_engine.layout import LineLayout, RectHeightStyle, RectWidthStyle
from paragraph_engine.runtime import telemetry

from .state import Caret, Range, Selection


class Rect(NamedTuple):
    x0: float
    y0: float
    x1: float
    y1: float

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "Rect":
        x0, y0, x1, y1 = values[:4]
        return cls(float(x0), float(y0), float(x1), float(y1))


class CaretGeometry(NamedTuple):
    x: float
    y0: float
    y1: float


@dataclass(frozen=True, slots=True)
class SelectionRegions:
    """``regions`` is ``None`` for a collapsed caret."""

    regions: Optional[Tuple[Rect, ...]]
    caret: CaretGeometry


def _rects_for_range(layout: LineLayout, low: int, high: int) -> Tuple[Rect, ...]:
    raw = layout.get_rects_for_range(
        low, high, RectHeightStyle.MAX, RectWidthStyle.TIGHT
    )
    return tuple(Rect.from_sequence(rect) for rect in raw)


def _caret_regions(
    model: TextModel, offset: int, layout: LineLayout
) -> Optional[SelectionRegions]:
    length = len(model)
    if length == 0:
        return SelectionRegions(None, CaretGeometry(0.0, 0.0, float(layout.get_height())))

    use_right_edge = False
    if offset == 0:
        low, high = 0, 1
    elif offset == length:
        low, high = offset - 1, offset
        use_right_edge = True
    else:
        low, high = offset, offset + 1

    rects = _rects_for_range(layout, low, high)
    if not rects:
        telemetry.record_event(
            "layout.inconsistent",
            level="warning",
            data={"offset": offset, "range": (low, high), "length": length},
            logger_name="paragraph_engine.selection",
        )
        return None
    x0, y0, x1, y1 = rects[0]
    return SelectionRegions(None, CaretGeometry(x1 if use_right_edge else x0, y0, y1))


def _range_regions(selection: Range, layout: LineLayout) -> Optional[SelectionRegions]:
    use_last = selection.reversed
    low, high = sorted((selection.anchor, selection.active))
    rects = _rects_for_range(layout, low, high)
    if not rects:
        return None
    x0, y0, x1, y1 = rects[-1] if use_last else rects[0]
    return SelectionRegions(rects, CaretGeometry(x1 if use_last else x0, y0, y1))


def derive_selection_regions(
    model: TextModel, selection: Selection, layout: LineLayout
) -> Optional[SelectionRegions]:
    """Return caret and highlight boxes, or ``None`` when nothing is visible."""

    if isinstance(selection, Caret):
        return _caret_regions(model, selection.offset, layout)
    if isinstance(selection, Range):
        return _range_regions(selection, layout)
    return None


__all__ = [
    "CaretGeometry",
    "Rect",
    "SelectionRegions",
    "derive_selection_regions",
]
