"""Selection state machine transitions.

Each function takes the current values and returns new ones; nothing here
holds state. Functions that edit text return the new model together with the
caret that belongs to it so the two can never drift apart.
"""

from __future__ import annotations

from typing import Optional, Tuple

from paragraph_engine.buffer import TextModel
from paragraph_engine.layout import LineLayout

from .geometry import SelectionRegions
from .state import Caret, NoSelection, Range, Selection, make_range

Edit = Tuple[TextModel, Selection]


def reset_selection(layout: LineLayout, x: float, y: float) -> Selection:
    """Pointer down: collapse to the glyph boundary under ``(x, y)``."""

    return Caret(layout.get_glyph_position_at_coordinate(x, y))


def extend_selection(
    selection: Selection, layout: LineLayout, x: float, y: float
) -> Selection:
    """Pointer drag: move the active end, keeping the anchor where it was."""

    position = layout.get_glyph_position_at_coordinate(x, y)
    if isinstance(selection, Caret):
        return make_range(selection.offset, position)
    if isinstance(selection, Range):
        return make_range(selection.anchor, position)
    return Caret(position)


def select_word(
    model: TextModel, selection: Selection, layout: LineLayout, x: float, y: float
) -> Selection:
    """Double click: select the word under the pointer, if there is one."""

    position = layout.get_glyph_position_at_coordinate(x, y)
    span = model.get_word_including_position(position)
    if span is None:
        return selection
    return make_range(*span)


def apply_insert(model: TextModel, selection: Selection, text: str) -> Edit:
    if isinstance(selection, Caret):
        new_model, position = model.insert(selection.offset, text)
    elif isinstance(selection, Range):
        new_model, position = model.strip(selection.anchor, selection.active)
        new_model, position = new_model.insert(position, text)
    else:
        return model, selection
    return new_model, Caret(position)


def _apply_delete(model: TextModel, selection: Selection, *, backward: bool) -> Edit:
    if isinstance(selection, Caret):
        delete = model.delete_backward if backward else model.delete_forward
        new_model, position = delete(selection.offset)
    elif isinstance(selection, Range):
        new_model, position = model.strip(selection.anchor, selection.active)
    else:
        return model, selection
    return new_model, Caret(position)


def apply_backspace(model: TextModel, selection: Selection) -> Edit:
    return _apply_delete(model, selection, backward=True)


def apply_delete(model: TextModel, selection: Selection) -> Edit:
    return _apply_delete(model, selection, backward=False)


def move_between_columns(
    model: TextModel, selection: Selection, delta: int
) -> Selection:
    """Left/right arrow.

    A range collapses relative to its lower bound whatever the direction, so
    moving right out of ``Range(1, 4)`` lands on offset 2, not 5.
    """

    if isinstance(selection, Caret):
        return Caret(model.clamp_position(selection.offset + delta))
    if isinstance(selection, Range):
        lower = min(selection.anchor, selection.active)
        return Caret(model.clamp_position(lower + delta))
    return selection


def move_between_rows(
    selection: Selection,
    regions: Optional[SelectionRegions],
    layout: Optional[LineLayout],
    *,
    upward: bool,
    font_size: float,
    canvas_height: float,
) -> Selection:
    """Up/down arrow: hit-test half a font size above or below the caret.

    The downward target is capped at ``canvas_height`` in paragraph space, so
    once the view is scrolled past one screen a move down can land higher.
    """

    if regions is None or layout is None or isinstance(selection, NoSelection):
        return selection
    x, y0, y1 = regions.caret
    if upward:
        target_y = max(0.0, min(y0, y1) - font_size / 2)
    else:
        target_y = min(float(canvas_height), max(y0, y1) + font_size / 2)
    return Caret(layout.get_glyph_position_at_coordinate(x, target_y))


__all__ = [
    "apply_backspace",
    "apply_delete",
    "apply_insert",
    "extend_selection",
    "move_between_columns",
    "move_between_rows",
    "reset_selection",
    "select_word",
]
