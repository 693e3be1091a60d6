"""Selection model, geometry derivation, and state transitions."""

from .geometry import CaretGeometry, Rect, SelectionRegions, derive_selection_regions
from .state import (
    NO_SELECTION,
    Caret,
    NoSelection,
    Range,
    Selection,
    clamp_selection,
    make_range,
    selection_bounds,
)
from .transitions import (
    apply_backspace,
    apply_delete,
    apply_insert,
    extend_selection,
    move_between_columns,
    move_between_rows,
    reset_selection,
    select_word,
)

__all__ = [
    "Caret",
    "CaretGeometry",
    "NO_SELECTION",
    "NoSelection",
    "Range",
    "Rect",
    "Selection",
    "SelectionRegions",
    "apply_backspace",
    "apply_delete",
    "apply_insert",
    "clamp_selection",
    "derive_selection_regions",
    "extend_selection",
    "make_range",
    "move_between_columns",
    "move_between_rows",
    "reset_selection",
    "select_word",
    "selection_bounds",
]
