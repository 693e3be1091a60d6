"""Selection values: nothing, a collapsed caret, or a directional range."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from paragraph_engine.buffer import TextModel


@dataclass(frozen=True, slots=True)
class NoSelection:
    """The editor has no insertion point."""


@dataclass(frozen=True, slots=True)
class Caret:
    offset: int


@dataclass(frozen=True, slots=True)
class Range:
    """``anchor`` is where the selection started, ``active`` where it ends now.

    The pair is not sorted: ``anchor > active`` means the range was built
    backwards and the caret sits on its lower edge.
    """

    anchor: int
    active: int

    @property
    def reversed(self) -> bool:
        return self.anchor > self.active


Selection = Union[NoSelection, Caret, Range]

NO_SELECTION = NoSelection()


def make_range(anchor: int, active: int) -> Selection:
    """Build a range, collapsing it to a caret when both ends coincide."""

    if anchor == active:
        return Caret(active)
    return Range(anchor, active)


def selection_bounds(selection: Selection) -> Optional[Tuple[int, int]]:
    if isinstance(selection, Caret):
        return (selection.offset, selection.offset)
    if isinstance(selection, Range):
        return (min(selection.anchor, selection.active), max(selection.anchor, selection.active))
    return None


def clamp_selection(selection: Selection, model: TextModel) -> Selection:
    """Re-clamp ``selection`` against ``model`` keeping the range direction."""

    if isinstance(selection, Caret):
        offset = model.clamp_position(selection.offset)
        return selection if offset == selection.offset else Caret(offset)
    if isinstance(selection, Range):
        anchor = model.clamp_position(selection.anchor)
        active = model.clamp_position(selection.active)
        if (anchor, active) == (selection.anchor, selection.active):
            return selection
        return make_range(anchor, active)
    return selection


__all__ = [
    "Caret",
    "NO_SELECTION",
    "NoSelection",
    "Range",
    "Selection",
    "clamp_selection",
    "make_range",
    "selection_bounds",
]
