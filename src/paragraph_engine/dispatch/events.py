"""Abstract input events delivered by the host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True, slots=True)
class InsertText:
    """Committed text, including a whole IME composition."""

    kind: ClassVar[str] = "insert"
    text: str


@dataclass(frozen=True, slots=True)
class DeleteBackward:
    kind: ClassVar[str] = "backspace"


@dataclass(frozen=True, slots=True)
class DeleteForward:
    kind: ClassVar[str] = "delete"


@dataclass(frozen=True, slots=True)
class MoveUp:
    kind: ClassVar[str] = "up"


@dataclass(frozen=True, slots=True)
class MoveDown:
    kind: ClassVar[str] = "down"


@dataclass(frozen=True, slots=True)
class MoveLeft:
    kind: ClassVar[str] = "left"


@dataclass(frozen=True, slots=True)
class MoveRight:
    kind: ClassVar[str] = "right"


@dataclass(frozen=True, slots=True)
class PointerDown:
    kind: ClassVar[str] = "pointer_down"
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class PointerMove:
    kind: ClassVar[str] = "pointer_move"
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class PointerUp:
    kind: ClassVar[str] = "pointer_up"
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class PointerLeave:
    kind: ClassVar[str] = "pointer_leave"


@dataclass(frozen=True, slots=True)
class DoubleClick:
    kind: ClassVar[str] = "double_click"
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Scroll:
    """Wheel movement; positive ``delta_y`` scrolls towards the end."""

    kind: ClassVar[str] = "scroll"
    delta_y: float


@dataclass(frozen=True, slots=True)
class Resize:
    kind: ClassVar[str] = "resize"
    width: float
    height: float


InputEvent = Union[
    InsertText,
    DeleteBackward,
    DeleteForward,
    MoveUp,
    MoveDown,
    MoveLeft,
    MoveRight,
    PointerDown,
    PointerMove,
    PointerUp,
    PointerLeave,
    DoubleClick,
    Scroll,
    Resize,
]


__all__ = [
    "DeleteBackward",
    "DeleteForward",
    "DoubleClick",
    "InputEvent",
    "InsertText",
    "MoveDown",
    "MoveLeft",
    "MoveRight",
    "MoveUp",
    "PointerDown",
    "PointerLeave",
    "PointerMove",
    "PointerUp",
    "Resize",
    "Scroll",
]
