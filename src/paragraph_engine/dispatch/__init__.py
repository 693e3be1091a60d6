"""Input events, the derivation graph, and the edit dispatcher."""

from .bus import EventBus
from .derived import DerivationGraph, DerivedNode
from .dispatcher import (
    EDIT_EVENT,
    SELECTION_EVENT,
    SNAPSHOT_EVENT,
    DispatchResult,
    EditDispatcher,
    EditorSnapshot,
)
from .events import (
    DeleteBackward,
    DeleteForward,
    DoubleClick,
    InputEvent,
    InsertText,
    MoveDown,
    MoveLeft,
    MoveRight,
    MoveUp,
    PointerDown,
    PointerLeave,
    PointerMove,
    PointerUp,
    Resize,
    Scroll,
)

__all__ = [
    "DeleteBackward",
    "DeleteForward",
    "DerivationGraph",
    "DerivedNode",
    "DispatchResult",
    "DoubleClick",
    "EDIT_EVENT",
    "EditDispatcher",
    "EditorSnapshot",
    "EventBus",
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
    "SELECTION_EVENT",
    "SNAPSHOT_EVENT",
    "Scroll",
]
