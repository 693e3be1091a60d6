"""Built-in bindings for browser-style and Textual key names."""

from __future__ import annotations

from typing import Iterable, Optional, Type

from paragraph_engine.dispatch.events import (
    DeleteBackward,
    DeleteForward,
    InputEvent,
    InsertText,
    MoveDown,
    MoveLeft,
    MoveRight,
    MoveUp,
)

from .models import EventFactory, KeyBinding, KeyStroke
from .registry import KeymapRegistry


def _emit(event_type: Type[InputEvent]) -> EventFactory:
    def factory(text: Optional[str]) -> InputEvent:
        del text
        return event_type()  # type: ignore[call-arg]

    return factory


def _newline(text: Optional[str]) -> InputEvent:
    del text
    return InsertText("\n")


_COMMANDS: tuple[tuple[str, EventFactory, str], ...] = (
    ("backspace", _emit(DeleteBackward), "Delete the character before the caret"),
    ("delete", _emit(DeleteForward), "Delete the character after the caret"),
    ("up", _emit(MoveUp), "Move the caret one row up"),
    ("down", _emit(MoveDown), "Move the caret one row down"),
    ("left", _emit(MoveLeft), "Move the caret one character left"),
    ("right", _emit(MoveRight), "Move the caret one character right"),
    ("newline", _newline, "Insert a line break"),
)

# Browser KeyboardEvent.key names and Textual key names per command.
_KEY_NAMES: dict[str, tuple[str, ...]] = {
    "backspace": ("Backspace", "backspace", "ctrl+h"),
    "delete": ("Delete", "delete"),
    "up": ("ArrowUp", "up"),
    "down": ("ArrowDown", "down"),
    "left": ("ArrowLeft", "left"),
    "right": ("ArrowRight", "right"),
    "newline": ("Enter", "enter"),
}


def _stroke(name: str) -> KeyStroke:
    *modifiers, key = name.split("+")
    return KeyStroke(key, tuple(modifiers))


def default_bindings() -> tuple[KeyBinding, ...]:
    bindings: list[KeyBinding] = []
    for command, factory, description in _COMMANDS:
        for name in _KEY_NAMES[command]:
            bindings.append(
                KeyBinding(
                    id=f"{command}.{name}",
                    stroke=_stroke(name),
                    action=factory,
                    description=description,
                )
            )
    return tuple(bindings)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    include: Optional[Iterable[str]] = None,
    replace: bool = False,
) -> KeymapRegistry:
    """Register the default bindings, optionally limited to ``include`` commands."""

    commands = set(include) if include is not None else None
    for binding in default_bindings():
        if commands is not None and binding.id.split(".", 1)[0] not in commands:
            continue
        registry.register(binding, replace=replace)
    return registry


__all__ = ["default_bindings", "load_default_keymaps"]
