"""Dataclasses describing host key bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from paragraph_engine.dispatch.events import InputEvent

EventFactory = Callable[[Optional[str]], Optional[InputEvent]]


def normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Host key name plus modifiers, e.g. ``ArrowLeft`` or ``ctrl+h``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(self.modifiers) + f"+{self.key}"
        return self.key


@dataclass(frozen=True, slots=True)
class KeyBinding:
    """Maps one keystroke to a factory building the matching input event.

    The factory receives the text the host reported for the key, which only
    matters for bindings that insert something.
    """

    id: str
    stroke: KeyStroke
    action: EventFactory
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not callable(self.action):
            raise TypeError("action must be callable")

    def build_event(self, text: Optional[str] = None) -> Optional[InputEvent]:
        return self.action(text)


__all__ = ["EventFactory", "KeyBinding", "KeyStroke", "normalize_modifiers"]
