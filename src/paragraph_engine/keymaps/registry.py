"""Keymap registry translating host key names into input events."""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from paragraph_engine.dispatch.events import InputEvent, InsertText
from paragraph_engine.runtime.telemetry import span

from .models import KeyBinding, KeyStroke

_COMMAND_MODIFIERS = frozenset({"ctrl", "alt", "meta"})


class KeymapConflictError(RuntimeError):
    """Raised when a binding claims a keystroke another binding owns."""

    def __init__(self, binding: KeyBinding, existing: KeyBinding) -> None:
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{existing.id}' "
            f"on '{binding.stroke.token}'"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    def __init__(self, *, logger_name: str | None = None) -> None:
        self._by_id: Dict[str, KeyBinding] = {}
        self._by_token: Dict[str, str] = {}
        self._logger_name = logger_name

    def register(self, binding: KeyBinding, *, replace: bool = False) -> KeyBinding:
        with span(
            "keymaps::register",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "token": binding.stroke.token},
        ) as handle:
            token = binding.stroke.token
            owner_id = self._by_token.get(token)
            if owner_id is not None and owner_id != binding.id and not replace:
                handle.add_metadata("conflict", owner_id)
                raise KeymapConflictError(binding, self._by_id[owner_id])
            if binding.id in self._by_id and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            if owner_id is not None:
                self._drop(owner_id)
            if binding.id in self._by_id:
                self._drop(binding.id)
            self._by_id[binding.id] = binding
            self._by_token[token] = binding.id
            return binding

    def unregister(self, binding_id: str) -> Optional[KeyBinding]:
        return self._drop(binding_id)

    def lookup(self, key: str, modifiers: Iterable[str] = ()) -> Optional[KeyBinding]:
        binding_id = self._by_token.get(KeyStroke(key, tuple(modifiers)).token)
        if binding_id is None:
            return None
        return self._by_id[binding_id]

    def translate(
        self,
        key: str,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> Optional[InputEvent]:
        """Return the event for ``key``; unbound printable text becomes an insert."""

        stroke = KeyStroke(key, tuple(modifiers))
        binding = self.lookup(stroke.key, stroke.modifiers)
        if binding is not None:
            return binding.build_event(text)
        if _COMMAND_MODIFIERS.intersection(stroke.modifiers):
            return None
        if text and text.isprintable():
            return InsertText(text)
        return None

    def _drop(self, binding_id: str) -> Optional[KeyBinding]:
        binding = self._by_id.pop(binding_id, None)
        if binding is not None:
            self._by_token.pop(binding.stroke.token, None)
        return binding


__all__ = ["KeymapConflictError", "KeymapRegistry"]
