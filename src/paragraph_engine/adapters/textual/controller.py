"""Bridges Textual key/mouse events to an ``EditDispatcher``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from paragraph_engine.dispatch import (
    EDIT_EVENT,
    SELECTION_EVENT,
    DispatchResult,
    DoubleClick,
    EditDispatcher,
    EditorSnapshot,
    InputEvent,
    PointerDown,
    PointerLeave,
    PointerMove,
    PointerUp,
    Resize,
    Scroll,
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[EditorSnapshot], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


_POINTER_EVENTS: Dict[str, Callable[[float, float], InputEvent]] = {
    "down": PointerDown,
    "move": PointerMove,
    "up": PointerUp,
    "double": DoubleClick,
}


class TextualEditorAdapter:
    def __init__(self, dispatcher: EditDispatcher, hooks: TextualUIHooks) -> None:
        self.dispatcher = dispatcher
        self.hooks = hooks
        for event in (EDIT_EVENT, SELECTION_EVENT):
            dispatcher.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )
        self.hooks.update_view(dispatcher.snapshot)

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> DispatchResult:
        normalized = tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized or None)
        result = self.dispatcher.dispatch_key(key, text=text, modifiers=normalized)
        return self._after(result)

    def handle_pointer(self, kind: str, x: float, y: float) -> DispatchResult:
        try:
            factory = _POINTER_EVENTS[kind]
        except KeyError as exc:
            raise ValueError(f"Unknown pointer event '{kind}'") from exc
        return self.dispatch(factory(x, y))

    def handle_leave(self) -> DispatchResult:
        return self.dispatch(PointerLeave())

    def handle_scroll(self, delta_y: float) -> DispatchResult:
        return self.dispatch(Scroll(delta_y))

    def handle_resize(self, width: float, height: float) -> DispatchResult:
        return self.dispatch(Resize(width, height))

    def dispatch(self, event: InputEvent) -> DispatchResult:
        self._log_state("event ->", kind=event.kind)
        return self._after(self.dispatcher.handle(event))

    def _after(self, result: DispatchResult) -> DispatchResult:
        self.hooks.update_status(result.status)
        if result.snapshot is not None:
            self.hooks.update_view(result.snapshot)
        self._log_state("result <-", consumed=result.consumed, status=result.status)
        return result

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("bus ->", bus_event=name)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self.dispatcher.snapshot
        state: Dict[str, object] = {
            "generation": snapshot.generation,
            "version": snapshot.model.version,
            "selection": snapshot.selection,
            "scroll_y": snapshot.scroll_y,
        }
        state.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in state.items()]
        self.hooks.log(" ".join(parts))


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
