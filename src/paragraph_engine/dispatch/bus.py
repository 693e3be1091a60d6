"""Minimal publish/subscribe bus the dispatcher notifies observers through."""

from __future__ import annotations

from typing import Callable, Dict, List

Subscriber = Callable[[object], None]


class EventBus:
    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Subscriber]] = {}

    def subscribe(self, event: str, callback: Subscriber) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        # Copy so a callback may subscribe others mid-dispatch.
        for callback in list(self._subscribers.get(event, ())):
            callback(payload)


__all__ = ["EventBus", "Subscriber"]
