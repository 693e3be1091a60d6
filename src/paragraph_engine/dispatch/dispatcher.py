"""Edit dispatcher: the single writer of editor state."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Callable,
    Deque,
    Dict,
    Iterable,
    Mapping,
    Optional,
    Tuple,
    Type,
)

from paragraph_engine.buffer import TextModel
from paragraph_engine.config import EditorConfig
from paragraph_engine.layout import LayoutEngine, LineLayout
from paragraph_engine.runtime import telemetry
from paragraph_engine.selection import (
    Caret,
    NoSelection,
    Selection,
    SelectionRegions,
    apply_backspace,
    apply_delete,
    apply_insert,
    clamp_selection,
    derive_selection_regions,
    extend_selection,
    move_between_columns,
    move_between_rows,
    reset_selection,
    select_word,
)

from .bus import EventBus
from .derived import DerivationGraph, DerivedNode
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

if TYPE_CHECKING:  # pragma: no cover
    from paragraph_engine.keymaps import KeymapRegistry

SNAPSHOT_EVENT = "editor.snapshot"
EDIT_EVENT = "editor.edit"
SELECTION_EVENT = "editor.selection"

_LOGGER_NAME = "paragraph_engine.dispatch"


@dataclass(frozen=True, slots=True)
class EditorSnapshot:
    """Consistent view of one generation of editor state."""

    generation: int
    model: TextModel
    selection: Selection
    layout: LineLayout
    regions: Optional[SelectionRegions]
    width: float
    height: float
    scroll_y: float


@dataclass(slots=True)
class DispatchResult:
    consumed: bool
    status: str = "ok"
    snapshot: Optional[EditorSnapshot] = None


Outcome = Tuple[TextModel, Selection, str]

_NEEDS_SELECTION = (
    InsertText,
    DeleteBackward,
    DeleteForward,
    MoveLeft,
    MoveRight,
    MoveUp,
    MoveDown,
)


class EditDispatcher:
    """Applies input events to the text model and selection.

    Per event the order is fixed: compute the new model and/or selection,
    re-derive layout and geometry for exactly that pair, then publish the
    snapshot on ``bus``.
    """

    def __init__(
        self,
        layout_engine: LayoutEngine,
        *,
        config: Optional[EditorConfig] = None,
        model: Optional[TextModel] = None,
        selection: Optional[Selection] = None,
        bus: Optional[EventBus] = None,
        keymap: Optional["KeymapRegistry"] = None,
    ) -> None:
        self.config = config or EditorConfig()
        self.layout_engine = layout_engine
        self.bus = bus or EventBus()
        self.model = model if model is not None else TextModel(self.config.initial_text)
        self.selection = clamp_selection(
            selection if selection is not None else Caret(0), self.model
        )
        self.width = self.config.width
        self.height = self.config.height
        self.scroll_y = 0.0
        self.pointer_down = False
        self.generation = 0
        self._dispatching = False
        self._pending: Deque[InputEvent] = deque()
        if keymap is None:
            from paragraph_engine.keymaps import KeymapRegistry, load_default_keymaps

            keymap = KeymapRegistry()
            load_default_keymaps(keymap)
        self.keymap = keymap
        self._graph = DerivationGraph(
            sources=("model", "selection", "width"),
            nodes=(
                DerivedNode("layout", ("model", "width"), self._layout),
                DerivedNode(
                    "regions", ("model", "selection", "layout"), derive_selection_regions
                ),
            ),
        )
        self._handlers: Dict[Type[object], Callable[..., Outcome]] = {
            InsertText: self._on_insert,
            DeleteBackward: self._on_backspace,
            DeleteForward: self._on_delete,
            MoveLeft: self._on_move_left,
            MoveRight: self._on_move_right,
            MoveUp: self._on_move_up,
            MoveDown: self._on_move_down,
            PointerDown: self._on_pointer_down,
            PointerMove: self._on_pointer_move,
            PointerUp: self._on_pointer_up,
            PointerLeave: self._on_pointer_leave,
            DoubleClick: self._on_double_click,
            Scroll: self._on_scroll,
            Resize: self._on_resize,
        }
        self._snapshot = self._derive()

    @property
    def snapshot(self) -> EditorSnapshot:
        return self._snapshot

    @property
    def recomputations(self) -> Mapping[str, int]:
        """How often each derived value has been computed so far."""

        return dict(self._graph.recomputations)

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self.bus.subscribe(event, callback)

    def handle(self, event: InputEvent) -> DispatchResult:
        """Apply ``event`` and publish the resulting snapshot.

        Events handed in by a bus subscriber while a dispatch is still
        publishing are queued and applied once it finishes, so subscribers
        always see generations in increasing order.
        """

        self._lookup(event)
        if self._dispatching:
            self._pending.append(event)
            return DispatchResult(consumed=True, status="queued", snapshot=self._snapshot)

        self._dispatching = True
        try:
            result = self._apply(event)
            while self._pending:
                self._apply(self._pending.popleft())
        finally:
            self._dispatching = False
            self._pending.clear()
        return result

    def _lookup(self, event: InputEvent) -> Callable[..., Outcome]:
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unsupported input event {event!r}")
        return handler

    def _apply(self, event: InputEvent) -> DispatchResult:
        handler = self._lookup(event)
        with telemetry.span(
            f"dispatch::{event.kind}",
            logger_name=_LOGGER_NAME,
            component="dispatch",
            metadata={"generation": self.generation, "model_version": self.model.version},
        ) as span_handle:
            if isinstance(self.selection, NoSelection) and isinstance(
                event, _NEEDS_SELECTION
            ):
                model, selection, status = self.model, self.selection, "ignored"
            else:
                model, selection, status = handler(event)
            edited = model is not self.model
            if edited:
                selection = clamp_selection(selection, model)
            moved = selection != self.selection
            self.model = model
            self.selection = selection
            self.generation += 1
            self._snapshot = self._derive()
            span_handle.add_metadata("status", status)

        snapshot = self._snapshot
        if edited:
            telemetry.record_event(
                EDIT_EVENT,
                level="debug",
                data={"kind": event.kind, "version": model.version, "length": len(model)},
                logger_name=_LOGGER_NAME,
            )
            self.bus.emit(EDIT_EVENT, snapshot)
        if moved:
            self.bus.emit(SELECTION_EVENT, snapshot)
        self.bus.emit(SNAPSHOT_EVENT, snapshot)
        return DispatchResult(consumed=status != "ignored", status=status, snapshot=snapshot)

    def handle_all(self, events: Iterable[InputEvent]) -> DispatchResult:
        result = DispatchResult(consumed=False, status="empty", snapshot=self._snapshot)
        for event in events:
            result = self.handle(event)
        return result

    def dispatch_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> DispatchResult:
        """Translate a host key name through the keymap and handle it."""

        event = self.keymap.translate(key, text, modifiers)
        if event is None:
            return DispatchResult(consumed=False, status="unbound", snapshot=self._snapshot)
        return self.handle(event)

    # derivation

    def _layout(self, model: TextModel, width: float) -> LineLayout:
        return self.layout_engine.layout(model.chunks(), width)

    def _derive(self) -> EditorSnapshot:
        values = self._graph.evaluate(
            {"model": self.model, "selection": self.selection, "width": self.width}
        )
        layout = values["layout"]
        max_scroll = max(0.0, float(layout.get_height()) - self.height)
        self.scroll_y = min(max(self.scroll_y, 0.0), max_scroll)
        return EditorSnapshot(
            generation=self.generation,
            model=self.model,
            selection=self.selection,
            layout=layout,
            regions=values["regions"],
            width=self.width,
            height=self.height,
            scroll_y=self.scroll_y,
        )

    def _to_paragraph(self, y: float) -> float:
        return y + self.scroll_y

    # handlers

    def _on_insert(self, event: InsertText) -> Outcome:
        model, selection = apply_insert(self.model, self.selection, event.text)
        return model, selection, "insert" if model is not self.model else "ignored"

    def _on_backspace(self, event: DeleteBackward) -> Outcome:
        del event
        model, selection = apply_backspace(self.model, self.selection)
        return model, selection, "backspace"

    def _on_delete(self, event: DeleteForward) -> Outcome:
        del event
        model, selection = apply_delete(self.model, self.selection)
        return model, selection, "delete"

    def _on_move_left(self, event: MoveLeft) -> Outcome:
        del event
        return self.model, move_between_columns(self.model, self.selection, -1), "move"

    def _on_move_right(self, event: MoveRight) -> Outcome:
        del event
        return self.model, move_between_columns(self.model, self.selection, 1), "move"

    def _move_rows(self, *, upward: bool) -> Outcome:
        selection = move_between_rows(
            self.selection,
            self._snapshot.regions,
            self._snapshot.layout,
            upward=upward,
            font_size=self.config.font_size,
            canvas_height=self.height,
        )
        return self.model, selection, "move"

    def _on_move_up(self, event: MoveUp) -> Outcome:
        del event
        return self._move_rows(upward=True)

    def _on_move_down(self, event: MoveDown) -> Outcome:
        del event
        return self._move_rows(upward=False)

    def _on_pointer_down(self, event: PointerDown) -> Outcome:
        self.pointer_down = True
        selection = reset_selection(
            self._snapshot.layout, event.x, self._to_paragraph(event.y)
        )
        return self.model, selection, "pointer_down"

    def _on_pointer_move(self, event: PointerMove) -> Outcome:
        if not self.pointer_down:
            return self.model, self.selection, "hover"
        selection = extend_selection(
            self.selection, self._snapshot.layout, event.x, self._to_paragraph(event.y)
        )
        return self.model, selection, "drag"

    def _on_pointer_up(self, event: PointerUp) -> Outcome:
        del event
        self.pointer_down = False
        return self.model, self.selection, "pointer_up"

    def _on_pointer_leave(self, event: PointerLeave) -> Outcome:
        del event
        self.pointer_down = False
        return self.model, self.selection, "pointer_leave"

    def _on_double_click(self, event: DoubleClick) -> Outcome:
        selection = select_word(
            self.model,
            self.selection,
            self._snapshot.layout,
            event.x,
            self._to_paragraph(event.y),
        )
        return self.model, selection, "select_word"

    def _on_scroll(self, event: Scroll) -> Outcome:
        # Clamped against the paragraph height in _derive.
        self.scroll_y += event.delta_y
        return self.model, self.selection, "scroll"

    def _on_resize(self, event: Resize) -> Outcome:
        self.width = float(event.width)
        self.height = float(event.height)
        return self.model, self.selection, "resize"


__all__ = [
    "DispatchResult",
    "EDIT_EVENT",
    "EditDispatcher",
    "EditorSnapshot",
    "SELECTION_EVENT",
    "SNAPSHOT_EVENT",
]
