from __future__ import annotations

from typing import List, Optional, Tuple

import pytest

from paragraph_engine.buffer import TextModel
from paragraph_engine.config import EditorConfig
from paragraph_engine.dispatch import (
    EDIT_EVENT,
    SELECTION_EVENT,
    SNAPSHOT_EVENT,
    DeleteBackward,
    DispatchResult,
    DoubleClick,
    EditDispatcher,
    EditorSnapshot,
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
from paragraph_engine.layout import MonospaceLayoutEngine
from paragraph_engine.selection import NO_SELECTION, Caret, CaretGeometry, Range, Selection


def make_dispatcher(
    text: str = "hello",
    selection: Optional[Selection] = None,
    *,
    width: float = 200,
    height: float = 100,
) -> EditDispatcher:
    return EditDispatcher(
        MonospaceLayoutEngine(char_width=10, line_height=20),
        config=EditorConfig(width=width, height=height, font_size=16),
        model=TextModel(text),
        selection=selection,
    )


def record_bus(dispatcher: EditDispatcher) -> List[Tuple[str, EditorSnapshot]]:
    seen: List[Tuple[str, EditorSnapshot]] = []
    for name in (EDIT_EVENT, SELECTION_EVENT, SNAPSHOT_EVENT):
        dispatcher.subscribe(name, lambda payload, name=name: seen.append((name, payload)))
    return seen


def test_insert_updates_model_selection_and_geometry_together() -> None:
    dispatcher = make_dispatcher(selection=Caret(2))

    result = dispatcher.handle(InsertText("X"))

    assert result.consumed and result.status == "insert"
    snapshot = result.snapshot
    assert snapshot is dispatcher.snapshot
    assert snapshot.model.text == "heXllo"
    assert snapshot.selection == Caret(3)
    assert snapshot.regions.caret == CaretGeometry(30, 0, 20)
    assert snapshot.generation == 1


def test_backspace_over_range() -> None:
    dispatcher = make_dispatcher(selection=Range(1, 4))

    result = dispatcher.handle(DeleteBackward())

    assert result.snapshot.model.text == "ho"
    assert result.snapshot.selection == Caret(1)


def test_initial_selection_is_clamped() -> None:
    assert make_dispatcher(selection=Caret(99)).selection == Caret(5)
    assert make_dispatcher().selection == Caret(0)


def test_edits_without_selection_are_ignored() -> None:
    dispatcher = make_dispatcher(selection=NO_SELECTION)
    seen = record_bus(dispatcher)

    for event in (InsertText("x"), DeleteBackward(), MoveLeft(), MoveDown()):
        result = dispatcher.handle(event)
        assert not result.consumed
        assert result.status == "ignored"

    assert dispatcher.model.text == "hello"
    assert [name for name, _ in seen] == [SNAPSHOT_EVENT] * 4


def test_pointer_drag_builds_range_until_release() -> None:
    dispatcher = make_dispatcher("hello world")

    assert dispatcher.handle(PointerMove(50, 5)).status == "hover"
    assert dispatcher.selection == Caret(0)

    dispatcher.handle(PointerDown(31, 5))
    dispatcher.handle(PointerMove(80, 5))
    assert dispatcher.selection == Range(3, 8)
    dispatcher.handle(PointerUp(80, 5))

    dispatcher.handle(PointerMove(10, 5))
    assert dispatcher.selection == Range(3, 8)


def test_pointer_leave_ends_drag() -> None:
    dispatcher = make_dispatcher("hello world")

    dispatcher.handle(PointerDown(0, 5))
    dispatcher.handle(PointerLeave())

    assert dispatcher.handle(PointerMove(60, 5)).status == "hover"
    assert dispatcher.selection == Caret(0)


def test_double_click_selects_word() -> None:
    dispatcher = make_dispatcher("hello world")

    result = dispatcher.handle(DoubleClick(72, 5))

    assert result.status == "select_word"
    assert dispatcher.selection == Range(6, 11)
    assert result.snapshot.regions.regions == ((60.0, 0.0, 110.0, 20.0),)


def test_arrow_keys_move_caret() -> None:
    dispatcher = make_dispatcher("abc\ndef", selection=Caret(5))

    dispatcher.handle(MoveUp())
    assert dispatcher.selection == Caret(1)
    dispatcher.handle(MoveDown())
    assert dispatcher.selection == Caret(5)
    dispatcher.handle(MoveRight())
    assert dispatcher.selection == Caret(6)
    dispatcher.handle(MoveLeft())
    assert dispatcher.selection == Caret(5)


def test_bus_publishes_after_state_is_consistent() -> None:
    dispatcher = make_dispatcher(selection=Caret(5))
    seen = record_bus(dispatcher)

    dispatcher.handle(InsertText("!"))
    dispatcher.handle(MoveLeft())
    dispatcher.handle(Scroll(10))

    names = [name for name, _ in seen]
    assert names == [
        EDIT_EVENT,
        SELECTION_EVENT,
        SNAPSHOT_EVENT,
        SELECTION_EVENT,
        SNAPSHOT_EVENT,
        SNAPSHOT_EVENT,
    ]
    edit_snapshot = seen[0][1]
    assert edit_snapshot.model.text == "hello!"
    assert edit_snapshot.selection == Caret(6)
    assert edit_snapshot.regions.caret.x == 60


def test_layout_is_reused_for_selection_only_changes() -> None:
    dispatcher = make_dispatcher(selection=Caret(0))
    before = dispatcher.recomputations["layout"]

    dispatcher.handle(MoveRight())
    dispatcher.handle(MoveRight())
    assert dispatcher.recomputations["layout"] == before

    dispatcher.handle(InsertText("x"))
    assert dispatcher.recomputations["layout"] == before + 1


def test_resize_relayouts_text() -> None:
    dispatcher = make_dispatcher("abcdef", width=30)
    assert len(dispatcher.snapshot.layout.lines) == 2

    result = dispatcher.handle(Resize(20, 100))

    assert result.status == "resize"
    assert len(result.snapshot.layout.lines) == 3
    assert result.snapshot.width == 20


def test_scroll_is_clamped_to_paragraph_height() -> None:
    text = "\n".join("a" * 10)
    dispatcher = make_dispatcher(text, height=100)
    assert dispatcher.snapshot.layout.get_height() == 200

    assert dispatcher.handle(Scroll(500)).snapshot.scroll_y == 100
    assert dispatcher.handle(Scroll(-1000)).snapshot.scroll_y == 0

    dispatcher.handle(Scroll(100))
    dispatcher.handle(PointerDown(0, 10))
    assert dispatcher.selection == Caret(10)


def test_short_paragraph_never_scrolls() -> None:
    dispatcher = make_dispatcher("hello", height=100)

    assert dispatcher.handle(Scroll(40)).snapshot.scroll_y == 0


def test_dispatch_key_uses_keymap() -> None:
    dispatcher = make_dispatcher(selection=Caret(5))

    assert dispatcher.dispatch_key("ArrowLeft").status == "move"
    assert dispatcher.selection == Caret(4)
    assert dispatcher.dispatch_key("x", text="x").status == "insert"
    assert dispatcher.model.text == "hellxo"

    unbound = dispatcher.dispatch_key("F5")
    assert not unbound.consumed
    assert unbound.status == "unbound"
    assert unbound.snapshot is dispatcher.snapshot


def test_handle_all_returns_last_result() -> None:
    dispatcher = make_dispatcher("", selection=Caret(0))

    result = dispatcher.handle_all(InsertText(char) for char in "hey")

    assert result.snapshot.model.text == "hey"
    assert result.snapshot.model.version == 3
    assert dispatcher.handle_all([]).status == "empty"


def test_unknown_events_are_rejected() -> None:
    dispatcher = make_dispatcher()

    with pytest.raises(TypeError):
        dispatcher.handle(object())  # type: ignore[arg-type]


def test_events_from_subscribers_are_applied_after_publishing() -> None:
    dispatcher = make_dispatcher(selection=Caret(5))
    generations: List[int] = []
    results: List[DispatchResult] = []

    def move_once(snapshot: EditorSnapshot) -> None:
        if not results:
            results.append(dispatcher.handle(MoveLeft()))

    dispatcher.subscribe(EDIT_EVENT, move_once)
    dispatcher.subscribe(SNAPSHOT_EVENT, lambda snapshot: generations.append(snapshot.generation))

    result = dispatcher.handle(InsertText("!"))

    assert results[0].status == "queued"
    assert result.snapshot.generation == 1
    assert generations == [1, 2]
    assert generations[-1] == dispatcher.snapshot.generation
    assert dispatcher.model.text == "hello!"
    assert dispatcher.selection == Caret(5)


def test_move_down_is_capped_at_canvas_height() -> None:
    dispatcher = make_dispatcher("\n".join("a" * 10), selection=Caret(14), height=100)
    dispatcher.handle(Scroll(100))

    dispatcher.handle(MoveDown())

    # Row 7 looks one row down, but the lookup y stops at 100 (row 5).
    assert dispatcher.selection == Caret(10)
