from __future__ import annotations

from typing import Any, Dict, List, Sequence

import pytest

from paragraph_engine.buffer import TextModel
from paragraph_engine.layout import MonospaceLayoutEngine, RectHeightStyle, RectWidthStyle
from paragraph_engine.runtime import telemetry
from paragraph_engine.selection import (
    NO_SELECTION,
    Caret,
    CaretGeometry,
    Range,
    Rect,
    derive_selection_regions,
)

ENGINE = MonospaceLayoutEngine(char_width=10, line_height=20)


class EmptyLayout:
    """Layout that never reports any boxes."""

    def get_rects_for_range(
        self,
        begin: int,
        end: int,
        height_style: RectHeightStyle = RectHeightStyle.MAX,
        width_style: RectWidthStyle = RectWidthStyle.TIGHT,
    ) -> Sequence[Sequence[float]]:
        return []

    def get_glyph_position_at_coordinate(self, x: float, y: float) -> int:
        return 0

    def get_height(self) -> float:
        return 20.0


def derive(text: str, selection: Any, width: float = 1000) -> Any:
    model = TextModel(text)
    return derive_selection_regions(model, selection, ENGINE.layout(text, width))


def test_caret_uses_left_edge_of_next_glyph() -> None:
    assert derive("hello", Caret(0)).caret == CaretGeometry(0, 0, 20)
    assert derive("hello", Caret(2)).caret == CaretGeometry(20, 0, 20)
    assert derive("hello", Caret(2)).regions is None


def test_caret_at_end_uses_right_edge_of_last_glyph() -> None:
    assert derive("hello", Caret(5)).caret == CaretGeometry(50, 0, 20)


def test_caret_before_newline_sits_at_line_end() -> None:
    assert derive("ab\ncd", Caret(2)).caret == CaretGeometry(20, 0, 20)
    assert derive("ab\ncd", Caret(3)).caret == CaretGeometry(0, 20, 40)


def test_forward_and_reversed_range_carets() -> None:
    forward = derive("hello", Range(1, 4))
    backward = derive("hello", Range(4, 1))

    assert forward.regions == (Rect(10, 0, 40, 20),)
    assert backward.regions == forward.regions
    assert forward.caret == CaretGeometry(10, 0, 20)
    assert backward.caret == CaretGeometry(40, 0, 20)


def test_range_across_rows() -> None:
    forward = derive("abcdef", Range(1, 5), width=30)
    backward = derive("abcdef", Range(5, 1), width=30)

    assert forward.regions == (Rect(10, 0, 30, 20), Rect(0, 20, 20, 40))
    assert forward.caret == CaretGeometry(10, 0, 20)
    assert backward.caret == CaretGeometry(20, 20, 40)


def test_empty_document_caret_spans_layout_height() -> None:
    regions = derive("", Caret(0))

    assert regions.regions is None
    assert regions.caret == CaretGeometry(0, 0, 20)


def test_no_selection_has_no_geometry() -> None:
    assert derive("hello", NO_SELECTION) is None


def test_missing_rects_are_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    events: List[Dict[str, Any]] = []

    def fake_record(name: str, **kwargs: Any) -> None:
        events.append({"name": name, **kwargs})

    monkeypatch.setattr(telemetry, "record_event", fake_record)
    model = TextModel("hello")

    assert derive_selection_regions(model, Caret(2), EmptyLayout()) is None
    assert derive_selection_regions(model, Range(1, 3), EmptyLayout()) is None
    assert events and events[0]["name"] == "layout.inconsistent"
    assert events[0]["level"] == "warning"


def test_rect_from_sequence() -> None:
    assert Rect.from_sequence([1, 2, 3, 4, 99]) == Rect(1.0, 2.0, 3.0, 4.0)


def test_offsets_count_code_points() -> None:
    text = "a\U0001F600b"

    assert len(TextModel(text)) == 3
    assert derive(text, Caret(2)).caret == CaretGeometry(20, 0, 20)
    assert derive(text, Caret(3)).caret == CaretGeometry(30, 0, 20)
    assert derive(text, Range(1, 2)).regions == (Rect(10, 0, 20, 20),)
