from __future__ import annotations

import pytest

from paragraph_engine.buffer import CharacterCategory, TextModel, categorize_code_point


def test_insert_clamps_and_returns_new_model() -> None:
    model = TextModel("abc")

    appended, position = model.insert(10, "X")
    prepended, front = model.insert(-2, "X")

    assert (appended.text, position) == ("abcX", 4)
    assert (prepended.text, front) == ("Xabc", 1)
    assert model.text == "abc"
    assert appended.version == model.version + 1


def test_empty_insert_is_a_no_op() -> None:
    model = TextModel("abc")

    same, position = model.insert(99, "")

    assert same is model
    assert position == 3


def test_delete_backward_and_forward() -> None:
    model = TextModel("abc")

    assert model.delete_backward(0) == (model, 0)
    assert model.delete_forward(3) == (model, 3)

    backward, position = model.delete_backward(2)
    assert (backward.text, position) == ("ac", 1)
    forward, position = model.delete_forward(0)
    assert (forward.text, position) == ("bc", 0)


def test_strip_sorts_and_clamps() -> None:
    model = TextModel("abcd")

    reversed_strip, position = model.strip(3, 1)
    assert (reversed_strip.text, position) == ("ad", 1)

    clamped, position = model.strip(-5, 2)
    assert (clamped.text, position) == ("cd", 0)

    same, position = model.strip(2, 2)
    assert same is model
    assert position == 2


def test_clamping_is_idempotent() -> None:
    model = TextModel("hello")

    for position in range(-5, 11):
        clamped = model.clamp_position(position)
        assert 0 <= clamped <= len(model)
        assert model.clamp_position(clamped) == clamped
    assert model.clamp_range((9, -3)) == (0, 5)
    assert model.clamp_range((4, 1)) == (1, 4)


def test_categories() -> None:
    assert categorize_code_point(ord("a")) is CharacterCategory.ALPHABET
    assert categorize_code_point(ord("Z")) is CharacterCategory.ALPHABET
    assert categorize_code_point(ord("7")) is CharacterCategory.NUMERIC
    assert categorize_code_point(ord(" ")) is CharacterCategory.OTHER
    assert categorize_code_point(ord("é")) is CharacterCategory.OTHER
    assert categorize_code_point(ord("漢")) is CharacterCategory.NON_ASCII


def test_word_runs_split_on_category_change() -> None:
    model = TextModel("ab12 cd")

    assert model.get_word_including_position(0) == (0, 2)
    assert model.get_word_including_position(2) == (2, 4)
    # Single-character run: equidistant, so the pair comes back reversed.
    span = model.get_word_including_position(4)
    assert span == (5, 4)
    assert tuple(sorted(span)) == (4, 5)


def test_word_orientation_follows_nearer_edge() -> None:
    model = TextModel("ab12 cd")

    assert model.get_word_including_position(1) == (2, 0)
    assert model.get_word_including_position(6) == (7, 5)
    assert model.get_word_including_position(-3) == (0, 2)


def test_word_detection_for_non_ascii_and_latin1() -> None:
    assert TextModel("漢字abc").get_word_including_position(0) == (0, 2)
    assert TextModel("café").get_word_including_position(0) == (0, 3)


def test_no_word_past_end_or_in_empty_text() -> None:
    assert TextModel("abc").get_word_including_position(3) is None
    assert TextModel("abc").get_word_including_position(50) is None
    assert TextModel("").get_word_including_position(0) is None


def test_equality_and_reads() -> None:
    model = TextModel.from_text("hello world")

    assert model == TextModel("hello world")
    assert model != TextModel("hello")
    assert model.substring(6) == "world"
    assert "".join(model.chunks()) == model.text
    with pytest.raises(TypeError):
        hash(model)


def test_deep_rope_is_rebalanced(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(TextModel, "MAX_ROPE_DEPTH", 8)
    model = TextModel()
    for _ in range(3000):
        model, _position = model.insert(len(model), "abcd")
        assert model.rope.depth <= 8

    assert model.text == "abcd" * 3000
    assert model.version == 3000
