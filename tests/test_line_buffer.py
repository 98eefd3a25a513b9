"""Tests for pi.readline.line_buffer.LineBuffer."""

from __future__ import annotations

import pytest

from pi.readline.line_buffer import LineBuffer


def make_buffer(text: str, cursor: int | None = None) -> LineBuffer:
    buf = LineBuffer()
    for ch in text:
        buf.insert(ch)
    if cursor is not None:
        buf.move(cursor - len(buf))
    return buf


class TestLineBufferInitialState:
    def test_starts_empty(self) -> None:
        buf = LineBuffer()
        assert buf.text == ""
        assert buf.cursor == 0
        assert len(buf) == 0

    def test_tail_of_empty_buffer(self) -> None:
        assert LineBuffer().tail() == ""


class TestLineBufferInsert:
    """insert() puts one character at the cursor and advances it."""

    def test_insertions_advance_cursor(self) -> None:
        buf = LineBuffer()
        for i, ch in enumerate("hello world", start=1):
            buf.insert(ch)
            assert len(buf) == i
            assert buf.cursor == i
        assert buf.text == "hello world"

    def test_insert_in_middle(self) -> None:
        buf = make_buffer("ac", cursor=1)
        buf.insert("b")
        assert buf.text == "abc"
        assert buf.cursor == 2

    def test_insert_at_start(self) -> None:
        buf = make_buffer("bc", cursor=0)
        buf.insert("a")
        assert buf.text == "abc"
        assert buf.cursor == 1
        assert buf.tail() == "bc"


class TestLineBufferDelete:
    def test_delete_backward_one(self) -> None:
        buf = make_buffer("abc")
        buf.delete_backward()
        assert buf.text == "ab"
        assert buf.cursor == 2

    def test_delete_backward_many_from_middle(self) -> None:
        buf = make_buffer("abcdef", cursor=4)
        buf.delete_backward(3)
        assert buf.text == "aef"
        assert buf.cursor == 1

    def test_delete_forward_keeps_cursor(self) -> None:
        buf = make_buffer("abcdef", cursor=1)
        buf.delete_forward(2)
        assert buf.text == "adef"
        assert buf.cursor == 1

    def test_zero_step_deletes_are_noops(self) -> None:
        buf = make_buffer("abc", cursor=1)
        buf.delete_backward(0)
        buf.delete_forward(0)
        assert buf.text == "abc"
        assert buf.cursor == 1


class TestLineBufferMoveAndReplace:
    def test_move_relative(self) -> None:
        buf = make_buffer("abc")
        buf.move(-2)
        assert buf.cursor == 1
        buf.move(1)
        assert buf.cursor == 2

    def test_replace_moves_cursor_to_end(self) -> None:
        buf = make_buffer("abc", cursor=0)
        buf.replace("gamma")
        assert buf.text == "gamma"
        assert buf.cursor == 5


class TestWordBoundaryDistance:
    """Word steps skip whitespace, then consume one non-whitespace run."""

    def test_left_from_end(self) -> None:
        buf = make_buffer("foo bar")
        assert buf.word_boundary_distance(-1) == 3

    def test_left_twice(self) -> None:
        buf = make_buffer("foo bar")
        buf.move(-buf.word_boundary_distance(-1))
        assert buf.cursor == 4
        assert buf.word_boundary_distance(-1) == 4

    def test_left_from_inside_word(self) -> None:
        buf = make_buffer("foo bar", cursor=5)
        assert buf.word_boundary_distance(-1) == 1

    def test_left_skips_trailing_whitespace(self) -> None:
        buf = make_buffer("foo   ")
        assert buf.word_boundary_distance(-1) == 6

    def test_right_from_start(self) -> None:
        buf = make_buffer("foo bar", cursor=0)
        assert buf.word_boundary_distance(1) == 3

    def test_right_skips_leading_whitespace(self) -> None:
        buf = make_buffer("foo bar", cursor=3)
        assert buf.word_boundary_distance(1) == 4

    def test_punctuation_is_part_of_a_word(self) -> None:
        buf = make_buffer("cd ../src")
        assert buf.word_boundary_distance(-1) == 6

    def test_tabs_count_as_whitespace(self) -> None:
        buf = make_buffer("a\tb")
        assert buf.word_boundary_distance(-1) == 1
        buf.move(-1)
        assert buf.word_boundary_distance(-1) == 2

    def test_zero_at_buffer_ends(self) -> None:
        buf = make_buffer("foo")
        assert buf.word_boundary_distance(1) == 0
        buf.move(-len(buf))
        assert buf.word_boundary_distance(-1) == 0

    def test_only_whitespace_runs_to_end(self) -> None:
        buf = make_buffer("   ", cursor=0)
        assert buf.word_boundary_distance(1) == 3

    @pytest.mark.parametrize("direction", [0, 2, -2])
    def test_invalid_direction_raises(self, direction: int) -> None:
        with pytest.raises(ValueError):
            make_buffer("foo").word_boundary_distance(direction)
