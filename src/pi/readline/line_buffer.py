"""Editable single-line buffer with cursor tracking."""

from __future__ import annotations

from pi.readline.utils import is_whitespace_char


class LineBuffer:
    """Characters being edited plus the cursor index into them.

    The cursor always satisfies ``0 <= cursor <= len(buffer)``. Step counts
    passed to the delete and move methods are expected to be clamped by the
    caller; :meth:`word_boundary_distance` only ever returns in-range counts.
    """

    def __init__(self) -> None:
        self._chars: list[str] = []
        self._cursor: int = 0

    def __len__(self) -> int:
        return len(self._chars)

    @property
    def text(self) -> str:
        return "".join(self._chars)

    @property
    def cursor(self) -> int:
        return self._cursor

    def tail(self) -> str:
        """Characters from the cursor to the end of the buffer."""
        return "".join(self._chars[self._cursor :])

    def insert(self, ch: str) -> None:
        """Insert one character at the cursor and advance past it."""
        self._chars.insert(self._cursor, ch)
        self._cursor += 1

    def delete_backward(self, n: int = 1) -> None:
        """Remove the *n* characters ending at the cursor."""
        if n <= 0:
            return
        del self._chars[self._cursor - n : self._cursor]
        self._cursor -= n

    def delete_forward(self, n: int = 1) -> None:
        """Remove the *n* characters starting at the cursor."""
        if n <= 0:
            return
        del self._chars[self._cursor : self._cursor + n]

    def move(self, n: int) -> None:
        """Shift the cursor by *n* (negative moves left)."""
        self._cursor += n

    def replace(self, text: str) -> None:
        """Replace the whole content and put the cursor at the end."""
        self._chars = list(text)
        self._cursor = len(self._chars)

    def word_boundary_distance(self, direction: int) -> int:
        """Steps from the cursor to the nearest word boundary.

        *direction* is ``-1`` (left) or ``1`` (right). Leading whitespace is
        skipped, then one run of non-whitespace is consumed; the walk stops at
        the far edge of that run or at either end of the buffer.
        """
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or 1, got {direction!r}")

        pos = self._cursor
        steps = 0
        in_word = False

        while True:
            if direction < 0:
                if pos == 0:
                    break
                ch = self._chars[pos - 1]
            else:
                if pos == len(self._chars):
                    break
                ch = self._chars[pos]

            if is_whitespace_char(ch):
                if in_word:
                    break
            else:
                in_word = True

            pos += direction
            steps += 1

        return steps
