"""Minimal terminal updates for line buffer edits.

Each method is called right after the matching :class:`LineBuffer` change
and issues only the relative moves and partial writes needed to bring the
screen back in step with the buffer. Distances are measured in terminal
columns of the rendered glyphs.
"""

from __future__ import annotations

from pi.readline.config import StyleFn
from pi.readline.line_buffer import LineBuffer
from pi.readline.terminal import TerminalWriter
from pi.readline.utils import visible_width


class LineRenderer:
    def __init__(
        self,
        writer: TerminalWriter,
        *,
        style: StyleFn | None = None,
        mask: str | None = None,
    ) -> None:
        self._writer = writer
        self._style = style
        self._mask = mask

    def glyphs(self, text: str) -> str:
        """What *text* looks like on screen: itself, or one mask per character."""
        if self._mask is None:
            return text
        return self._mask * len(text)

    def width(self, text: str) -> int:
        return visible_width(self.glyphs(text))

    # -- primitives ---------------------------------------------------------

    def _left(self, columns: int) -> None:
        if columns > 0:
            self._writer.move_cursor_left(columns)

    def _right(self, columns: int) -> None:
        if columns > 0:
            self._writer.move_cursor_right(columns)

    def _write(self, text: str) -> None:
        if text:
            self._writer.write_text(self.glyphs(text), self._style)

    def _blank(self, columns: int) -> None:
        if columns > 0:
            self._writer.write_text(" " * columns)

    # -- edits --------------------------------------------------------------

    def inserted(self, buffer: LineBuffer, ch: str) -> None:
        """Redraw after *ch* was inserted just before the cursor."""
        tail = buffer.tail()
        self._write(ch + tail)
        self._left(self.width(tail))

    def deleted_backward(self, buffer: LineBuffer, removed: str) -> None:
        """Redraw after *removed* was deleted from just before the cursor."""
        tail = buffer.tail()
        gap = self.width(removed)
        self._left(gap)
        self._write(tail)
        self._blank(gap)
        self._left(self.width(tail) + gap)

    def deleted_forward(self, buffer: LineBuffer, removed: str) -> None:
        """Redraw after *removed* was deleted from just after the cursor."""
        tail = buffer.tail()
        gap = self.width(removed)
        self._write(tail)
        self._blank(gap)
        self._left(self.width(tail) + gap)

    def moved(self, passed: str, direction: int) -> None:
        """Move the terminal cursor over *passed* characters."""
        if direction < 0:
            self._left(self.width(passed))
        else:
            self._right(self.width(passed))

    def replaced(self, old_text: str, old_cursor: int, new_text: str) -> None:
        """Redraw the whole line after its content was swapped out."""
        self._left(self.width(old_text[:old_cursor]))
        self._write(new_text)
        leftover = self.width(old_text) - self.width(new_text)
        if leftover > 0:
            self._blank(leftover)
            self._left(leftover)
