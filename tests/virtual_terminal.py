"""Virtual terminal for testing -- implements both terminal protocols in-memory.

``VirtualTerminal`` replays a script of key events and records every
primitive call the editor makes. It also keeps a simulated single screen
line so tests can check that what is displayed matches the buffer.
"""

from __future__ import annotations

import asyncio
from collections import deque
from typing import Callable, Iterable

from pi.readline.keys import KeyEvent


class VirtualTerminal:
    """In-memory terminal that records all writes for test inspection.

    Parameters
    ----------
    events:
        Key events handed out, in order, by ``next_key_event``. ``None``
        entries are returned as-is to exercise transient empty reads.
    """

    def __init__(self, events: Iterable[KeyEvent | None] = ()) -> None:
        self._events: deque[KeyEvent | None] = deque(events)
        self.calls: list[tuple[str, object]] = []
        self.reads = 0
        self.echo_flags: list[bool] = []
        self.on_read: Callable[[int], None] | None = None
        self._line: list[str] = []
        self._column = 0

    # -- scripting ----------------------------------------------------------

    def feed(self, *events: KeyEvent | None) -> None:
        self._events.extend(events)

    def type_text(self, text: str) -> None:
        self.feed(*(KeyEvent.of_char(ch) for ch in text))

    # -- KeyEventSource -----------------------------------------------------

    async def next_key_event(
        self,
        echo_suppressed: bool,
        cancel: asyncio.Event | None = None,
    ) -> KeyEvent | None:
        self.reads += 1
        self.echo_flags.append(echo_suppressed)
        if self.on_read is not None:
            self.on_read(self.reads)
        if cancel is not None and cancel.is_set():
            return None
        if not self._events:
            raise RuntimeError("VirtualTerminal ran out of scripted key events")
        return self._events.popleft()

    # -- TerminalWriter -----------------------------------------------------

    def move_cursor_left(self, n: int = 1) -> None:
        self.calls.append(("left", n))
        self._column = max(0, self._column - n)

    def move_cursor_right(self, n: int = 1) -> None:
        self.calls.append(("right", n))
        self._column += n

    def write_text(self, text: str, style: Callable[[str], str] | None = None) -> None:
        self.calls.append(("write", style(text) if style else text))
        for ch in text:
            if self._column < len(self._line):
                self._line[self._column] = ch
            else:
                self._line.extend(" " * (self._column - len(self._line)))
                self._line.append(ch)
            self._column += 1

    # -- Test helpers -------------------------------------------------------

    @property
    def screen(self) -> str:
        """The simulated line with trailing blanks removed."""
        return "".join(self._line).rstrip(" ")

    @property
    def column(self) -> int:
        return self._column

    @property
    def output(self) -> str:
        """Everything written as text, concatenated."""
        return "".join(str(arg) for kind, arg in self.calls if kind == "write")

    @property
    def write_count(self) -> int:
        return len(self.calls)

    def clear_calls(self) -> None:
        self.calls.clear()
