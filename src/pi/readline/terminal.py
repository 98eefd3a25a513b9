"""Terminal abstraction for the line editor.

Defines the two protocols the editor talks to, ``KeyEventSource`` and
``TerminalWriter``, and ``ProcessTerminal``, a concrete implementation of
both backed by ``sys.stdin``/``sys.stdout`` in raw mode.
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
import sys
import termios
import tty
from typing import Protocol

from pi.readline.config import WRITE_LOG_ENV, StyleFn
from pi.readline.keys import KeyEvent, parse_key_event, split_sequences

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_CURSOR_LEFT_FMT = "\x1b[{}D"
_CURSOR_RIGHT_FMT = "\x1b[{}C"

_KITTY_QUERY = "\x1b[?u"
_KITTY_ENABLE = "\x1b[>1u"
_KITTY_DISABLE = "\x1b[<u"

_KITTY_RESPONSE_RE = re.compile(r"^\x1b\[\?(\d+)u$")

# A lone ESC is held this long in case the rest of a sequence follows.
_ESC_TIMEOUT = 0.01


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


class KeyEventSource(Protocol):
    """Supplies decoded key events to the editor."""

    async def next_key_event(
        self,
        echo_suppressed: bool,
        cancel: asyncio.Event | None = None,
    ) -> KeyEvent | None: ...


class TerminalWriter(Protocol):
    """Relative cursor movement and styled text output."""

    def move_cursor_left(self, n: int = 1) -> None: ...

    def move_cursor_right(self, n: int = 1) -> None: ...

    def write_text(self, text: str, style: StyleFn | None = None) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Key source and writer backed by the process's controlling terminal.

    ``start`` puts stdin into raw mode, registers an asyncio reader that
    decodes input into :class:`KeyEvent` objects and queries the Kitty
    keyboard protocol, enabling it if the terminal answers; ``stop``
    restores the terminal. Use as ``async with ProcessTerminal() as term``.
    """

    def __init__(self) -> None:
        self._events: asyncio.Queue[KeyEvent] = asyncio.Queue()
        self._pending: str = ""
        self._flush_handle: asyncio.TimerHandle | None = None
        self._original_termios: list | None = None
        self._reader_active: bool = False
        self._kitty_protocol_active: bool = False
        self._write_log_path: str = os.environ.get(WRITE_LOG_ENV, "")

    @property
    def kitty_protocol_active(self) -> bool:
        return self._kitty_protocol_active

    async def __aenter__(self) -> ProcessTerminal:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.stop()

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Enable raw mode and begin reading stdin."""
        fd = sys.stdin.fileno()
        self._original_termios = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            loop = asyncio.get_running_loop()
            loop.add_reader(fd, self._on_stdin_readable)
        except Exception:
            termios.tcsetattr(fd, termios.TCSADRAIN, self._original_termios)
            self._original_termios = None
            raise
        self._reader_active = True
        logger.debug("terminal started on fd %d", fd)

        self.write(_KITTY_QUERY)

    def stop(self) -> None:
        """Restore terminal state and stop reading stdin."""
        if self._flush_handle is not None:
            self._flush_handle.cancel()
            self._flush_handle = None

        if self._kitty_protocol_active:
            self.write(_KITTY_DISABLE)
            self._kitty_protocol_active = False

        fd = sys.stdin.fileno()
        if self._reader_active:
            try:
                asyncio.get_running_loop().remove_reader(fd)
            except RuntimeError:
                pass
            self._reader_active = False

        if self._original_termios is not None:
            termios.tcsetattr(fd, termios.TCSADRAIN, self._original_termios)
            self._original_termios = None
        logger.debug("terminal stopped")

    # -- KeyEventSource -----------------------------------------------------

    async def next_key_event(
        self,
        echo_suppressed: bool = True,
        cancel: asyncio.Event | None = None,
    ) -> KeyEvent | None:
        """Wait for the next key event.

        Returns ``None`` when *cancel* is set before a key arrives. Raw mode
        never echoes, so *echo_suppressed* needs no further action here.
        """
        if cancel is None:
            return await self._events.get()
        if cancel.is_set():
            return None

        get_task = asyncio.ensure_future(self._events.get())
        cancel_task = asyncio.ensure_future(cancel.wait())
        try:
            done, _ = await asyncio.wait(
                {get_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            cancel_task.cancel()
            if not get_task.done():
                get_task.cancel()

        if get_task in done:
            return get_task.result()
        return None

    # -- TerminalWriter -----------------------------------------------------

    def move_cursor_left(self, n: int = 1) -> None:
        if n > 0:
            self.write(_CURSOR_LEFT_FMT.format(n))

    def move_cursor_right(self, n: int = 1) -> None:
        if n > 0:
            self.write(_CURSOR_RIGHT_FMT.format(n))

    def write_text(self, text: str, style: StyleFn | None = None) -> None:
        if text:
            self.write(style(text) if style else text)

    def write(self, data: str) -> None:
        """Write data to stdout and optionally to the write log."""
        try:
            sys.stdout.write(data)
            sys.stdout.flush()
        except OSError:
            pass

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                pass

    # -- private: stdin reading --------------------------------------------

    def _on_stdin_readable(self) -> None:
        try:
            raw = os.read(sys.stdin.fileno(), 4096)
        except OSError:
            return
        if not raw:
            return
        self.feed(raw.decode("utf-8", errors="replace"))

    def feed(self, data: str) -> None:
        """Decode raw input text and queue the resulting key events."""
        if self._flush_handle is not None:
            self._flush_handle.cancel()
            self._flush_handle = None

        sequences, self._pending = split_sequences(self._pending + data)
        for sequence in sequences:
            self._queue_sequence(sequence)

        if self._pending:
            loop = asyncio.get_running_loop()
            self._flush_handle = loop.call_later(_ESC_TIMEOUT, self._flush_pending)

    def _flush_pending(self) -> None:
        self._flush_handle = None
        pending, self._pending = self._pending, ""
        if pending:
            self._queue_sequence(pending)

    def _queue_sequence(self, sequence: str) -> None:
        if _KITTY_RESPONSE_RE.match(sequence):
            self._kitty_protocol_active = True
            logger.debug("kitty keyboard protocol supported, enabling")
            self.write(_KITTY_ENABLE)
            return

        event = parse_key_event(sequence)
        if event is None:
            logger.debug("ignoring unrecognised input sequence %r", sequence)
            return
        self._events.put_nowait(event)
