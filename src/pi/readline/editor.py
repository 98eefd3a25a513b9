"""Interactive single-line editor.

``LineEditor`` pulls key events one at a time, applies each to a
:class:`LineBuffer`, and redraws only what changed before reading the next
key. It returns the finished line on Enter, or ``None`` once the cancel
event is set.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Iterable

from pi.readline.autocomplete import Direction, cycle
from pi.readline.config import EditorConfig, StyleFn, WordModifier
from pi.readline.keybindings import EditorAction, EditorKeybindings
from pi.readline.keys import KeyEvent
from pi.readline.line_buffer import LineBuffer
from pi.readline.render import LineRenderer
from pi.readline.terminal import KeyEventSource, TerminalWriter

logger = logging.getLogger(__name__)


class LineEditor:
    """One line-editing session.

    *source* supplies key events and *writer* receives the redraws; pass the
    same object for both when it implements both protocols. An editor reads
    a single line; create a new one for the next line.
    """

    def __init__(
        self,
        source: KeyEventSource,
        config: EditorConfig | None = None,
        *,
        writer: TerminalWriter | None = None,
    ) -> None:
        self.config = config or EditorConfig()
        self._source = source
        self._buffer = LineBuffer()
        self._renderer = LineRenderer(
            writer if writer is not None else source,  # type: ignore[arg-type]
            style=self.config.style,
            mask=self.config.mask if self.config.secret else None,
        )
        self._keybindings = EditorKeybindings(
            self.config.word_modifier, completion=bool(self.config.candidates)
        )
        self._handlers: dict[EditorAction, Callable[[KeyEvent], None]] = {
            "completeForward": lambda _: self._complete(Direction.FORWARD),
            "completeBackward": lambda _: self._complete(Direction.BACKWARD),
            "deleteWordBackward": lambda _: self._delete_backward(
                self._word_steps(-1)
            ),
            "deleteCharBackward": lambda _: self._delete_backward(
                min(1, self._buffer.cursor)
            ),
            "deleteWordForward": lambda _: self._delete_forward(self._word_steps(1)),
            "deleteCharForward": lambda _: self._delete_forward(
                min(1, len(self._buffer) - self._buffer.cursor)
            ),
            "cursorLeft": lambda _: self._move(-min(1, self._buffer.cursor)),
            "cursorRight": lambda _: self._move(
                min(1, len(self._buffer) - self._buffer.cursor)
            ),
            "cursorLineStart": lambda _: self._move(-self._buffer.cursor),
            "cursorLineEnd": lambda _: self._move(
                len(self._buffer) - self._buffer.cursor
            ),
            "cursorWordLeft": lambda _: self._move(-self._word_steps(-1)),
            "cursorWordRight": lambda _: self._move(self._word_steps(1)),
            "insertChar": self._insert,
        }

    @property
    def buffer(self) -> LineBuffer:
        return self._buffer

    async def read_line(self, cancel: asyncio.Event | None = None) -> str | None:
        """Edit until Enter and return the line, or ``None`` if cancelled."""
        logger.debug(
            "read_line started (secret=%s, candidates=%d, word modifier=%s)",
            self.config.secret,
            len(self.config.candidates),
            self.config.word_modifier.value,
        )
        while True:
            if cancel is not None and cancel.is_set():
                logger.debug("read_line cancelled")
                return None

            event = await self._source.next_key_event(True, cancel)

            if cancel is not None and cancel.is_set():
                logger.debug("read_line cancelled")
                return None
            if event is None:
                continue

            if self.handle_key(event):
                logger.debug("read_line finished (%d chars)", len(self._buffer))
                return self._buffer.text

    def handle_key(self, event: KeyEvent) -> bool:
        """Apply one key event. Returns ``True`` when the line is submitted."""
        action = self._keybindings.resolve(event)
        if action is None:
            return False
        if action == "submit":
            return True
        self._handlers[action](event)
        return False

    # -- actions ------------------------------------------------------------

    def _word_steps(self, direction: int) -> int:
        # Masked text has no visible words, so word operations run to the edge.
        if self.config.secret:
            if direction < 0:
                return self._buffer.cursor
            return len(self._buffer) - self._buffer.cursor
        return self._buffer.word_boundary_distance(direction)

    def _insert(self, event: KeyEvent) -> None:
        for ch in event.char or "":
            self._buffer.insert(ch)
            self._renderer.inserted(self._buffer, ch)

    def _delete_backward(self, steps: int) -> None:
        if steps <= 0:
            return
        cursor = self._buffer.cursor
        removed = self._buffer.text[cursor - steps : cursor]
        self._buffer.delete_backward(steps)
        self._renderer.deleted_backward(self._buffer, removed)

    def _delete_forward(self, steps: int) -> None:
        if steps <= 0:
            return
        cursor = self._buffer.cursor
        removed = self._buffer.text[cursor : cursor + steps]
        self._buffer.delete_forward(steps)
        self._renderer.deleted_forward(self._buffer, removed)

    def _move(self, steps: int) -> None:
        if steps == 0:
            return
        cursor = self._buffer.cursor
        text = self._buffer.text
        if steps < 0:
            passed = text[cursor + steps : cursor]
        else:
            passed = text[cursor : cursor + steps]
        self._buffer.move(steps)
        self._renderer.moved(passed, steps)

    def _complete(self, direction: Direction) -> None:
        old_text = self._buffer.text
        suggestion = cycle(self.config.candidates, old_text, direction)
        if not suggestion:
            logger.debug("no completion for %d-char input", len(old_text))
            return
        old_cursor = self._buffer.cursor
        self._buffer.replace(suggestion)
        self._renderer.replaced(old_text, old_cursor, suggestion)


async def read_line(
    terminal: KeyEventSource,
    *,
    style: StyleFn | None = None,
    secret: bool = False,
    mask: str | None = None,
    candidates: Iterable[str] = (),
    cancel: asyncio.Event | None = None,
    word_modifier: WordModifier | str | None = None,
    writer: TerminalWriter | None = None,
) -> str | None:
    """Read one line from *terminal*.

    Returns the entered text when Enter is pressed and ``None`` when *cancel*
    is set first. ``mask`` is required when ``secret`` is true.
    """
    config = EditorConfig.create(
        style=style,
        secret=secret,
        mask=mask,
        candidates=candidates,
        word_modifier=word_modifier,
    )
    return await LineEditor(terminal, config, writer=writer).read_line(cancel)
