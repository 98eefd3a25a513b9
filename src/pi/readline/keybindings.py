"""Key dispatch table for the line editor.

Rules are checked in order and the first one that matches a key event
decides the action. Everything platform dependent goes through a single
word-modifier predicate built from :class:`~pi.readline.config.WordModifier`.
"""

from __future__ import annotations

from typing import Callable, Literal

from pi.readline.config import WordModifier
from pi.readline.keys import Key, KeyEvent
from pi.readline.utils import is_control_char

EditorAction = Literal[
    "submit",
    "completeForward",
    "completeBackward",
    "deleteWordBackward",
    "deleteCharBackward",
    "deleteWordForward",
    "deleteCharForward",
    "cursorLeft",
    "cursorRight",
    "cursorLineStart",
    "cursorLineEnd",
    "cursorWordLeft",
    "cursorWordRight",
    "insertChar",
]

WORD_LEFT_KEY = "b"
WORD_RIGHT_KEY = "f"

Predicate = Callable[[KeyEvent], bool]


def word_modifier_held(modifier: WordModifier) -> Predicate:
    """Predicate that is true when the platform's word modifier is held."""
    if modifier is WordModifier.ALT:
        return lambda event: event.alt
    return lambda event: event.ctrl


def _is_key(name: str) -> Predicate:
    return lambda event: event.key == name


def _is_printable(event: KeyEvent) -> bool:
    return bool(event.char) and not any(is_control_char(ch) for ch in event.char)


class EditorKeybindings:
    """Ordered ``(action, predicate)`` rules for one editing session."""

    def __init__(self, word_modifier: WordModifier, *, completion: bool = False) -> None:
        word = word_modifier_held(word_modifier)
        tab = _is_key(Key.tab)
        backspace = _is_key(Key.backspace)
        delete = _is_key(Key.delete)

        self.word_modifier = word_modifier
        self._rules: list[tuple[EditorAction, Predicate]] = [
            ("submit", _is_key(Key.enter)),
            ("completeForward", lambda e: completion and tab(e) and not e.shift),
            ("completeBackward", lambda e: completion and tab(e) and e.shift),
            ("deleteWordBackward", lambda e: backspace(e) and word(e)),
            ("deleteCharBackward", backspace),
            ("deleteWordForward", lambda e: delete(e) and word(e)),
            ("deleteCharForward", delete),
            ("cursorLeft", _is_key(Key.left)),
            ("cursorRight", _is_key(Key.right)),
            ("cursorLineStart", _is_key(Key.home)),
            ("cursorLineEnd", _is_key(Key.end)),
            ("cursorWordLeft", lambda e: e.key == WORD_LEFT_KEY and word(e)),
            ("cursorWordRight", lambda e: e.key == WORD_RIGHT_KEY and word(e)),
            ("insertChar", _is_printable),
        ]

    def resolve(self, event: KeyEvent) -> EditorAction | None:
        """Return the action for *event*, or ``None`` if it is ignored."""
        for action, predicate in self._rules:
            if predicate(event):
                return action
        return None
