"""Key events and raw terminal input decoding.

``KeyEvent`` is the decoded form the line editor consumes. ``parse_key_event``
turns one complete raw input sequence (legacy xterm sequences, the kitty
keyboard protocol, ``ESC``-prefixed Alt chords and C0 control characters)
into a ``KeyEvent``. ``split_sequences`` cuts a chunk of stdin text into
complete sequences so partial escape sequences are never misread as keys.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pi.readline.utils import is_control_char

ESC = "\x1b"

# ---------------------------------------------------------------------------
# Key names
# ---------------------------------------------------------------------------


class Key:
    """Named key constants."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    insert = "insert"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"


MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

LOCK_MASK = 64 + 128


@dataclass(frozen=True)
class KeyEvent:
    """A decoded key press.

    ``key`` is a name from :class:`Key` or, for character keys, the
    lowercase character itself. ``char`` carries the literal text the key
    would type and is ``None`` for non-printing keys and Control/Alt chords.
    """

    key: str
    char: str | None = None
    shift: bool = False
    ctrl: bool = False
    alt: bool = False

    @classmethod
    def of_char(cls, ch: str) -> KeyEvent:
        """Event for typing the printable character *ch*."""
        if ch == " ":
            return cls(Key.space, " ")
        shift = ch.isalpha() and ch.isupper()
        return cls(ch.lower(), ch, shift=shift)


# ---------------------------------------------------------------------------
# Sequence tables
# ---------------------------------------------------------------------------

LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": Key.up,
    "\x1b[B": Key.down,
    "\x1b[C": Key.right,
    "\x1b[D": Key.left,
    "\x1b[H": Key.home,
    "\x1b[F": Key.end,
    "\x1bOA": Key.up,
    "\x1bOB": Key.down,
    "\x1bOC": Key.right,
    "\x1bOD": Key.left,
    "\x1bOH": Key.home,
    "\x1bOF": Key.end,
    "\x1b[1~": Key.home,
    "\x1b[4~": Key.end,
    "\x1b[7~": Key.home,
    "\x1b[8~": Key.end,
    "\x1b[2~": Key.insert,
    "\x1b[3~": Key.delete,
    "\x1b[5~": Key.page_up,
    "\x1b[6~": Key.page_down,
}

_LETTER_KEYS: dict[str, str] = {
    "A": Key.up,
    "B": Key.down,
    "C": Key.right,
    "D": Key.left,
    "H": Key.home,
    "F": Key.end,
}

_TILDE_KEYS: dict[int, str] = {
    1: Key.home,
    2: Key.insert,
    3: Key.delete,
    4: Key.end,
    5: Key.page_up,
    6: Key.page_down,
    7: Key.home,
    8: Key.end,
}

CODEPOINTS: dict[int, str] = {
    27: Key.escape,
    9: Key.tab,
    13: Key.enter,
    32: Key.space,
    127: Key.backspace,
    57414: Key.enter,  # keypad enter
}

# Kitty functional keys that are not plain codepoints
_KITTY_FUNCTIONAL: dict[int, str] = {
    57417: Key.left,
    57418: Key.right,
    57419: Key.up,
    57420: Key.down,
    57423: Key.home,
    57424: Key.end,
    57426: Key.delete,
}

# CSI u format: \x1b[<codepoint>(:<shifted>(:<base>))?(;<modifier>(:<event_type>))?u
_KITTY_CSI_U_RE = re.compile(
    r"^\x1b\[(\d+)(?::(\d*)(?::(\d+))?)?(?:;(\d+)(?::(\d+))?)?u$"
)

# Modified letter keys: \x1b[1;<modifier>(:<event_type>)?[ABCDHF]
_MODIFIED_LETTER_RE = re.compile(r"^\x1b\[1;(\d+)(?::(\d+))?([ABCDHF])$")

# Modified tilde keys: \x1b[<number>;<modifier>(:<event_type>)?~
_MODIFIED_TILDE_RE = re.compile(r"^\x1b\[(\d+);(\d+)(?::(\d+))?~$")


def _decode_modifier(raw: int) -> tuple[bool, bool, bool]:
    """Return ``(shift, ctrl, alt)`` for an xterm/kitty modifier parameter."""
    mod = (raw - 1) & ~LOCK_MASK
    return (
        bool(mod & MODIFIERS["shift"]),
        bool(mod & MODIFIERS["ctrl"]),
        bool(mod & MODIFIERS["alt"]),
    )


def _from_codepoint(
    cp: int, shifted: int | None, shift: bool, ctrl: bool, alt: bool
) -> KeyEvent | None:
    name = CODEPOINTS.get(cp) or _KITTY_FUNCTIONAL.get(cp)
    if name is not None:
        char = " " if name == Key.space and not (ctrl or alt) else None
        return KeyEvent(name, char, shift=shift, ctrl=ctrl, alt=alt)

    if not 0 < cp <= 0x10FFFF:
        return None
    ch = chr(cp)
    if not ch.isprintable():
        return None
    char = None
    if not ctrl and not alt:
        if shift and shifted and 0 < shifted <= 0x10FFFF:
            char = chr(shifted)
        else:
            char = ch.upper() if shift and ch.isalpha() else ch
    return KeyEvent(ch.lower(), char, shift=shift, ctrl=ctrl, alt=alt)


# ---------------------------------------------------------------------------
# parse_key_event
# ---------------------------------------------------------------------------


def parse_key_event(data: str) -> KeyEvent | None:  # noqa: C901
    """Decode one complete raw input sequence into a :class:`KeyEvent`.

    Returns ``None`` for empty input, key-release events and sequences that
    do not describe a key the editor knows about.
    """
    if not data:
        return None

    # --- Kitty CSI u ---
    m = _KITTY_CSI_U_RE.match(data)
    if m:
        event_type = int(m.group(5)) if m.group(5) else 1
        if event_type == 3:
            return None
        modifier = int(m.group(4)) if m.group(4) else 1
        shift, ctrl, alt = _decode_modifier(modifier)
        shifted = int(m.group(2)) if m.group(2) else None
        return _from_codepoint(int(m.group(1)), shifted, shift, ctrl, alt)

    # --- Modified arrows / Home / End ---
    m = _MODIFIED_LETTER_RE.match(data)
    if m:
        if m.group(2) == "3":
            return None
        shift, ctrl, alt = _decode_modifier(int(m.group(1)))
        return KeyEvent(_LETTER_KEYS[m.group(3)], shift=shift, ctrl=ctrl, alt=alt)

    # --- Modified Delete / Insert / paging keys ---
    m = _MODIFIED_TILDE_RE.match(data)
    if m:
        name = _TILDE_KEYS.get(int(m.group(1)))
        if name is None or m.group(3) == "3":
            return None
        shift, ctrl, alt = _decode_modifier(int(m.group(2)))
        return KeyEvent(name, shift=shift, ctrl=ctrl, alt=alt)

    # --- Unmodified legacy sequences ---
    name = LEGACY_KEY_SEQUENCES.get(data)
    if name is not None:
        return KeyEvent(name)

    if data == "\x1b[Z":
        return KeyEvent(Key.tab, shift=True)

    # --- Simple single-byte keys ---
    if data == ESC:
        return KeyEvent(Key.escape)
    if data in ("\r", "\n"):
        return KeyEvent(Key.enter)
    if data == "\t":
        return KeyEvent(Key.tab)
    if data == "\x7f":
        return KeyEvent(Key.backspace)
    if data == "\x08":
        # Many terminals send ^H for Ctrl+Backspace
        return KeyEvent(Key.backspace, ctrl=True)
    if data == "\x00":
        return KeyEvent(Key.space, ctrl=True)

    # --- Ctrl + letter (0x01 - 0x1a) ---
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return KeyEvent(chr(ord(data) + ord("a") - 1), ctrl=True)

    # --- Alt + key (ESC prefix) ---
    if len(data) == 2 and data[0] == ESC:
        inner = parse_key_event(data[1])
        if inner is None:
            return None
        return KeyEvent(inner.key, shift=inner.shift, ctrl=inner.ctrl, alt=True)

    # --- Plain printable character ---
    if len(data) == 1 and not is_control_char(data) and data.isprintable():
        return KeyEvent.of_char(data)

    return None


# ---------------------------------------------------------------------------
# Sequence splitting
# ---------------------------------------------------------------------------


def _is_complete_sequence(data: str) -> str:
    """Return 'complete', 'incomplete' or 'not-escape' for *data*."""
    if not data.startswith(ESC):
        return "not-escape"

    if len(data) == 1:
        return "incomplete"

    after_esc = data[1:]

    # CSI: parameters and intermediates until a final byte in 0x40-0x7E
    if after_esc.startswith("["):
        if len(data) < 3:
            return "incomplete"
        return "complete" if 0x40 <= ord(data[-1]) <= 0x7E else "incomplete"

    # SS3: ESC O <letter>
    if after_esc.startswith("O"):
        return "complete" if len(after_esc) >= 2 else "incomplete"

    # Meta key: ESC followed by a single character
    return "complete"


def split_sequences(buffer: str) -> tuple[list[str], str]:
    """Split accumulated input into complete sequences.

    Returns ``(sequences, remainder)`` where *remainder* is a trailing
    escape sequence that still needs more data.
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        remaining = buffer[pos:]

        if not remaining.startswith(ESC):
            sequences.append(remaining[0])
            pos += 1
            continue

        seq_end = 1
        while seq_end <= len(remaining):
            if _is_complete_sequence(remaining[:seq_end]) == "complete":
                break
            seq_end += 1
        else:
            return sequences, remaining

        sequences.append(remaining[:seq_end])
        pos += seq_end

    return sequences, ""
