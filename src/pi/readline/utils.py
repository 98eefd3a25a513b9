"""Terminal text utilities: width measurement and character classification."""

from __future__ import annotations

import wcwidth as _wcwidth

# ---------------------------------------------------------------------------
# Width measurement
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _char_width(ch: str) -> int:
    cached = _width_cache.get(ch)
    if cached is not None:
        return cached
    width = _wcwidth.wcwidth(ch)
    # Non-printable characters report -1; they occupy no column once echoed.
    width = max(width, 0)
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[ch] = width
    return width


def visible_width(text: str) -> int:
    """Return the number of terminal columns *text* occupies."""
    if text.isascii() and text.isprintable():
        return len(text)
    return sum(_char_width(ch) for ch in text)


# ---------------------------------------------------------------------------
# Character classification
# ---------------------------------------------------------------------------


def is_whitespace_char(char: str) -> bool:
    """Return ``True`` if *char* is a whitespace character."""
    return char.isspace()


def is_control_char(char: str) -> bool:
    """Return ``True`` for C0/C1 control characters and DEL."""
    code = ord(char)
    return code < 32 or code == 0x7F or 0x80 <= code <= 0x9F
