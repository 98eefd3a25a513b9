"""Line editor configuration.

The word modifier (the key held for word-wise movement and deletion) is
resolved once here: an explicit value wins, then ``$PI_READLINE_WORD_MODIFIER``,
then the platform default (Option/Alt on macOS, Control elsewhere).
"""

from __future__ import annotations

import enum
import os
import sys
from dataclasses import dataclass, field
from typing import Callable, Iterable

WORD_MODIFIER_ENV = "PI_READLINE_WORD_MODIFIER"
WRITE_LOG_ENV = "PI_READLINE_WRITE_LOG"

StyleFn = Callable[[str], str]


class WordModifier(enum.Enum):
    CTRL = "ctrl"
    ALT = "alt"


def resolve_word_modifier(
    value: WordModifier | str | None = None,
    platform: str | None = None,
) -> WordModifier:
    if isinstance(value, WordModifier):
        return value
    if value is None:
        value = os.environ.get(WORD_MODIFIER_ENV) or None
    if value is not None:
        try:
            return WordModifier(value.strip().lower())
        except ValueError:
            raise ValueError(
                f"word modifier must be 'ctrl' or 'alt', got {value!r}"
            ) from None

    platform = platform or sys.platform
    return WordModifier.ALT if platform == "darwin" else WordModifier.CTRL


@dataclass(frozen=True)
class EditorConfig:
    """Settings for one line-editing session."""

    style: StyleFn | None = None
    secret: bool = False
    mask: str | None = None
    word_modifier: WordModifier = field(default_factory=resolve_word_modifier)
    candidates: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.secret and self.mask is None:
            raise ValueError("a mask character is required for secret input")
        if self.mask is not None and len(self.mask) != 1:
            raise ValueError(f"mask must be a single character, got {self.mask!r}")
        object.__setattr__(
            self, "word_modifier", resolve_word_modifier(self.word_modifier)
        )
        # Candidates are fixed for the session, whatever iterable was passed.
        object.__setattr__(self, "candidates", tuple(self.candidates))

    @classmethod
    def create(
        cls,
        *,
        style: StyleFn | None = None,
        secret: bool = False,
        mask: str | None = None,
        candidates: Iterable[str] = (),
        word_modifier: WordModifier | str | None = None,
    ) -> EditorConfig:
        return cls(
            style=style,
            secret=secret,
            mask=mask,
            word_modifier=resolve_word_modifier(word_modifier),
            candidates=tuple(candidates),
        )
