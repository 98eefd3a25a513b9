"""Tab completion over a fixed candidate list.

Completion is stateless: every call works out where it is in the list from
the text currently in the buffer, never from a remembered position.
"""

from __future__ import annotations

import enum
from typing import Sequence


class Direction(enum.Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


def _neighbor(candidates: Sequence[str], index: int, direction: Direction) -> str:
    if direction is Direction.FORWARD:
        index += 1
    elif direction is Direction.BACKWARD:
        index -= 1
    else:
        raise ValueError(f"unknown completion direction: {direction!r}")
    return candidates[index % len(candidates)]


def cycle(
    candidates: Sequence[str], current_text: str, direction: Direction
) -> str | None:
    """Return the next suggestion for *current_text*, or ``None``.

    - Text equal to a candidate steps to its neighbour in *direction*,
      wrapping around the ends of the list.
    - Empty text yields the first candidate.
    - Otherwise the first candidate starting with the text (ignoring case)
      is returned.
    """
    if not isinstance(direction, Direction):
        raise ValueError(f"unknown completion direction: {direction!r}")
    if not candidates:
        return None

    try:
        found = list(candidates).index(current_text)
    except ValueError:
        pass
    else:
        return _neighbor(candidates, found, direction)

    if not current_text:
        return candidates[0]

    prefix = current_text.lower()
    for candidate in candidates:
        if candidate.lower().startswith(prefix):
            return candidate
    return None
