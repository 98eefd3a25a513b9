"""Entry point for the pi-readline demo CLI."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from pi.readline.config import EditorConfig
from pi.readline.editor import LineEditor
from pi.readline.keys import Key, KeyEvent
from pi.readline.terminal import ProcessTerminal


class _CancellingTerminal(ProcessTerminal):
    """Sets the cancel event on Ctrl+C or Escape instead of passing them on."""

    def __init__(self, cancel: asyncio.Event) -> None:
        super().__init__()
        self._cancel = cancel

    async def next_key_event(
        self,
        echo_suppressed: bool = True,
        cancel: asyncio.Event | None = None,
    ) -> KeyEvent | None:
        event = await super().next_key_event(echo_suppressed, cancel)
        if event is not None and (
            event.key == Key.escape or (event.ctrl and event.key == "c")
        ):
            self._cancel.set()
            return None
        return event


async def _run(args: argparse.Namespace) -> str | None:
    config = EditorConfig.create(
        secret=args.secret,
        mask=args.mask if args.secret else None,
        candidates=args.candidate or (),
        word_modifier=args.word_modifier,
        style=(lambda s: f"\x1b[1m{s}\x1b[22m") if args.bold else None,
    )
    cancel = asyncio.Event()
    async with _CancellingTerminal(cancel) as term:
        if args.prompt:
            term.write(args.prompt)
        result = await LineEditor(term, config).read_line(cancel)
        term.write("\r\n")
    return result


def main() -> None:
    parser = argparse.ArgumentParser(description="pi-readline: read one line from the terminal")
    parser.add_argument("--prompt", default="> ", help="Prompt to print before the input (default: '> ')")
    parser.add_argument("--secret", action="store_true", help="Mask the typed characters")
    parser.add_argument("--mask", default="*", help="Mask character for --secret (default: '*')")
    parser.add_argument("--candidate", action="append", help="Tab completion candidate (repeatable)")
    parser.add_argument("--word-modifier", choices=["ctrl", "alt"], default=None)
    parser.add_argument("--bold", action="store_true", help="Echo input in bold")
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not sys.stdin.isatty():
        parser.error("stdin is not a terminal")

    try:
        result = asyncio.run(_run(args))
    except ValueError as e:
        parser.error(str(e))

    if result is None:
        print("[cancelled]")
        sys.exit(130)
    print(result)


if __name__ == "__main__":
    main()
