"""pi-readline: interactive single-line input for terminals."""

# Completion
from pi.readline.autocomplete import Direction, cycle

# Configuration
from pi.readline.config import EditorConfig, StyleFn, WordModifier, resolve_word_modifier

# Editing
from pi.readline.editor import LineEditor, read_line

# Keybindings
from pi.readline.keybindings import EditorAction, EditorKeybindings

# Keyboard input handling
from pi.readline.keys import Key, KeyEvent, parse_key_event, split_sequences
from pi.readline.line_buffer import LineBuffer

# Terminal interface and implementations
from pi.readline.terminal import KeyEventSource, ProcessTerminal, TerminalWriter

# Utilities
from pi.readline.utils import visible_width

__all__ = [
    # Completion
    "Direction",
    "cycle",
    # Configuration
    "EditorConfig",
    "StyleFn",
    "WordModifier",
    "resolve_word_modifier",
    # Editing
    "LineBuffer",
    "LineEditor",
    "read_line",
    # Keybindings
    "EditorAction",
    "EditorKeybindings",
    # Keys
    "Key",
    "KeyEvent",
    "parse_key_event",
    "split_sequences",
    # Terminal
    "KeyEventSource",
    "ProcessTerminal",
    "TerminalWriter",
    # Utilities
    "visible_width",
]
