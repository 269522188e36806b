"""Terminal display layer: ANSI rendering, raw-mode screen and keyboard input."""

from terminal.terminal_ansi import ANSI_RESET, color_code, render_line, style_prefix
from terminal.terminal_input import KEY_BINDINGS, TerminalInput, decode_keys, keys_to_events
from terminal.terminal_screen import TerminalScreen, query_size, write_lines


__all__ = [
    "ANSI_RESET",
    "KEY_BINDINGS",
    "TerminalInput",
    "TerminalScreen",
    "color_code",
    "decode_keys",
    "keys_to_events",
    "query_size",
    "render_line",
    "style_prefix",
    "write_lines"
]
