"""Keyboard and resize events read from a Unix terminal."""

import sys

if sys.platform == 'win32':
    # type: ignore
    # pylint: skip-file
    raise ImportError("This module is only available on Unix-like systems.")

import logging
import os
import select
import signal
from typing import Any, Dict, List

from mdviewer.viewer_command import ViewerCommand, ViewerEvent
from mdviewer.viewer_display import EventSource


KEY_UP = "up"
KEY_DOWN = "down"
KEY_PAGE_UP = "page_up"
KEY_PAGE_DOWN = "page_down"
KEY_HOME = "home"
KEY_END = "end"
KEY_ESCAPE = "escape"
KEY_CTRL_C = "ctrl_c"

# Escape sequences sent by common terminals, longest first within each prefix
_ESCAPE_SEQUENCES: Dict[str, str] = {
    "\x1b[5~": KEY_PAGE_UP,
    "\x1b[6~": KEY_PAGE_DOWN,
    "\x1b[1~": KEY_HOME,
    "\x1b[7~": KEY_HOME,
    "\x1b[4~": KEY_END,
    "\x1b[8~": KEY_END,
    "\x1b[A": KEY_UP,
    "\x1b[B": KEY_DOWN,
    "\x1b[H": KEY_HOME,
    "\x1b[F": KEY_END,
    "\x1bOA": KEY_UP,
    "\x1bOB": KEY_DOWN,
    "\x1bOH": KEY_HOME,
    "\x1bOF": KEY_END,
}

KEY_BINDINGS: Dict[str, ViewerCommand] = {
    "q": ViewerCommand.QUIT,
    KEY_CTRL_C: ViewerCommand.QUIT,
    "j": ViewerCommand.LINE_DOWN,
    KEY_DOWN: ViewerCommand.LINE_DOWN,
    "k": ViewerCommand.LINE_UP,
    KEY_UP: ViewerCommand.LINE_UP,
    "n": ViewerCommand.PAGE_DOWN,
    " ": ViewerCommand.PAGE_DOWN,
    KEY_PAGE_DOWN: ViewerCommand.PAGE_DOWN,
    "p": ViewerCommand.PAGE_UP,
    KEY_PAGE_UP: ViewerCommand.PAGE_UP,
    "g": ViewerCommand.TOP,
    KEY_HOME: ViewerCommand.TOP,
    "G": ViewerCommand.BOTTOM,
    KEY_END: ViewerCommand.BOTTOM,
    "r": ViewerCommand.RELOAD,
    "?": ViewerCommand.TOGGLE_HELP,
    KEY_ESCAPE: ViewerCommand.CLOSE_HELP,
}


def decode_keys(data: bytes) -> List[str]:
    """
    Split raw terminal input into key names.

    Recognised escape sequences become names such as "up" or "page_down", a
    lone escape becomes "escape", Ctrl+C becomes "ctrl_c" and anything else
    is returned one character at a time.  Unrecognised escape sequences are
    dropped.

    Args:
        data: Bytes read from the terminal

    Returns:
        Key names in the order they were typed
    """
    text = data.decode("utf-8", errors="replace")
    keys: List[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\x03":
            keys.append(KEY_CTRL_C)
            i += 1
            continue

        if ch != "\x1b":
            keys.append(ch)
            i += 1
            continue

        matched = False
        for sequence, name in _ESCAPE_SEQUENCES.items():
            if text.startswith(sequence, i):
                keys.append(name)
                i += len(sequence)
                matched = True
                break

        if matched:
            continue

        # A CSI or SS3 sequence we don't understand: skip to its final byte
        if i + 1 < len(text) and text[i + 1] in "[O":
            j = i + 2
            while j < len(text) and not ("@" <= text[j] <= "~"):
                j += 1

            i = j + 1
            continue

        keys.append(KEY_ESCAPE)
        i += 1

    return keys


def keys_to_events(keys: List[str]) -> List[ViewerEvent]:
    """Map key names to viewer events, ignoring unbound keys."""
    return [ViewerEvent(KEY_BINDINGS[key]) for key in keys if key in KEY_BINDINGS]


class TerminalInput(EventSource):
    """
    Event source reading from the terminal's standard input.

    The terminal must already be in raw mode.  Window size changes are
    picked up through SIGWINCH and reported as RESIZE events.
    """

    def __init__(self, fd: int | None = None) -> None:
        """
        Initialize the input reader.

        Args:
            fd: File descriptor to read; defaults to standard input
        """
        self._logger = logging.getLogger("TerminalInput")
        self._fd = sys.stdin.fileno() if fd is None else fd
        self._pending: List[ViewerEvent] = []
        self._resized = False
        self._previous_handler: Any = None

    def __enter__(self) -> "TerminalInput":
        self._previous_handler = signal.signal(signal.SIGWINCH, self._handle_winch)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._previous_handler is not None:
            signal.signal(signal.SIGWINCH, self._previous_handler)
            self._previous_handler = None

    def _handle_winch(self, signum: int, frame: Any) -> None:
        self._resized = True

    def poll(self, timeout: float) -> ViewerEvent | None:
        """
        Wait for the next event.

        Args:
            timeout: Maximum seconds to wait

        Returns:
            The event, or None if the timeout expired
        """
        if self._resized:
            self._resized = False
            return ViewerEvent(ViewerCommand.RESIZE)

        if self._pending:
            return self._pending.pop(0)

        try:
            ready, _, _ = select.select([self._fd], [], [], timeout)

        except InterruptedError:
            # A signal arrived while we were waiting
            ready = []

        if self._resized:
            self._resized = False
            return ViewerEvent(ViewerCommand.RESIZE)

        if not ready:
            return None

        try:
            data = os.read(self._fd, 1024)

        except BlockingIOError:
            return None

        if not data:
            # End of input: nothing more can arrive, so stop
            self._logger.info("input closed")
            return ViewerEvent(ViewerCommand.QUIT)

        self._pending.extend(keys_to_events(decode_keys(data)))
        if not self._pending:
            return None

        return self._pending.pop(0)
