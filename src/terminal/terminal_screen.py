"""Full-screen display on a Unix terminal."""

import sys

if sys.platform == 'win32':
    # type: ignore
    # pylint: skip-file
    raise ImportError("This module is only available on Unix-like systems.")

import fcntl
import logging
import struct
import termios
import tty
from typing import Any, List, Sequence, TextIO, Tuple

from mdlayout.layout_line import DisplayLine
from mdviewer.viewer_display import ViewerDisplay
from terminal.terminal_ansi import ANSI_RESET, render_line


ENTER_ALTERNATE_SCREEN = "\x1b[?1049h"
LEAVE_ALTERNATE_SCREEN = "\x1b[?1049l"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CLEAR_LINE = "\x1b[2K"

DEFAULT_SIZE = (80, 24)


def query_size(fd: int) -> Tuple[int, int]:
    """
    Get the size of the terminal on a file descriptor.

    Args:
        fd: Terminal file descriptor

    Returns:
        Tuple of (columns, rows); (80, 24) if the size cannot be read
    """
    try:
        packed = fcntl.ioctl(fd, termios.TIOCGWINSZ, struct.pack('HHHH', 0, 0, 0, 0))
        rows, cols, _, _ = struct.unpack('HHHH', packed)

    except OSError:
        return DEFAULT_SIZE

    if rows == 0 or cols == 0:
        return DEFAULT_SIZE

    return cols, rows


class TerminalScreen(ViewerDisplay):
    """
    Draws frames on the controlling terminal.

    Used as a context manager: entering switches the terminal to raw mode and
    the alternate screen, leaving restores the original terminal state even
    when an exception is propagating.
    """

    def __init__(self, input_fd: int | None = None, output: TextIO | None = None) -> None:
        """
        Initialize the screen.

        Args:
            input_fd: Terminal file descriptor to configure; defaults to stdin
            output: Stream frames are written to; defaults to stdout
        """
        self._logger = logging.getLogger("TerminalScreen")
        self._fd = sys.stdin.fileno() if input_fd is None else input_fd
        self._output = sys.stdout if output is None else output
        self._saved_mode: List[Any] | None = None

    def __enter__(self) -> "TerminalScreen":
        self._saved_mode = termios.tcgetattr(self._fd)

        mode = termios.tcgetattr(self._fd)
        mode[tty.IFLAG] &= ~(
            termios.ICRNL | termios.IXON | termios.IXOFF | termios.ISTRIP
        )
        mode[tty.OFLAG] &= ~(termios.OPOST)
        mode[tty.CFLAG] |= (termios.CS8)
        mode[tty.LFLAG] &= ~(
            termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG
        )
        mode[tty.CC][termios.VMIN] = 0
        mode[tty.CC][termios.VTIME] = 0
        termios.tcsetattr(self._fd, termios.TCSANOW, mode)

        self._output.write(ENTER_ALTERNATE_SCREEN + HIDE_CURSOR)
        self._output.flush()
        self._logger.debug("terminal switched to raw mode")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self._output.write(ANSI_RESET + SHOW_CURSOR + LEAVE_ALTERNATE_SCREEN)
        self._output.flush()

        if self._saved_mode is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_mode)
            self._saved_mode = None

        self._logger.debug("terminal restored")

    def size(self) -> Tuple[int, int]:
        """
        Get the current terminal size.

        Returns:
            Tuple of (columns, rows)
        """
        return query_size(self._fd)

    def draw(self, lines: Sequence[DisplayLine]) -> None:
        """
        Draw a complete frame.

        Args:
            lines: The frame's rows, top to bottom
        """
        cols, rows = self.size()
        parts: List[str] = []
        for row in range(rows):
            parts.append(f"\x1b[{row + 1};1H{CLEAR_LINE}")
            if row < len(lines):
                parts.append(render_line(lines[row], cols))

        parts.append(ANSI_RESET)
        self._output.write("".join(parts))
        self._output.flush()


def write_lines(
    lines: Sequence[DisplayLine],
    output: TextIO,
    color: bool = True,
    width: int | None = None
) -> None:
    """
    Write display lines to a stream without taking over the terminal.

    Lines are never clipped, so code wider than the page is written whole.

    Args:
        lines: Lines to write
        output: Destination stream
        color: If False, write plain text
        width: If set, fill background bands such as headings to this width
    """
    for line in lines:
        output.write(render_line(line, None, color, fill_width=width) + "\n")
