"""Materialized layout of a document for one width."""

from dataclasses import dataclass
from typing import Tuple

from mdlayout.layout_line import DisplayLine


@dataclass(frozen=True)
class RenderState:
    """The display lines of a document and the width they were laid out for."""
    lines: Tuple[DisplayLine, ...]
    width: int

    @property
    def total_lines(self) -> int:
        """Number of display lines."""
        return len(self.lines)

    def slice(self, start: int, count: int) -> Tuple[DisplayLine, ...]:
        """
        Get a run of lines.

        Args:
            start: Index of the first line
            count: Maximum number of lines

        Returns:
            Up to `count` lines starting at `start`
        """
        start = max(0, start)
        return self.lines[start:start + max(0, count)]
