"""Scroll state of the visible window into the rendered document."""

from typing import Tuple


class Viewport:
    """
    Scroll offset and height of the visible window.

    Every operation keeps `0 <= offset <= max(0, total_lines - height)`.
    """

    def __init__(self, total_lines: int = 0, height: int = 0) -> None:
        """
        Initialize the viewport at the top of the document.

        Args:
            total_lines: Number of display lines in the document
            height: Number of visible rows
        """
        self._total_lines = max(0, total_lines)
        self._height = max(0, height)
        self._offset = 0

    @property
    def offset(self) -> int:
        """Index of the first visible display line."""
        return self._offset

    @property
    def height(self) -> int:
        """Number of visible rows."""
        return self._height

    @property
    def total_lines(self) -> int:
        """Number of display lines in the document."""
        return self._total_lines

    def max_offset(self) -> int:
        """Get the largest valid offset."""
        return max(0, self._total_lines - self._height)

    def scroll_to(self, row: int) -> None:
        """
        Move the first visible line to a row, clamped to the document.

        Args:
            row: The requested first visible line
        """
        self._offset = max(0, min(row, self.max_offset()))

    def scroll_by(self, rows: int) -> None:
        """
        Scroll by a number of lines.

        Args:
            rows: Lines to move; positive scrolls down, negative scrolls up
        """
        self.scroll_to(self._offset + rows)

    def page_down(self) -> None:
        """Scroll down by one viewport height."""
        self.scroll_by(max(1, self._height))

    def page_up(self) -> None:
        """Scroll up by one viewport height."""
        self.scroll_by(-max(1, self._height))

    def scroll_to_top(self) -> None:
        """Jump to the first line."""
        self._offset = 0

    def scroll_to_bottom(self) -> None:
        """Jump so the last line is at the bottom of the viewport."""
        self._offset = self.max_offset()

    def update_bounds(self, total_lines: int, height: int) -> None:
        """
        Adopt a new document length and/or viewport height.

        The current offset is kept where possible and clamped otherwise,
        so the reader stays near the same place after a reload or resize.

        Args:
            total_lines: New number of display lines
            height: New number of visible rows
        """
        self._total_lines = max(0, total_lines)
        self._height = max(0, height)
        self.scroll_to(self._offset)

    def visible_range(self) -> Tuple[int, int]:
        """
        Get the lines currently in view.

        Returns:
            (first, end) indices, end exclusive
        """
        return self._offset, min(self._total_lines, self._offset + self._height)
