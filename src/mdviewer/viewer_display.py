"""Abstract interfaces for the display layer and the event source."""

from abc import ABC, abstractmethod
from typing import Sequence, Tuple

from mdlayout.layout_line import DisplayLine
from mdviewer.viewer_command import ViewerEvent


class ViewerDisplay(ABC):
    """A character grid the viewer draws frames on."""

    @abstractmethod
    def size(self) -> Tuple[int, int]:
        """
        Get the current grid size.

        Returns:
            Tuple of (columns, rows)
        """

    @abstractmethod
    def draw(self, lines: Sequence[DisplayLine]) -> None:
        """
        Draw a complete frame, one display line per row.

        Lines wider than the grid are clipped.

        Args:
            lines: The frame's rows, top to bottom
        """


class EventSource(ABC):
    """Supplier of viewer events."""

    @abstractmethod
    def poll(self, timeout: float) -> ViewerEvent | None:
        """
        Wait for the next event.

        Args:
            timeout: Maximum seconds to wait

        Returns:
            The event, or None if the timeout expired
        """
