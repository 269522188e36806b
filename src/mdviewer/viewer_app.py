"""Single-threaded control loop of the viewer."""

import logging

from mdviewer.viewer_command import ViewerCommand, ViewerEvent
from mdviewer.viewer_display import EventSource, ViewerDisplay
from mdviewer.viewer_frame import compose_frame, content_height
from mdviewer.viewer_session import DocumentSession


class ViewerApp:
    """
    Polls for events, applies them to the session and redraws after each one.

    Each event is handled to completion before the next is read.
    """

    def __init__(
        self,
        session: DocumentSession,
        display: ViewerDisplay,
        events: EventSource,
        poll_interval_ms: int = 200
    ) -> None:
        """
        Initialize the application.

        Args:
            session: The document session to show
            display: Where frames are drawn
            events: Where events come from
            poll_interval_ms: Longest wait for an event before redrawing
        """
        self._logger = logging.getLogger("ViewerApp")
        self._session = session
        self._display = display
        self._events = events
        self._poll_interval = max(10, poll_interval_ms) / 1000
        self._show_help = False
        self._rows = 0

    @property
    def show_help(self) -> bool:
        """Whether the help overlay is open."""
        return self._show_help

    def run(self) -> None:
        """Run until a quit event arrives."""
        self._logger.info("viewer started for %s", self._session.path)
        while True:
            self._sync_size()
            self.redraw()
            event = self._events.poll(self._poll_interval)
            if event is None:
                continue

            if self.handle_event(event):
                break

        self._logger.info("viewer stopped")

    def redraw(self) -> None:
        """Draw the current frame."""
        self._display.draw(compose_frame(self._session, self._rows, self._show_help))

    def handle_event(self, event: ViewerEvent) -> bool:
        """
        Apply one event.

        Args:
            event: The event

        Returns:
            True if the loop should stop
        """
        command = event.command
        if command == ViewerCommand.QUIT:
            return True

        if command == ViewerCommand.RESIZE:
            self._sync_size()
            return False

        if self._show_help:
            if command in (ViewerCommand.TOGGLE_HELP, ViewerCommand.CLOSE_HELP):
                self._show_help = False

            return False

        viewport = self._session.viewport
        if command == ViewerCommand.LINE_UP:
            viewport.scroll_by(-1)

        elif command == ViewerCommand.LINE_DOWN:
            viewport.scroll_by(1)

        elif command == ViewerCommand.PAGE_UP:
            viewport.page_up()

        elif command == ViewerCommand.PAGE_DOWN:
            viewport.page_down()

        elif command == ViewerCommand.TOP:
            viewport.scroll_to_top()

        elif command == ViewerCommand.BOTTOM:
            viewport.scroll_to_bottom()

        elif command == ViewerCommand.RELOAD:
            self._session.reload()

        elif command == ViewerCommand.TOGGLE_HELP:
            self._show_help = True

        return False

    def _sync_size(self) -> None:
        """Pick up the display's current size."""
        cols, rows = self._display.size()
        self._rows = max(0, rows)
        self._session.resize(cols, content_height(self._rows))
