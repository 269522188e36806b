"""
Document session: owns the current document, its layout, the viewport and
the status message, and coordinates reloads and resizes.
"""

import logging
import os
from typing import Tuple

from mdocument.document_exceptions import DocumentError, DocumentIoError
from mdocument.document_node import Document
from mdocument.document_parser import DocumentParser
from mdlayout.layout_engine import LayoutEngine
from mdlayout.layout_line import DisplayLine, StyledSpan
from mdlayout.layout_render_state import RenderState
from mdlayout.layout_style import DARK_GRAY, TextStyle
from mdviewer.viewer_status_message import StatusMessage
from mdviewer.viewer_viewport import Viewport


EMPTY_DOCUMENT_TEXT = "(file is empty)"
STARTUP_STATUS = "Press ? for help, q to quit"


def read_document(path: str, parser: DocumentParser) -> Document:
    """
    Read and parse a markdown file.

    Args:
        path: Path to the file
        parser: Parser to use

    Returns:
        The parsed document

    Raises:
        DocumentIoError: If the file cannot be read
        ParseError: If the contents cannot be parsed
    """
    try:
        with open(path, 'rb') as f:
            data = f.read()

    except OSError as e:
        reason = e.strerror or str(e)
        raise DocumentIoError(f"Cannot read {path}: {reason}", {"path": path, "errno": e.errno}) from e

    return parser.parse_bytes(data, path)


class DocumentSession:
    """Coordinates the document, its render state and the viewport."""

    def __init__(
        self,
        path: str,
        document: Document,
        parser: DocumentParser,
        engine: LayoutEngine,
        width: int,
        height: int
    ) -> None:
        """
        Initialize a session around an already parsed document.

        Args:
            path: Path the document is reloaded from
            document: The parsed document
            parser: Parser used for reloads
            engine: Layout engine
            width: Initial viewport width
            height: Initial viewport height
        """
        self._logger = logging.getLogger("DocumentSession")
        self._path = path
        self._parser = parser
        self._engine = engine
        self._document = document
        self._width = max(1, width)
        self._render_state = self._render(document, self._width)
        self._viewport = Viewport(self._render_state.total_lines, height)
        self._status = StatusMessage.info(STARTUP_STATUS)

    @classmethod
    def open(
        cls,
        path: str,
        parser: DocumentParser | None = None,
        engine: LayoutEngine | None = None,
        width: int = 80,
        height: int = 24
    ) -> "DocumentSession":
        """
        Load a document at startup.

        Args:
            path: Path to the markdown file
            parser: Parser; a default one is created if None
            engine: Layout engine; a default one is created if None
            width: Initial viewport width
            height: Initial viewport height

        Returns:
            A new session

        Raises:
            DocumentIoError: If the file cannot be read
            ParseError: If the file cannot be parsed
        """
        parser = parser or DocumentParser()
        engine = engine or LayoutEngine()
        document = read_document(path, parser)
        return cls(path, document, parser, engine, width, height)

    @property
    def path(self) -> str:
        """Path of the source file."""
        return self._path

    @property
    def document(self) -> Document:
        """The current document."""
        return self._document

    @property
    def render_state(self) -> RenderState:
        """The current layout of the document."""
        return self._render_state

    @property
    def viewport(self) -> Viewport:
        """The scroll state."""
        return self._viewport

    @property
    def status(self) -> StatusMessage:
        """The most recent status message."""
        return self._status

    def set_status(self, status: StatusMessage) -> None:
        """Replace the status message."""
        self._status = status

    def reload(self) -> bool:
        """
        Re-read and re-parse the source file.

        On failure the document, render state and scroll offset are left as
        they were and the status message describes the problem.

        Returns:
            True if the document was replaced
        """
        try:
            document = read_document(self._path, self._parser)

        except DocumentError as e:
            self._logger.warning("reload of %s failed: %s", self._path, e)
            self._status = StatusMessage.error(f"Reload failed: {e}")
            return False

        render_state = self._render(document, self._width)
        self._document = document
        self._render_state = render_state
        self._viewport.update_bounds(self._render_state.total_lines, self._viewport.height)
        self._status = StatusMessage.info(f"Reloaded {os.path.basename(self._path)}")
        self._logger.info("reloaded %s (%d lines)", self._path, self._render_state.total_lines)
        return True

    def resize(self, width: int, height: int) -> None:
        """
        Adapt to a new viewport size.

        The document is only laid out again when the width changes.

        Args:
            width: New viewport width
            height: New viewport height
        """
        width = max(1, width)
        if width != self._width:
            self._width = width
            self._render_state = self._render(self._document, width)

        self._viewport.update_bounds(self._render_state.total_lines, height)

    def visible_lines(self) -> Tuple[DisplayLine, ...]:
        """Get the display lines currently in view."""
        return self._render_state.slice(self._viewport.offset, self._viewport.height)

    def _render(self, document: Document, width: int) -> RenderState:
        """Lay out a document, substituting a placeholder for empty output."""
        state = self._engine.render(document, width)
        if state.lines:
            return state

        placeholder = DisplayLine((StyledSpan(EMPTY_DOCUMENT_TEXT, TextStyle(fg=DARK_GRAY)),))
        return RenderState((placeholder,), width)
