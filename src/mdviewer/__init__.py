"""
Interactive viewer for markdown documents.

This package holds the viewer's state (document session, viewport, status
message), its settings and the control loop.  Drawing and input go through
the abstract `ViewerDisplay` and `EventSource` interfaces.
"""

from mdviewer.viewer_app import ViewerApp
from mdviewer.viewer_command import ViewerCommand, ViewerEvent
from mdviewer.viewer_display import EventSource, ViewerDisplay
from mdviewer.viewer_frame import compose_frame, content_height, help_lines, status_line, title_line
from mdviewer.viewer_session import EMPTY_DOCUMENT_TEXT, STARTUP_STATUS, DocumentSession, read_document
from mdviewer.viewer_settings import CodeOverflow, ViewerSettings
from mdviewer.viewer_status_message import StatusKind, StatusMessage
from mdviewer.viewer_viewport import Viewport

__all__ = [
    # Control loop
    'ViewerApp',
    'ViewerCommand',
    'ViewerEvent',
    'EventSource',
    'ViewerDisplay',

    # State
    'DocumentSession',
    'StatusKind',
    'StatusMessage',
    'Viewport',
    'read_document',
    'EMPTY_DOCUMENT_TEXT',
    'STARTUP_STATUS',

    # Frames
    'compose_frame',
    'content_height',
    'help_lines',
    'status_line',
    'title_line',

    # Settings
    'CodeOverflow',
    'ViewerSettings',
]
