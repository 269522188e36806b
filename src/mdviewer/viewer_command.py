"""Commands and events delivered to the viewer's control loop."""

from dataclasses import dataclass
from enum import Enum, auto


class ViewerCommand(Enum):
    """Discrete commands the control loop understands."""
    LINE_UP = auto()
    LINE_DOWN = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    TOP = auto()
    BOTTOM = auto()
    RELOAD = auto()
    TOGGLE_HELP = auto()
    CLOSE_HELP = auto()
    RESIZE = auto()
    QUIT = auto()


@dataclass(frozen=True)
class ViewerEvent:
    """An event from the event source."""
    command: ViewerCommand
