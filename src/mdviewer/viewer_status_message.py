"""Status message shown on the viewer's status line."""

from dataclasses import dataclass
from enum import Enum


class StatusKind(Enum):
    """Kinds of status message."""
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    """Container for status line message information."""
    text: str
    kind: StatusKind = StatusKind.INFO

    @classmethod
    def info(cls, text: str) -> "StatusMessage":
        """Create an informational message."""
        return cls(text, StatusKind.INFO)

    @classmethod
    def error(cls, text: str) -> "StatusMessage":
        """Create an error message."""
        return cls(text, StatusKind.ERROR)
