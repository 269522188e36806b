"""Shared fixtures and fakes for viewer tests."""

import pytest
from typing import List, Sequence, Tuple

from mdlayout.layout_line import DisplayLine
from mdviewer.viewer_display import ViewerDisplay
from mdviewer.viewer_session import DocumentSession


class RecordingDisplay(ViewerDisplay):
    """Display that records every frame instead of drawing it."""

    def __init__(self, cols: int = 40, rows: int = 10) -> None:
        self.cols = cols
        self.rows = rows
        self.frames: List[List[DisplayLine]] = []

    def size(self) -> Tuple[int, int]:
        """Get the fake grid size."""
        return self.cols, self.rows

    def draw(self, lines: Sequence[DisplayLine]) -> None:
        """Record a frame."""
        self.frames.append(list(lines))

    def last_frame_text(self) -> List[str]:
        """Get the text of the most recent frame."""
        return [line.text for line in self.frames[-1]]


def numbered_paragraphs(count: int) -> str:
    """Create markdown with `count` one-line paragraphs."""
    return "\n\n".join(f"line {i}" for i in range(count)) + "\n"


@pytest.fixture
def paragraph_source():
    """Provide the builder for numbered paragraph documents."""
    return numbered_paragraphs


@pytest.fixture
def markdown_file(tmp_path):
    """Create a markdown file that lays out as 39 display lines."""
    path = tmp_path / "doc.md"
    path.write_text(numbered_paragraphs(20), encoding="utf-8")
    return path


@pytest.fixture
def session(markdown_file):
    """Open a session on the sample file with an 8 row viewport."""
    return DocumentSession.open(str(markdown_file), width=40, height=8)


@pytest.fixture
def display():
    """Create a recording display of 40 columns and 10 rows."""
    return RecordingDisplay()
