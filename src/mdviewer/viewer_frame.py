"""Composition of a full screen frame: title line, content and status line."""

from typing import List, Tuple

from mdlayout.layout_line import DisplayLine, StyledSpan
from mdlayout.layout_style import CYAN, GRAY, RED, YELLOW, CharacterAttributes, TextStyle
from mdviewer.viewer_session import DocumentSession
from mdviewer.viewer_status_message import StatusKind


# Rows used by the title and status lines
CHROME_ROWS = 2

KEY_HINTS = "Space or n: page ↓  p: page ↑  j/k: line  g/G: top/end  r: reload  q: quit"

_HEADER_STYLE = TextStyle(fg=CYAN, attributes=CharacterAttributes.BOLD)

_HELP_SECTIONS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Navigation", (
        "Space / n: page down",
        "p: page up",
        "j / k or arrow keys: line scroll",
        "PgUp / PgDn: page scroll",
        "g or Home: top  |  G or End: bottom",
        "r: reload file  |  q or Ctrl+C: quit",
        "?: toggle this help overlay",
    )),
    ("Heading Styles", (
        "H1/H2 headings use tinted bands for major sections.",
        "H3-H6 darken progressively to show nested hierarchy.",
        "Highlights span the full width behind the text.",
    )),
    ("Tips", (
        "Edit in another window, press r to refresh instantly.",
        "Use Space/PgDn to skim; g/G jump to top/bottom.",
        "Arrow keys still work for fine-grained scrolling.",
    )),
)


def content_height(rows: int) -> int:
    """Get the number of document rows that fit on a screen of `rows` rows."""
    return max(0, rows - CHROME_ROWS)


def help_lines() -> List[DisplayLine]:
    """Get the lines of the help overlay."""
    lines: List[DisplayLine] = [DisplayLine((StyledSpan("Help (? / Esc to close)", _HEADER_STYLE),)), DisplayLine()]
    for title, bullets in _HELP_SECTIONS:
        lines.append(DisplayLine((StyledSpan(title, _HEADER_STYLE),)))
        for bullet in bullets:
            lines.append(DisplayLine((StyledSpan(f"  • {bullet}"),)))

        lines.append(DisplayLine())

    return lines[:-1]


def title_line(session: DocumentSession) -> DisplayLine:
    """Get the title line: file path and number of display lines."""
    return DisplayLine((
        StyledSpan(session.path, TextStyle(fg=CYAN)),
        StyledSpan(" "),
        StyledSpan(f"({session.render_state.total_lines} lines)", TextStyle(fg=GRAY)),
    ))


def status_line(session: DocumentSession) -> DisplayLine:
    """Get the status line: key hints followed by the current status message."""
    status = session.status
    color = RED if status.kind == StatusKind.ERROR else YELLOW
    return DisplayLine((
        StyledSpan(KEY_HINTS),
        StyledSpan("  -  "),
        StyledSpan(status.text, TextStyle(fg=color)),
    ))


def compose_frame(session: DocumentSession, rows: int, show_help: bool) -> List[DisplayLine]:
    """
    Build every row of a frame.

    Args:
        session: The document session to show
        rows: Screen height
        show_help: Whether the help overlay replaces the document

    Returns:
        Exactly `rows` lines (fewer only when the screen is too small for the
        title and status lines)
    """
    if rows <= 0:
        return []

    if rows < CHROME_ROWS:
        return [status_line(session)][:rows]

    height = content_height(rows)
    body = list(help_lines()[:height] if show_help else session.visible_lines())
    body.extend(DisplayLine() for _ in range(height - len(body)))
    return [title_line(session)] + body + [status_line(session)]
