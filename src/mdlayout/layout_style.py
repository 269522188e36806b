"""Text styles and the colour theme used for rendered documents."""

from dataclasses import dataclass, replace
from enum import Flag, auto
from typing import Dict


class CharacterAttributes(Flag):
    """Bit flags for character attributes."""
    NONE = 0
    BOLD = auto()
    DIM = auto()
    ITALIC = auto()
    UNDERLINE = auto()
    STRIKE = auto()
    INVERSE = auto()


@dataclass(frozen=True)
class TextStyle:
    """
    Style of a span of text.

    Colours are 24-bit 0xRRGGBB values; None means the display default.
    """
    fg: int | None = None
    bg: int | None = None
    attributes: CharacterAttributes = CharacterAttributes.NONE

    def with_fg(self, fg: int | None) -> "TextStyle":
        """Return a copy with a different foreground colour."""
        return replace(self, fg=fg)

    def with_bg(self, bg: int | None) -> "TextStyle":
        """Return a copy with a different background colour."""
        return replace(self, bg=bg)

    def with_attributes(self, attributes: CharacterAttributes) -> "TextStyle":
        """Return a copy with extra attributes added."""
        return replace(self, attributes=self.attributes | attributes)


PLAIN = TextStyle()

# Basic palette
CYAN = 0x00AFAF
GRAY = 0xC0C0C0
DARK_GRAY = 0x808080
YELLOW = 0xD7AF00
LIGHT_BLUE = 0x87AFFF
LIGHT_MAGENTA = 0xFF87FF
MAGENTA = 0xAF5FAF
RED = 0xD75F5F

CODE_BLOCK_FG = 0xE1E4EB
CODE_BLOCK_BG = 0x0C101A

HEADING_STYLES: Dict[int, TextStyle] = {
    1: TextStyle(fg=CYAN, attributes=CharacterAttributes.BOLD),
    2: TextStyle(fg=LIGHT_BLUE, attributes=CharacterAttributes.BOLD),
    3: TextStyle(fg=LIGHT_MAGENTA, attributes=CharacterAttributes.BOLD),
    4: TextStyle(fg=MAGENTA),
    5: TextStyle(fg=MAGENTA, attributes=CharacterAttributes.ITALIC),
    6: TextStyle(fg=GRAY, attributes=CharacterAttributes.ITALIC),
}

# Full-width background band per heading level; bands darken with depth
HEADING_BAND_COLORS: Dict[int, int] = {
    1: 0x303446,
    2: 0x282C3C,
    3: 0x232736,
    4: 0x1E2230,
    5: 0x1C202C,
    6: 0x181C26,
}

QUOTE_TEXT_STYLE = TextStyle(fg=GRAY, attributes=CharacterAttributes.ITALIC)
QUOTE_MARKER_STYLE = TextStyle(fg=DARK_GRAY)
LIST_MARKER_STYLE = TextStyle(fg=GRAY)
TASK_MARKER_STYLE = TextStyle(fg=YELLOW)
CODE_BLOCK_STYLE = TextStyle(fg=CODE_BLOCK_FG, bg=CODE_BLOCK_BG)
INLINE_CODE_STYLE = TextStyle(fg=YELLOW, attributes=CharacterAttributes.DIM)
RULE_STYLE = TextStyle(fg=DARK_GRAY)
TABLE_BORDER_STYLE = TextStyle(fg=DARK_GRAY)
FOOTNOTE_STYLE = TextStyle(fg=LIGHT_BLUE)
IMAGE_STYLE = TextStyle(fg=MAGENTA, attributes=CharacterAttributes.DIM)
HTML_STYLE = TextStyle(attributes=CharacterAttributes.DIM)


def heading_style(level: int) -> TextStyle:
    """
    Get the text style for a heading level.

    Args:
        level: Heading level; out of range values are clamped to 1-6

    Returns:
        The heading's text style
    """
    return HEADING_STYLES[max(1, min(6, level))]


def heading_band_color(level: int) -> int:
    """Get the full-width background band colour for a heading level."""
    return HEADING_BAND_COLORS[max(1, min(6, level))]
