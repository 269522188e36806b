"""Display lines made of styled spans, and column width measurement."""

from dataclasses import dataclass, replace
import unicodedata
from typing import Iterable, List, Tuple

from mdlayout.layout_style import PLAIN, TextStyle


def char_width(char: str) -> int:
    """
    Get the number of grid columns a character occupies.

    Args:
        char: A single character

    Returns:
        0 for combining and control characters, 2 for wide east asian
        characters, otherwise 1
    """
    if unicodedata.combining(char) or unicodedata.category(char) in ("Cc", "Cf"):
        return 0

    if unicodedata.east_asian_width(char) in ("W", "F"):
        return 2

    return 1


def text_width(text: str) -> int:
    """Get the number of grid columns a string occupies."""
    return sum(char_width(c) for c in text)


@dataclass(frozen=True)
class StyledSpan:
    """A run of text drawn with one style."""
    text: str
    style: TextStyle = PLAIN

    @property
    def width(self) -> int:
        """Rendered width in columns."""
        return text_width(self.text)


@dataclass(frozen=True)
class DisplayLine:
    """
    One row of styled text ready to be drawn.

    `background` is a colour that fills the whole row behind the spans,
    used for heading bands.  `source_block` is the index of the top-level
    block the line came from, or None for lines that belong to no block.
    """
    spans: Tuple[StyledSpan, ...] = ()
    background: int | None = None
    source_block: int | None = None

    @property
    def width(self) -> int:
        """Rendered width in columns."""
        return sum(span.width for span in self.spans)

    @property
    def text(self) -> str:
        """The line's text without styling."""
        return "".join(span.text for span in self.spans)

    def is_blank(self) -> bool:
        """True if the line has no visible text."""
        return not self.text.strip()

    def with_prefix(self, prefix: Iterable[StyledSpan]) -> "DisplayLine":
        """Return a copy with spans inserted before this line's spans."""
        return replace(self, spans=tuple(prefix) + self.spans)


def spans_width(spans: Iterable[StyledSpan]) -> int:
    """Get the total rendered width of some spans."""
    return sum(span.width for span in spans)


def clip_spans(spans: Iterable[StyledSpan], max_width: int) -> Tuple[StyledSpan, ...]:
    """
    Cut spans so their rendered width does not exceed a limit.

    A wide character that would straddle the limit is dropped.

    Args:
        spans: Spans to clip
        max_width: Maximum width in columns

    Returns:
        The clipped spans
    """
    clipped: List[StyledSpan] = []
    remaining = max(0, max_width)
    for span in spans:
        if remaining <= 0:
            break

        if span.width <= remaining:
            clipped.append(span)
            remaining -= span.width
            continue

        chars: List[str] = []
        for char in span.text:
            w = char_width(char)
            if w > remaining:
                break

            chars.append(char)
            remaining -= w

        if chars:
            clipped.append(StyledSpan("".join(chars), span.style))

        break

    return tuple(clipped)
