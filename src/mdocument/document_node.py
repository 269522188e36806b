"""
Immutable document model produced by the parser adapter.

A document is a tuple of block nodes plus the footnote definitions that
were referenced from it.  Every node is a frozen dataclass holding owned
child tuples, so a parsed document can be shared freely and replaced
wholesale when the source file is reloaded.
"""

from dataclasses import dataclass, field
from enum import Enum, Flag, auto
from typing import Dict, Tuple, Union


class InlineStyle(Flag):
    """Bit flags describing how an inline run was marked up."""
    NONE = 0
    EMPHASIS = auto()
    STRONG = auto()
    STRIKETHROUGH = auto()
    CODE = auto()
    LINK = auto()
    IMAGE = auto()
    FOOTNOTE_REF = auto()
    HTML = auto()


class TableAlignment(Enum):
    """Horizontal alignment of a table column."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


# Text of an inline run that represents a hard line break.
HARD_BREAK = "\n"


@dataclass(frozen=True)
class InlineRun:
    """A run of text sharing one set of inline styles."""
    text: str
    style: InlineStyle = InlineStyle.NONE
    target: str | None = None  # Link or image destination

    @property
    def is_hard_break(self) -> bool:
        """True if this run forces a line break."""
        return self.text == HARD_BREAK


InlineContent = Tuple[InlineRun, ...]


def inline_plain_text(content: InlineContent) -> str:
    """
    Flatten inline content to plain text.

    Args:
        content: Inline runs to flatten

    Returns:
        The concatenated text with hard breaks turned into spaces
    """
    return "".join(" " if run.is_hard_break else run.text for run in content)


@dataclass(frozen=True)
class HeadingBlock:
    """A heading of level 1 to 6."""
    level: int
    content: InlineContent


@dataclass(frozen=True)
class ParagraphBlock:
    """A paragraph of inline content."""
    content: InlineContent


@dataclass(frozen=True)
class ListItem:
    """
    One item of a list.

    `checked` is None for an ordinary item, otherwise the state of its
    task list checkbox.
    """
    blocks: Tuple["Block", ...]
    checked: bool | None = None


@dataclass(frozen=True)
class ListBlock:
    """An ordered or unordered list."""
    ordered: bool
    items: Tuple[ListItem, ...]
    start: int = 1
    tight: bool = True
    depth: int = 0  # Number of enclosing lists


@dataclass(frozen=True)
class BlockQuoteBlock:
    """A block quote containing other blocks."""
    blocks: Tuple["Block", ...]
    depth: int = 1  # 1 for a quote that is not inside another quote


@dataclass(frozen=True)
class CodeBlock:
    """A fenced or indented code block; lines are kept verbatim."""
    lines: Tuple[str, ...]
    language: str | None = None


@dataclass(frozen=True)
class TableBlock:
    """A table with a header row, body rows and column alignments."""
    header: Tuple[InlineContent, ...]
    rows: Tuple[Tuple[InlineContent, ...], ...]
    alignments: Tuple[TableAlignment, ...]


@dataclass(frozen=True)
class ThematicBreakBlock:
    """A thematic break (horizontal rule)."""


@dataclass(frozen=True)
class HtmlBlock:
    """A raw HTML block, shown as text."""
    lines: Tuple[str, ...]


Block = Union[
    HeadingBlock,
    ParagraphBlock,
    ListBlock,
    BlockQuoteBlock,
    CodeBlock,
    TableBlock,
    ThematicBreakBlock,
    HtmlBlock,
]


@dataclass(frozen=True)
class Document:
    """A parsed document."""
    blocks: Tuple[Block, ...] = ()

    # Footnote label -> definition content, in order of first reference
    footnotes: Dict[str, Tuple[Block, ...]] = field(default_factory=dict)
    source_path: str | None = None

    def is_empty(self) -> bool:
        """True if the document has no content at all."""
        return not self.blocks and not self.footnotes
