"""Document model and CommonMark parser adapter."""

from mdocument.document_exceptions import DocumentError, DocumentIoError, ParseError
from mdocument.document_node import (
    HARD_BREAK,
    Block,
    BlockQuoteBlock,
    CodeBlock,
    Document,
    HeadingBlock,
    HtmlBlock,
    InlineContent,
    InlineRun,
    InlineStyle,
    ListBlock,
    ListItem,
    ParagraphBlock,
    TableAlignment,
    TableBlock,
    ThematicBreakBlock,
    inline_plain_text
)
from mdocument.document_parser import DocumentParser
from mdocument.document_printer import DocumentPrinter


__all__ = [
    "HARD_BREAK",
    "Block",
    "BlockQuoteBlock",
    "CodeBlock",
    "Document",
    "DocumentError",
    "DocumentIoError",
    "DocumentParser",
    "DocumentPrinter",
    "HeadingBlock",
    "HtmlBlock",
    "InlineContent",
    "InlineRun",
    "InlineStyle",
    "ListBlock",
    "ListItem",
    "ParagraphBlock",
    "ParseError",
    "TableAlignment",
    "TableBlock",
    "ThematicBreakBlock",
    "inline_plain_text"
]
