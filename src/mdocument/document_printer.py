"""
Printer that describes a Document tree, for debugging the parser adapter.
"""
from typing import Any, List

from mdocument.document_node import (
    Block, BlockQuoteBlock, CodeBlock, Document, HeadingBlock, HtmlBlock, InlineContent,
    InlineStyle, ListBlock, ParagraphBlock, TableBlock
)


class DocumentPrinter:
    """Produces an indented outline of a document's nodes."""
    def __init__(self) -> None:
        """Initialize the printer with zero indentation."""
        self.indent_level = 0
        self._lines: List[str] = []

    def format(self, document: Document) -> List[str]:
        """
        Describe a whole document.

        Args:
            document: The document to describe

        Returns:
            One string per output line
        """
        self.indent_level = 0
        self._lines = []
        self._emit(f"Document ({len(document.blocks)} blocks)")
        self.indent_level += 1
        for block in document.blocks:
            self.visit(block)

        for label, blocks in document.footnotes.items():
            self._emit(f"Footnote [^{label}]")
            self.indent_level += 1
            for block in blocks:
                self.visit(block)

            self.indent_level -= 1

        self.indent_level -= 1
        return self._lines

    def visit(self, node: Block) -> Any:
        """
        Visit a node and dispatch to the appropriate visit method.

        Args:
            node: The node to visit

        Returns:
            The result of visiting the node
        """
        method_name = f'visit_{node.__class__.__name__}'
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: Block) -> None:
        """Default visit method that prints the node type."""
        self._emit(node.__class__.__name__)

    def visit_HeadingBlock(self, node: HeadingBlock) -> None:  # pylint: disable=invalid-name
        """Print a heading with its level and text."""
        self._emit(f"Heading (level {node.level}): {self._describe_inline(node.content)}")

    def visit_ParagraphBlock(self, node: ParagraphBlock) -> None:  # pylint: disable=invalid-name
        """Print a paragraph's runs."""
        self._emit(f"Paragraph: {self._describe_inline(node.content)}")

    def visit_ListBlock(self, node: ListBlock) -> None:  # pylint: disable=invalid-name
        """Print a list and each of its items."""
        kind = f"Ordered (start {node.start})" if node.ordered else "Unordered"
        spacing = "tight" if node.tight else "loose"
        self._emit(f"{kind} list, {spacing}, depth {node.depth}")
        self.indent_level += 1
        for item in node.items:
            task = ""
            if item.checked is not None:
                task = " [x]" if item.checked else " [ ]"

            self._emit(f"Item{task}")
            self.indent_level += 1
            for block in item.blocks:
                self.visit(block)

            self.indent_level -= 1

        self.indent_level -= 1

    def visit_BlockQuoteBlock(self, node: BlockQuoteBlock) -> None:  # pylint: disable=invalid-name
        """Print a block quote and its children."""
        self._emit(f"BlockQuote (depth {node.depth})")
        self.indent_level += 1
        for block in node.blocks:
            self.visit(block)

        self.indent_level -= 1

    def visit_CodeBlock(self, node: CodeBlock) -> None:  # pylint: disable=invalid-name
        """Print a code block's language and size."""
        self._emit(f"CodeBlock ({node.language or 'no language'}, {len(node.lines)} lines)")

    def visit_TableBlock(self, node: TableBlock) -> None:  # pylint: disable=invalid-name
        """Print a table's shape and alignments."""
        alignments = ", ".join(alignment.value for alignment in node.alignments)
        self._emit(f"Table ({len(node.header)} columns, {len(node.rows)} rows): {alignments}")

    def visit_HtmlBlock(self, node: HtmlBlock) -> None:  # pylint: disable=invalid-name
        """Print an HTML block's size."""
        self._emit(f"HtmlBlock ({len(node.lines)} lines)")

    def _describe_inline(self, content: InlineContent) -> str:
        parts = []
        for run in content:
            if run.style == InlineStyle.NONE:
                parts.append(repr(run.text))
                continue

            names = "+".join(flag.name for flag in InlineStyle if flag and flag in run.style and flag.name)
            parts.append(f"{names}({run.text!r})")

        return " ".join(parts)

    def _emit(self, text: str) -> None:
        self._lines.append("  " * self.indent_level + text)
