"""
Layout engine that turns a Document into display lines for a given width.

Each block type has a handler that maps (block, available width, base
style) to display lines.  Container blocks lay out their children at a
reduced width and then prefix every child line with their own markers, so
nested lists and quotes compose by recursion.
"""

from dataclasses import replace
import logging
from typing import List, Sequence, Tuple

from mdocument.document_node import (
    Block,
    BlockQuoteBlock,
    CodeBlock,
    Document,
    HeadingBlock,
    HtmlBlock,
    InlineContent,
    InlineStyle,
    ListBlock,
    ParagraphBlock,
    TableBlock,
    ThematicBreakBlock,
)
from mdlayout.layout_line import DisplayLine, StyledSpan, clip_spans, spans_width
from mdlayout.layout_render_state import RenderState
from mdlayout.layout_settings import CodeOverflow, LayoutSettings
from mdlayout.layout_style import (
    CODE_BLOCK_BG,
    CODE_BLOCK_STYLE,
    CYAN,
    CharacterAttributes,
    FOOTNOTE_STYLE,
    HTML_STYLE,
    IMAGE_STYLE,
    INLINE_CODE_STYLE,
    LIST_MARKER_STYLE,
    PLAIN,
    QUOTE_MARKER_STYLE,
    QUOTE_TEXT_STYLE,
    RULE_STYLE,
    TASK_MARKER_STYLE,
    TextStyle,
    heading_band_color,
    heading_style,
)
from mdlayout.layout_table import TableCell, TableFormatter
from mdlayout.layout_wrapper import TextWrapper


class LayoutEngine:
    """Lays out documents as styled, wrapped display lines."""

    def __init__(self, settings: LayoutSettings | None = None) -> None:
        """
        Initialize the layout engine.

        Args:
            settings: Layout settings; defaults are used if None
        """
        self._logger = logging.getLogger("LayoutEngine")
        self._settings = settings or LayoutSettings()
        self._wrapper = TextWrapper()
        self._table_formatter = TableFormatter(self._settings.table_min_column_width)

    @property
    def settings(self) -> LayoutSettings:
        """The settings this engine lays out with."""
        return self._settings

    def render(self, document: Document, width: int) -> RenderState:
        """
        Lay out a document and package the result with its width.

        Args:
            document: The document to lay out
            width: Target width in columns

        Returns:
            The render state for (document, width)
        """
        return RenderState(tuple(self.layout(document, width)), width)

    def layout(self, document: Document, width: int) -> List[DisplayLine]:
        """
        Lay out a document.

        Top-level blocks, followed by the footnote definitions, are separated
        by exactly one blank line.

        Args:
            document: The document to lay out
            width: Target width in columns; values below 1 act as 1

        Returns:
            The display lines, with no leading or trailing blank lines
        """
        width = max(1, width)
        sections: List[List[DisplayLine]] = []
        for index, block in enumerate(document.blocks):
            block_lines = self._layout_block(block, width, PLAIN)
            sections.append([replace(line, source_block=index) for line in block_lines])

        for label, blocks in document.footnotes.items():
            sections.append(self._layout_footnote(label, blocks, width))

        lines: List[DisplayLine] = []
        for section in sections:
            if not section:
                continue

            if lines:
                lines.append(DisplayLine())

            lines.extend(section)

        self._logger.debug("laid out %d blocks as %d lines at width %d", len(document.blocks), len(lines), width)
        return lines

    def _layout_block(self, block: Block, width: int, base: TextStyle) -> List[DisplayLine]:
        """
        Lay out one block.

        Args:
            block: The block
            width: Available width
            base: Style inherited from enclosing blocks

        Returns:
            The block's lines
        """
        if isinstance(block, ParagraphBlock):
            return self._wrap(self._inline_spans(block.content, base), width)

        if isinstance(block, HeadingBlock):
            band = heading_band_color(block.level)
            wrapped = self._wrap(self._inline_spans(block.content, heading_style(block.level)), width)
            return [replace(line, background=band) for line in wrapped]

        if isinstance(block, ListBlock):
            return self._layout_list(block, width, base)

        if isinstance(block, BlockQuoteBlock):
            return self._layout_quote(block, width)

        if isinstance(block, CodeBlock):
            return self._layout_code(block, width)

        if isinstance(block, TableBlock):
            return self._layout_table(block, width, base)

        if isinstance(block, ThematicBreakBlock):
            return [DisplayLine((StyledSpan(self._settings.rule_char * width, RULE_STYLE),))]

        if isinstance(block, HtmlBlock):
            lines: List[DisplayLine] = []
            for raw in block.lines:
                lines.extend(self._wrap([StyledSpan(raw, base.with_attributes(HTML_STYLE.attributes))], width))

            return lines

        self._logger.warning("no layout for block type %s", block.__class__.__name__)
        return []

    def _layout_children(
        self,
        blocks: Sequence[Block],
        width: int,
        base: TextStyle,
        separate: bool
    ) -> List[DisplayLine]:
        """
        Lay out the child blocks of a container.

        Args:
            blocks: The children
            width: Width available to the children
            base: Style for the children's text
            separate: Whether to put a blank line between children

        Returns:
            The children's lines
        """
        lines: List[DisplayLine] = []
        for block in blocks:
            block_lines = self._layout_block(block, width, base)
            if not block_lines:
                continue

            if lines and separate:
                lines.append(DisplayLine())

            lines.extend(block_lines)

        return lines

    def _layout_list(self, block: ListBlock, width: int, base: TextStyle) -> List[DisplayLine]:
        """Lay out a list, hanging each item's lines under its marker."""
        if block.ordered:
            numbers = [f"{block.start + i}." for i in range(len(block.items))]
            number_width = max((len(n) for n in numbers), default=0)
            markers = [n.rjust(number_width) + " " for n in numbers]

        else:
            markers = [self._settings.bullet_marker] * len(block.items)

        lines: List[DisplayLine] = []
        for item, marker in zip(block.items, markers):
            marker_spans = [StyledSpan(marker, LIST_MARKER_STYLE)]
            if item.checked is not None:
                marker_spans.append(StyledSpan("[x] " if item.checked else "[ ] ", TASK_MARKER_STYLE))

            prefix, child_width = self._fit_prefix(marker_spans, width)
            content = self._layout_children(item.blocks, child_width, base, not block.tight)
            item_lines = self._hang(content, prefix)
            if not item_lines:
                continue

            if lines and not block.tight:
                lines.append(DisplayLine())

            lines.extend(item_lines)

        return lines

    def _layout_quote(self, block: BlockQuoteBlock, width: int) -> List[DisplayLine]:
        """Lay out a block quote with a marker on every line."""
        prefix, child_width = self._fit_prefix([StyledSpan(self._settings.quote_marker, QUOTE_MARKER_STYLE)], width)
        content = self._layout_children(block.blocks, child_width, QUOTE_TEXT_STYLE, True)
        if not content:
            if not prefix:
                return []

            content = [DisplayLine()]

        return [line.with_prefix(prefix) for line in content]

    def _layout_code(self, block: CodeBlock, width: int) -> List[DisplayLine]:
        """Emit code lines verbatim on a code background."""
        lines: List[DisplayLine] = []
        for raw in block.lines or ("",):
            spans: Tuple[StyledSpan, ...] = (StyledSpan(raw, CODE_BLOCK_STYLE),) if raw else ()
            if self._settings.code_overflow == CodeOverflow.TRUNCATE:
                spans = clip_spans(spans, width)

            lines.append(DisplayLine(spans, background=CODE_BLOCK_BG))

        return lines

    def _layout_table(self, block: TableBlock, width: int, base: TextStyle) -> List[DisplayLine]:
        """Delegate a table to the table formatter."""
        header = [self._cell_spans(cell, base) for cell in block.header]
        rows = [[self._cell_spans(cell, base) for cell in row] for row in block.rows]
        return self._table_formatter.format(header, rows, block.alignments, width)

    def _layout_footnote(self, label: str, blocks: Sequence[Block], width: int) -> List[DisplayLine]:
        """Lay out a footnote definition with its label hanging in front."""
        prefix, child_width = self._fit_prefix([StyledSpan(f"[^{label}]: ", FOOTNOTE_STYLE)], width)
        content = self._layout_children(blocks, child_width, PLAIN, True)
        return self._hang(content, prefix)

    def _hang(self, content: List[DisplayLine], prefix: Tuple[StyledSpan, ...]) -> List[DisplayLine]:
        """
        Put a prefix in front of the first line and indent the rest to match.

        Args:
            content: Lines to prefix
            prefix: Spans for the first line

        Returns:
            The prefixed lines. Empty content produces a line holding just the
            prefix, or no lines at all when the prefix was clipped away
        """
        if not content:
            return [DisplayLine(prefix)] if prefix else []

        indent = (StyledSpan(" " * spans_width(prefix)),) if prefix else ()
        lines = [content[0].with_prefix(prefix)]
        for line in content[1:]:
            lines.append(line.with_prefix(indent) if line.spans else line)

        return lines

    def _fit_prefix(self, prefix: Sequence[StyledSpan], width: int) -> Tuple[Tuple[StyledSpan, ...], int]:
        """
        Make sure a container prefix leaves at least one column for content.

        Args:
            prefix: The container's marker spans
            width: Width available to the container

        Returns:
            The (possibly clipped) prefix and the width left for content
        """
        prefix_width = spans_width(prefix)
        if prefix_width <= width - 1:
            return tuple(prefix), width - prefix_width

        clipped = clip_spans(prefix, width - 1)
        return clipped, max(1, width - spans_width(clipped))

    def _wrap(self, spans: List[StyledSpan], width: int) -> List[DisplayLine]:
        return [DisplayLine(line) for line in self._wrapper.wrap(spans, width)]

    def _cell_spans(self, content: InlineContent, base: TextStyle) -> TableCell:
        spans = self._inline_spans(content, base)
        return tuple(StyledSpan(span.text.replace("\n", " "), span.style) for span in spans)

    def _inline_spans(self, content: InlineContent, base: TextStyle) -> List[StyledSpan]:
        """
        Convert inline runs to styled spans.

        Args:
            content: The inline runs
            base: Style the runs' own styles are added to

        Returns:
            The styled spans
        """
        spans: List[StyledSpan] = []
        for run in content:
            if run.is_hard_break:
                spans.append(StyledSpan("\n", base))
                continue

            text = run.text
            style = base
            if InlineStyle.STRONG in run.style:
                style = style.with_attributes(CharacterAttributes.BOLD)

            if InlineStyle.EMPHASIS in run.style:
                style = style.with_attributes(CharacterAttributes.ITALIC)

            if InlineStyle.STRIKETHROUGH in run.style:
                style = style.with_attributes(CharacterAttributes.STRIKE)

            if InlineStyle.LINK in run.style:
                style = style.with_fg(CYAN).with_attributes(CharacterAttributes.UNDERLINE)

            if InlineStyle.CODE in run.style:
                text = f"`{text}`"
                style = style.with_fg(INLINE_CODE_STYLE.fg).with_attributes(INLINE_CODE_STYLE.attributes)

            if InlineStyle.FOOTNOTE_REF in run.style:
                text = f"[^{text}]"
                style = style.with_fg(FOOTNOTE_STYLE.fg)

            if InlineStyle.IMAGE in run.style:
                text = f"[image: {text}]" if text else "[image]"
                style = style.with_fg(IMAGE_STYLE.fg).with_attributes(IMAGE_STYLE.attributes)

            if InlineStyle.HTML in run.style:
                style = style.with_attributes(HTML_STYLE.attributes)

            spans.append(StyledSpan(text, style))

        return spans
