"""
Parser adapter that turns CommonMark text into a Document.

Parsing is delegated to markdown-it-py (CommonMark preset with the GFM table
and strikethrough rules, plus the footnote and tasklists plugins from
mdit-py-plugins).  The resulting syntax tree is converted into the immutable
node types in `mdocument.document_node`.
"""

from dataclasses import replace
import logging
from typing import Dict, List, Sequence, Tuple

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from mdocument.document_exceptions import ParseError
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
)


# Class attribute the tasklists plugin puts on its generated <input> element
_TASK_CHECKBOX_CLASS = 'class="task-list-item-checkbox"'
_TASK_CHECKED_ATTR = 'checked="checked"'

# Deepest block and inline nesting the markdown parser will follow
MAX_NESTING = 100

# Environment key under which every footnote definition is kept
_DEFINITIONS_ENV_KEY = "mdview_footnote_definitions"


def _keep_footnote_definitions(state: StateCore) -> None:
    """
    Record every footnote definition before the footnote plugin moves them.

    The plugin only carries referenced definitions into its trailing
    footnote block, so unreferenced ones are captured here.

    Args:
        state: Core parser state
    """
    definitions: Dict[str, List[Token]] = {}
    current: List[Token] | None = None
    label = ""
    for token in state.tokens:
        if token.type == "footnote_reference_open":
            current = []
            label = str(token.meta.get("label", ""))
            continue

        if token.type == "footnote_reference_close":
            if current is not None:
                definitions.setdefault(label, current)

            current = None
            continue

        if current is not None:
            current.append(token)

    state.env[_DEFINITIONS_ENV_KEY] = definitions


class DocumentParser:
    """Converts markdown source into a Document."""

    def __init__(self, tab_width: int = 4) -> None:
        """
        Initialize the parser.

        Args:
            tab_width: Number of columns a tab expands to inside code blocks
        """
        self._logger = logging.getLogger("DocumentParser")
        self._tab_width = max(1, tab_width)
        self._md = (
            MarkdownIt("commonmark", options_update={"maxNesting": MAX_NESTING})
            .enable("table")
            .enable("strikethrough")
            .use(footnote_plugin)
            .use(tasklists_plugin)
        )
        self._md.core.ruler.before("footnote_tail", "footnote_definitions", _keep_footnote_definitions)

    def parse_bytes(self, data: bytes, source_path: str | None = None) -> Document:
        """
        Decode UTF-8 source bytes and parse them.

        Args:
            data: Raw file contents
            source_path: Optional path the bytes were read from

        Returns:
            The parsed document

        Raises:
            ParseError: If the bytes are not valid UTF-8 or cannot be parsed
        """
        try:
            text = data.decode("utf-8-sig")

        except UnicodeDecodeError as e:
            raise ParseError(
                f"Invalid UTF-8 data at byte {e.start}: {e.reason}",
                {"position": e.start, "reason": e.reason, "path": source_path}
            ) from e

        return self.parse(text, source_path)

    def parse(self, text: str, source_path: str | None = None) -> Document:
        """
        Parse markdown text.

        Args:
            text: The markdown source
            source_path: Optional path the text was read from

        Returns:
            The parsed document

        Raises:
            ParseError: If the underlying parser fails
        """
        try:
            env: Dict = {}
            tokens = self._md.parse(text, env)
            root = SyntaxTreeNode(tokens)

        except Exception as e:
            self._logger.exception("markdown parser failed for %s", source_path)
            raise ParseError(f"Unable to parse document: {e}", {"path": source_path}) from e

        blocks: List[Block] = []
        footnotes: Dict[str, Tuple[Block, ...]] = {}
        for node in root.children:
            if node.type == "footnote_block":
                self._collect_footnotes(node, footnotes)
                continue

            blocks.extend(self._convert_blocks([node], 0, 0))

        # Definitions that were never referenced follow the referenced ones
        for label, definition in env.get(_DEFINITIONS_ENV_KEY, {}).items():
            if label not in footnotes:
                footnotes[label] = self._convert_blocks(SyntaxTreeNode(definition).children, 0, 0)

        self._logger.debug(
            "parsed %d blocks and %d footnotes from %s", len(blocks), len(footnotes), source_path
        )
        return Document(tuple(blocks), footnotes, source_path)

    def _collect_footnotes(self, block_node: SyntaxTreeNode, footnotes: Dict[str, Tuple[Block, ...]]) -> None:
        """
        Collect the footnote definitions emitted at the end of the token stream.

        Args:
            block_node: The footnote_block node
            footnotes: Mapping to fill with label -> content
        """
        for node in block_node.children:
            if node.type != "footnote":
                continue

            footnotes[self._footnote_label(node.meta)] = self._convert_blocks(node.children, 0, 0)

    def _footnote_label(self, meta: Dict) -> str:
        """Get a footnote's label, numbering inline footnotes that have none."""
        label = meta.get("label")
        if label:
            return str(label)

        return str(int(meta.get("id", 0)) + 1)

    def _convert_blocks(
        self,
        nodes: Sequence[SyntaxTreeNode],
        list_depth: int,
        quote_depth: int
    ) -> Tuple[Block, ...]:
        """
        Convert a sequence of block-level syntax nodes.

        Args:
            nodes: The nodes to convert
            list_depth: Number of lists enclosing these nodes
            quote_depth: Number of block quotes enclosing these nodes

        Returns:
            The converted blocks
        """
        blocks: List[Block] = []
        for node in nodes:
            node_type = node.type
            if node_type == "paragraph":
                blocks.append(ParagraphBlock(self._block_inline(node)))

            elif node_type == "heading":
                level = int(node.tag[1]) if len(node.tag) == 2 else 1
                blocks.append(HeadingBlock(max(1, min(6, level)), self._block_inline(node)))

            elif node_type in ("bullet_list", "ordered_list"):
                blocks.append(self._convert_list(node, list_depth, quote_depth))

            elif node_type == "blockquote":
                children = self._convert_blocks(node.children, list_depth, quote_depth + 1)
                blocks.append(BlockQuoteBlock(children, quote_depth + 1))

            elif node_type in ("fence", "code_block"):
                blocks.append(self._convert_code(node))

            elif node_type == "hr":
                blocks.append(ThematicBreakBlock())

            elif node_type == "table":
                blocks.append(self._convert_table(node))

            elif node_type == "html_block":
                blocks.append(HtmlBlock(tuple(node.content.rstrip("\n").split("\n"))))

            else:
                self._logger.debug("skipping unsupported block node: %s", node_type)

        return tuple(blocks)

    def _convert_code(self, node: SyntaxTreeNode) -> CodeBlock:
        """Convert a fenced or indented code block."""
        language = None
        if node.type == "fence":
            info = node.info.strip()
            if info:
                language = info.split()[0]

        content = node.content
        if content.endswith("\n"):
            content = content[:-1]

        lines = tuple(line.expandtabs(self._tab_width) for line in content.split("\n")) if content else ()
        return CodeBlock(lines, language)

    def _convert_list(self, node: SyntaxTreeNode, list_depth: int, quote_depth: int) -> ListBlock:
        """
        Convert a bullet or ordered list.

        Args:
            node: The list node
            list_depth: Number of lists enclosing this one
            quote_depth: Number of block quotes enclosing this list

        Returns:
            The converted list
        """
        ordered = node.type == "ordered_list"
        start = 1
        if ordered:
            start_attr = node.attrs.get("start")
            if start_attr is not None:
                try:
                    start = int(start_attr)

                except (TypeError, ValueError):
                    start = 1

        items: List[ListItem] = []
        tight = True
        for item_node in node.children:
            if item_node.type != "list_item":
                continue

            checked = self._task_state(item_node)
            blocks = self._convert_blocks(item_node.children, list_depth + 1, quote_depth)
            if checked is not None:
                blocks = self._strip_task_space(blocks)

            # markdown-it hides the paragraphs of tight lists
            if any(child.type == "paragraph" and not child.hidden for child in item_node.children):
                tight = False

            items.append(ListItem(blocks, checked))

        return ListBlock(ordered, tuple(items), start, tight, list_depth)

    def _task_state(self, item_node: SyntaxTreeNode) -> bool | None:
        """
        Find the checkbox state the tasklists plugin attached to a list item.

        Args:
            item_node: The list item node

        Returns:
            True or False for a task item, None for an ordinary item
        """
        if not item_node.children or item_node.children[0].type != "paragraph":
            return None

        for child in item_node.children[0].children:
            if child.type != "inline" or not child.children:
                continue

            first = child.children[0]
            if first.type == "html_inline" and _TASK_CHECKBOX_CLASS in first.content:
                return _TASK_CHECKED_ATTR in first.content

        return None

    def _strip_task_space(self, blocks: Tuple[Block, ...]) -> Tuple[Block, ...]:
        """Remove the space the tasklists plugin leaves after the checkbox."""
        if not blocks or not isinstance(blocks[0], ParagraphBlock) or not blocks[0].content:
            return blocks

        content = blocks[0].content
        first = replace(content[0], text=content[0].text.lstrip())
        stripped = ((first,) if first.text else ()) + content[1:]
        return (ParagraphBlock(stripped),) + blocks[1:]

    def _convert_table(self, node: SyntaxTreeNode) -> TableBlock:
        """Convert a GFM table."""
        header: Tuple[InlineContent, ...] = ()
        rows: List[Tuple[InlineContent, ...]] = []
        alignments: List[TableAlignment] = []
        for section in node.children:
            for row_node in section.children:
                cells = tuple(self._cell_content(cell) for cell in row_node.children)
                if section.type == "thead":
                    header = cells
                    alignments = [self._cell_alignment(cell) for cell in row_node.children]

                else:
                    rows.append(cells)

        return TableBlock(header, tuple(rows), tuple(alignments))

    def _cell_content(self, cell: SyntaxTreeNode) -> InlineContent:
        """Get a table cell's inline content, with hard breaks flattened to spaces."""
        content = self._block_inline(cell)
        return tuple(replace(run, text=" ") if run.is_hard_break else run for run in content)

    def _cell_alignment(self, cell: SyntaxTreeNode) -> TableAlignment:
        """Read the alignment markdown-it encodes in a cell's style attribute."""
        style = str(cell.attrs.get("style", ""))
        if "center" in style:
            return TableAlignment.CENTER

        if "right" in style:
            return TableAlignment.RIGHT

        return TableAlignment.LEFT

    def _block_inline(self, node: SyntaxTreeNode) -> InlineContent:
        """Get the inline content of a leaf block such as a paragraph or heading."""
        for child in node.children:
            if child.type == "inline":
                return tuple(self._merge_runs(self._convert_inline(child.children, InlineStyle.NONE, None)))

        return ()

    def _convert_inline(
        self,
        nodes: Sequence[SyntaxTreeNode],
        style: InlineStyle,
        target: str | None
    ) -> List[InlineRun]:
        """
        Convert inline syntax nodes to runs.

        Args:
            nodes: The inline nodes
            style: Styles inherited from enclosing nodes
            target: Link destination inherited from an enclosing link

        Returns:
            The converted runs
        """
        runs: List[InlineRun] = []
        for node in nodes:
            node_type = node.type
            if node_type == "text":
                runs.append(InlineRun(node.content, style, target))

            elif node_type == "softbreak":
                runs.append(InlineRun(" ", style, target))

            elif node_type == "hardbreak":
                runs.append(InlineRun(HARD_BREAK, style, target))

            elif node_type == "code_inline":
                runs.append(InlineRun(node.content, style | InlineStyle.CODE, target))

            elif node_type == "em":
                runs.extend(self._convert_inline(node.children, style | InlineStyle.EMPHASIS, target))

            elif node_type == "strong":
                runs.extend(self._convert_inline(node.children, style | InlineStyle.STRONG, target))

            elif node_type == "s":
                runs.extend(self._convert_inline(node.children, style | InlineStyle.STRIKETHROUGH, target))

            elif node_type == "link":
                href = str(node.attrs.get("href", ""))
                runs.extend(self._convert_inline(node.children, style | InlineStyle.LINK, href))

            elif node_type == "image":
                alt = "".join(run.text for run in self._convert_inline(node.children, style, target))
                runs.append(InlineRun(alt or node.content, style | InlineStyle.IMAGE, str(node.attrs.get("src", ""))))

            elif node_type == "footnote_ref":
                runs.append(InlineRun(self._footnote_label(node.meta), style | InlineStyle.FOOTNOTE_REF, target))

            elif node_type == "html_inline":
                if _TASK_CHECKBOX_CLASS in node.content:
                    continue

                runs.append(InlineRun(node.content, style | InlineStyle.HTML, target))

            elif node.children:
                runs.extend(self._convert_inline(node.children, style, target))

            elif node.content:
                runs.append(InlineRun(node.content, style, target))

        return runs

    def _merge_runs(self, runs: List[InlineRun]) -> List[InlineRun]:
        """Join adjacent runs that share style and target."""
        merged: List[InlineRun] = []
        for run in runs:
            if not run.text:
                continue

            if (
                merged and not run.is_hard_break and not merged[-1].is_hard_break
                and merged[-1].style == run.style and merged[-1].target == run.target
                and not run.style & (InlineStyle.CODE | InlineStyle.FOOTNOTE_REF | InlineStyle.IMAGE)
            ):
                merged[-1] = replace(merged[-1], text=merged[-1].text + run.text)
                continue

            merged.append(run)

        return merged
