"""Tests for the layout engine."""

import pytest

from mdocument.document_node import (
    BlockQuoteBlock,
    CodeBlock,
    Document,
    InlineRun,
    InlineStyle,
    ListBlock,
    ListItem,
    ParagraphBlock,
)
from mdocument.document_parser import DocumentParser
from mdlayout.layout_engine import LayoutEngine
from mdlayout.layout_settings import CodeOverflow, LayoutSettings
from mdlayout.layout_style import CODE_BLOCK_BG, CYAN, CharacterAttributes, heading_band_color


SAMPLE = """# Heading that is fairly long

A paragraph with *emphasis*, **strong** text and `code` that goes on
for a while so that it has to wrap.

- first item with enough words to wrap around
- [x] finished task
- [ ] open task
  1. nested ordered item
  2. another one

> A quote with a fair amount of text in it.
>
> > And a nested quote inside it.

---

Footnote reference[^n] and a [link](https://example.com).

[^n]: The footnote text, long enough to wrap as well.
"""


@pytest.fixture
def engine():
    """Create an engine with default settings."""
    return LayoutEngine()


@pytest.fixture
def parser():
    """Create a parser."""
    return DocumentParser()


def layout_text(engine, parser, source, width):
    """Parse and lay out markdown, returning each line's text."""
    return [line.text for line in engine.layout(parser.parse(source), width)]


class TestBlockSeparation:
    """Test spacing between top-level blocks."""

    def test_two_paragraphs_have_one_blank_line(self, engine, parser):
        """Test the separator between paragraphs."""
        assert layout_text(engine, parser, "one\n\ntwo\n", 40) == ["one", "", "two"]

    def test_no_leading_or_trailing_blank_lines(self, engine, parser):
        """Test the ends of the layout."""
        lines = layout_text(engine, parser, "\n\n# A\n\ntext\n\n\n", 40)
        assert lines[0] != ""
        assert lines[-1] != ""

    def test_empty_document(self, engine):
        """Test that an empty document has no lines."""
        assert engine.layout(Document(), 40) == []

    def test_source_block_index(self, engine, parser):
        """Test that lines remember which block they came from."""
        lines = engine.layout(parser.parse("one\n\ntwo\n"), 40)
        assert [line.source_block for line in lines] == [0, None, 1]


class TestInvariants:
    """Test properties that hold for any document."""

    @pytest.mark.parametrize("width", [1, 2, 3, 5, 8, 13, 20, 34, 80])
    def test_lines_fit_width(self, engine, parser, width):
        """Test that text lines never exceed the width."""
        for line in engine.layout(parser.parse(SAMPLE), width):
            assert line.width <= width, line.text

    def test_layout_is_idempotent(self, engine, parser):
        """Test that laying out twice gives identical lines."""
        document = parser.parse(SAMPLE)
        assert engine.layout(document, 37) == engine.layout(document, 37)

    def test_width_below_one_acts_as_one(self, engine, parser):
        """Test degenerate widths."""
        document = parser.parse("hello\n")
        assert engine.layout(document, 0) == engine.layout(document, 1)

    def test_render_state(self, engine, parser):
        """Test that render packages the lines with their width."""
        state = engine.render(parser.parse("one\n\ntwo\n"), 20)
        assert state.width == 20
        assert state.total_lines == 3
        assert [line.text for line in state.slice(1, 5)] == ["", "two"]
        assert state.slice(5, 2) == ()


class TestParagraphs:
    """Test paragraph text and inline styles."""

    def test_wrapping(self, engine, parser):
        """Test the classic four word example."""
        assert layout_text(engine, parser, "one two three four\n", 10) == ["one two", "three four"]

    def test_hard_break(self, engine, parser):
        """Test that a hard break starts a new line."""
        assert layout_text(engine, parser, "one  \ntwo\n", 40) == ["one", "two"]

    def test_inline_decorations(self, engine, parser):
        """Test the text shown for code, images and footnote references."""
        lines = layout_text(engine, parser, "`x` ![alt](a.png)[^1]\n\n[^1]: n\n", 80)
        assert lines[0] == "`x` [image: alt][^1]"

    def test_strong_is_bold(self, engine):
        """Test that strong text is drawn bold."""
        document = Document((ParagraphBlock((InlineRun("b", InlineStyle.STRONG),)),))
        span = engine.layout(document, 10)[0].spans[0]
        assert CharacterAttributes.BOLD in span.style.attributes

    def test_link_is_underlined(self, engine):
        """Test the link style."""
        document = Document((ParagraphBlock((InlineRun("l", InlineStyle.LINK, "https://x"),)),))
        span = engine.layout(document, 10)[0].spans[0]
        assert span.style.fg == CYAN
        assert CharacterAttributes.UNDERLINE in span.style.attributes


class TestHeadings:
    """Test heading bands."""

    def test_every_heading_line_has_band(self, engine, parser):
        """Test that wrapped heading lines all carry the band colour."""
        lines = engine.layout(parser.parse("## A heading that wraps\n"), 10)
        assert len(lines) > 1
        assert all(line.background == heading_band_color(2) for line in lines)

    def test_heading_text_is_bold(self, engine, parser):
        """Test that top level headings are bold."""
        line = engine.layout(parser.parse("# Title\n"), 40)[0]
        assert line.text == "Title"
        assert CharacterAttributes.BOLD in line.spans[0].style.attributes


class TestLists:
    """Test list markers and indentation."""

    def test_tight_list(self, engine, parser):
        """Test that tight items are not separated."""
        assert layout_text(engine, parser, "- a\n- b\n", 40) == ["- a", "- b"]

    def test_loose_list(self, engine, parser):
        """Test that loose items are separated by a blank line."""
        assert layout_text(engine, parser, "- a\n\n- b\n", 40) == ["- a", "", "- b"]

    def test_ordered_markers_are_right_aligned(self, engine, parser):
        """Test numbering that changes width."""
        assert layout_text(engine, parser, "9. x\n10. y\n", 40) == [" 9. x", "10. y"]

    def test_task_markers(self, engine, parser):
        """Test checkbox markers."""
        assert layout_text(engine, parser, "- [x] done\n- [ ] todo\n", 40) == ["- [x] done", "- [ ] todo"]

    def test_continuation_lines_hang(self, engine, parser):
        """Test that wrapped item text is indented under the item."""
        assert layout_text(engine, parser, "- aaa bbb\n", 6) == ["- aaa", "  bbb"]

    def test_nested_list_is_indented(self, engine, parser):
        """Test nesting."""
        assert layout_text(engine, parser, "- a\n  - b\n", 40) == ["- a", "  - b"]

    def test_empty_item(self, engine):
        """Test that an item with no content still shows its marker."""
        document = Document((ListBlock(False, (ListItem(()),)),))
        assert [line.text for line in engine.layout(document, 10)] == ["- "]

    def test_clipped_marker_on_empty_item_adds_no_line(self, engine):
        """Test that an empty item whose marker no longer fits leaves no blank line."""
        inner = ListBlock(False, (ListItem(()),), depth=1)
        document = Document((ListBlock(False, (ListItem((ParagraphBlock((InlineRun("x"),)), inner)),)),))
        assert [line.text for line in engine.layout(document, 3)] == ["- x"]


class TestQuotes:
    """Test block quote prefixes."""

    def test_simple_quote(self, engine, parser):
        """Test a one line quote."""
        assert layout_text(engine, parser, "> quoted\n", 40) == ["> quoted"]

    def test_every_line_is_prefixed(self, engine, parser):
        """Test that wrapped and blank quote lines keep the marker."""
        lines = layout_text(engine, parser, "> aaa bbb\n>\n> ccc\n", 7)
        assert lines == ["> aaa", "> bbb", "> ", "> ccc"]

    def test_nested_quote(self, engine, parser):
        """Test that nested quotes repeat the marker."""
        assert layout_text(engine, parser, "> > deep\n", 40) == ["> > deep"]

    def test_deeply_nested_quote(self, engine, parser):
        """Test that text below many quote levels is shown."""
        assert layout_text(engine, parser, ">" * 50 + " deep\n", 120) == ["> " * 50 + "deep"]

    def test_empty_quote_with_clipped_marker(self, engine):
        """Test that an empty quote at width one produces no lines."""
        assert engine.layout(Document((BlockQuoteBlock((), 1),)), 1) == []


class TestCode:
    """Test code block output."""

    def test_code_lines_are_verbatim(self, engine, parser):
        """Test that code is not wrapped by default."""
        lines = engine.layout(parser.parse("```\nline that is long\n\n  indented\n```\n"), 5)
        assert [line.text for line in lines] == ["line that is long", "", "  indented"]
        assert all(line.background == CODE_BLOCK_BG for line in lines)

    def test_truncate_setting(self, parser):
        """Test cutting code lines at the width."""
        engine = LayoutEngine(LayoutSettings(code_overflow=CodeOverflow.TRUNCATE))
        lines = engine.layout(parser.parse("```\nline that is long\n```\n"), 5)
        assert [line.text for line in lines] == ["line "]

    def test_empty_code_block(self, engine):
        """Test that an empty code block still takes a line."""
        lines = engine.layout(Document((CodeBlock(()),)), 10)
        assert len(lines) == 1
        assert lines[0].background == CODE_BLOCK_BG


class TestOtherBlocks:
    """Test rules, tables and footnotes."""

    def test_rule_spans_width(self, engine, parser):
        """Test the thematic break."""
        assert layout_text(engine, parser, "---\n", 10) == ["─" * 10]

    def test_table(self, engine, parser):
        """Test that tables go through the formatter."""
        lines = layout_text(engine, parser, "| a | b |\n|---|--:|\n| 1 | 22 |\n", 40)
        assert lines == ["+---+----+", "| a |  b |", "+---+----+", "| 1 | 22 |", "+---+----+"]

    def test_footnotes_follow_blocks(self, engine, parser):
        """Test footnote definitions after the document body."""
        lines = layout_text(engine, parser, "A[^1].\n\n[^1]: note\n", 40)
        assert lines == ["A[^1].", "", "[^1]: note"]

    def test_unreferenced_footnote_is_shown(self, engine, parser):
        """Test that a definition without references still appears."""
        lines = layout_text(engine, parser, "Body.\n\n[^a]: spare note\n", 40)
        assert lines == ["Body.", "", "[^a]: spare note"]

    def test_html_block(self, engine, parser):
        """Test that HTML blocks are shown as dim text."""
        lines = engine.layout(parser.parse("<div>\nhi\n</div>\n"), 40)
        assert [line.text for line in lines] == ["<div>", "hi", "</div>"]
        assert CharacterAttributes.DIM in lines[0].spans[0].style.attributes
