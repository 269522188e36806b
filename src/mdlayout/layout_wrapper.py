"""
Word wrapping for styled text.

Text is split into words and whitespace while keeping each character's
style, then words are packed greedily onto lines of a fixed width.  A word
wider than a line is broken into line-sized chunks.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from mdlayout.layout_line import StyledSpan, char_width
from mdlayout.layout_style import TextStyle


@dataclass
class _Word:
    """A run of non-space characters, possibly in several styles."""
    spans: List[StyledSpan] = field(default_factory=list)
    width: int = 0

    def append(self, char: str, style: TextStyle) -> None:
        if self.spans and self.spans[-1].style == style:
            last = self.spans[-1]
            self.spans[-1] = StyledSpan(last.text + char, style)

        else:
            self.spans.append(StyledSpan(char, style))

        self.width += char_width(char)


@dataclass
class _Space:
    """Whitespace between words; dropped when a line wraps at it."""
    span: StyledSpan


class _Break:
    """A forced line break."""


_Piece = _Word | _Space | _Break


class TextWrapper:
    """Greedy word wrapper for styled spans."""

    def wrap(self, spans: Sequence[StyledSpan], width: int) -> List[Tuple[StyledSpan, ...]]:
        """
        Wrap styled text to a width.

        Newlines in span text force a break.  Runs of whitespace are kept
        between words on the same line and dropped where a line wraps.

        Args:
            spans: The text to wrap
            width: Maximum line width in columns; values below 1 act as 1

        Returns:
            The wrapped lines; empty input gives no lines
        """
        width = max(1, width)
        lines: List[Tuple[StyledSpan, ...]] = []
        current: List[StyledSpan] = []
        current_width = 0
        pending_space: _Space | None = None

        def flush() -> None:
            nonlocal current, current_width
            lines.append(self._merge(current))
            current = []
            current_width = 0

        pieces = self._split(spans)
        if not pieces:
            return []

        for piece in pieces:
            if isinstance(piece, _Break):
                flush()
                pending_space = None
                continue

            if isinstance(piece, _Space):
                if current:
                    pending_space = piece

                continue

            space_width = pending_space.span.width if pending_space is not None and current else 0
            if current and current_width + space_width + piece.width <= width:
                if pending_space is not None:
                    current.append(pending_space.span)

                current.extend(piece.spans)
                current_width += space_width + piece.width
                pending_space = None
                continue

            if current:
                flush()

            pending_space = None
            for chunk, chunk_width in self._break_word(piece, width):
                if current:
                    flush()

                current.extend(chunk)
                current_width = chunk_width

        if current or not lines:
            flush()

        return lines

    def _split(self, spans: Sequence[StyledSpan]) -> List[_Piece]:
        """Split spans into words, spaces and breaks."""
        pieces: List[_Piece] = []
        word: _Word | None = None
        for span in spans:
            for char in span.text:
                if char == "\n":
                    word = None
                    pieces.append(_Break())
                    continue

                if char in (" ", "\t"):
                    word = None
                    if pieces and isinstance(pieces[-1], _Space):
                        last = pieces[-1].span
                        pieces[-1] = _Space(StyledSpan(last.text + " ", last.style))

                    else:
                        pieces.append(_Space(StyledSpan(" ", span.style)))

                    continue

                if word is None:
                    word = _Word()
                    pieces.append(word)

                word.append(char, span.style)

        return pieces

    def _break_word(self, word: _Word, width: int) -> List[Tuple[List[StyledSpan], int]]:
        """
        Split a word into chunks no wider than a line.

        A single character wider than the line gets a chunk of its own.
        """
        chunks: List[Tuple[List[StyledSpan], int]] = []
        chunk = _Word()
        for span in word.spans:
            for char in span.text:
                w = char_width(char)
                if chunk.width + w > width and chunk.spans:
                    chunks.append((chunk.spans, chunk.width))
                    chunk = _Word()

                chunk.append(char, span.style)

        if chunk.spans:
            chunks.append((chunk.spans, chunk.width))

        return chunks

    def _merge(self, spans: List[StyledSpan]) -> Tuple[StyledSpan, ...]:
        """Join neighbouring spans that share a style."""
        merged: List[StyledSpan] = []
        for span in spans:
            if merged and merged[-1].style == span.style:
                merged[-1] = StyledSpan(merged[-1].text + span.text, span.style)

            else:
                merged.append(span)

        return tuple(merged)
