"""
Table formatter.

Columns are sized to their widest cell.  Rows that would be wider than the
available width are narrowed by repeatedly shrinking the widest column by
one, never below one column, and truncated cells end with an ellipsis.
"""

import logging
from typing import List, Sequence, Tuple

from mdocument.document_node import TableAlignment
from mdlayout.layout_line import DisplayLine, StyledSpan, clip_spans, spans_width
from mdlayout.layout_style import CharacterAttributes, TABLE_BORDER_STYLE, TextStyle


TableCell = Tuple[StyledSpan, ...]

_ELLIPSIS = "…"


class TableFormatter:
    """Formats table rows into aligned, fixed-content display lines."""

    def __init__(self, min_column_width: int = 1) -> None:
        """
        Initialize the formatter.

        Args:
            min_column_width: Narrowest a column is sized from its content
        """
        self._logger = logging.getLogger("TableFormatter")
        self._min_column_width = max(1, min_column_width)

    def format(
        self,
        header: Sequence[TableCell],
        rows: Sequence[Sequence[TableCell]],
        alignments: Sequence[TableAlignment],
        width: int
    ) -> List[DisplayLine]:
        """
        Format a table.

        Args:
            header: Header cells
            rows: Body rows
            alignments: Per-column alignment
            width: Width available for the table

        Returns:
            Border, header, separator, body and border lines
        """
        column_count = max([len(alignments), len(header)] + [len(row) for row in rows])
        if column_count == 0:
            return [DisplayLine((StyledSpan("(empty table)", TABLE_BORDER_STYLE),))]

        header_cells = self._normalize(header, column_count) if header else []
        body = [self._normalize(row, column_count) for row in rows]
        aligns = list(alignments) + [TableAlignment.LEFT] * (column_count - len(alignments))

        widths = self.column_widths([header_cells] + body if header_cells else body, column_count)
        widths = self.fit_widths(widths, width)

        bold = CharacterAttributes.BOLD
        lines = [self._border(widths)]
        if header_cells:
            header_cells = [tuple(StyledSpan(s.text, s.style.with_attributes(bold)) for s in cell) for cell in header_cells]
            lines.append(self._row(header_cells, widths, aligns))
            lines.append(self._border(widths))

        for row in body:
            lines.append(self._row(row, widths, aligns))

        if body:
            lines.append(self._border(widths))

        return lines

    def column_widths(self, rows: Sequence[Sequence[TableCell]], column_count: int) -> List[int]:
        """
        Size each column to its widest cell.

        Args:
            rows: All rows, header included
            column_count: Number of columns

        Returns:
            Width of each column
        """
        widths = [self._min_column_width] * column_count
        for row in rows:
            for i, cell in enumerate(row[:column_count]):
                widths[i] = max(widths[i], spans_width(cell))

        return widths

    def fit_widths(self, widths: List[int], width: int) -> List[int]:
        """
        Shrink the widest columns until a row fits the available width.

        Args:
            widths: Natural column widths
            width: Available width

        Returns:
            Adjusted widths; no column goes below 1
        """
        fitted = list(widths)
        available = width - self.row_overhead(len(fitted))
        while sum(fitted) > available:
            widest = max(range(len(fitted)), key=lambda i: fitted[i])
            if fitted[widest] <= 1:
                self._logger.debug("table with %d columns cannot fit %d columns", len(fitted), width)
                break

            fitted[widest] -= 1

        return fitted

    def row_overhead(self, column_count: int) -> int:
        """Columns used by borders and cell padding in one row."""
        return 3 * column_count + 1

    def _normalize(self, row: Sequence[TableCell], column_count: int) -> List[TableCell]:
        """Pad a short row with empty cells and drop extra cells."""
        cells = list(row[:column_count])
        cells.extend([()] * (column_count - len(cells)))
        return cells

    def _border(self, widths: Sequence[int]) -> DisplayLine:
        text = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
        return DisplayLine((StyledSpan(text, TABLE_BORDER_STYLE),))

    def _row(self, cells: Sequence[TableCell], widths: Sequence[int], aligns: Sequence[TableAlignment]) -> DisplayLine:
        spans: List[StyledSpan] = [StyledSpan("|", TABLE_BORDER_STYLE)]
        for cell, width, align in zip(cells, widths, aligns):
            spans.append(StyledSpan(" "))
            spans.extend(self._pad(self._fit_cell(cell, width), width, align))
            spans.append(StyledSpan(" "))
            spans.append(StyledSpan("|", TABLE_BORDER_STYLE))

        return DisplayLine(tuple(spans))

    def _fit_cell(self, cell: TableCell, width: int) -> TableCell:
        """Truncate a cell that is wider than its column."""
        if spans_width(cell) <= width:
            return cell

        if width < 2:
            return clip_spans(cell, width)

        clipped = clip_spans(cell, width - 1)
        style = clipped[-1].style if clipped else TextStyle()
        return clipped + (StyledSpan(_ELLIPSIS, style),)

    def _pad(self, cell: TableCell, width: int, align: TableAlignment) -> List[StyledSpan]:
        """Pad a cell to its column width according to the alignment."""
        padding = max(0, width - spans_width(cell))
        if align == TableAlignment.RIGHT:
            left = padding

        elif align == TableAlignment.CENTER:
            left = padding // 2

        else:
            left = 0

        right = padding - left
        spans = list(cell)
        if left:
            spans.insert(0, StyledSpan(" " * left))

        if right:
            spans.append(StyledSpan(" " * right))

        return spans
