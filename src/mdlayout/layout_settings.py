"""Settings that control how documents are laid out."""

from dataclasses import dataclass
from enum import Enum


class CodeOverflow(Enum):
    """What happens to code block lines wider than the viewport."""
    OVERFLOW = "overflow"  # Leave the line whole; the display clips it
    TRUNCATE = "truncate"  # Cut the line at the layout width


@dataclass(frozen=True)
class LayoutSettings:
    """Layout tunables."""
    code_overflow: CodeOverflow = CodeOverflow.OVERFLOW
    table_min_column_width: int = 1
    quote_marker: str = "> "
    bullet_marker: str = "- "
    rule_char: str = "─"
