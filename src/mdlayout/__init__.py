"""Layout of parsed documents into styled, wrapped display lines."""

from mdlayout.layout_engine import LayoutEngine
from mdlayout.layout_line import DisplayLine, StyledSpan, clip_spans, text_width
from mdlayout.layout_render_state import RenderState
from mdlayout.layout_settings import CodeOverflow, LayoutSettings
from mdlayout.layout_style import CharacterAttributes, TextStyle
from mdlayout.layout_table import TableFormatter
from mdlayout.layout_wrapper import TextWrapper


__all__ = [
    "CharacterAttributes",
    "CodeOverflow",
    "DisplayLine",
    "LayoutEngine",
    "LayoutSettings",
    "RenderState",
    "StyledSpan",
    "TableFormatter",
    "TextStyle",
    "TextWrapper",
    "clip_spans",
    "text_width"
]
