"""Conversion of styled display lines to ANSI escape sequences."""

from typing import List

from mdlayout.layout_line import DisplayLine, clip_spans
from mdlayout.layout_style import CharacterAttributes, TextStyle


ANSI_RESET = "\x1b[0m"

_ATTRIBUTE_CODES = (
    (CharacterAttributes.BOLD, "1"),
    (CharacterAttributes.DIM, "2"),
    (CharacterAttributes.ITALIC, "3"),
    (CharacterAttributes.UNDERLINE, "4"),
    (CharacterAttributes.INVERSE, "7"),
    (CharacterAttributes.STRIKE, "9"),
)


def color_code(color: int, is_fg: bool) -> str:
    """
    Get the SGR parameters for a 24-bit colour.

    Args:
        color: 0xRRGGBB value
        is_fg: True for foreground, False for background

    Returns:
        SGR parameter string such as "38;2;255;0;0"
    """
    base = 38 if is_fg else 48
    return f"{base};2;{(color >> 16) & 0xFF};{(color >> 8) & 0xFF};{color & 0xFF}"


def style_prefix(style: TextStyle, default_bg: int | None = None) -> str:
    """
    Get the escape sequence that selects a style.

    Args:
        style: The style
        default_bg: Background used when the style has none

    Returns:
        An SGR escape sequence, or an empty string for the default style
    """
    codes: List[str] = []
    if style.fg is not None:
        codes.append(color_code(style.fg, True))

    bg = style.bg if style.bg is not None else default_bg
    if bg is not None:
        codes.append(color_code(bg, False))

    for attribute, code in _ATTRIBUTE_CODES:
        if attribute in style.attributes:
            codes.append(code)

    if not codes:
        return ""

    return f"\x1b[{';'.join(codes)}m"


def render_line(
    line: DisplayLine,
    width: int | None = None,
    color: bool = True,
    fill_width: int | None = None
) -> str:
    """
    Render a display line as text with escape sequences.

    Args:
        line: The line to render
        width: If set, clip the line to this width and fill any background
            band up to it
        color: If False, emit plain text only
        fill_width: Width to fill a background band to, overriding `width`.
            Lines are not clipped to it

    Returns:
        The rendered line, without a trailing newline
    """
    spans = line.spans if width is None else clip_spans(line.spans, width)
    if not color:
        return "".join(span.text for span in spans)

    parts: List[str] = []
    used = 0
    for span in spans:
        prefix = style_prefix(span.style, line.background)
        parts.append(f"{prefix}{span.text}{ANSI_RESET}" if prefix else span.text)
        used += span.width

    band_width = fill_width if fill_width is not None else width
    if line.background is not None and band_width is not None and used < band_width:
        filler = style_prefix(TextStyle(bg=line.background))
        parts.append(f"{filler}{' ' * (band_width - used)}{ANSI_RESET}")

    return "".join(parts)
