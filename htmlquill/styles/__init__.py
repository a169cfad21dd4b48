"""Text styles, CSS color parsing and inline CSS application."""

from .color_map import NAMED_COLORS, RGB, parse_color, rgb_to_hex
from .text_style import (
    DEFAULT_FONT_SIZE,
    TextStyle,
    VerticalPosition,
    apply_inline_css,
    get_text_align,
)

__all__ = [
    "DEFAULT_FONT_SIZE",
    "NAMED_COLORS",
    "RGB",
    "TextStyle",
    "VerticalPosition",
    "apply_inline_css",
    "get_text_align",
    "parse_color",
    "rgb_to_hex",
]
