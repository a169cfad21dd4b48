"""
Default style tables.

Tag text styles are partial overrides folded into the inherited style, so
``<b><i>x</i></b>`` ends up both bold and italic. Container rules and class
tables are transforms/values looked up by tag or class name.
"""

from types import MappingProxyType
from typing import Any, Mapping

from ..engine.layout_primitives import Alignment, ContainerTransform, align, pad_left, pad_vertical
from .text_style import VerticalPosition

DEFAULT_LIST_INDENT = 30.0
DEFAULT_LIST_VERTICAL_PADDING = 12.0
DEFAULT_MARKER_WIDTH = 26.0
DEFAULT_PARAGRAPH_PADDING = 6.0

_BOLD = {"bold": True, "light": False}

DEFAULT_TAG_TEXT_STYLES: Mapping[str, Mapping[str, Any]] = MappingProxyType({
    "h1": {"font_size": 24.0, **_BOLD},
    "h2": {"font_size": 18.0, **_BOLD},
    "h3": {"font_size": 14.04, **_BOLD},
    "h4": {"font_size": 12.0, **_BOLD},
    "h5": {"font_size": 9.96, **_BOLD},
    "h6": {"font_size": 8.04, **_BOLD},
    "b": _BOLD,
    "strong": _BOLD,
    "i": {"italic": True},
    "em": {"italic": True},
    "cite": {"italic": True},
    "var": {"italic": True},
    "small": {"light": True, "bold": False},
    "strike": {"strikethrough": True},
    "del": {"strikethrough": True},
    "s": {"strikethrough": True},
    "u": {"underline": True},
    "ins": {"underline": True},
    "a": {"underline": True},
    "sup": {"position": VerticalPosition.SUPERSCRIPT},
    "sub": {"position": VerticalPosition.SUBSCRIPT},
    "p": {"font_size": 12.0},
})


def default_container_styles(list_indent: float = DEFAULT_LIST_INDENT) -> Mapping[str, ContainerTransform]:
    return MappingProxyType({
        "p": pad_vertical(DEFAULT_PARAGRAPH_PADDING),
        "ul": pad_left(list_indent),
        "ol": pad_left(list_indent),
    })


DEFAULT_CLASS_CONTAINER_STYLES: Mapping[str, ContainerTransform] = MappingProxyType({
    "ql-align-center": align(Alignment.CENTER),
    "ql-align-right": align(Alignment.RIGHT),
    "ql-align-left": align(Alignment.LEFT),
})

DEFAULT_CLASS_TEXT_ALIGNMENTS: Mapping[str, Alignment] = MappingProxyType({
    "ql-align-center": Alignment.CENTER,
    "ql-align-right": Alignment.RIGHT,
    "ql-align-left": Alignment.LEFT,
    "ql-align-justify": Alignment.JUSTIFY,
})
