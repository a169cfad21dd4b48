"""Utility helpers shared across renderer components."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union
from xml.sax.saxutils import escape

from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT, TA_RIGHT
from reportlab.lib.pagesizes import A4, LETTER

from ..engine.layout_primitives import Alignment, Paragraph, StyledSpan
from ..styles.color_map import RGB, rgb_to_hex
from ..styles.text_style import DEFAULT_FONT_SIZE, TextStyle, VerticalPosition

PAGE_SIZES = {
    "A4": A4,
    "LETTER": LETTER,
}

ALIGNMENTS = {
    Alignment.LEFT: TA_LEFT,
    Alignment.CENTER: TA_CENTER,
    Alignment.RIGHT: TA_RIGHT,
    Alignment.JUSTIFY: TA_JUSTIFY,
}

FONT_FAMILY = "Helvetica"
# Helvetica has no light face; light spans without a color of their own are greyed instead.
LIGHT_TEXT_COLOR: RGB = (110, 110, 110)


@dataclass(frozen=True)
class Margins:
    """Page margins in points."""

    top: float = 50.0
    right: float = 50.0
    bottom: float = 50.0
    left: float = 50.0


def ensure_page_size(page_size: Union[str, Iterable[float]]) -> Tuple[float, float]:
    if isinstance(page_size, str):
        preset = PAGE_SIZES.get(page_size.upper())
        if preset:
            return float(preset[0]), float(preset[1])
        raise ValueError(f"Unsupported page size preset: {page_size}")

    values = list(page_size)
    if len(values) != 2:
        raise ValueError("Page size iterable must contain exactly two values")
    return float(values[0]), float(values[1])


def ensure_margins(margins: Union[Margins, float, Iterable[float]]) -> Margins:
    if isinstance(margins, Margins):
        return margins
    if isinstance(margins, (int, float)):
        value = float(margins)
        return Margins(top=value, right=value, bottom=value, left=value)

    values = list(margins)
    if not values:
        return Margins()
    if len(values) != 4:
        raise ValueError("Margins must be provided as four numeric values (top, right, bottom, left)")
    top, right, bottom, left = [float(v) for v in values]
    return Margins(top=top, right=right, bottom=bottom, left=left)


def reportlab_alignment(alignment: Optional[Alignment]) -> int:
    return ALIGNMENTS.get(alignment, TA_LEFT)


# ----------------------------------------------------------------------
# Paragraph markup
# ----------------------------------------------------------------------


def span_markup(span: StyledSpan) -> str:
    """Mini-markup understood by ``reportlab.platypus.Paragraph`` for one span."""
    if span.text == "\n":
        return "<br/>"

    style = span.style
    text = escape(span.text).replace("\n", "<br/>")

    if style.bold:
        text = f"<b>{text}</b>"
    if style.italic:
        text = f"<i>{text}</i>"
    if style.underline:
        text = f"<u>{text}</u>"
    if style.strikethrough:
        text = f"<strike>{text}</strike>"
    if style.position is VerticalPosition.SUPERSCRIPT:
        text = f"<super>{text}</super>"
    elif style.position is VerticalPosition.SUBSCRIPT:
        text = f"<sub>{text}</sub>"

    font_attrs = [f'size="{style.font_size:g}"']
    color = style.color
    if color is None and style.light:
        color = LIGHT_TEXT_COLOR
    if color is not None:
        font_attrs.append(f'color="{rgb_to_hex(color)}"')
    if style.background is not None:
        font_attrs.append(f'backColor="{rgb_to_hex(style.background)}"')
    text = f"<font {' '.join(font_attrs)}>{text}</font>"

    if span.link:
        text = f'<a href="{escape(span.link, {chr(34): "&quot;"})}">{text}</a>'
    return text


def paragraph_markup(paragraph: Paragraph) -> str:
    return "".join(span_markup(span) for span in paragraph.spans)


def paragraph_metrics(paragraph: Paragraph) -> Tuple[float, float]:
    """(font size, leading) large enough for the biggest span of ``paragraph``."""
    styles: List[TextStyle] = [span.style for span in paragraph.spans]
    if not styles:
        return DEFAULT_FONT_SIZE, TextStyle().leading
    return max(s.font_size for s in styles), max(s.leading for s in styles)
