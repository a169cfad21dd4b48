"""Layout engine: normalisation, composition and the layout tree primitives.

The pipeline lives in :mod:`htmlquill.engine.layout_pipeline`; it is not
re-exported here because it depends on :mod:`htmlquill.config`.
"""

from .block_composer import BlockComposer
from .layout_primitives import (
    Alignment,
    BlankLine,
    Container,
    ImageUnit,
    ListMarker,
    Padding,
    Paragraph,
    PrefixKind,
    StyledSpan,
    align,
    pad_horizontal,
    pad_left,
    pad_vertical,
)
from .list_context import list_marker
from .normalizer import DomNormalizer
from .paragraph_builder import ParagraphRunBuilder

__all__ = [
    "Alignment",
    "BlankLine",
    "BlockComposer",
    "Container",
    "DomNormalizer",
    "ImageUnit",
    "ListMarker",
    "Padding",
    "Paragraph",
    "ParagraphRunBuilder",
    "PrefixKind",
    "StyledSpan",
    "align",
    "list_marker",
    "pad_horizontal",
    "pad_left",
    "pad_vertical",
]
