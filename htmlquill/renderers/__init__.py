"""Renderers for the layout tree."""

from .pdf_renderer import PdfRenderer
from .render_utils import Margins, paragraph_markup, span_markup
from .tree_renderer import build_tree, print_layout

__all__ = [
    "Margins",
    "PdfRenderer",
    "build_tree",
    "paragraph_markup",
    "print_layout",
    "span_markup",
]
