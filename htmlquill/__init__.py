"""
htmlquill - HTML to paged PDF conversion.

The package turns HTML markup into a tree of layout units and renders
that tree to PDF:

- Parser: DOM model, HTML tree builder and inline CSS parsing
- Styles: text styles, colour parsing and the style cascade
- Engine: normalisation, block composition and paragraph runs
- Media: image source resolution
- Renderers: PDF output (reportlab) and layout tree inspection (rich)
"""

from .api import HtmlDocument, render_to_pdf
from .config import RenderConfig, load_theme
from .engine.layout_pipeline import HtmlLayoutPipeline
from .exceptions import (
    HtmlQuillError,
    LayoutError,
    MediaError,
    ParsingError,
    RenderingError,
    StyleError,
)
from .styles.text_style import TextStyle
from .version import __version__

__all__ = [
    "HtmlDocument",
    "HtmlLayoutPipeline",
    "HtmlQuillError",
    "LayoutError",
    "MediaError",
    "ParsingError",
    "RenderConfig",
    "RenderingError",
    "StyleError",
    "TextStyle",
    "__version__",
    "load_theme",
    "render_to_pdf",
]
