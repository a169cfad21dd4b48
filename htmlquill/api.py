"""
High-level API for htmlquill.

Example:
    >>> from htmlquill import HtmlDocument
    >>>
    >>> doc = HtmlDocument.from_string("<p>Hello <b>world</b></p>")
    >>>
    >>> # Inspect the layout tree
    >>> layout = doc.layout()
    >>>
    >>> # Render to PDF
    >>> doc.to_pdf("output.pdf")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from .config import RenderConfig, load_theme
from .engine.layout_pipeline import HtmlLayoutPipeline
from .engine.layout_primitives import Container
from .parser.dom import Node
from .parser.html_parser import parse_html, parse_html_file
from .renderers.pdf_renderer import PdfRenderer

logger = logging.getLogger(__name__)

__all__ = ["HtmlDocument", "render_to_pdf"]


class HtmlDocument:
    """
    One HTML document bound to a render configuration.

    The parsed tree is kept as read; normalisation happens on a copy each
    time a layout is built, so one document can be laid out with several
    configurations.
    """

    def __init__(self, root: Node, config: Optional[RenderConfig] = None, source: Optional[Path] = None):
        self.root = root
        self.config = config or RenderConfig()
        self.source = source
        self._layout: Optional[Container] = None

    @classmethod
    def from_string(cls, html: str, config: Optional[RenderConfig] = None) -> "HtmlDocument":
        return cls(parse_html(html), config)

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        config: Optional[RenderConfig] = None,
        encoding: str = "utf-8",
    ) -> "HtmlDocument":
        """
        Load an HTML file.

        Raises:
            ParsingError: The file is missing or cannot be decoded
        """
        path = Path(path)
        root = parse_html_file(path, encoding)
        logger.debug(f"Loaded {path}")
        return cls(root, config, source=path)

    # ------------------------------------------------------------------
    def with_theme(self, theme_path: Union[str, Path]) -> "HtmlDocument":
        """Same document with a JSON theme applied on top of the current configuration."""
        return HtmlDocument(self.root, load_theme(theme_path, self.config), self.source)

    def layout(self) -> Container:
        """Layout tree of the document (built once, then reused)."""
        if self._layout is None:
            self._layout = HtmlLayoutPipeline(self.config).build_from_dom(self.root)
        return self._layout

    def to_pdf(
        self,
        output_path: Union[str, Path],
        page_size: Union[str, Iterable[float]] = "A4",
        margins: Union[float, Iterable[float]] = (50, 50, 50, 50),
    ) -> Path:
        renderer = PdfRenderer(output_path, page_size=page_size, margins=margins, title=self._title())
        return renderer.render(self.layout())

    def to_pdf_bytes(
        self,
        page_size: Union[str, Iterable[float]] = "A4",
        margins: Union[float, Iterable[float]] = (50, 50, 50, 50),
    ) -> bytes:
        renderer = PdfRenderer(page_size=page_size, margins=margins, title=self._title())
        return renderer.render_to_bytes(self.layout())

    def _title(self) -> str:
        for node in self.root.iter_descendants():
            if node.is_element and node.tag == "title":
                return node.text_content.strip()
        return self.source.stem if self.source else ""


def render_to_pdf(
    html: str,
    output_path: Union[str, Path],
    config: Optional[RenderConfig] = None,
    **options,
) -> Path:
    """Convert an HTML string straight to a PDF file."""
    return HtmlDocument.from_string(html, config).to_pdf(output_path, **options)
