"""
HTML -> layout tree pipeline.

prepare -> parse -> normalise -> cache inline styles -> compose. Every
stage completes before the next starts, and each call owns its own tree,
so one pipeline instance can serve many documents.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from ..config import RenderConfig
from ..exceptions import LayoutError
from ..parser.css_parser import cache_inline_styles
from ..parser.dom import Node
from ..parser.html_parser import parse_html
from .block_composer import BlockComposer
from .layout_primitives import Container
from .normalizer import DomNormalizer

logger = logging.getLogger(__name__)


class HtmlLayoutPipeline:
    """Convert HTML markup into a layout tree for one :class:`RenderConfig`."""

    def __init__(self, config: Optional[RenderConfig] = None) -> None:
        self.config = config or RenderConfig()
        self.normalizer = DomNormalizer()
        self.composer = BlockComposer(self.config)

    def prepare_dom(self, root: Node) -> Node:
        """Normalised copy of ``root`` with inline styles cached."""
        normalized = self.normalizer.normalize(root)
        cache_inline_styles(normalized)
        return normalized

    def build_from_dom(self, root: Node) -> Container:
        """
        Build the layout tree of a parsed document.

        Raises:
            LayoutError: The document nests deeper than the interpreter stack allows
        """
        try:
            return self.composer.compose(self.prepare_dom(root))
        except RecursionError as exc:
            raise LayoutError("Document nesting is too deep to lay out", str(exc)) from exc

    def build(self, html: str) -> Container:
        """
        Build the layout tree of an HTML string.

        Args:
            html: Raw markup (fragment or full document)

        Returns:
            Root container of the layout tree
        """
        started = time.perf_counter()
        layout = self.build_from_dom(parse_html(html))
        elapsed = (time.perf_counter() - started) * 1000
        logger.debug(f"Composed {len(layout.paragraphs())} paragraphs in {elapsed:.1f} ms")
        return layout
