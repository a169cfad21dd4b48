"""Turn one run of inline sibling nodes into a styled paragraph."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

from ..parser.dom import HTML_WHITESPACE, Node
from ..styles.style_cascade_engine import StyleCascadeEngine
from .layout_primitives import Paragraph, StyledSpan
from .list_context import list_marker

if TYPE_CHECKING:
    from ..config import RenderConfig

logger = logging.getLogger(__name__)


def governing_block(node: Node) -> Optional[Node]:
    """Nearest ``li`` ancestor of ``node``, otherwise its nearest block ancestor."""
    nearest_block = None
    for ancestor in node.ancestors():
        if ancestor.is_list_item:
            return ancestor
        if nearest_block is None and ancestor.is_block:
            nearest_block = ancestor
    return nearest_block


def link_target(leaf: Node, stop: Optional[Node] = None) -> Optional[str]:
    """``href`` of the nearest enclosing anchor below ``stop``."""
    for ancestor in leaf.ancestors():
        if ancestor is stop:
            break
        if ancestor.is_element and ancestor.tag == "a":
            href = ancestor.get_attribute("href")
            if href:
                return href
    return None


class ParagraphRunBuilder:
    """Build :class:`Paragraph` units from runs of inline nodes."""

    def __init__(self, config: "RenderConfig", cascade: Optional[StyleCascadeEngine] = None) -> None:
        self.config = config
        self.cascade = cascade or StyleCascadeEngine(config)

    def build(self, nodes: Sequence[Node]) -> Optional[Paragraph]:
        """
        Build the paragraph for one run.

        Args:
            nodes: Consecutive inline siblings

        Returns:
            The paragraph, or None when the run has no renderable leaves or
            no block to hang from
        """
        if not nodes:
            return None

        context = governing_block(nodes[0])
        if context is None:
            logger.debug(f"No enclosing block for inline run starting at {nodes[0]!r}, skipped")
            return None

        spans = self._collect_spans(nodes, context)
        if not spans:
            return None

        return Paragraph(
            spans=spans,
            alignment=self.cascade.resolve_text_alignment(context),
            marker=list_marker(nodes[0], self.config.bullet),
            marker_width=self.config.marker_width,
        )

    # ------------------------------------------------------------------
    def _collect_spans(self, nodes: Sequence[Node], context: Node) -> List[StyledSpan]:
        spans: List[StyledSpan] = []
        is_text: List[bool] = []
        for node in nodes:
            for leaf in node.iter_leaves():
                style = self.cascade.merged_text_style(leaf)
                if leaf.is_br:
                    spans.append(StyledSpan("\n", style))
                    is_text.append(False)
                else:
                    spans.append(StyledSpan(leaf.text, style, link_target(leaf, context)))
                    is_text.append(True)

        # Trim the outer edges of the run only; interior spacing is kept.
        while spans and is_text[0]:
            spans[0].text = spans[0].text.lstrip(HTML_WHITESPACE)
            if spans[0].text:
                break
            spans.pop(0)
            is_text.pop(0)
        while spans and is_text[-1]:
            spans[-1].text = spans[-1].text.rstrip(HTML_WHITESPACE)
            if spans[-1].text:
                break
            spans.pop()
            is_text.pop()

        return [span for span in spans if span.text]
