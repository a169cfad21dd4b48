"""Style cascade engine for DOM leaves and blocks."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from ..engine.layout_primitives import Alignment
from ..parser.dom import Node
from .text_style import TextStyle, apply_inline_css, get_text_align

if TYPE_CHECKING:
    from ..config import RenderConfig

_CONTAINER_ALIGNMENTS = (Alignment.LEFT, Alignment.CENTER, Alignment.RIGHT)


def ancestor_path(node: Node) -> List[Node]:
    """The chain from the root down to ``node`` (both included)."""
    path = [node]
    path.extend(node.ancestors())
    path.reverse()
    return path


def style_owner(leaf: Node) -> Optional[Node]:
    """Element whose classes select a class style for ``leaf``: itself, or a text node's parent."""
    if leaf.is_element:
        return leaf
    parent = leaf.parent
    if parent is not None and parent.is_element:
        return parent
    return None


class StyleCascadeEngine:
    """Compose effective text styles and alignments from tag defaults, inline CSS and classes."""

    def __init__(self, config: "RenderConfig") -> None:
        self.config = config

    # ------------------------------------------------------------------
    def merged_text_style(self, leaf: Node) -> TextStyle:
        """
        Fold the cascade root -> leaf.

        Each element on the path contributes its tag defaults, then its own
        inline declarations, so deeper nodes win. A class style matching the
        leaf's own classes replaces the result wholesale.
        """
        style = self.config.base_style
        for node in ancestor_path(leaf):
            if not node.is_element:
                continue
            overrides = self.config.tag_text_styles.get(node.tag)
            if overrides:
                style = style.merge(overrides)
            style = apply_inline_css(style, node.inline_styles)

        owner = style_owner(leaf)
        if owner is not None:
            for class_name in owner.classes:
                class_style = self.config.class_text_styles.get(class_name)
                if class_style is not None:
                    style = class_style
        return style

    # ------------------------------------------------------------------
    def container_alignment(self, node: Node) -> Optional[Alignment]:
        """Alignment a block's inline ``text-align`` imposes on its container."""
        if not node.is_block:
            return None
        alignment = Alignment.from_css(get_text_align(node.inline_styles))
        return alignment if alignment in _CONTAINER_ALIGNMENTS else None

    def node_text_alignment(self, node: Node) -> Optional[Alignment]:
        if not node.is_element:
            return None
        if node.is_block:
            inline = Alignment.from_css(get_text_align(node.inline_styles))
            if inline is not None:
                return inline
        for class_name in node.classes:
            alignment = self.config.class_text_alignments.get(class_name)
            if alignment is not None:
                return alignment
        return None

    def resolve_text_alignment(self, block: Node) -> Optional[Alignment]:
        """Nearest alignment found walking up from ``block`` (inline CSS beats classes on the same node)."""
        node: Optional[Node] = block
        while node is not None:
            alignment = self.node_text_alignment(node)
            if alignment is not None:
                return alignment
            node = node.parent
        return None
