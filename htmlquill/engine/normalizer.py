"""
DOM normaliser.

A line-level node that contains a block element would otherwise be laid
out as a single text line with the block inlined into it. The normaliser
splits such nodes so every branch is homogeneous::

    <p><s><div>div</div>text in s</s>text in p</p>

becomes::

    <p><div><s>div</s></div><s>text in s</s>text in p</p>

The inline ancestor is cloned onto both sides, so its styling still
reaches the text that used to sit inside it. The transformation is pure:
``normalize`` returns a new tree and leaves its input untouched.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..parser.dom import HTML_WHITESPACE, Node, has_block_descendant, has_content

logger = logging.getLogger(__name__)

Piece = Tuple[bool, Node]


class DomNormalizer:
    """Split mixed block/inline branches into parallel homogeneous siblings."""

    def normalize(self, root: Node) -> Node:
        """
        Return a normalised copy of ``root``.

        The root itself is never split (it has no parent to receive the
        pieces); its descendants are.
        """
        clone = root.clone()
        for child in root.children:
            for piece in self._rebuild(child):
                clone.append_child(piece)
        return clone

    # ------------------------------------------------------------------
    def _rebuild(self, node: Node) -> List[Node]:
        if node.is_line_level and has_block_descendant(node):
            pieces = self._split(node)
            logger.debug(f"Split <{node.tag}> into {len(pieces)} branches")
            return self._trim_pieces(pieces)

        clone = node.clone()
        for child in node.children:
            for piece in self._rebuild(child):
                clone.append_child(piece)
        return [clone]

    def _split(self, node: Node) -> List[Piece]:
        """
        Slice ``node`` at its block descendants.

        Returns ``(is_block, piece)`` pairs in document order. Inline pieces
        are clones of ``node`` holding the content between two blocks; block
        pieces are blocks whose content is wrapped in a clone of ``node``.
        """
        pieces: List[Piece] = []
        pending: Optional[Node] = None

        def flush() -> None:
            nonlocal pending
            if pending is not None and has_content(pending):
                pieces.append((False, pending))
            pending = None

        for child in node.children:
            if child.is_block:
                flush()
                pieces.append((True, self._push_into_block(node, child)))
            elif child.is_element and has_block_descendant(child):
                for is_block, part in self._split(child):
                    if is_block:
                        flush()
                        pieces.append((True, self._push_into_block(node, part)))
                    else:
                        if pending is None:
                            pending = node.clone()
                        pending.append_child(part)
            else:
                if pending is None:
                    pending = node.clone()
                pending.append_child(child.clone(deep=True))

        flush()
        return pieces

    def _push_into_block(self, inline: Node, block: Node) -> Node:
        """``inline > block > content`` -> ``block > inline > content``, normalised again."""
        moved = block.clone()
        if block.children:
            wrapper = moved.append_child(inline.clone())
            for child in block.children:
                wrapper.append_child(child.clone(deep=True))
        # The wrapper may now hold nested blocks of its own.
        return self._rebuild(moved)[0]

    # ------------------------------------------------------------------
    def _trim_pieces(self, pieces: List[Piece]) -> List[Node]:
        """Trim inline text where it touches a block piece and drop branches left empty."""
        result: List[Node] = []
        for index, (is_block, piece) in enumerate(pieces):
            if not is_block:
                if index > 0 and pieces[index - 1][0]:
                    _strip_edge(piece, leading=True)
                if index + 1 < len(pieces) and pieces[index + 1][0]:
                    _strip_edge(piece, leading=False)
                if not has_content(piece):
                    continue
            result.append(piece)
        return result


def _strip_edge(node: Node, leading: bool) -> None:
    leaves = list(node.iter_leaves())
    if not leaves:
        return
    edge = leaves[0] if leading else leaves[-1]
    if edge.is_text:
        edge.text = edge.text.lstrip(HTML_WHITESPACE) if leading else edge.text.rstrip(HTML_WHITESPACE)
