"""
List context of a paragraph.

List membership is not stored anywhere; it is derived by walking the
ancestors of the first node of a paragraph run.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..parser.dom import Node
from .layout_primitives import DEFAULT_BULLET, ListMarker, PrefixKind

logger = logging.getLogger(__name__)


def find_list_item(node: Node) -> Optional[Node]:
    """Nearest enclosing ``li``, unless a ``ul``/``ol`` boundary comes first."""
    for ancestor in node.ancestors():
        if ancestor.is_list_item:
            return ancestor
        if ancestor.is_list:
            return None
    return None


def find_list(item: Node) -> Optional[Node]:
    for ancestor in item.ancestors():
        if ancestor.is_list:
            return ancestor
    return None


def in_list_without_item(node: Node) -> bool:
    """True for content placed directly in a list, outside any ``li``."""
    for ancestor in node.ancestors():
        if ancestor.is_list_item:
            return False
        if ancestor.is_list:
            return True
    return False


def list_start(list_node: Node) -> int:
    raw = list_node.get_attribute("start")
    if raw is None:
        return 1
    try:
        return int(raw.strip())
    except ValueError:
        logger.debug(f"Ignoring list start value {raw!r}")
        return 1


def list_ordinal(item: Node, list_node: Node) -> int:
    """1-based position of ``item`` among its ``li`` siblings, offset by the list's ``start``."""
    parent = item.parent
    siblings = [child for child in parent.children if child.is_list_item] if parent is not None else [item]
    index = next((i for i, sibling in enumerate(siblings) if sibling is item), 0)
    return list_start(list_node) + index


def list_marker(node: Node, bullet: str = DEFAULT_BULLET) -> Optional[ListMarker]:
    """
    Prefix cell for the paragraph that starts with ``node``.

    Args:
        node: First node of the paragraph run
        bullet: Prefix text of unordered items

    Returns:
        A bullet or numbered marker inside a list item, an empty marker for
        content placed directly in a list, None outside of lists
    """
    item = find_list_item(node)
    if item is None:
        return ListMarker(PrefixKind.NONE, bullet=bullet) if in_list_without_item(node) else None

    list_node = find_list(item)
    if list_node is None:
        logger.debug("List item without an enclosing list, no prefix emitted")
        return None
    if list_node.tag == "ol":
        return ListMarker(PrefixKind.NUMBERED, list_ordinal(item, list_node), bullet)
    return ListMarker(PrefixKind.BULLET, bullet=bullet)
