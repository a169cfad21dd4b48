"""Inline CSS declaration parsing and the inline-style pre-pass."""

from __future__ import annotations

import logging
from typing import Dict

from .dom import Node

logger = logging.getLogger(__name__)


def parse_declarations(style_str: str) -> Dict[str, str]:
    """
    Parse a ``style`` attribute into an ordered property map.

    ``"color: red; font-size: 12px"`` -> ``{"color": "red", "font-size": "12px"}``.
    Property names are lower-cased. Pieces without a colon, or with an empty
    name or value, are skipped. A repeated property keeps the last value.
    """
    declarations: Dict[str, str] = {}
    if not style_str or not style_str.strip():
        return declarations

    for declaration in style_str.split(";"):
        declaration = declaration.strip()
        if not declaration:
            continue
        if ":" not in declaration:
            logger.debug(f"Skipping malformed CSS declaration: {declaration!r}")
            continue

        prop, value = declaration.split(":", 1)
        prop = prop.strip().lower()
        value = value.strip()
        if not prop or not value:
            continue

        # Last declaration wins and moves to the end of the map.
        declarations.pop(prop, None)
        declarations[prop] = value

    return declarations


def cache_inline_styles(root: Node) -> None:
    """
    Parse every ``style`` attribute once, top-down, and attach the result.

    Nodes without usable declarations keep ``inline_styles = None``; an
    existing cache entry is never overwritten.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_element and node.inline_styles is None:
            style_attr = node.attributes.get("style", "")
            if style_attr.strip():
                parsed = parse_declarations(style_attr)
                if parsed:
                    node.inline_styles = parsed
        stack.extend(reversed(node.children))
