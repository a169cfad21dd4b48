"""
DOM model consumed by the layout pipeline.

The HTML parser produces a tree of :class:`Node` objects. Ownership is
top-down (a node owns its ``children``); the parent link is a weak
reference used only for navigation. Tag classification is a pure function
of the tag name so the same predicates can be evaluated any number of
times during normalisation and composition.
"""

from __future__ import annotations

import html
import weakref
from enum import Enum
from typing import Dict, Iterator, List, Optional

HTML_WHITESPACE = " \t\n\r\f"


class NodeType(Enum):
    """Kind of DOM node."""

    DOCUMENT = "document"
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"


class TagKind(Enum):
    """Layout behaviour of a tag."""

    BLOCK = "block"
    LINE = "line"
    HEAD = "head"
    OTHER = "other"


TAG_KINDS: Dict[str, TagKind] = {
    # block elements start on a new line and stack vertically
    "html": TagKind.BLOCK,
    "body": TagKind.BLOCK,
    "div": TagKind.BLOCK,
    "p": TagKind.BLOCK,
    "h1": TagKind.BLOCK,
    "h2": TagKind.BLOCK,
    "h3": TagKind.BLOCK,
    "h4": TagKind.BLOCK,
    "h5": TagKind.BLOCK,
    "h6": TagKind.BLOCK,
    "ul": TagKind.BLOCK,
    "ol": TagKind.BLOCK,
    "li": TagKind.BLOCK,
    "blockquote": TagKind.BLOCK,
    "pre": TagKind.BLOCK,
    "section": TagKind.BLOCK,
    "article": TagKind.BLOCK,
    "header": TagKind.BLOCK,
    "footer": TagKind.BLOCK,
    "main": TagKind.BLOCK,
    "nav": TagKind.BLOCK,
    "aside": TagKind.BLOCK,
    "address": TagKind.BLOCK,
    "figure": TagKind.BLOCK,
    "figcaption": TagKind.BLOCK,
    # line elements flow as part of a text line
    "a": TagKind.LINE,
    "abbr": TagKind.LINE,
    "b": TagKind.LINE,
    "br": TagKind.LINE,
    "cite": TagKind.LINE,
    "code": TagKind.LINE,
    "del": TagKind.LINE,
    "em": TagKind.LINE,
    "font": TagKind.LINE,
    "i": TagKind.LINE,
    "img": TagKind.LINE,
    "ins": TagKind.LINE,
    "kbd": TagKind.LINE,
    "label": TagKind.LINE,
    "mark": TagKind.LINE,
    "q": TagKind.LINE,
    "s": TagKind.LINE,
    "samp": TagKind.LINE,
    "small": TagKind.LINE,
    "span": TagKind.LINE,
    "strike": TagKind.LINE,
    "strong": TagKind.LINE,
    "sub": TagKind.LINE,
    "sup": TagKind.LINE,
    "u": TagKind.LINE,
    "var": TagKind.LINE,
    # never rendered
    "head": TagKind.HEAD,
    "script": TagKind.HEAD,
    "style": TagKind.HEAD,
    "template": TagKind.HEAD,
    "title": TagKind.HEAD,
}

LIST_TAGS = frozenset({"ul", "ol"})
LIST_ITEM_TAG = "li"
VOID_TAGS = frozenset({"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "wbr"})


def tag_kind(tag: str) -> TagKind:
    return TAG_KINDS.get(tag.lower(), TagKind.OTHER)


def is_block_tag(tag: str) -> bool:
    return tag_kind(tag) is TagKind.BLOCK


def is_line_tag(tag: str) -> bool:
    return tag_kind(tag) is TagKind.LINE


def is_head_tag(tag: str) -> bool:
    return tag_kind(tag) is TagKind.HEAD


class Node:
    """A DOM node: document root, element, text run or comment."""

    __slots__ = ("node_type", "tag", "attributes", "children", "text", "inline_styles", "_parent", "__weakref__")

    def __init__(
        self,
        node_type: NodeType,
        tag: str = "",
        attributes: Optional[Dict[str, str]] = None,
        text: str = "",
    ) -> None:
        self.node_type = node_type
        self.tag = tag.lower()
        self.attributes: Dict[str, str] = dict(attributes or {})
        self.children: List[Node] = []
        self.text = text
        # Parsed ``style`` attribute; stays None until the pre-pass finds declarations.
        self.inline_styles: Optional[Dict[str, str]] = None
        self._parent: Optional[weakref.ReferenceType] = None

    # ------------------------------------------------------------------
    @classmethod
    def document(cls) -> "Node":
        return cls(NodeType.DOCUMENT, "#document")

    @classmethod
    def element(cls, tag: str, attributes: Optional[Dict[str, str]] = None) -> "Node":
        return cls(NodeType.ELEMENT, tag, attributes)

    @classmethod
    def text_node(cls, text: str) -> "Node":
        return cls(NodeType.TEXT, "#text", text=text)

    @classmethod
    def comment(cls, text: str) -> "Node":
        return cls(NodeType.COMMENT, "#comment", text=text)

    # ------------------------------------------------------------------
    @property
    def parent(self) -> Optional["Node"]:
        if self._parent is None:
            return None
        return self._parent()

    @property
    def is_element(self) -> bool:
        return self.node_type is NodeType.ELEMENT

    @property
    def is_text(self) -> bool:
        return self.node_type is NodeType.TEXT

    @property
    def is_comment(self) -> bool:
        return self.node_type is NodeType.COMMENT

    @property
    def is_block(self) -> bool:
        return self.is_element and is_block_tag(self.tag)

    @property
    def is_line_level(self) -> bool:
        return self.is_text or (self.is_element and is_line_tag(self.tag))

    @property
    def is_head(self) -> bool:
        return self.is_element and is_head_tag(self.tag)

    @property
    def is_list(self) -> bool:
        return self.is_element and self.tag in LIST_TAGS

    @property
    def is_list_item(self) -> bool:
        return self.is_element and self.tag == LIST_ITEM_TAG

    @property
    def is_br(self) -> bool:
        return self.is_element and self.tag == "br"

    @property
    def is_image(self) -> bool:
        return self.is_element and self.tag == "img"

    @property
    def classes(self) -> List[str]:
        """Space separated tokens of the ``class`` attribute, in order, without duplicates."""
        tokens: List[str] = []
        for token in self.attributes.get("class", "").split():
            if token not in tokens:
                tokens.append(token)
        return tokens

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(name.lower(), default)

    # ------------------------------------------------------------------
    def append_child(self, child: "Node") -> "Node":
        child._parent = weakref.ref(self)
        self.children.append(child)
        return child

    def clone(self, deep: bool = False) -> "Node":
        """Copy tag, attributes and text. Children are copied only when ``deep``."""
        copy = Node(self.node_type, self.tag, self.attributes, self.text)
        if deep:
            for child in self.children:
                copy.append_child(child.clone(deep=True))
        return copy

    def ancestors(self) -> Iterator["Node"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def iter_descendants(self) -> Iterator["Node"]:
        """Pre-order walk of everything below this node."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def iter_leaves(self) -> Iterator["Node"]:
        """Text nodes and line breaks in document order (this node included)."""
        stack: List[Node] = [self]
        while stack:
            node = stack.pop()
            if node.is_text or node.is_br:
                yield node
            elif not (node.is_head or node.is_comment):
                stack.extend(reversed(node.children))

    @property
    def text_content(self) -> str:
        if self.is_text:
            return self.text
        return "".join(node.text for node in self.iter_descendants() if node.is_text)

    # ------------------------------------------------------------------
    def to_html(self) -> str:
        """Serialise the subtree back to HTML (used for inspection and tests)."""
        if self.is_text:
            return html.escape(self.text, quote=False)
        if self.is_comment:
            return f"<!--{self.text}-->"
        inner = "".join(child.to_html() for child in self.children)
        if self.node_type is NodeType.DOCUMENT:
            return inner
        attrs = "".join(
            f' {name}="{html.escape(value, quote=True)}"' for name, value in self.attributes.items()
        )
        if self.tag in VOID_TAGS and not self.children:
            return f"<{self.tag}{attrs}>"
        return f"<{self.tag}{attrs}>{inner}</{self.tag}>"

    def __repr__(self) -> str:
        if self.is_text:
            return f"Node(text={self.text!r})"
        return f"Node(<{self.tag}>, children={len(self.children)})"


def has_block_descendant(node: Node) -> bool:
    return any(descendant.is_block for descendant in node.iter_descendants())


def has_content(node: Node) -> bool:
    """True when the subtree renders something: visible text, a line break or an image."""
    if node.is_text:
        return bool(node.text.strip(HTML_WHITESPACE))
    if node.is_comment or node.is_head:
        return False
    if node.is_br or node.is_image:
        return True
    stack = list(node.children)
    while stack:
        current = stack.pop()
        if current.is_comment or current.is_head:
            continue
        if current.is_text:
            if current.text.strip(HTML_WHITESPACE):
                return True
            continue
        if current.is_br or current.is_image:
            return True
        stack.extend(current.children)
    return False
