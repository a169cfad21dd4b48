"""
HTML Parser - builds the :class:`~htmlquill.parser.dom.Node` tree from markup.

Handles:
- Input preparation (line endings, BOM)
- Whitespace collapsing in text runs (except inside ``pre``)
- Void elements and unbalanced end tags
- Reading HTML from files
"""

from __future__ import annotations

import logging
import re
from html.parser import HTMLParser
from pathlib import Path
from typing import List, Optional, Union

from ..exceptions import ParsingError
from .dom import VOID_TAGS, Node, NodeType

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"[ \t\n\r\f]+")


def prepare_html(html_content: str) -> str:
    """Normalise raw markup before it reaches the tree builder."""
    if html_content.startswith("\ufeff"):
        html_content = html_content[1:]
    return html_content.replace("\r\n", "\n").replace("\r", "\n")


class HTMLTreeBuilder(HTMLParser):
    """Parser HTML which turns start/end/data events into a Node tree."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.root = Node.document()
        self._stack: List[Node] = [self.root]
        self._preformatted = 0

    @property
    def current(self) -> Node:
        return self._stack[-1]

    def handle_starttag(self, tag: str, attrs: list) -> None:
        tag_lower = tag.lower()
        attributes = {name.lower(): (value or "") for name, value in attrs}
        node = self.current.append_child(Node.element(tag_lower, attributes))
        if tag_lower in VOID_TAGS:
            return
        self._stack.append(node)
        if tag_lower == "pre":
            self._preformatted += 1

    def handle_startendtag(self, tag: str, attrs: list) -> None:
        attributes = {name.lower(): (value or "") for name, value in attrs}
        self.current.append_child(Node.element(tag.lower(), attributes))

    def handle_endtag(self, tag: str) -> None:
        tag_lower = tag.lower()
        if tag_lower in VOID_TAGS:
            return

        # Close up to the matching open element; stray end tags are ignored.
        for depth in range(len(self._stack) - 1, 0, -1):
            if self._stack[depth].tag == tag_lower:
                for closed in self._stack[depth:]:
                    if closed.tag == "pre":
                        self._preformatted = max(0, self._preformatted - 1)
                del self._stack[depth:]
                return
        logger.debug(f"Ignoring unmatched end tag </{tag_lower}>")

    def handle_data(self, data: str) -> None:
        if not data:
            return
        text = data if self._preformatted else _WHITESPACE_RUN.sub(" ", data)

        # Merge with a preceding text sibling so one run stays one node.
        siblings = self.current.children
        if siblings and siblings[-1].node_type is NodeType.TEXT:
            previous = siblings[-1]
            previous.text = previous.text + text
            if not self._preformatted:
                previous.text = _WHITESPACE_RUN.sub(" ", previous.text)
            return
        self.current.append_child(Node.text_node(text))

    def handle_comment(self, data: str) -> None:
        self.current.append_child(Node.comment(data))

    def close(self) -> None:
        super().close()
        self._stack = [self.root]
        self._preformatted = 0


def parse_html(html_content: str) -> Node:
    """
    Parse markup into a document node.

    Args:
        html_content: Raw HTML string

    Returns:
        Document root owning the whole tree
    """
    builder = HTMLTreeBuilder()
    builder.feed(prepare_html(html_content))
    builder.close()
    return builder.root


def parse_html_file(html_path: Union[str, Path], encoding: Optional[str] = "utf-8") -> Node:
    """
    Parse an HTML file.

    Args:
        html_path: Path to the HTML file
        encoding: Text encoding of the file

    Returns:
        Document root owning the whole tree

    Raises:
        ParsingError: The file is missing or cannot be decoded
    """
    html_path = Path(html_path)
    if not html_path.exists():
        raise ParsingError("HTML file not found", str(html_path))
    try:
        html_content = html_path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise ParsingError(f"Failed to read HTML file {html_path}", str(exc)) from exc
    return parse_html(html_content)
