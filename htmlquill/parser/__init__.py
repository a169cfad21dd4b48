"""HTML input layer: DOM model, tree builder and inline CSS parsing."""

from .css_parser import cache_inline_styles, parse_declarations
from .dom import (
    HTML_WHITESPACE,
    Node,
    NodeType,
    TagKind,
    has_block_descendant,
    has_content,
    is_block_tag,
    is_head_tag,
    is_line_tag,
    tag_kind,
)
from .html_parser import HTMLTreeBuilder, parse_html, parse_html_file, prepare_html

__all__ = [
    "HTML_WHITESPACE",
    "HTMLTreeBuilder",
    "Node",
    "NodeType",
    "TagKind",
    "cache_inline_styles",
    "has_block_descendant",
    "has_content",
    "is_block_tag",
    "is_head_tag",
    "is_line_tag",
    "parse_declarations",
    "parse_html",
    "parse_html_file",
    "prepare_html",
    "tag_kind",
]
