"""
Tests for the style cascade engine.

Tests root-to-leaf style folding, class overrides and alignment lookup.
"""

import pytest

from htmlquill.config import RenderConfig
from htmlquill.engine.layout_pipeline import HtmlLayoutPipeline
from htmlquill.engine.layout_primitives import Alignment
from htmlquill.parser.html_parser import parse_html
from htmlquill.styles.style_cascade_engine import StyleCascadeEngine, ancestor_path, style_owner
from htmlquill.styles.text_style import TextStyle, VerticalPosition


def prepare(html, config=None):
    """Parsed, normalised tree with cached inline styles."""
    return HtmlLayoutPipeline(config).prepare_dom(parse_html(html))


def first_text(root, text):
    return next(node for node in root.iter_descendants() if node.is_text and node.text == text)


def first_element(root, tag):
    return next(node for node in root.iter_descendants() if node.is_element and node.tag == tag)


@pytest.fixture
def engine(config):
    return StyleCascadeEngine(config)


class TestPathHelpers:
    """Test cases for ancestor_path and style_owner."""

    def test_ancestor_path_runs_root_to_leaf(self):
        root = parse_html("<p><b>x</b></p>")
        leaf = first_text(root, "x")
        assert [node.tag for node in ancestor_path(leaf)] == ["#document", "p", "b", "#text"]

    def test_style_owner(self):
        root = parse_html("<p><span>x</span><br></p>")
        assert style_owner(first_text(root, "x")).tag == "span"
        br = first_element(root, "br")
        assert style_owner(br) is br


class TestMergedTextStyle:
    """Test cases for merged_text_style."""

    def test_nested_tags_compose(self, engine):
        root = prepare("<p><b><i>text</i></b></p>")
        style = engine.merged_text_style(first_text(root, "text"))
        assert style.bold
        assert style.italic

    def test_heading_defaults(self, engine):
        root = prepare("<h1>Title</h1>")
        style = engine.merged_text_style(first_text(root, "Title"))
        assert style.font_size == 24.0
        assert style.bold

    def test_inline_style_beats_tag_default_on_same_node(self, engine):
        root = prepare('<h1 style="font-size: 10pt">Title</h1>')
        style = engine.merged_text_style(first_text(root, "Title"))
        assert style.font_size == 10.0
        assert style.bold

    def test_descendant_inline_style_wins(self, engine):
        root = prepare('<p style="color:red"><span style="color:blue">x</span></p>')
        assert engine.merged_text_style(first_text(root, "x")).color == (0, 0, 255)

    def test_ancestor_inline_style_is_inherited(self, engine):
        root = prepare('<div style="font-size:16px; color: #abc"><p><u>x</u></p></div>')
        style = engine.merged_text_style(first_text(root, "x"))
        assert style.font_size == 12.0
        assert style.color == (170, 187, 204)
        assert style.underline

    def test_font_style_normal_cancels_italic(self, engine):
        root = prepare('<i><span style="font-style: normal">x</span></i>')
        assert not engine.merged_text_style(first_text(root, "x")).italic

    def test_superscript(self, engine):
        root = prepare("<p>x<sup>2</sup></p>")
        assert engine.merged_text_style(first_text(root, "2")).position is VerticalPosition.SUPERSCRIPT

    def test_class_override_replaces_cascade(self, config):
        note = TextStyle(font_size=9.0, color=(1, 2, 3))
        engine = StyleCascadeEngine(config.with_class_text_style("theme-note", note))
        root = prepare('<p><b><span class="theme-note" style="font-size:20pt;font-weight:bold">x</span></b></p>')

        assert engine.merged_text_style(first_text(root, "x")) == note

    def test_class_override_ignores_ancestor_classes(self, config):
        engine = StyleCascadeEngine(config.with_class_text_style("theme-note", TextStyle(font_size=9.0)))
        root = prepare('<div class="theme-note"><p><span>x</span></p></div>')

        assert engine.merged_text_style(first_text(root, "x")).font_size == 12.0

    def test_custom_tag_style_table(self):
        config = RenderConfig().with_tag_text_style("code", {"font_size": 10.0})
        engine = StyleCascadeEngine(config)
        root = prepare("<p><code>x</code></p>", config)
        assert engine.merged_text_style(first_text(root, "x")).font_size == 10.0


class TestAlignment:
    """Test cases for container and paragraph alignment."""

    def test_container_alignment_from_inline_css(self, engine):
        root = prepare('<div style="text-align:center">x</div><p style="text-align: justify">y</p><span style="text-align:right">z</span>')
        div, paragraph, span = root.children
        assert engine.container_alignment(div) is Alignment.CENTER
        assert engine.container_alignment(paragraph) is None
        assert engine.container_alignment(span) is None

    def test_class_alignment_from_ancestor(self, engine):
        root = prepare('<div class="ql-align-right"><p>x</p></div>')
        assert engine.resolve_text_alignment(first_element(root, "p")) is Alignment.RIGHT

    def test_inline_css_beats_class_on_same_block(self, engine):
        root = prepare('<p class="ql-align-center" style="text-align:right">x</p>')
        assert engine.resolve_text_alignment(first_element(root, "p")) is Alignment.RIGHT

    def test_nearest_alignment_wins(self, engine):
        root = prepare('<div style="text-align:center"><p class="ql-align-justify">x</p></div>')
        assert engine.resolve_text_alignment(first_element(root, "p")) is Alignment.JUSTIFY

    def test_no_alignment(self, engine):
        root = prepare("<div><p>x</p></div>")
        assert engine.resolve_text_alignment(first_element(root, "p")) is None
