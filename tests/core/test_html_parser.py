"""
Tests for HTML Parser.

Tests building the Node tree from markup and reading HTML files.
"""

import pytest

from htmlquill.exceptions import ParsingError
from htmlquill.parser.dom import NodeType
from htmlquill.parser.html_parser import parse_html, parse_html_file, prepare_html


class TestPrepareHtml:
    """Test cases for input preparation."""

    def test_strips_bom(self):
        assert prepare_html("\ufeff<p>x</p>") == "<p>x</p>"

    def test_normalizes_line_endings(self):
        assert prepare_html("a\r\nb\rc") == "a\nb\nc"


class TestHTMLTreeBuilder:
    """Test cases for parse_html."""

    def test_parse_simple_html(self):
        root = parse_html("<html><body><p>Test paragraph</p></body></html>")
        assert root.node_type is NodeType.DOCUMENT
        body = root.children[0].children[0]
        assert body.tag == "body"
        assert body.children[0].text_content == "Test paragraph"

    def test_whitespace_is_collapsed(self):
        paragraph = parse_html("<p>a  \n\t b</p>").children[0]
        assert paragraph.children[0].text == "a b"

    def test_whitespace_is_kept_in_pre(self):
        pre = parse_html("<pre>a  \n b</pre>").children[0]
        assert pre.children[0].text == "a  \n b"

    def test_entities_are_decoded(self):
        paragraph = parse_html("<p>a &amp; b&nbsp;c</p>").children[0]
        assert paragraph.children[0].text == "a & b\u00a0c"

    def test_void_elements_have_no_children(self):
        paragraph = parse_html('<p>a<br>b<img src="x.png">c</p>').children[0]
        tags = [child.tag for child in paragraph.children]
        assert tags == ["#text", "br", "#text", "img", "#text"]
        assert paragraph.children[1].children == []
        assert paragraph.children[3].get_attribute("src") == "x.png"

    def test_self_closing_void_element(self):
        paragraph = parse_html("<p>a<br/>b</p>").children[0]
        assert [child.tag for child in paragraph.children] == ["#text", "br", "#text"]

    def test_attribute_names_are_lowercased(self):
        div = parse_html('<DIV CLASS="ql-align-center" Style="color:red">x</DIV>').children[0]
        assert div.tag == "div"
        assert div.get_attribute("class") == "ql-align-center"
        assert div.get_attribute("style") == "color:red"

    def test_stray_end_tag_is_ignored(self):
        paragraph = parse_html("<p>a</span>b</p>").children[0]
        assert len(paragraph.children) == 1
        assert paragraph.children[0].text == "ab"

    def test_unclosed_tags_are_closed_by_ancestor_end_tag(self):
        root = parse_html("<div><b>bold</div><p>after</p>")
        assert [child.tag for child in root.children] == ["div", "p"]

    def test_comments_are_kept(self):
        paragraph = parse_html("<p>a<!-- note -->b</p>").children[0]
        assert paragraph.children[1].node_type is NodeType.COMMENT
        assert paragraph.children[1].text == " note "

    def test_parent_links(self):
        root = parse_html("<p><b>x</b></p>")
        text = root.children[0].children[0].children[0]
        assert [node.tag for node in text.ancestors()] == ["b", "p", "#document"]


class TestParseHtmlFile:
    """Test cases for parse_html_file."""

    def test_parse_html_file(self, temp_dir):
        html_path = temp_dir / "test.html"
        html_path.write_text("<p>Paragraph 1</p><p>Paragraph 2</p>", encoding="utf-8")

        root = parse_html_file(html_path)

        assert [child.text_content for child in root.children] == ["Paragraph 1", "Paragraph 2"]

    def test_missing_file_raises(self, temp_dir):
        with pytest.raises(ParsingError) as exc_info:
            parse_html_file(temp_dir / "missing.html")
        assert "not found" in str(exc_info.value)

    def test_undecodable_file_raises(self, temp_dir):
        html_path = temp_dir / "latin.html"
        html_path.write_bytes(b"<p>\xff\xfe caf\xe9</p>")
        with pytest.raises(ParsingError):
            parse_html_file(html_path, encoding="utf-8")
