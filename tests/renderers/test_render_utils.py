"""
Tests for renderer helpers.
"""

import pytest
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT
from reportlab.lib.pagesizes import LETTER

from htmlquill.engine.layout_primitives import Alignment, Paragraph, StyledSpan
from htmlquill.renderers.render_utils import (
    Margins,
    ensure_margins,
    ensure_page_size,
    paragraph_markup,
    paragraph_metrics,
    reportlab_alignment,
    span_markup,
)
from htmlquill.styles.text_style import TextStyle, VerticalPosition


class TestPageSetup:
    """Test cases for page size and margin helpers."""

    def test_page_size_presets(self):
        assert ensure_page_size("letter") == (float(LETTER[0]), float(LETTER[1]))

    def test_page_size_pair(self):
        assert ensure_page_size((100, 200)) == (100.0, 200.0)

    def test_invalid_page_size(self):
        with pytest.raises(ValueError):
            ensure_page_size("A7-ish")
        with pytest.raises(ValueError):
            ensure_page_size((1, 2, 3))

    def test_margins(self):
        assert ensure_margins(36) == Margins(36, 36, 36, 36)
        assert ensure_margins((1, 2, 3, 4)) == Margins(top=1, right=2, bottom=3, left=4)
        assert ensure_margins([]) == Margins()

    def test_invalid_margins(self):
        with pytest.raises(ValueError):
            ensure_margins((1, 2))


class TestStyleMapping:
    """Test cases for style to reportlab mapping."""

    def test_alignment(self):
        assert reportlab_alignment(None) == TA_LEFT
        assert reportlab_alignment(Alignment.CENTER) == TA_CENTER
        assert reportlab_alignment(Alignment.JUSTIFY) == TA_JUSTIFY


class TestMarkup:
    """Test cases for paragraph markup."""

    def test_plain_span_is_escaped(self):
        assert span_markup(StyledSpan("a<b & c", TextStyle())) == '<font size="12">a&lt;b &amp; c</font>'

    def test_formatting_tags(self):
        style = TextStyle(bold=True, italic=True, underline=True, strikethrough=True)
        assert span_markup(StyledSpan("x", style)) == '<font size="12"><strike><u><i><b>x</b></i></u></strike></font>'

    def test_position(self):
        assert "<super>2</super>" in span_markup(StyledSpan("2", TextStyle(position=VerticalPosition.SUPERSCRIPT)))
        assert "<sub>2</sub>" in span_markup(StyledSpan("2", TextStyle(position=VerticalPosition.SUBSCRIPT)))

    def test_colors(self):
        markup = span_markup(StyledSpan("x", TextStyle(font_size=10.5, color=(255, 0, 0), background=(0, 0, 255))))
        assert markup == '<font size="10.5" color="#ff0000" backColor="#0000ff">x</font>'

    def test_light_span_is_greyed(self):
        assert span_markup(StyledSpan("x", TextStyle(light=True))) == '<font size="12" color="#6e6e6e">x</font>'

    def test_light_span_keeps_its_own_color(self):
        markup = span_markup(StyledSpan("x", TextStyle(light=True, color=(255, 0, 0))))
        assert markup == '<font size="12" color="#ff0000">x</font>'

    def test_line_break(self):
        assert span_markup(StyledSpan("\n", TextStyle())) == "<br/>"

    def test_link(self):
        markup = span_markup(StyledSpan("site", TextStyle(), link='https://example.com/?q="x"&a=1'))
        assert markup.startswith('<a href="https://example.com/?q=&quot;x&quot;&amp;a=1">')
        assert markup.endswith("</a>")

    def test_paragraph_markup_and_metrics(self):
        paragraph = Paragraph(spans=[
            StyledSpan("a", TextStyle()),
            StyledSpan("b", TextStyle(font_size=20.0)),
        ])
        assert paragraph_markup(paragraph) == '<font size="12">a</font><font size="20">b</font>'
        assert paragraph_metrics(paragraph) == pytest.approx((20.0, 24.0))

    def test_metrics_of_empty_paragraph(self):
        assert paragraph_metrics(Paragraph()) == pytest.approx((12.0, 14.4))

    def test_small_tag_renders_greyed(self, build_layout):
        paragraph = build_layout("<p>a<small>b</small></p>").paragraphs()[0]
        assert 'color="#6e6e6e">b</font>' in paragraph_markup(paragraph)
