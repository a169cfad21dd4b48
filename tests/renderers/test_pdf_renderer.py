"""
Tests for PdfRenderer.
"""

import re

import pytest
from reportlab.platypus import Image, Indenter, Spacer, Table
from reportlab.platypus import Paragraph as PdfParagraph

from htmlquill.engine.layout_primitives import BlankLine, Container, ImageUnit, Padding
from htmlquill.exceptions import RenderingError
from htmlquill.renderers.pdf_renderer import PdfRenderer


@pytest.fixture
def renderer():
    return PdfRenderer(page_size="A4", margins=50)


class TestBuildFlowables:
    """Test cases for layout tree to flowable mapping."""

    def test_paragraphs(self, renderer, build_layout):
        flowables = renderer.build_flowables(build_layout("<p>Hello <b>world</b></p>"))

        paragraphs = [f for f in flowables if isinstance(f, PdfParagraph)]
        assert len(paragraphs) == 1
        # paragraph padding becomes spacers around it
        assert isinstance(flowables[0], Spacer)
        assert isinstance(flowables[-1], Spacer)

    def test_list_items_become_marker_tables(self, renderer, build_layout):
        flowables = renderer.build_flowables(build_layout("<ol><li>a</li><li>b</li></ol>"))

        tables = [f for f in flowables if isinstance(f, Table)]
        assert len(tables) == 2
        indenters = [f for f in flowables if isinstance(f, Indenter)]
        assert len(indenters) == 2

    def test_marker_table_widths(self, renderer, build_layout):
        flowables = renderer.build_flowables(build_layout("<ul><li>a</li></ul>"))
        table = next(f for f in flowables if isinstance(f, Table))

        available = renderer.frame_width - 30.0
        assert table._colWidths == pytest.approx([26.0, available - 26.0])

    def test_blank_line(self, renderer):
        layout = Container(children=[BlankLine(height=14.4)])
        flowables = renderer.build_flowables(layout)
        assert len(flowables) == 1
        assert flowables[0].height == pytest.approx(14.4)

    def test_padding(self, renderer):
        layout = Container(children=[BlankLine(10.0)], padding=Padding(top=5, bottom=7, left=20))
        flowables = renderer.build_flowables(layout)
        assert [type(f) for f in flowables] == [Spacer, Indenter, Spacer, Indenter, Spacer]

    def test_wide_image_is_scaled(self, renderer, png_bytes):
        layout = Container(children=[ImageUnit(data=png_bytes, src="x.png", width=2000.0, height=1000.0)])
        image = renderer.build_flowables(layout)[0]

        assert isinstance(image, Image)
        assert image.drawWidth == pytest.approx(renderer.frame_width)
        assert image.drawHeight == pytest.approx(renderer.frame_width / 2)


class TestRender:
    """Test cases for PDF output."""

    def test_render_to_bytes(self, renderer, build_layout):
        data = renderer.render_to_bytes(build_layout(
            '<h1>Title</h1><p class="ql-align-center">Centered <a href="https://example.com">link</a></p>'
            '<ul><li>one</li><li><s>two</s><sup>2</sup></li></ul><p></p>'
            '<p style="color: rgb(200, 0, 0); background-color: #ff0">colored</p>'
        ))
        assert data.startswith(b"%PDF")

    def test_render_to_file(self, build_layout, temp_dir):
        output = temp_dir / "nested" / "out.pdf"
        renderer = PdfRenderer(output, page_size="LETTER", margins=(36, 36, 36, 36), title="Test")

        result = renderer.render(build_layout("<p>x</p>"))

        assert result == output
        assert output.read_bytes().startswith(b"%PDF")

    def test_render_with_image(self, renderer, build_layout, config, png_bytes):
        layout = build_layout('<p><img src="x.png"></p>', config.with_image_resolver(lambda src: png_bytes))
        assert renderer.render_to_bytes(layout).startswith(b"%PDF")

    def test_empty_layout(self, renderer):
        assert renderer.render_to_bytes(Container()).startswith(b"%PDF")

    def test_missing_output_path(self, renderer):
        with pytest.raises(RenderingError):
            renderer.render(Container())

    def test_long_document_paginates(self, renderer, build_layout):
        html = "".join(f"<p>Paragraph {i}</p>" for i in range(200))
        data = renderer.render_to_bytes(build_layout(html))
        page_counts = [int(count) for count in re.findall(rb"/Count (\d+)", data)]
        assert max(page_counts) > 1
