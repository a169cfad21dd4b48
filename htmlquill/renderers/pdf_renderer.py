"""
PDF renderer.

Maps the layout tree onto reportlab platypus flowables. Containers become
``Indenter``/``Spacer`` pairs, paragraphs become platypus ``Paragraph``
objects (wrapped in a two-column ``Table`` when they carry a list marker),
blank lines become spacers and images are scaled to the available width.
Pagination, line breaking and font metrics are left to platypus.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Flowable, Image, Indenter, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus import Paragraph as PdfParagraph
from reportlab.platypus.doctemplate import LayoutError as PlatypusLayoutError

from ..engine.layout_primitives import Alignment, BlankLine, Container, ImageUnit, LayoutUnit, Paragraph
from ..exceptions import RenderingError
from .render_utils import (
    FONT_FAMILY,
    Margins,
    ensure_margins,
    ensure_page_size,
    paragraph_markup,
    paragraph_metrics,
    reportlab_alignment,
)

logger = logging.getLogger(__name__)

_IMAGE_ALIGN = {
    Alignment.LEFT: "LEFT",
    Alignment.CENTER: "CENTER",
    Alignment.RIGHT: "RIGHT",
    Alignment.JUSTIFY: "LEFT",
}

_MARKER_TABLE_STYLE = TableStyle([
    ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ("LEFTPADDING", (0, 0), (-1, -1), 0),
    ("RIGHTPADDING", (0, 0), (-1, -1), 0),
    ("TOPPADDING", (0, 0), (-1, -1), 0),
    ("BOTTOMPADDING", (0, 0), (-1, -1), 0),
])


class PdfRenderer:
    """
    Render a layout tree to PDF with reportlab.

    Args:
        output_path: Default destination of :meth:`render`
        page_size: ``"A4"``, ``"LETTER"`` or a ``(width, height)`` pair in points
        margins: Margins in points, one value or ``(top, right, bottom, left)``
        title: Document title stored in the PDF metadata
    """

    def __init__(
        self,
        output_path: Optional[Union[str, Path]] = None,
        page_size: Union[str, Iterable[float]] = "A4",
        margins: Union[Margins, float, Iterable[float]] = (50, 50, 50, 50),
        title: Optional[str] = None,
    ) -> None:
        self.output_path = Path(output_path) if output_path else None
        self.page_size = ensure_page_size(page_size)
        self.margins = ensure_margins(margins)
        self.title = title or ""
        self._style_counter = 0

    @property
    def frame_width(self) -> float:
        return self.page_size[0] - self.margins.left - self.margins.right

    # ------------------------------------------------------------------
    def render(self, layout: Container, output_path: Optional[Union[str, Path]] = None) -> Path:
        """
        Write ``layout`` to a PDF file.

        Returns:
            Path of the written file

        Raises:
            RenderingError: No output path is known or reportlab fails
        """
        target = Path(output_path) if output_path else self.output_path
        if target is None:
            raise RenderingError("No output path given for PDF rendering")
        target.parent.mkdir(parents=True, exist_ok=True)
        self._build(layout, str(target))
        logger.info(f"PDF written to {target}")
        return target

    def render_to_bytes(self, layout: Container) -> bytes:
        buffer = io.BytesIO()
        self._build(layout, buffer)
        return buffer.getvalue()

    def build_flowables(self, layout: Container) -> List[Flowable]:
        """Flatten the layout tree into platypus flowables in reading order."""
        flowables: List[Flowable] = []
        self._style_counter = 0
        self._add_container(layout, self.frame_width, None, flowables)
        return flowables

    # ------------------------------------------------------------------
    def _build(self, layout: Container, target) -> None:
        flowables = self.build_flowables(layout)
        if not flowables:
            # platypus refuses to build an empty story
            flowables.append(Spacer(1, 0))

        doc = SimpleDocTemplate(
            target,
            pagesize=self.page_size,
            topMargin=self.margins.top,
            rightMargin=self.margins.right,
            bottomMargin=self.margins.bottom,
            leftMargin=self.margins.left,
            title=self.title,
        )
        try:
            doc.build(flowables)
        except (PlatypusLayoutError, ValueError, OSError) as exc:
            raise RenderingError("Failed to render PDF", str(exc)) from exc
        logger.debug(f"Rendered {len(flowables)} flowables on {doc.page} page(s)")

    def _add_container(
        self,
        container: Container,
        width: float,
        inherited: Optional[Alignment],
        out: List[Flowable],
    ) -> None:
        padding = container.padding
        alignment = container.alignment or inherited
        indented = bool(padding.left or padding.right)

        if padding.top:
            out.append(Spacer(1, padding.top))
        if indented:
            out.append(Indenter(left=padding.left, right=padding.right))

        inner_width = max(width - padding.left - padding.right, 1.0)
        for unit in container.children:
            self._add_unit(unit, inner_width, alignment, out)

        if indented:
            out.append(Indenter(left=-padding.left, right=-padding.right))
        if padding.bottom:
            out.append(Spacer(1, padding.bottom))

    def _add_unit(self, unit: LayoutUnit, width: float, alignment: Optional[Alignment], out: List[Flowable]) -> None:
        if isinstance(unit, Container):
            self._add_container(unit, width, alignment, out)
        elif isinstance(unit, Paragraph):
            out.append(self._paragraph_flowable(unit, width, alignment))
        elif isinstance(unit, BlankLine):
            out.append(Spacer(1, unit.height))
        elif isinstance(unit, ImageUnit):
            out.append(self._image_flowable(unit, width, alignment))

    def _paragraph_flowable(self, paragraph: Paragraph, width: float, inherited: Optional[Alignment]) -> Flowable:
        font_size, leading = paragraph_metrics(paragraph)
        style = self._paragraph_style(font_size, leading, paragraph.alignment or inherited)
        body = PdfParagraph(paragraph_markup(paragraph), style)
        if paragraph.marker is None:
            return body

        marker_width = min(paragraph.marker_width, width / 2)
        marker_style = self._paragraph_style(font_size, leading, Alignment.LEFT)
        marker = PdfParagraph(paragraph.marker.text.replace(" ", "&nbsp;"), marker_style)
        table = Table([[marker, body]], colWidths=[marker_width, width - marker_width])
        table.setStyle(_MARKER_TABLE_STYLE)
        table.hAlign = "LEFT"
        return table

    def _paragraph_style(self, font_size: float, leading: float, alignment: Optional[Alignment]) -> ParagraphStyle:
        self._style_counter += 1
        return ParagraphStyle(
            name=f"htmlquill-{self._style_counter}",
            fontName=FONT_FAMILY,
            fontSize=font_size,
            leading=leading,
            alignment=reportlab_alignment(alignment),
        )

    def _image_flowable(self, unit: ImageUnit, width: float, alignment: Optional[Alignment]) -> Flowable:
        draw_width, draw_height = unit.width, unit.height
        if draw_width > width:
            scale = width / draw_width
            draw_width, draw_height = width, draw_height * scale
        image = Image(io.BytesIO(unit.data), width=draw_width, height=draw_height)
        image.hAlign = _IMAGE_ALIGN.get(alignment, "LEFT")
        return image
