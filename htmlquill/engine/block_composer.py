"""
Block composer.

Walks a normalised DOM and produces the layout tree: one ``Container`` per
composed node, a ``Paragraph`` per run of consecutive inline siblings,
``ImageUnit`` pictures and ``BlankLine`` placeholders for empty blocks.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, List, Optional

from ..exceptions import MediaError
from ..media.image_resolver import PX_TO_PT, image_size
from ..parser.dom import Node, has_block_descendant, has_content
from ..styles.style_cascade_engine import StyleCascadeEngine
from .layout_primitives import BlankLine, Container, ImageUnit, Padding
from .paragraph_builder import ParagraphRunBuilder

if TYPE_CHECKING:
    from ..config import RenderConfig

logger = logging.getLogger(__name__)


class BlockComposer:
    """Compose layout units from DOM nodes."""

    def __init__(
        self,
        config: "RenderConfig",
        cascade: Optional[StyleCascadeEngine] = None,
        paragraph_builder: Optional[ParagraphRunBuilder] = None,
    ) -> None:
        self.config = config
        self.cascade = cascade or StyleCascadeEngine(config)
        self.paragraph_builder = paragraph_builder or ParagraphRunBuilder(config, self.cascade)

    def compose(self, node: Node) -> Container:
        """
        Compose the layout unit of ``node``.

        Malformed fragments degrade to default styling or empty output;
        nothing raises out of the traversal.
        """
        if node.is_head or node.is_comment:
            return Container(tag=node.tag)
        if not node.is_block and not has_content(node):
            return Container(tag=node.tag)

        container = self._styled_container(node)

        if not node.children:
            if not node.is_block:
                # Childless inline node with content (a lone text node or br).
                self._add_paragraph(container, [node])
        else:
            self._compose_children(container, node)

        if node.is_block and container.is_empty:
            container.add(self._blank_line(node))

        if node.is_list and not any(ancestor.is_list for ancestor in node.ancestors()):
            gap = self.config.list_vertical_padding
            container = replace(container, padding=container.padding + Padding(top=gap, bottom=gap))

        return container

    # ------------------------------------------------------------------
    def _styled_container(self, node: Node) -> Container:
        """Apply the tag rule, then class rules in class order, then inline ``text-align``."""
        container = Container(tag=node.tag)
        if not node.is_element:
            return container

        transform = self.config.container_styles.get(node.tag)
        if transform is not None:
            container = transform(container)
        for class_name in node.classes:
            transform = self.config.class_container_styles.get(class_name)
            if transform is not None:
                container = transform(container)

        alignment = self.cascade.container_alignment(node)
        if alignment is not None:
            container = replace(container, alignment=alignment)
        return container

    def _compose_children(self, container: Container, node: Node) -> None:
        run: List[Node] = []
        for child in node.children:
            if child.is_head or child.is_comment:
                continue
            if child.is_image:
                self._flush_run(container, run)
                image = self._image_unit(child)
                if image is not None:
                    container.add(image)
            elif child.is_block or has_block_descendant(child):
                self._flush_run(container, run)
                unit = self.compose(child)
                if not unit.is_empty:
                    container.add(unit)
            else:
                run.append(child)
        self._flush_run(container, run)

    def _flush_run(self, container: Container, run: List[Node]) -> None:
        if run and any(has_content(node) for node in run):
            self._add_paragraph(container, list(run))
        run.clear()

    def _add_paragraph(self, container: Container, nodes: List[Node]) -> None:
        paragraph = self.paragraph_builder.build(nodes)
        if paragraph is not None:
            container.add(paragraph)

    def _blank_line(self, node: Node) -> BlankLine:
        return BlankLine(height=self.cascade.merged_text_style(node).leading)

    # ------------------------------------------------------------------
    def _image_unit(self, node: Node) -> Optional[ImageUnit]:
        src = node.get_attribute("src")
        if not src:
            logger.debug("Image without src skipped")
            return None
        try:
            data = self.config.image_resolver(src)
            if data is None:
                logger.debug(f"Image source not resolved, skipped: {src[:80]}")
                return None
            width, height = image_size(data)
        except MediaError as exc:
            logger.warning(f"Skipping image {src[:80]}: {exc}")
            return None

        width, height = _declared_size(node, width, height)
        return ImageUnit(data=data, src=src, width=width, height=height)


def _px_attribute(node: Node, name: str) -> Optional[float]:
    raw = node.get_attribute(name)
    if raw is None:
        return None
    raw = raw.strip().lower()
    if raw.endswith("px"):
        raw = raw[:-2]
    try:
        value = float(raw)
    except ValueError:
        return None
    return value * PX_TO_PT if value > 0 else None


def _declared_size(node: Node, width: float, height: float) -> tuple:
    """Honour ``width``/``height`` attributes, keeping the aspect ratio when only one is set."""
    declared_width = _px_attribute(node, "width")
    declared_height = _px_attribute(node, "height")
    if declared_width and declared_height:
        return declared_width, declared_height
    if declared_width and width:
        return declared_width, height * declared_width / width
    if declared_height and height:
        return width * declared_height / height, declared_height
    return width, height
