"""Render configuration threaded through the layout pipeline."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Union

from .engine.layout_primitives import DEFAULT_BULLET, Alignment, ContainerTransform, pad_left
from .exceptions import StyleError
from .media.image_resolver import resolve_image
from .styles.defaults import (
    DEFAULT_CLASS_CONTAINER_STYLES,
    DEFAULT_CLASS_TEXT_ALIGNMENTS,
    DEFAULT_LIST_INDENT,
    DEFAULT_LIST_VERTICAL_PADDING,
    DEFAULT_MARKER_WIDTH,
    DEFAULT_TAG_TEXT_STYLES,
    default_container_styles,
)
from .styles.text_style import TextStyle

logger = logging.getLogger(__name__)

ImageResolver = Callable[[str], Optional[bytes]]

_MAPPING_FIELDS = (
    "tag_text_styles",
    "container_styles",
    "class_text_styles",
    "class_container_styles",
    "class_text_alignments",
)


@dataclass(frozen=True)
class RenderConfig:
    """
    Style configuration of one conversion.

    Attributes:
        tag_text_styles: Tag name -> partial ``TextStyle`` overrides applied during the cascade.
        container_styles: Tag name -> container transform (padding, alignment).
            Defaults to paragraph padding and list indentation by ``list_indent``.
        class_text_styles: Class name -> full ``TextStyle`` replacing the cascaded style of a leaf.
        class_container_styles: Class name -> container transform.
        class_text_alignments: Class name -> paragraph alignment.
        list_indent: Left padding of ``ul``/``ol`` containers in points.
        list_vertical_padding: Padding above and below top-level lists in points.
        marker_width: Width of the list prefix cell in points.
        bullet: Prefix text of unordered list items.
        base_style: Style every cascade starts from.
        image_resolver: Maps an ``img`` source to image bytes (or None).
    """

    tag_text_styles: Mapping[str, Mapping[str, Any]] = field(default_factory=lambda: DEFAULT_TAG_TEXT_STYLES)
    container_styles: Optional[Mapping[str, ContainerTransform]] = None
    class_text_styles: Mapping[str, TextStyle] = field(default_factory=dict)
    class_container_styles: Mapping[str, ContainerTransform] = field(default_factory=lambda: DEFAULT_CLASS_CONTAINER_STYLES)
    class_text_alignments: Mapping[str, Alignment] = field(default_factory=lambda: DEFAULT_CLASS_TEXT_ALIGNMENTS)
    list_indent: float = DEFAULT_LIST_INDENT
    list_vertical_padding: float = DEFAULT_LIST_VERTICAL_PADDING
    marker_width: float = DEFAULT_MARKER_WIDTH
    bullet: str = DEFAULT_BULLET
    base_style: TextStyle = TextStyle()
    image_resolver: ImageResolver = resolve_image

    def __post_init__(self) -> None:
        if self.container_styles is None:
            object.__setattr__(self, "container_styles", default_container_styles(self.list_indent))
        # Freeze every table so a shared config cannot be changed under a running conversion.
        for name in _MAPPING_FIELDS:
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    @property
    def base_font_size(self) -> float:
        return self.base_style.font_size

    # ------------------------------------------------------------------
    def with_class_text_style(self, class_name: str, style: TextStyle) -> "RenderConfig":
        return replace(self, class_text_styles={**self.class_text_styles, class_name: style})

    def with_class_text_alignment(self, class_name: str, alignment: Alignment) -> "RenderConfig":
        return replace(self, class_text_alignments={**self.class_text_alignments, class_name: alignment})

    def with_class_container_style(self, class_name: str, transform: ContainerTransform) -> "RenderConfig":
        return replace(self, class_container_styles={**self.class_container_styles, class_name: transform})

    def with_tag_text_style(self, tag: str, overrides: Mapping[str, Any]) -> "RenderConfig":
        return replace(self, tag_text_styles={**self.tag_text_styles, tag.lower(): dict(overrides)})

    def with_image_resolver(self, resolver: ImageResolver) -> "RenderConfig":
        return replace(self, image_resolver=resolver)


def load_theme(theme_path: Union[str, Path], base: Optional[RenderConfig] = None) -> RenderConfig:
    """
    Extend a configuration with a JSON theme file.

    The theme may contain ``class_text_styles`` (class -> TextStyle fields),
    ``class_text_alignments`` (class -> left/center/right/justify) and the
    numeric settings ``list_indent``, ``list_vertical_padding``,
    ``marker_width`` plus ``bullet``.

    Raises:
        StyleError: The file cannot be read or holds invalid values
    """
    theme_path = Path(theme_path)
    config = base or RenderConfig()
    try:
        data = json.loads(theme_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise StyleError(f"Cannot load theme {theme_path}", str(exc)) from exc
    if not isinstance(data, dict):
        raise StyleError(f"Theme {theme_path} must contain a JSON object")

    try:
        for class_name, style_data in data.get("class_text_styles", {}).items():
            config = config.with_class_text_style(class_name, TextStyle.from_mapping(style_data))
        for class_name, value in data.get("class_text_alignments", {}).items():
            config = config.with_class_text_alignment(class_name, Alignment(value))
    except (TypeError, ValueError) as exc:
        raise StyleError(f"Invalid style in theme {theme_path}", str(exc)) from exc

    numeric = {}
    for key in ("list_indent", "list_vertical_padding", "marker_width"):
        if key in data:
            if not isinstance(data[key], (int, float)):
                raise StyleError(f"Theme value {key} must be a number", repr(data[key]))
            numeric[key] = float(data[key])
    if "bullet" in data:
        numeric["bullet"] = str(data["bullet"])
    if "list_indent" in numeric:
        indent = pad_left(numeric["list_indent"])
        numeric["container_styles"] = {**config.container_styles, "ul": indent, "ol": indent}
    if numeric:
        config = replace(config, **numeric)

    logger.debug(f"Loaded theme {theme_path.name}")
    return config
