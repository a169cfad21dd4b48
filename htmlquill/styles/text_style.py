"""
Text style descriptor and inline CSS application.

:class:`TextStyle` is the effective visual style of one text span. Values
are immutable; every modifier returns a new instance so a style can be
shared between spans and cascade steps.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Mapping, Optional

from .color_map import RGB, parse_color

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 12.0
LEADING_FACTOR = 1.2
PX_TO_PT = 0.75
TEXT_ALIGN_VALUES = ("left", "center", "right", "justify")


class VerticalPosition(str, Enum):
    """Baseline shift of a span."""

    NORMAL = "normal"
    SUPERSCRIPT = "superscript"
    SUBSCRIPT = "subscript"


@dataclass(frozen=True)
class TextStyle:
    """Font size, weight, slant, decoration, position, colors and line height."""

    font_size: float = DEFAULT_FONT_SIZE
    bold: bool = False
    light: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    position: VerticalPosition = VerticalPosition.NORMAL
    color: Optional[RGB] = None
    background: Optional[RGB] = None
    line_height: Optional[float] = None

    @property
    def leading(self) -> float:
        """Distance between baselines in points."""
        return self.font_size * LEADING_FACTOR * (self.line_height or 1.0)

    # ------------------------------------------------------------------
    def with_font_size(self, size: float) -> "TextStyle":
        return replace(self, font_size=float(size))

    def with_bold(self) -> "TextStyle":
        return replace(self, bold=True, light=False)

    def with_light(self) -> "TextStyle":
        return replace(self, bold=False, light=True)

    def with_normal_weight(self) -> "TextStyle":
        return replace(self, bold=False, light=False)

    def with_italic(self, italic: bool = True) -> "TextStyle":
        return replace(self, italic=italic)

    def with_underline(self) -> "TextStyle":
        return replace(self, underline=True)

    def with_strikethrough(self) -> "TextStyle":
        return replace(self, strikethrough=True)

    def with_position(self, position: VerticalPosition) -> "TextStyle":
        return replace(self, position=position)

    def with_color(self, color: RGB) -> "TextStyle":
        return replace(self, color=color)

    def with_background(self, color: RGB) -> "TextStyle":
        return replace(self, background=color)

    def with_line_height(self, multiplier: float) -> "TextStyle":
        return replace(self, line_height=float(multiplier))

    # ------------------------------------------------------------------
    def merge(self, overrides: Mapping[str, Any]) -> "TextStyle":
        """Return a copy with the given fields replaced."""
        if not overrides:
            return self
        return replace(self, **dict(overrides))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TextStyle":
        """
        Build a style from a plain mapping (theme files).

        Colors may be given as CSS tokens; ``position`` as its string value.
        Unknown keys raise ``ValueError``.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown text style fields: {', '.join(sorted(unknown))}")

        values = dict(data)
        for key in ("color", "background"):
            if isinstance(values.get(key), str):
                parsed = parse_color(values[key])
                if parsed is None:
                    raise ValueError(f"Invalid color for {key}: {values[key]!r}")
                values[key] = parsed
            elif values.get(key) is not None:
                values[key] = tuple(int(c) for c in values[key])
        if "position" in values:
            values["position"] = VerticalPosition(values["position"])
        return cls(**values)


# ----------------------------------------------------------------------
# Inline CSS
# ----------------------------------------------------------------------


def parse_font_size(value: str) -> Optional[float]:
    """``"10pt"`` -> 10.0, ``"16px"`` -> 12.0; zero, negative or anything else -> None."""
    value = value.strip().lower()
    if value.endswith("pt"):
        return _to_positive(value[:-2])
    if value.endswith("px"):
        size = _to_positive(value[:-2])
        return size * PX_TO_PT if size is not None else None
    return None


def parse_line_height(value: str) -> Optional[float]:
    """Line height as a multiplier of a 12pt baseline; non-positive values -> None."""
    value = value.strip().lower()
    if value.endswith("pt"):
        points = _to_positive(value[:-2])
        return points / DEFAULT_FONT_SIZE if points is not None else None
    if value.endswith("px"):
        pixels = _to_positive(value[:-2])
        return pixels * PX_TO_PT / DEFAULT_FONT_SIZE if pixels is not None else None
    return _to_positive(value)


def is_bold(value: str) -> bool:
    value = value.strip().lower()
    if value in ("bold", "bolder"):
        return True
    if value in ("normal", "lighter"):
        return False
    try:
        return int(value) >= 700
    except ValueError:
        return False


def is_italic(value: str) -> bool:
    return value.strip().lower() in ("italic", "oblique")


def _to_float(raw: str) -> Optional[float]:
    try:
        number = float(raw.strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _to_positive(raw: str) -> Optional[float]:
    number = _to_float(raw)
    return number if number is not None and number > 0 else None


def apply_inline_css(style: TextStyle, properties: Optional[Mapping[str, str]]) -> TextStyle:
    """
    Fold parsed inline declarations into ``style``.

    Unparseable values and unknown properties leave the style untouched.
    ``text-align`` is consumed by container/paragraph alignment instead.
    """
    if not properties:
        return style

    for prop, value in properties.items():
        if prop == "font-size":
            size = parse_font_size(value)
            if size is not None:
                style = style.with_font_size(size)
            else:
                logger.debug(f"Ignoring font-size value {value!r}")

        elif prop == "font-weight":
            style = style.with_bold() if is_bold(value) else style.with_normal_weight()

        elif prop == "font-style":
            style = style.with_italic(is_italic(value))

        elif prop == "text-decoration":
            if value.strip().lower() == "underline":
                style = style.with_underline()

        elif prop == "color":
            color = parse_color(value)
            if color is not None:
                style = style.with_color(color)

        elif prop == "background-color":
            color = parse_color(value)
            if color is not None:
                style = style.with_background(color)

        elif prop == "line-height":
            multiplier = parse_line_height(value)
            if multiplier is not None:
                style = style.with_line_height(multiplier)
            else:
                logger.debug(f"Ignoring line-height value {value!r}")

        elif prop == "text-align":
            continue

        else:
            logger.debug(f"Unrecognized inline CSS property {prop!r}: {value!r}")

    return style


def get_text_align(properties: Optional[Mapping[str, str]]) -> Optional[str]:
    """Lower-cased ``text-align`` value, if declared and recognised."""
    if not properties:
        return None
    value = properties.get("text-align")
    if value is None:
        return None
    value = value.strip().lower()
    return value if value in TEXT_ALIGN_VALUES else None
