"""
Layout tree handed to the page layout engine.

The composer produces a tree of vertical ``Container`` stacks whose leaves
are ``Paragraph`` (styled spans plus an optional list prefix cell),
``BlankLine`` placeholders and ``ImageUnit`` pictures. The tree carries no
geometry beyond padding and alignment; pagination, font metrics and PDF
emission belong to the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Iterator, List, Optional, Union

from ..styles.text_style import TextStyle

DEFAULT_BULLET = "•  "

###############################################################################
# Shared value types
###############################################################################


class Alignment(str, Enum):
    """Horizontal alignment of a container or paragraph."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"

    @classmethod
    def from_css(cls, value: Optional[str]) -> Optional["Alignment"]:
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class Padding:
    """Padding in points."""

    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    def __add__(self, other: "Padding") -> "Padding":
        return Padding(
            self.top + other.top,
            self.right + other.right,
            self.bottom + other.bottom,
            self.left + other.left,
        )

    @property
    def is_zero(self) -> bool:
        return not (self.top or self.right or self.bottom or self.left)


class PrefixKind(Enum):
    """What goes in the list prefix cell."""

    NONE = "none"
    BULLET = "bullet"
    NUMBERED = "numbered"


@dataclass(frozen=True, slots=True)
class ListMarker:
    """Prefix cell of a paragraph that belongs to a list."""

    kind: PrefixKind
    number: Optional[int] = None
    bullet: str = DEFAULT_BULLET

    @property
    def text(self) -> str:
        if self.kind is PrefixKind.BULLET:
            return self.bullet
        if self.kind is PrefixKind.NUMBERED:
            return f"{self.number}. "
        return ""


###############################################################################
# Layout units
###############################################################################


@dataclass(slots=True)
class StyledSpan:
    """A run of text with one resolved style."""

    text: str
    style: TextStyle
    link: Optional[str] = None


@dataclass(slots=True)
class Paragraph:
    """One inline run rendered as a paragraph."""

    spans: List[StyledSpan] = field(default_factory=list)
    alignment: Optional[Alignment] = None
    marker: Optional[ListMarker] = None
    marker_width: float = 26.0

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)


@dataclass(slots=True)
class BlankLine:
    """Placeholder that reserves one empty line."""

    height: float


@dataclass(slots=True)
class ImageUnit:
    """A picture resolved from an ``img`` source (size in points)."""

    data: bytes
    src: str
    width: float
    height: float


@dataclass(slots=True)
class Container:
    """Vertical stack of units with padding and alignment."""

    tag: str = ""
    children: List["LayoutUnit"] = field(default_factory=list)
    padding: Padding = field(default_factory=Padding)
    alignment: Optional[Alignment] = None

    @property
    def is_empty(self) -> bool:
        return not self.children

    def add(self, unit: "LayoutUnit") -> None:
        self.children.append(unit)

    def iter_units(self) -> Iterator["LayoutUnit"]:
        """Pre-order walk over this container and everything below it."""
        stack: List[LayoutUnit] = [self]
        while stack:
            unit = stack.pop()
            yield unit
            if isinstance(unit, Container):
                stack.extend(reversed(unit.children))

    def paragraphs(self) -> List[Paragraph]:
        return [unit for unit in self.iter_units() if isinstance(unit, Paragraph)]


LayoutUnit = Union[Container, Paragraph, BlankLine, ImageUnit]

###############################################################################
# Container transforms
###############################################################################

ContainerTransform = Callable[[Container], Container]


def pad_vertical(points: float) -> ContainerTransform:
    def transform(container: Container) -> Container:
        return replace(container, padding=container.padding + Padding(top=points, bottom=points))

    return transform


def pad_horizontal(points: float) -> ContainerTransform:
    def transform(container: Container) -> Container:
        return replace(container, padding=container.padding + Padding(left=points, right=points))

    return transform


def pad_left(points: float) -> ContainerTransform:
    def transform(container: Container) -> Container:
        return replace(container, padding=container.padding + Padding(left=points))

    return transform


def align(alignment: Alignment) -> ContainerTransform:
    def transform(container: Container) -> Container:
        return replace(container, alignment=alignment)

    return transform
