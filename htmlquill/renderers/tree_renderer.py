"""Human readable dump of a layout tree using rich."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from ..engine.layout_primitives import BlankLine, Container, ImageUnit, LayoutUnit, Paragraph
from ..styles.text_style import TextStyle

PREVIEW_LENGTH = 60


def _style_flags(style: TextStyle) -> str:
    flags = [f"{style.font_size:g}pt"]
    for name in ("bold", "light", "italic", "underline", "strikethrough"):
        if getattr(style, name):
            flags.append(name)
    if style.position.value != "normal":
        flags.append(style.position.value)
    if style.color is not None:
        flags.append("color=#{:02x}{:02x}{:02x}".format(*style.color))
    return " ".join(flags)


def _label(unit: LayoutUnit) -> str:
    if isinstance(unit, Container):
        parts = [f"[bold cyan]{escape(unit.tag or 'container')}[/]"]
        if not unit.padding.is_zero:
            p = unit.padding
            parts.append(f"padding=({p.top:g}, {p.right:g}, {p.bottom:g}, {p.left:g})")
        if unit.alignment is not None:
            parts.append(f"align={unit.alignment.value}")
        return " ".join(parts)

    if isinstance(unit, Paragraph):
        text = unit.text.replace("\n", "\\n")
        if len(text) > PREVIEW_LENGTH:
            text = text[:PREVIEW_LENGTH] + "..."
        prefix = f"[magenta]{escape(unit.marker.text.strip() or '[ ]')}[/] " if unit.marker else ""
        align = f" [dim]align={unit.alignment.value}[/]" if unit.alignment else ""
        return f"[green]paragraph[/] {prefix}{escape(repr(text))}{align}"

    if isinstance(unit, BlankLine):
        return f"[yellow]blank line[/] {unit.height:g}pt"

    if isinstance(unit, ImageUnit):
        return f"[blue]image[/] {unit.width:g}x{unit.height:g}pt {escape(unit.src[:40])}"

    return escape(repr(unit))


def build_tree(layout: Container, show_spans: bool = False) -> Tree:
    """
    Build a rich ``Tree`` mirroring the layout tree.

    Args:
        layout: Root container
        show_spans: Also list every span of each paragraph with its style
    """
    root = Tree(_label(layout))
    stack = [(layout, root)]
    while stack:
        container, branch = stack.pop()
        for unit in container.children:
            node = branch.add(_label(unit))
            if isinstance(unit, Container):
                stack.append((unit, node))
            elif show_spans and isinstance(unit, Paragraph):
                for span in unit.spans:
                    node.add(f"{escape(repr(span.text))} [dim]{_style_flags(span.style)}[/]")
    return root


def print_layout(layout: Container, console: Optional[Console] = None, show_spans: bool = False) -> None:
    (console or Console()).print(build_tree(layout, show_spans=show_spans))
