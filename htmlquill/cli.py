"""
Command-line interface for htmlquill.

Usage:
    htmlquill convert input.html --output output.pdf
    htmlquill convert input.html --page-size LETTER --margin 36 --theme theme.json
    htmlquill layout input.html
    htmlquill version
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .exceptions import HtmlQuillError
from .utils.logger import configure_logging

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="htmlquill",
        description="htmlquill - HTML to paged PDF conversion",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  htmlquill convert page.html --output page.pdf
  htmlquill convert page.html --page-size LETTER --margin 36
  htmlquill layout page.html --spans
  htmlquill version
        """,
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    convert_parser = subparsers.add_parser("convert", help="Convert HTML to PDF")
    convert_parser.add_argument("input", help="Input HTML file")
    convert_parser.add_argument(
        "-o", "--output",
        help="Output file path (default: input name with .pdf extension)",
    )
    convert_parser.add_argument(
        "--page-size",
        choices=["A4", "LETTER"],
        default="A4",
        help="Page size (default: A4)",
    )
    convert_parser.add_argument(
        "--margin",
        type=float,
        default=50.0,
        help="Page margin in points on every side (default: 50)",
    )
    convert_parser.add_argument("--theme", help="JSON theme with class styles and list settings")

    layout_parser = subparsers.add_parser("layout", help="Print the layout tree of an HTML file")
    layout_parser.add_argument("input", help="Input HTML file")
    layout_parser.add_argument("--theme", help="JSON theme with class styles and list settings")
    layout_parser.add_argument("--spans", action="store_true", help="Show every styled span")

    subparsers.add_parser("version", help="Show version information")

    return parser


def _open_document(args):
    from .api import HtmlDocument

    doc = HtmlDocument.from_file(args.input)
    if getattr(args, "theme", None):
        doc = doc.with_theme(args.theme)
    return doc


def cmd_convert(args) -> int:
    """Handle convert command."""
    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else input_path.with_suffix(".pdf")

    doc = _open_document(args)
    logger.info(f"Rendering {input_path} ({args.page_size}, margin {args.margin:g}pt)")
    doc.to_pdf(output_path, page_size=args.page_size, margins=args.margin)
    print(f"Saved: {output_path}")
    return 0


def cmd_layout(args) -> int:
    """Handle layout command."""
    from .renderers.tree_renderer import print_layout

    doc = _open_document(args)
    print_layout(doc.layout(), show_spans=args.spans)
    return 0


def cmd_version(args=None) -> int:
    """Handle version command."""
    from .version import __version__

    print(f"htmlquill v{__version__}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    handlers = {
        "convert": cmd_convert,
        "layout": cmd_layout,
        "version": cmd_version,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args)
    except HtmlQuillError as exc:
        logger.error(str(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main())
