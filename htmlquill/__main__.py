"""
Entry point for running htmlquill as a module.

Usage:
    python -m htmlquill convert input.html --output output.pdf
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
