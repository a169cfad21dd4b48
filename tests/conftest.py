"""
Pytest configuration for htmlquill
"""

import io
import logging
import sys
import tempfile
from pathlib import Path

import pytest
from PIL import Image

from htmlquill.config import RenderConfig
from htmlquill.engine.layout_pipeline import HtmlLayoutPipeline


def make_png(width=4, height=2):
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), (200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid rich handler output."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def config():
    """Default render configuration."""
    return RenderConfig()


@pytest.fixture
def png_bytes():
    """4x2 pixel PNG image."""
    return make_png()


@pytest.fixture
def build_layout(config):
    """Build the layout tree of an HTML string with the ``config`` fixture."""
    def _build(html, render_config=None):
        return HtmlLayoutPipeline(render_config or config).build(html)
    return _build


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    # Ignore logging errors during tests
    logging.raiseExceptions = False
