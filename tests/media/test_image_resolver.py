"""
Tests for image source resolution.
"""

import base64

import pytest

from htmlquill.exceptions import MediaError
from htmlquill.media.image_resolver import image_size, resolve_image


class TestResolveImage:
    """Test cases for resolve_image."""

    def test_base64_data_uri(self, png_bytes):
        src = "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")
        assert resolve_image(src) == png_bytes

    def test_percent_encoded_data_uri(self):
        assert resolve_image("data:text/plain,hello%20world") == b"hello world"

    def test_malformed_data_uri(self):
        with pytest.raises(MediaError):
            resolve_image("data:image/png;base64")

    def test_invalid_base64_payload(self):
        with pytest.raises(MediaError):
            resolve_image("data:image/png;base64,abc")

    def test_local_path(self, temp_dir, png_bytes):
        image_path = temp_dir / "pic.png"
        image_path.write_bytes(png_bytes)

        assert resolve_image(str(image_path)) == png_bytes
        assert resolve_image(image_path.as_uri()) == png_bytes

    def test_missing_file(self, temp_dir):
        with pytest.raises(MediaError) as exc_info:
            resolve_image(str(temp_dir / "missing.png"))
        assert "not found" in str(exc_info.value)

    def test_remote_urls_are_not_fetched(self):
        assert resolve_image("https://example.com/a.png") is None
        assert resolve_image("http://example.com/a.png") is None

    def test_empty_source(self):
        assert resolve_image("") is None
        assert resolve_image("   ") is None


class TestImageSize:
    """Test cases for image_size."""

    def test_size_in_points(self, png_bytes):
        assert image_size(png_bytes) == pytest.approx((3.0, 1.5))

    def test_unreadable_data(self):
        with pytest.raises(MediaError):
            image_size(b"definitely not an image")
