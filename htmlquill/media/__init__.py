"""Image resolution helpers."""

from .image_resolver import image_size, resolve_image

__all__ = ["image_size", "resolve_image"]
