"""Custom exceptions for htmlquill."""

from typing import Optional


class HtmlQuillError(Exception):
    """Base exception for htmlquill errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ParsingError(HtmlQuillError):
    """Exception raised when HTML input cannot be read or decoded."""

    pass


class StyleError(HtmlQuillError):
    """Exception raised when a style configuration or theme is invalid."""

    pass


class LayoutError(HtmlQuillError):
    """Exception raised during layout decomposition."""

    pass


class RenderingError(HtmlQuillError):
    """Exception raised while handing the layout tree to the PDF engine."""

    pass


class MediaError(HtmlQuillError):
    """Exception raised while resolving image sources."""

    pass
