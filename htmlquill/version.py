"""Version information for htmlquill."""

__version__ = "0.3.0"
