"""Folio error hierarchy.

All folio-specific errors inherit from FolioError for easy catching.
"""


class FolioError(Exception):
    """Base error for all folio operations."""


class ConfigError(FolioError):
    """Invalid or missing configuration."""


class ContentError(FolioError):
    """Error in content processing (front matter, content tree)."""


class LayoutError(FolioError):
    """The layout template is missing, malformed, or failed to render."""


class BuildError(FolioError):
    """Error during a build pass."""
