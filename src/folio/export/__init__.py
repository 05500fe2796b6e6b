"""Build layer — layout rendering, page output, and asset copying."""

from folio.export.layout import Layout, load_layout
from folio.export.static import BuildResult, BuiltFile, SiteBuilder

__all__ = [
    "BuildResult",
    "BuiltFile",
    "Layout",
    "SiteBuilder",
    "load_layout",
]
