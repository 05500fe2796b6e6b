"""Folio configuration.

FolioConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path

from folio._errors import ConfigError


@dataclass(frozen=True, slots=True)
class FolioConfig:
    """Configuration for a folio site.

    Attributes:
        root: Path to the site root directory (contains content/, templates/, etc.).
              Always resolved to its canonical absolute path on construction.
        content_dir: Directory containing Markdown content.
        templates_dir: Directory containing the layout template.
        static_dir: Directory containing static assets (optional on disk).
        output_dir: Output directory, destroyed and rebuilt on every build.
        layout: File name of the layout template inside ``templates_dir``.
        markdown_suffix: Only files ending in this suffix become pages.
        debounce_ms: Quiet period before a watch-mode rebuild starts.

    """

    root: Path = field(default_factory=Path.cwd)
    content_dir: str = "content"
    templates_dir: str = "templates"
    static_dir: str = "public"
    output_dir: str = "build"
    layout: str = "layout.html"
    markdown_suffix: str = ".md"
    debounce_ms: int = 150

    def __post_init__(self) -> None:
        # watchfiles reports canonical paths; a symlinked root must match them.
        object.__setattr__(self, "root", Path(self.root).resolve())
        if self.debounce_ms < 0:
            msg = f"debounce_ms must be >= 0, got {self.debounce_ms}"
            raise ConfigError(msg)
        if not self.markdown_suffix.startswith("."):
            msg = f"markdown_suffix must start with '.', got {self.markdown_suffix!r}"
            raise ConfigError(msg)

    @property
    def content_path(self) -> Path:
        """Absolute path to content directory."""
        return self.root / self.content_dir

    @property
    def templates_path(self) -> Path:
        """Absolute path to templates directory."""
        return self.root / self.templates_dir

    @property
    def static_path(self) -> Path:
        """Absolute path to static assets directory."""
        return self.root / self.static_dir

    @property
    def output_path(self) -> Path:
        """Absolute path to output directory."""
        output = Path(self.output_dir)
        if output.is_absolute():
            return output
        return self.root / output

    @property
    def layout_path(self) -> Path:
        """Absolute path to the layout template."""
        return self.templates_path / self.layout
