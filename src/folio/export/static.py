"""Static build — render every content page through the layout to HTML files.

Pipeline order:
    1. Refuse an output directory that overlaps a source directory,
       otherwise remove the previous output
    2. Recreate it
    3. Load and compile the layout
    4. Collect pages from the content tree
    5. Render and write each page
    6. Copy static assets (if the assets directory exists)

A failure partway through leaves a partially written output tree; the next
build starts from scratch anyway.
"""

from __future__ import annotations

import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from folio._errors import BuildError
from folio.content.collector import collect_pages
from folio.content.router import route_to_output_file
from folio.export.layout import load_layout

if TYPE_CHECKING:
    from folio.config import FolioConfig
    from folio.content.collector import Page
    from folio.export.layout import Layout
    from folio.observability.collector import EventCollector


@dataclass(frozen=True, slots=True)
class BuiltFile:
    """Record of a single file written during a build.

    Attributes:
        source_path: Route for pages (``"/blog/today"``), asset-relative
            path for assets (``"css/site.css"``).
        output_path: Absolute filesystem path to the written file.
        source_type: Category of the written file.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to render and write this file.

    """

    source_path: str
    output_path: Path
    source_type: Literal["page", "asset"]
    size_bytes: int
    duration_ms: float


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Aggregate result of a full build.

    Attributes:
        files: All files written during the build.
        total_pages: Number of pages written.
        total_assets: Number of static asset files copied.
        duration_ms: Total wall-clock time for the build.
        output_dir: Absolute path to the output directory.

    """

    files: tuple[BuiltFile, ...]
    total_pages: int
    total_assets: int
    duration_ms: float
    output_dir: Path


class SiteBuilder:
    """Builds a folio site into its output directory.

    Every call to :meth:`build` owns the output directory completely:
    it is deleted and recreated before anything is written.

    Args:
        config: Frozen folio configuration.
        collector: Optional event collector for build observability.

    """

    def __init__(
        self,
        config: FolioConfig,
        collector: EventCollector | None = None,
    ) -> None:
        self._config = config
        self._collector = collector

    @property
    def config(self) -> FolioConfig:
        return self._config

    def build(self) -> BuildResult:
        """Run the full build and return the result.

        Raises:
            BuildError: If the output directory overlaps a source directory
                or an asset collides with a generated page directory.
            LayoutError: If the layout is missing, malformed, or fails to render.
            ContentError: If the content tree is missing or a header is malformed.
            OSError: On filesystem failures while reading, writing, or copying.

        """
        start = time.perf_counter()
        output_dir = self._config.output_path

        self._check_output_dir(output_dir)
        self._clean_output(output_dir)

        layout = load_layout(self._config)
        pages = collect_pages(
            self._config.content_path,
            suffix=self._config.markdown_suffix,
            collector=self._collector,
        )

        all_files: list[BuiltFile] = []
        all_files.extend(self._render_pages(pages, layout, output_dir))
        all_files.extend(self._copy_assets(output_dir))

        elapsed = (time.perf_counter() - start) * 1000

        return BuildResult(
            files=tuple(all_files),
            total_pages=sum(1 for f in all_files if f.source_type == "page"),
            total_assets=sum(1 for f in all_files if f.source_type == "asset"),
            duration_ms=elapsed,
            output_dir=output_dir,
        )

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def _check_output_dir(self, output_dir: Path) -> None:
        """Refuse to delete an output directory that holds or is held by a source tree."""
        config = self._config
        sources = (config.root, config.content_path, config.templates_path, config.static_path)
        for source in sources:
            if output_dir == source or source.is_relative_to(output_dir) or (
                source != config.root and output_dir.is_relative_to(source)
            ):
                msg = f"Output directory {output_dir} overlaps source directory {source}"
                raise BuildError(msg)

    def _clean_output(self, output_dir: Path) -> None:
        """Remove and recreate the output directory."""
        t0 = time.perf_counter()
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        if self._collector is not None:
            self._collector.record_build(
                "clean", str(output_dir), str(output_dir),
                duration_ms=(time.perf_counter() - t0) * 1000,
            )

    def _render_pages(
        self, pages: list[Page], layout: Layout, output_dir: Path,
    ) -> list[BuiltFile]:
        """Render each page through the layout and write it to disk."""
        results: list[BuiltFile] = []

        for page in pages:
            t0 = time.perf_counter()

            filepath = route_to_output_file(page.route, output_dir)
            html = layout.render(page)
            size = self._write_html(filepath, html)
            elapsed = (time.perf_counter() - t0) * 1000

            results.append(BuiltFile(
                source_path=page.route,
                output_path=filepath,
                source_type="page",
                size_bytes=size,
                duration_ms=elapsed,
            ))
            if self._collector is not None:
                self._collector.record_build(
                    "render", str(page.source_path), str(filepath), duration_ms=elapsed,
                )

        return results

    def _copy_assets(self, output_dir: Path) -> tuple[BuiltFile, ...]:
        """Copy static assets into the output root."""
        from folio.export.assets import copy_assets

        return copy_assets(
            self._config.static_path, output_dir, collector=self._collector,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _write_html(filepath: Path, html: str) -> int:
        """Write HTML content to a file, creating parent dirs as needed.

        Returns the size in bytes of the written file.

        """
        filepath.parent.mkdir(parents=True, exist_ok=True)
        data = html.encode("utf-8")
        filepath.write_bytes(data)
        return len(data)
