"""Asset handling — copy static assets into the build output.

Copies every file from the site's ``public/`` directory into the output
root, preserving directory structure.  Nothing is skipped or renamed:
``public/css/site.css`` lands at ``build/css/site.css``.
"""

from __future__ import annotations

import shutil
import time
from pathlib import Path
from typing import TYPE_CHECKING

from folio._errors import BuildError
from folio.content.collector import walk_files
from folio.export.static import BuiltFile

if TYPE_CHECKING:
    from folio.observability.collector import EventCollector


def copy_assets(
    static_path: Path,
    output_dir: Path,
    *,
    collector: EventCollector | None = None,
) -> tuple[BuiltFile, ...]:
    """Recursively copy static assets into ``output_dir``.

    Existing files with colliding names are overwritten.  A missing
    ``static_path`` is not an error.

    Args:
        static_path: Source directory (e.g., ``site_root/public/``).
        output_dir: Root build output directory.
        collector: Optional event collector.

    Returns:
        Tuple of :class:`BuiltFile` entries, one per copied file.

    Raises:
        BuildError: If an asset would land where the build already wrote a
            directory (e.g. ``public/blog`` next to a ``/blog/...`` page).

    """
    if not static_path.is_dir():
        return ()

    results: list[BuiltFile] = []

    for src_file in walk_files(static_path):
        t0 = time.perf_counter()

        relative = src_file.relative_to(static_path)
        dest_file = output_dir / relative
        if dest_file.is_dir():
            msg = f"Asset {src_file} collides with generated directory {dest_file}"
            raise BuildError(msg)
        dest_file.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src_file, dest_file)

        size = dest_file.stat().st_size
        elapsed = (time.perf_counter() - t0) * 1000

        results.append(BuiltFile(
            source_path=relative.as_posix(),
            output_path=dest_file,
            source_type="asset",
            size_bytes=size,
            duration_ms=elapsed,
        ))
        if collector is not None:
            collector.record_build(
                "copy_asset", str(src_file), str(dest_file), duration_ms=elapsed,
            )

    return tuple(results)
