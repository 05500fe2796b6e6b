"""Folio application — one-shot builds and watch mode.

The two public functions (build, watch) are the primary entry points.
"""

import asyncio
import signal
import sys
from pathlib import Path

from folio._errors import ConfigError
from folio.config import FolioConfig
from folio.export.static import BuildResult, SiteBuilder
from folio.observability import EventCollector, EventLog


def load_config(root: str | Path = ".", **overrides: object) -> FolioConfig:
    """Create the FolioConfig for ``root`` with field overrides applied.

    Raises:
        ConfigError: If an override names an unknown field.

    """
    try:
        return FolioConfig(root=Path(root), **overrides)  # type: ignore[arg-type]
    except TypeError as exc:
        msg = f"Invalid configuration: {exc}"
        raise ConfigError(msg) from exc


def _describe_result(result: object) -> str:
    if not isinstance(result, BuildResult):
        return ""
    pages = "page" if result.total_pages == 1 else "pages"
    return f"{result.total_pages} {pages} in {result.duration_ms:.0f}ms"


def _print_build_summary(result: BuildResult) -> None:
    """Print build completion summary to stderr."""
    lines = [
        "─" * 41,
        f"  Built {result.total_pages} page{'s' if result.total_pages != 1 else ''}",
    ]
    if result.total_assets > 0:
        lines.append(
            f"  Copied {result.total_assets} asset{'s' if result.total_assets != 1 else ''}"
        )
    lines.append(f"  Output: {result.output_dir}")
    lines.append(f"  Done in {result.duration_ms:.0f}ms")

    print("\n".join(lines), file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def build(root: str | Path = ".", **kwargs: object) -> BuildResult:
    """Build the site once.

    Removes the output directory, renders every content page through the
    layout, and copies static assets.

    Args:
        root: Path to the site root directory.
        **kwargs: Override FolioConfig fields.

    Returns:
        The BuildResult of the build.

    """
    from folio.banner import print_banner

    config = load_config(root, **kwargs)
    result = SiteBuilder(config).build()

    print_banner(config, result.total_pages, mode="build", load_ms=result.duration_ms)
    _print_build_summary(result)
    return result


def watch(root: str | Path = ".", **kwargs: object) -> int:
    """Build the site, then rebuild on every change until interrupted.

    The initial build is not guarded: if it fails the error propagates.
    Later rebuild failures are logged and the watcher keeps running.

    Args:
        root: Path to the site root directory.
        **kwargs: Override FolioConfig fields.

    Returns:
        Process exit status (0 after an interrupt).

    """
    config = load_config(root, **kwargs)
    collector = EventCollector(EventLog())
    builder = SiteBuilder(config, collector)

    result = builder.build()
    return asyncio.run(_watch_forever(config, builder, collector, result))


async def _watch_forever(
    config: FolioConfig,
    builder: SiteBuilder,
    collector: EventCollector,
    initial: BuildResult,
) -> int:
    from folio.banner import print_banner
    from folio.content.watcher import SiteWatcher
    from folio.reactive.scheduler import RebuildScheduler

    scheduler = RebuildScheduler(
        builder.build,
        delay_ms=config.debounce_ms,
        collector=collector,
        describe=_describe_result,
    )
    watcher = SiteWatcher(config, scheduler)

    warnings = []
    if not config.static_path.is_dir():
        warnings.append(f"{config.static_dir}/ not found; static assets are not watched")

    print_banner(
        config, initial.total_pages, mode="watch",
        load_ms=initial.duration_ms, watched=watcher.paths, warnings=warnings,
    )

    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, watcher.stop)
    except NotImplementedError:
        # No loop signal handlers on this platform; the CLI handles KeyboardInterrupt.
        pass

    try:
        await watcher.run()
    finally:
        watcher.stop()
        try:
            loop.remove_signal_handler(signal.SIGINT)
        except NotImplementedError:
            pass

    print("\n[watch] stopping", file=sys.stderr)
    if scheduler.rebuild_count:
        print(
            f"[watch] {scheduler.rebuild_count} rebuilds, {scheduler.failure_count} failed",
            file=sys.stderr,
        )
    return 0
