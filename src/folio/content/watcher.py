"""File watcher — turns filesystem changes into scheduled rebuilds.

Watches the content directory, the templates directory, and the static
assets directory (when it exists at startup).  Every relevant change is
handed to a :class:`~folio.reactive.scheduler.RebuildScheduler`, which
collapses bursts into a single rebuild.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from watchfiles import Change, awatch

if TYPE_CHECKING:
    from folio._types import ChangeCategory, ChangeKind
    from folio.config import FolioConfig
    from folio.reactive.scheduler import RebuildScheduler


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A file change detected by the watcher.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.
        category: Which watched directory the file belongs to.

    """

    path: Path
    kind: ChangeKind
    category: ChangeCategory

    def reason(self, config: FolioConfig) -> str:
        """Describe the change for the console, e.g. ``content: modified blog/post.md``."""
        for _category, base, label in _watched_dirs(config):
            if self.path.is_relative_to(base):
                name = "" if self.path == base else self.path.relative_to(base).as_posix()
                return f"{label}: {self.kind} {name}".rstrip()
        return f"{self.category}: {self.kind} {self.path}"


# Mapping from watchfiles Change enum to our kind literals.
_CHANGE_KIND_MAP: dict[Change, ChangeKind] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}

# awatch groups raw notifications for this long before yielding; the
# scheduler's own debounce decides when a rebuild actually starts.
_WATCH_DEBOUNCE_MS = 50
_WATCH_STEP_MS = 25


def _watched_dirs(config: FolioConfig) -> list[tuple[ChangeCategory, Path, str]]:
    """(category, directory, display label) triples, most specific directory first."""
    dirs: list[tuple[ChangeCategory, Path, str]] = [
        ("content", config.content_path, config.content_dir),
        ("template", config.templates_path, config.templates_dir),
        ("asset", config.static_path, config.static_dir),
    ]
    return sorted(dirs, key=lambda entry: len(entry[1].parts), reverse=True)


def categorize_change(path: Path, config: FolioConfig) -> ChangeCategory | None:
    """Determine the category of a changed file based on its location.

    A file belongs to the innermost watched directory that contains it.
    Returns None if the file doesn't belong to any watched directory.

    """
    for category, base, _label in _watched_dirs(config):
        if path != base and path.is_relative_to(base):
            return category
    return None


def to_change_event(
    change: Change, path_str: str, config: FolioConfig,
) -> ChangeEvent | None:
    """Convert a raw watchfiles change into a :class:`ChangeEvent`."""
    path = Path(path_str)
    category = categorize_change(path, config)
    if category is None:
        return None
    kind = _CHANGE_KIND_MAP.get(change, "modified")
    return ChangeEvent(path=path, kind=kind, category=category)


def watched_paths(config: FolioConfig) -> tuple[Path, ...]:
    """Directories to watch: content, templates, and static assets if present."""
    paths = [config.content_path, config.templates_path]
    if config.static_path.is_dir():
        paths.append(config.static_path)
    return tuple(paths)


class SiteWatcher:
    """Holds the watch handles for a site and feeds changes to a scheduler.

    One watchfiles ``awatch`` handle runs per watched directory.  All of
    them share a stop event, so :meth:`stop` closes every handle at once.

    Args:
        config: Frozen folio configuration.
        scheduler: Receives one ``schedule(reason)`` call per change.

    """

    def __init__(self, config: FolioConfig, scheduler: RebuildScheduler) -> None:
        self._config = config
        self._scheduler = scheduler
        self._paths = watched_paths(config)
        self._stop_event = asyncio.Event()
        self._handles: list[asyncio.Task[None]] = []

    @property
    def paths(self) -> tuple[Path, ...]:
        """Directories watched by this watcher."""
        return self._paths

    @property
    def is_running(self) -> bool:
        """Whether any watch handle is still active."""
        return any(not handle.done() for handle in self._handles)

    @property
    def scheduler(self) -> RebuildScheduler:
        return self._scheduler

    async def run(self) -> None:
        """Watch until :meth:`stop` is called."""
        self._stop_event.clear()
        self._handles = [
            asyncio.create_task(self._watch(path), name=f"folio-watch:{path.name}")
            for path in self._paths
        ]
        try:
            await asyncio.gather(*self._handles)
        finally:
            self._handles = []

    def stop(self) -> None:
        """Close all watch handles and disarm any pending rebuild."""
        self._stop_event.set()
        self._scheduler.cancel()

    def dispatch(self, event: ChangeEvent) -> None:
        """Schedule a rebuild for ``event``."""
        self._scheduler.schedule(event.reason(self._config))

    async def _watch(self, path: Path) -> None:
        async for raw_changes in awatch(
            path,
            stop_event=self._stop_event,
            debounce=_WATCH_DEBOUNCE_MS,
            step=_WATCH_STEP_MS,
            recursive=True,
        ):
            for change_type, path_str in sorted(raw_changes):
                event = to_change_event(change_type, path_str, self._config)
                if event is not None:
                    self.dispatch(event)
