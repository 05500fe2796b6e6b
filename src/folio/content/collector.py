"""Page collector — walk the content tree and turn markdown files into pages.

Files are read one at a time in sorted, depth-first order, so a build over
an unchanged tree always sees pages in the same order.
"""

from __future__ import annotations

import time
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import markdown

from folio._errors import ContentError
from folio.content.frontmatter import split_front_matter
from folio.content.router import route_for_path

if TYPE_CHECKING:
    from folio._types import RoutePath
    from folio.observability.collector import EventCollector


_MARKDOWN_EXTENSIONS = ("tables", "fenced_code", "footnotes")


@dataclass(frozen=True, slots=True)
class Page:
    """A rendered content file, ready to be placed into the layout.

    Attributes:
        route: URL path of the page (always starts with ``/``).
        html_body: Markdown body converted to HTML.
        front_matter: Parsed metadata header (empty if the file has none).
        source_path: Absolute path to the originating markdown file.

    """

    route: RoutePath
    html_body: str
    front_matter: Mapping[str, Any] = field(default_factory=dict)
    source_path: Path = field(default_factory=Path)

    @property
    def meta(self) -> Mapping[str, Any]:
        """Metadata exposed to templates.

        A header that nests its fields under ``meta:`` exposes that mapping,
        otherwise the whole header is used.
        """
        nested = self.front_matter.get("meta")
        if isinstance(nested, Mapping):
            return nested
        return self.front_matter


def walk_files(root: Path) -> Iterator[Path]:
    """Yield every file below ``root``, depth-first, in sorted name order.

    Uses an explicit stack of directory iterators rather than recursion.
    Symlinked directories are not descended into.
    """
    stack: list[Iterator[Path]] = [iter(sorted(root.iterdir(), key=lambda p: p.name))]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
        elif entry.is_dir() and not entry.is_symlink():
            stack.append(iter(sorted(entry.iterdir(), key=lambda p: p.name)))
        elif entry.is_file():
            yield entry


def collect_pages(
    content_root: Path,
    *,
    suffix: str = ".md",
    collector: EventCollector | None = None,
) -> list[Page]:
    """Read every markdown file under ``content_root`` into a :class:`Page`.

    Files that do not end in ``suffix`` are skipped.

    Raises:
        ContentError: If ``content_root`` is missing or a header is malformed.

    """
    if not content_root.is_dir():
        msg = f"Content directory not found: {content_root}"
        raise ContentError(msg)

    md = markdown.Markdown(extensions=list(_MARKDOWN_EXTENSIONS))
    pages: list[Page] = []

    for path in walk_files(content_root):
        if not path.name.endswith(suffix):
            continue

        t0 = time.perf_counter()
        raw = path.read_text(encoding="utf-8")
        front_matter, body = split_front_matter(raw, source=path)
        html_body = md.reset().convert(body)
        elapsed = (time.perf_counter() - t0) * 1000

        pages.append(Page(
            route=route_for_path(path, content_root),
            html_body=html_body,
            front_matter=front_matter,
            source_path=path,
        ))

        if collector is not None:
            collector.record_parse(str(path), parse_ms=elapsed)

    return pages
