"""Content layer — routes, front matter, page collection, and file watching."""

from folio.content.collector import Page, collect_pages, walk_files
from folio.content.frontmatter import split_front_matter
from folio.content.router import route_for_path, route_to_output_file
from folio.content.watcher import ChangeEvent, SiteWatcher, categorize_change

__all__ = [
    "ChangeEvent",
    "Page",
    "SiteWatcher",
    "categorize_change",
    "collect_pages",
    "route_for_path",
    "route_to_output_file",
    "split_front_matter",
    "walk_files",
]
