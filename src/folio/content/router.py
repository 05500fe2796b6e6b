"""Content router — maps content files to routes and routes to output files.

Both directions are pure path transformations:

    content/index.md        -> /           -> build/index.html
    content/blog/index.md   -> /blog       -> build/blog/index.html
    content/blog/today.md   -> /blog/today -> build/blog/today/index.html

Every route resolves to an ``index.html`` leaf so URLs never carry a file
extension.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePath

from folio._types import RoutePath

_INDEX_SEGMENT = "index"
_INDEX_FILE = "index.html"


def route_for_path(path: str | os.PathLike[str], content_root: str | os.PathLike[str]) -> RoutePath:
    """Derive the route for a content file.

    The route depends only on the file's location relative to
    ``content_root``: the extension is dropped, ``index`` segments collapse
    into their parent, and the result always starts with ``/``.

    """
    rel = PurePath(os.path.relpath(path, content_root))
    stem = rel.with_suffix("") if rel.suffix else rel
    segments = ["" if part == _INDEX_SEGMENT else part for part in stem.parts]
    route = "/" + "/".join(s for s in segments if s and s != os.curdir)
    return route


def route_to_output_file(route: RoutePath, output_dir: Path = Path("build")) -> Path:
    """Convert a route to the file its HTML is written to.

    Clean URL convention:
        ``/``             -> ``output/index.html``
        ``/about``        -> ``output/about/index.html``
        ``/blog/today/``  -> ``output/blog/today/index.html``

    """
    clean = route.strip("/")
    if not clean:
        return output_dir / _INDEX_FILE
    return output_dir.joinpath(*clean.split("/"), _INDEX_FILE)
