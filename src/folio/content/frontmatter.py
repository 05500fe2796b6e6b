"""Front matter — split a YAML metadata header from a markdown body.

The header is delimited by ``---`` on its own line at the start of the file
and closed by ``---`` (or ``...``)::

    ---
    title: Post
    description: A short post
    ---

    Hello

An opening fence that is never closed makes the rest of the file the
header, leaving an empty body.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from folio._errors import ContentError

_OPEN = "---"
_CLOSE = ("---", "...")
_BOM = "\ufeff"


def split_front_matter(
    text: str, source: Path | None = None,
) -> tuple[Mapping[str, Any], str]:
    """Split ``text`` into its front matter mapping and markdown body.

    Returns ``({}, text)`` when the document has no header.

    Raises:
        ContentError: If the header is not valid YAML or is not a mapping.

    """
    if text.startswith(_BOM):
        text = text[len(_BOM):]

    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n").rstrip() != _OPEN:
        return {}, text

    for index in range(1, len(lines)):
        if lines[index].rstrip("\r\n").rstrip() in _CLOSE:
            header = "".join(lines[1:index])
            body = "".join(lines[index + 1:])
            return _parse_header(header, source), body.lstrip("\r\n")

    # No closing fence: the rest of the file is header.
    return _parse_header("".join(lines[1:]), source), ""


def _parse_header(header: str, source: Path | None) -> Mapping[str, Any]:
    where = f" in {source}" if source is not None else ""
    try:
        data = yaml.safe_load(header)
    except yaml.YAMLError as exc:
        msg = f"Malformed front matter{where}: {exc}"
        raise ContentError(msg) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Front matter{where} must be a mapping, got {type(data).__name__}"
        raise ContentError(msg)
    return data
