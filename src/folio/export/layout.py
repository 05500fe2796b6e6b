"""Layout — the single template every page is rendered through.

The layout is loaded and compiled once per build from
``<templates>/layout.html`` and receives four names:

    meta     page metadata (mapping, empty if the page has no header)
    content  the page's HTML body, emitted unescaped by ``{{ content }}``
    route    the page's route, e.g. ``/blog/today``
    source   source file path relative to the site root

"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import jinja2
from markupsafe import Markup

from folio._errors import LayoutError

if TYPE_CHECKING:
    from folio.config import FolioConfig
    from folio.content.collector import Page


class Layout:
    """A compiled layout template bound to a site root.

    Args:
        template: The compiled Jinja2 template.
        root: Site root, used to relativize ``source`` paths.

    """

    __slots__ = ("_root", "_template")

    def __init__(self, template: jinja2.Template, root: Path) -> None:
        self._template = template
        self._root = root

    @property
    def name(self) -> str:
        """Template name as known to the loader."""
        return self._template.name or "<layout>"

    def context(self, page: Page) -> dict[str, Any]:
        """Build the template context for ``page``."""
        return {
            "meta": page.meta,
            "content": Markup(page.html_body),
            "route": page.route,
            "source": _relative_source(page.source_path, self._root),
        }

    def render(self, page: Page) -> str:
        """Render ``page`` through the layout.

        Raises:
            LayoutError: If the template fails at render time.

        """
        try:
            return self._template.render(self.context(page))
        except jinja2.TemplateError as exc:
            msg = f"Failed to render {page.route!r} (layout={self.name!r}): {exc}"
            raise LayoutError(msg) from exc


def create_environment(templates_path: Path) -> jinja2.Environment:
    """Create the Jinja2 environment used to load the layout."""
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(templates_path),
        autoescape=jinja2.select_autoescape(
            enabled_extensions=("html", "htm", "xml"),
            default_for_string=True,
        ),
        keep_trailing_newline=True,
    )


def load_layout(config: FolioConfig) -> Layout:
    """Load and compile the layout template.

    Raises:
        LayoutError: If the layout is missing or has a syntax error.

    """
    env = create_environment(config.templates_path)
    try:
        template = env.get_template(config.layout)
    except jinja2.TemplateNotFound as exc:
        msg = f"Layout template not found: {config.layout_path}"
        raise LayoutError(msg) from exc
    except jinja2.TemplateSyntaxError as exc:
        msg = f"Malformed layout template {config.layout_path}:{exc.lineno}: {exc.message}"
        raise LayoutError(msg) from exc
    return Layout(template, config.root)


def _relative_source(source_path: Path, root: Path) -> str:
    try:
        return source_path.relative_to(root).as_posix()
    except ValueError:
        return source_path.as_posix()
