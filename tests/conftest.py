"""Shared test fixtures for folio."""

from __future__ import annotations

from pathlib import Path

import pytest

from folio.config import FolioConfig

LAYOUT = (
    "<!DOCTYPE html>\n"
    "<title>{{ meta.title }}</title>\n"
    '<main data-route="{{ route }}" data-source="{{ source }}">\n'
    "{{ content }}\n"
    "</main>\n"
)


@pytest.fixture
def tmp_site(tmp_path: Path) -> Path:
    """Create a minimal site structure for testing.

    Returns the path to the site root with content/ and templates/ dirs.
    No public/ directory is created; tests that need assets add it.
    """
    content = tmp_path / "content"
    content.mkdir()
    (content / "index.md").write_text("# Hi\n")

    blog = content / "blog"
    blog.mkdir()
    (blog / "post.md").write_text("---\ntitle: Post\n---\n\nHello\n")

    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "layout.html").write_text(LAYOUT)

    return tmp_path


@pytest.fixture
def site_with_assets(tmp_site: Path) -> Path:
    """Extend tmp_site with a public/ directory of static assets."""
    public = tmp_site / "public"
    (public / "css").mkdir(parents=True)
    (public / "css" / "site.css").write_text("body { margin: 0; }\n")
    (public / "favicon.ico").write_bytes(b"\x00\x00\x01\x00\xff\xfe")
    (public / "robots.txt").write_text("User-agent: *\n")
    return tmp_site


@pytest.fixture
def config(tmp_site: Path) -> FolioConfig:
    """A FolioConfig rooted at the temp site."""
    return FolioConfig(root=tmp_site)


def snapshot(directory: Path) -> dict[str, bytes]:
    """Map every file under ``directory`` (relative POSIX path) to its bytes."""
    return {
        p.relative_to(directory).as_posix(): p.read_bytes()
        for p in sorted(directory.rglob("*"))
        if p.is_file()
    }
