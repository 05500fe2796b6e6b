"""Tests for folio.export.layout — layout loading and rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from folio._errors import LayoutError
from folio.config import FolioConfig
from folio.content.collector import Page
from folio.export.layout import load_layout


def _page(root: Path, **kwargs: object) -> Page:
    defaults: dict[str, object] = {
        "route": "/blog/post",
        "html_body": "<p>Hello</p>",
        "front_matter": {"title": "Post"},
        "source_path": root / "content" / "blog" / "post.md",
    }
    defaults.update(kwargs)
    return Page(**defaults)  # type: ignore[arg-type]


class TestLoadLayout:
    """load_layout — compile once, fail loudly."""

    def test_loads_layout(self, config: FolioConfig) -> None:
        layout = load_layout(config)
        assert layout.name == "layout.html"

    def test_missing_layout_raises(self, config: FolioConfig) -> None:
        (config.templates_path / "layout.html").unlink()
        with pytest.raises(LayoutError, match="not found"):
            load_layout(config)

    def test_missing_templates_dir_raises(self, tmp_path: Path) -> None:
        with pytest.raises(LayoutError, match="not found"):
            load_layout(FolioConfig(root=tmp_path))

    def test_malformed_layout_raises(self, config: FolioConfig) -> None:
        (config.templates_path / "layout.html").write_text("{% if %}broken")
        with pytest.raises(LayoutError, match="Malformed layout"):
            load_layout(config)

    def test_custom_layout_name(self, config: FolioConfig) -> None:
        (config.templates_path / "base.html").write_text("{{ route }}")
        custom = FolioConfig(root=config.root, layout="base.html")
        assert load_layout(custom).name == "base.html"


class TestLayoutRender:
    """Layout.render — context substitution."""

    def test_context_keys(self, config: FolioConfig) -> None:
        layout = load_layout(config)
        ctx = layout.context(_page(config.root))
        assert set(ctx) == {"meta", "content", "route", "source"}
        assert ctx["source"] == "content/blog/post.md"
        assert ctx["route"] == "/blog/post"

    def test_content_not_escaped(self, config: FolioConfig) -> None:
        html = load_layout(config).render(_page(config.root))
        assert "<p>Hello</p>" in html

    def test_meta_title_available(self, config: FolioConfig) -> None:
        html = load_layout(config).render(_page(config.root))
        assert "<title>Post</title>" in html

    def test_route_and_source_rendered(self, config: FolioConfig) -> None:
        html = load_layout(config).render(_page(config.root))
        assert 'data-route="/blog/post"' in html
        assert 'data-source="content/blog/post.md"' in html

    def test_missing_meta_renders_empty(self, config: FolioConfig) -> None:
        html = load_layout(config).render(_page(config.root, front_matter={}))
        assert "<title></title>" in html

    def test_meta_values_escaped(self, config: FolioConfig) -> None:
        page = _page(config.root, front_matter={"title": "<b>Bold</b>"})
        html = load_layout(config).render(page)
        assert "&lt;b&gt;Bold&lt;/b&gt;" in html

    def test_nested_meta(self, config: FolioConfig) -> None:
        page = _page(config.root, front_matter={"meta": {"title": "Nested"}})
        html = load_layout(config).render(page)
        assert "<title>Nested</title>" in html

    def test_source_outside_root_kept_absolute(self, config: FolioConfig, tmp_path: Path) -> None:
        elsewhere = tmp_path.parent / "elsewhere.md"
        ctx = load_layout(config).context(_page(config.root, source_path=elsewhere))
        assert ctx["source"] == elsewhere.as_posix()

    def test_runtime_error_raises_layout_error(self, config: FolioConfig) -> None:
        (config.templates_path / "layout.html").write_text("{{ meta.title.upper() }}")
        layout = load_layout(config)
        with pytest.raises(LayoutError, match="/blog/post"):
            layout.render(_page(config.root, front_matter={}))

    def test_layout_can_include_partials(self, config: FolioConfig) -> None:
        (config.templates_path / "nav.html").write_text("<nav>{{ route }}</nav>")
        (config.templates_path / "layout.html").write_text('{% include "nav.html" %}{{ content }}')
        html = load_layout(config).render(_page(config.root))
        assert html == "<nav>/blog/post</nav><p>Hello</p>"
