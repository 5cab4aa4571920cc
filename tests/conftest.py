"""Shared test fixtures."""

import json
from pathlib import Path
from typing import Any

import pytest
from docsite.config import Config, ContentConfig, ServerConfig, ThemeConfig
from docsite.core.content import ContentTree


def _page(name: str, url: str, title: str | None, directory: str = "") -> dict[str, Any]:
    return {
        "name": name,
        "url": url,
        "type": "file",
        "title": title,
        "group": None,
        "sort": None,
        "anchors": [],
        "path": f"src/content/{directory}{name}",
    }


def _directory(name: str, url: str, title: str, children: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "name": name,
        "url": url,
        "type": "directory",
        "title": title,
        "children": children,
    }


def make_tree_data() -> dict[str, Any]:
    """Build a small content tree shaped like a generated ``_content.json``."""
    return _directory(
        "content",
        "/",
        "webpack",
        [
            _page("index.md", "/", "webpack"),
            _page("comparison.md", "/comparison/", "Comparison"),
            _page("printable.md", "/printable/", None),
            _directory(
                "concepts",
                "/concepts/",
                "Concepts",
                [
                    _page("modules.md", "/concepts/modules/", "Modules", "concepts/"),
                    _page("index.md", "/concepts/", "Concepts", "concepts/"),
                    _page(
                        "entry-points.md",
                        "/concepts/entry-points/",
                        "Entry Points",
                        "concepts/",
                    ),
                    _page("printable.md", "/concepts/printable/", None, "concepts/"),
                ],
            ),
            _directory(
                "guides",
                "/guides/",
                "Guides",
                [
                    _page(
                        "getting-started.md",
                        "/guides/getting-started/",
                        "Getting Started",
                        "guides/",
                    ),
                    _directory(
                        "advanced",
                        "/guides/advanced/",
                        "Advanced",
                        [
                            _page("tips.md", "/guides/advanced/tips/", "Tips", "guides/advanced/"),
                            _page("INDEX.md", "/guides/advanced/", "Advanced", "guides/advanced/"),
                            _page(
                                "old.md",
                                "/guides/advanced/old/",
                                "Printable Tips",
                                "guides/advanced/",
                            ),
                        ],
                    ),
                ],
            ),
            _directory(
                "contribute",
                "/contribute/",
                "Contribute",
                [
                    _page(
                        "writing-a-loader.md",
                        "/contribute/writing-a-loader/",
                        "Writing a Loader",
                        "contribute/",
                    ),
                ],
            ),
        ],
    )


@pytest.fixture
def tree_data() -> dict[str, Any]:
    return make_tree_data()


@pytest.fixture
def tree(tree_data: dict[str, Any]) -> ContentTree:
    return ContentTree.from_dict(tree_data)


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Create rendered payloads for the concepts and root pages."""
    content = tmp_path / "content"
    (content / "concepts").mkdir(parents=True)
    (content / "index.md").write_text("<h1>webpack</h1>")
    (content / "comparison.md").write_text("<h1>Comparison</h1>")
    (content / "concepts" / "index.md").write_text("<h1>Concepts</h1>")
    (content / "concepts" / "modules.md").write_text("<h1>Modules</h1>")
    (content / "concepts" / "entry-points.md").write_text("<h1>Entry Points</h1>")
    return content


@pytest.fixture
def tree_file(tmp_path: Path, tree_data: dict[str, Any]) -> Path:
    path = tmp_path / "_content.json"
    path.write_text(json.dumps(tree_data))
    return path


@pytest.fixture
def test_config(tmp_path: Path, tree_file: Path, content_dir: Path) -> Config:
    """Create a test configuration with tmp_path files."""
    return Config(
        server=ServerConfig(),
        content=ContentConfig(tree_file=tree_file, content_dir=content_dir),
        theme=ThemeConfig(storage_file=tmp_path / ".cache" / "preferences.json"),
    )
