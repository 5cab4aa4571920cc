"""Content tree model.

The content tree is produced at build time (``_content.json``) and is
read-only for the lifetime of the site. Nodes are validated once at
ingestion so the projections never have to guess at their shape.
"""

import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from docsite.core.errors import MalformedContentNodeError
from docsite.core.types import URLPath

logger = logging.getLogger(__name__)

DIRECTORY_TYPE = "directory"

# Generated trees are a handful of levels deep; anything beyond this is a cycle
# or corrupted input.
MAX_TREE_DEPTH = 64


class NodeKind(Enum):
    """Tagged variant of a content node."""

    DIRECTORY = "directory"
    PAGE = "page"


@dataclass(frozen=True)
class ContentNode:
    """Page, section or directory in the content tree."""

    name: str
    url: URLPath
    type: str = "file"
    title: str | None = None
    group: str | None = None
    sort: int | float | str | None = None
    anchors: tuple[Any, ...] = ()
    children: tuple["ContentNode", ...] = ()
    path: str | None = None

    @property
    def kind(self) -> NodeKind:
        if self.type == DIRECTORY_TYPE:
            return NodeKind.DIRECTORY
        return NodeKind.PAGE

    @property
    def is_directory(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def display_title(self) -> str:
        """Title shown in navigation, falling back to the file name."""
        return self.title or self.name

    def walk(self) -> Iterator["ContentNode"]:
        """Yield this node and all descendants depth-first in source order."""
        yield self
        for child in self.children:
            yield from child.walk()

    @classmethod
    def from_dict(
        cls,
        data: object,
        *,
        location: str = "$",
        depth: int = 0,
    ) -> "ContentNode":
        """Build a node (and its subtree) from decoded JSON.

        Args:
            data: Raw node mapping
            location: Position of the node in the tree, used in error messages
            depth: Current nesting depth

        Returns:
            Validated ContentNode

        Raises:
            MalformedContentNodeError: If required fields are missing or the
                tree is nested deeper than MAX_TREE_DEPTH
        """
        if depth > MAX_TREE_DEPTH:
            raise MalformedContentNodeError(
                f"Content tree nested deeper than {MAX_TREE_DEPTH} levels",
                location,
            )
        if not isinstance(data, Mapping):
            raise MalformedContentNodeError("Content node must be an object", location)

        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise MalformedContentNodeError("Content node requires a name", location)

        url = data.get("url")
        if not isinstance(url, str) or not url:
            raise MalformedContentNodeError(
                f"Content node {name!r} requires a url",
                location,
            )

        node_type = data.get("type", "file")
        if not isinstance(node_type, str):
            raise MalformedContentNodeError(
                f"Content node {name!r} has a non-string type",
                location,
            )

        title = data.get("title")
        if title is not None and not isinstance(title, str):
            title = str(title)

        children_raw = data.get("children") or []
        if not isinstance(children_raw, list):
            raise MalformedContentNodeError(
                f"Content node {name!r} children must be a list",
                location,
            )

        children = tuple(
            cls.from_dict(child, location=f"{location}.children[{i}]", depth=depth + 1)
            for i, child in enumerate(children_raw)
        )

        path = data.get("path")
        anchors = data.get("anchors") or []

        return cls(
            name=name,
            url=URLPath(url),
            type=node_type,
            title=title,
            group=data.get("group"),
            sort=data.get("sort"),
            anchors=tuple(anchors) if isinstance(anchors, list) else (),
            children=children,
            path=path if isinstance(path, str) else None,
        )


@dataclass(frozen=True)
class ContentTree:
    """Immutable content tree with url lookups.

    The root node is normally the ``/`` landing directory; its children are the
    top-level pages and sections of the site.
    """

    root: ContentNode
    _url_index: dict[str, ContentNode] = field(
        init=False,
        repr=False,
        compare=False,
        default_factory=dict,
    )
    _page_index: dict[str, ContentNode] = field(
        init=False,
        repr=False,
        compare=False,
        default_factory=dict,
    )

    def __post_init__(self) -> None:
        for node in self.root.walk():
            if not node.is_directory:
                if node.url in self._page_index:
                    raise MalformedContentNodeError(
                        f"Duplicate page url {node.url!r}",
                        node.name,
                    )
                self._page_index[node.url] = node
            self._url_index.setdefault(node.url, node)

    @property
    def children(self) -> tuple[ContentNode, ...]:
        return self.root.children

    @property
    def title(self) -> str | None:
        return self.root.title

    def find(self, url: str) -> ContentNode | None:
        """Get the first node (in source order) with exactly this url."""
        return self._url_index.get(url)

    def find_page(self, url: str) -> ContentNode | None:
        """Get the page (non-directory node) with exactly this url."""
        return self._page_index.get(url)

    def __len__(self) -> int:
        return len(self._url_index)

    @classmethod
    def from_dict(cls, data: object) -> "ContentTree":
        return cls(root=ContentNode.from_dict(data))

    @classmethod
    def load(cls, path: Path) -> "ContentTree":
        """Load a content tree from a JSON file.

        Args:
            path: Path to the generated content tree (e.g. ``_content.json``)

        Returns:
            ContentTree instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file isn't valid JSON
            MalformedContentNodeError: If a node is malformed
        """
        if not path.exists():
            raise FileNotFoundError(f"Content tree not found: {path}")

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Content tree is not valid JSON: {e}") from e

        tree = cls.from_dict(data)
        logger.info(f"Loaded content tree from {path} ({len(tree)} nodes)")
        return tree
