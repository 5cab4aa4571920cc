"""Projections of the content tree.

Flattens and filters the content tree into the pieces the router and the
navigation need. Every function here is pure: the tree is never mutated and
the same input always yields the same output.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, TypedDict

from docsite.core.content import MAX_TREE_DEPTH, ContentNode, ContentTree
from docsite.core.errors import MalformedContentNodeError
from docsite.core.types import ROOT_URL, URLPath

INDEX_NAME = "index.md"
PRINTABLE_TITLE = "printable.md"
PRINTABLE_MARKER = "Printable"


class NavNodeDict(TypedDict):
    """Dictionary representation of a navigation node."""

    title: str
    content: str
    url: str
    group: str | None
    sort: int | float | str | None
    anchors: list[Any]
    children: list["NavNodeDict"]


@dataclass(frozen=True)
class NavNode:
    """Display-ready projection of a content node."""

    name: str
    title: str
    content: str
    url: URLPath
    group: str | None = None
    sort: int | float | str | None = None
    anchors: tuple[Any, ...] = ()
    children: tuple["NavNode", ...] = field(default_factory=tuple)

    def to_dict(self) -> NavNodeDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "content": self.content,
            "url": self.url,
            "group": self.group,
            "sort": self.sort,
            "anchors": list(self.anchors),
            "children": [child.to_dict() for child in self.children],
        }


class _Strippable(Protocol):
    """Fields shared by ContentNode and NavNode."""

    @property
    def name(self) -> str: ...

    @property
    def title(self) -> str | None: ...

    @property
    def url(self) -> URLPath: ...

    @property
    def group(self) -> str | None: ...

    @property
    def sort(self) -> int | float | str | None: ...

    @property
    def anchors(self) -> tuple[Any, ...]: ...

    @property
    def children(self) -> Sequence["_Strippable"]: ...


def extract_pages(tree: ContentTree) -> list[ContentNode]:
    """Collect every routable page in source order.

    Args:
        tree: Content tree to traverse

    Returns:
        Non-directory nodes, depth-first
    """
    return [node for node in tree.root.walk() if not node.is_directory]


def extract_sections(tree: ContentTree) -> list[ContentNode]:
    """Collect the top-level documentation sections."""
    return [node for node in tree.children if node.is_directory]


def get_page_title(tree: ContentTree, pathname: str, site_title: str) -> str:
    """Build the document title for a location.

    Args:
        tree: Content tree to look the page up in
        pathname: Current location pathname
        site_title: Site name appended to page titles

    Returns:
        Title for the browser window/tab
    """
    if "/printable" in pathname:
        return f"Combined printable page | {site_title}"

    if pathname == ROOT_URL:
        root = tree.find(pathname)
        return root.title if root is not None and root.title else site_title

    page = tree.find_page(pathname)
    if page is None:
        return f"Page Not Found | {site_title}"
    return f"{page.title} | {site_title}" if page.title else site_title


def strip(nodes: Iterable[_Strippable]) -> list[NavNode]:
    """Canonicalize sibling nodes for navigation.

    Moves the ``index.md`` sibling to the front, projects each node to a
    NavNode (recursively), and removes printable pages. Accepts content nodes
    or already stripped nav nodes, so ``strip(strip(x)) == strip(x)``.

    Args:
        nodes: Sibling nodes in source order

    Returns:
        Visible navigation nodes

    Raises:
        MalformedContentNodeError: If a node lacks name or url, or the tree is
            nested deeper than MAX_TREE_DEPTH
    """
    return _strip(list(nodes), depth=0)


def _strip(nodes: list[_Strippable], depth: int) -> list[NavNode]:
    if depth > MAX_TREE_DEPTH:
        raise MalformedContentNodeError(
            f"Navigation tree nested deeper than {MAX_TREE_DEPTH} levels",
        )

    for node in nodes:
        _validate(node)

    index_pos = next(
        (i for i, node in enumerate(nodes) if node.name.lower() == INDEX_NAME),
        None,
    )
    if index_pos:
        nodes = [nodes[index_pos], *nodes[:index_pos], *nodes[index_pos + 1 :]]

    stripped = [_strip_node(node, depth) for node in nodes]
    return [node for node in stripped if _is_visible(node)]


def _strip_node(node: _Strippable, depth: int) -> NavNode:
    title = node.title or node.name
    return NavNode(
        name=node.name,
        title=title,
        content=title,
        url=node.url,
        group=node.group,
        sort=node.sort,
        anchors=tuple(node.anchors),
        children=tuple(_strip(list(node.children), depth + 1)),
    )


def _validate(node: _Strippable) -> None:
    name = getattr(node, "name", None)
    if not isinstance(name, str) or not name:
        raise MalformedContentNodeError("Navigation node requires a name")
    url = getattr(node, "url", None)
    if not isinstance(url, str) or not url:
        raise MalformedContentNodeError(f"Navigation node {name!r} requires a url")


def _is_visible(node: NavNode) -> bool:
    return node.title != PRINTABLE_TITLE and PRINTABLE_MARKER not in node.content
