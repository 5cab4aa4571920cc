"""Navigation builders.

Builds the top navigation menu and the sidebars from the content tree.
Navigation is a view layer over the tree: everything here goes through
``strip`` so the printable/index rules apply at every level.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TypedDict

from docsite.core.content import ContentNode, ContentTree
from docsite.core.projector import NavNode, NavNodeDict, strip
from docsite.core.routing import is_path_prefix
from docsite.core.types import ROOT_URL, URLPath

DOCUMENTATION_URL = URLPath("/concepts/")
DOCUMENTATION_PATTERN = re.compile(
    r"^/(api|concepts|configuration|guides|loaders|migrate|plugins)",
)
# Sections that get their own top-level link instead of a Documentation entry
EXCLUDED_SECTIONS = frozenset({"contribute"})


class NavLinkDict(TypedDict):
    """Dictionary representation of a top navigation link."""

    content: str
    url: str
    active: bool
    children: list[NavNodeDict]


@dataclass(frozen=True)
class NavLink:
    """Top navigation menu entry."""

    content: str
    url: URLPath
    children: tuple[NavNode, ...] = field(default_factory=tuple)
    active_pattern: re.Pattern[str] | None = None

    def is_active(self, url: str) -> bool:
        """Check whether the link should be highlighted for a location."""
        if self.active_pattern is not None:
            return self.active_pattern.search(url) is not None
        return is_path_prefix(self.url, url)

    def to_dict(self, pathname: str) -> NavLinkDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "content": self.content,
            "url": self.url,
            "active": self.is_active(pathname),
            "children": [child.to_dict() for child in self.children],
        }


def build_top_nav(sections: Sequence[ContentNode]) -> list[NavLink]:
    """Build the top navigation menu.

    The Documentation entry lists the stripped sections. Its active state is
    decided by a fixed set of path prefixes, not by the section list.

    Args:
        sections: Top-level sections in source order

    Returns:
        Ordered navigation links
    """
    documentation = NavLink(
        content="Documentation",
        url=DOCUMENTATION_URL,
        children=tuple(
            strip(section for section in sections if section.name not in EXCLUDED_SECTIONS),
        ),
        active_pattern=DOCUMENTATION_PATTERN,
    )
    return [
        documentation,
        NavLink(content="Contribute", url=URLPath("/contribute/")),
        NavLink(content="Vote", url=URLPath("/vote/")),
        NavLink(content="Blog", url=URLPath("/blog/")),
    ]


def build_sidebar(
    tree: ContentTree,
    current_section: ContentNode | None,
) -> list[NavNode]:
    """Build the desktop sidebar for the current location.

    Inside a section the sidebar lists that section's children. Outside of
    every section it lists the top-level pages, minus the landing page.

    Args:
        tree: Content tree
        current_section: Section matching the location, if any

    Returns:
        Stripped sidebar entries
    """
    if current_section is not None:
        return strip(current_section.children)
    return strip(
        node
        for node in tree.children
        if not node.is_directory and node.url != ROOT_URL
    )


def build_mobile_sidebar(tree: ContentTree) -> list[NavNode]:
    """Build the mobile sidebar, which always shows the whole tree."""
    return strip(tree.children)
