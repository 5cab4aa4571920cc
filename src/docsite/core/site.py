"""Site controller.

Composes the projections into the per-render view model. Nothing derived
from the tree is cached: every render recomputes sections, sidebar, menu and
adjacency from the immutable tree and the current location. The only session
state is the mobile sidebar flag and the theme preference.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from docsite.core.adjacency import Adjacent, adjacent_pages
from docsite.core.content import ContentNode, ContentTree
from docsite.core.loader import ContentLoader
from docsite.core.navigation import (
    NavLink,
    build_mobile_sidebar,
    build_sidebar,
    build_top_nav,
)
from docsite.core.projector import (
    NavNode,
    extract_pages,
    extract_sections,
    get_page_title,
)
from docsite.core.routing import (
    DEFAULT_FIXED_ROUTES,
    RouteKind,
    RouteMatch,
    RouteTable,
    match_section,
)
from docsite.core.theme import ThemeChoice, ThemePreference

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Location:
    """Current route."""

    pathname: str


@dataclass
class SiteView:
    """Composed view model for a single render."""

    title: str
    pathname: str
    route: RouteMatch
    navigation: list[NavLink]
    mobile_sidebar: list[NavNode]
    mobile_sidebar_open: bool
    theme: ThemeChoice
    sidebar: list[NavNode] = field(default_factory=list)
    content: str | None = None
    adjacent: Adjacent[NavNode] = field(default_factory=Adjacent)

    @property
    def page(self) -> ContentNode | None:
        return self.route.page

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "title": self.title,
            "pathname": self.pathname,
            "route": self.route.kind.value,
            "redirect": self.route.redirect_to,
            "view": self.route.view,
            "navigation": [link.to_dict(self.pathname) for link in self.navigation],
            "mobile_sidebar": [node.to_dict() for node in self.mobile_sidebar],
            "mobile_sidebar_open": self.mobile_sidebar_open,
            "theme": self.theme.value,
        }
        if self.page is not None:
            result["page"] = {
                "title": self.page.display_title,
                "url": self.page.url,
                "group": self.page.group,
                "anchors": list(self.page.anchors),
            }
            result["content"] = self.content
            result["sidebar"] = [node.to_dict() for node in self.sidebar]
            result["previous"] = _link(self.adjacent.previous)
            result["next"] = _link(self.adjacent.next)
        return result


def _link(node: NavNode | None) -> dict[str, str] | None:
    if node is None:
        return None
    return {"title": node.title, "url": node.url}


class SiteController:
    """Per-render orchestration of the content tree projections."""

    def __init__(
        self,
        tree: ContentTree,
        loader: ContentLoader,
        theme: ThemePreference,
        *,
        site_title: str = "webpack",
        fixed_routes: Sequence[str] = DEFAULT_FIXED_ROUTES,
    ) -> None:
        """Initialize controller.

        Args:
            tree: Immutable content tree
            loader: Resolver for page payloads
            theme: Theme preference owned by this session
            site_title: Site name used in document titles
            fixed_routes: Top-level views that take precedence over pages
        """
        self._tree = tree
        self._loader = loader
        self._theme = theme
        self._site_title = site_title
        self._fixed_routes = tuple(fixed_routes)
        self._mobile_sidebar_open = False

    @property
    def tree(self) -> ContentTree:
        return self._tree

    @property
    def theme(self) -> ThemeChoice:
        return self._theme.theme

    @property
    def mobile_sidebar_open(self) -> bool:
        return self._mobile_sidebar_open

    def route_table(self) -> RouteTable:
        return RouteTable(extract_pages(self._tree), self._fixed_routes)

    def navigation(self) -> tuple[list[NavLink], list[NavNode]]:
        """Build the top navigation links and the mobile sidebar."""
        links = build_top_nav(extract_sections(self._tree))
        return links, build_mobile_sidebar(self._tree)

    def render(self, location: Location) -> SiteView:
        """Build the view model for a location.

        Args:
            location: Current location

        Returns:
            Composed view model

        Raises:
            FileNotFoundError: If the matched page has no payload
            MalformedContentNodeError: If the tree can't be projected
        """
        pathname = location.pathname
        sections = extract_sections(self._tree)
        section = match_section(sections, pathname)
        sidebar = build_sidebar(self._tree, section)
        route = self.route_table().resolve(pathname)
        links, mobile_sidebar = self.navigation()

        view = SiteView(
            title=get_page_title(self._tree, pathname, self._site_title),
            pathname=pathname,
            route=route,
            navigation=links,
            mobile_sidebar=mobile_sidebar,
            mobile_sidebar_open=self._mobile_sidebar_open,
            theme=self._theme.theme,
        )

        if route.kind is RouteKind.PAGE and route.page is not None:
            page = route.page
            view.sidebar = sidebar
            view.adjacent = adjacent_pages(sidebar, page, "url")
            if page.path is not None:
                view.content = self._loader.load(page.path)
        elif route.kind is RouteKind.NOT_FOUND:
            logger.debug(f"No route for {pathname}")

        return view

    def toggle_sidebar(self, open: bool | None = None) -> bool:
        """Open, close or flip the mobile sidebar.

        Args:
            open: Desired state; flips the current state when None

        Returns:
            New state
        """
        self._mobile_sidebar_open = not self._mobile_sidebar_open if open is None else open
        return self._mobile_sidebar_open

    def switch_theme(self, theme: ThemeChoice) -> None:
        self._theme.switch(theme)
