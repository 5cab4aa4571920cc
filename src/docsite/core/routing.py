"""Location routing.

Maps a location pathname to the active section and to one of the site's
route outcomes: a trailing-slash redirect, the landing page, a fixed
top-level view, a content page, or not found.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from docsite.core.content import ContentNode
from docsite.core.types import ROOT_URL, URLPath

# Fixed views registered ahead of the content pages
DEFAULT_FIXED_ROUTES: tuple[str, ...] = (
    "/vote",
    "/organization",
    "/starter-kits",
    "/app-shell",
)


class RouteKind(Enum):
    """Outcome of resolving a location."""

    REDIRECT = "redirect"
    LANDING = "landing"
    STATIC = "static"
    PAGE = "page"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class RouteMatch:
    """Result of RouteTable.resolve()."""

    kind: RouteKind
    pathname: str
    redirect_to: URLPath | None = None
    page: ContentNode | None = None
    view: str | None = None


def is_path_prefix(prefix: str, pathname: str) -> bool:
    """Check whether prefix covers pathname on a path segment boundary.

    ``/concepts/`` covers ``/concepts/modules/`` and ``/concepts`` covers
    ``/concepts/modules/``, but ``/concept`` does not cover ``/concepts/``.
    """
    if not pathname.startswith(prefix):
        return False
    if prefix.endswith("/") or len(pathname) == len(prefix):
        return True
    return pathname[len(prefix)] == "/"


def match_section(
    sections: Sequence[ContentNode],
    pathname: str,
) -> ContentNode | None:
    """Find the section the location belongs to.

    Sections are not expected to overlap; if they do, the first one in source
    order wins.

    Args:
        sections: Top-level sections in source order
        pathname: Current location pathname

    Returns:
        Matching section, or None when the location is outside all sections
    """
    for section in sections:
        if is_path_prefix(section.url, pathname):
            return section
    return None


def needs_trailing_slash_redirect(pathname: str) -> bool:
    """Check whether a non-root pathname is missing its trailing slash."""
    return pathname != ROOT_URL and not pathname.endswith("/")


class RouteTable:
    """Route table built from the content pages.

    Fixed routes take precedence over content pages. Pages are matched on
    their exact url.
    """

    __slots__ = ("_fixed_routes", "_page_index", "_pages")

    def __init__(
        self,
        pages: Sequence[ContentNode],
        fixed_routes: Sequence[str] = DEFAULT_FIXED_ROUTES,
    ) -> None:
        """Initialize route table.

        Args:
            pages: Routable pages in source order
            fixed_routes: Top-level view paths checked before pages
        """
        self._pages = list(pages)
        self._fixed_routes = tuple(fixed_routes)
        self._page_index: dict[str, ContentNode] = {}
        for page in self._pages:
            self._page_index.setdefault(page.url, page)

    def resolve(self, pathname: str) -> RouteMatch:
        """Resolve a location pathname to a route outcome."""
        if needs_trailing_slash_redirect(pathname):
            return RouteMatch(
                kind=RouteKind.REDIRECT,
                pathname=pathname,
                redirect_to=URLPath(f"{pathname}/"),
            )

        if pathname == ROOT_URL:
            return RouteMatch(kind=RouteKind.LANDING, pathname=pathname, view="landing")

        for route in self._fixed_routes:
            if is_path_prefix(route, pathname):
                return RouteMatch(
                    kind=RouteKind.STATIC,
                    pathname=pathname,
                    view=route.strip("/"),
                )

        page = self._page_index.get(pathname)
        if page is not None:
            return RouteMatch(kind=RouteKind.PAGE, pathname=pathname, page=page)

        return RouteMatch(kind=RouteKind.NOT_FOUND, pathname=pathname)

    def routes(self) -> list[tuple[str, str]]:
        """List (path, target) pairs in matching order."""
        table = [(route, f"view:{route.strip('/')}") for route in self._fixed_routes]
        table.extend((page.url, page.path or page.name) for page in self._pages)
        table.append(("*", "not-found"))
        return table
