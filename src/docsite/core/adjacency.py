"""Previous/next page lookup for linear navigation."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Adjacent(Generic[T]):
    """Neighbours of a page within an ordered list."""

    previous: T | None = None
    next: T | None = None


def adjacent_pages(ordered: Sequence[T], current: object, key: str = "url") -> Adjacent[T]:
    """Find the pages before and after the current one.

    Pass the sidebar-scoped list, not the flat list of all pages, so that
    "next" stays within the section being read. The list does not wrap.

    Args:
        ordered: Pages in navigation order
        current: Page to look up
        key: Attribute compared to locate the current page

    Returns:
        Adjacent pages; both are None when current isn't in the list
    """
    target = getattr(current, key)
    for i, item in enumerate(ordered):
        if getattr(item, key) == target:
            previous = ordered[i - 1] if i > 0 else None
            following = ordered[i + 1] if i + 1 < len(ordered) else None
            return Adjacent(previous=previous, next=following)
    return Adjacent()
