"""Page-side adapter for the search box."""

from .widget import InMemoryPage, InMemoryStore, PageElement, SearchWidget


__all__ = [
    "InMemoryPage",
    "InMemoryStore",
    "PageElement",
    "SearchWidget",
]
