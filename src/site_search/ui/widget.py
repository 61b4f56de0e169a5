"""Search box adapter for a host page.

The widget is written against two small protocols so it can be driven by a
real page bridge or by the in-memory fakes below: a host page that hands out
elements by id, and a key/value session store used to carry the query over a
navigation started from the results list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Protocol

from site_search.service_layer.search_service import INIT_FAILED_HTML, SearchService


logger = logging.getLogger(__name__)

INPUT_ELEMENT_ID = "search-input"
RESULTS_ELEMENT_ID = "search-results"
CARRY_OVER_KEY = "searchQuery"
ACTIVE_CLASS = "active"


class Element(Protocol):
    value: str
    inner_html: str

    def add_class(self, name: str) -> None:  # pragma: no cover - Protocol only
        ...

    def remove_class(self, name: str) -> None:  # pragma: no cover - Protocol only
        ...

    def blur(self) -> None:  # pragma: no cover - Protocol only
        ...


class HostPage(Protocol):
    def get_element(self, element_id: str) -> Element | None:  # pragma: no cover - Protocol only
        ...


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> str | None:  # pragma: no cover - Protocol only
        ...

    def set_item(self, key: str, value: str) -> None:  # pragma: no cover - Protocol only
        ...

    def remove_item(self, key: str) -> None:  # pragma: no cover - Protocol only
        ...


@dataclass
class PageElement:
    """In-memory element with a value, inner HTML and a class list."""

    element_id: str
    value: str = ""
    inner_html: str = ""
    classes: set[str] = field(default_factory=set)
    focused: bool = False

    def add_class(self, name: str) -> None:
        self.classes.add(name)

    def remove_class(self, name: str) -> None:
        self.classes.discard(name)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def blur(self) -> None:
        self.focused = False


@dataclass
class InMemoryPage:
    elements: dict[str, PageElement] = field(default_factory=dict)

    @classmethod
    def with_search_box(cls) -> InMemoryPage:
        return cls(
            {
                INPUT_ELEMENT_ID: PageElement(INPUT_ELEMENT_ID),
                RESULTS_ELEMENT_ID: PageElement(RESULTS_ELEMENT_ID),
            }
        )

    def get_element(self, element_id: str) -> PageElement | None:
        return self.elements.get(element_id)


@dataclass
class InMemoryStore:
    items: dict[str, str] = field(default_factory=dict)

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class SearchWidget:
    """Binds a search input and a results container to a ``SearchService``.

    ``initialize`` must be called once; every handler is a no-op until it
    has succeeded.
    """

    def __init__(self, host: HostPage, store: KeyValueStore, service: SearchService) -> None:
        self.host = host
        self.store = store
        self.service = service
        self.input: Element | None = None
        self.results: Element | None = None
        self.bound = False

    def initialize(self) -> bool:
        """Locate the elements, load the index and restore a carried-over query.

        Returns False when either element is missing or the index could not
        be loaded; in the latter case the results container shows an error.
        """
        self.input = self.host.get_element(INPUT_ELEMENT_ID)
        self.results = self.host.get_element(RESULTS_ELEMENT_ID)
        if self.input is None or self.results is None:
            logger.debug("Search elements not present on page; widget disabled")
            return False

        if not self.service.load():
            self.results.inner_html = INIT_FAILED_HTML
            return False

        self.bound = True
        carried = self.store.get_item(CARRY_OVER_KEY)
        if carried is not None:
            self.input.value = carried
        self.store.remove_item(CARRY_OVER_KEY)
        return True

    def run_query(self, value: str) -> None:
        """Render results for ``value`` or clear them when it has no terms."""
        if not self.bound or self.results is None:
            return
        state = self.service.query(value)
        if not state.active:
            self.results.inner_html = ""
            self.results.remove_class(ACTIVE_CLASS)
            return
        self.results.inner_html = self.service.render(state)
        self.results.add_class(ACTIVE_CLASS)

    def on_input(self, value: str) -> None:
        if self.input is not None:
            self.input.value = value
        self.run_query(value)

    def on_focus(self) -> None:
        if self.bound and self.input is not None and self.input.value.strip():
            self.run_query(self.input.value)

    def on_blur(self) -> None:
        if self.bound and self.results is not None:
            self.results.remove_class(ACTIVE_CLASS)

    def on_keydown(self, key: str) -> None:
        if not self.bound or key != "Escape" or self.results is None or self.input is None:
            return
        self.results.remove_class(ACTIVE_CLASS)
        self.results.inner_html = ""
        self.input.blur()

    def on_click(self, *, inside_results: bool, on_input: bool = False) -> None:
        """Handle a page click; clicks in the results save the query for the next page."""
        if not self.bound or self.results is None or self.input is None:
            return
        if not inside_results and not on_input:
            self.results.remove_class(ACTIVE_CLASS)
        if inside_results:
            self.store.set_item(CARRY_OVER_KEY, self.input.value.strip())
