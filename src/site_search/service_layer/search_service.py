"""Search service orchestration layer.

Loads the corpus artifact once, builds the in-memory index and answers
queries with rendered hits. Callers (the CLI, the page widget) never touch
the index or the presenter directly.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
import logging
from pathlib import Path

from site_search.config import Settings
from site_search.domain.errors import ArtifactError, ArtifactUnavailableError
from site_search.domain.model import IndexEntry
from site_search.domain.search import QueryState
from site_search.search.index import CONTENT_FIELD, TITLE_FIELD, InvertedIndex
from site_search.search.query import DEFAULT_MAX_RESULTS, QueryEngine
from site_search.search.snippet import DEFAULT_SNIPPET_LENGTH, present_hits, render_results_html
from site_search.service_layer.artifact_loader import ArtifactLoader, is_remote


logger = logging.getLogger(__name__)

INIT_FAILED_HTML = '<div class="search-error">Search init failed</div>'


class ServiceStatus(str, Enum):
    PENDING = "pending"
    READY = "ready"
    UNAVAILABLE = "unavailable"


class SearchService:
    """High-level search API over one corpus artifact.

    The artifact is loaded at most once. A failed load leaves the service
    unavailable for good; queries before a successful load are inactive.
    """

    def __init__(
        self,
        loader: ArtifactLoader,
        source: str | Path,
        *,
        title_boost: float = 10.0,
        content_boost: float = 1.0,
        fuzzy_distance: int = 1,
        max_results: int = DEFAULT_MAX_RESULTS,
        snippet_length: int = DEFAULT_SNIPPET_LENGTH,
    ) -> None:
        self.loader = loader
        self.source = source
        self.field_boosts = {TITLE_FIELD: title_boost, CONTENT_FIELD: content_boost}
        self.fuzzy_distance = fuzzy_distance
        self.max_results = max_results
        self.snippet_length = snippet_length

        self.status = ServiceStatus.PENDING
        self.error: str | None = None
        self._index: InvertedIndex | None = None
        self._engine: QueryEngine | None = None
        self._last_state: QueryState | None = None

    @classmethod
    def from_settings(cls, settings: Settings, *, loader: ArtifactLoader | None = None) -> SearchService:
        """Create a service wired from ``Settings``."""
        if loader is None:
            site_root = None if is_remote(settings.artifact_url) else settings.site_dir
            loader = ArtifactLoader(site_root=site_root, timeout=settings.http_timeout)
        return cls(
            loader,
            settings.artifact_url,
            title_boost=settings.title_boost,
            content_boost=settings.content_boost,
            fuzzy_distance=settings.fuzzy_distance,
            max_results=settings.max_results,
            snippet_length=settings.snippet_length,
        )

    @property
    def is_ready(self) -> bool:
        return self.status is ServiceStatus.READY

    @property
    def index(self) -> InvertedIndex | None:
        return self._index

    def load(self) -> bool:
        """Load the artifact and build the index; return True when ready.

        Only the first call does any work.
        """
        if self.status is not ServiceStatus.PENDING:
            return self.is_ready

        try:
            corpus = self.loader.load(self.source)
        except (ArtifactUnavailableError, ArtifactError) as exc:
            self.status = ServiceStatus.UNAVAILABLE
            self.error = str(exc)
            logger.error("Search init failed: %s", exc)
            return False

        self.load_entries(corpus)
        return True

    def load_entries(self, entries: Iterable[IndexEntry]) -> None:
        """Build the index from already parsed entries and mark the service ready."""
        self._index = InvertedIndex.build(entries, field_boosts=self.field_boosts)
        self._engine = QueryEngine(
            self._index,
            fuzzy_distance=self.fuzzy_distance,
            max_results=self.max_results,
        )
        self._last_state = None
        self.status = ServiceStatus.READY

    def query(self, raw_query: str) -> QueryState:
        """Run ``raw_query`` and return its rendered state.

        Repeating the previous query returns the memoized state.
        """
        if self._engine is None or self._index is None:
            return QueryState.inactive(raw_query)

        if self._last_state is not None and self._last_state.query == raw_query:
            return self._last_state

        result = self._engine.search(raw_query)
        if not result.active:
            state = QueryState.inactive(raw_query)
        else:
            terms = list(result.terms)
            state = QueryState(
                query=raw_query,
                terms=terms,
                hits=present_hits(
                    result.hits, self._index.references, terms, snippet_length=self.snippet_length
                ),
                active=True,
            )
        self._last_state = state
        return state

    def render(self, state: QueryState) -> str:
        """Return the results markup for ``state``; inactive states render empty."""
        if not state.active:
            return ""
        return render_results_html(state.hits)
