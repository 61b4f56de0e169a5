"""Domain layer - pure data with no infrastructure dependencies.

This layer contains:
- Source documents and section records produced while indexing
- The corpus artifact record (IndexEntry)
- Query-side value objects (hits, rendered hits, query state)
- The exception hierarchy
"""

from site_search.domain.errors import (
    ArtifactError,
    ArtifactUnavailableError,
    DocumentLoadError,
    SiteSearchError,
)
from site_search.domain.model import Corpus, IndexEntry, SectionRecord, SourceDocument
from site_search.domain.search import QueryState, RenderedHit, SearchHit


__all__ = [
    "ArtifactError",
    "ArtifactUnavailableError",
    "Corpus",
    "DocumentLoadError",
    "IndexEntry",
    "QueryState",
    "RenderedHit",
    "SearchHit",
    "SectionRecord",
    "SiteSearchError",
    "SourceDocument",
]
