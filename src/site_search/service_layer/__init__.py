"""Service layer - use case orchestration.

- ``ArtifactLoader`` fetches the corpus artifact
- ``SearchService`` owns the index lifecycle and answers queries
"""

from .artifact_loader import ArtifactLoader
from .search_service import INIT_FAILED_HTML, SearchService, ServiceStatus


__all__ = [
    "INIT_FAILED_HTML",
    "ArtifactLoader",
    "SearchService",
    "ServiceStatus",
]
