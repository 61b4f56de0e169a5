"""Exception hierarchy shared by the indexing and query halves."""


class SiteSearchError(Exception):
    """Base class for site-search failures."""


class DocumentLoadError(SiteSearchError, RuntimeError):
    """Raised when a source file cannot be turned into a document."""


class ArtifactError(SiteSearchError, ValueError):
    """Raised when a corpus artifact payload is not a list of entries."""


class ArtifactUnavailableError(SiteSearchError):
    """Raised when the corpus artifact cannot be fetched."""
