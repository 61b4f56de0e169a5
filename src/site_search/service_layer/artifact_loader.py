"""Fetch the corpus artifact from disk or over HTTP(S).

The artifact is always requested fresh (``no-cache``) so a rebuilt site is
picked up on the next load. Any failure to obtain the bytes is reported as
``ArtifactUnavailableError``; a payload that arrives but does not parse is an
``ArtifactError`` raised by ``load_corpus``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from site_search.domain.errors import ArtifactUnavailableError
from site_search.domain.model import Corpus
from site_search.indexing.corpus import load_corpus


logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Accept": "application/json",
}


def is_remote(source: str | Path) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


class ArtifactLoader:
    """Load ``search.json`` from a local file or an HTTP(S) URL.

    When ``site_root`` is given, local sources are site paths
    (``/search.json``) resolved under it; otherwise they are plain paths.
    """

    def __init__(
        self,
        *,
        site_root: Path | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.site_root = site_root
        self.timeout = timeout
        self.transport = transport

    def resolve_path(self, source: str | Path) -> Path:
        """Map a site-relative or filesystem source to a concrete path."""
        if self.site_root is None:
            return Path(source)
        return self.site_root / str(source).lstrip("/")

    def fetch(self, source: str | Path) -> bytes:
        """Return the raw artifact bytes.

        Raises:
            ArtifactUnavailableError: when the file is unreadable, the request
                fails, or the server answers with a non-2xx status.
        """
        if is_remote(source):
            return self._fetch_remote(str(source))
        return self._read_local(source)

    def load(self, source: str | Path) -> Corpus:
        """Fetch and validate the artifact."""
        payload = self.fetch(source)
        corpus = load_corpus(payload)
        logger.info("Loaded %d corpus entries from %s", len(corpus), source)
        return corpus

    def _read_local(self, source: str | Path) -> bytes:
        path = self.resolve_path(source)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ArtifactUnavailableError(f"Cannot read corpus artifact {path}: {exc}") from exc

    def _fetch_remote(self, url: str) -> bytes:
        try:
            with httpx.Client(
                timeout=self.timeout,
                follow_redirects=True,
                headers=NO_CACHE_HEADERS,
                transport=self.transport,
            ) as client:
                response = client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ArtifactUnavailableError(
                f"HTTP {exc.response.status_code} while fetching corpus artifact {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ArtifactUnavailableError(f"Failed to fetch corpus artifact {url}: {exc}") from exc
        return response.content
