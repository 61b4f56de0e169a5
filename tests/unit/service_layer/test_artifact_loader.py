"""Unit tests for fetching the corpus artifact."""

import json

import httpx
import pytest

from site_search.domain.errors import ArtifactError, ArtifactUnavailableError
from site_search.service_layer.artifact_loader import ArtifactLoader, is_remote


pytestmark = pytest.mark.unit

PAYLOAD = [{"title": "Doc → Intro", "url": "/doc.html#intro", "content": "hello"}]


def _loader(handler) -> ArtifactLoader:
    return ArtifactLoader(transport=httpx.MockTransport(handler))


class TestRemoteArtifact:
    """Test HTTP(S) sources."""

    def test_loads_with_no_cache_headers(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=PAYLOAD)

        corpus = _loader(handler).load("https://docs.example.org/search.json")

        assert [entry.url for entry in corpus] == ["/doc.html#intro"]
        assert seen[0].headers["Cache-Control"] == "no-cache"
        assert seen[0].headers["Pragma"] == "no-cache"

    def test_non_2xx_is_unavailable(self):
        loader = _loader(lambda request: httpx.Response(404, text="missing"))

        with pytest.raises(ArtifactUnavailableError, match="HTTP 404"):
            loader.load("https://docs.example.org/search.json")

    def test_transport_error_is_unavailable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ArtifactUnavailableError):
            _loader(handler).load("http://localhost:9/search.json")

    def test_malformed_payload_is_artifact_error(self):
        loader = _loader(lambda request: httpx.Response(200, text="<html>not json</html>"))

        with pytest.raises(ArtifactError):
            loader.load("https://docs.example.org/search.json")


class TestLocalArtifact:
    """Test filesystem sources."""

    def test_loads_plain_path(self, tmp_path):
        path = tmp_path / "search.json"
        path.write_text(json.dumps(PAYLOAD), encoding="utf-8")

        corpus = ArtifactLoader().load(path)

        assert corpus[0].title == "Doc → Intro"

    def test_site_paths_resolve_under_site_root(self, tmp_path):
        (tmp_path / "search.json").write_text(json.dumps(PAYLOAD), encoding="utf-8")

        loader = ArtifactLoader(site_root=tmp_path)

        assert loader.resolve_path("/search.json") == tmp_path / "search.json"
        assert len(loader.load("/search.json")) == 1

    def test_missing_file_is_unavailable(self, tmp_path):
        with pytest.raises(ArtifactUnavailableError):
            ArtifactLoader().load(tmp_path / "missing.json")


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("https://example.org/search.json", True),
        ("http://localhost/search.json", True),
        ("/search.json", False),
        ("search.json", False),
    ],
)
def test_is_remote(source, expected):
    assert is_remote(source) is expected
