"""Shared test fixtures and configuration."""

from pathlib import Path

import pytest

from site_search.domain.model import IndexEntry


FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Drop SITE_SEARCH_* variables so tests see default settings."""
    import os

    for key in list(os.environ):
        if key.upper().startswith("SITE_SEARCH_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def fixture_docs_root() -> Path:
    """Small markdown site used by the end-to-end tests."""
    return FIXTURES_DIR / "docs"


@pytest.fixture
def sample_entries() -> list[IndexEntry]:
    """Corpus entries with distinct titles and contents."""
    return [
        IndexEntry(
            title="Guide → Install",
            url="/guide/#install",
            content="Download the archive and run the installer on your machine.",
        ),
        IndexEntry(
            title="Guide → Configuration",
            url="/guide/#configuration",
            content="Edit the config file to change the listening port and log level.",
        ),
        IndexEntry(
            title="Reference → Command line",
            url="/reference/#command-line",
            content="The tool accepts flags such as --verbose and --config for a custom path.",
        ),
        IndexEntry(
            title="FAQ → Troubleshooting",
            url="/faq/#troubleshooting",
            content="If the install fails, check the log output and retry with more verbose logging.",
        ),
    ]
