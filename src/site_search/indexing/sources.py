"""Discover markdown pages on disk and turn them into ``SourceDocument`` values.

Page URLs normally come from the site renderer. When the indexer runs on its
own, URLs are derived the way a Jekyll-style renderer lays out pages: an
explicit ``permalink`` wins, ``index.md`` maps to its directory, everything
else maps to ``<path>.html``.
"""

from __future__ import annotations

from collections.abc import Iterator
import logging
from pathlib import Path, PurePosixPath

from site_search.domain.errors import DocumentLoadError
from site_search.domain.model import SourceDocument
from site_search.indexing.front_matter import parse_front_matter


logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})

_SKIP_DIRS = {
    "_site",
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "vendor",
}


def _is_skipped_dir(name: str) -> bool:
    return name in _SKIP_DIRS or name.startswith(("_", "."))


def discover_markdown_files(root: Path) -> Iterator[Path]:
    """Yield markdown files under ``root`` in a deterministic order."""
    if not root.exists():
        logger.warning("Docs root does not exist: %s", root)
        return

    for path in sorted(root.rglob("*")):
        if not path.is_file() or path.suffix.lower() not in MARKDOWN_SUFFIXES:
            continue
        relative_dirs = path.relative_to(root).parts[:-1]
        if any(_is_skipped_dir(part) for part in relative_dirs):
            continue
        yield path


def derive_page_url(relative_path: PurePosixPath | Path, permalink: object = None) -> str:
    """Return the site URL for a page.

    Examples:
        "index.md" -> "/"
        "guide/index.md" -> "/guide/"
        "guide/install.md" -> "/guide/install.html"
    """
    if isinstance(permalink, str) and permalink.strip():
        value = permalink.strip()
        return value if value.startswith("/") else f"/{value}"

    posix = PurePosixPath(*Path(relative_path).parts)
    parent = "/".join(posix.parent.parts)
    prefix = f"/{parent}/" if parent else "/"
    if posix.stem == "index":
        return prefix
    return f"{prefix}{posix.stem}.html"


def load_document(path: Path, root: Path) -> SourceDocument:
    """Read one page from disk.

    Raises:
        DocumentLoadError: when the file cannot be read or decoded.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentLoadError(f"Unable to read {path}: {exc}") from exc

    metadata, body = parse_front_matter(raw)
    title = metadata.get("title")
    relative = path.relative_to(root)
    return SourceDocument(
        body=body,
        basename=path.stem,
        url=derive_page_url(relative, metadata.get("permalink")),
        title=str(title) if title else None,
        metadata=metadata,
    )


def iter_documents(root: Path, errors: list[str] | None = None) -> Iterator[SourceDocument]:
    """Yield every readable page under ``root``; unreadable pages are recorded in ``errors``."""
    for path in discover_markdown_files(root):
        try:
            yield load_document(path, root)
        except DocumentLoadError as exc:
            logger.warning("Skipping %s: %s", path, exc)
            if errors is not None:
                errors.append(str(exc))
