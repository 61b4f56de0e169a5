"""Corpus builder: pages in, ``search.json`` out.

Each page is segmented into H1/H2 sections; every headed section becomes one
``IndexEntry`` whose title is the heading chain, whose URL points at the
deepest heading's anchor, and whose content is the normalized section body.
Entries keep page-then-section order. Pages are independent of each other, so
a broken page only costs its own entries.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from site_search.domain.errors import ArtifactError
from site_search.domain.model import Corpus, IndexEntry, SectionRecord, SourceDocument
from site_search.indexing.anchors import heading_id
from site_search.indexing.normalizer import markdown_to_text
from site_search.indexing.segmenter import split_sections
from site_search.observability.metrics import CORPUS_ENTRY_COUNT
from site_search.observability.tracing import create_span


logger = logging.getLogger(__name__)

DEFAULT_TITLE_SEPARATOR = " → "

_CORPUS_ADAPTER = TypeAdapter(list[IndexEntry])


@dataclass(frozen=True)
class CorpusBuildResult:
    """Outcome of one corpus build."""

    entries: tuple[IndexEntry, ...]
    documents_indexed: int
    documents_skipped: int
    errors: tuple[str, ...] = field(default_factory=tuple)


def section_url(document: SourceDocument, section: SectionRecord) -> str:
    """Return the page URL plus the anchor of the section's deepest heading."""
    anchor_title = section.anchor_heading
    if anchor_title is not None and document.url:
        return f"{document.url}#{heading_id(anchor_title)}"
    return document.url or ""


def section_title(document: SourceDocument, section: SectionRecord, separator: str = DEFAULT_TITLE_SEPARATOR) -> str:
    return separator.join([document.display_title, *section.heading_chain()])


class CorpusBuilder:
    """Turns source documents into the ordered list of corpus entries."""

    def __init__(self, *, title_separator: str = DEFAULT_TITLE_SEPARATOR) -> None:
        self.title_separator = title_separator

    def entries_for_document(self, document: SourceDocument) -> list[IndexEntry]:
        """Return the entries of one page; opted-out pages yield none."""
        if document.exclude_from_search:
            logger.debug("Page opted out of search: %s", document.url or document.basename)
            return []

        entries = [
            IndexEntry(
                title=section_title(document, section, self.title_separator),
                url=section_url(document, section),
                content=markdown_to_text(section.body),
            )
            for section in split_sections(document.body)
        ]
        if not entries:
            logger.debug("Page has no H1/H2 sections: %s", document.url or document.basename)
        return entries

    def build(self, documents: Iterable[SourceDocument], *, errors: Sequence[str] = ()) -> CorpusBuildResult:
        """Build the corpus from every document, in input order.

        ``errors`` carries load failures collected upstream so they are
        reported alongside the build outcome. It is read after ``documents``
        is exhausted, so a list filled by a lazy loader is complete.
        """
        collected: list[str] = []
        entries: list[IndexEntry] = []
        indexed = 0
        skipped = 0

        with create_span("corpus.build") as span:
            for document in documents:
                if document.exclude_from_search:
                    skipped += 1
                    continue
                try:
                    document_entries = self.entries_for_document(document)
                except ValidationError as exc:
                    logger.warning("Failed to index %s: %s", document.url or document.basename, exc)
                    collected.append(f"{document.url or document.basename}: {exc}")
                    skipped += 1
                    continue
                entries.extend(document_entries)
                indexed += 1

            collected = [*errors, *collected]
            skipped += len(errors)
            span.set_attribute("corpus.entries", len(entries))
            span.set_attribute("corpus.documents_indexed", indexed)

        CORPUS_ENTRY_COUNT.set(len(entries))
        logger.info("Built corpus with %d entries from %d pages (%d skipped)", len(entries), indexed, skipped)
        return CorpusBuildResult(
            entries=tuple(entries),
            documents_indexed=indexed,
            documents_skipped=skipped,
            errors=tuple(collected),
        )


def serialize_corpus(entries: Iterable[IndexEntry]) -> str:
    """Serialize entries as a pretty-printed UTF-8 JSON array."""
    payload = [{"title": entry.title, "url": entry.url, "content": entry.content} for entry in entries]
    return json.dumps(payload, ensure_ascii=False, indent=2)


def load_corpus(payload: str | bytes | list[Any]) -> Corpus:
    """Parse and validate a corpus artifact.

    Raises:
        ArtifactError: when the payload is not a JSON array of entries.
    """
    try:
        data = json.loads(payload) if isinstance(payload, (str, bytes)) else payload
    except ValueError as exc:
        raise ArtifactError(f"Corpus artifact is not valid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise ArtifactError("Corpus artifact must be a JSON array")

    try:
        return _CORPUS_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise ArtifactError(f"Corpus artifact has malformed entries: {exc}") from exc


def write_artifact(entries: Iterable[IndexEntry], output_path: Path) -> Path:
    """Write the corpus artifact to ``output_path`` so the site serves it."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(serialize_corpus(entries), encoding="utf-8")
    logger.info("Wrote corpus artifact to %s", output_path)
    return output_path
