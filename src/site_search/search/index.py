"""In-memory inverted index over the corpus artifact.

The index is built once per load from the parsed corpus and never mutated
afterwards. Each entry is cleaned a second time (literal tags and escaped
pseudo-tags are dropped) and then tokenized per field. Entries are addressed
internally by their position in the corpus, so two entries sharing a URL are
both searchable; the URL reference map used for display keeps the last one.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
import bisect
import logging
from types import MappingProxyType

from site_search.domain.model import IndexEntry
from site_search.observability.metrics import INDEX_DOC_COUNT
from site_search.observability.tracing import create_span
from site_search.search.analyzers import SiteAnalyzer, clean_text
from site_search.search.stats import FieldLengthStats, compute_field_length_stats


logger = logging.getLogger(__name__)

TITLE_FIELD = "title"
CONTENT_FIELD = "content"
DEFAULT_FIELD_BOOSTS: Mapping[str, float] = MappingProxyType({TITLE_FIELD: 10.0, CONTENT_FIELD: 1.0})

# field -> token -> {entry position -> term frequency}
Postings = Mapping[str, Mapping[str, Mapping[int, int]]]


def clean_entry(entry: IndexEntry) -> IndexEntry:
    return IndexEntry(title=clean_text(entry.title), url=entry.url, content=clean_text(entry.content))


@dataclass(frozen=True)
class InvertedIndex:
    """Immutable token index with per-field postings and boosts."""

    documents: tuple[IndexEntry, ...]
    postings: Postings
    field_lengths: Mapping[str, Mapping[int, int]]
    field_boosts: Mapping[str, float]
    references: Mapping[str, IndexEntry]
    vocabulary: tuple[str, ...]

    @classmethod
    def build(
        cls,
        entries: Iterable[IndexEntry],
        *,
        field_boosts: Mapping[str, float] | None = None,
    ) -> InvertedIndex:
        """Clean and tokenize every entry into a fresh index."""
        analyzer = SiteAnalyzer()
        boosts = dict(DEFAULT_FIELD_BOOSTS)
        boosts.update(field_boosts or {})

        documents: list[IndexEntry] = []
        postings: dict[str, dict[str, dict[int, int]]] = {field: defaultdict(dict) for field in boosts}
        field_lengths: dict[str, dict[int, int]] = {field: {} for field in boosts}
        references: dict[str, IndexEntry] = {}

        with create_span("index.build") as span:
            for position, raw_entry in enumerate(entries):
                entry = clean_entry(raw_entry)
                documents.append(entry)
                references[entry.url] = entry

                for field in boosts:
                    tokens = [token.text for token in analyzer(getattr(entry, field))]
                    field_lengths[field][position] = len(tokens)
                    for token, frequency in Counter(tokens).items():
                        postings[field][token][position] = frequency

            vocabulary = tuple(sorted({token for field_postings in postings.values() for token in field_postings}))
            span.set_attribute("index.documents", len(documents))
            span.set_attribute("index.vocabulary", len(vocabulary))

        INDEX_DOC_COUNT.set(len(documents))
        logger.info("Built search index: %d entries, %d distinct tokens", len(documents), len(vocabulary))

        return cls(
            documents=tuple(documents),
            postings=MappingProxyType(
                {
                    field: MappingProxyType({token: MappingProxyType(docs) for token, docs in field_postings.items()})
                    for field, field_postings in postings.items()
                }
            ),
            field_lengths=MappingProxyType({field: MappingProxyType(lengths) for field, lengths in field_lengths.items()}),
            field_boosts=MappingProxyType(boosts),
            references=MappingProxyType(references),
            vocabulary=vocabulary,
        )

    @property
    def doc_count(self) -> int:
        return len(self.documents)

    def reference(self, url: str) -> IndexEntry | None:
        """Return the display entry for a URL (the last entry with that URL)."""
        return self.references.get(url)

    def field_stats(self) -> dict[str, FieldLengthStats]:
        return compute_field_length_stats(self.field_lengths)

    def tokens_with_prefix(self, prefix: str) -> list[str]:
        """Return indexed tokens starting with ``prefix`` (a trailing wildcard)."""
        if not prefix:
            return []
        start = bisect.bisect_left(self.vocabulary, prefix)
        matches: list[str] = []
        for token in self.vocabulary[start:]:
            if not token.startswith(prefix):
                break
            matches.append(token)
        return matches
