"""Query engine: free text in, ranked document references out.

Every query term becomes two clauses, a trailing wildcard and an
edit-distance fuzzy match, and all clauses are OR-ed. A document's score is
the sum of every clause that matched it, so a term that matches exactly
(through both clauses) outranks a near miss. Results are deduplicated by
reference and capped.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
import logging

from site_search.domain.search import SearchHit
from site_search.observability.metrics import QUERY_COUNT, SEARCH_LATENCY, track_latency
from site_search.observability.tracing import create_span
from site_search.search.analyzers import SiteAnalyzer, split_terms
from site_search.search.fuzzy import find_fuzzy_matches
from site_search.search.index import InvertedIndex
from site_search.search.stats import calculate_idf, term_weight


logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 10

# Expanded (non-identical) tokens score lower than the term itself
_EXPANSION_DISCOUNT = 0.8


@dataclass(frozen=True)
class QueryResult:
    """Terms of a query and its deduplicated hits."""

    terms: tuple[str, ...]
    hits: tuple[SearchHit, ...]

    @property
    def active(self) -> bool:
        return bool(self.terms)


def dedupe_hits(hits: Iterable[SearchHit], limit: int = DEFAULT_MAX_RESULTS) -> list[SearchHit]:
    """Keep the first hit per reference, up to ``limit`` references.

    Hits are expected in descending score order, so the first occurrence is
    the best scoring one.
    """
    seen: set[str] = set()
    top: list[SearchHit] = []
    if limit <= 0:
        return top
    for hit in hits:
        if hit.ref in seen:
            continue
        seen.add(hit.ref)
        top.append(hit)
        if len(top) >= limit:
            break
    return top


class QueryEngine:
    """Score queries against an ``InvertedIndex``."""

    def __init__(
        self,
        index: InvertedIndex,
        *,
        fuzzy_distance: int = 1,
        max_results: int = DEFAULT_MAX_RESULTS,
        k1: float = 1.2,
        b: float = 0.75,
    ) -> None:
        self.index = index
        self.fuzzy_distance = fuzzy_distance
        self.max_results = max_results
        self.k1 = k1
        self.b = b
        self._field_stats = index.field_stats()
        self.analyzer = SiteAnalyzer()

    def index_terms(self, terms: Sequence[str]) -> list[str]:
        """Run query terms through the index analyzer.

        Punctuation inside a term (``c++``, ``don't``) splits it the same way it
        split the indexed text.
        """
        return [token.text for term in terms for token in self.analyzer(term)]

    def expand_term(self, term: str) -> dict[str, int]:
        """Return matched tokens for both clauses of ``term``.

        The value is the number of clauses that matched the token, so the
        term itself usually counts twice (it is its own prefix and within
        distance zero).
        """
        matched: dict[str, int] = defaultdict(int)
        for token in self.index.tokens_with_prefix(term):
            matched[token] += 1
        for token, _distance in find_fuzzy_matches(term, self.index.vocabulary, self.fuzzy_distance):
            matched[token] += 1
        return matched

    def score_terms(self, terms: Sequence[str]) -> list[SearchHit]:
        """Return every matching entry, best first, ties in corpus order."""
        doc_scores: dict[int, float] = defaultdict(float)
        total_docs = max(self.index.doc_count, 1)

        for term in self.index_terms(terms):
            for token, clause_count in self.expand_term(term).items():
                discount = 1.0 if token == term else _EXPANSION_DISCOUNT
                for field_name, field_postings in self.index.postings.items():
                    postings = field_postings.get(token)
                    if not postings:
                        continue
                    stats = self._field_stats[field_name]
                    boost = self.index.field_boosts.get(field_name, 1.0)
                    lengths = self.index.field_lengths[field_name]
                    idf = calculate_idf(len(postings), total_docs)
                    for position, frequency in postings.items():
                        weight = term_weight(
                            frequency, lengths.get(position, frequency), stats.average_length, k1=self.k1, b=self.b
                        )
                        doc_scores[position] += idf * weight * boost * discount * clause_count

        ranked = sorted(doc_scores.items(), key=lambda item: (-item[1], item[0]))
        return [
            SearchHit(ref=self.index.documents[position].url, score=score, position=position)
            for position, score in ranked
            if score > 0
        ]

    def search(self, query: str, *, limit: int | None = None) -> QueryResult:
        """Run a free-text query.

        A query without terms is inactive and has no hits. Any failure while
        matching is logged and treated as zero results.
        """
        terms = tuple(split_terms(query))
        if not terms:
            return QueryResult(terms=(), hits=())

        cap = self.max_results if limit is None else limit
        with create_span("search.query", attributes={"search.terms": len(terms)}), track_latency(SEARCH_LATENCY):
            try:
                ranked = self.score_terms(terms)
            except Exception:
                logger.warning("Query failed, returning no results: %r", query, exc_info=True)
                QUERY_COUNT.labels(status="error").inc()
                return QueryResult(terms=terms, hits=())

        hits = tuple(dedupe_hits(ranked, cap))
        QUERY_COUNT.labels(status="ok").inc()
        logger.debug("Query %r matched %d entries, returning %d", query, len(ranked), len(hits))
        return QueryResult(terms=terms, hits=hits)
