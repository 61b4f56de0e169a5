"""Highlighted titles and centered snippets for search results.

Text is always HTML-escaped *before* highlight markers are inserted, so the
``<mark>`` tags survive while anything tag-like in titles or content is shown
inert. Snippets are a window of at most ``max_chars`` characters of cleaned
content centered on the earliest match of any query term.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import re

from site_search.domain.model import IndexEntry
from site_search.domain.search import RenderedHit, SearchHit
from site_search.search.analyzers import clean_text


DEFAULT_SNIPPET_LENGTH = 180
ELLIPSIS = "…"

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}
_HTML_ESCAPE_PATTERN = re.compile(r"[&<>\"']")
_LEADING_PARTIAL_WORD = re.compile(r"^[^\s]+")
_TRAILING_PARTIAL_WORD = re.compile(r"[^\s]+$")


def escape_html(value: object) -> str:
    """Escape ``& < > " '`` for safe embedding in HTML text and attributes."""
    text = "" if value is None else str(value)
    return _HTML_ESCAPE_PATTERN.sub(lambda match: _HTML_ESCAPES[match.group(0)], text)


def _terms_pattern(terms: Sequence[str]) -> re.Pattern[str] | None:
    alternatives = [re.escape(term) for term in terms if term]
    if not alternatives:
        return None
    return re.compile("(" + "|".join(alternatives) + ")", re.IGNORECASE)


def highlight(text: str, terms: Sequence[str]) -> str:
    """Escape ``text`` and wrap every case-insensitive term match in ``<mark>``."""
    escaped = escape_html(text)
    pattern = _terms_pattern(terms)
    if pattern is None:
        return escaped
    return pattern.sub(r"<mark>\1</mark>", escaped)


def find_first_match(text: str, terms: Sequence[str]) -> tuple[int, int]:
    """Return ``(position, length)`` of the earliest term occurrence, or ``(-1, 0)``.

    Matching is case-insensitive on ``text`` itself; lower-casing first would
    shift positions wherever a character lower-cases to more than one.
    """
    best_pos, best_len = -1, 0
    for term in terms:
        if not term:
            continue
        match = re.search(re.escape(term), text, re.IGNORECASE)
        if match and (best_pos == -1 or match.start() < best_pos):
            best_pos, best_len = match.start(), match.end() - match.start()
    return best_pos, best_len


def make_snippet(text: str, terms: Sequence[str], max_chars: int = DEFAULT_SNIPPET_LENGTH) -> str:
    """Build an escaped, highlighted snippet of ``text`` around the first match.

    Without a match the snippet is the first ``max_chars`` characters (plus an
    ellipsis when cut), escaped but not highlighted. With a match at P the
    window starts at ``max(0, P - max_chars // 2)``; a cut-off word at either
    edge is dropped and replaced by an ellipsis unless that word holds the
    match itself, in which case it is kept and only the ellipsis is added.
    """
    cleaned = clean_text(text)
    pos, length = find_first_match(cleaned, terms)

    if pos == -1:
        head = cleaned[:max_chars]
        return escape_html(head) + (ELLIPSIS if len(cleaned) > max_chars else "")

    start = max(0, pos - max_chars // 2)
    end = min(len(cleaned), start + max_chars)
    window = cleaned[start:end]
    match_start, match_end = pos - start, pos - start + length

    lo, hi = 0, len(window)
    prefix = suffix = ""
    if end < len(cleaned):
        trailing = _TRAILING_PARTIAL_WORD.search(window)
        if trailing and trailing.start() >= match_end:
            hi = trailing.start()
        suffix = ELLIPSIS
    if start > 0:
        leading = _LEADING_PARTIAL_WORD.match(window)
        if leading:
            if leading.end() <= match_start:
                lo = leading.end()
            prefix = ELLIPSIS

    return highlight(prefix + window[lo:hi] + suffix, terms)


def present_hits(
    hits: Sequence[SearchHit],
    references: Mapping[str, IndexEntry],
    terms: Sequence[str],
    *,
    snippet_length: int = DEFAULT_SNIPPET_LENGTH,
) -> list[RenderedHit]:
    """Render ranked hits with highlighted titles and snippets."""
    rendered: list[RenderedHit] = []
    for hit in hits:
        entry = references.get(hit.ref)
        url = entry.url if entry and entry.url else hit.ref
        title = entry.title if entry and entry.title else url
        content = entry.content if entry else ""
        rendered.append(
            RenderedHit(
                url=url,
                title_html=highlight(title, terms),
                snippet_html=make_snippet(content, terms, snippet_length),
                score=hit.score,
            )
        )
    return rendered


def render_results_html(hits: Sequence[RenderedHit]) -> str:
    """Return the markup for the results container."""
    if not hits:
        return "<div>Nothing found.</div>"
    return "".join(
        '<div class="search-hit">'
        f'<a href="{escape_html(hit.url)}"><span>{hit.title_html}</span></a>'
        f'<div class="search-snippet">{hit.snippet_html}</div>'
        "</div>"
        for hit in hits
    )
