"""Coarse markdown/HTML to plain text conversion for the search corpus.

The passes run in a fixed order; later passes assume the earlier ones already
removed their constructs (e.g. emphasis stripping would otherwise eat the
underscores of inline code). Matching is regex based and lenient: unbalanced
fences or brackets are left as stray punctuation, nothing here raises.
"""

from __future__ import annotations

import re


_REWRITES: tuple[tuple[re.Pattern[str], str], ...] = (
    # fenced code blocks ``` ... ``` / ~~~ ... ~~~
    (re.compile(r"(^|\n)```.*?\n.*?(^|\n)```", re.DOTALL | re.MULTILINE), "\n"),
    (re.compile(r"(^|\n)~~~.*?\n.*?(^|\n)~~~", re.DOTALL | re.MULTILINE), "\n"),
    # inline code
    (re.compile(r"`([^`]*)`"), r"\1"),
    # images before links, otherwise the "!" survives
    (re.compile(r"!\[([^\]]*)\]\([^)]+\)"), r"\1"),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    # html tags
    (re.compile(r"</?[^>]+>"), " "),
    # heading markers
    (re.compile(r"^\s{0,3}#{1,6}\s+", re.MULTILINE), ""),
    # list markers
    (re.compile(r"^\s{0,3}[-*+]\s+", re.MULTILINE), ""),
    (re.compile(r"^\s{0,3}\d+\.\s+", re.MULTILINE), ""),
    # emphasis and strike-through
    (re.compile(r"[*_~]"), ""),
    # block quotes
    (re.compile(r"^\s{0,3}>\s?", re.MULTILINE), ""),
    # whitespace
    (re.compile(r"\r"), "\n"),
    (re.compile(r"[ \t]+"), " "),
    (re.compile(r"\n{2,}"), "\n"),
)


def markdown_to_text(markdown: str) -> str:
    """Return the plain, search-indexable text of a markdown fragment."""
    text = markdown or ""
    for pattern, replacement in _REWRITES:
        text = pattern.sub(replacement, text)
    return text.strip()
