"""Analyzer utilities for the in-memory search index.

A small composable tokenizer/filter design: a regex tokenizer emits tokens,
filters transform the stream. The site analyzer deliberately has no stemming
and no stop-word filter so technical vocabulary stays exact-searchable.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
import re
from typing import Protocol


# Letter/digit runs; underscore and all punctuation are boundaries
WORD_PATTERN = r"[^\W_]+"

_QUERY_SPLIT_PATTERN = re.compile(r"[\s\-_.:/]+")
_TAG_PATTERN = re.compile(r"<[^>]*>")
_ESCAPED_TAG_PATTERN = re.compile(r"&lt;[^&]*?&gt;")
_WHITESPACE_PATTERN = re.compile(r"\s+")


@dataclass
class Token:
    """Represents a token emitted by analyzers."""

    text: str
    position: int
    start_char: int
    end_char: int


class Tokenizer(Protocol):
    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class RegexTokenizer:
    """Regex-based tokenizer that yields word tokens."""

    def __init__(self, pattern: str = WORD_PATTERN, flags: int = re.UNICODE) -> None:
        self.pattern = re.compile(pattern, flags)

    def __call__(self, text: str) -> Iterator[Token]:
        for position, match in enumerate(self.pattern.finditer(text)):
            yield Token(
                text=match.group(0),
                position=position,
                start_char=match.start(),
                end_char=match.end(),
            )


class LowercaseFilter:
    """Filter that lowercases token text."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if not token.text.islower():
                token.text = token.text.lower()
            yield token


class AnalyzerPipeline:
    """Composable analyzer pipeline (tokenizer + filters)."""

    def __init__(self, tokenizer: Tokenizer, filters: Sequence[TokenFilter] | None = None) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])

    def __call__(self, text: str) -> list[Token]:
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        tokens = list(stream)
        for idx, token in enumerate(tokens):
            token.position = idx
        return tokens


class SiteAnalyzer:
    """Default analyzer for title and content fields: tokenize + lowercase."""

    def __init__(self) -> None:
        self.pipeline = AnalyzerPipeline(RegexTokenizer(), [LowercaseFilter()])

    def __call__(self, text: str) -> list[Token]:
        return self.pipeline(text)


def split_terms(query: str | None) -> list[str]:
    """Split a free-text query into lowercase terms.

    Whitespace and ``- _ . : /`` separate terms; empty pieces are dropped.

    Examples:
        >>> split_terms("  Docs/Setup-guide ")
        ['docs', 'setup', 'guide']
        >>> split_terms(" .. ")
        []
    """
    normalized = (query or "").strip().lower()
    return [term for term in _QUERY_SPLIT_PATTERN.split(normalized) if term]


def clean_text(value: str | None) -> str:
    """Remove HTML tags and escaped pseudo-tags, then collapse whitespace.

    Content may still carry literal ``<tag>`` or ``&lt;tag&gt;`` fragments
    from code samples; neither should be indexed or shown.
    """
    text = _TAG_PATTERN.sub(" ", value or "")
    text = _ESCAPED_TAG_PATTERN.sub(" ", text)
    return _WHITESPACE_PATTERN.sub(" ", text).strip()
