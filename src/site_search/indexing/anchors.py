"""Heading anchors that match the ids the page renderer assigns.

The renderer lower-cases the heading, drops every character that is not
alphanumeric (Unicode ``Alphabetic`` or a decimal digit), ASCII whitespace,
``_`` or ``-``, trims, and turns each single space into a hyphen. Runs of
spaces become runs of hyphens; this is not a slugify and must not be "fixed"
to collapse them, otherwise links from search results stop landing on their
heading.
"""

from __future__ import annotations

import regex


# Alphabetic covers combining vowel signs and letter numbers, not just L*.
# Whitespace is ASCII only, as the renderer's regex engine sees it.
_DROPPED_PATTERN = regex.compile(r"[^\p{Alphabetic}\p{Nd} \t\n\r\f\v_\-]")
_ASCII_WHITESPACE = " \t\n\r\f\v"


def heading_id(text: str) -> str:
    """Return the URL fragment for a heading.

    Examples:
        >>> heading_id("Hello   World")
        'hello---world'
        >>> heading_id("Café!")
        'café'
        >>> heading_id("  snake_case & kebab-case ")
        'snake_case--kebab-case'
    """
    kept = _DROPPED_PATTERN.sub("", (text or "").lower())
    return kept.strip(_ASCII_WHITESPACE).replace(" ", "-")
