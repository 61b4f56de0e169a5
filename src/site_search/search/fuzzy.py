"""Edit distance helpers for typo-tolerant query clauses.

A fuzzy clause accepts every indexed token within a fixed edit distance of
the query term (1 by default). One insertion, deletion, substitution or
transposition of adjacent characters each count as a single edit, so
"confgi" is one edit away from "config".
"""

from __future__ import annotations

from collections.abc import Iterable


def edit_distance(s1: str, s2: str, max_distance: int | None = None) -> int:
    """Calculate the optimal-string-alignment distance between two strings.

    Uses dynamic programming over three rows and stops early once every cell
    of a row exceeds ``max_distance``.

    Returns:
        The minimum number of single-character edits needed to change s1
        into s2. If max_distance is set and exceeded, returns max_distance+1.

    Examples:
        >>> edit_distance("kitten", "sitting")
        3
        >>> edit_distance("hello", "hallo")
        1
        >>> edit_distance("confgi", "config")
        1
        >>> edit_distance("", "abc")
        3
    """
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)

    if len(s1) > len(s2):
        s1, s2 = s2, s1

    m, n = len(s1), len(s2)

    if max_distance is not None and n - m > max_distance:
        return max_distance + 1

    before_prev: list[int] = []
    prev_row = list(range(m + 1))

    for j in range(1, n + 1):
        curr_row = [j] + [0] * m
        row_min = j
        for i in range(1, m + 1):
            cost = 0 if s1[i - 1] == s2[j - 1] else 1
            value = min(
                prev_row[i] + 1,  # deletion
                curr_row[i - 1] + 1,  # insertion
                prev_row[i - 1] + cost,  # substitution
            )
            if i > 1 and j > 1 and s1[i - 1] == s2[j - 2] and s1[i - 2] == s2[j - 1]:
                value = min(value, before_prev[i - 2] + 1)  # transposition
            curr_row[i] = value
            row_min = min(row_min, value)

        if max_distance is not None and row_min > max_distance:
            return max_distance + 1

        before_prev, prev_row = prev_row, curr_row

    return prev_row[m]


def find_fuzzy_matches(query_term: str, vocabulary: Iterable[str], max_distance: int = 1) -> list[tuple[str, int]]:
    """Return vocabulary tokens within ``max_distance`` edits of ``query_term``.

    Results are sorted by distance (exact match first), then alphabetically.
    """
    if not query_term or max_distance < 0:
        return []

    matches: list[tuple[str, int]] = []
    for term in vocabulary:
        if abs(len(query_term) - len(term)) > max_distance:
            continue
        distance = edit_distance(query_term, term, max_distance)
        if distance <= max_distance:
            matches.append((term, distance))

    matches.sort(key=lambda item: (item[1], item[0]))
    return matches
