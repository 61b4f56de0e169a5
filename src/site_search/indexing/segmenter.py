"""Split a markdown page into sections keyed by its H1/H2 headings.

Each line is classified once (H1 is tried before H2, anything else is body)
and the classified stream is folded into ``SectionRecord`` values. A section
is flushed whenever a new H1 or H2 starts, tagged with the headings that were
in effect *before* that heading line.

Headings inside fenced code blocks are not recognised as code; a ``# comment``
line in a shell snippet starts a new section like any other heading.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from functools import reduce
import re

from site_search.domain.model import SectionRecord


_LINE_PATTERN = re.compile(r"[^\n]*\n|[^\n]+\Z")
# Whitespace in headings is ASCII only; a non-breaking space does not make a heading
_H1_PATTERN = re.compile(r"^[ \t\f\v]{0,3}#[ \t\f\v]+([^ \t\f\v].*)$")
_H2_PATTERN = re.compile(r"^[ \t\f\v]{0,3}##[ \t\f\v]+([^ \t\f\v].*)$")
_ASCII_WHITESPACE = " \t\n\r\f\v"


class LineKind(str, Enum):
    """Kinds of lines the segmenter distinguishes."""

    H1 = "h1"
    H2 = "h2"
    BODY = "body"


@dataclass(frozen=True)
class ClassifiedLine:
    kind: LineKind
    raw: str
    heading: str | None = None


_MATCHERS: tuple[tuple[LineKind, re.Pattern[str]], ...] = (
    (LineKind.H1, _H1_PATTERN),
    (LineKind.H2, _H2_PATTERN),
)


def classify_line(line: str) -> ClassifiedLine:
    """Return the kind of ``line`` and, for headings, the trimmed heading text."""
    content = line.rstrip("\r\n")
    for kind, pattern in _MATCHERS:
        match = pattern.match(content)
        if match:
            return ClassifiedLine(kind=kind, raw=line, heading=match.group(1).strip(_ASCII_WHITESPACE))
    return ClassifiedLine(kind=LineKind.BODY, raw=line)


def iter_lines(text: str) -> Iterator[str]:
    """Yield lines of ``text`` with their trailing newline kept."""
    for match in _LINE_PATTERN.finditer(text):
        yield match.group(0)


@dataclass
class _SegmentState:
    h1: str | None = None
    h2: str | None = None
    buffer: list[str] = field(default_factory=list)
    sections: list[SectionRecord] = field(default_factory=list)

    def flush(self) -> None:
        if not self.buffer:
            return
        self.sections.append(SectionRecord(h1=self.h1, h2=self.h2, body="".join(self.buffer)))
        self.buffer = []


def _step(state: _SegmentState, line: ClassifiedLine) -> _SegmentState:
    if line.kind is LineKind.H1:
        state.flush()
        state.h1 = line.heading
        state.h2 = None
    elif line.kind is LineKind.H2:
        state.flush()
        state.h2 = line.heading
    else:
        state.buffer.append(line.raw)
    return state


def fold_sections(lines: Iterable[ClassifiedLine]) -> list[SectionRecord]:
    """Fold classified lines into sections, including headless ones."""
    state = reduce(_step, lines, _SegmentState())
    state.flush()
    return state.sections


def split_sections(markdown: str) -> list[SectionRecord]:
    """Split ``markdown`` into H1/H2 sections.

    Content before the first heading is not indexed, so sections with neither
    an H1 nor an H2 are dropped.
    """
    sections = fold_sections(classify_line(line) for line in iter_lines(markdown or ""))
    return [section for section in sections if section.has_heading]
