"""Domain models for the indexing pipeline.

Source documents and sections are plain frozen dataclasses that live for one
build pass. ``IndexEntry`` is the wire record of the corpus artifact and is a
pydantic model so the query side can validate what it loads.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class SourceDocument:
    """A rendered page as handed over by the content pipeline."""

    body: str
    basename: str
    url: str | None = None
    title: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    @property
    def display_title(self) -> str:
        return self.title or self.basename

    @property
    def exclude_from_search(self) -> bool:
        """Return True when the page opted out of indexing."""
        if self.metadata.get("search") is False:
            return True
        return self.metadata.get("exclude_from_search") is True


@dataclass(frozen=True)
class SectionRecord:
    """Body text between two level-1/level-2 headings."""

    h1: str | None
    h2: str | None
    body: str

    @property
    def has_heading(self) -> bool:
        return self.h1 is not None or self.h2 is not None

    @property
    def anchor_heading(self) -> str | None:
        """Deepest heading present, used for the URL fragment."""
        return self.h2 if self.h2 is not None else self.h1

    def heading_chain(self) -> list[str]:
        return [heading for heading in (self.h1, self.h2) if heading is not None]


class IndexEntry(BaseModel):
    """One indexable section as stored in the corpus artifact."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str
    url: str
    content: str


Corpus = list[IndexEntry]
