"""Domain models for the query side.

Following Cosmic Python principles:
- Value Objects are immutable (frozen=True)
- No infrastructure dependencies

These models carry a query from ranked references to rendered markup.
"""

from pydantic import BaseModel, ConfigDict, Field


class SearchHit(BaseModel):
    """Value object for one scored document reference.

    ``ref`` is the entry URL; several hits may share it when the corpus holds
    duplicate URLs, which is why results are deduplicated before rendering.
    """

    model_config = ConfigDict(frozen=True)

    ref: str
    score: float
    position: int = Field(default=0, description="Ordinal of the entry in the corpus")


class RenderedHit(BaseModel):
    """Value object for a hit ready to be written into the results container."""

    model_config = ConfigDict(frozen=True)

    url: str
    title_html: str
    snippet_html: str
    score: float


class QueryState(BaseModel):
    """Ephemeral state of the current query.

    ``active`` is False when the query produced no terms, in which case the
    caller clears whatever results are on display.
    """

    model_config = ConfigDict(frozen=True)

    query: str
    terms: list[str] = Field(default_factory=list)
    hits: list[RenderedHit] = Field(default_factory=list)
    active: bool = False

    @classmethod
    def inactive(cls, query: str = "") -> "QueryState":
        return cls(query=query)
