"""Centralized configuration for site-search using Pydantic Settings."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Every variable is read with the ``SITE_SEARCH_`` prefix, e.g.
    ``SITE_SEARCH_DOCS_ROOT=./docs``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SITE_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Build-time locations
    docs_root: Path = Field(default=Path("."), description="Directory holding the markdown sources")
    site_dir: Path = Field(default=Path("_site"), description="Directory the generated site is written to")
    artifact_path: str = Field(default="search.json", description="Corpus artifact path relative to site root")

    # Query-time location of the artifact (file path or http(s) URL)
    artifact_url: str = Field(default="/search.json", description="Where the query side fetches the corpus")
    http_timeout: float = Field(default=10.0, gt=0, description="Artifact fetch timeout in seconds")

    # Corpus composition
    title_separator: str = Field(default=" → ", description="Separator between document title and headings")

    # Ranking
    title_boost: float = Field(default=10.0, gt=0, description="Weight of the title field")
    content_boost: float = Field(default=1.0, gt=0, description="Weight of the content field")
    fuzzy_distance: int = Field(default=1, ge=0, le=2, description="Maximum edit distance of fuzzy clauses")
    max_results: int = Field(default=10, ge=1, description="Maximum distinct documents returned per query")

    # Presentation
    snippet_length: int = Field(default=180, ge=20, description="Maximum snippet length in characters")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    json_logs: bool = Field(default=False, description="Emit structured JSON logs")

    @field_validator("artifact_path")
    @classmethod
    def _strip_leading_slash(cls, value: str) -> str:
        cleaned = value.strip().lstrip("/")
        if not cleaned:
            raise ValueError("artifact_path must name a file")
        return cleaned

    def artifact_output_path(self) -> Path:
        """Return the filesystem location the corpus artifact is written to."""
        return self.site_dir / self.artifact_path
