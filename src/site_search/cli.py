"""Command line entry point for building and querying the search corpus.

Usage:
    site-search build --docs-root ./docs --site-dir ./_site
    site-search build --docs-root ./docs --dry-run
    site-search query ./_site/search.json "install guide"
    site-search query https://example.org/search.json "config" --html
    site-search query ./_site/search.json "config" --metrics
"""

# ruff: noqa: T201  # CLI intentionally prints operator feedback

from __future__ import annotations

import argparse
from collections.abc import Sequence
import html
from pathlib import Path
import re
import sys
import textwrap
import time
from typing import Any

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from site_search.config import Settings
from site_search.domain.search import QueryState
from site_search.indexing.corpus import CorpusBuilder, CorpusBuildResult, write_artifact
from site_search.indexing.sources import iter_documents
from site_search.observability.logging import configure_logging
from site_search.observability.metrics import get_metrics
from site_search.service_layer.artifact_loader import ArtifactLoader
from site_search.service_layer.search_service import SearchService


console = Console()

_MARK_PATTERN = re.compile(r"<mark>(.*?)</mark>")
_TAG_PATTERN = re.compile(r"<[^>]+>")


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="site-search",
        description="Build and query the static site search corpus",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent(
            """
            Examples:
              site-search build --docs-root ./docs --site-dir ./_site
              site-search query ./_site/search.json "getting started" --limit 5
            """
        ).strip(),
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: SITE_SEARCH_LOG_LEVEL or info)")
    parser.add_argument("--json-logs", action="store_true", help="Emit structured JSON logs")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Index markdown sources into search.json")
    build.add_argument("--docs-root", type=Path, default=None, help="Directory holding the markdown sources")
    build.add_argument("--site-dir", type=Path, default=None, help="Generated site directory")
    build.add_argument(
        "--artifact-path",
        default=None,
        help="Artifact path relative to the site directory (default: search.json)",
    )
    build.add_argument("--dry-run", action="store_true", help="Build the corpus without writing the artifact")

    query = subparsers.add_parser("query", help="Run a query against a corpus artifact")
    query.add_argument("artifact", help="Artifact file path or http(s) URL")
    query.add_argument("query", help="Free-text query")
    query.add_argument("--limit", type=int, default=None, help="Maximum number of results (default: 10)")
    query.add_argument("--html", action="store_true", help="Print the rendered results markup")
    query.add_argument("--metrics", action="store_true", help="Print Prometheus metrics after the results")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Merge explicit CLI flags over environment-driven settings."""
    overrides: dict[str, Any] = {}
    for option in ("docs_root", "site_dir", "artifact_path", "log_level"):
        value = getattr(args, option, None)
        if value is not None:
            overrides[option] = value
    if getattr(args, "limit", None) is not None:
        overrides["max_results"] = args.limit
    if args.json_logs:
        overrides["json_logs"] = True
    return Settings(**overrides)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args)
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    configure_logging(level=settings.log_level.upper(), json_output=settings.json_logs)

    if args.command == "build":
        return run_build(settings, dry_run=args.dry_run)
    return run_query(settings, args.artifact, args.query, as_html=args.html, show_metrics=args.metrics)


def run_build(settings: Settings, *, dry_run: bool = False) -> int:
    docs_root = settings.docs_root
    if not docs_root.is_dir():
        print(f"Docs root not found: {docs_root}", file=sys.stderr)
        return 1

    output_path = settings.artifact_output_path()
    print("=== Site Search Indexing ===")
    print(f"Docs root: {docs_root}")
    print(f"Artifact: {output_path}")
    print(f"Dry run: {dry_run}")
    print()

    start = time.perf_counter()
    load_errors: list[str] = []
    result = CorpusBuilder(title_separator=settings.title_separator).build(
        iter_documents(docs_root, load_errors), errors=load_errors
    )
    if not dry_run:
        write_artifact(result.entries, output_path)
    _print_build_result(result, time.perf_counter() - start, dry_run=dry_run)
    return 1 if result.errors else 0


def _print_build_result(result: CorpusBuildResult, duration_s: float, *, dry_run: bool) -> None:
    status = "DRY" if dry_run else "OK"
    print(
        f"- {status:<4} entries={len(result.entries)} indexed={result.documents_indexed} "
        f"skipped={result.documents_skipped} errors={len(result.errors)} duration={duration_s:.2f}s"
    )
    if result.errors:
        print()
        print("Failures detected:")
        for entry in result.errors:
            print(f"  - {entry}")


def run_query(
    settings: Settings, artifact: str, query: str, *, as_html: bool = False, show_metrics: bool = False
) -> int:
    loader = ArtifactLoader(timeout=settings.http_timeout)
    service = SearchService(
        loader,
        artifact,
        title_boost=settings.title_boost,
        content_boost=settings.content_boost,
        fuzzy_distance=settings.fuzzy_distance,
        max_results=settings.max_results,
        snippet_length=settings.snippet_length,
    )
    if not service.load():
        print(f"Search init failed: {service.error}", file=sys.stderr)
        return 1

    state = service.query(query)
    if as_html:
        print(service.render(state))
    elif not state.active:
        print("Query has no searchable terms.")
    else:
        console.print(_results_table(state))

    if show_metrics:
        print(get_metrics().decode("utf-8"))
    return 0


def _to_rich(fragment: str) -> str:
    """Turn highlighted HTML into rich markup."""
    parts: list[str] = []
    last = 0
    for match in _MARK_PATTERN.finditer(fragment):
        parts.append(escape(html.unescape(_TAG_PATTERN.sub("", fragment[last : match.start()]))))
        parts.append(f"[bold yellow]{escape(html.unescape(match.group(1)))}[/bold yellow]")
        last = match.end()
    parts.append(escape(html.unescape(_TAG_PATTERN.sub("", fragment[last:]))))
    return "".join(parts)


def _results_table(state: QueryState) -> Table:
    table = Table(title=f"Results for {state.query!r}")
    table.add_column("#", justify="right")
    table.add_column("Title", style="bold")
    table.add_column("URL", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Snippet")
    if not state.hits:
        table.add_row("-", "Nothing found.", "", "", "")
    for rank, hit in enumerate(state.hits, start=1):
        table.add_row(
            str(rank),
            _to_rich(hit.title_html),
            escape(hit.url),
            f"{hit.score:.3f}",
            _to_rich(hit.snippet_html),
        )
    return table


if __name__ == "__main__":
    sys.exit(main())
