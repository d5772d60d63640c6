"""Command line interface for fuzzyfind."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
import uvicorn
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from fuzzyfind.config import AppConfig, DEFAULT_MAX_FILES, DEFAULT_MAX_RESULTS
from fuzzyfind.index.indexer import Indexer, IndexingError
from fuzzyfind.index.search import Finder
from fuzzyfind.models import MatchResult
from fuzzyfind.protocol import serve_lines
from fuzzyfind.web.app import create_app


LOGGER = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(help="fuzzyfind - fuzzy file path search for a project tree")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_finder(root: Path, config: AppConfig) -> Finder:
    """Index ``root`` or abort the command with a non-zero exit code."""
    try:
        corpus = Indexer(config).build(root)
    except IndexingError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    return Finder(corpus, config)


def _render_path(result: MatchResult) -> Text:
    text = Text(result.path)
    for position in result.positions:
        text.stylize("bold magenta", position, position + 1)
    return text


@app.command()
def serve(
    root: Path = typer.Argument(..., help="Project directory to index."),
    max_files: int = typer.Option(DEFAULT_MAX_FILES, "--max-files", min=1, help="Maximum files to index"),
    limit: int = typer.Option(DEFAULT_MAX_RESULTS, "--limit", "-n", min=1, help="Maximum results per query"),
    ignore: Optional[List[str]] = typer.Option(None, "--ignore", "-i", help="Glob of paths to skip"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Answer queries read line by line from stdin."""
    _setup_logging(verbose)
    config = AppConfig(max_files=max_files, max_results=limit, ignores=tuple(ignore or ()))
    finder = _load_finder(root, config)

    # undecodable file names and input bytes pass through instead of raising
    sys.stdin.reconfigure(errors="surrogateescape")
    sys.stdout.reconfigure(errors="surrogateescape")
    answered = serve_lines(finder, sys.stdin, sys.stdout)
    LOGGER.debug("Answered %d queries", answered)


@app.command()
def search(
    root: Path = typer.Argument(..., help="Project directory to index."),
    query: str = typer.Argument("", help="Query text"),
    max_files: int = typer.Option(DEFAULT_MAX_FILES, "--max-files", min=1, help="Maximum files to index"),
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Number of results to display"),
    ignore: Optional[List[str]] = typer.Option(None, "--ignore", "-i", help="Glob of paths to skip"),
    abbreviate: bool = typer.Option(False, "--abbreviate", "-a", help="Shorten unmatched directories"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Run a single fuzzy query and print the ranked matches."""
    _setup_logging(verbose)
    config = AppConfig(max_files=max_files, max_results=limit, ignores=tuple(ignore or ()))
    finder = _load_finder(root, config)

    results = finder.search(query)
    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Path")

    for result in results:
        path = Text(result.abbreviated()) if abbreviate else _render_path(result)
        table.add_row(f"{result.score:.4f}", path)

    console.print(table)


@app.command()
def web(
    root: Path = typer.Argument(..., help="Project directory to index."),
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    max_files: int = typer.Option(DEFAULT_MAX_FILES, "--max-files", min=1, help="Maximum files to index"),
    limit: int = typer.Option(DEFAULT_MAX_RESULTS, "--limit", "-n", min=1, help="Maximum results per query"),
    ignore: Optional[List[str]] = typer.Option(None, "--ignore", "-i", help="Glob of paths to skip"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Serve fuzzy search over HTTP."""
    _setup_logging(verbose)
    config = AppConfig(max_files=max_files, max_results=limit, ignores=tuple(ignore or ()))
    finder = _load_finder(root, config)

    console.print(
        f"Starting web interface on http://{host}:{port} ({len(finder.corpus)} files indexed)"
    )
    uvicorn.run(
        create_app(finder),
        host=host,
        port=port,
        reload=False,
        log_level="debug" if verbose else "info",
    )


def main() -> None:
    """Entry point taking the project root as its only argument."""
    typer.run(serve)
