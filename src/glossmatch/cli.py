from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Optional, Sequence

import typer

from .ingest import GlossaryFormatError, load_glossary_csv
from .matching import GlossaryMatcher, MatchCandidate, SearchOrigin
from .settings import get_settings
from .watcher import ContextWatcher

logging.basicConfig(
    level=getattr(logging, get_settings().log_level, logging.INFO),
    format="%(message)s",
    handlers=[logging.StreamHandler()],
)

app = typer.Typer(help="Find glossary entries relevant to a piece of text.")


def _build_matcher(glossary_path: Path | None, limit: int | None = None) -> GlossaryMatcher:
    settings = get_settings()
    path = glossary_path or settings.glossary_path
    if path is None:
        raise typer.BadParameter("No glossary given (use --glossary or set GLOSSARY_PATH).")
    config = settings.matcher_config()
    if limit is not None:
        config = config.with_overrides(max_results=limit)
    try:
        entries = load_glossary_csv(path)
    except GlossaryFormatError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return GlossaryMatcher(entries, config=config)


def _echo_matches(matches: Sequence[MatchCandidate], as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps([m.to_dict() for m in matches], ensure_ascii=False, indent=2))
        return
    if not matches:
        typer.echo("No matches.")
        return
    for match in matches:
        entry = match.entry
        category = f" [{entry.category}]" if entry.category else ""
        typer.echo(f"{match.score:.2f}  {entry.source} -> {entry.target}{category}  ({match.matched_phrase})")
        if entry.note:
            typer.echo(f"      {entry.note}")


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to look up."),
    glossary_path: Optional[Path] = typer.Option(None, "--glossary", "-g", help="Glossary CSV file."),
    auto: bool = typer.Option(False, "--auto", help="Score as a passive (auto) search."),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Maximum number of matches."),
    as_json: bool = typer.Option(False, "--json", help="Print matches as JSON."),
) -> None:
    """Search the glossary for a query typed by the user."""
    matcher = _build_matcher(glossary_path, limit)
    origin = SearchOrigin.AUTO if auto else SearchOrigin.MANUAL
    _echo_matches(matcher.search(query, origin), as_json)


@app.command()
def scan(
    input_path: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False, help="Text file to scan."),
    glossary_path: Optional[Path] = typer.Option(None, "--glossary", "-g", help="Glossary CSV file."),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Maximum number of matches."),
    as_json: bool = typer.Option(False, "--json", help="Print matches as JSON."),
) -> None:
    """Match glossary entries against the contents of a text file."""
    matcher = _build_matcher(glossary_path, limit)
    text = input_path.read_text(encoding="utf-8")
    _echo_matches(matcher.search(text, SearchOrigin.AUTO), as_json)


@app.command()
def watch(
    input_path: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False, help="Text file to watch."),
    glossary_path: Optional[Path] = typer.Option(None, "--glossary", "-g", help="Glossary CSV file."),
    settle: Optional[float] = typer.Option(None, "--settle", help="Seconds the text must stay unchanged."),
) -> None:
    """Re-run matching whenever the watched file settles on new text."""
    settings = get_settings()
    matcher = _build_matcher(glossary_path)
    watcher = ContextWatcher(matcher, settle_seconds=settle if settle is not None else settings.auto_search_interval)
    stop = threading.Event()

    def _read() -> str | None:
        try:
            return input_path.read_text(encoding="utf-8")
        except OSError as exc:
            typer.echo(f"Cannot read {input_path}: {exc}", err=True)
            return None

    typer.echo(f"Watching {input_path} (Ctrl+C to stop)")
    try:
        watcher.run(_read, lambda matches: _echo_matches(matches, False), stop)
    except KeyboardInterrupt:
        stop.set()


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind."),
    port: int = typer.Option(8000, "--port", help="Port to listen on."),
) -> None:
    """Launch the HTTP API."""
    import subprocess
    import sys

    typer.echo(f"Starting API at http://{host}:{port}")
    subprocess.run([
        sys.executable, "-m", "uvicorn", "glossmatch.api:app",
        "--host", host, "--port", str(port),
    ])


if __name__ == "__main__":
    app()
