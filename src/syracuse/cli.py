"""Typer-based CLI to evaluate and search recurrence sequences."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .cli_utils import configure_logging, resolve_settings
from .commands.batch import BatchHandler
from .commands.search import SearchHandler, TermHandler
from .exceptions import SyracuseError
from .relations import list_relations

app = typer.Typer(help="Syracuse CLI - evaluate recurrence sequences and search until a value")
console = Console()
VALID_FORMATS = {"json", "yaml"}


def _fail(exc: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {exc}")
    raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose)


@app.command()
def term(
    rank: int = typer.Argument(..., min=0, help="Rank of the term to evaluate"),
    relation: Optional[str] = typer.Option(None, "--relation", "-r", help="Name of a registered relation"),
    terms: Optional[str] = typer.Option(None, "--terms", help="Initial terms, e.g. '0,1'"),
    preset: str = typer.Option("default", "--preset", "-p", help="Config preset tag"),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to a search config JSON file"),
) -> None:
    """Evaluate the term of a given rank (naive recursion)."""
    try:
        settings = resolve_settings(config, preset, relation=relation, terms=terms)
        TermHandler().run(settings, rank)
    except (SyracuseError, TypeError, ValueError, FileNotFoundError) as exc:
        _fail(exc)


@app.command()
def search(
    target: Optional[int] = typer.Option(None, "--target", help="Value to search for"),
    relation: Optional[str] = typer.Option(None, "--relation", "-r", help="Name of a registered relation"),
    terms: Optional[str] = typer.Option(None, "--terms", help="Initial terms, e.g. '6'"),
    max_steps: Optional[int] = typer.Option(None, "--max-steps", min=0, help="Give up after this many steps"),
    preset: str = typer.Option("default", "--preset", "-p", help="Config preset tag"),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to a search config JSON file"),
) -> None:
    """Count the steps until the sequence reaches the target value."""
    try:
        settings = resolve_settings(
            config, preset, relation=relation, terms=terms, target=target, max_steps=max_steps
        )
        SearchHandler().run(settings)
    except (SyracuseError, TypeError, ValueError, FileNotFoundError) as exc:
        _fail(exc)


@app.command()
def batch(
    count: Optional[int] = typer.Option(None, "--count", "-n", min=0, help="Number of searches to run"),
    target: Optional[int] = typer.Option(None, "--target", help="Value to search for"),
    step: Optional[int] = typer.Option(None, "--step", help="Increment applied to the initial terms between runs"),
    relation: Optional[str] = typer.Option(None, "--relation", "-r", help="Name of a registered relation"),
    terms: Optional[str] = typer.Option(None, "--terms", help="Initial terms of the first run"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", min=1, help="Maximum concurrent searches"),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0, help="Give up after this many seconds"),
    max_steps: Optional[int] = typer.Option(None, "--max-steps", min=0, help="Per-search step limit"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", file_okay=False, help="Directory for reports"),
    fmt: str = typer.Option("json", "--format", "-f", help="Report format: json or yaml"),
    preset: str = typer.Option("default", "--preset", "-p", help="Config preset tag"),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to a search config JSON file"),
) -> None:
    """Run many concurrent searches over shifted initial terms."""
    if fmt not in VALID_FORMATS:
        console.print(f"[bold red]Error:[/bold red] Unsupported format '{fmt}' (use json or yaml)")
        raise typer.Exit(code=1)
    try:
        settings = resolve_settings(
            config,
            preset,
            relation=relation,
            terms=terms,
            target=target,
            count=count,
            step=step,
            max_workers=workers,
            timeout=timeout,
            max_steps=max_steps,
        )
        BatchHandler().run(settings, output, fmt)
    except (SyracuseError, TypeError, ValueError, FileNotFoundError) as exc:
        _fail(exc)


@app.command()
def relations() -> None:
    """List the registered recurrence relations."""
    table = Table(title="Registered relations")
    table.add_column("Name")
    table.add_column("Arity", justify="right")
    table.add_column("Description")
    for relation in list_relations():
        arity = str(relation.arity) if relation.arity is not None else "any"
        table.add_row(relation.name, arity, relation.description)
    console.print(table)


if __name__ == "__main__":
    app()
