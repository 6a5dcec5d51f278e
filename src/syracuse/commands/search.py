"""Handlers for the 'term' and 'search' commands."""
from __future__ import annotations

from rich.console import Console

from ..cli_utils import build_sequence
from ..config import SearchSettings
from ..models import SearchResult

console = Console()


class TermHandler:
    def run(self, settings: SearchSettings, rank: int) -> int:
        sequence = build_sequence(settings)
        value = sequence.term_at(rank)
        console.print(
            f"u({rank}) = [bold]{value}[/bold] "
            f"[dim]({settings.relation}, initial terms {list(settings.initial_terms)})[/dim]"
        )
        return value


class SearchHandler:
    def run(self, settings: SearchSettings) -> SearchResult:
        sequence = build_sequence(settings)
        result = sequence.search_until(settings.target, max_steps=settings.max_steps)
        console.rule("Search")
        console.print(f"Relation: [bold]{settings.relation}[/bold]")
        console.print(f"Initial terms: {list(settings.initial_terms)}")
        console.print(f"Target: {settings.target}")
        console.print(f"Cycle length: [bold]{result.cycle_length}[/bold]")
        console.print(f"Max term: [bold]{result.max_term}[/bold]")
        return result
