"""Shared helpers for CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

import typer
from rich.logging import RichHandler

from .config import SearchSettings, load_search_settings
from .relations import get_relation
from .sequence import Sequence


def parse_terms(text: str) -> Tuple[int, ...]:
    """Parse a comma or whitespace separated list of integers."""
    parts = [part for part in text.replace(",", " ").split() if part]
    try:
        return tuple(int(part) for part in parts)
    except ValueError:
        raise typer.BadParameter(f"Initial terms must be integers, got '{text}'") from None


def ensure_output_dir(output: Optional[Path]) -> None:
    if output and not output.exists():
        output.mkdir(parents=True)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def resolve_settings(
    config: Optional[Path],
    preset: str,
    **overrides,
) -> SearchSettings:
    """Load the preset from config and apply command-line overrides."""
    terms = overrides.pop("terms", None)
    if terms is not None:
        overrides["initial_terms"] = parse_terms(terms)
    settings = load_search_settings(str(config) if config else None, tag=preset)
    return settings.override(**overrides)


def build_sequence(settings: SearchSettings) -> Sequence:
    return Sequence(get_relation(settings.relation), settings.initial_terms)
