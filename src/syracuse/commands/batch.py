"""Handler for the 'batch' command."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table

from ..cli_utils import build_sequence, ensure_output_dir
from ..config import SearchSettings
from ..models import ResultTable
from ..report_manager import ReportManager, build_batch_report

console = Console()


class BatchHandler:
    def run(self, settings: SearchSettings, output: Optional[Path], fmt: str) -> ResultTable:
        sequence = build_sequence(settings)
        console.print(
            f"[bold]Running {settings.count} searches[/bold] for {settings.target} "
            f"with '{settings.relation}' from {list(settings.initial_terms)} (step {settings.step})"
        )

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("Searching...", total=settings.count)

            def _advance(key, result) -> None:
                progress.update(task, advance=1, description=f"Done {list(key)}")

            table = sequence.search_many_until(
                settings.count,
                settings.target,
                settings.step,
                max_workers=settings.max_workers,
                timeout=settings.timeout,
                max_steps=settings.max_steps,
                on_result=_advance,
            )

        self._print_table(table)

        if output is not None:
            ensure_output_dir(output)
            report = build_batch_report(
                table,
                relation=settings.relation,
                target=settings.target,
                step=settings.step,
            )
            manager = ReportManager(root=output)
            report_path = manager.persist_report(report, fmt=fmt)
            log_path = manager.persist_log(report, report_path.stem)
            console.print(f"Report saved at: [blue]{report_path}[/blue]")
            console.print(f"Log saved at: [blue]{log_path}[/blue]")

        return table

    @staticmethod
    def _print_table(table: ResultTable) -> None:
        view = Table(title="Search results")
        view.add_column("Initial terms")
        view.add_column("Cycle length", justify="right")
        view.add_column("Max term", justify="right")
        for key, result in table.items():
            view.add_row(", ".join(str(term) for term in key), str(result.cycle_length), str(result.max_term))
        console.print(view)

        longest = table.longest_cycle()
        if longest is not None:
            console.print(f"Longest cycle: {list(longest[0])} ({longest[1].cycle_length} steps)")
            peak = table.highest_peak()
            console.print(f"Highest peak: {list(peak[0])} (max {peak[1].max_term})")
