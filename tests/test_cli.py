import json
from pathlib import Path

from typer.testing import CliRunner

from syracuse.cli import app

runner = CliRunner()


def test_term_command() -> None:
    result = runner.invoke(app, ["term", "6", "--relation", "fibonacci", "--terms", "0,1"])
    assert result.exit_code == 0
    assert "u(6) = 8" in result.output


def test_search_command() -> None:
    result = runner.invoke(app, ["search", "--relation", "syracuse", "--terms", "6", "--target", "1"])
    assert result.exit_code == 0
    assert "Cycle length: 8" in result.output
    assert "Max term: 16" in result.output


def test_search_arity_mismatch_exits_with_error() -> None:
    result = runner.invoke(app, ["search", "--relation", "fibonacci", "--terms", "6"])
    assert result.exit_code == 1
    assert "expects 2 initial terms" in result.output


def test_unknown_relation_exits_with_error() -> None:
    result = runner.invoke(app, ["term", "1", "--relation", "nope", "--terms", "1"])
    assert result.exit_code == 1
    assert "Unknown relation" in result.output


def test_batch_command_writes_report(tmp_path: Path) -> None:
    result = runner.invoke(
        app,
        [
            "batch",
            "--relation", "syracuse",
            "--terms", "6",
            "--target", "1",
            "--count", "3",
            "--step", "2",
            "--output", str(tmp_path),
        ],
    )
    assert result.exit_code == 0, result.output
    reports = list((tmp_path / "reports").glob("report_*.json"))
    assert len(reports) == 1
    payload = json.loads(reports[0].read_text(encoding="utf-8"))
    assert [row["initial_terms"] for row in payload["results"]] == [[6], [8], [10]]
    assert len(list((tmp_path / "logs").glob("*.log"))) == 1


def test_batch_rejects_unknown_format() -> None:
    result = runner.invoke(app, ["batch", "--format", "csv"])
    assert result.exit_code == 1


def test_relations_command() -> None:
    result = runner.invoke(app, ["relations"])
    assert result.exit_code == 0
    assert "tribonacci" in result.output


def test_term_command_deep_rank() -> None:
    result = runner.invoke(app, ["term", "600", "--relation", "syracuse", "--terms", "27"])
    assert result.exit_code == 0, result.output
    assert "u(600) = 1" in result.output
