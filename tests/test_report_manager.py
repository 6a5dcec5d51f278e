import json
from pathlib import Path

import yaml

from syracuse.relations import get_relation
from syracuse.report_manager import ReportManager, build_batch_report
from syracuse.sequence import Sequence


def _report():
    table = Sequence(get_relation("syracuse"), [6]).search_many_until(3, 1, 2)
    return build_batch_report(table, relation="syracuse", target=1, step=2, run_id="abc123")


def test_build_batch_report() -> None:
    report = _report()
    assert report["run_id"] == "abc123"
    assert [row["initial_terms"] for row in report["results"]] == [[6], [8], [10]]
    assert report["results"][0] == {"initial_terms": [6], "cycle_length": 8, "max_term": 16}
    assert report["summary"]["runs"] == 3
    assert report["summary"]["longest_cycle"]["initial_terms"] == [6]


def test_persist_json_report_and_log(tmp_path: Path) -> None:
    manager = ReportManager(root=tmp_path)
    report = _report()
    path = manager.persist_report(report)
    assert path.parent == tmp_path / "reports"
    assert path.name.endswith("_abc123.json")
    assert json.loads(path.read_text(encoding="utf-8"))["results"] == report["results"]

    log_path = manager.persist_log(report, path.stem)
    text = log_path.read_text(encoding="utf-8")
    assert "Relation: syracuse" in text
    assert "Longest cycle: [6] (cycle 8, max 16)" in text


def test_persist_yaml_report(tmp_path: Path) -> None:
    manager = ReportManager(root=tmp_path)
    path = manager.persist_report(_report(), fmt="yaml")
    assert path.suffix == ".yml"
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert data["summary"]["highest_peak"]["max_term"] == 16
