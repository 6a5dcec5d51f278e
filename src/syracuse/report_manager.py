import json
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

import yaml

from .models import ResultTable

RESULT_DIR = Path(__file__).resolve().parents[2] / "results"


def build_batch_report(
    table: ResultTable,
    *,
    relation: str,
    target: int,
    step: int,
    run_id: Optional[str] = None,
) -> dict:
    """Turn a result table into a JSON/YAML-serialisable report."""
    rows = [
        {"initial_terms": list(key), **result.to_dict()}
        for key, result in table.items()
    ]
    summary = {"runs": len(rows)}
    longest = table.longest_cycle()
    if longest is not None:
        summary["longest_cycle"] = {"initial_terms": list(longest[0]), **longest[1].to_dict()}
    peak = table.highest_peak()
    if peak is not None:
        summary["highest_peak"] = {"initial_terms": list(peak[0]), **peak[1].to_dict()}
    return {
        "run_id": run_id or uuid.uuid4().hex,
        "date": datetime.now().isoformat(timespec="seconds"),
        "relation": relation,
        "target": target,
        "step": step,
        "summary": summary,
        "results": rows,
    }


class ReportManager:
    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root else RESULT_DIR
        self.reports_dir = self.root / "reports"
        self.logs_dir = self.root / "logs"

    def persist_report(self, report: dict, fmt: str = "json") -> Path:
        if fmt not in {"json", "yaml"}:
            raise ValueError(f"Unsupported report format '{fmt}'")
        self.reports_dir.mkdir(parents=True, exist_ok=True)
        report_id = report.get("run_id", uuid.uuid4().hex)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        suffix = "yml" if fmt == "yaml" else "json"
        path = self.reports_dir / f"report_{timestamp}_{report_id}.{suffix}"
        if fmt == "yaml":
            text = yaml.safe_dump(report, sort_keys=False, allow_unicode=True)
        else:
            text = json.dumps(report, indent=2, ensure_ascii=False)
        path.write_text(text, encoding="utf-8")
        return path

    def persist_log(self, report: dict, report_stem: str) -> Path:
        """Write a human-readable summary of the report (one log == one batch)."""
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        log_path = self.logs_dir / f"{report_stem}.log"
        lines = []

        lines.append("Syracuse Batch Report")
        lines.append("=====================")
        lines.append(f"Date: {report.get('date', datetime.now().isoformat(timespec='seconds'))}")
        lines.append(f"Run ID: {report.get('run_id')}")
        lines.append(f"Relation: {report.get('relation')}")
        lines.append(f"Target: {report.get('target')}")
        lines.append(f"Step: {report.get('step')}")
        lines.append("")

        summary = report.get("summary", {})
        lines.append("Summary")
        lines.append("-------")
        lines.append(f"Runs: {summary.get('runs', 0)}")
        for label, key in (("Longest cycle", "longest_cycle"), ("Highest peak", "highest_peak")):
            entry = summary.get(key)
            if entry:
                lines.append(
                    f"{label}: {entry['initial_terms']} "
                    f"(cycle {entry['cycle_length']}, max {entry['max_term']})"
                )
        lines.append("")

        lines.append("Results")
        lines.append("-------")
        rows = report.get("results", [])
        if rows:
            lines.append(f"{'Initial terms':<30} | {'Cycle':>8} | {'Max term'}")
            lines.append("-" * 60)
            for row in rows:
                terms = ", ".join(str(term) for term in row["initial_terms"])
                lines.append(f"{terms:<30} | {row['cycle_length']:>8} | {row['max_term']}")
        else:
            lines.append("No results.")

        log_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return log_path
