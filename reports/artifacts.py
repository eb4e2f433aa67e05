"""Write report artifacts to disk. Existing files are overwritten."""

import json
from pathlib import Path

from reports.html import render_html
from reports.schemas import AuditReport


def format_env_example(keys: list[str]) -> str:
    """One "KEY=" line per key, sorted, with a trailing newline."""
    return "\n".join(f"{key}=" for key in sorted(keys)) + "\n"


def write_json_report(report: AuditReport, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def load_json_report(path: Path) -> AuditReport:
    with open(path, encoding="utf-8") as f:
        return AuditReport.from_dict(json.load(f))


def write_env_example(report: AuditReport, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_env_example(report.env_vars_used), encoding="utf-8")
    return path


def write_html_report(report: AuditReport, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_html(report), encoding="utf-8")
    return path
