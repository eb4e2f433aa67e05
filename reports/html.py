"""HTML rendering of an audit report with Jinja2.

Autoescaping is on, so every interpolated value has & < > " ' escaped.
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from reports import format_location
from reports.schemas import AuditReport

TEMPLATES_DIR = Path(__file__).parent / "templates"

env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    keep_trailing_newline=True,
)


def render_html(report: AuditReport) -> str:
    missing = [
        {"key": key, "where": format_location(report.locations_by_env_var.get(key))}
        for key in report.missing
    ]
    template = env.get_template("report.html")
    return template.render(report=report, totals=report.totals, missing=missing)
