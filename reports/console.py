"""Console rendering of an audit report."""

from reports import format_location
from reports.schemas import AuditReport


def format_totals(report: AuditReport) -> str:
    t = report.totals
    return (
        f"Files: {t.files_scanned}  Env vars: {t.env_vars_found}  "
        f"Missing: {t.missing_count}  Unused: {t.unused_count}  Risky: {t.risky_count}"
    )


def format_findings(report: AuditReport) -> str:
    """Format the three-band findings section.

    CRITICAL lists missing vars, WARNINGS lists risk findings, INFO lists
    unused vars. Empty bands are omitted.
    """
    lines = ["=== ENV AUDIT REPORT ==="]

    if report.missing:
        lines.append("")
        lines.append("CRITICAL (will likely break something):")
        for key in report.missing:
            where = format_location(report.locations_by_env_var.get(key))
            suffix = f" ({where})" if where else ""
            lines.append(f" - Missing in env list: {key}{suffix}")

    if report.risky:
        lines.append("")
        lines.append("WARNINGS (possible security issue):")
        for r in report.risky:
            lines.append(f" - {r.title}: {r.key} ({r.file}:{r.line})")

    if report.unused:
        lines.append("")
        lines.append("INFO (cleanup):")
        for key in report.unused:
            lines.append(f" - Set but not used in code: {key}")

    if not report.has_issues:
        lines.append("")
        lines.append("No issues found 🎉")

    return "\n".join(lines)


def print_report(report: AuditReport) -> None:
    """Print totals and findings to stdout."""
    print(f"Summary: {format_totals(report)}")
    print()
    print(format_findings(report))
