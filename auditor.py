"""Env auditor: main entry point.

Scans a Next.js project (directory or .zip) for process.env references,
cross-checks them against an optional KEY=VALUE env list, and flags
secret-like variables that may reach browser code.

Usage:
    env-auditor /path/to/project /path/to/env.txt
    env-auditor /path/to/project.zip /path/to/env.txt
    env-auditor /path/to/project --output-dir audit/ --verbose
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from archive import TargetNotFoundError, prepare_target
from audit_config import load_config
from env_lists import load_env_keys
from reconcile import reconcile
from reports.artifacts import write_env_example, write_html_report, write_json_report
from reports.console import print_report
from reports.schemas import AuditReport, Totals
from risk import classify_risks
from scanner import DEFAULT_EXTENSIONS, DEFAULT_IGNORE_DIRS, build_usage_index, list_source_files

log = logging.getLogger("env-auditor")

USAGE = """Usage:
  env-auditor /path/to/project /path/to/env.txt
  env-auditor /path/to/project.zip /path/to/env.txt"""


def run_audit(
    root: str | Path,
    scanned_input: str,
    provided_keys: set[str] | None = None,
    extensions: tuple[str, ...] | list[str] = DEFAULT_EXTENSIONS,
    ignore_dirs: tuple[str, ...] | list[str] = DEFAULT_IGNORE_DIRS,
) -> AuditReport:
    """Scan root and compute the full report.

    Args:
        root: Directory to scan.
        scanned_input: Path echoed into the report (the zip path for archives).
        provided_keys: Declared env var names; None or empty skips reconciliation.
        extensions: Source file extensions to scan.
        ignore_dirs: Directory names to skip.

    Returns:
        The computed AuditReport. Nothing is written to disk.
    """
    files = list_source_files(root, extensions=extensions, ignore_dirs=ignore_dirs)
    log.info("Scanning %d file(s) under %s", len(files), root)
    usage = build_usage_index(root, files)

    used_keys = set(usage)
    result = reconcile(used_keys, provided_keys or set())
    risky = classify_risks(usage, result.missing_set)

    return AuditReport(
        scanned_input=scanned_input,
        totals=Totals(
            files_scanned=len(files),
            env_vars_found=len(used_keys),
            missing_count=len(result.missing),
            unused_count=len(result.unused),
            risky_count=len(risky),
        ),
        env_vars_used=sorted(used_keys),
        missing=result.missing,
        unused=result.unused,
        risky=risky,
        locations_by_env_var=usage,
    )


def write_artifacts(report: AuditReport, output_config: dict, output_dir: Path) -> None:
    """Write JSON, .env example and HTML artifacts, printing the console report in between."""
    json_path = write_json_report(report, output_dir / output_config["json_report"])
    print(f"✅ Wrote {json_path}")
    print_report(report)

    example_path = write_env_example(report, output_dir / output_config["env_example"])
    print(f"\n✅ Wrote {example_path}")

    html_path = write_html_report(report, output_dir / output_config["html_report"])
    print(f"✅ Wrote {html_path}")


def cli(argv: list[str] | None = None) -> int:
    """Run the auditor; returns the process exit status."""
    parser = argparse.ArgumentParser(
        prog="env-auditor",
        description="Audit process.env usage in a Next.js project",
    )
    parser.add_argument("target", nargs="?", help="Project directory or .zip archive")
    parser.add_argument("env_file", nargs="?", help="Declared env list (KEY=VALUE per line)")
    parser.add_argument("--config", help="Path to config.toml (default: bundled config.toml)")
    parser.add_argument("--output-dir", help="Directory for report artifacts (default: cwd)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    if not args.target:
        print(USAGE)
        return 1

    try:
        config = load_config(args.config)
        output_dir = Path(args.output_dir or config["output"]["dir"])

        with prepare_target(args.target) as target:
            provided_keys: set[str] = set()
            if args.env_file:
                provided_keys = load_env_keys(Path(args.env_file).resolve())
                log.info("Loaded %d declared key(s) from %s", len(provided_keys), args.env_file)

            report = run_audit(
                target.root,
                target.display,
                provided_keys=provided_keys,
                extensions=config["scan"]["extensions"],
                ignore_dirs=config["scan"]["ignore_dirs"],
            )
        write_artifacts(report, config["output"], output_dir)
    except TargetNotFoundError as exc:
        print(f"❌ {exc}")
        return 1
    except Exception:
        log.exception("Audit failed")
        return 1

    return 0


def main():
    """Entry point."""
    sys.exit(cli())


if __name__ == "__main__":
    main()
