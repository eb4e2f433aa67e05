"""Report artifacts for an env audit: JSON dump, console summary, HTML, .env example."""

from scanner import Occurrence


def format_location(occurrences: list[Occurrence] | None) -> str:
    """Format the first occurrence as "file:line", or "" if there is none."""
    if not occurrences:
        return ""
    first = occurrences[0]
    return f"{first.file}:{first.line}"
