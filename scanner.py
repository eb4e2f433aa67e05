"""Source tree scanning for process.env references.

Files are matched as raw text, never parsed. Each match becomes an
Occurrence carrying two context flags used by the risk rules:

- is_client_file: the file contains a "use client" directive anywhere
- is_server_route_file: the path follows the Next.js API route layout
"""

import bisect
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = ("js", "jsx", "ts", "tsx")
DEFAULT_IGNORE_DIRS = ("node_modules", ".next", "dist", "build", ".git")

_CLIENT_MARKERS = ('"use client"', "'use client'")
_API_PREFIXES = ("app/api/", "src/app/api/")
_ROUTE_MARKERS = ("/route.ts", "/route.js")

# process.env.NAME and process.env["NAME"] / process.env['NAME']
_DOT_ACCESS = re.compile(r"process\.env\.([A-Z0-9_]+)")
_BRACKET_ACCESS = re.compile(r"process\.env\[['\"]([A-Z0-9_]+)['\"]\]")


@dataclass(frozen=True)
class Occurrence:
    """One textual reference to an env var."""

    file: str  # Relative path, '/' separated
    line: int  # 1-based
    is_client_file: bool
    is_server_route_file: bool

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "line": self.line,
            "is_client_file": self.is_client_file,
            "is_server_route_file": self.is_server_route_file,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Occurrence":
        return cls(
            file=d["file"],
            line=d["line"],
            is_client_file=d.get("is_client_file", False),
            is_server_route_file=d.get("is_server_route_file", False),
        )


def is_client_file(text: str) -> bool:
    """True if the directive appears anywhere in the text, not only at the top."""
    return any(marker in text for marker in _CLIENT_MARKERS)


def is_server_route_file(rel_path: str) -> bool:
    return rel_path.startswith(_API_PREFIXES) or any(m in rel_path for m in _ROUTE_MARKERS)


def newline_offsets(text: str) -> list[int]:
    """Offsets of every newline character in text, ascending."""
    return [m.start() for m in re.finditer("\n", text)]


def line_number_at(offsets: list[int], index: int) -> int:
    """1-based line number of the character at index.

    Equals the count of newlines before index, plus one.
    """
    return bisect.bisect_left(offsets, index) + 1


def extract_occurrences(text: str, rel_path: str) -> list[tuple[str, Occurrence]]:
    """Find every env var reference in one file.

    Returns (key, occurrence) pairs: all dot-access matches top to bottom,
    then all bracket-access matches top to bottom. A line that uses both
    forms yields two entries.
    """
    client = is_client_file(text)
    server_route = is_server_route_file(rel_path)
    offsets = newline_offsets(text)

    found = []
    for pattern in (_DOT_ACCESS, _BRACKET_ACCESS):
        for match in pattern.finditer(text):
            occurrence = Occurrence(
                file=rel_path,
                line=line_number_at(offsets, match.start()),
                is_client_file=client,
                is_server_route_file=server_route,
            )
            found.append((match.group(1), occurrence))
    return found


def list_source_files(
    root: str | Path,
    extensions: tuple[str, ...] | list[str] = DEFAULT_EXTENSIONS,
    ignore_dirs: tuple[str, ...] | list[str] = DEFAULT_IGNORE_DIRS,
) -> list[str]:
    """List matching source files under root as sorted relative posix paths.

    Dot-files and dot-directories are included unless named in ignore_dirs.
    Sorting keeps the scan order, and so the first-occurrence citations,
    reproducible across runs and platforms.
    """
    root = Path(root)
    suffixes = {f".{ext.lstrip('.')}" for ext in extensions}
    ignored = set(ignore_dirs)

    files = []
    for dirpath, dirnames, filenames in os.walk(root):
        # Prune in place so ignored trees (node_modules) are never walked
        dirnames[:] = [d for d in dirnames if d not in ignored]
        base = Path(dirpath)
        for name in filenames:
            path = base / name
            if path.suffix in suffixes:
                files.append(path.relative_to(root).as_posix())
    return sorted(files)


def build_usage_index(root: str | Path, files: list[str]) -> dict[str, list[Occurrence]]:
    """Scan files (relative to root) in the given order.

    Keys appear in discovery order. Files that cannot be opened are skipped;
    undecodable bytes are replaced, so a stray non-UTF-8 byte never hides
    the rest of the file. Line endings are kept as-is, so only '\\n' ends a line.
    """
    root = Path(root)
    usage: dict[str, list[Occurrence]] = {}
    for rel_file in files:
        try:
            with open(root / rel_file, encoding="utf-8", errors="replace", newline="") as f:
                text = f.read()
        except OSError as exc:
            log.debug("Skipping unreadable file %s: %s", rel_file, exc)
            continue

        for key, occurrence in extract_occurrences(text, rel_file):
            usage.setdefault(key, []).append(occurrence)
    return usage
