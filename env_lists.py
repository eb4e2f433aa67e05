"""Parsing of declared environment variable lists (KEY=VALUE files).

Only the key names matter; values are ignored. Malformed lines are skipped.
"""

from pathlib import Path


def parse_env_keys(text: str) -> set[str]:
    """Return the set of keys declared in KEY=VALUE text.

    Blank lines, lines starting with '#', and lines without '=' are skipped.
    The key is everything before the first '=', trimmed.
    """
    keys: set[str] = set()
    for raw in text.split("\n"):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        eq = line.find("=")
        if eq == -1:
            continue
        key = line[:eq].strip()
        if key:
            keys.add(key)
    return keys


def load_env_keys(path: str | Path) -> set[str]:
    """Read an env list file and return its declared keys."""
    return parse_env_keys(Path(path).read_text(encoding="utf-8"))
