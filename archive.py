"""Resolve the scan target: a project directory or a .zip of one.

Zip files are extracted to a temporary directory that is removed when the
prepare_target() context exits, including on errors.
"""

import logging
import tempfile
import zipfile
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)

# Resource-fork folder added by macOS Finder when compressing
_ARCHIVE_METADATA_DIRS = {"__MACOSX"}


class TargetNotFoundError(Exception):
    """Raised when the scan target path does not exist."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Target not found: {path}")


@dataclass
class ScanTarget:
    root: Path  # Directory to scan
    display: str  # What the user passed in, resolved; echoed into reports


def is_zip_file(path: str | Path) -> bool:
    return str(path).lower().endswith(".zip")


def pick_project_root(extract_dir: Path) -> Path:
    """Use the single wrapping folder if the archive has one, else the extraction dir."""
    entries = [e for e in extract_dir.iterdir() if e.name not in _ARCHIVE_METADATA_DIRS]
    if len(entries) == 1 and entries[0].is_dir():
        return entries[0]
    return extract_dir


def extract_zip(archive: Path, dest: Path) -> None:
    """Extract archive into dest, refusing members that would land outside it."""
    dest_resolved = dest.resolve()
    with zipfile.ZipFile(archive) as zf:
        for member in zf.namelist():
            target = (dest_resolved / member).resolve()
            if not target.is_relative_to(dest_resolved):
                raise ValueError(f"Unsafe path in archive {archive.name}: {member}")
        zf.extractall(dest_resolved)


@contextmanager
def prepare_target(input_path: str | Path) -> Iterator[ScanTarget]:
    """Yield the directory to scan for input_path.

    Raises TargetNotFoundError if input_path does not exist. Extraction
    errors (zipfile.BadZipFile, unsafe member paths) propagate after the
    temporary directory has been removed.
    """
    abs_input = Path(input_path).resolve()
    if not abs_input.exists():
        raise TargetNotFoundError(abs_input)

    if not is_zip_file(abs_input):
        yield ScanTarget(root=abs_input, display=str(abs_input))
        return

    with tempfile.TemporaryDirectory(prefix="env-auditor-") as tmp:
        tmp_path = Path(tmp)
        log.debug("Extracting %s to %s", abs_input, tmp_path)
        extract_zip(abs_input, tmp_path)
        yield ScanTarget(root=pick_project_root(tmp_path), display=str(abs_input))
