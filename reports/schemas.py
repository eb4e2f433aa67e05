"""Dataclasses for the structured audit report.

All types support JSON serialization via to_dict() / from_dict().
"""

from dataclasses import dataclass, field

from risk import RiskFinding
from scanner import Occurrence


@dataclass
class Totals:
    files_scanned: int = 0
    env_vars_found: int = 0
    missing_count: int = 0
    unused_count: int = 0
    risky_count: int = 0

    def to_dict(self) -> dict:
        return {
            "files_scanned": self.files_scanned,
            "env_vars_found": self.env_vars_found,
            "missing_count": self.missing_count,
            "unused_count": self.unused_count,
            "risky_count": self.risky_count,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Totals":
        return cls(
            files_scanned=d.get("files_scanned", 0),
            env_vars_found=d.get("env_vars_found", 0),
            missing_count=d.get("missing_count", 0),
            unused_count=d.get("unused_count", 0),
            risky_count=d.get("risky_count", 0),
        )


@dataclass
class AuditReport:
    """Everything computed in one scan."""

    scanned_input: str  # Resolved target path as given (zip path, not the temp dir)
    totals: Totals
    env_vars_used: list[str] = field(default_factory=list)  # Sorted
    missing: list[str] = field(default_factory=list)  # Sorted
    unused: list[str] = field(default_factory=list)  # Sorted
    risky: list[RiskFinding] = field(default_factory=list)
    # Variable -> occurrences, in discovery order
    locations_by_env_var: dict[str, list[Occurrence]] = field(default_factory=dict)

    @property
    def has_issues(self) -> bool:
        return bool(self.missing or self.risky or self.unused)

    def to_dict(self) -> dict:
        return {
            "scanned_input": self.scanned_input,
            "totals": self.totals.to_dict(),
            "env_vars_used": self.env_vars_used,
            "missing": self.missing,
            "unused": self.unused,
            "risky": [r.to_dict() for r in self.risky],
            "locations_by_env_var": {
                key: [occ.to_dict() for occ in occurrences]
                for key, occurrences in self.locations_by_env_var.items()
            },
        }

    @classmethod
    def from_dict(cls, d: dict) -> "AuditReport":
        return cls(
            scanned_input=d["scanned_input"],
            totals=Totals.from_dict(d.get("totals", {})),
            env_vars_used=d.get("env_vars_used", []),
            missing=d.get("missing", []),
            unused=d.get("unused", []),
            risky=[RiskFinding.from_dict(r) for r in d.get("risky", [])],
            locations_by_env_var={
                key: [Occurrence.from_dict(o) for o in occurrences]
                for key, occurrences in d.get("locations_by_env_var", {}).items()
            },
        )
