"""Heuristic risk rules for env var usage in Next.js projects.

Each rule looks at one variable and its occurrences and returns zero or
more findings. Rules are independent: a variable can trigger several, and
within a rule only the first matching occurrence is cited.

Variables already reported as missing are not risk-checked.
"""

import re
from dataclasses import dataclass
from enum import Enum

from scanner import Occurrence

PUBLIC_PREFIX = "NEXT_PUBLIC_"

_SENSITIVE_NAME = re.compile(r"KEY|TOKEN|SECRET|PRIVATE|PASSWORD|PASS|AUTH", re.IGNORECASE)

_EXPOSED_PREFIXES = ("app/", "pages/", "src/app/", "src/pages/")
_API_PREFIXES = ("app/api/", "src/app/api/")
_ROUTE_MARKERS = ("/route.ts", "/route.js")


class RiskKind(Enum):
    SENSITIVE_NAME_IN_EXPOSED_PATH = "sensitive_name_in_exposed_path"
    PUBLIC_NAME_LOOKS_SENSITIVE = "public_name_looks_sensitive"
    NON_PUBLIC_IN_CLIENT_FILE = "non_public_in_client_file"
    PUBLIC_ONLY_IN_SERVER_ROUTES = "public_only_in_server_routes"


_TITLES = {
    RiskKind.SENSITIVE_NAME_IN_EXPOSED_PATH:
        "Secret-like env used in potentially client-exposed code (heuristic)",
    RiskKind.PUBLIC_NAME_LOOKS_SENSITIVE: "Public env name looks sensitive",
    RiskKind.NON_PUBLIC_IN_CLIENT_FILE: "Possible secret used in client component",
    RiskKind.PUBLIC_ONLY_IN_SERVER_ROUTES: "NEXT_PUBLIC_ used only in server code",
}


@dataclass
class RiskFinding:
    kind: RiskKind
    key: str
    file: str
    line: int
    rationale: str

    @property
    def title(self) -> str:
        return _TITLES[self.kind]

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "title": self.title,
            "key": self.key,
            "file": self.file,
            "line": self.line,
            "rationale": self.rationale,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "RiskFinding":
        return cls(
            kind=RiskKind(d["kind"]),
            key=d["key"],
            file=d["file"],
            line=d["line"],
            rationale=d.get("rationale", ""),
        )


def looks_sensitive(key: str) -> bool:
    """Substring match, so MONKEY and PASSPORT count too."""
    return _SENSITIVE_NAME.search(key) is not None


def is_public(key: str) -> bool:
    return key.startswith(PUBLIC_PREFIX)


def is_likely_client_exposed_path(rel_file: str) -> bool:
    """True for files under app/ or pages/ (optionally in src/) that are not API routes."""
    f = rel_file.replace("\\", "/")
    in_app_or_pages = f.startswith(_EXPOSED_PREFIXES)
    is_api = f.startswith(_API_PREFIXES) or any(m in f for m in _ROUTE_MARKERS)
    return in_app_or_pages and not is_api


class RiskRule:
    """Base class: subclasses set kind and rationale and implement evaluate()."""

    kind: RiskKind
    rationale: str

    def evaluate(self, key: str, occurrences: list[Occurrence]) -> list[RiskFinding]:
        raise NotImplementedError

    def _finding(self, key: str, occurrence: Occurrence) -> RiskFinding:
        return RiskFinding(
            kind=self.kind,
            key=key,
            file=occurrence.file,
            line=occurrence.line,
            rationale=self.rationale,
        )


class SensitiveNameInExposedPath(RiskRule):
    kind = RiskKind.SENSITIVE_NAME_IN_EXPOSED_PATH
    rationale = (
        "Name looks like a secret (KEY/TOKEN/SECRET/PASSWORD). Because it's referenced "
        "in app/ or pages/, it may end up in browser code depending on how the "
        "component is used."
    )

    def evaluate(self, key, occurrences):
        if not looks_sensitive(key):
            return []
        for occ in occurrences:
            if is_likely_client_exposed_path(occ.file):
                return [self._finding(key, occ)]
        return []


class PublicNameLooksSensitive(RiskRule):
    kind = RiskKind.PUBLIC_NAME_LOOKS_SENSITIVE
    rationale = (
        "NEXT_PUBLIC_* can be exposed to the browser; this looks like it might be a secret."
    )

    def evaluate(self, key, occurrences):
        if is_public(key) and looks_sensitive(key):
            return [self._finding(key, occurrences[0])]
        return []


class NonPublicInClientFile(RiskRule):
    kind = RiskKind.NON_PUBLIC_IN_CLIENT_FILE
    rationale = (
        "Referenced inside a file marked 'use client'. Secrets should not be used in "
        "client components."
    )

    def evaluate(self, key, occurrences):
        if is_public(key):
            return []
        client = [occ for occ in occurrences if occ.is_client_file]
        if not client:
            return []
        return [self._finding(key, client[0])]


class PublicOnlyInServerRoutes(RiskRule):
    kind = RiskKind.PUBLIC_ONLY_IN_SERVER_ROUTES
    rationale = (
        "NEXT_PUBLIC_* is meant for browser-exposed vars. If it's only used in server "
        "routes, it may be misnamed or unintended."
    )

    def evaluate(self, key, occurrences):
        if not occurrences or not is_public(key):
            return []
        if all(occ.is_server_route_file for occ in occurrences):
            return [self._finding(key, occurrences[0])]
        return []


DEFAULT_RULES: tuple[RiskRule, ...] = (
    SensitiveNameInExposedPath(),
    PublicNameLooksSensitive(),
    NonPublicInClientFile(),
    PublicOnlyInServerRoutes(),
)


def classify_risks(
    usage: dict[str, list[Occurrence]],
    missing_set: set[str],
    rules: tuple[RiskRule, ...] | list[RiskRule] = DEFAULT_RULES,
) -> list[RiskFinding]:
    """Run every rule over every used variable not already reported missing.

    Findings are ordered by variable discovery order, then by rule order.
    """
    findings: list[RiskFinding] = []
    for key, occurrences in usage.items():
        if key in missing_set:
            continue
        for rule in rules:
            findings.extend(rule.evaluate(key, occurrences))
    return findings
