"""Cross-check variables used in code against a declared env list."""

from dataclasses import dataclass, field


@dataclass
class Reconciliation:
    missing: list[str] = field(default_factory=list)  # Used but not declared, sorted
    unused: list[str] = field(default_factory=list)  # Declared but not used, sorted

    @property
    def missing_set(self) -> set[str]:
        return set(self.missing)


def reconcile(used_keys: set[str], provided_keys: set[str]) -> Reconciliation:
    """Compute missing and unused keys.

    With no declared keys there is nothing to compare against, so both
    lists are empty rather than every used key being reported missing.
    """
    if not provided_keys:
        return Reconciliation()
    return Reconciliation(
        missing=sorted(used_keys - provided_keys),
        unused=sorted(provided_keys - used_keys),
    )
