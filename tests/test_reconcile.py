"""Tests for declared-vs-used reconciliation."""

from reconcile import Reconciliation, reconcile


class TestReconcile:
    def test_missing_and_unused(self):
        result = reconcile({"A", "B", "C"}, {"B", "C", "D"})
        assert result.missing == ["A"]
        assert result.unused == ["D"]

    def test_sorted_output(self):
        result = reconcile({"Z", "M", "A", "SHARED"}, {"Y", "B", "SHARED"})
        assert result.missing == ["A", "M", "Z"]
        assert result.unused == ["B", "Y"]

    def test_no_declared_keys_skips_reconciliation(self):
        result = reconcile({"A", "B"}, set())
        assert result.missing == []
        assert result.unused == []
        assert result.missing_set == set()

    def test_nothing_used_everything_unused(self):
        result = reconcile(set(), {"DB_URL"})
        assert result.missing == []
        assert result.unused == ["DB_URL"]

    def test_exact_match(self):
        assert reconcile({"A"}, {"A"}) == Reconciliation()

    def test_case_sensitive(self):
        result = reconcile({"API_KEY"}, {"api_key"})
        assert result.missing == ["API_KEY"]
        assert result.unused == ["api_key"]

    def test_set_difference_identities(self, subtests):
        cases = [
            ({"A", "B"}, {"B"}),
            ({"A"}, {"A", "B", "C"}),
            (set(), {"X"}),
            ({"X", "Y"}, {"Y", "X"}),
        ]
        for used, declared in cases:
            with subtests.test(used=sorted(used), declared=sorted(declared)):
                result = reconcile(used, declared)
                assert set(result.missing) == used - declared
                assert set(result.unused) == declared - used
                assert result.missing_set == used - declared
