"""Tests for release selection policies."""
from versioning.selector import VersionSelector, select_by_prefix, select_exact


KNOWN = ["1.0", "1.2.3", "1.2.4"]


class TestExactMatch:
    def test_present_version_resolves(self):
        assert select_exact("1.2.3", KNOWN) == "1.2.3"

    def test_absent_version_is_unresolved(self):
        assert select_exact("1.2.5", KNOWN) is None

    def test_selector_defaults_to_exact(self):
        selection = VersionSelector().select("1.2", KNOWN)
        assert not selection.resolved
        assert not selection.range_matching


class TestPrefixMatch:
    def test_last_prefix_match_wins_in_source_order(self):
        assert select_by_prefix("1.2", ["1.2.3", "1.2.30"]) == "1.2.30"

    def test_order_sensitive_selection(self):
        """Source order decides, not numeric order: an older version listed last wins."""
        assert select_by_prefix("1.2", ["1.2.30", "1.2.3"]) == "1.2.3"

    def test_raw_string_prefix_crosses_component_boundary(self):
        assert select_by_prefix("4.2", ["4.2.1", "4.20.0"]) == "4.20.0"

    def test_snapshots_are_never_selected(self):
        assert select_by_prefix("1.2", ["1.2.3", "1.2.4-SNAPSHOT"]) == "1.2.3"

    def test_no_match(self):
        assert select_by_prefix("2.0", KNOWN) is None


class TestVersionSelector:
    def test_range_without_padding(self):
        selection = VersionSelector(allow_range_matching=True).select("1.2", ["1.2.3", "1.2.30"])
        assert selection.target == "1.2.30"
        assert selection.prefix == "1.2"
        assert not selection.padded

    def test_padding_narrows_the_match(self):
        selector = VersionSelector(allow_range_matching=True, pad_version_for_range_matching=True)
        selection = selector.select("1.2", ["1.2.3", "1.2.30"])
        assert selection.prefix == "1.2.0"
        assert selection.padded
        assert selection.target is None

    def test_padding_selects_padded_release(self):
        selector = VersionSelector(allow_range_matching=True, pad_version_for_range_matching=True)
        assert selector.select("4", ["4.0.0", "4.1.0"]).target == "4.0.0"

    def test_padding_ignored_for_exact_matching(self):
        selector = VersionSelector(allow_range_matching=False, pad_version_for_range_matching=True)
        selection = selector.select("4.2", ["4.2", "4.2.0"])
        assert selection.target == "4.2"
        assert not selection.padded
