"""Unit tests for toc.models module."""

from mintydocs.toc.models import TocEntry, TocNodeKind, build_tree


def _entry(depth, label):
    return TocEntry(depth=depth, kind=TocNodeKind.TEXT, label=label)


class TestBuildTree:
    """Test cases for build_tree function."""

    def test_nesting(self):
        roots = build_tree([_entry(1, "A"), _entry(2, "B"), _entry(2, "C"), _entry(1, "D")])

        assert [root.entry.label for root in roots] == ["A", "D"]
        assert [child.entry.label for child in roots[0].children] == ["B", "C"]

    def test_skipped_level_uses_nearest_shallower(self):
        roots = build_tree([_entry(1, "A"), _entry(3, "B"), _entry(2, "C")])

        assert [child.entry.label for child in roots[0].children] == ["B", "C"]

    def test_deep_first_entry_is_root(self):
        roots = build_tree([_entry(2, "A"), _entry(1, "B")])

        assert [root.entry.label for root in roots] == ["A", "B"]
