"""Unit tests for workflows.tree module."""

import pytest

from mintydocs.hierarchy.models import ManualPage, ProductPage, VersionPage
from mintydocs.workflows.models import NodeKind
from mintydocs.workflows.tree import PageTreeBuilder

EXTRAS_TOC = """*!Widget/1.9/Guide/Upgrade
*+Widget/1.9/Guide/Install
**!Widget/1.9/Guide/Configure
*Unwritten"""


@pytest.fixture
def builder(model, resolver, toc_engine):
    return PageTreeBuilder(model, resolver, toc_engine)


def _kinds(node):
    return [(child.kind, child.label) for child in node.children]


class TestPageTreeBuilder:
    """Test cases for PageTreeBuilder.make_tree()."""

    def test_manual_tree_follows_toc(self, builder, model):
        tree = builder.make_tree(model.load_as("Widget/1.9/Guide", ManualPage))

        assert tree.label == "User Guide"
        assert _kinds(tree) == [
            (NodeKind.LABEL, "Getting started"),
            (NodeKind.PAGE, "Upgrading"),
        ]
        heading = tree.children[0]
        assert [child.identity for child in heading.children] == [
            "Widget/1.9/Guide/Install",
            "Widget/1.9/Guide/Configure",
        ]

    def test_manual_without_toc_uses_topics(self, builder, model):
        tree = builder.make_tree(model.load_as("Widget/1.9/Reference", ManualPage))

        assert _kinds(tree) == [(NodeKind.PAGE, "API")]

    def test_borrowed_entries_are_leaves(self, builder, model, store):
        store.add_page("Widget/1.9/Extras", properties={
            "PageType": "Manual",
            "ParentPage": "Widget/1.9",
            "TopicsList": EXTRAS_TOC,
        })

        tree = builder.make_tree(model.load_as("Widget/1.9/Extras", ManualPage))

        assert _kinds(tree) == [
            (NodeKind.PAGE, "Upgrading"),
            (NodeKind.BORROWED, "Installing"),
            (NodeKind.PAGE, "Configure"),
            (NodeKind.LABEL, "Unwritten"),
        ]
        assert tree.children[1].children == []
        assert tree.children[1].identity == "Widget/1.9/Guide/Install"

    def test_version_tree_lists_manuals(self, builder, model):
        tree = builder.make_tree(model.load_as("Widget/1.9", VersionPage))

        assert tree.label == "1.9"
        assert _kinds(tree) == [
            (NodeKind.PAGE, "User Guide"),
            (NodeKind.PAGE, "Reference"),
        ]

    def test_product_tree_lists_versions_in_order(self, builder, model):
        tree = builder.make_tree(model.load_as("Widget", ProductPage))

        assert [child.label for child in tree.children] == ["1.9", "1.10", "2.0"]
