"""Unit tests for hierarchy.inheritance module."""

import pytest

from mintydocs.hierarchy.errors import NoSourceVersionError
from mintydocs.hierarchy.inheritance import InheritanceResolver
from mintydocs.hierarchy.model import HierarchyModel
from mintydocs.page_store.store import InMemoryPageStore


def _chain_store():
    """Product with three Versions of one Manual, for parameter stop rules."""
    store = InMemoryPageStore()
    store.add_page("Widget", properties={"PageType": "Product"})
    for version in ("1.0", "2.0", "3.0"):
        store.add_page(f"Widget/{version}", properties={
            "PageType": "Version", "ParentPage": "Widget",
        })
    store.add_page("Widget/1.0/Guide", body="Guide 1.0", properties={
        "PageType": "Manual", "ParentPage": "Widget/1.0", "TopicDefaultForm": "Topic",
    })
    store.add_page("Widget/2.0/Guide", body="Guide 2.0", properties={
        "PageType": "Manual", "ParentPage": "Widget/2.0",
    })
    store.add_page("Widget/3.0/Guide", properties={
        "PageType": "Manual", "ParentPage": "Widget/3.0", "Inherit": True,
    })
    return store


class TestInheritsContent:
    """Test cases for InheritanceResolver.inherits_content()."""

    def test_products_never_inherit(self, store, resolver, model):
        store.set_property("Widget", "Inherit", True)
        assert resolver.inherits_content(model.load("Widget")) is False

    def test_flag(self, resolver, model):
        assert resolver.inherits_content(model.load("Widget/1.10/Guide")) is True
        assert resolver.inherits_content(model.load("Widget/1.9/Guide")) is False


class TestResolveInheritedPage:
    """Test cases for InheritanceResolver.resolve_inherited_page()."""

    def test_non_inheriting_page(self, resolver, model):
        assert resolver.resolve_inherited_page(model.load("Widget/1.9/Guide/Install")) is None

    def test_nearest_earlier_page(self, resolver, model):
        source = resolver.resolve_inherited_page(model.load("Widget/1.10/Guide/Install"))
        assert source.identity == "Widget/1.9/Guide/Install"

    def test_skips_inheriting_equivalents(self, resolver, model):
        """2.0 skips 1.10, which inherits too, and lands on 1.9."""
        source = resolver.resolve_inherited_page(model.load("Widget/2.0/Guide/Install"))
        assert source.identity == "Widget/1.9/Guide/Install"

    def test_no_source_version(self, store, resolver, model):
        """Inheriting with no earlier owner of the content is an authoring error."""
        store.add_page("Widget/1.10/Guide/Faq", properties={
            "PageType": "Topic", "ParentPage": "Widget/1.10/Guide", "Inherit": True,
        })

        with pytest.raises(NoSourceVersionError) as exc_info:
            resolver.resolve_inherited_page(model.load("Widget/1.10/Guide/Faq"))
        assert exc_info.value.identity == "Widget/1.10/Guide/Faq"


class TestResolveInheritedParam:
    """Test cases for InheritanceResolver.resolve_inherited_param()."""

    def test_own_value_wins(self, store, resolver, model):
        store.set_property("Widget/1.10/Guide", "TopicsList", "*Configure")
        manual = model.load("Widget/1.10/Guide")
        assert resolver.resolve_inherited_param(manual, "TopicsList") == "*Configure"

    def test_walks_past_inheriting_versions(self, resolver, model):
        """2.0's Guide gets the TopicsList 1.9 sets, through 1.10."""
        manual = model.load("Widget/2.0/Guide")
        value = resolver.resolve_inherited_param(manual, "TopicsList")
        assert value.startswith("*-Getting started")

    def test_non_inheriting_page_has_no_inherited_value(self, resolver, model):
        topic = model.load("Widget/1.10/Guide/Configure")
        assert resolver.resolve_inherited_param(topic, "DisplayName") is None

    def test_stops_at_first_non_inheriting_page(self):
        """A parameter is not looked up past a page that owns its content."""
        model = HierarchyModel(_chain_store())
        resolver = InheritanceResolver(model)

        manual = model.load("Widget/3.0/Guide")

        assert resolver.resolve_inherited_param(manual, "TopicDefaultForm") is None
        assert resolver.resolve_inherited_page(manual).identity == "Widget/2.0/Guide"

    def test_found_before_stop(self):
        model = HierarchyModel(_chain_store())
        model.store.set_property("Widget/2.0/Guide", "TopicDefaultForm", "Howto")
        resolver = InheritanceResolver(model)

        manual = model.load("Widget/3.0/Guide")

        assert resolver.resolve_inherited_param(manual, "TopicDefaultForm") == "Howto"


class TestResolveBody:
    """Test cases for InheritanceResolver.resolve_body()."""

    def test_own_body_only(self, resolver, model):
        assert resolver.resolve_body(model.load("Widget/1.9/Guide/Install")) == "Install steps 1.9"

    def test_empty_body_takes_inherited(self, resolver, model):
        assert resolver.resolve_body(model.load("Widget/1.10/Guide/Install")) == "Install steps 1.9"

    def test_own_body_followed_by_inherited(self, resolver, model):
        body = resolver.resolve_body(model.load("Widget/1.10/Guide/Upgrade"))
        assert body == "Note for 1.10\nUpgrade 1.9"


class TestManuals:
    """Test cases for InheritanceResolver.manuals()."""

    def test_inherited_manuals_list(self, resolver, model):
        """1.10 inherits ManualsList from 1.9; Reference has no 1.10 page."""
        listing = resolver.manuals(model.load("Widget/1.10"))

        assert [manual.identity for manual in listing.manuals] == ["Widget/1.10/Guide"]
        assert listing.missing == ["Reference"]
