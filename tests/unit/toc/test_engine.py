"""Unit tests for toc.engine module."""

import pytest
from bs4 import BeautifulSoup

from mintydocs.hierarchy.models import RenderContext
from mintydocs.toc.engine import TocEngine, suppress_empty_headers
from mintydocs.toc.models import TocEntry, TocNodeKind
from mintydocs.toc.renderer import HtmlRenderer


def _text(depth, label):
    return TocEntry(depth=depth, kind=TocNodeKind.TEXT, label=label)


def _topic(depth, label):
    return TocEntry(depth=depth, kind=TocNodeKind.TOPIC, label=label)


@pytest.fixture
def extras(store, model):
    """A Manual mixing standalone, borrowed and unmatched entries."""
    store.add_page("Widget/1.9/Extras", properties={
        "PageType": "Manual",
        "ParentPage": "Widget/1.9",
        "TopicDefaultForm": "Topic",
        "TopicAlternateForms": "Howto, Faq",
        "TopicsList": (
            "*!Widget/1.9/Guide/Upgrade\n"
            "*+Widget/1.9/Guide/Install\n"
            "**Nested_page\n"
            "*!Nowhere/Topic"
        ),
    })
    return model.load("Widget/1.9/Extras")


class TestSuppressEmptyHeaders:
    """Test cases for suppress_empty_headers function."""

    def test_header_with_children_kept(self):
        entries = [_text(1, "Intro"), _topic(2, "Install")]
        assert suppress_empty_headers(entries) == entries

    def test_header_followed_by_sibling_dropped(self):
        entries = [_text(1, "Empty"), _topic(1, "Install")]
        assert [entry.label for entry in suppress_empty_headers(entries)] == ["Install"]

    def test_trailing_header_dropped(self):
        entries = [_topic(1, "Install"), _text(1, "Empty")]
        assert [entry.label for entry in suppress_empty_headers(entries)] == ["Install"]

    def test_removals_do_not_cascade(self):
        """A header whose only child is an empty header survives."""
        entries = [_text(1, "Outer"), _text(2, "Inner"), _topic(1, "Install")]
        assert [entry.label for entry in suppress_empty_headers(entries)] == ["Outer", "Install"]


class TestBuild:
    """Test cases for TocEngine.build()."""

    def test_manual_without_topics_list(self, toc_engine, model):
        assert toc_engine.build(model.load("Widget/1.9/Reference")) is None

    def test_entries(self, toc_engine, model):
        toc = toc_engine.build(model.load("Widget/1.9/Guide"))

        assert [(entry.depth, entry.kind, entry.label) for entry in toc.entries] == [
            (1, TocNodeKind.TEXT, "Getting started"),
            (2, TocNodeKind.TOPIC, "Installing"),
            (2, TocNodeKind.TOPIC, "Configure"),
            (1, TocNodeKind.TOPIC, "Upgrading"),
        ]
        assert toc.unmatched_topics == []
        assert toc.warnings == []

    def test_rendered_starts_with_about(self, toc_engine, model):
        toc = toc_engine.build(model.load("Widget/1.9/Guide"))
        soup = BeautifulSoup(toc.rendered, "html.parser")

        links = soup.find_all("a")
        assert links[0].get_text() == "About"
        assert links[0]["href"] == "/wiki/Widget/1.9/Guide"
        assert "Empty section" not in toc.rendered
        assert [link.get_text() for link in links[1:]] == ["Installing", "Configure", "Upgrading"]

    def test_inherited_topics_list(self, toc_engine, model):
        """1.10 uses 1.9's TOC, matched against its own topics."""
        toc = toc_engine.build(model.load("Widget/1.10/Guide"))

        assert [entry.identity for entry in toc.topic_entries()] == [
            "Widget/1.10/Guide/Install",
            "Widget/1.10/Guide/Configure",
            "Widget/1.10/Guide/Upgrade",
        ]

    def test_unlisted_topics_warn(self, store, toc_engine, model):
        store.add_page("Widget/1.9/Guide/Faq", properties={
            "PageType": "Topic", "ParentPage": "Widget/1.9/Guide",
        })

        toc = toc_engine.build(model.load("Widget/1.9/Guide"))

        assert [topic.identity for topic in toc.unmatched_topics] == ["Widget/1.9/Guide/Faq"]
        assert "Faq" in toc.warnings[0]

    def test_unmatched_line_links_to_new_topic(self, toc_engine, model):
        toc = toc_engine.build(model.load("Draft:Widget/1.10/Guide"))

        unmatched = toc.entries[-1]
        assert unmatched.kind == TocNodeKind.UNMATCHED_LINK
        assert unmatched.identity == "Draft:Widget/1.10/Guide/New topic"
        assert 'class="new"' in unmatched.rendered

    def test_unmatched_lines_suppressed_under_draft_shadow(self, store, toc_engine, model):
        """A live Manual with a Draft counterpart hides lines with no topic."""
        store.set_property("Widget/1.10/Guide", "TopicsList", "*Install\n*Not written yet")

        toc = toc_engine.build(model.load("Widget/1.10/Guide"))

        assert [entry.label for entry in toc.entries] == ["Installing"]

    def test_topics_list_page(self, store, toc_engine, model):
        """A TopicsList not starting with '*' names a page holding the TOC."""
        store.add_page("Draft:Guide TOC", body="<div>*Configure</div>")
        store.set_property("Draft:Widget/1.10/Guide", "TopicsList", "Guide TOC")

        toc = toc_engine.build(model.load("Draft:Widget/1.10/Guide"))

        assert [entry.label for entry in toc.entries] == ["Configure"]

    def test_missing_topics_list_page(self, store, toc_engine, model):
        store.set_property("Widget/1.9/Guide", "TopicsList", "Nowhere")
        assert toc_engine.build(model.load("Widget/1.9/Guide")) is None


class TestReferencedTopics:
    """Test cases for standalone, borrowed and form-aware entries."""

    def test_entry_kinds(self, toc_engine, extras):
        toc = toc_engine.build(extras)

        assert [(entry.depth, entry.kind, entry.label) for entry in toc.entries] == [
            (1, TocNodeKind.STANDALONE, "Upgrading"),
            (1, TocNodeKind.BORROWED, "Installing"),
            (2, TocNodeKind.UNMATCHED_LINK, "Nested page"),
        ]
        assert toc.topic_entries() == []

    def test_standalone_link_carries_context(self, toc_engine, extras):
        toc = toc_engine.build(extras)
        link = BeautifulSoup(toc.entries[0].rendered, "html.parser").a

        assert link["href"] == (
            "/wiki/Widget/1.9/Guide/Upgrade?product=Widget&version=1.9&manual=Extras"
        )

    def test_borrowed_link_carries_context(self, toc_engine, extras):
        toc = toc_engine.build(extras)
        link = BeautifulSoup(toc.entries[1].rendered, "html.parser").a

        assert "contextProduct=Widget" in link["href"]
        assert "contextManual=Extras" in link["href"]

    def test_unmatched_link_uses_forms(self, toc_engine, extras):
        toc = toc_engine.build(extras)
        link = BeautifulSoup(toc.entries[2].rendered, "html.parser").a

        assert link["href"].startswith("/wiki/Widget/1.9/Extras/Nested_page?")
        assert "action=formedit" in link["href"]
        assert "form=Topic" in link["href"]
        assert "alt_form=Howto%2C+Faq" in link["href"]


class TestNavigation:
    """Test cases for previous/next navigation."""

    def test_previous_and_next(self, toc_engine, model):
        manual = model.load("Widget/1.9/Guide")
        toc = toc_engine.build(manual)

        previous_topic, next_topic = toc_engine.previous_and_next(
            toc, model.load("Widget/1.9/Guide/Configure")
        )

        assert previous_topic.identity == "Widget/1.9/Guide/Install"
        assert next_topic.identity == "Widget/1.9/Guide/Upgrade"

    def test_ends_of_toc(self, toc_engine, model):
        assert toc_engine.navigation(model.load("Widget/1.9/Guide/Install")) == (
            None, model.load("Widget/1.9/Guide/Configure"),
        )
        previous_topic, next_topic = toc_engine.navigation(model.load("Widget/1.9/Guide/Upgrade"))
        assert previous_topic.identity == "Widget/1.9/Guide/Configure"
        assert next_topic is None

    def test_prev_next_round_trip(self, toc_engine, model):
        """Following next links visits every topic entry in TOC order."""
        toc = toc_engine.build(model.load("Widget/1.10/Guide"))
        expected = [entry.identity for entry in toc.topic_entries()]

        visited = [expected[0]]
        current = model.load(expected[0])
        while True:
            _, next_topic = toc_engine.previous_and_next(toc, current)
            if next_topic is None:
                break
            visited.append(next_topic.identity)
            current = next_topic

        assert visited == expected

    def test_inherited_pagination(self, toc_engine, model):
        """1.10 inherits Pagination from 1.9."""
        previous_topic, _ = toc_engine.navigation(model.load("Widget/1.10/Guide/Configure"))
        assert previous_topic.identity == "Widget/1.10/Guide/Install"

    def test_no_pagination(self, toc_engine, model):
        topic = model.load("Draft:Widget/1.10/Guide/Install")

        assert toc_engine.navigation(topic) == (None, None)
        _, next_topic = toc_engine.navigation(topic, require_pagination=False)
        assert next_topic.identity == "Draft:Widget/1.10/Guide/Configure"

    def test_explicit_context(self, toc_engine, model):
        """A topic viewed within another Manual uses that Manual's TOC."""
        topic = model.load("Widget/1.10/Guide/Configure")
        context = RenderContext(product="Widget", version="1.9", manual="Guide")

        previous_topic, _ = toc_engine.navigation(topic, context)

        assert previous_topic.identity == "Widget/1.9/Guide/Install"

    def test_invalid_topic(self, toc_engine, model):
        assert toc_engine.navigation(model.load("Loose topic")) == (None, None)


class TestRendererInjection:
    """The engine renders through whichever renderer it is given."""

    def test_base_url(self, model, resolver):
        engine = TocEngine(model, resolver, HtmlRenderer(base_url="/docs/"))
        toc = engine.build(model.load("Widget/1.9/Guide"))
        assert 'href="/docs/Widget/1.9/Guide"' in toc.rendered
