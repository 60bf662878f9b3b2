"""Unit tests for page_store.confluence_store module."""

from unittest.mock import MagicMock

import pytest

from mintydocs.page_store.confluence_store import ConfluencePageStore
from mintydocs.page_store.errors import PageNotFoundError


@pytest.fixture
def api():
    return MagicMock()


@pytest.fixture
def store(api):
    return ConfluencePageStore(api, "DOCS", draft_space_key="DRAFT", draft_prefix="Draft:")


class TestLocate:
    """Test cases for identity to (space, title) mapping."""

    def test_live_page_in_main_space(self, store):
        assert store._locate("Widget/1.0") == ("DOCS", "Widget/1.0")

    def test_draft_page_in_draft_space(self, store):
        """The draft prefix is stripped when a draft space is configured."""
        assert store._locate("Draft:Widget/1.0") == ("DRAFT", "Widget/1.0")

    def test_draft_prefix_kept_without_draft_space(self, api):
        """Without a draft space, draft pages keep their prefixed title."""
        store = ConfluencePageStore(api, "DOCS")
        assert store._locate("Draft:Widget") == ("DOCS", "Draft:Widget")


class TestReading:
    """Test cases for reading pages and properties."""

    def test_missing_page(self, store, api):
        """A missing page has no properties, body or existence."""
        api.get_page_by_title.return_value = None

        assert store.exists("Widget") is False
        assert store.get_body("Widget") is None
        assert store.get_properties("Widget") == {}

    def test_get_body_and_properties(self, store, api):
        """Body comes from the storage representation; properties are flattened."""
        api.get_page_by_title.return_value = {
            'id': '42', 'body': {'storage': {'value': '<p>Hello</p>'}},
        }
        api.get_properties.return_value = {
            'PageType': {'value': 'Product', 'version': 1},
        }

        assert store.get_body("Widget") == '<p>Hello</p>'
        assert store.get_property("Widget", "PageType") == 'Product'
        api.get_page_by_title.assert_called_with("DOCS", "Widget")

    def test_find_children_filters_on_parent_property(self, store, api):
        """Tree children without a matching ParentPage are ignored."""
        pages = {
            ("DOCS", "Widget"): {'id': '1'},
            ("DOCS", "Widget/1.0"): {'id': '2'},
            ("DOCS", "Widget/Notes"): {'id': '3'},
        }
        api.get_page_by_title.side_effect = lambda space, title: pages.get((space, title))
        api.get_child_pages.return_value = [
            {'title': 'Widget/1.0', 'space': {'key': 'DOCS'}},
            {'title': 'Widget/Notes', 'space': {'key': 'DOCS'}},
        ]
        properties = {
            '2': {'ParentPage': {'value': 'Widget', 'version': 1}},
            '3': {},
        }
        api.get_properties.side_effect = lambda page_id: properties[page_id]

        assert store.find_children_by_parent_property("Widget") == ["Widget/1.0"]


class TestWriting:
    """Test cases for saving and deleting pages."""

    def test_save_new_page_creates_it_under_parent(self, store, api):
        """A new page is created under its parent and its properties are written."""
        created = {'id': '7'}
        parent = {'id': '1'}
        api.get_page_by_title.side_effect = lambda space, title: (
            parent if title == "Widget" else None
        )
        api.create_page.return_value = created
        api.get_properties.return_value = {}

        store.save_page(
            "Widget/1.0",
            "Notes",
            properties={"PageType": "Version", "ParentPage": "Widget", "Inherit": False},
        )

        api.create_page.assert_called_once_with("DOCS", "Widget/1.0", "Notes", parent_id='1')
        written = {call.args[1]: call.args[2] for call in api.set_property.call_args_list}
        assert written == {"PageType": "Version", "ParentPage": "Widget"}

    def test_save_existing_page_updates_and_prunes_properties(self, store, api):
        """Updating a page replaces its body and removes stale properties."""
        api.get_page_by_title.return_value = {'id': '7'}
        api.get_properties.return_value = {
            'PageType': {'value': 'Version', 'version': 1},
            'Status': {'value': 'Unreleased', 'version': 4},
        }

        store.save_page(
            "Widget/1.0", "Notes", properties={"PageType": "Version"},
            summary="Publish from draft", actor="Alice",
        )

        api.update_page.assert_called_once_with(
            '7', "Widget/1.0", "Notes", parent_id=None,
            version_comment="Publish from draft (Alice)",
        )
        api.delete_property.assert_called_once_with('7', 'Status')
        api.set_property.assert_not_called()

    def test_set_property_updates_with_version(self, store, api):
        """Changing an existing property passes its current version."""
        api.get_page_by_title.return_value = {'id': '7'}
        api.get_properties.return_value = {'Status': {'value': 'Unreleased', 'version': 4}}

        store.set_property("Widget/1.0", "Status", "Released")

        api.set_property.assert_called_once_with('7', 'Status', 'Released', current_version=4)

    def test_delete_page(self, store, api):
        """Deleting removes the Confluence page by ID."""
        api.get_page_by_title.return_value = {'id': '7'}

        store.delete_page("Draft:Widget/1.0")

        api.get_page_by_title.assert_called_with("DRAFT", "Widget/1.0")
        api.remove_page.assert_called_once_with('7', "Draft:Widget/1.0")

    def test_delete_missing_page_raises(self, store, api):
        api.get_page_by_title.return_value = None

        with pytest.raises(PageNotFoundError):
            store.delete_page("Widget/1.0")
