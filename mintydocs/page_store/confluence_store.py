"""Page store backed by a Confluence space.

Each page identity maps to a Confluence page title. Pages in the draft area
can live in their own space; in that case the draft prefix is stripped from
the title and restored when identities are read back. Page properties are
kept as Confluence content properties, and a page's ParentPage property is
mirrored by its position in the Confluence page tree.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from .api_wrapper import APIWrapper
from .errors import PageNotFoundError
from .store import PARENT_PROPERTY, PageStore, normalize_property_value

logger = logging.getLogger(__name__)


class ConfluencePageStore(PageStore):
    """PageStore adapter over the Confluence REST API.

    Args:
        api: Configured APIWrapper
        space_key: Space holding live pages
        draft_space_key: Optional separate space holding draft pages
        draft_prefix: Identity prefix of the draft area (e.g., "Draft:")

    Example:
        >>> store = ConfluencePageStore(APIWrapper(Authenticator()), "DOCS")
        >>> store.get_property("Widget", "PageType")
        'Product'
    """

    def __init__(
        self,
        api: APIWrapper,
        space_key: str,
        draft_space_key: Optional[str] = None,
        draft_prefix: str = "Draft:",
    ):
        self.api = api
        self.space_key = space_key
        self.draft_space_key = draft_space_key
        self.draft_prefix = draft_prefix

    def _locate(self, identity: str) -> Tuple[str, str]:
        """Return the (space, title) a page identity is stored under."""
        if self.draft_space_key and identity.startswith(self.draft_prefix):
            return self.draft_space_key, identity[len(self.draft_prefix):]
        return self.space_key, identity

    def _identity_for(self, space: str, title: str) -> str:
        if self.draft_space_key and space == self.draft_space_key:
            return self.draft_prefix + title
        return title

    def _fetch(self, identity: str) -> Optional[Dict[str, Any]]:
        space, title = self._locate(identity)
        return self.api.get_page_by_title(space, title)

    def _require(self, identity: str) -> Dict[str, Any]:
        page = self._fetch(identity)
        if page is None:
            raise PageNotFoundError(identity)
        return page

    def get_property(self, identity: str, key: str) -> Optional[str]:
        return self.get_properties(identity).get(key)

    def get_properties(self, identity: str) -> Dict[str, str]:
        page = self._fetch(identity)
        if page is None:
            return {}
        raw = self.api.get_properties(page['id'])
        properties = {}
        for key, entry in raw.items():
            stored = normalize_property_value(entry['value'])
            if stored is not None:
                properties[key] = stored
        return properties

    def set_property(self, identity: str, key: str, value: Any) -> None:
        page = self._require(identity)
        self._write_property(page['id'], key, normalize_property_value(value))

    def _write_property(self, page_id: str, key: str, stored: Optional[str]) -> None:
        current = self.api.get_properties(page_id).get(key)
        if stored is None:
            if current is not None:
                self.api.delete_property(page_id, key)
            return
        if current is None:
            self.api.set_property(page_id, key, stored)
        elif current['value'] != stored:
            self.api.set_property(page_id, key, stored, current_version=current['version'])

    def exists(self, identity: str) -> bool:
        return self._fetch(identity) is not None

    def get_body(self, identity: str) -> Optional[str]:
        page = self._fetch(identity)
        if page is None:
            return None
        return page.get('body', {}).get('storage', {}).get('value', '')

    def find_children_by_parent_property(self, parent_identity: str) -> List[str]:
        parent = self._fetch(parent_identity)
        if parent is None:
            return []
        children = []
        for child in self.api.get_child_pages(parent['id']):
            space = child.get('space', {}).get('key') or self._locate(parent_identity)[0]
            identity = self._identity_for(space, child['title'])
            if self.get_property(identity, PARENT_PROPERTY) == parent_identity:
                children.append(identity)
        return sorted(children)

    def save_page(
        self,
        identity: str,
        body: str,
        properties: Optional[Dict[str, Any]] = None,
        summary: str = "",
        actor: Optional[str] = None,
    ) -> None:
        space, title = self._locate(identity)
        parent_id = None
        parent_identity = (properties or {}).get(PARENT_PROPERTY)
        if parent_identity:
            parent = self._fetch(parent_identity)
            if parent is not None and self._locate(parent_identity)[0] == space:
                parent_id = parent['id']

        if actor:
            summary = f"{summary} ({actor})" if summary else actor

        page = self.api.get_page_by_title(space, title)
        if page is None:
            logger.debug(f"Creating Confluence page {title} in {space}")
            page = self.api.create_page(space, title, body, parent_id=parent_id)
        else:
            logger.debug(f"Updating Confluence page {title} in {space}")
            self.api.update_page(
                page['id'], title, body, parent_id=parent_id, version_comment=summary or None
            )

        if properties is None:
            return
        wanted = {}
        for key, value in properties.items():
            stored = normalize_property_value(value)
            if stored is not None:
                wanted[str(key)] = stored
        for key in self.api.get_properties(page['id']):
            if key not in wanted:
                self.api.delete_property(page['id'], key)
        for key, stored in wanted.items():
            self._write_property(page['id'], key, stored)

    def delete_page(self, identity: str) -> None:
        page = self._require(identity)
        logger.debug(f"Deleting Confluence page {identity}")
        self.api.remove_page(page['id'], identity)
