"""Page store contract and in-memory implementation.

The page store is the only persisted state the hierarchy works with: a set
of named pages, each with a free-text body and a sparse bag of string
properties. Hierarchy, inheritance, TOC and permission code only ever read
through the PageStore interface; bulk workflows write through it when their
tasks are executed.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .errors import PageNotFoundError

logger = logging.getLogger(__name__)

# Property holding the full identity of a page's parent; children are
# discovered by looking this property up.
PARENT_PROPERTY = "ParentPage"


def normalize_property_value(value: Any) -> Optional[str]:
    """Convert a property value to its stored string form.

    Flags are stored as "1" when set and are not stored at all when unset,
    so "is the property set" and "is the flag on" are the same question.

    Args:
        value: Raw value (string, number, bool or None)

    Returns:
        The string to store, or None if the property should be absent
    """
    if value is None or value is False:
        return None
    if value is True:
        return "1"
    return str(value)


@dataclass
class Revision:
    """A single saved revision of a page.

    Attributes:
        body: Page text as saved
        summary: Edit summary supplied with the save
        actor: Name of the user who saved it (None for fixtures/imports)
        saved_at: UTC timestamp of the save
    """
    body: str
    summary: str = ""
    actor: Optional[str] = None
    saved_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class StoredPage:
    """A page held by the in-memory store.

    Attributes:
        identity: Full page name, including any namespace prefix
        body: Current page text
        properties: Page properties (string values only)
        revisions: Saved revisions, oldest first
    """
    identity: str
    body: str = ""
    properties: Dict[str, str] = field(default_factory=dict)
    revisions: List[Revision] = field(default_factory=list)


class PageStore(ABC):
    """Interface every page store adapter implements."""

    @abstractmethod
    def get_property(self, identity: str, key: str) -> Optional[str]:
        """Return a page property, or None if the page or property is absent."""

    @abstractmethod
    def get_properties(self, identity: str) -> Dict[str, str]:
        """Return a copy of all properties of a page (empty if absent)."""

    @abstractmethod
    def set_property(self, identity: str, key: str, value: Any) -> None:
        """Set (or, for None/False values, remove) a property on an existing page."""

    @abstractmethod
    def exists(self, identity: str) -> bool:
        """Return True if the page exists."""

    @abstractmethod
    def get_body(self, identity: str) -> Optional[str]:
        """Return the page text, or None if the page does not exist."""

    @abstractmethod
    def find_children_by_parent_property(self, parent_identity: str) -> List[str]:
        """Return identities of all pages whose ParentPage equals parent_identity."""

    @abstractmethod
    def save_page(
        self,
        identity: str,
        body: str,
        properties: Optional[Dict[str, Any]] = None,
        summary: str = "",
        actor: Optional[str] = None,
    ) -> None:
        """Create or modify a page.

        When properties is given it replaces the page's property bag; when it
        is None the existing properties are kept.
        """

    @abstractmethod
    def delete_page(self, identity: str) -> None:
        """Delete a page. Raises PageNotFoundError if it does not exist."""

    def delete_property(self, identity: str, key: str) -> None:
        """Remove a property from a page."""
        self.set_property(identity, key, None)


class InMemoryPageStore(PageStore):
    """PageStore keeping every page in a dictionary.

    Used directly in tests and as the base of the YAML-file-backed store.

    Example:
        >>> store = InMemoryPageStore()
        >>> store.add_page("Widget", properties={"PageType": "Product"})
        >>> store.get_property("Widget", "PageType")
        'Product'
    """

    def __init__(self):
        self._pages: Dict[str, StoredPage] = {}

    def add_page(
        self,
        identity: str,
        body: str = "",
        properties: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Add or replace a page without recording an edit summary."""
        self._pages[identity] = StoredPage(
            identity=identity,
            body=body,
            properties=self._normalize_properties(properties or {}),
            revisions=[Revision(body=body)],
        )

    def identities(self) -> List[str]:
        """Return all page identities, sorted."""
        return sorted(self._pages)

    def revisions(self, identity: str) -> List[Revision]:
        """Return the revision history of a page (empty if absent)."""
        page = self._pages.get(identity)
        return list(page.revisions) if page else []

    def get_property(self, identity: str, key: str) -> Optional[str]:
        page = self._pages.get(identity)
        if page is None:
            return None
        return page.properties.get(key)

    def get_properties(self, identity: str) -> Dict[str, str]:
        page = self._pages.get(identity)
        return dict(page.properties) if page else {}

    def set_property(self, identity: str, key: str, value: Any) -> None:
        page = self._pages.get(identity)
        if page is None:
            raise PageNotFoundError(identity)
        stored = normalize_property_value(value)
        if stored is None:
            page.properties.pop(key, None)
        else:
            page.properties[key] = stored

    def exists(self, identity: str) -> bool:
        return identity in self._pages

    def get_body(self, identity: str) -> Optional[str]:
        page = self._pages.get(identity)
        return page.body if page else None

    def find_children_by_parent_property(self, parent_identity: str) -> List[str]:
        return sorted(
            identity for identity, page in self._pages.items()
            if page.properties.get(PARENT_PROPERTY) == parent_identity
        )

    def save_page(
        self,
        identity: str,
        body: str,
        properties: Optional[Dict[str, Any]] = None,
        summary: str = "",
        actor: Optional[str] = None,
    ) -> None:
        page = self._pages.get(identity)
        if page is None:
            logger.debug(f"Creating page {identity}")
            page = StoredPage(identity=identity)
            self._pages[identity] = page
        else:
            logger.debug(f"Modifying page {identity}")
        page.body = body
        if properties is not None:
            page.properties = self._normalize_properties(properties)
        page.revisions.append(Revision(body=body, summary=summary, actor=actor))

    def delete_page(self, identity: str) -> None:
        if identity not in self._pages:
            raise PageNotFoundError(identity)
        logger.debug(f"Deleting page {identity}")
        del self._pages[identity]

    @staticmethod
    def _normalize_properties(properties: Dict[str, Any]) -> Dict[str, str]:
        normalized = {}
        for key, value in properties.items():
            stored = normalize_property_value(value)
            if stored is not None:
                normalized[str(key)] = stored
        return normalized
