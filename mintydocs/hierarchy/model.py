"""Hierarchy model: typed access to Product/Version/Manual/Topic pages.

HierarchyModel classifies pages by their stored PageType, builds typed page
snapshots, derives names and parents from identities, and enumerates
children through the page store's ParentPage index. It also knows the Draft
area: a Draft page carries the draft prefix on its first identity segment
and mirrors a live page of the same name without it.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Type, TypeVar

from ..page_store.store import PageStore
from .models import (
    PAGE_CLASSES,
    ManualPage,
    Page,
    PageType,
    ProductPage,
    RenderContext,
    TopicPage,
    VersionPage,
    split_list,
)
from .versioning import compare_versions, sort_versions

logger = logging.getLogger(__name__)

DEFAULT_DRAFT_PREFIX = "Draft:"

P = TypeVar('P', bound=Page)


@dataclass
class ManualListing:
    """Ordered Manuals of a Version.

    Attributes:
        manuals: Manual pages, listed ones first in ManualsList order
        missing: Names in ManualsList with no matching Manual page
        unlisted: Names of Manual pages not mentioned in ManualsList
    """
    manuals: List[ManualPage] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    unlisted: List[str] = field(default_factory=list)


class HierarchyModel:
    """Reads the documentation hierarchy out of a page store.

    Args:
        store: Page store holding the documentation pages
        draft_prefix: Identity prefix marking the Draft area

    Example:
        >>> model = HierarchyModel(store)
        >>> model.classify("Widget/1.0")
        <PageType.VERSION: 'Version'>
        >>> model.actual_name(model.load("Widget/1.0/Guide"))
        'Guide'
    """

    def __init__(self, store: PageStore, draft_prefix: str = DEFAULT_DRAFT_PREFIX):
        self.store = store
        self.draft_prefix = draft_prefix

    # Draft area

    def is_draft(self, identity: str) -> bool:
        return identity.startswith(self.draft_prefix)

    def namespace_prefix(self, identity: str) -> str:
        """Return the namespace prefix of an identity ('' for live pages)."""
        return self.draft_prefix if self.is_draft(identity) else ""

    def live_identity(self, identity: str) -> str:
        """Return the identity with any draft prefix removed."""
        if self.is_draft(identity):
            return identity[len(self.draft_prefix):]
        return identity

    def draft_identity(self, identity: str) -> str:
        """Return the Draft-area counterpart of an identity."""
        return self.draft_prefix + self.live_identity(identity)

    def counterpart_identity(self, identity: str) -> str:
        """Return the live identity of a Draft page or the Draft identity of a live page."""
        if self.is_draft(identity):
            return self.live_identity(identity)
        return self.draft_identity(identity)

    def has_draft_shadow(self, identity: str) -> bool:
        """True if the page is live and its Draft counterpart exists."""
        if self.is_draft(identity):
            return False
        return self.store.exists(self.draft_identity(identity))

    # Classification and construction

    def classify(self, identity: str) -> Optional[PageType]:
        """Return the stored page type, or None if the page is not a hierarchy page."""
        return PageType.from_value(self.store.get_property(identity, "PageType"))

    def load(self, identity: str) -> Optional[Page]:
        """Build the typed page for an identity, or None if it has no page type."""
        page_type = self.classify(identity)
        if page_type is None:
            return None
        return PAGE_CLASSES[page_type].from_properties(
            identity, self.store.get_properties(identity)
        )

    def page_as(self, identity: str, page_class: Type[P]) -> P:
        """Build a page of the given class whatever type the page declares."""
        return page_class.from_properties(identity, self.store.get_properties(identity))

    def load_as(self, identity: str, page_class: Type[P]) -> Optional[P]:
        """Build a page of the given class only if the page declares that type."""
        if self.classify(identity) != page_class.page_type:
            return None
        return self.page_as(identity, page_class)

    # Names and parents

    def parent_identity(self, page: Page) -> Optional[str]:
        """Return the identity of a page's structural parent.

        Product pages have no parent; for every other page the last
        identity segment is removed.
        """
        if page.page_type == PageType.PRODUCT:
            return None
        if "/" not in page.identity:
            return None
        return page.identity.rsplit("/", 1)[0]

    def actual_name(self, page: Page) -> str:
        """Return the last identity segment (the whole identity for a Product)."""
        if page.page_type == PageType.PRODUCT:
            return page.identity
        return self.live_identity(page.identity).rsplit("/", 1)[-1]

    def display_name(self, page: Page) -> str:
        if page.page_type == PageType.VERSION:
            return self.actual_name(page)
        return page.display_name_property or self.actual_name(page)

    def child_pages(self, page: Page) -> List[str]:
        """Return identities of all pages whose ParentPage is this page."""
        return self.store.find_children_by_parent_property(page.identity)

    def check_eligibility(self, identity: str, page_type: PageType) -> Optional[str]:
        """Check whether a page may be defined as the given type.

        Args:
            identity: Page identity being defined
            page_type: Type the page is being defined as

        Returns:
            None if eligible, otherwise the reason it is not
        """
        parent_type = page_type.parent_type
        if parent_type is None:
            return None
        if "/" not in identity:
            return f"a {page_type.value} page must have a parent page"
        parent = identity.rsplit("/", 1)[0]
        if self.classify(parent) != parent_type:
            return f"parent page '{parent}' is not a {parent_type.value}"
        return None

    # Product and version lookups

    def product_and_version_identities(self, page: Page) -> Optional[Tuple[str, str]]:
        """Split a page's identity into its Product identity and version string.

        Returns None if the identity has too few segments for the page's level.

        Raises:
            ValueError: If called for a Product page
        """
        if page.page_type == PageType.PRODUCT:
            raise ValueError(f"'{page.identity}' is a Product page")
        parts = page.identity.split("/")
        num_product_parts = len(parts) - page.page_type.level + 1
        if num_product_parts < 1:
            return None
        product_identity = "/".join(parts[:num_product_parts])
        return product_identity, parts[num_product_parts]

    def product_and_version(self, page: Page) -> Optional[Tuple[ProductPage, VersionPage]]:
        """Return the Product and Version pages a page belongs to."""
        identities = self.product_and_version_identities(page)
        if identities is None:
            return None
        product_identity, version_string = identities
        return (
            self.page_as(product_identity, ProductPage),
            self.page_as(f"{product_identity}/{version_string}", VersionPage),
        )

    def versions(self, product: ProductPage) -> List[VersionPage]:
        """Return a Product's Versions, oldest first by version number."""
        versions = {}
        for identity in self.child_pages(product):
            version = self.load_as(identity, VersionPage)
            if version is not None:
                versions[self.actual_name(version)] = version
        return [versions[name] for name in sort_versions(versions)]

    def versions_before(self, product: ProductPage, version_string: str) -> List[VersionPage]:
        """Return Versions strictly earlier than version_string, most recent first."""
        earlier = [
            version for version in self.versions(product)
            if compare_versions(self.actual_name(version), version_string) < 0
        ]
        return list(reversed(earlier))

    def equivalent_identity(self, page: Page, version: VersionPage) -> str:
        """Return the identity mirroring a page under another Version."""
        if page.page_type == PageType.VERSION:
            return version.identity
        parts = page.identity.split("/")
        num_product_parts = len(parts) - page.page_type.level + 1
        return "/".join([version.identity] + parts[num_product_parts + 1:])

    def equivalent_page(self, page: Page, version: VersionPage) -> Optional[Page]:
        """Return the same-typed page at the mirrored identity, if it exists."""
        identity = self.equivalent_identity(page, version)
        if not self.store.exists(identity):
            return None
        return self.load_as(identity, type(page))

    def equivalents_in_other_versions(self, page: Page) -> Dict[str, Page]:
        """Return a Manual's or Topic's equivalent in every other Version.

        Returns:
            Dict mapping version string to equivalent page, in version order
        """
        located = self.product_and_version(page)
        if located is None:
            return {}
        product, current_version = located
        current = self.actual_name(current_version)
        equivalents = {}
        for version in self.versions(product):
            version_string = self.actual_name(version)
            if version_string == current:
                continue
            equivalent = self.equivalent_page(page, version)
            if equivalent is not None:
                equivalents[version_string] = equivalent
        return equivalents

    # Children by level

    def manuals(self, version: VersionPage, manuals_list: Optional[str] = None) -> ManualListing:
        """Return a Version's Manuals ordered by a ManualsList value.

        Args:
            version: Version whose Manuals are wanted
            manuals_list: Effective ManualsList (usually resolved with inheritance)

        Returns:
            ManualListing with listed Manuals first, then the rest by name
        """
        discovered: Dict[str, ManualPage] = {}
        for identity in self.child_pages(version):
            manual = self.load_as(identity, ManualPage)
            if manual is not None:
                discovered[self.actual_name(manual)] = manual

        listing = ManualListing()
        for name in split_list(manuals_list):
            manual = discovered.pop(name, None) or discovered.pop(name.replace("_", " "), None)
            if manual is None:
                listing.missing.append(name)
            else:
                listing.manuals.append(manual)
        for name in sorted(discovered):
            listing.manuals.append(discovered[name])
            if manuals_list:
                listing.unlisted.append(name)

        if listing.missing:
            logger.warning(
                f"Manuals listed for {version.identity} have no page: "
                f"{', '.join(listing.missing)}"
            )
        if listing.unlisted:
            logger.warning(
                f"Manuals defined for {version.identity} are not in its list of manuals: "
                f"{', '.join(listing.unlisted)}"
            )
        return listing

    def topics(self, manual: ManualPage) -> List[TopicPage]:
        """Return every Topic page nested under a Manual."""
        topics = []
        for identity in self.child_pages(manual):
            topic = self.load_as(identity, TopicPage)
            if topic is not None:
                topics.append(topic)
        return topics

    def context_manual(
        self,
        topic: TopicPage,
        context: Optional[RenderContext] = None
    ) -> Optional[ManualPage]:
        """Return the Manual a Topic is being viewed within.

        An explicit context naming an existing Manual wins; otherwise the
        Topic's structural parent is used.
        """
        if context is not None:
            manual = self.load_as(context.manual_identity, ManualPage)
            if manual is not None:
                return manual
            logger.debug(f"Context {context.manual_identity} is not a Manual, ignoring it")
        if topic.is_invalid:
            return None
        return self.load_as(topic.parent_page, ManualPage)
