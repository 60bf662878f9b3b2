"""Inheritance of content and parameters across Versions of a Product.

A page with the Inherit flag set takes its body from the nearest equivalent
page in an earlier Version that owns real content, and takes any parameter
it does not set itself from the nearest earlier equivalent that does.
The two walks stop under different conditions:

- content stops at the first equivalent page that does not inherit;
- a parameter stops at the first equivalent page that sets it, or at the
  first one that does not inherit, whichever comes first.
"""

import logging
from typing import List, Optional

from .errors import NoSourceVersionError
from .model import HierarchyModel, ManualListing
from .models import Page, PageProperty, PageType, VersionPage

logger = logging.getLogger(__name__)


class InheritanceResolver:
    """Resolves inherited pages, parameters and bodies.

    Args:
        model: Hierarchy model over the page store

    Example:
        >>> resolver = InheritanceResolver(model)
        >>> resolver.resolve_inherited_param(manual, "TopicsList")
        '*Installing\\n*Configuring'
    """

    def __init__(self, model: HierarchyModel):
        self.model = model

    def inherits_content(self, page: Page) -> bool:
        """True iff the page has the Inherit flag set (never for Products)."""
        if page.page_type == PageType.PRODUCT:
            return False
        return page.inherit

    def equivalent_pages_in_earlier_versions(self, page: Page) -> List[Page]:
        """Return the page's equivalents in earlier Versions, most recent first.

        Raises:
            ValueError: If called for a Product page
        """
        located = self.model.product_and_version(page)
        if located is None:
            return []
        product, version = located
        version_string = self.model.actual_name(version)

        equivalents = []
        for earlier in self.model.versions_before(product, version_string):
            equivalent = self.model.equivalent_page(page, earlier)
            if equivalent is not None:
                equivalents.append(equivalent)
        logger.debug(
            f"Equivalents of {page.identity} in earlier versions: "
            f"{[equivalent.identity for equivalent in equivalents]}"
        )
        return equivalents

    def resolve_inherited_page(self, page: Page) -> Optional[Page]:
        """Return the nearest earlier equivalent page that owns its content.

        Returns:
            None if the page does not inherit content

        Raises:
            NoSourceVersionError: If the page inherits but every earlier
                equivalent inherits too (or there is none)
        """
        if not self.inherits_content(page):
            return None

        for equivalent in self.equivalent_pages_in_earlier_versions(page):
            if not equivalent.inherit:
                logger.debug(f"{page.identity} inherits content from {equivalent.identity}")
                return equivalent
        raise NoSourceVersionError(page.identity)

    def resolve_inherited_param(self, page: Page, key: str) -> Optional[str]:
        """Return a parameter set on the page or inherited from earlier Versions.

        Args:
            page: Page whose parameter is wanted
            key: Property name

        Returns:
            The parameter value, or None if neither the page nor the
            inheritance chain provides one
        """
        value = page.get(key)
        if value is not None:
            return value
        if not self.inherits_content(page):
            return None

        for equivalent in self.equivalent_pages_in_earlier_versions(page):
            value = equivalent.get(key)
            if value is not None:
                return value
            if not equivalent.inherit:
                return None
        return None

    def resolve_body(self, page: Page) -> str:
        """Return the page's own body followed by any inherited body.

        Raises:
            NoSourceVersionError: If the page inherits with no source Version
        """
        body = self.model.store.get_body(page.identity) or ""
        inherited = self.resolve_inherited_page(page)
        if inherited is None:
            return body
        inherited_body = self.model.store.get_body(inherited.identity) or ""
        if not body:
            return inherited_body
        return f"{body}\n{inherited_body}"

    def manuals(self, version: VersionPage) -> ManualListing:
        """Return a Version's Manuals ordered by its (possibly inherited) ManualsList."""
        return self.model.manuals(
            version, self.resolve_inherited_param(version, PageProperty.MANUALS_LIST)
        )
