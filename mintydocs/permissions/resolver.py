"""Permission resolver for documentation pages.

Decisions combine the actor's global rights, the Product's role lists, the
Version's lifecycle status and whether the page has a Draft counterpart:

- View: Released Versions are visible to everyone, Unreleased ones to
  admins, editors and previewers, Closed ones to admins only. Pages in the
  Draft area additionally require some admin, edit or preview right.
- Edit: Released Versions are editable by everyone, Unreleased ones by
  admins and editors, Closed ones by admins only. A live page with a Draft
  counterpart is read-only unless the actor holds the edit-live right.
- Administer: global admins, or the Product's admins.

Product pages are always visible and editable by admins only. Topics not
nested under a Manual ("invalid" topics) have no Product; in the Draft
area they need global rights, elsewhere they are unrestricted.
"""

import logging
from typing import List, Optional, Tuple

from ..hierarchy.definition import normalize_user_name
from ..hierarchy.model import HierarchyModel
from ..hierarchy.models import Page, PageType, ProductPage, VersionPage, VersionStatus
from .identity import Actor, IdentityProvider, RightNames

logger = logging.getLogger(__name__)


def _in_role_list(actor: Actor, names: List[str]) -> bool:
    # Lists written straight to the store may not be normalized yet.
    if not actor.name:
        return False
    return normalize_user_name(actor.name) in {normalize_user_name(name) for name in names}


class PermissionResolver:
    """Computes view, edit and administer decisions.

    Args:
        model: Hierarchy model over the page store
        identity_provider: Source of the acting user and global rights
        rights: Names of the global rights

    Example:
        >>> permissions = PermissionResolver(model, provider)
        >>> permissions.can_view(model.load("Widget/2.0/Guide"))
        False
    """

    def __init__(
        self,
        model: HierarchyModel,
        identity_provider: IdentityProvider,
        rights: Optional[RightNames] = None
    ):
        self.model = model
        self.identity_provider = identity_provider
        self.rights = rights or RightNames()

    def _actor(self, actor: Optional[Actor]) -> Actor:
        return actor if actor is not None else self.identity_provider.current_actor()

    def _has_global(self, actor: Actor, *right_names: str) -> bool:
        return any(
            self.identity_provider.actor_has_global_right(actor, right)
            for right in right_names
        )

    # Product role lists

    def user_is_admin(self, product: ProductPage, actor: Actor) -> bool:
        return _in_role_list(actor, product.admins)

    def user_is_editor(self, product: ProductPage, actor: Actor) -> bool:
        return _in_role_list(actor, product.editors)

    def user_is_previewer(self, product: ProductPage, actor: Actor) -> bool:
        return _in_role_list(actor, product.previewers)

    # Helpers

    def _is_invalid_topic(self, page: Page) -> bool:
        return page.page_type == PageType.TOPIC and page.parent_page is None

    def _product_and_version(
        self,
        page: Page
    ) -> Tuple[Optional[ProductPage], Optional[VersionPage]]:
        if page.page_type == PageType.PRODUCT:
            return self.model.page_as(page.identity, ProductPage), None
        located = self.model.product_and_version(page)
        if located is None:
            return None, None
        return located

    def _is_product_admin(self, actor: Actor, product: Optional[ProductPage]) -> bool:
        return self._has_global(actor, self.rights.administer) or (
            product is not None and self.user_is_admin(product, actor)
        )

    def _is_product_editor(self, actor: Actor, product: Optional[ProductPage]) -> bool:
        return self._has_global(actor, self.rights.edit) or (
            product is not None and self.user_is_editor(product, actor)
        )

    def _is_product_previewer(self, actor: Actor, product: Optional[ProductPage]) -> bool:
        return self._has_global(actor, self.rights.preview) or (
            product is not None and self.user_is_previewer(product, actor)
        )

    def _has_any_role(self, actor: Actor, product: Optional[ProductPage]) -> bool:
        return (
            self._is_product_admin(actor, product)
            or self._is_product_editor(actor, product)
            or self._is_product_previewer(actor, product)
        )

    @staticmethod
    def _status(version: Optional[VersionPage]) -> VersionStatus:
        return version.status if version is not None else VersionStatus.UNRELEASED

    # Decisions

    def can_view(self, page: Page, actor: Optional[Actor] = None) -> bool:
        """Return True if the actor may view the page."""
        actor = self._actor(actor)
        if page.page_type == PageType.PRODUCT:
            return True

        if self._is_invalid_topic(page):
            if not self.model.is_draft(page.identity):
                return True
            return self._has_global(
                actor, self.rights.administer, self.rights.edit, self.rights.preview
            )

        product, version = self._product_and_version(page)
        if self.model.is_draft(page.identity) and not self._has_any_role(actor, product):
            logger.debug(f"{actor.name or 'anonymous'} has no role to view draft {page.identity}")
            return False

        status = self._status(version)
        if status == VersionStatus.RELEASED:
            return True
        if status == VersionStatus.CLOSED:
            return self._is_product_admin(actor, product)
        return self._has_any_role(actor, product)

    def can_edit(self, page: Page, actor: Optional[Actor] = None) -> bool:
        """Return True if the actor may edit the page."""
        actor = self._actor(actor)
        if self.model.has_draft_shadow(page.identity) and not self._has_global(
            actor, self.rights.edit_live
        ):
            logger.debug(f"{page.identity} has a draft counterpart; editing it is blocked")
            return False

        product, version = self._product_and_version(page)
        if page.page_type == PageType.PRODUCT:
            return self._is_product_admin(actor, product)
        if self._is_invalid_topic(page):
            return True

        status = self._status(version)
        if status == VersionStatus.RELEASED:
            return True
        if status == VersionStatus.CLOSED:
            return self._is_product_admin(actor, product)
        return self._is_product_admin(actor, product) or self._is_product_editor(actor, product)

    def can_administer(self, page: Page, actor: Optional[Actor] = None) -> bool:
        """Return True if the actor may publish, copy or delete the page."""
        actor = self._actor(actor)
        if self._is_invalid_topic(page):
            return self._has_global(actor, self.rights.administer)
        product, _ = self._product_and_version(page)
        return self._is_product_admin(actor, product)
