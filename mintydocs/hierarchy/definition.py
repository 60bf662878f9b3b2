"""Page definition: storing the hierarchy properties of a page.

A page becomes part of the hierarchy when it is defined as a Product,
Version, Manual or Topic. Definitions happen inside a definition pass for
one identity; the pass starts by clearing every hierarchy property the page
had, so a page's properties always reflect its latest definition only.

Example:
    >>> definer = PageDefiner(model)
    >>> with definer.definition_pass("Widget/1.0/Guide") as page:
    ...     page.define_manual("Widget/1.0/Guide", topics_list="*Installing")
"""

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Union

from .errors import DuplicatePageTypeError, IneligiblePageError
from .inheritance import InheritanceResolver
from .model import HierarchyModel
from .models import ManualPage, PageProperty, PageType, TopicPage

logger = logging.getLogger(__name__)

RoleList = Union[str, List[str], None]


def normalize_user_name(name: str) -> str:
    """Write a user name the way role lists store it."""
    name = name.replace("_", " ").strip()
    return name[:1].upper() + name[1:]


def normalize_role_list(value: RoleList) -> Optional[str]:
    """Standardize a list of user names as stored in Product role properties.

    Each entry is trimmed, underscores become spaces and its first character
    is upper-cased, the way user names are written in page titles. Empty
    entries are dropped.

    Example:
        >>> normalize_role_list("alice_smith, bob")
        'Alice smith, Bob'
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(",")
    names = [normalize_user_name(name) for name in value]
    names = [name for name in names if name]
    if not names:
        return None
    return ", ".join(names)


class PageDefiner:
    """Writes page definitions to the page store.

    Args:
        model: Hierarchy model over the store being written
        resolver: Inheritance resolver used for inherited display names
    """

    def __init__(self, model: HierarchyModel, resolver: Optional[InheritanceResolver] = None):
        self.model = model
        self.resolver = resolver or InheritanceResolver(model)
        self._passes: Dict[str, Optional[PageType]] = {}

    @contextmanager
    def definition_pass(self, identity: str) -> Iterator["PageDefiner"]:
        """Open a definition pass for a page, clearing its hierarchy properties."""
        for key in PageProperty.ALL:
            if self.model.store.get_property(identity, key) is not None:
                self.model.store.delete_property(identity, key)
        self._passes[identity] = None
        try:
            yield self
        finally:
            del self._passes[identity]

    def _define(self, identity: str, page_type: PageType, properties: Dict[str, object]) -> None:
        if identity not in self._passes:
            with self.definition_pass(identity):
                self._define(identity, page_type, properties)
            return

        declared = self._passes[identity]
        if declared is not None:
            raise DuplicatePageTypeError(identity, declared.value, page_type.value)
        self._passes[identity] = page_type

        self.model.store.set_property(identity, PageProperty.PAGE_TYPE, page_type.value)
        for key, value in properties.items():
            self.model.store.set_property(identity, key, value)
        logger.debug(f"Defined {identity} as a {page_type.value}")

    def _check_eligibility(self, identity: str, page_type: PageType) -> str:
        reason = self.model.check_eligibility(identity, page_type)
        if reason is not None:
            raise IneligiblePageError(identity, page_type.value, reason)
        return identity.rsplit("/", 1)[0]

    def define_product(
        self,
        identity: str,
        display_name: Optional[str] = None,
        admins: RoleList = None,
        editors: RoleList = None,
        previewers: RoleList = None,
    ) -> None:
        """Define a Product page with its per-Product role lists."""
        self._define(identity, PageType.PRODUCT, {
            PageProperty.DISPLAY_NAME: display_name,
            PageProperty.PRODUCT_ADMINS: normalize_role_list(admins),
            PageProperty.PRODUCT_EDITORS: normalize_role_list(editors),
            PageProperty.PRODUCT_PREVIEWERS: normalize_role_list(previewers),
        })

    def define_version(
        self,
        identity: str,
        status: Optional[str] = None,
        manuals_list: Optional[str] = None,
        inherit: bool = False,
    ) -> None:
        """Define a Version page.

        Raises:
            IneligiblePageError: If the parent page is not a Product
        """
        parent = self._check_eligibility(identity, PageType.VERSION)
        self._define(identity, PageType.VERSION, {
            PageProperty.PARENT_PAGE: parent,
            PageProperty.STATUS: status,
            PageProperty.MANUALS_LIST: manuals_list,
            PageProperty.INHERIT: inherit,
        })

    def define_manual(
        self,
        identity: str,
        display_name: Optional[str] = None,
        topics_list: Optional[str] = None,
        topics_list_page: Optional[str] = None,
        inherit: bool = False,
        pagination: bool = False,
        topic_default_form: Optional[str] = None,
        topic_alternate_forms: Optional[str] = None,
    ) -> None:
        """Define a Manual page.

        topics_list holds TOC markup and topics_list_page names a page that
        holds it; both are stored in TopicsList.

        Raises:
            IneligiblePageError: If the parent page is not a Version
        """
        parent = self._check_eligibility(identity, PageType.MANUAL)
        if display_name is None and inherit:
            display_name = self._inherited_param(identity, ManualPage, PageProperty.DISPLAY_NAME)
        self._define(identity, PageType.MANUAL, {
            PageProperty.PARENT_PAGE: parent,
            PageProperty.DISPLAY_NAME: display_name,
            PageProperty.INHERIT: inherit,
            PageProperty.TOPICS_LIST: topics_list if topics_list is not None else topics_list_page,
            PageProperty.PAGINATION: pagination,
            PageProperty.TOPIC_DEFAULT_FORM: topic_default_form,
            PageProperty.TOPIC_ALTERNATE_FORMS: topic_alternate_forms,
        })

    def define_topic(
        self,
        identity: str,
        display_name: Optional[str] = None,
        toc_name: Optional[str] = None,
        inherit: bool = False,
    ) -> None:
        """Define a Topic page.

        A Topic whose parent is not a Manual is still defined, as an invalid
        topic with no ParentPage.
        """
        parent = None
        reason = self.model.check_eligibility(identity, PageType.TOPIC)
        if reason is None:
            parent = identity.rsplit("/", 1)[0]
        else:
            logger.info(f"Defining {identity} as an invalid topic: {reason}")

        if parent is not None and inherit:
            if display_name is None:
                display_name = self._inherited_param(identity, TopicPage, PageProperty.DISPLAY_NAME)
            if toc_name is None:
                toc_name = self._inherited_param(identity, TopicPage, PageProperty.TOC_NAME)
        if toc_name is None:
            toc_name = display_name or self.model.live_identity(identity).rsplit("/", 1)[-1]

        self._define(identity, PageType.TOPIC, {
            PageProperty.PARENT_PAGE: parent,
            PageProperty.DISPLAY_NAME: display_name,
            PageProperty.INHERIT: inherit,
            PageProperty.TOC_NAME: toc_name,
        })

    def _inherited_param(self, identity: str, page_class, key: str) -> Optional[str]:
        # The page has no properties yet, so only the inheritance chain is read.
        page = page_class(identity=identity, inherit=True)
        return self.resolver.resolve_inherited_param(page, key)
