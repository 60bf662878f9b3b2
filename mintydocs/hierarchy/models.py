"""Data models for the documentation hierarchy.

This module defines the four page variants (Product, Version, Manual,
Topic), the property names they are stored under, the Version lifecycle
status, and the explicit render context used in place of request-scoped
query values. Page objects are plain snapshots of a page's properties; all
lookups that need the page store live in HierarchyModel.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, List, Optional


class PageType(str, Enum):
    """The four hierarchy levels, most general first."""
    PRODUCT = "Product"
    VERSION = "Version"
    MANUAL = "Manual"
    TOPIC = "Topic"

    @property
    def level(self) -> int:
        """1 for Product through 4 for Topic."""
        return PAGE_TYPES_IN_ORDER.index(self) + 1

    @property
    def parent_type(self) -> Optional["PageType"]:
        """The type a page of this type must be nested under."""
        index = PAGE_TYPES_IN_ORDER.index(self)
        return PAGE_TYPES_IN_ORDER[index - 1] if index > 0 else None

    @classmethod
    def from_value(cls, value: Optional[str]) -> Optional["PageType"]:
        """Return the page type stored as value, or None if unrecognized."""
        for page_type in cls:
            if page_type.value == value:
                return page_type
        return None


PAGE_TYPES_IN_ORDER = [PageType.PRODUCT, PageType.VERSION, PageType.MANUAL, PageType.TOPIC]


class PageProperty:
    """Names of the page properties read and written by the hierarchy."""
    PAGE_TYPE = "PageType"
    PARENT_PAGE = "ParentPage"
    DISPLAY_NAME = "DisplayName"
    INHERIT = "Inherit"
    TOPICS_LIST = "TopicsList"
    MANUALS_LIST = "ManualsList"
    STATUS = "Status"
    PRODUCT_ADMINS = "ProductAdmins"
    PRODUCT_EDITORS = "ProductEditors"
    PRODUCT_PREVIEWERS = "ProductPreviewers"
    TOC_NAME = "TOCName"
    PAGINATION = "Pagination"
    TOPIC_DEFAULT_FORM = "TopicDefaultForm"
    TOPIC_ALTERNATE_FORMS = "TopicAlternateForms"

    ALL = (
        PAGE_TYPE, PARENT_PAGE, DISPLAY_NAME, INHERIT, TOPICS_LIST, MANUALS_LIST,
        STATUS, PRODUCT_ADMINS, PRODUCT_EDITORS, PRODUCT_PREVIEWERS, TOC_NAME,
        PAGINATION, TOPIC_DEFAULT_FORM, TOPIC_ALTERNATE_FORMS,
    )


class VersionStatus(Enum):
    """Lifecycle status of a Version."""
    RELEASED = "Released"
    UNRELEASED = "Unreleased"
    CLOSED = "Closed"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "VersionStatus":
        """Parse a stored status value, case-insensitively.

        Blank and unrecognized values are treated as UNRELEASED.

        Example:
            >>> VersionStatus.parse("RELEASED")
            <VersionStatus.RELEASED: 'Released'>
            >>> VersionStatus.parse("beta")
            <VersionStatus.UNRELEASED: 'Unreleased'>
        """
        normalized = (raw or "").strip().lower()
        for status in cls:
            if status.value.lower() == normalized:
                return status
        return cls.UNRELEASED


def split_list(raw: Optional[str]) -> List[str]:
    """Split a comma-separated property value into trimmed, non-empty entries."""
    if not raw:
        return []
    return [entry.strip() for entry in raw.split(",") if entry.strip()]


@dataclass
class Page:
    """Common fields of every hierarchy page.

    Attributes:
        identity: Full page name, including any namespace prefix
        parent_page: Identity stored in the ParentPage property (None if unset)
        display_name_property: Raw DisplayName property (None if unset)
        inherit: Whether the page inherits content and parameters
        properties: Snapshot of every stored property of the page
    """
    page_type: ClassVar[PageType]

    identity: str
    parent_page: Optional[str] = None
    display_name_property: Optional[str] = None
    inherit: bool = False
    properties: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_properties(cls, identity: str, properties: Dict[str, str]) -> "Page":
        """Build a page of this class from its stored properties."""
        page = cls(
            identity=identity,
            parent_page=properties.get(PageProperty.PARENT_PAGE),
            display_name_property=properties.get(PageProperty.DISPLAY_NAME),
            inherit=bool(properties.get(PageProperty.INHERIT)),
            properties=dict(properties),
        )
        page._load_fields(properties)
        return page

    def _load_fields(self, properties: Dict[str, str]) -> None:
        pass

    def get(self, key: str) -> Optional[str]:
        """Return a stored property of this page."""
        return self.properties.get(key)


@dataclass
class ProductPage(Page):
    """A Product page.

    Attributes:
        admins: Names listed in ProductAdmins
        editors: Names listed in ProductEditors
        previewers: Names listed in ProductPreviewers
    """
    page_type: ClassVar[PageType] = PageType.PRODUCT

    admins: List[str] = field(default_factory=list)
    editors: List[str] = field(default_factory=list)
    previewers: List[str] = field(default_factory=list)

    def _load_fields(self, properties: Dict[str, str]) -> None:
        self.admins = split_list(properties.get(PageProperty.PRODUCT_ADMINS))
        self.editors = split_list(properties.get(PageProperty.PRODUCT_EDITORS))
        self.previewers = split_list(properties.get(PageProperty.PRODUCT_PREVIEWERS))


@dataclass
class VersionPage(Page):
    """A Version page.

    Attributes:
        status_text: Raw Status property, shown as-is
        manuals_list: Raw ManualsList property (not inherited)
    """
    page_type: ClassVar[PageType] = PageType.VERSION

    status_text: Optional[str] = None
    manuals_list: Optional[str] = None

    def _load_fields(self, properties: Dict[str, str]) -> None:
        self.status_text = properties.get(PageProperty.STATUS)
        self.manuals_list = properties.get(PageProperty.MANUALS_LIST)

    @property
    def status(self) -> VersionStatus:
        return VersionStatus.parse(self.status_text)


@dataclass
class ManualPage(Page):
    """A Manual page.

    The fields hold this page's own values; use the inheritance resolver to
    get the effective ones.

    Attributes:
        topics_list: TOC markup, or the name of a page holding it
        pagination: Whether topics show previous/next links
        topic_default_form: Form used to create missing topics
        topic_alternate_forms: Comma-separated alternative forms
    """
    page_type: ClassVar[PageType] = PageType.MANUAL

    topics_list: Optional[str] = None
    pagination: bool = False
    topic_default_form: Optional[str] = None
    topic_alternate_forms: Optional[str] = None

    def _load_fields(self, properties: Dict[str, str]) -> None:
        self.topics_list = properties.get(PageProperty.TOPICS_LIST)
        self.pagination = bool(properties.get(PageProperty.PAGINATION))
        self.topic_default_form = properties.get(PageProperty.TOPIC_DEFAULT_FORM)
        self.topic_alternate_forms = properties.get(PageProperty.TOPIC_ALTERNATE_FORMS)


@dataclass
class TopicPage(Page):
    """A Topic page.

    Attributes:
        toc_name: Label used for this topic in tables of contents
    """
    page_type: ClassVar[PageType] = PageType.TOPIC

    toc_name: Optional[str] = None

    def _load_fields(self, properties: Dict[str, str]) -> None:
        self.toc_name = properties.get(PageProperty.TOC_NAME)

    @property
    def is_invalid(self) -> bool:
        """True if the topic is not nested under a Manual."""
        return self.parent_page is None


PAGE_CLASSES = {
    PageType.PRODUCT: ProductPage,
    PageType.VERSION: VersionPage,
    PageType.MANUAL: ManualPage,
    PageType.TOPIC: TopicPage,
}


@dataclass(frozen=True)
class RenderContext:
    """The Manual a page is being viewed within.

    Replaces the product/version/manual query values of a page request.

    Attributes:
        product: Product identity
        version: Version actual name
        manual: Manual actual name
    """
    product: str
    version: str
    manual: str

    @property
    def manual_identity(self) -> str:
        return f"{self.product}/{self.version}/{self.manual}"
