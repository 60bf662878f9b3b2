"""Documentation hierarchy: Product, Version, Manual and Topic pages.

Provides the typed page model, page definition, the version comparator and
inheritance of content and parameters across Versions.
"""

from .definition import PageDefiner, normalize_role_list
from .errors import (
    AuthoringError,
    DuplicatePageTypeError,
    IneligiblePageError,
    NoSourceVersionError,
)
from .inheritance import InheritanceResolver
from .model import DEFAULT_DRAFT_PREFIX, HierarchyModel, ManualListing
from .models import (
    PAGE_TYPES_IN_ORDER,
    ManualPage,
    Page,
    PageProperty,
    PageType,
    ProductPage,
    RenderContext,
    TopicPage,
    VersionPage,
    VersionStatus,
    split_list,
)
from .versioning import compare_versions, sort_versions

__all__ = [
    "AuthoringError",
    "DEFAULT_DRAFT_PREFIX",
    "DuplicatePageTypeError",
    "HierarchyModel",
    "IneligiblePageError",
    "InheritanceResolver",
    "ManualListing",
    "ManualPage",
    "NoSourceVersionError",
    "PAGE_TYPES_IN_ORDER",
    "Page",
    "PageDefiner",
    "PageProperty",
    "PageType",
    "ProductPage",
    "RenderContext",
    "TopicPage",
    "VersionPage",
    "VersionStatus",
    "compare_versions",
    "normalize_role_list",
    "sort_versions",
    "split_list",
]
