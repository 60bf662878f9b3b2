"""Typed exception hierarchy for documentation authoring errors.

Authoring errors describe mistakes in how documentation pages were defined
(a page placed under the wrong kind of parent, a page declared twice, an
inheritance chain with nothing to inherit from). They are reported to the
content author and never abort the rendering of unrelated pages.
"""

from typing import Optional

from ..page_store.errors import MintyDocsError


class AuthoringError(MintyDocsError):
    """Base exception for content authoring errors."""

    def __init__(self, message: str, identity: Optional[str] = None):
        super().__init__(message)
        self.identity = identity


class IneligiblePageError(AuthoringError):
    """Raised when a page cannot be defined as the requested page type."""

    def __init__(self, identity: str, page_type: str, reason: str):
        super().__init__(
            f"Page '{identity}' cannot be defined as a {page_type}: {reason}",
            identity=identity
        )
        self.page_type = page_type
        self.reason = reason


class DuplicatePageTypeError(AuthoringError):
    """Raised when a second page type is declared for the same page."""

    def __init__(self, identity: str, existing_type: str, new_type: str):
        super().__init__(
            f"Page '{identity}' is already defined as a {existing_type}; "
            f"it cannot also be defined as a {new_type}",
            identity=identity
        )
        self.existing_type = existing_type
        self.new_type = new_type


class NoSourceVersionError(AuthoringError):
    """Raised when a page inherits content but no earlier version owns any."""

    def __init__(self, identity: str):
        super().__init__(
            f"There is no version from which '{identity}' can inherit",
            identity=identity
        )
