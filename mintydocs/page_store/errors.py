"""Typed exception hierarchy for page store errors.

This module defines the root exception of the package and all custom
exceptions raised by page store adapters. All exceptions inherit from
MintyDocsError for easy catching and include descriptive messages with
context to help with debugging.
"""

from typing import Optional


class MintyDocsError(Exception):
    """Base exception for all mintydocs errors.

    Use this to catch any application-level error from the package.
    """
    pass


class PageStoreError(MintyDocsError):
    """Base exception for all page store errors."""
    pass


class PageNotFoundError(PageStoreError):
    """Raised when a write operation targets a page that does not exist."""

    def __init__(self, identity: str):
        super().__init__(f"Page '{identity}' not found")
        self.identity = identity


class InvalidCredentialsError(PageStoreError):
    """Raised when store credentials are missing or rejected."""

    def __init__(self, user: str, endpoint: str):
        super().__init__(
            f"Credentials are invalid (user: {user}, endpoint: {endpoint})"
        )
        self.user = user
        self.endpoint = endpoint


class StoreUnreachableError(PageStoreError):
    """Raised when the backing wiki is not available."""

    def __init__(self, endpoint: str):
        super().__init__(f"Page store is not available at {endpoint}")
        self.endpoint = endpoint


class StoreAccessError(PageStoreError):
    """Raised when a store operation fails after retries or is refused."""

    def __init__(self, message: str = "Page store failure (after 3 retries)"):
        super().__init__(message)


class StoreFileError(PageStoreError):
    """Raised when a file-backed store cannot be read, parsed or written."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Page store file operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason
