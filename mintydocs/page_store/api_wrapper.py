"""API wrapper for the Confluence REST API.

This module wraps the atlassian-python-api Confluence client with the
operations the Confluence page store needs, translating HTTP failures into
the page store exception hierarchy and retrying rate-limited calls.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from atlassian import Confluence
from requests.exceptions import ConnectionError, ConnectTimeout, ReadTimeout, Timeout

from .auth import Authenticator
from .errors import (
    InvalidCredentialsError,
    PageNotFoundError,
    StoreAccessError,
    StoreUnreachableError,
)
from .retry_logic import is_rate_limit_error, retry_on_rate_limit

logger = logging.getLogger(__name__)

# Page child listings are fetched in batches of this size.
CHILD_PAGE_BATCH = 100


class APIWrapper:
    """Thin wrapper over the atlassian-python-api Confluence client.

    Pages are addressed by (space, title); numeric page IDs are looked up
    internally and never leak to callers.

    Example:
        >>> api = APIWrapper(Authenticator())
        >>> page = api.get_page_by_title("DOCS", "Widget/1.0")
    """

    def __init__(self, authenticator: Authenticator):
        self._authenticator = authenticator
        self._client: Optional[Confluence] = None

    def _get_client(self) -> Confluence:
        if self._client is None:
            creds = self._authenticator.get_credentials()
            self._client = Confluence(
                url=creds.url,
                username=creds.user,
                password=creds.api_token,
                cloud=True,
                timeout=30,
            )
        return self._client

    @staticmethod
    def _sanitize_credentials(text: str) -> str:
        """Mask passwords, tokens and e-mail local parts in an error message."""
        if not text:
            return text
        sanitized = re.sub(r'://([\w.-]+):([\w.-]+)@', r'://***:***@', text)
        sanitized = re.sub(
            r'Authorization:\s*[^\n\r]+',
            'Authorization: ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'(api_?token|token|password)["\']?\s*[:=]\s*["\']?([^"\'\s&]+)',
            r'\1=***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'\b[\w.-]+@([\w.-]+\.[a-z]{2,})\b',
            r'***@\1',
            sanitized,
            flags=re.IGNORECASE
        )
        return sanitized

    def _translate_error(
        self,
        exception: Exception,
        operation: str,
        title: str = "unknown"
    ) -> Exception:
        """Translate an HTTP client exception into a page store exception.

        Args:
            exception: The original exception from the API client
            operation: Description of the failed operation (for logging)
            title: Page title the operation addressed

        Returns:
            The translated exception
        """
        if isinstance(exception, (Timeout, ConnectTimeout, ReadTimeout, ConnectionError)):
            return StoreUnreachableError(endpoint=self._authenticator.get_credentials().url)

        status_code = getattr(exception, 'status_code', None)
        response = getattr(exception, 'response', None)
        if status_code is None and response is not None:
            status_code = getattr(response, 'status_code', None)

        error_msg = str(exception).lower()

        if status_code == 401 or '401' in error_msg or 'unauthorized' in error_msg:
            creds = self._authenticator.get_credentials()
            return InvalidCredentialsError(user=creds.user, endpoint=creds.url)

        if status_code == 404 or '404' in error_msg or 'not found' in error_msg:
            return PageNotFoundError(title)

        if any(keyword in error_msg for keyword in (
            'connection', 'timeout', 'unreachable', 'network', 'failed to connect'
        )):
            return StoreUnreachableError(endpoint=self._authenticator.get_credentials().url)

        safe_error_msg = self._sanitize_credentials(str(exception))
        logger.error(f"API operation failed: {operation} - {safe_error_msg}")
        return StoreAccessError(f"Confluence API failure during {operation}")

    def _call(self, operation: str, title: str, func, *args, **kwargs):
        def _run():
            try:
                return func(self._get_client(), *args, **kwargs)
            except Exception as e:
                if is_rate_limit_error(e):
                    raise
                raise self._translate_error(e, operation, title) from e

        return retry_on_rate_limit(_run)

    def get_page_by_title(self, space: str, title: str) -> Optional[Dict[str, Any]]:
        """Fetch a page with its storage body and version.

        Returns:
            Page data, or None if the page does not exist

        Raises:
            InvalidCredentialsError: If credentials are invalid
            StoreUnreachableError: If Confluence is unreachable
            StoreAccessError: If the call fails after retries
        """
        try:
            return self._call(
                f"get_page_by_title({space}, {title})",
                title,
                lambda client: client.get_page_by_title(
                    space=space, title=title, expand="body.storage,version"
                ),
            )
        except PageNotFoundError:
            return None

    def get_child_pages(self, page_id: str) -> List[Dict[str, Any]]:
        """Return every direct child page of a page."""
        children: List[Dict[str, Any]] = []
        start = 0
        while True:
            batch = self._call(
                f"get_page_child_by_type({page_id})",
                page_id,
                lambda client: client.get_page_child_by_type(
                    page_id, type='page', start=start, limit=CHILD_PAGE_BATCH
                ),
            )
            batch = list(batch or [])
            children.extend(batch)
            if len(batch) < CHILD_PAGE_BATCH:
                return children
            start += CHILD_PAGE_BATCH

    def create_page(
        self,
        space: str,
        title: str,
        body: str,
        parent_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """Create a page in storage representation."""
        return self._call(
            f"create_page({space}, {title})",
            title,
            lambda client: client.create_page(
                space=space,
                title=title,
                body=body,
                parent_id=parent_id,
                representation='storage',
            ),
        )

    def update_page(
        self,
        page_id: str,
        title: str,
        body: str,
        parent_id: Optional[str] = None,
        version_comment: Optional[str] = None
    ) -> Dict[str, Any]:
        """Replace the body of an existing page."""
        return self._call(
            f"update_page({page_id})",
            title,
            lambda client: client.update_page(
                page_id=page_id,
                title=title,
                body=body,
                parent_id=parent_id,
                representation='storage',
                version_comment=version_comment,
                always_update=True,
            ),
        )

    def remove_page(self, page_id: str, title: str) -> None:
        """Move a page to the trash."""
        self._call(
            f"remove_page({page_id})",
            title,
            lambda client: client.remove_page(page_id),
        )

    def get_properties(self, page_id: str) -> Dict[str, Dict[str, Any]]:
        """Return the content properties of a page keyed by property key.

        Each value holds the raw 'value' and the property's 'version' number.
        """
        result = self._call(
            f"get_page_properties({page_id})",
            page_id,
            lambda client: client.get_page_properties(page_id),
        )
        properties = {}
        for item in (result or {}).get('results', []):
            properties[item['key']] = {
                'value': item.get('value'),
                'version': item.get('version', {}).get('number', 1),
            }
        return properties

    def set_property(
        self,
        page_id: str,
        key: str,
        value: str,
        current_version: Optional[int] = None
    ) -> None:
        """Create a content property, or update it if current_version is given."""
        if current_version is None:
            self._call(
                f"set_page_property({page_id}, {key})",
                page_id,
                lambda client: client.set_page_property(
                    page_id, {'key': key, 'value': value}
                ),
            )
        else:
            self._call(
                f"update_page_property({page_id}, {key})",
                page_id,
                lambda client: client.update_page_property(
                    page_id,
                    {'key': key, 'value': value, 'version': {'number': current_version + 1}},
                ),
            )

    def delete_property(self, page_id: str, key: str) -> None:
        """Delete a content property."""
        self._call(
            f"delete_page_property({page_id}, {key})",
            page_id,
            lambda client: client.delete_page_property(page_id, key),
        )
