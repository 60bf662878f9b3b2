"""Retry logic with exponential backoff for rate-limited store calls.

Only HTTP 429 responses are retried (after 1s, 2s and 4s); every other
error is raised immediately.
"""

import logging
import time
from typing import Callable, TypeVar

from .errors import StoreAccessError

logger = logging.getLogger(__name__)

T = TypeVar('T')

MAX_RETRIES = 3


def retry_on_rate_limit(func: Callable[..., T], *args, **kwargs) -> T:
    """Call func, retrying on rate limit errors with exponential backoff.

    Args:
        func: The function to execute
        *args: Positional arguments for func
        **kwargs: Keyword arguments for func

    Returns:
        The return value of func

    Raises:
        StoreAccessError: If the rate limit persists after MAX_RETRIES retries
        Other exceptions: Passed through immediately without retry

    Example:
        >>> page = retry_on_rate_limit(client.get_page_by_title, "DOCS", "Widget")
    """
    for retry_num in range(MAX_RETRIES + 1):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if not is_rate_limit_error(e):
                raise

            if retry_num >= MAX_RETRIES:
                logger.error(
                    f"Rate limit persisted after {MAX_RETRIES} retries, giving up"
                )
                raise StoreAccessError(
                    f"Page store failure (after {MAX_RETRIES} retries)"
                ) from e

            wait_time = 2 ** retry_num
            logger.info(
                f"Rate limit hit, retrying in {wait_time}s "
                f"(retry {retry_num + 1}/{MAX_RETRIES})"
            )
            time.sleep(wait_time)

    raise StoreAccessError(f"Page store failure (after {MAX_RETRIES} retries)")


def is_rate_limit_error(exception: Exception) -> bool:
    """Check if an exception represents a rate limit (429) error.

    Args:
        exception: The exception to check

    Returns:
        True if this appears to be a rate limit error, False otherwise
    """
    error_msg = str(exception).lower()
    rate_limit_patterns = [
        '429',
        'too many requests',
        'rate limit exceeded',
        'rate limited',
    ]
    if any(pattern in error_msg for pattern in rate_limit_patterns):
        return True

    if getattr(exception, 'status_code', None) == 429:
        return True

    response = getattr(exception, 'response', None)
    if response is not None and getattr(response, 'status_code', None) == 429:
        return True

    return False
