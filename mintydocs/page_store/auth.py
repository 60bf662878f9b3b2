"""Authentication module for loading Confluence credentials.

This module loads the credentials of the Confluence instance backing the
page store from environment variables using python-dotenv, and raises
InvalidCredentialsError if any of them is missing.
"""

import os
from typing import NamedTuple

from dotenv import load_dotenv

from .errors import InvalidCredentialsError


class Credentials(NamedTuple):
    """Confluence API credentials."""
    url: str
    user: str
    api_token: str


class Authenticator:
    """Loads and validates Confluence credentials from environment variables.

    Required environment variables:
        CONFLUENCE_URL: Confluence instance URL (e.g., https://example.atlassian.net/wiki)
        CONFLUENCE_USER: Confluence user email address
        CONFLUENCE_API_TOKEN: Confluence API token

    Credentials are never cached or logged.

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
        >>> print(f"Connecting to {creds.url}")
    """

    def __init__(self):
        load_dotenv()

    def get_credentials(self) -> Credentials:
        """Get Confluence credentials from environment variables.

        Returns:
            Credentials: A named tuple containing url, user, and api_token

        Raises:
            InvalidCredentialsError: If any required credential is missing
        """
        url = os.getenv('CONFLUENCE_URL')
        user = os.getenv('CONFLUENCE_USER')
        api_token = os.getenv('CONFLUENCE_API_TOKEN')

        if not url or not user or not api_token:
            raise InvalidCredentialsError(
                user=user if user else "unknown",
                endpoint=url if url else "unknown"
            )

        return Credentials(url=url, user=user, api_token=api_token)
