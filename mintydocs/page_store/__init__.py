"""Page store adapters.

The PageStore interface is the only way the rest of the package reads or
writes pages. Three adapters are provided: an in-memory store, a YAML-file
store and a Confluence-backed store.
"""

from .api_wrapper import APIWrapper
from .auth import Authenticator, Credentials
from .confluence_store import ConfluencePageStore
from .errors import (
    InvalidCredentialsError,
    MintyDocsError,
    PageNotFoundError,
    PageStoreError,
    StoreAccessError,
    StoreFileError,
    StoreUnreachableError,
)
from .store import (
    PARENT_PROPERTY,
    InMemoryPageStore,
    PageStore,
    Revision,
    StoredPage,
    normalize_property_value,
)
from .yaml_store import YamlPageStore

__all__ = [
    "APIWrapper",
    "Authenticator",
    "ConfluencePageStore",
    "Credentials",
    "InMemoryPageStore",
    "InvalidCredentialsError",
    "MintyDocsError",
    "PARENT_PROPERTY",
    "PageNotFoundError",
    "PageStore",
    "PageStoreError",
    "Revision",
    "StoreAccessError",
    "StoreFileError",
    "StoreUnreachableError",
    "StoredPage",
    "YamlPageStore",
    "normalize_property_value",
]
