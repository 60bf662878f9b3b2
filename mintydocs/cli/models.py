"""Data models for CLI operations."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional

from ..hierarchy.model import DEFAULT_DRAFT_PREFIX
from ..permissions.identity import RightNames


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): Configuration problems, missing pages, failed tasks
    - AUTHORING_ERROR (2): Content authoring or workflow validation error
    - PERMISSION_DENIED (3): The acting user may not perform the operation
    - STORE_UNREACHABLE (4): The page store could not be reached or refused access
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTHORING_ERROR = 2
    PERMISSION_DENIED = 3
    STORE_UNREACHABLE = 4


@dataclass
class StoreConfig:
    """Page store settings.

    Attributes:
        backend: "yaml" or "confluence"
        path: Page file of the yaml backend
        space_key: Space of live pages (confluence backend)
        draft_space_key: Optional space of Draft pages (confluence backend)
    """
    backend: str = "yaml"
    path: str = "pages.yaml"
    space_key: Optional[str] = None
    draft_space_key: Optional[str] = None


@dataclass
class MintyDocsConfig:
    """Project configuration loaded from .mintydocs/config.yaml.

    Attributes:
        store: Page store settings
        draft_prefix: Identity prefix of the Draft area (e.g., "Draft:")
        rights: Names of the global rights
        users: Mapping of user name to the global rights they hold
        current_user: Name of the acting user

    Example:
        >>> config = MintyDocsConfig(current_user="Alice")
        >>> config.draft_prefix
        'Draft:'
    """
    store: StoreConfig = field(default_factory=StoreConfig)
    draft_prefix: str = DEFAULT_DRAFT_PREFIX
    rights: RightNames = field(default_factory=RightNames)
    users: Dict[str, List[str]] = field(default_factory=dict)
    current_user: Optional[str] = None
