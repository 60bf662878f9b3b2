"""Permissions: identity provider and permission resolver."""

from .identity import (
    ADMINISTER_RIGHT,
    EDIT_LIVE_RIGHT,
    EDIT_RIGHT,
    PREVIEW_RIGHT,
    Actor,
    IdentityProvider,
    RightNames,
    StaticIdentityProvider,
)
from .resolver import PermissionResolver, normalize_user_name

__all__ = [
    "ADMINISTER_RIGHT",
    "Actor",
    "EDIT_LIVE_RIGHT",
    "EDIT_RIGHT",
    "IdentityProvider",
    "PREVIEW_RIGHT",
    "PermissionResolver",
    "RightNames",
    "StaticIdentityProvider",
    "normalize_user_name",
]
