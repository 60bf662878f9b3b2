"""Identity provider: the acting user and their global rights."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Set

ADMINISTER_RIGHT = "mintydocs-administer"
EDIT_RIGHT = "mintydocs-edit"
PREVIEW_RIGHT = "mintydocs-preview"
EDIT_LIVE_RIGHT = "mintydocs-editlive"


@dataclass(frozen=True)
class Actor:
    """A user acting on documentation pages.

    Attributes:
        name: User name as written in Product role lists
    """
    name: str


@dataclass(frozen=True)
class RightNames:
    """Names of the global rights the permission rules check.

    Attributes:
        administer: Right to administer every Product
        edit: Right to edit every unreleased Version
        preview: Right to view every unreleased Version
        edit_live: Right to edit live pages that have a Draft counterpart
    """
    administer: str = ADMINISTER_RIGHT
    edit: str = EDIT_RIGHT
    preview: str = PREVIEW_RIGHT
    edit_live: str = EDIT_LIVE_RIGHT


class IdentityProvider(ABC):
    """Interface of the identity and role provider."""

    @abstractmethod
    def current_actor(self) -> Actor:
        """Return the user performing the current request."""

    @abstractmethod
    def actor_has_global_right(self, actor: Actor, right_name: str) -> bool:
        """Return True if the user holds a named global right."""


class StaticIdentityProvider(IdentityProvider):
    """Identity provider backed by a fixed mapping of users to rights.

    Args:
        users: Mapping of user name to the global rights they hold
        current_user: Name of the acting user (anonymous if None)

    Example:
        >>> provider = StaticIdentityProvider({"Alice": ["mintydocs-administer"]}, "Alice")
        >>> provider.actor_has_global_right(provider.current_actor(), "mintydocs-administer")
        True
    """

    ANONYMOUS = Actor(name="")

    def __init__(
        self,
        users: Optional[Dict[str, Iterable[str]]] = None,
        current_user: Optional[str] = None
    ):
        self._rights: Dict[str, Set[str]] = {
            name: set(rights or []) for name, rights in (users or {}).items()
        }
        self._current_user = current_user

    def current_actor(self) -> Actor:
        if self._current_user is None:
            return self.ANONYMOUS
        return Actor(name=self._current_user)

    def actor_has_global_right(self, actor: Actor, right_name: str) -> bool:
        return right_name in self._rights.get(actor.name, set())
