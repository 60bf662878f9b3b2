"""Wiring of the services a CLI command works with."""

import logging
from dataclasses import dataclass

from ..hierarchy.inheritance import InheritanceResolver
from ..hierarchy.model import HierarchyModel
from ..page_store.api_wrapper import APIWrapper
from ..page_store.auth import Authenticator
from ..page_store.confluence_store import ConfluencePageStore
from ..page_store.store import PageStore
from ..page_store.yaml_store import YamlPageStore
from ..permissions.identity import StaticIdentityProvider
from ..permissions.resolver import PermissionResolver
from ..toc.engine import TocEngine
from ..toc.renderer import HtmlRenderer
from .models import MintyDocsConfig

logger = logging.getLogger(__name__)


@dataclass
class DocsContext:
    """Services built from a project configuration.

    Attributes:
        config: Loaded configuration
        store: Page store
        model: Hierarchy model
        resolver: Inheritance resolver
        renderer: HTML renderer
        toc_engine: TOC engine
        permissions: Permission resolver
    """
    config: MintyDocsConfig
    store: PageStore
    model: HierarchyModel
    resolver: InheritanceResolver
    renderer: HtmlRenderer
    toc_engine: TocEngine
    permissions: PermissionResolver

    @classmethod
    def from_config(cls, config: MintyDocsConfig) -> "DocsContext":
        """Build every service for a configuration.

        Raises:
            StoreFileError: If the yaml page file cannot be loaded
            InvalidCredentialsError: If Confluence credentials are missing
        """
        if config.store.backend == 'confluence':
            api = APIWrapper(Authenticator())
            store: PageStore = ConfluencePageStore(
                api,
                config.store.space_key,
                draft_space_key=config.store.draft_space_key,
                draft_prefix=config.draft_prefix,
            )
        else:
            store = YamlPageStore.load(config.store.path)
        logger.debug(f"Using {config.store.backend} page store")
        return cls.from_store(config, store)

    @classmethod
    def from_store(cls, config: MintyDocsConfig, store: PageStore) -> "DocsContext":
        """Build every service over an existing page store."""
        model = HierarchyModel(store, draft_prefix=config.draft_prefix)
        resolver = InheritanceResolver(model)
        renderer = HtmlRenderer(store)
        identity_provider = StaticIdentityProvider(config.users, config.current_user)
        return cls(
            config=config,
            store=store,
            model=model,
            resolver=resolver,
            renderer=renderer,
            toc_engine=TocEngine(model, resolver, renderer),
            permissions=PermissionResolver(model, identity_provider, config.rights),
        )

    def save(self) -> None:
        """Persist the page store if it is file-backed."""
        if isinstance(self.store, YamlPageStore):
            self.store.save()
