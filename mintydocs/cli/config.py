"""YAML configuration loading and validation.

Configuration file structure:
    store:
      backend: yaml            # yaml | confluence
      path: pages.yaml         # yaml backend
      space_key: DOCS          # confluence backend
      draft_space_key: DRAFT   # confluence backend, optional
    draft_namespace: Draft
    rights:
      administer: mintydocs-administer
      edit: mintydocs-edit
      preview: mintydocs-preview
      edit_live: mintydocs-editlive
    users:
      Alice: [mintydocs-administer]
    current_user: Alice

A relative store path is resolved against the directory holding the
.mintydocs directory (the project root).
"""

import os
from typing import Any, Dict

import yaml

from ..permissions.identity import RightNames
from .errors import ConfigError, ConfigNotFoundError, FilesystemError
from .models import MintyDocsConfig, StoreConfig

DEFAULT_CONFIG_PATH = ".mintydocs/config.yaml"


class ConfigLoader:
    """Loads and validates the project configuration."""

    BACKENDS = {'yaml', 'confluence'}

    RIGHT_FIELDS = {'administer', 'edit', 'preview', 'edit_live'}

    @classmethod
    def load(cls, config_path: str = DEFAULT_CONFIG_PATH) -> MintyDocsConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            MintyDocsConfig with parsed configuration

        Raises:
            ConfigNotFoundError: If the file does not exist
            FilesystemError: If the file cannot be read
            ConfigError: If the configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigNotFoundError(config_path)
        except PermissionError:
            raise FilesystemError(config_path, 'read', 'Permission denied')
        except OSError as e:
            raise FilesystemError(config_path, 'read', str(e))

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            raise ConfigError("Configuration file is empty")
        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        config = cls._parse_config(config_dict)
        if config.store.backend == 'yaml' and not os.path.isabs(config.store.path):
            project_root = os.path.dirname(os.path.dirname(os.path.abspath(config_path)))
            config.store.path = os.path.join(project_root, config.store.path)
        return config

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> MintyDocsConfig:
        store = cls._parse_store(config_dict.get('store') or {})

        namespace = config_dict.get('draft_namespace', 'Draft')
        if not isinstance(namespace, str) or not namespace.strip():
            raise ConfigError("Must be a non-empty string", 'draft_namespace')

        rights_dict = config_dict.get('rights') or {}
        if not isinstance(rights_dict, dict):
            raise ConfigError("Must be a dictionary", 'rights')
        unknown = set(rights_dict) - cls.RIGHT_FIELDS
        if unknown:
            raise ConfigError(f"Unknown right(s): {', '.join(sorted(unknown))}", 'rights')
        rights = RightNames(**{key: str(value) for key, value in rights_dict.items()})

        users_dict = config_dict.get('users') or {}
        if not isinstance(users_dict, dict):
            raise ConfigError("Must be a dictionary of user name to rights", 'users')
        users = {}
        for name, user_rights in users_dict.items():
            if user_rights is None:
                user_rights = []
            if not isinstance(user_rights, list):
                raise ConfigError(f"Rights of '{name}' must be a list", 'users')
            users[str(name)] = [str(right) for right in user_rights]

        current_user = config_dict.get('current_user')
        if current_user is not None and not isinstance(current_user, str):
            raise ConfigError("Must be a string", 'current_user')

        return MintyDocsConfig(
            store=store,
            draft_prefix=f"{namespace.strip()}:",
            rights=rights,
            users=users,
            current_user=current_user,
        )

    @classmethod
    def _parse_store(cls, store_dict: Any) -> StoreConfig:
        if not isinstance(store_dict, dict):
            raise ConfigError("Must be a dictionary", 'store')

        backend = store_dict.get('backend', 'yaml')
        if backend not in cls.BACKENDS:
            raise ConfigError(
                f"Must be one of {', '.join(sorted(cls.BACKENDS))}, got '{backend}'",
                'store.backend'
            )

        store = StoreConfig(backend=backend)
        if backend == 'yaml':
            path = store_dict.get('path', store.path)
            if not isinstance(path, str) or not path.strip():
                raise ConfigError("Must be a non-empty string", 'store.path')
            store.path = path
        else:
            space_key = store_dict.get('space_key')
            if not isinstance(space_key, str) or not space_key.strip():
                raise ConfigError("Required for the confluence backend", 'store.space_key')
            store.space_key = space_key
            draft_space_key = store_dict.get('draft_space_key')
            if draft_space_key is not None and not isinstance(draft_space_key, str):
                raise ConfigError("Must be a string", 'store.draft_space_key')
            store.draft_space_key = draft_space_key
        return store
