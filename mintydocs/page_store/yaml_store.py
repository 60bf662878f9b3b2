"""YAML-file-backed page store.

Pages are kept in memory and loaded from / saved to a single YAML file, which
makes a complete documentation tree easy to author by hand and to check into
version control.

File structure:
    pages:
      "Widget":
        properties:
          PageType: Product
          ProductAdmins: "Alice, Bob"
      "Widget/1.0":
        body: "Release notes..."
        properties:
          PageType: Version
          ParentPage: Widget
          Status: Released
"""

import os
from typing import Any, Dict

import yaml

from .errors import StoreFileError
from .store import InMemoryPageStore


class YamlPageStore(InMemoryPageStore):
    """In-memory page store persisted as a YAML document.

    Example:
        >>> store = YamlPageStore.load("pages.yaml")
        >>> store.exists("Widget/1.0")
        True
        >>> store.save("pages.yaml")
    """

    def __init__(self, path: str = ""):
        super().__init__()
        self.path = path

    @classmethod
    def load(cls, path: str) -> "YamlPageStore":
        """Load pages from a YAML file.

        A missing or empty file yields an empty store.

        Args:
            path: Path to the YAML file

        Returns:
            YamlPageStore populated with the file's pages

        Raises:
            StoreFileError: If the file cannot be read or is malformed
        """
        store = cls(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            return store
        except PermissionError:
            raise StoreFileError(path, 'read', 'Permission denied')
        except OSError as e:
            raise StoreFileError(path, 'read', str(e))

        if not content.strip():
            return store

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise StoreFileError(path, 'parse', f"Invalid YAML syntax: {e}")

        if data is None:
            return store
        if not isinstance(data, dict):
            raise StoreFileError(
                path, 'parse',
                f"Page file must be a YAML dictionary, got {type(data).__name__}"
            )

        pages = data.get('pages') or {}
        if not isinstance(pages, dict):
            raise StoreFileError(path, 'parse', "Field 'pages' must be a dictionary")

        for identity, page_dict in pages.items():
            store._load_page(path, str(identity), page_dict)

        return store

    def _load_page(self, path: str, identity: str, page_dict: Any) -> None:
        if page_dict is None:
            page_dict = {}
        if not isinstance(page_dict, dict):
            raise StoreFileError(
                path, 'parse', f"Page '{identity}' must be a dictionary"
            )
        properties = page_dict.get('properties') or {}
        if not isinstance(properties, dict):
            raise StoreFileError(
                path, 'parse', f"Properties of page '{identity}' must be a dictionary"
            )
        body = page_dict.get('body')
        self.add_page(identity, body='' if body is None else str(body), properties=properties)

    def save(self, path: str = "") -> None:
        """Write all pages to a YAML file.

        Args:
            path: Destination path (defaults to the path the store was loaded from)

        Raises:
            StoreFileError: If the file cannot be written
        """
        path = path or self.path
        if not path:
            raise StoreFileError('<unset>', 'write', 'No file path given')

        pages: Dict[str, Dict[str, Any]] = {}
        for identity in self.identities():
            page_dict: Dict[str, Any] = {}
            body = self.get_body(identity)
            if body:
                page_dict['body'] = body
            properties = self.get_properties(identity)
            if properties:
                page_dict['properties'] = properties
            pages[identity] = page_dict

        yaml_str = yaml.safe_dump(
            {'pages': pages},
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        directory = os.path.dirname(path)
        if directory:
            try:
                os.makedirs(directory, exist_ok=True)
            except OSError as e:
                raise StoreFileError(directory, 'create_directory', str(e))

        try:
            with open(path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise StoreFileError(path, 'write', 'Permission denied')
        except OSError as e:
            raise StoreFileError(path, 'write', str(e))
