"""Command-line interface for MintyDocs.

This package provides the `mintydocs` CLI tool: configuration loading,
service wiring, terminal output and the typer application.
"""

from .config import ConfigLoader
from .context import DocsContext
from .errors import CLIError, ConfigError, ConfigNotFoundError, FilesystemError
from .models import ExitCode, MintyDocsConfig, StoreConfig

__all__ = [
    'CLIError',
    'ConfigError',
    'ConfigLoader',
    'ConfigNotFoundError',
    'DocsContext',
    'ExitCode',
    'FilesystemError',
    'MintyDocsConfig',
    'StoreConfig',
]
