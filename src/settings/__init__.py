"""Configuration and error types for the post-review tool.

This package loads the YAML configuration that tunes change detection and
list normalization, and defines the typed exception hierarchy shared by
the CLI.
"""

from .errors import ReviewError, ConfigError, FilesystemError
from .models import ReviewConfig
from .config_loader import ConfigLoader

__all__ = [
    'ReviewError',
    'ConfigError',
    'FilesystemError',
    'ReviewConfig',
    'ConfigLoader',
]
