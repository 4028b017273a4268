"""Typed exception hierarchy for post-review errors.

This module defines the base exception for the tool plus the errors raised
while loading configuration and reading or writing files. The HTML
transformations themselves never raise for content; every error here
comes from the surrounding I/O.
"""

from typing import Optional


class ReviewError(Exception):
    """Base exception for all post-review errors.

    Use this to catch any application-level error from the tool.
    """
    pass


class FilesystemError(ReviewError):
    """Raised when filesystem operations fail (read, write, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class ConfigError(ReviewError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message
