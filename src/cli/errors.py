"""Typed exception hierarchy for CLI-related errors.

This module defines all custom exceptions used by the CLI.
All exceptions inherit from CLIError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional

from src.settings.errors import ReviewError


class CLIError(ReviewError):
    """Base exception for all CLI-related errors."""
    pass


class InputError(CLIError):
    """Raised when the command-line inputs cannot be used as given."""

    def __init__(self, message: str, argument: Optional[str] = None):
        if argument:
            full_message = f"Invalid input for '{argument}': {message}"
        else:
            full_message = f"Invalid input: {message}"
        super().__init__(full_message)
        self.argument = argument
        self.original_message = message
