"""Data models for CLI operations.

This module defines the exit codes and the per-file result records used
by the CLI module.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    These exit codes provide meaningful feedback about the operation result:
    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): General error (config issues, unreadable input)
    - CHANGES_DETECTED (2): diff ran with --fail-on-change and found changes

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    CHANGES_DETECTED = 2


@dataclass
class TransformSummary:
    """Summary of a single-document transformation for display.

    Attributes:
        source: Input path ('-' for stdin)
        destination: Output path, None when written to stdout
        input_length: Length of the input HTML in characters
        output_length: Length of the resulting HTML in characters
        highlights_removed: Highlight containers stripped (strip/prepare)
    """
    source: str
    destination: Optional[str]
    input_length: int
    output_length: int
    highlights_removed: int = 0
