"""Command-line interface for reviewing rewritten blog posts.

This package provides the `post-review` CLI tool that runs the change
detector and the structural normalizer over HTML files, with progress
indication, colored summaries and typed error handling.
"""

from .models import ExitCode, TransformSummary
from .errors import CLIError, InputError

__all__ = [
    'ExitCode',
    'TransformSummary',
    'CLIError',
    'InputError',
]
