"""Test fixtures for post review tests.

This module provides sample blog post HTML:
- Original and rewritten versions of a simple post
- Posts with tables, embeds and widgets
- Malformed list markup as produced by rewriting tools
"""

from .sample_posts import (
    SAMPLE_POST_SIMPLE,
    SAMPLE_POST_REVISED,
    SAMPLE_POST_WITH_EMBEDS,
    SAMPLE_POST_WITH_EMBEDS_REVISED,
    MALFORMED_LISTS,
    DEEPLY_NESTED_LIST,
)

__all__ = [
    'SAMPLE_POST_SIMPLE',
    'SAMPLE_POST_REVISED',
    'SAMPLE_POST_WITH_EMBEDS',
    'SAMPLE_POST_WITH_EMBEDS_REVISED',
    'MALFORMED_LISTS',
    'DEEPLY_NESTED_LIST',
]
