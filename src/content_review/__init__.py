"""Content review module for rewritten blog posts.

This module provides the pure HTML transformations used when a post comes
back from an external rewriting step: highlighting the blocks whose
substance changed, and repairing list markup before the post is published.

Key classes:
    BlockParser: Splits HTML fragments into content blocks
    ChangeDetector: Highlights changed blocks in a revised document
    StructuralNormalizer: Repairs malformed list markup
    HighlightStyle: Wraps, counts and strips highlight containers
    ContentBlock: One unit of comparison
    ChangeReport: Result of a change detection run
"""

from .models import (
    BlockKind,
    ContentBlock,
    MatchEntry,
    ChangeReport,
    DetectorSettings,
    NormalizerSettings,
)
from .highlight import HighlightStyle, strip_highlights
from .text_utils import normalize_text
from .block_parser import BlockParser
from .change_detector import ChangeDetector, detect_changes
from .list_normalizer import StructuralNormalizer, normalize

__all__ = [
    # Main interface
    "detect_changes",
    "normalize",
    "strip_highlights",
    # Core classes
    "BlockParser",
    "ChangeDetector",
    "StructuralNormalizer",
    "HighlightStyle",
    "normalize_text",
    # Data models
    "BlockKind",
    "ContentBlock",
    "MatchEntry",
    "ChangeReport",
    "DetectorSettings",
    "NormalizerSettings",
]
