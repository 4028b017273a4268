"""Block parser for splitting HTML fragments into content blocks.

This module provides the BlockParser class which turns an HTML fragment
into an ordered list of ContentBlock objects. Blocks are the unit of
comparison for the change detector: a paragraph, heading or list is kept
whole, tables/embeds/widgets are kept whole and marked as protected, and
inline wrappers (span, em, strong, a, ...) are transparent.
"""

import logging
from collections import Counter
from typing import List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag

from .models import BlockKind, ContentBlock
from .text_utils import normalize_text

logger = logging.getLogger(__name__)

__all__ = [
    "BlockParser",
    "normalize_text",
    "classify",
    "has_widget_attributes",
    "STRUCTURAL_TAGS",
    "PROTECTED_MEDIA_TAGS",
]

STRUCTURAL_TAGS = frozenset(
    {
        "p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "li", "blockquote",
        "section", "article", "ul", "ol", "table", "figure",
        # Block-level elements that would otherwise be flattened into bare text
        "pre", "hr", "dl", "details", "header", "footer", "aside", "nav", "main",
    }
)

PROTECTED_MEDIA_TAGS = frozenset(
    {
        "table", "iframe", "embed", "script", "img", "figure", "video",
        "audio", "canvas", "object", "svg", "form", "picture", "style",
    }
)

# Class tokens used by CMS widgets and custom embeds
WIDGET_CLASS_MARKERS = ("widget", "w-embed", "w-widget")
WIDGET_DATA_ATTRIBUTES = ("data-w-id",)
WIDGET_DATA_PREFIXES = ("data-widget",)


def has_widget_attributes(tag: Tag) -> bool:
    """Check a single element for widget class names or data attributes."""
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    for token in classes:
        lowered = token.lower()
        if any(marker in lowered for marker in WIDGET_CLASS_MARKERS):
            return True
    for name in tag.attrs:
        lowered = name.lower()
        if lowered in WIDGET_DATA_ATTRIBUTES or lowered.startswith(WIDGET_DATA_PREFIXES):
            return True
    return False


def classify(tag: Tag) -> Optional[BlockKind]:
    """Decide how an element takes part in block splitting.

    Args:
        tag: Element reached during traversal

    Returns:
        BlockKind for elements emitted as a block, None for transparent
        elements whose children are visited instead
    """
    name = tag.name.lower()
    if name in PROTECTED_MEDIA_TAGS:
        return BlockKind.PROTECTED_MEDIA
    if name in STRUCTURAL_TAGS:
        if has_widget_attributes(tag):
            return BlockKind.PROTECTED_MEDIA
        # Media or widgets anywhere inside make the whole block protected
        if tag.find(list(PROTECTED_MEDIA_TAGS)) is not None:
            return BlockKind.PROTECTED_MEDIA
        if tag.find(has_widget_attributes) is not None:
            return BlockKind.PROTECTED_MEDIA
        return BlockKind.STRUCTURAL
    if has_widget_attributes(tag):
        return BlockKind.PROTECTED_MEDIA
    return None


class BlockParser:
    """Parses HTML fragments into content blocks.

    Uses Python's built-in html.parser rather than lxml: it does not
    rearrange malformed markup (a <li> inside a <p> stays where it is)
    and it does not resolve external entities.
    """

    def __init__(self):
        """Initialize BlockParser with html.parser."""
        self.parser = "html.parser"

    def parse_html(self, html: str) -> BeautifulSoup:
        """Parse an HTML fragment into a BeautifulSoup tree.

        The BeautifulSoup object acts as the synthetic root, so text at
        the top level of the fragment is part of the tree.
        """
        return BeautifulSoup(html or "", self.parser)

    def parse(self, html: str) -> List[ContentBlock]:
        """Split an HTML fragment into content blocks in document order.

        Malformed markup never raises; the parser recovers what it can.
        Empty or whitespace-only input yields no blocks.

        Args:
            html: HTML fragment

        Returns:
            List of ContentBlock objects
        """
        if not html or not html.strip():
            return []

        soup = self.parse_html(html)
        blocks: List[ContentBlock] = []

        # Iterative depth-first walk so deeply nested input cannot exhaust
        # the recursion limit
        stack = [iter(soup.contents)]
        while stack:
            node = next(stack[-1], None)
            if node is None:
                stack.pop()
                continue

            if isinstance(node, Tag):
                kind = classify(node)
                if kind is None:
                    stack.append(iter(node.contents))
                    continue
                blocks.append(
                    ContentBlock(
                        markup=str(node),
                        kind=kind,
                        index=len(blocks),
                        tag=node.name,
                    )
                )
            elif type(node) is NavigableString:
                text = node.strip()
                if text:
                    blocks.append(
                        ContentBlock(
                            markup=NavigableString(text).output_ready(),
                            kind=BlockKind.INLINE_TEXT,
                            index=len(blocks),
                        )
                    )
            # Comments, doctypes and other special strings are dropped

        if logger.isEnabledFor(logging.DEBUG):
            counts = Counter(block.kind.value for block in blocks)
            logger.debug(f"Parsed {len(blocks)} blocks: {dict(counts)}")
        return blocks
