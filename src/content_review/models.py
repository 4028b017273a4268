"""Data models for the content review module.

This module defines the data structures shared by the block parser,
the change detector and the structural normalizer.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Dict, List, Optional

from .highlight import HighlightStyle
from .text_utils import normalize_text


class BlockKind(Enum):
    """Categories of content blocks, decided once at parse time."""

    STRUCTURAL = "structural"
    INLINE_TEXT = "inline-text"
    PROTECTED_MEDIA = "protected-media"


@dataclass
class ContentBlock:
    """Represents one atomic unit of comparison.

    A block is either the full outer markup of a structural or
    protected-media element, or a bare run of text that was not wrapped
    in a structural element.

    Attributes:
        markup: Serialized markup this block represents
        kind: Category of the block (never reclassified)
        index: Position in the document
        tag: Tag name for element blocks, None for inline text
    """

    markup: str
    kind: BlockKind
    index: int = 0
    tag: Optional[str] = None

    @cached_property
    def normalized_text(self) -> str:
        """Comparison key: text without markup, punctuation or case."""
        return normalize_text(self.markup)

    @property
    def is_protected(self) -> bool:
        return self.kind == BlockKind.PROTECTED_MEDIA


@dataclass
class MatchEntry:
    """An original block waiting to be paired with a revised block.

    Attributes:
        block: Block from the original document
        consumed: Whether a revised block has already claimed it
    """

    block: ContentBlock
    consumed: bool = False


# Normalized text -> original blocks with that text, in document order
MatchIndex = Dict[str, List[MatchEntry]]


@dataclass
class ChangeReport:
    """Result of comparing an original and a revised document.

    Attributes:
        html: Revised document with changed blocks highlighted
        change_count: Number of blocks classified as genuine changes
        exact_matches: Blocks paired on identical normalized text
        fuzzy_matches: Blocks paired on word overlap
        protected_blocks: Protected-media blocks passed through untouched
    """

    html: str
    change_count: int = 0
    exact_matches: int = 0
    fuzzy_matches: int = 0
    protected_blocks: int = 0

    @property
    def has_changes(self) -> bool:
        return self.change_count > 0


# Defaults for the detector thresholds. These were tuned by hand against
# real rewrites; changing them changes what reviewers get to see.
MIN_INDEX_LENGTH = 10
MIN_FUZZY_LENGTH = 20
MIN_WORD_LENGTH = 3
SIMILARITY_THRESHOLD = 0.92
MAX_DIFFERENT_WORDS = 4

SUB_ITEM_MARKER = "—"
MAX_FLATTEN_PASSES = 5
MAX_ROUNDS = 10
LIST_ROLE = "list"
LIST_ITEM_ROLE = "listitem"


@dataclass
class DetectorSettings:
    """Tunable thresholds for the change detector.

    Attributes:
        min_index_length: Originals with normalized text at or below this
            length are never used as match anchors
        min_fuzzy_length: Fuzzy matching only runs for revised blocks whose
            normalized text is longer than this
        min_word_length: Only words longer than this count as significant
        similarity_threshold: Overlap ratio at or above which blocks match
        max_different_words: Blocks match when fewer significant words
            than this are new
        highlight_short_blocks: Highlight unmatched blocks that are too
            short for fuzzy matching; by default they pass through
        highlight: Container used to mark changed blocks
    """

    min_index_length: int = MIN_INDEX_LENGTH
    min_fuzzy_length: int = MIN_FUZZY_LENGTH
    min_word_length: int = MIN_WORD_LENGTH
    similarity_threshold: float = SIMILARITY_THRESHOLD
    max_different_words: int = MAX_DIFFERENT_WORDS
    highlight_short_blocks: bool = False
    highlight: HighlightStyle = field(default_factory=HighlightStyle)


@dataclass
class NormalizerSettings:
    """Options for the structural normalizer.

    Attributes:
        sub_item_marker: Prefix for items lifted out of a nested list
        max_flatten_passes: Budget for the nested-list flattening loop
        max_rounds: Budget for repeating the full pass sequence until stable
        list_role: Role attribute value for list containers
        list_item_role: Role attribute value for list items
    """

    sub_item_marker: str = SUB_ITEM_MARKER
    max_flatten_passes: int = MAX_FLATTEN_PASSES
    max_rounds: int = MAX_ROUNDS
    list_role: str = LIST_ROLE
    list_item_role: str = LIST_ITEM_ROLE
