"""Change detector for highlighting rewritten content blocks.

This module provides the ChangeDetector class which compares an original
HTML fragment against a revised one and wraps every block whose substance
changed in a highlight container. Formatting, whitespace, punctuation and
case differences are not changes. Protected media (tables, embeds,
widgets, images) is never compared and never highlighted.

Matching runs in tiers for each revised block, in document order:

1. Protected pass-through
2. Exact match on normalized text (first unconsumed original wins)
3. Fuzzy match on significant-word overlap (first acceptable group wins)
4. Anything else is a genuine change, except short blocks, which pass
   through unless highlight_short_blocks is set
"""

import logging
from typing import List, Optional

from .block_parser import BlockParser
from .models import (
    ChangeReport,
    ContentBlock,
    DetectorSettings,
    MatchEntry,
    MatchIndex,
)
from .text_utils import significant_words

logger = logging.getLogger(__name__)


class ChangeDetector:
    """Classifies revised blocks as unchanged, protected or changed.

    All matching state lives in a MatchIndex built per call, so one
    detector instance can be shared freely.

    Attributes:
        settings: Thresholds and highlight style
        parser: BlockParser used for both documents
    """

    def __init__(self, settings: Optional[DetectorSettings] = None):
        """Initialize ChangeDetector.

        Args:
            settings: Detector thresholds (defaults when None)
        """
        self.settings = settings or DetectorSettings()
        self.parser = BlockParser()

    def build_index(self, blocks: List[ContentBlock]) -> MatchIndex:
        """Group original blocks by normalized text.

        Blocks whose normalized text is too short to be a reliable anchor
        are left out.

        Args:
            blocks: Blocks from the original document

        Returns:
            MatchIndex keyed by normalized text, in first-seen order
        """
        index: MatchIndex = {}
        for block in blocks:
            key = block.normalized_text
            if len(key) <= self.settings.min_index_length:
                continue
            index.setdefault(key, []).append(MatchEntry(block=block))
        return index

    def build_short_index(self, blocks: List[ContentBlock]) -> MatchIndex:
        """Group the original blocks that build_index leaves out.

        Short headings and labels only ever match identical text; they
        are never offered to the fuzzy tier.

        Args:
            blocks: Blocks from the original document

        Returns:
            MatchIndex of non-empty keys at or below min_index_length
        """
        index: MatchIndex = {}
        for block in blocks:
            key = block.normalized_text
            if not key or len(key) > self.settings.min_index_length:
                continue
            index.setdefault(key, []).append(MatchEntry(block=block))
        return index

    def detect(self, original: str, revised: str) -> ChangeReport:
        """Compare two HTML fragments and highlight genuine changes.

        Args:
            original: HTML before rewriting
            revised: HTML after rewriting

        Returns:
            ChangeReport with the annotated revised HTML and counts
        """
        original_blocks = self.parser.parse(original)
        revised_blocks = self.parser.parse(revised)
        index = self.build_index(original_blocks)
        short_index = self.build_short_index(original_blocks)

        logger.debug(
            f"Comparing {len(original_blocks)} original blocks "
            f"({len(index)} indexed keys, {len(short_index)} short) "
            f"vs {len(revised_blocks)} revised blocks"
        )

        report = ChangeReport(html="")
        parts: List[str] = []

        for block in revised_blocks:
            if block.is_protected:
                report.protected_blocks += 1
                parts.append(block.markup)
                continue

            key = block.normalized_text

            # Nothing to review in a block without words (spacers, <hr>)
            if not key:
                parts.append(block.markup)
                continue

            if self._claim_exact(index, key) or self._claim_exact(short_index, key):
                report.exact_matches += 1
                parts.append(block.markup)
                continue

            if len(key) > self.settings.min_fuzzy_length:
                if self._claim_fuzzy(index, key):
                    report.fuzzy_matches += 1
                    parts.append(block.markup)
                    continue
            elif not self.settings.highlight_short_blocks:
                parts.append(block.markup)
                continue

            logger.debug(f"Changed block [{block.index}]: {key[:50]}...")
            parts.append(self.settings.highlight.wrap(block.markup))
            report.change_count += 1

        report.html = "".join(parts)
        logger.info(
            f"Detected {report.change_count} changed block(s) "
            f"(exact={report.exact_matches}, fuzzy={report.fuzzy_matches}, "
            f"protected={report.protected_blocks})"
        )
        return report

    def _claim_exact(self, index: MatchIndex, key: str) -> bool:
        """Consume the first unconsumed original with identical text."""
        entry = self._first_unconsumed(index.get(key))
        if entry is None:
            return False
        entry.consumed = True
        return True

    def _claim_fuzzy(self, index: MatchIndex, key: str) -> bool:
        """Consume the first original group that overlaps enough with key.

        Groups are tried in index order and the first acceptable one wins,
        even if a later group would score higher.
        """
        revised_words = significant_words(key, self.settings.min_word_length)
        if not revised_words:
            return False

        for original_key, entries in index.items():
            entry = self._first_unconsumed(entries)
            if entry is None:
                continue

            original_words = significant_words(
                original_key, self.settings.min_word_length
            )
            if not original_words:
                continue

            if self.is_similar(revised_words, original_words):
                entry.consumed = True
                logger.debug(f"Fuzzy match: {key[:40]}... ~ {original_key[:40]}...")
                return True

        return False

    def is_similar(self, revised_words: set, original_words: set) -> bool:
        """Apply the overlap thresholds to two sets of significant words.

        Args:
            revised_words: Significant words of the revised block
            original_words: Significant words of the original block

        Returns:
            True if the blocks count as the same content
        """
        shared = len(revised_words & original_words)
        similarity = shared / max(len(revised_words), len(original_words))
        different = len(revised_words - original_words)
        return (
            similarity >= self.settings.similarity_threshold
            or different < self.settings.max_different_words
        )

    @staticmethod
    def _first_unconsumed(entries: Optional[List[MatchEntry]]) -> Optional[MatchEntry]:
        if not entries:
            return None
        for entry in entries:
            if not entry.consumed:
                return entry
        return None


def detect_changes(
    original: str,
    revised: str,
    settings: Optional[DetectorSettings] = None,
) -> ChangeReport:
    """Compare original and revised HTML with a one-off ChangeDetector."""
    return ChangeDetector(settings).detect(original, revised)
