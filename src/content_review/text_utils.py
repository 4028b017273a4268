"""Text normalization helpers for block comparison."""

import re
from typing import Set

from bs4 import BeautifulSoup

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(markup: str) -> str:
    """Reduce block markup to a comparison key.

    Strips tags (each tag boundary becomes a space), decodes entities,
    replaces punctuation with spaces, collapses whitespace and lowercases.

    Args:
        markup: Serialized block markup

    Returns:
        Normalized text, empty when the markup carries no words
    """
    if not markup:
        return ""
    text = BeautifulSoup(markup, "html.parser").get_text(separator=" ")
    text = _NON_WORD.sub(" ", text)
    text = _WHITESPACE.sub(" ", text)
    return text.strip().lower()


def significant_words(normalized: str, min_word_length: int) -> Set[str]:
    """Return the set of words longer than min_word_length."""
    return {word for word in normalized.split() if len(word) > min_word_length}
