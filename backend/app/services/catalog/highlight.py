"""
Keyword highlighting for product descriptions.

Each keyword is applied as a separate rewrite of the whole text, in the order
given. A later keyword therefore sees the markup inserted by earlier ones, so
overlapping keywords can produce nested <em> tags.
"""
import re
from functools import reduce
from typing import Optional, Sequence

from app.core.logging import get_logger

logger = get_logger(__name__)

HIGHLIGHT_TEMPLATE = "<em>{}</em>"


def highlight_word(text: str, word: str) -> str:
    """
    Wrap every case-insensitive whole-word occurrence of word in <em> tags.

    The replacement uses the casing of word, not of the matched text.
    Blank words leave the text unchanged.
    """
    if not word or word.isspace():
        return text
    pattern = re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE)
    replacement = HIGHLIGHT_TEMPLATE.format(word)
    return pattern.sub(lambda _match: replacement, text)


def highlight_words(text: Optional[str], words: Optional[Sequence[str]]) -> str:
    """
    Highlight each word of words in text, one whole-text pass per word.

    Args:
        text: Description to rewrite (None is treated as "")
        words: Keywords in application order

    Returns:
        The rewritten text
    """
    if not words:
        logger.debug("highlight_skipped_no_words")
        return text or ""

    highlighted = reduce(highlight_word, words, text or "")
    logger.debug("highlight_applied", words_count=len(words))
    return highlighted
