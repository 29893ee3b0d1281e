"""
Text Normalization

Canonical form used before any answer comparison: lowercase, no quotes,
the digit "1" spelled out, punctuation turned into spaces and whitespace
collapsed. Letters outside ASCII (å, ä, ö, é ...) are kept.
"""

import re

DEFAULT_NUMBER_WORD = "en"

QUOTE_CHARS = "'‘’‛\"“”„`´"

_QUOTES_RE = re.compile(f"[{re.escape(QUOTE_CHARS)}]")
# bounded by anything but a letter or digit, underscore included
_LONE_ONE_RE = re.compile(r"(?<![^\W_])1(?![^\W_])")
# \W covers everything but letters, digits and underscore
_NON_ALNUM_RE = re.compile(r"[\W_]+")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: str, number_word: str = DEFAULT_NUMBER_WORD) -> str:
    """
    Normalize text for comparison.

    Args:
        text: Raw text, possibly empty
        number_word: Word that replaces a standalone "1"

    Returns:
        Normalized text, possibly empty
    """
    if not text:
        return ""

    text = text.lower()
    text = _QUOTES_RE.sub("", text)
    text = _LONE_ONE_RE.sub(f" {number_word.lower()} ", text)
    text = _NON_ALNUM_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()
