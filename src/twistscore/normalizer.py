"""
Text normalization for comparing a target phrase with a spoken transcript.

Both sides go through the same pipeline so that casing, punctuation and
hyphenation never cause a mismatch on their own.
"""

import re
import unicodedata

# Hyphenated compounds are split so "hi-hats" aligns with "hi hats"
_HYPHEN_RE: re.Pattern[str] = re.compile(r'-')
# Anything that is not a word character, whitespace or apostrophe
_PUNCTUATION_RE: re.Pattern[str] = re.compile(r"[^\w\s']")


def normalize_text(text: str | None) -> list[str]:
    """Convert raw text into an ordered list of lowercase word tokens.

    Examples:
        "Hi-Hats!" -> ["hi", "hats"]
        "Don't stop." -> ["don't", "stop"]
        None -> []
    """
    if not text:
        return []

    # Composed and decomposed accents must compare equal
    text = unicodedata.normalize('NFC', text)
    text = _HYPHEN_RE.sub(' ', text.lower())
    text = _PUNCTUATION_RE.sub('', text)
    return [word for word in text.split() if word]
