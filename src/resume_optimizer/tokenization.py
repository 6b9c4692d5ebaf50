"""
Tokenization policies.

The n-gram extractor and the keyword scorer deliberately tokenize differently:
n-grams work on alphabetic-only cleaned words, keyword coverage works on raw
whitespace-delimited tokens. Keep the two separate.
"""

from __future__ import annotations

import re
from typing import List

from .errors import InputError
from .stopwords import is_stopword

NON_ALPHA_PATTERN = re.compile(r"[^a-zA-Z\s]")
WHITESPACE_PATTERN = re.compile(r"\s+")
MIN_TOKEN_LENGTH = 3


def clean_tokens(text: str) -> List[str]:
    """Lowercase, strip non-letters, and drop stopwords and short tokens."""
    if text is None:
        raise InputError("Text must not be None.")
    stripped = NON_ALPHA_PATTERN.sub("", text.lower())
    return [
        token
        for token in WHITESPACE_PATTERN.split(stripped)
        if len(token) >= MIN_TOKEN_LENGTH and not is_stopword(token)
    ]


def whitespace_tokens(text: str) -> List[str]:
    """Lowercased whitespace-split tokens with punctuation left in place."""
    if text is None:
        raise InputError("Text must not be None.")
    return text.lower().split()
