from __future__ import annotations

import logging
from typing import Collection, Dict, List

from .config import CLOUD_MODES
from .errors import InputError
from .models import Ngram
from .tokenization import clean_tokens

logger = logging.getLogger(__name__)


def extract_ngrams(
    text: str,
    n: int,
    limit: int,
    excluded: Collection[str] = (),
) -> List[Ngram]:
    """
    Count every run of ``n`` cleaned tokens and return the ``limit`` most frequent.

    Ties keep the order in which the phrases were first seen.
    """
    if n < 1:
        raise InputError(f"N-gram size must be at least 1, got {n}.")
    if limit < 0:
        raise InputError(f"N-gram limit must not be negative, got {limit}.")
    tokens = clean_tokens(text)

    counts: Dict[str, int] = {}
    for idx in range(len(tokens) - n + 1):
        phrase = " ".join(tokens[idx : idx + n])
        if phrase in excluded:
            continue
        counts[phrase] = counts.get(phrase, 0) + 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    ngrams = [Ngram(text=phrase, value=count) for phrase, count in ranked[:limit]]
    logger.debug(
        "Extracted %d distinct %d-grams from %d tokens (returning %d).",
        len(counts),
        n,
        len(tokens),
        len(ngrams),
    )
    return ngrams


def multi_size(use_trigrams: bool) -> int:
    return 3 if use_trigrams else 2


def generate_ngrams(
    text: str,
    mode: str = "single",
    use_trigrams: bool = False,
    limit: int = 15,
    excluded: Collection[str] = (),
) -> List[Ngram]:
    """Build the n-gram list for a cloud mode ('single', 'multi' or 'both').

    In 'both' mode the unigram list is followed by the multi-word list; a word
    may legitimately appear in each.
    """
    normalized = mode.lower().strip()
    if normalized not in CLOUD_MODES:
        raise InputError(
            f"Unknown cloud mode '{mode}'. Expected one of {', '.join(CLOUD_MODES)}."
        )
    if normalized == "single":
        return extract_ngrams(text, 1, limit, excluded)
    multi = extract_ngrams(text, multi_size(use_trigrams), limit, excluded)
    if normalized == "multi":
        return multi
    return extract_ngrams(text, 1, limit, excluded) + multi
