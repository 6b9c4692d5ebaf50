from __future__ import annotations

from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

# Words the browser `stopword` list drops that scikit-learn's list keeps.
EXTRA_STOPWORDS: frozenset[str] = frozenset(
    """
    came come did does doing got just like make might must said since still
    take way
    """.split()
)

# English function words dropped before n-gram construction.
ENGLISH_STOPWORDS: frozenset[str] = frozenset(ENGLISH_STOP_WORDS) | EXTRA_STOPWORDS


def is_stopword(token: str) -> bool:
    return token in ENGLISH_STOPWORDS
