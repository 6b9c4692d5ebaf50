from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Iterable, List

from .config import ResumeOptimizerConfig
from .ngrams import generate_ngrams

BASE_FONT_SIZE = 10
FONT_SIZE_PER_COUNT = 10


@dataclass(slots=True)
class CloudWord:
    """An n-gram prepared for the word-cloud renderer."""

    text: str
    value: int
    size: int
    kind: str


def build_cloud(
    text: str,
    config: ResumeOptimizerConfig | None = None,
    excluded: Collection[str] = (),
) -> List[CloudWord]:
    """Run the configured n-gram mode and attach a display size to each entry."""
    cfg = config or ResumeOptimizerConfig()
    ngrams = generate_ngrams(
        text,
        mode=cfg.cloud_mode,
        use_trigrams=cfg.use_trigrams,
        limit=cfg.ngram_limit,
        excluded=excluded,
    )
    return [
        CloudWord(
            text=ngram.text,
            value=ngram.value,
            size=BASE_FONT_SIZE + FONT_SIZE_PER_COUNT * ngram.value,
            kind="multi" if " " in ngram.text else "single",
        )
        for ngram in ngrams
    ]


def toggle_exclusion(excluded: Iterable[str], phrase: str) -> frozenset[str]:
    """Return a new excluded set with ``phrase`` flipped in or out."""
    key = phrase.lower().strip()
    current = set(excluded)
    if key in current:
        current.remove(key)
    else:
        current.add(key)
    return frozenset(current)


def visible_phrases(words: Iterable[CloudWord], excluded: Collection[str] = ()) -> List[str]:
    """Texts of the cloud entries that are not excluded, in display order."""
    return [word.text for word in words if word.text not in excluded]
