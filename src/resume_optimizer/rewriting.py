from __future__ import annotations

import logging
import random
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Iterable, List, Mapping, Sequence

from .config import DEFAULT_METRIC_UNITS, DEFAULT_VERB_REPLACEMENTS
from .errors import InputError
from .models import Change, ChangeType, HighlightSpan, RewriteResult

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_CHARS = 30

KEYWORD_TOOLTIP = "Matched keyword from Word Cloud"
ENHANCEMENT_TOOLTIP = 'Original: "{original}"\nEnhanced for stronger impact'
METRIC_TOOLTIP = "Quantifiable Achievement"

# Phrase edges must not touch another letter or digit.
_BOUNDARY_BEFORE = r"(?<![A-Za-z0-9])"
_BOUNDARY_AFTER = r"(?![A-Za-z0-9])"

_NUMBER = r"(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?"
_DATE_LOOKAHEAD = r"(?!\d{1,2}/\d{1,2}/\d{2,4})"


class ReplacementPolicy(ABC):
    """Chooses which strong replacement to use for a weak phrase occurrence."""

    @abstractmethod
    def choose(self, weak: str, candidates: Sequence[str]) -> str:
        """Return one of ``candidates`` for the matched ``weak`` text."""
        raise NotImplementedError


class RandomReplacementPolicy(ReplacementPolicy):
    """
    Uniformly random choice per occurrence.

    Output is not reproducible unless a seeded ``random.Random`` (or ``seed``)
    is supplied; two runs with the same seed over the same text agree.
    """

    def __init__(self, rng: random.Random | None = None, *, seed: int | None = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)

    def choose(self, weak: str, candidates: Sequence[str]) -> str:
        return self._rng.choice(list(candidates))


class FirstCandidatePolicy(ReplacementPolicy):
    """Always picks the first candidate."""

    def choose(self, weak: str, candidates: Sequence[str]) -> str:
        return candidates[0]


class CallableReplacementPolicy(ReplacementPolicy):
    """Adapt an arbitrary callable into the ReplacementPolicy interface."""

    def __init__(self, func: Callable[[str, Sequence[str]], str]) -> None:
        self._func = func

    def choose(self, weak: str, candidates: Sequence[str]) -> str:
        return self._func(weak, candidates)


@dataclass(slots=True)
class _Edit:
    start: int
    end: int
    original: str
    replacement: str


def compile_phrase(phrase: str) -> re.Pattern[str]:
    """Compile a user phrase into a case-insensitive whole-phrase matcher.

    The phrase is matched literally; internal whitespace matches any whitespace run.
    """
    if phrase is None or not str(phrase).strip():
        raise InputError(f"Keyword phrase must not be blank: {phrase!r}")
    parts = [re.escape(part) for part in str(phrase).split()]
    try:
        return re.compile(
            _BOUNDARY_BEFORE + r"\s+".join(parts) + _BOUNDARY_AFTER, re.IGNORECASE
        )
    except re.error as exc:
        raise InputError(f"Could not build a matcher for phrase {phrase!r}: {exc}") from exc


def compile_metric_pattern(units: Iterable[str] | None = None) -> re.Pattern[str]:
    """Numbers followed by '%' or a unit word, never starting inside a date."""
    unit_words = [re.escape(unit) for unit in (units or []) if unit and unit.strip()]
    if unit_words:
        unit = r"(?:" + "|".join(unit_words) + r")\b"
        suffix = rf"(?:\s*%(?:\s+{unit})?|\s+{unit}(?:\s+{unit})?)"
    else:
        suffix = r"\s*%"
    return re.compile(
        rf"(?<![\w/])(?<!\d[.,]){_DATE_LOOKAHEAD}{_NUMBER}{suffix}", re.IGNORECASE
    )


def apply_keyword_highlighting(
    source: str | RewriteResult,
    phrases: Iterable[str],
    context_chars: int = DEFAULT_CONTEXT_CHARS,
) -> RewriteResult:
    """
    Mark every whole-phrase occurrence of each keyword without changing the text.

    Keywords are processed in list order, matches left to right. Overlapping
    keywords produce overlapping spans.
    """
    if phrases is None:
        raise InputError("Keyword list must not be None.")
    if isinstance(phrases, str):
        phrases = [phrases]
    result = _as_result(source)
    text = result.text
    patterns = [compile_phrase(phrase) for phrase in phrases]

    before = len(result.changes)
    for pattern in patterns:
        for match in pattern.finditer(text):
            result.changes.append(
                Change(
                    original=match.group(),
                    optimized=match.group(),
                    type=ChangeType.KEYWORD,
                    context=_context(text, match.start(), match.end(), context_chars),
                    start=match.start(),
                    end=match.end(),
                )
            )
            result.spans.append(
                HighlightSpan(
                    start=match.start(),
                    end=match.end(),
                    category=ChangeType.KEYWORD,
                    tooltip=KEYWORD_TOOLTIP,
                )
            )
    logger.info(
        "Keyword pass matched %d occurrences for %d phrases.",
        len(result.changes) - before,
        len(patterns),
    )
    return result


def apply_enhancement(
    source: str | RewriteResult,
    verb_map: Mapping[str, Sequence[str]] | None = None,
    policy: ReplacementPolicy | None = None,
    context_chars: int = DEFAULT_CONTEXT_CHARS,
) -> RewriteResult:
    """
    Replace weak phrases with stronger verbs and log each substitution.

    Weak phrases are handled in mapping order; a match overlapping one already
    replaced is skipped. Spans from a prior pass are moved to follow the edits.
    """
    result = _as_result(source)
    text = result.text
    mapping = verb_map if verb_map is not None else DEFAULT_VERB_REPLACEMENTS
    chooser = policy or RandomReplacementPolicy()

    claimed: List[_Edit] = []
    for weak, candidates in mapping.items():
        if not candidates:
            raise InputError(f"No replacements configured for phrase {weak!r}.")
        pattern = compile_phrase(weak)
        for match in pattern.finditer(text):
            start, end = match.start(), match.end()
            if any(start < edit.end and edit.start < end for edit in claimed):
                continue
            replacement = chooser.choose(match.group(), candidates)
            claimed.append(_Edit(start, end, match.group(), replacement))
            result.changes.append(
                Change(
                    original=match.group(),
                    optimized=replacement,
                    type=ChangeType.ENHANCEMENT,
                    context=_context(text, start, end, context_chars),
                    start=start,
                    end=end,
                )
            )

    edits = sorted(claimed, key=lambda edit: edit.start)
    shifted = [
        HighlightSpan(
            start=_shift_offset(span.start, edits, is_end=False),
            end=_shift_offset(span.end, edits, is_end=True),
            category=span.category,
            tooltip=span.tooltip,
        )
        for span in result.spans
    ]
    for edit in claimed:
        new_start = _shift_offset(edit.start, edits, is_end=False)
        shifted.append(
            HighlightSpan(
                start=new_start,
                end=new_start + len(edit.replacement),
                category=ChangeType.ENHANCEMENT,
                tooltip=ENHANCEMENT_TOOLTIP.format(original=edit.original),
            )
        )
    result.text = _apply_edits(text, edits)
    result.spans = shifted
    logger.info("Enhancement pass replaced %d weak phrases.", len(claimed))
    return result


def apply_metric_highlighting(
    source: str | RewriteResult,
    units: Iterable[str] | None = None,
    context_chars: int = DEFAULT_CONTEXT_CHARS,
) -> RewriteResult:
    """Annotate quantified achievements such as '20% increase' or '300 users'."""
    result = _as_result(source)
    text = result.text
    pattern = compile_metric_pattern(DEFAULT_METRIC_UNITS if units is None else units)

    found = 0
    for match in pattern.finditer(text):
        found += 1
        result.changes.append(
            Change(
                original=match.group(),
                optimized=match.group(),
                type=ChangeType.METRIC,
                context=_context(text, match.start(), match.end(), context_chars),
                start=match.start(),
                end=match.end(),
            )
        )
        result.spans.append(
            HighlightSpan(
                start=match.start(),
                end=match.end(),
                category=ChangeType.METRIC,
                tooltip=METRIC_TOOLTIP,
            )
        )
    logger.info("Metric pass flagged %d quantified achievements.", found)
    return result


def enhance(
    source: str | RewriteResult,
    verb_map: Mapping[str, Sequence[str]] | None = None,
    policy: ReplacementPolicy | None = None,
    units: Iterable[str] | None = None,
    context_chars: int = DEFAULT_CONTEXT_CHARS,
) -> RewriteResult:
    """Strengthen verbs, then highlight metrics in the strengthened text."""
    enhanced = apply_enhancement(source, verb_map, policy, context_chars)
    return apply_metric_highlighting(enhanced, units, context_chars)


def _as_result(source: str | RewriteResult) -> RewriteResult:
    if source is None:
        raise InputError("Text must not be None.")
    if isinstance(source, RewriteResult):
        return RewriteResult(
            text=source.text, changes=list(source.changes), spans=list(source.spans)
        )
    return RewriteResult(text=source)


def _context(text: str, start: int, end: int, chars: int) -> str:
    return text[max(0, start - chars) : end + chars]


def _apply_edits(text: str, edits: Sequence[_Edit]) -> str:
    pieces: List[str] = []
    cursor = 0
    for edit in edits:
        pieces.append(text[cursor : edit.start])
        pieces.append(edit.replacement)
        cursor = edit.end
    pieces.append(text[cursor:])
    return "".join(pieces)


def _shift_offset(pos: int, edits: Sequence[_Edit], *, is_end: bool) -> int:
    """Map an offset in the pre-edit text onto the edited text."""
    delta = 0
    for edit in edits:
        if edit.end <= pos:
            delta += len(edit.replacement) - (edit.end - edit.start)
        elif edit.start < pos:
            # Offset falls inside a replaced region; snap to its edge.
            return edit.start + delta + (len(edit.replacement) if is_end else 0)
        else:
            break
    return pos + delta
