from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True, slots=True)
class Ngram:
    """A cleaned token sequence and how often it occurred."""

    text: str
    value: int


class ChangeType(str, Enum):
    KEYWORD = "keyword"
    ENHANCEMENT = "enhancement"
    METRIC = "metric"


@dataclass(slots=True)
class Change:
    """One edit or annotation discovered during a rewriting pass.

    ``start``/``end`` index the match in the text the pass received.
    """

    original: str
    optimized: str
    type: ChangeType
    context: str
    start: int
    end: int


@dataclass(slots=True)
class HighlightSpan:
    """A region of rewritten text a renderer should mark up."""

    start: int
    end: int
    category: ChangeType
    tooltip: str


@dataclass(slots=True)
class RewriteResult:
    """Plain rewritten text plus the change log and highlight spans."""

    text: str
    changes: list[Change] = field(default_factory=list)
    spans: list[HighlightSpan] = field(default_factory=list)


@dataclass(slots=True)
class KeywordMatch:
    word: str
    count: int


@dataclass(slots=True)
class ReadabilityCheck:
    section: str
    requirement: str
    met: bool
    details: str


@dataclass(slots=True)
class FormattingCheck:
    name: str
    met: bool


@dataclass(slots=True)
class FontCheck:
    name: str
    found: bool


@dataclass(slots=True)
class CertificationCheck:
    name: str
    found: bool


@dataclass(slots=True)
class ScoreBreakdown:
    """Sub-scores in [0, 100]. ``fonts`` is reported but not part of ``overall``."""

    overall: float
    keyword_match: float
    formatting: float
    readability: float
    certifications: float
    fonts: float


@dataclass(slots=True)
class ScoreReport:
    breakdown: ScoreBreakdown
    keyword_matches: list[KeywordMatch]
    missing_keywords: list[str]
    readability_checks: list[ReadabilityCheck]
    formatting_checks: list[FormattingCheck]
    font_checks: list[FontCheck]
    certification_checks: list[CertificationCheck]
