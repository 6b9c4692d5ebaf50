from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .config import CertificationSpec, ResumeOptimizerConfig
from .errors import InputError
from .models import (
    CertificationCheck,
    FontCheck,
    FormattingCheck,
    KeywordMatch,
    ReadabilityCheck,
    ScoreBreakdown,
    ScoreReport,
)
from .tokenization import whitespace_tokens

logger = logging.getLogger(__name__)

PRESENT_DETAILS = "Present and properly formatted"
MISSING_DETAILS = "Missing or improperly formatted"


@dataclass(frozen=True, slots=True)
class _SectionProbe:
    name: str
    requirement: str
    pattern: re.Pattern[str]


READABILITY_PROBES: Tuple[_SectionProbe, ...] = (
    _SectionProbe("Name/Header", "18-24 pt", re.compile(r"\A[^\n]+\n")),
    _SectionProbe(
        "Section Headings", "12-14 pt (Bold)", re.compile(r"^[A-Z][^a-z\n]+:?$", re.M)
    ),
    _SectionProbe(
        "Body Text", "10-12 pt", re.compile(r"^(?![A-Z][^a-z\n]+:?$)[^\n]+$", re.M)
    ),
    _SectionProbe("Bullet Points", "10-11 pt", re.compile(r"^[•·-][^\n]+$", re.M)),
)

HEADING_PATTERN = re.compile(r"[A-Z][^a-z\n]+:")
BULLET_START_PATTERN = re.compile(r"^[•·-]", re.M)
NON_ASCII_PATTERN = re.compile(r"[^\x00-\x7F]")


def _percent(hits: int, total: int) -> float:
    return hits / total * 100 if total else 0.0


def keyword_coverage(
    text: str, keywords: Sequence[str]
) -> Tuple[float, List[KeywordMatch], List[str]]:
    """
    Exact whitespace-token counts per keyword.

    An empty keyword list is vacuously covered and scores 100.
    """
    if keywords is None:
        raise InputError("Keyword list must not be None.")
    tokens = whitespace_tokens(text)
    counts = [(word, tokens.count(word.lower())) for word in keywords]
    matches = [KeywordMatch(word=word, count=count) for word, count in counts if count > 0]
    missing = [word for word, count in counts if count == 0]
    if not keywords:
        return 100.0, matches, missing
    return _percent(len(matches), len(keywords)), matches, missing


def readability_checks(text: str) -> List[ReadabilityCheck]:
    checks: List[ReadabilityCheck] = []
    for probe in READABILITY_PROBES:
        met = probe.pattern.search(text) is not None
        checks.append(
            ReadabilityCheck(
                section=probe.name,
                requirement=probe.requirement,
                met=met,
                details=PRESENT_DETAILS if met else MISSING_DETAILS,
            )
        )
    return checks


def formatting_checks(text: str, min_length: int = 300) -> List[FormattingCheck]:
    return [
        FormattingCheck("Paragraph spacing", "\n\n" in text),
        FormattingCheck("Section headers", HEADING_PATTERN.search(text) is not None),
        FormattingCheck("Bullet points", BULLET_START_PATTERN.search(text) is not None),
        FormattingCheck("Minimum content", len(text) > min_length),
        FormattingCheck("Plain characters", NON_ASCII_PATTERN.search(text) is None),
    ]


def font_checks(text: str, fonts: Iterable[str]) -> List[FontCheck]:
    checks: List[FontCheck] = []
    for name in fonts:
        pattern = re.compile(r"font-family:\s*" + re.escape(name), re.IGNORECASE)
        checks.append(FontCheck(name=name, found=pattern.search(text) is not None))
    return checks


def certification_checks(
    text: str, certifications: Iterable[CertificationSpec]
) -> List[CertificationCheck]:
    checks: List[CertificationCheck] = []
    for cert in certifications:
        alternation = "|".join(re.escape(option) for option in cert.patterns())
        pattern = re.compile(rf"(?<!\w)(?:{alternation})(?!\w)", re.IGNORECASE)
        checks.append(
            CertificationCheck(name=cert.name, found=pattern.search(text) is not None)
        )
    return checks


def score(
    text: str,
    keywords: Sequence[str],
    config: ResumeOptimizerConfig | None = None,
) -> ScoreReport:
    """Run every ATS check over ``text`` and combine the results.

    ``overall`` averages keyword, readability, formatting and certification
    scores. The font score is reported alongside but left out of the average.
    """
    if text is None:
        raise InputError("Text must not be None.")
    cfg = config or ResumeOptimizerConfig()

    keyword_score, matches, missing = keyword_coverage(text, keywords)
    readability = readability_checks(text)
    formatting = formatting_checks(text, cfg.min_text_length)
    fonts = font_checks(text, cfg.allowed_fonts)
    certifications = certification_checks(text, cfg.certifications)

    readability_score = _percent(sum(c.met for c in readability), len(readability))
    formatting_score = _percent(sum(c.met for c in formatting), len(formatting))
    font_score = 100.0 if any(c.found for c in fonts) else 0.0
    certification_score = _percent(
        sum(c.found for c in certifications), len(certifications)
    )
    overall = (
        keyword_score + readability_score + formatting_score + certification_score
    ) / 4

    breakdown = ScoreBreakdown(
        overall=overall,
        keyword_match=keyword_score,
        formatting=formatting_score,
        readability=readability_score,
        certifications=certification_score,
        fonts=font_score,
    )
    logger.info(
        "ATS score %.1f (keywords %.1f, readability %.1f, formatting %.1f, certifications %.1f).",
        overall,
        keyword_score,
        readability_score,
        formatting_score,
        certification_score,
    )
    return ScoreReport(
        breakdown=breakdown,
        keyword_matches=matches,
        missing_keywords=missing,
        readability_checks=readability,
        formatting_checks=formatting,
        font_checks=fonts,
        certification_checks=certifications,
    )
