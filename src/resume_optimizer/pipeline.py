from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Collection, List, Sequence

from .cloud import CloudWord, build_cloud
from .config import ResumeOptimizerConfig
from .models import RewriteResult, ScoreReport
from .rewriting import (
    RandomReplacementPolicy,
    ReplacementPolicy,
    apply_keyword_highlighting,
    enhance,
)
from .scoring import score

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DocumentAnalysis:
    """Outputs of the three engines for one document."""

    cloud: List[CloudWord]
    rewrite: RewriteResult
    score: ScoreReport


def build_policy(config: ResumeOptimizerConfig) -> ReplacementPolicy:
    """Random replacement policy, seeded when the config pins a seed."""
    return RandomReplacementPolicy(seed=config.seed)


def optimize_text(
    text: str,
    keywords: Sequence[str],
    config: ResumeOptimizerConfig | None = None,
    policy: ReplacementPolicy | None = None,
) -> RewriteResult:
    """Highlight keywords, then strengthen verbs and flag metrics."""
    cfg = config or ResumeOptimizerConfig()
    highlighted = apply_keyword_highlighting(text, keywords, cfg.context_chars)
    return enhance(
        highlighted,
        verb_map=cfg.verb_replacements,
        policy=policy or build_policy(cfg),
        units=cfg.metric_units,
        context_chars=cfg.context_chars,
    )


def analyze_document(
    text: str,
    keywords: Sequence[str],
    config: ResumeOptimizerConfig | None = None,
    policy: ReplacementPolicy | None = None,
    excluded: Collection[str] = (),
) -> DocumentAnalysis:
    """Run the cloud, rewriting and scoring engines over the same text."""
    cfg = config or ResumeOptimizerConfig()
    cloud = build_cloud(text, cfg, excluded)
    rewrite = optimize_text(text, keywords, cfg, policy)
    report = score(text, keywords, cfg)
    logger.info(
        "Analyzed document: %d cloud entries, %d changes, overall score %.1f.",
        len(cloud),
        len(rewrite.changes),
        report.breakdown.overall,
    )
    return DocumentAnalysis(cloud=cloud, rewrite=rewrite, score=report)
