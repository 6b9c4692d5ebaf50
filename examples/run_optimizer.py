"""
Tiny helper script to sanity check the three engines on a sample resume.
Pass a seed to make the verb replacements reproducible.
"""

from __future__ import annotations

import sys

from resume_optimizer.cloud import build_cloud, visible_phrases
from resume_optimizer.config import ResumeOptimizerConfig
from resume_optimizer.pipeline import analyze_document

SAMPLE = """Jane Doe
SUMMARY:
I worked on a project that improved 15% of customer retention.

EXPERIENCE:
- Helped launch a data platform for 2,000 users
- Responsible for the AWS migration budget
"""


def main() -> None:
    seed = int(sys.argv[1]) if len(sys.argv) > 1 else None
    config = ResumeOptimizerConfig(cloud_mode="both", seed=seed)

    keywords = visible_phrases(build_cloud(SAMPLE, config))
    analysis = analyze_document(SAMPLE, keywords, config)

    print("Keywords:", ", ".join(keywords))
    print("-" * 40)
    print(analysis.rewrite.text)
    print("-" * 40)
    for change in analysis.rewrite.changes:
        print(f"[{change.type.value}] {change.original!r} -> {change.optimized!r}")
    breakdown = analysis.score.breakdown
    print("-" * 40)
    print(f"Overall ATS score: {breakdown.overall:.1f}")


if __name__ == "__main__":
    main()
