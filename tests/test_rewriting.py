import random
from typing import Sequence

import pytest

from resume_optimizer.errors import InputError
from resume_optimizer.models import ChangeType, RewriteResult
from resume_optimizer.rewriting import (
    CallableReplacementPolicy,
    FirstCandidatePolicy,
    RandomReplacementPolicy,
    apply_enhancement,
    apply_keyword_highlighting,
    apply_metric_highlighting,
    enhance,
)
from tests.utils import SAMPLE_RESUME, SCENARIO_TEXT


def _span_texts(result: RewriteResult, category: ChangeType) -> list[str]:
    return [
        result.text[span.start : span.end]
        for span in result.spans
        if span.category == category
    ]


def test_keyword_highlighting_records_matches_without_editing():
    result = apply_keyword_highlighting(SCENARIO_TEXT, ["project", "retention"])
    assert result.text == SCENARIO_TEXT
    assert [c.original for c in result.changes] == ["project", "retention"]
    for change in result.changes:
        assert change.type is ChangeType.KEYWORD
        assert change.optimized == change.original
        assert SCENARIO_TEXT[change.start : change.end] == change.original
        assert change.context == SCENARIO_TEXT[
            max(0, change.start - 30) : change.end + 30
        ]
    assert _span_texts(result, ChangeType.KEYWORD) == ["project", "retention"]


def test_keyword_matching_is_case_insensitive_and_whole_word():
    text = "Python python PYTHON pythonic cpython"
    result = apply_keyword_highlighting(text, ["python"])
    assert [c.original for c in result.changes] == ["Python", "python", "PYTHON"]


def test_keyword_phrases_match_across_whitespace_runs():
    text = "Led project\nmanagement for two teams"
    result = apply_keyword_highlighting(text, ["project management"])
    assert [c.original for c in result.changes] == ["project\nmanagement"]


def test_overlapping_keywords_each_recorded():
    result = apply_keyword_highlighting("data pipeline", ["data pipeline", "pipeline"])
    assert [(s.start, s.end) for s in result.spans] == [(0, 13), (5, 13)]


def test_keyword_metacharacters_are_literal():
    result = apply_keyword_highlighting("Expert in C++ and C#.", ["c++", "(.*)", "c#"])
    assert [c.original for c in result.changes] == ["C++", "C#"]


@pytest.mark.parametrize("phrase", ["", "   ", None])
def test_blank_keyword_rejected(phrase):
    with pytest.raises(InputError) as excinfo:
        apply_keyword_highlighting("text", ["ok", phrase])
    assert repr(phrase) in str(excinfo.value)


def test_enhancement_with_first_candidate_policy():
    text = "I worked on it and helped the team. Responsible for budgets."
    result = apply_enhancement(text, policy=FirstCandidatePolicy())
    assert result.text == "I spearheaded on it and facilitated the team. led budgets."
    assert [(c.original, c.optimized) for c in result.changes] == [
        ("worked", "spearheaded"),
        ("helped", "facilitated"),
        ("Responsible for", "led"),
    ]
    assert all(c.type is ChangeType.ENHANCEMENT for c in result.changes)
    assert _span_texts(result, ChangeType.ENHANCEMENT) == ["spearheaded", "facilitated", "led"]


def test_enhancement_only_replaces_whole_words():
    text = "Madeleine remade the didactic plan"
    result = apply_enhancement(text, policy=FirstCandidatePolicy())
    assert result.text == text
    assert result.changes == []


def test_enhancement_choices_come_from_candidates():
    result = apply_enhancement(SCENARIO_TEXT, policy=RandomReplacementPolicy(seed=3))
    chosen = {c.original: c.optimized for c in result.changes}
    assert chosen["worked"] in {"spearheaded", "executed", "implemented"}
    assert chosen["improved"] in {"optimized", "enhanced", "streamlined"}


def test_seeded_enhancement_is_repeatable():
    text = "worked worked worked made did helped improved worked"
    first = apply_enhancement(text, policy=RandomReplacementPolicy(random.Random(11)))
    second = apply_enhancement(text, policy=RandomReplacementPolicy(random.Random(11)))
    assert first.text == second.text
    assert first.changes == second.changes


def test_callable_policy_and_custom_map():
    def last(weak: str, candidates: Sequence[str]) -> str:
        return candidates[-1]

    result = apply_enhancement(
        "We used tools",
        verb_map={"used": ["leveraged", "wielded"]},
        policy=CallableReplacementPolicy(last),
    )
    assert result.text == "We wielded tools"


def test_empty_candidate_list_rejected():
    with pytest.raises(InputError):
        apply_enhancement("we used it", verb_map={"used": []})


def test_enhancement_moves_keyword_spans():
    highlighted = apply_keyword_highlighting(SCENARIO_TEXT, ["project", "retention", "worked"])
    result = apply_enhancement(highlighted, policy=FirstCandidatePolicy())
    assert result.text == (
        "I spearheaded on a project that optimized 15% of customer retention."
    )
    assert _span_texts(result, ChangeType.KEYWORD) == ["project", "retention", "spearheaded"]
    assert _span_texts(result, ChangeType.ENHANCEMENT) == ["spearheaded", "optimized"]
    # keyword changes stay first in the log and still describe the input text
    assert [c.type for c in result.changes[:3]] == [ChangeType.KEYWORD] * 3
    assert highlighted.text == SCENARIO_TEXT


def test_metric_pass_skips_dates():
    text = "3/15/2024 saw a 20% increase"
    result = apply_metric_highlighting(text)
    assert [c.original for c in result.changes] == ["20% increase"]
    assert result.changes[0].type is ChangeType.METRIC
    assert result.text == text


def test_metric_pass_handles_separators_and_unit_words():
    text = "Served 1,500 users and cut costs 12.5 percent in Q3 2021."
    result = apply_metric_highlighting(text)
    assert [c.original for c in result.changes] == ["1,500 users", "12.5 percent"]


def test_metric_pass_ignores_bare_numbers():
    result = apply_metric_highlighting("Managed 12 engineers in 2021 on 3 projects")
    assert result.changes == []


def test_metric_after_punctuation_without_digit_is_flagged():
    result = apply_metric_highlighting("Grew revenue,20% increase and 300 users")
    assert [c.original for c in result.changes] == ["20% increase", "300 users"]


def test_metric_never_starts_after_decimal_or_thousands_separator():
    result = apply_metric_highlighting("Build 4.2.50 users and 3,45 percent")
    assert result.changes == []


def test_enhance_runs_verbs_then_metrics():
    result = enhance(SCENARIO_TEXT, policy=FirstCandidatePolicy())
    assert [c.type for c in result.changes] == [
        ChangeType.ENHANCEMENT,
        ChangeType.ENHANCEMENT,
        ChangeType.METRIC,
    ]
    assert _span_texts(result, ChangeType.METRIC) == ["15%"]


def test_sample_resume_end_to_end_log():
    result = enhance(
        apply_keyword_highlighting(SAMPLE_RESUME, ["aws", "data platform"]),
        policy=FirstCandidatePolicy(),
    )
    originals = [(c.type.value, c.original) for c in result.changes]
    assert ("keyword", "AWS") in originals
    assert ("keyword", "data platform") in originals
    assert ("enhancement", "Helped") in originals
    assert ("metric", "2,000 users") in originals
    assert ("metric", "15%") in originals


def test_none_text_rejected():
    with pytest.raises(InputError):
        apply_metric_highlighting(None)  # type: ignore[arg-type]
