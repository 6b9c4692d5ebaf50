import pytest

from resume_optimizer.errors import InputError
from resume_optimizer.models import Ngram
from resume_optimizer.ngrams import extract_ngrams, generate_ngrams
from resume_optimizer.tokenization import clean_tokens
from tests.utils import SAMPLE_RESUME, SCENARIO_TEXT


def test_unigrams_for_scenario_text():
    ngrams = extract_ngrams(SCENARIO_TEXT, 1, 15)
    assert Ngram("project", 1) in ngrams
    assert Ngram("retention", 1) in ngrams
    assert all(ngram.text not in {"that", "on", "of"} for ngram in ngrams)


def test_ranked_by_count_with_first_seen_tie_order():
    text = "cloud data pipeline data pipeline data alpha"
    ngrams = extract_ngrams(text, 1, 10)
    assert [(n.text, n.value) for n in ngrams] == [
        ("data", 3),
        ("pipeline", 2),
        ("cloud", 1),
        ("alpha", 1),
    ]


def test_bigrams_join_windows_with_single_spaces():
    ngrams = extract_ngrams("Machine   learning, machine learning models", 2, 10)
    assert [(n.text, n.value) for n in ngrams] == [
        ("machine learning", 2),
        ("learning machine", 1),
        ("learning models", 1),
    ]


@pytest.mark.parametrize("n", [1, 2, 3])
@pytest.mark.parametrize("limit", [0, 1, 3, 50])
def test_limit_and_count_bounds(n: int, limit: int):
    ngrams = extract_ngrams(SAMPLE_RESUME, n, limit)
    windows = max(0, len(clean_tokens(SAMPLE_RESUME)) - n + 1)
    assert len(ngrams) <= limit
    assert all(ngram.value >= 1 for ngram in ngrams)
    assert sum(ngram.value for ngram in ngrams) <= windows


def test_extraction_is_repeatable():
    first = extract_ngrams(SAMPLE_RESUME, 2, 5, {"data platform"})
    second = extract_ngrams(SAMPLE_RESUME, 2, 5, {"data platform"})
    assert first == second


def test_excluded_phrases_disappear():
    text = "python python python sql sql"
    before = extract_ngrams(text, 1, 10)
    after = extract_ngrams(text, 1, 10, {"python"})
    assert before[0] == Ngram("python", 3)
    assert [n.text for n in after] == ["sql"]


def test_blank_text_yields_nothing():
    assert extract_ngrams("", 1, 10) == []
    assert extract_ngrams("   \n\t ", 2, 10) == []
    assert extract_ngrams("42 % !!", 1, 10) == []


def test_invalid_size_or_limit_rejected():
    with pytest.raises(InputError):
        extract_ngrams("text", 0, 10)
    with pytest.raises(InputError):
        extract_ngrams("text", 1, -1)


def test_both_mode_concatenates_without_dedup():
    text = "data pipeline data pipeline"
    ngrams = generate_ngrams(text, mode="both", limit=10)
    assert [(n.text, n.value) for n in ngrams] == [
        ("data", 2),
        ("pipeline", 2),
        ("data pipeline", 2),
        ("pipeline data", 1),
    ]


def test_multi_mode_switches_to_trigrams():
    text = "senior software engineer senior software engineer"
    ngrams = generate_ngrams(text, mode="multi", use_trigrams=True, limit=1)
    assert ngrams == [Ngram("senior software engineer", 2)]


def test_unknown_mode_rejected():
    with pytest.raises(InputError):
        generate_ngrams("text", mode="quad")
