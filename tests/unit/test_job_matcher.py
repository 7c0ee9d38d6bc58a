"""Unit tests for the offline job-match scorer."""

import random

import pytest

from vitae.contexts.targeting.job_matcher import (
    EMPTY_DESCRIPTION_MESSAGE,
    GENERAL_IMPROVEMENTS,
    NO_STRENGTHS_MESSAGE,
    extract_keywords,
    resume_corpus,
    score_job_match,
)
from vitae.contexts.templating.resume_data_structure import ResumeDocument


@pytest.mark.unit
def test_extract_keywords_filters_short_and_stop_words():
    text = "We need Python, with SQL and Kubernetes. Python!"
    assert extract_keywords(text) == ["need", "python", "kubernetes"]


@pytest.mark.unit
def test_resume_corpus_includes_summary_descriptions_and_skills(sample_resume):
    corpus = resume_corpus(sample_resume)
    assert "kafka" in corpus
    assert "terraform" in corpus
    assert "acme" not in corpus  # company names are not scored


@pytest.mark.unit
def test_score_half_match(sample_resume):
    result = score_job_match("Python Kubernetes Rust Golang", sample_resume)

    assert result.match_score == 50
    assert result.key_skills == ["python", "kubernetes"]
    assert result.missing_skills == ["rust", "golang"]
    assert result.strengths == ["Strong experience with Python", "Strong experience with Kubernetes"]
    assert result.improvements[0] == "Consider adding skills: rust, golang"
    assert result.improvements[1:] == GENERAL_IMPROVEMENTS[:2]
    assert result.keywords == ["python", "kubernetes", "rust", "golang"]


@pytest.mark.unit
def test_score_rounds_half_up(sample_resume):
    result = score_job_match("python alpha bravo charlie delta echo foxtrot golf", sample_resume)
    assert result.match_score == 13


@pytest.mark.unit
def test_substring_matches_count(sample_resume):
    result = score_job_match("postgres", sample_resume)
    assert result.match_score == 100
    assert result.improvements[0] == "Add more specific technical skills"


@pytest.mark.unit
@pytest.mark.parametrize("description", ["", "   ", None])
def test_empty_description(sample_resume, description):
    result = score_job_match(description, sample_resume)
    assert result.match_score == 0
    assert result.improvements == [EMPTY_DESCRIPTION_MESSAGE]


@pytest.mark.unit
def test_description_without_keywords(sample_resume):
    result = score_job_match("a an the of it", sample_resume)
    assert result.match_score == 0
    assert result.keywords == []
    assert result.strengths == [NO_STRENGTHS_MESSAGE]


@pytest.mark.unit
def test_empty_resume_scores_zero():
    result = score_job_match("Python developer", ResumeDocument())
    assert result.match_score == 0
    assert result.missing_skills == ["python", "developer"]


@pytest.mark.unit
def test_list_caps(sample_resume):
    words = " ".join(f"word{chr(97 + i)}{chr(97 + j)}" for i in range(5) for j in range(5))
    result = score_job_match(words, sample_resume)

    assert len(result.keywords) == 15
    assert len(result.missing_skills) == 8
    assert len(result.improvements) == 3


@pytest.mark.unit
def test_score_is_bounded_for_random_input(sample_resume):
    rng = random.Random(7)
    vocabulary = ["python", "sql", "rust", "teamwork", "cloud", "kafka", "the", "data", "?!"]
    for _ in range(100):
        description = " ".join(rng.choice(vocabulary) for _ in range(rng.randint(1, 40)))
        assert 0 <= score_job_match(description, sample_resume).match_score <= 100
