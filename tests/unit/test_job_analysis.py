"""Unit tests for LLM job analysis with offline fallback."""

import json

import pytest

from vitae.contexts.targeting.job_analysis import analyze_job_match, analyze_job_match_llm

JOB = "Senior Python engineer with Kubernetes and Rust experience"


@pytest.mark.unit
def test_llm_analysis_parsed_and_clamped(sample_resume, scripted_provider):
    payload = {
        "matchScore": 120,
        "keySkills": ["Python"],
        "strengths": ["Python depth"],
        "improvements": ["Learn Rust"],
        "missingSkills": ["Rust"],
        "keywords": ["python", "rust"],
        "optimizedSummary": "Python engineer ready for Rust.",
    }
    result = analyze_job_match_llm(JOB, sample_resume, scripted_provider(json.dumps(payload)))

    assert result.match_score == 100
    assert result.missing_skills == ["Rust"]
    assert result.optimized_summary == "Python engineer ready for Rust."


@pytest.mark.unit
def test_llm_analysis_fills_missing_lists_offline(sample_resume, scripted_provider):
    result = analyze_job_match_llm(JOB, sample_resume, scripted_provider('{"matchScore": 55}'))

    assert result.match_score == 55
    assert "python" in result.keywords
    assert "kubernetes" in result.key_skills


@pytest.mark.unit
def test_falls_back_to_offline_scorer(sample_resume, scripted_provider):
    result = analyze_job_match(JOB, sample_resume, provider=scripted_provider("not json"))
    assert result.optimized_summary is None
    assert "rust" in result.missing_skills


@pytest.mark.unit
def test_offline_mode_skips_provider(sample_resume, scripted_provider):
    provider = scripted_provider('{"matchScore": 99}')
    result = analyze_job_match(JOB, sample_resume, provider=provider, use_llm=False)

    assert provider.calls == []
    assert result.match_score != 99


@pytest.mark.unit
def test_empty_description_never_calls_llm(sample_resume, scripted_provider):
    provider = scripted_provider('{"matchScore": 99}')
    result = analyze_job_match("  ", sample_resume, provider=provider)

    assert provider.calls == []
    assert result.match_score == 0
