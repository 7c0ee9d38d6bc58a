"""Unit tests for ResumeDocument and JobAnalysisResult."""

import json
import math

import pytest

from vitae.contexts.templating.exceptions import InvalidResumeStructureError
from vitae.contexts.templating.resume_data_structure import (
    DEFAULT_TEMPLATE_ID,
    ExperienceEntry,
    JobAnalysisResult,
    ResumeDocument,
    clamp_score,
)


@pytest.mark.unit
def test_defaults_are_empty_lists():
    resume = ResumeDocument()
    assert resume.experience == []
    assert resume.skills == []
    assert resume.template_id == DEFAULT_TEMPLATE_ID
    assert resume.personal_info.website is None


@pytest.mark.unit
def test_skills_deduplicated_on_construction():
    resume = ResumeDocument(skills=["Python", "SQL", "Python", "python"])
    assert resume.skills == ["Python", "SQL", "python"]


@pytest.mark.unit
def test_add_skill():
    resume = ResumeDocument(skills=["Python"])
    assert resume.add_skill(" SQL ") is True
    assert resume.add_skill("Python") is False
    assert resume.add_skill("  ") is False
    assert resume.skills == ["Python", "SQL"]


@pytest.mark.unit
def test_entry_ids_repaired():
    resume = ResumeDocument(
        experience=[
            ExperienceEntry(id="a", company="A"),
            ExperienceEntry(id="a", company="B"),
            ExperienceEntry(company="C"),
        ]
    )
    assert [e.id for e in resume.experience] == ["a", "exp-1", "exp-2"]


@pytest.mark.unit
def test_dict_round_trip_uses_camel_case(sample_resume):
    data = sample_resume.to_dict()

    assert data["personalInfo"]["firstName"] == "Jane"
    assert "website" not in data["personalInfo"]
    assert data["experience"][0]["startDate"] == "2019"
    assert data["templateId"] == "professional"
    assert ResumeDocument.from_dict(data) == sample_resume


@pytest.mark.unit
def test_from_dict_tolerates_llm_quirks():
    resume = ResumeDocument.from_dict(
        {
            "personalInfo": {"firstName": " Jane ", "website": ""},
            "skills": "Python, SQL, Python",
            "experience": [{"company": "Acme", "current": "true"}, "garbage"],
            "education": None,
        }
    )
    assert resume.personal_info.first_name == "Jane"
    assert resume.personal_info.website is None
    assert resume.skills == ["Python", "SQL"]
    assert len(resume.experience) == 1
    assert resume.experience[0].current is True
    assert resume.experience[0].id == "exp-1"
    assert resume.education == []


@pytest.mark.unit
@pytest.mark.parametrize("payload", [[], "resume", None, 42])
def test_from_dict_rejects_non_objects(payload):
    with pytest.raises(InvalidResumeStructureError):
        ResumeDocument.from_dict(payload)


@pytest.mark.unit
def test_from_dict_rejects_wrong_section_type():
    with pytest.raises(InvalidResumeStructureError):
        ResumeDocument.from_dict({"experience": "Acme 2019"})


@pytest.mark.unit
def test_copy_is_deep(sample_resume):
    clone = sample_resume.copy()
    clone.experience[0].achievements.append("new")
    clone.skills.append("Go")
    assert "new" not in sample_resume.experience[0].achievements
    assert "Go" not in sample_resume.skills


@pytest.mark.unit
def test_is_sparse(sample_resume):
    assert sample_resume.is_sparse is False
    assert ResumeDocument().is_sparse is True


@pytest.mark.unit
def test_save_and_load_yaml_and_json(sample_resume, tmp_path):
    yaml_path = sample_resume.save(tmp_path / "resume.yaml")
    json_path = sample_resume.save(tmp_path / "nested" / "resume.json")

    assert ResumeDocument.from_file(yaml_path) == sample_resume
    assert ResumeDocument.from_file(json_path) == sample_resume
    assert json.loads(json_path.read_text())["title"] == "Jane Doe Resume"


@pytest.mark.unit
def test_display_dates():
    entry = ExperienceEntry(start_date="2019", end_date="2021", current=True)
    assert entry.display_end_date == "Present"
    assert entry.date_range == "2019 - Present"


# =============================================================================
# JOB ANALYSIS RESULT
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [
        (50, 50),
        (12.5, 13),
        (12.49, 12),
        (-5, 0),
        (150, 100),
        ("87", 87),
        ("high", 0),
        (None, 0),
        (math.nan, 0),
        (math.inf, 100),
    ],
)
def test_clamp_score(value, expected):
    assert clamp_score(value) == expected


@pytest.mark.unit
def test_job_analysis_from_llm_payload():
    result = JobAnalysisResult.from_dict(
        {
            "matchScore": 142,
            "keySkills": ["Python"],
            "strengths": ["APIs"],
            "optimizedSummary": "Engineer focused on data.",
        }
    )
    assert result.match_score == 100
    assert result.missing_skills == []
    assert result.to_dict()["optimizedSummary"] == "Engineer focused on data."


@pytest.mark.unit
def test_job_analysis_rejects_non_object():
    with pytest.raises(InvalidResumeStructureError):
        JobAnalysisResult.from_dict(["not", "an", "object"])
