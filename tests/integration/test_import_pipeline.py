"""
Integration tests for the import pipeline: file -> text -> document -> YAML.
"""

import io

import pytest
from docx import Document

from vitae.contexts.intake.llm_parser import import_resume
from vitae.contexts.intake.text_extraction import extract_text
from vitae.contexts.targeting.job_matcher import score_job_match
from vitae.contexts.templating.resume_data_structure import ResumeDocument


def _write_docx(path, text):
    document = Document()
    for line in text.splitlines():
        document.add_paragraph(line)
    buffer = io.BytesIO()
    document.save(buffer)
    path.write_bytes(buffer.getvalue())


@pytest.mark.integration
@pytest.mark.parametrize("suffix", [".txt", ".docx"])
def test_file_to_saved_document(tmp_path, sample_text, suffix):
    resume_file = tmp_path / f"jane_doe{suffix}"
    if suffix == ".docx":
        _write_docx(resume_file, sample_text)
    else:
        resume_file.write_text(sample_text, encoding="utf-8")

    result = import_resume(extract_text(resume_file), filename=resume_file.name, use_llm=False)
    resume = result.resume

    assert result.source == "heuristic"
    assert resume.title == "jane_doe"
    assert resume.personal_info.email == "jane.doe@example.com"
    assert resume.personal_info.linkedin
    assert [e.company for e in resume.experience] == ["Acme Corp", "Initech"]
    assert resume.experience[0].current is True
    assert resume.education[0].institution == "University of Maryland"
    assert resume.skills == ["Python", "SQL", "Kubernetes", "Docker", "Terraform"]
    assert resume.projects[0].name == "Pipeline Kit"

    saved = resume.save(tmp_path / "out" / "jane.yaml")
    assert ResumeDocument.from_file(saved).to_dict() == resume.to_dict()


@pytest.mark.integration
def test_imported_resume_scores_against_job(tmp_path, sample_text):
    resume = import_resume(sample_text, use_llm=False).resume

    matching = score_job_match("Python engineer for Kubernetes and Terraform platforms", resume)
    unrelated = score_job_match("Pastry chef for croissants and baguettes", resume)

    assert matching.match_score > unrelated.match_score
    assert "python" in matching.key_skills
