"""Unit tests for markdown resume previews."""

import pytest

from vitae.contexts.templating.markdown_formatter import (
    format_contact_line,
    format_education_markdown,
    format_experience_markdown,
    format_list_markdown,
    format_resume_markdown,
)
from vitae.contexts.templating.resume_data_structure import ResumeDocument


@pytest.mark.unit
def test_contact_line_skips_empty_fields(sample_resume):
    assert format_contact_line(sample_resume.personal_info) == (
        "jane.doe@example.com | (415) 555-2671 | Baltimore, MD | linkedin.com/in/janedoe"
    )


@pytest.mark.unit
def test_experience_markdown(sample_resume):
    text = format_experience_markdown(sample_resume.experience[0])
    assert text.splitlines()[0] == "### Senior Engineer | Acme Corp"
    assert "*2019 - Present*" in text
    assert "- Cut latency by 60%" in text


@pytest.mark.unit
def test_education_markdown(sample_resume):
    text = format_education_markdown(sample_resume.education[0])
    assert text.splitlines() == [
        "### Bachelor of Science in Computer Science",
        "University of Maryland | 2015",
    ]


@pytest.mark.unit
def test_list_markdown():
    assert format_list_markdown(["Python", "SQL"], "Skills") == "## Skills\n\n- Python\n- SQL"


@pytest.mark.unit
def test_resume_markdown_sections(sample_resume):
    text = format_resume_markdown(sample_resume)

    assert text.startswith("# Jane Doe\n")
    for heading in ("## Professional Summary", "## Experience", "## Education", "## Skills", "## Projects"):
        assert heading in text
    assert sample_resume.text == text


@pytest.mark.unit
def test_resume_markdown_omits_empty_sections():
    text = format_resume_markdown(ResumeDocument(title="Imported Resume"))
    assert text == "# Imported Resume\n"
