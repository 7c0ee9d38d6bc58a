"""Unit tests for the section state machine and section extractors."""

import pytest

from vitae.contexts.intake.section_extractors import (
    ExperienceLine,
    SectionState,
    classify_experience_line,
    extract_education,
    extract_experience,
    extract_projects,
    extract_skills,
    extract_summary,
    section_body,
    transition,
)
from vitae.contexts.intake.section_patterns import EXPERIENCE_RULE, PROJECTS_RULE, SUMMARY_RULE

# =============================================================================
# STATE MACHINE
# =============================================================================


@pytest.mark.unit
def test_transition_searching_to_in_section_on_header():
    assert transition(SectionState.SEARCHING, "WORK EXPERIENCE", EXPERIENCE_RULE) is SectionState.IN_SECTION
    assert transition(SectionState.SEARCHING, "Jane Doe", EXPERIENCE_RULE) is SectionState.SEARCHING


@pytest.mark.unit
def test_transition_in_section_to_done_on_terminator():
    assert transition(SectionState.IN_SECTION, "Education", EXPERIENCE_RULE) is SectionState.DONE
    assert transition(SectionState.IN_SECTION, "Built APIs", EXPERIENCE_RULE) is SectionState.IN_SECTION


@pytest.mark.unit
def test_transition_done_is_terminal():
    assert transition(SectionState.DONE, "Experience", EXPERIENCE_RULE) is SectionState.DONE


@pytest.mark.unit
def test_projects_rule_has_no_terminator():
    assert transition(SectionState.IN_SECTION, "Education", PROJECTS_RULE) is SectionState.IN_SECTION


@pytest.mark.unit
def test_section_body_reads_only_first_block():
    lines = ("Experience", "first", "Skills", "Python", "Experience", "second")
    header, body = section_body(lines, EXPERIENCE_RULE)
    assert header == "Experience"
    assert body == ["first"]


@pytest.mark.unit
def test_section_body_missing_section():
    assert section_body(("Jane Doe",), EXPERIENCE_RULE) == (None, [])


@pytest.mark.unit
def test_section_body_respects_max_lines():
    lines = ("Summary",) + tuple(f"line {i}" for i in range(10))
    _, body = section_body(lines, SUMMARY_RULE)
    assert len(body) == 4


# =============================================================================
# SUMMARY
# =============================================================================


@pytest.mark.unit
def test_extract_summary_joins_prose_lines():
    lines = (
        "Professional Summary",
        "Backend engineer with eight years building data platforms.",
        "Focused on reliable distributed systems and tooling.",
        "Python",
        "This line comes after a short one and is ignored.",
    )
    assert extract_summary(lines) == (
        "Backend engineer with eight years building data platforms. "
        "Focused on reliable distributed systems and tooling."
    )


@pytest.mark.unit
def test_extract_summary_missing_header():
    assert extract_summary(("Jane Doe", "A long line that is definitely over thirty chars")) == ""


# =============================================================================
# EXPERIENCE
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "line,kind",
    [
        ("2019 - Present", ExperienceLine.DATE_RANGE),
        ("Jan 2015 – 2019", ExperienceLine.DATE_RANGE),
        ("Engineer @ Acme", ExperienceLine.ROLE),
        ("Engineer | Acme", ExperienceLine.ROLE),
        ("Led platform work – cut costs by half", ExperienceLine.DESCRIPTION),
        ("Built and shipped the billing platform", ExperienceLine.DESCRIPTION),
        ("Built things.", ExperienceLine.OTHER),
    ],
)
def test_classify_experience_line(line, kind):
    assert classify_experience_line(line) is kind


@pytest.mark.unit
def test_experience_stops_at_education_boundary():
    lines = (
        "EXPERIENCE",
        "2019 - Present",
        "Senior Engineer - Acme Corp",
        "Built things.",
        "EDUCATION",
        "BS in CS - MIT",
    )
    entries = extract_experience(lines)

    assert len(entries) == 1
    entry = entries[0]
    assert entry.id == "exp-1"
    assert entry.position == "Senior Engineer"
    assert entry.company == "Acme Corp"
    assert entry.start_date == "2019"
    assert entry.current is True
    assert entry.end_date == ""


@pytest.mark.unit
def test_experience_en_dash_prose_is_description():
    lines = (
        "EXPERIENCE",
        "2019 - Present",
        "Engineer @ Acme",
        "Led platform work – cut costs by half",
    )
    entry = extract_experience(lines)[0]

    assert (entry.position, entry.company) == ("Engineer", "Acme")
    assert entry.description == "Led platform work – cut costs by half"


@pytest.mark.unit
def test_experience_multiple_entries_with_descriptions():
    lines = (
        "Work History",
        "2019 - 2022",
        "Engineer | Acme",
        "Designed the event ingestion service end to end.",
        "A second long line that should not replace the description.",
        "2015 - 2019",
        "Analyst @ Initech",
    )
    entries = extract_experience(lines)

    assert [e.company for e in entries] == ["Acme", "Initech"]
    assert [e.id for e in entries] == ["exp-1", "exp-2"]
    assert entries[0].end_date == "2022"
    assert entries[0].current is False
    assert entries[0].description == "Designed the event ingestion service end to end."
    assert entries[1].description == ""


@pytest.mark.unit
def test_experience_without_company_is_dropped():
    lines = ("Experience", "2019 - 2020", "Worked on many different internal tools")
    assert extract_experience(lines) == []


@pytest.mark.unit
def test_experience_role_before_any_date():
    lines = ("Experience", "Consultant - Globex", "Advised clients on cloud migrations.")
    entries = extract_experience(lines)
    assert len(entries) == 1
    assert entries[0].company == "Globex"
    assert entries[0].start_date == ""


# =============================================================================
# EDUCATION
# =============================================================================


@pytest.mark.unit
def test_extract_education_degree_lines_only():
    lines = (
        "Education",
        "Bachelor of Science - University of Maryland",
        "Dean's list",
        "Master of Engineering | Johns Hopkins University",
        "Skills",
        "Python",
    )
    entries = extract_education(lines)

    assert [(e.degree, e.institution) for e in entries] == [
        ("Bachelor of Science", "University of Maryland"),
        ("Master of Engineering", "Johns Hopkins University"),
    ]
    assert [e.id for e in entries] == ["edu-1", "edu-2"]


@pytest.mark.unit
def test_extract_education_single_part_has_no_institution():
    entries = extract_education(("Education", "PhD Physics"))
    assert entries[0].degree == "PhD Physics"
    assert entries[0].institution == ""


# =============================================================================
# SKILLS
# =============================================================================


@pytest.mark.unit
def test_extract_skills_splits_and_dedupes():
    lines = ("Skills", "Python, SQL; Go | Python", "Docker • Rust")
    assert extract_skills(lines) == ["Python", "SQL", "Go", "Docker", "Rust"]


@pytest.mark.unit
def test_extract_skills_includes_header_inline_text():
    lines = ("Technical Skills: Python, SQL", "Docker")
    assert extract_skills(lines) == ["Python", "SQL", "Docker"]


@pytest.mark.unit
def test_extract_skills_filters_length_and_urls():
    lines = ("Skills", "C, R, https://example.com, " + "x" * 30 + ", Go")
    assert extract_skills(lines) == ["Go"]


@pytest.mark.unit
def test_extract_skills_caps_at_fifteen():
    lines = ("Skills", ", ".join(f"skill{i:02d}" for i in range(30)))
    skills = extract_skills(lines)
    assert len(skills) == 15
    assert skills[0] == "skill00"


@pytest.mark.unit
def test_extract_skills_case_sensitive_duplicates_kept():
    assert extract_skills(("Skills", "python, Python")) == ["python", "Python"]


@pytest.mark.unit
def test_extract_skills_missing_section():
    assert extract_skills(("Jane Doe",)) == []


# =============================================================================
# PROJECTS
# =============================================================================


@pytest.mark.unit
def test_extract_projects_name_and_url():
    lines = (
        "Projects",
        "- Pipeline Kit - open source ETL toolkit https://github.com/jane/pk",
        "Resume Builder https://example.com/rb",
    )
    projects = extract_projects(lines)

    assert [p.name for p in projects] == ["Pipeline Kit", "Resume Builder"]
    assert projects[0].url == "https://github.com/jane/pk"
    assert projects[0].description == lines[1]
    assert [p.id for p in projects] == ["proj-1", "proj-2"]


@pytest.mark.unit
def test_extract_projects_runs_to_end_and_caps_at_five():
    lines = ("Projects",) + tuple(f"Project {i}" for i in range(8)) + ("Education",)
    projects = extract_projects(lines)
    assert len(projects) == 5
    assert projects[-1].name == "Project 4"
    assert projects[0].url is None
