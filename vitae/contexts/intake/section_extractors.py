"""
Section extractors for resume text.

Sections are located with a small finite-state machine:

    SEARCHING --header keyword--> IN_SECTION --terminator keyword--> DONE

transition() is a pure function of (state, line, rule); section_body() folds
it over a LineStream. Only the first block of each section is read, and DONE
is terminal. Each extractor then interprets the body lines of its section.

Extractors never raise. A missing section yields an empty value.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from vitae.contexts.intake.normalizer import LineStream
from vitae.contexts.intake.patterns import (
    EducationPatterns,
    ExperiencePatterns,
    ProjectPatterns,
    SkillPatterns,
)
from vitae.contexts.intake.section_patterns import (
    EDUCATION_RULE,
    EXPERIENCE_RULE,
    PROJECTS_RULE,
    SKILLS_RULE,
    SUMMARY_MIN_LINE_LENGTH,
    SUMMARY_RULE,
    SectionRule,
    line_has_keyword,
)
from vitae.contexts.templating.resume_data_structure import (
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    dedupe,
)

# =============================================================================
# STATE MACHINE
# =============================================================================


class SectionState(Enum):
    SEARCHING = "searching"
    IN_SECTION = "in_section"
    DONE = "done"


def transition(state: SectionState, line: str, rule: SectionRule) -> SectionState:
    """
    Next scanner state after observing one line.

    Args:
        state: Current state
        line: The line being observed
        rule: Header/terminator keywords of the section

    Returns:
        The next state
    """
    if state is SectionState.SEARCHING:
        if line_has_keyword(line, rule.headers):
            return SectionState.IN_SECTION
        return SectionState.SEARCHING
    if state is SectionState.IN_SECTION:
        if line_has_keyword(line, rule.terminators):
            return SectionState.DONE
        return SectionState.IN_SECTION
    return SectionState.DONE


def section_body(lines: LineStream, rule: SectionRule) -> Tuple[Optional[str], List[str]]:
    """
    Locate the first block of a section.

    Args:
        lines: Normalized LineStream
        rule: Section boundaries

    Returns:
        (header_line, body_lines). header_line is None when the section is
        absent. The header and terminator lines are not part of the body.
    """
    state = SectionState.SEARCHING
    header = None
    body: List[str] = []

    for line in lines:
        next_state = transition(state, line, rule)
        if next_state is SectionState.DONE:
            break
        if state is SectionState.SEARCHING and next_state is SectionState.IN_SECTION:
            header = line
        elif state is SectionState.IN_SECTION:
            body.append(line)
            if rule.max_lines is not None and len(body) >= rule.max_lines:
                break
        state = next_state

    return header, body


# =============================================================================
# SUMMARY
# =============================================================================


def extract_summary(lines: LineStream) -> str:
    """
    Summary paragraph: up to 4 prose lines after a summary header.

    Collection stops at the first line that is 30 characters or shorter or
    that mentions another major section. Returns "" when nothing qualifies.
    """
    _, body = section_body(lines, SUMMARY_RULE)

    collected = []
    for line in body:
        if len(line) <= SUMMARY_MIN_LINE_LENGTH:
            break
        collected.append(line)

    return " ".join(collected)


# =============================================================================
# EXPERIENCE
# =============================================================================


class ExperienceLine(Enum):
    DATE_RANGE = "date_range"
    ROLE = "role"
    DESCRIPTION = "description"
    OTHER = "other"


def classify_experience_line(line: str) -> ExperienceLine:
    """Classify a line of the experience section (first matching rule wins)."""
    if ExperiencePatterns.YEAR_RANGE.search(line):
        return ExperienceLine.DATE_RANGE
    if any(delimiter in line for delimiter in ExperiencePatterns.ROLE_DELIMITERS):
        return ExperienceLine.ROLE
    if len(line) > ExperiencePatterns.MIN_DESCRIPTION_LENGTH:
        return ExperienceLine.DESCRIPTION
    return ExperienceLine.OTHER


def _split_parts(pattern, line: str) -> List[str]:
    return [part.strip() for part in pattern.split(line) if part.strip()]


def _entry_from_date_range(line: str) -> ExperienceEntry:
    match = ExperiencePatterns.YEAR_RANGE.search(line)
    start, end = match.group(1), match.group(2)
    current = end.lower() in ExperiencePatterns.ONGOING_MARKERS
    return ExperienceEntry(start_date=start, end_date="" if current else end, current=current)


def extract_experience(lines: LineStream) -> List[ExperienceEntry]:
    """
    Positions from the first experience section.

    Line handling, in order:
    - a year range ("2019 - Present") starts a new entry
    - a line with @, |, or a hyphen sets position and company ("Title - Company")
    - a longer line becomes the description if the entry has none

    Entries are kept only if a company was found. Achievements are never
    inferred from free text.
    """
    _, body = section_body(lines, EXPERIENCE_RULE)

    entries: List[ExperienceEntry] = []
    current: Optional[ExperienceEntry] = None

    def flush():
        if current is not None and current.company:
            current.id = f"exp-{len(entries) + 1}"
            entries.append(current)

    for line in body:
        kind = classify_experience_line(line)

        if kind is ExperienceLine.DATE_RANGE:
            flush()
            current = _entry_from_date_range(line)
        elif kind is ExperienceLine.ROLE:
            parts = _split_parts(ExperiencePatterns.ROLE_SPLIT, line)
            if len(parts) >= 2:
                current = current or ExperienceEntry()
                current.position, current.company = parts[0], parts[1]
        elif kind is ExperienceLine.DESCRIPTION:
            current = current or ExperienceEntry()
            if not current.description:
                current.description = line

    flush()
    return entries


# =============================================================================
# EDUCATION
# =============================================================================


def extract_education(lines: LineStream) -> List[EducationEntry]:
    """
    Degrees from the first education section.

    Only lines naming a degree level (bachelor, master, phd, ...) produce an
    entry; the first segment is the degree and the last the institution.
    """
    _, body = section_body(lines, EDUCATION_RULE)

    entries = []
    for line in body:
        if not EducationPatterns.DEGREE.search(line):
            continue
        parts = _split_parts(EducationPatterns.SPLIT, line)
        if not parts:
            continue
        entries.append(
            EducationEntry(
                id=f"edu-{len(entries) + 1}",
                degree=parts[0],
                institution=parts[-1] if len(parts) > 1 else "",
            )
        )
    return entries


# =============================================================================
# SKILLS
# =============================================================================


def _skill_tokens(line: str) -> List[str]:
    tokens = []
    for token in SkillPatterns.SPLIT.split(line):
        token = token.strip()
        if len(token) < SkillPatterns.MIN_LENGTH or len(token) > SkillPatterns.MAX_LENGTH:
            continue
        if any(marker in token.lower() for marker in SkillPatterns.REJECT_MARKERS):
            continue
        tokens.append(token)
    return tokens


def extract_skills(lines: LineStream) -> List[str]:
    """
    Skills from the first skills section: delimiter-split, de-duplicated, capped at 15.

    Text after a colon on the header line ("Skills: Python, SQL") counts as
    the first skills line.
    """
    header, body = section_body(lines, SKILLS_RULE)
    if header is None:
        return []

    source = list(body)
    if ":" in header:
        inline = header.split(":", 1)[1].strip()
        if inline:
            source.insert(0, inline)

    skills = []
    for line in source:
        skills.extend(_skill_tokens(line))

    return dedupe(skills)[: SkillPatterns.MAX_SKILLS]


# =============================================================================
# PROJECTS
# =============================================================================


def _project_from_line(line: str, index: int) -> ProjectEntry:
    text = ProjectPatterns.BULLET_PREFIX.sub("", line)
    name_end = ProjectPatterns.NAME_END.search(text)
    name = (text[: name_end.start()] if name_end else text).strip()
    url_match = ProjectPatterns.URL.search(line)

    return ProjectEntry(
        id=f"proj-{index}",
        name=name,
        description=line,
        url=url_match.group(0) if url_match else None,
    )


def extract_projects(lines: LineStream) -> List[ProjectEntry]:
    """
    Projects after the first projects header, one per line, capped at 5.

    The projects block has no terminator and runs to the end of the text.
    """
    _, body = section_body(lines, PROJECTS_RULE)
    return [
        _project_from_line(line, index)
        for index, line in enumerate(body[: ProjectPatterns.MAX_PROJECTS], start=1)
    ]
