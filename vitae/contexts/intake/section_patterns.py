"""
Section header keywords for resume section identification.

A section begins at the first line containing one of its header keywords and
ends at the first later line containing one of its terminator keywords.
Matching is case-insensitive substring matching against whole lines.
"""

from dataclasses import dataclass
from typing import Optional

# =============================================================================
# SECTION RULES
# =============================================================================


@dataclass(frozen=True)
class SectionRule:
    """
    Boundaries of one resume section.

    Attributes:
        name: Section identifier (e.g., "experience")
        headers: Lowercase keywords that open the section
        terminators: Lowercase keywords that close it (empty = runs to end of text)
        max_lines: Stop after this many body lines (None = no cap)
    """

    name: str
    headers: tuple
    terminators: tuple = ()
    max_lines: Optional[int] = None


SUMMARY_RULE = SectionRule(
    name="summary",
    headers=("summary", "profile", "objective", "about", "overview"),
    terminators=("experience", "education", "skills"),
    max_lines=4,
)

EXPERIENCE_RULE = SectionRule(
    name="experience",
    headers=("experience", "employment", "work history", "professional experience"),
    terminators=("education", "skills", "projects"),
)

EDUCATION_RULE = SectionRule(
    name="education",
    headers=("education", "academic", "university", "college", "degree"),
    terminators=("experience", "skills", "projects"),
)

SKILLS_RULE = SectionRule(
    name="skills",
    headers=("skills", "technologies", "expertise", "proficient", "competencies"),
    terminators=("experience", "education", "projects"),
)

# No terminator: the projects block runs to the end of the text
PROJECTS_RULE = SectionRule(
    name="projects",
    headers=("projects", "portfolio", "work samples"),
)


# Summary lines must be longer than this to count as prose
SUMMARY_MIN_LINE_LENGTH = 30


def line_has_keyword(line: str, keywords: tuple) -> bool:
    """Case-insensitive substring match of any keyword in line."""
    if not keywords:
        return False
    lowered = line.lower()
    return any(keyword in lowered for keyword in keywords)
