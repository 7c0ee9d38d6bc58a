"""
Reusable regex patterns and constants for resume text extraction.

Pattern classes follow one convention:
- Dataclasses with frozen=True for immutability
- Class-level compiled patterns
- Extraction functions live in field_extractors.py / section_extractors.py

Every pattern here is applied per line (or per token) and has bounded
backtracking, so parsing stays linear in the input size.
"""

import re
from dataclasses import dataclass

# =============================================================================
# GEOGRAPHIC CONSTANTS
# =============================================================================

US_STATES = (
    "Alabama",
    "Alaska",
    "Arizona",
    "Arkansas",
    "California",
    "Colorado",
    "Connecticut",
    "Delaware",
    "Florida",
    "Georgia",
    "Hawaii",
    "Idaho",
    "Illinois",
    "Indiana",
    "Iowa",
    "Kansas",
    "Kentucky",
    "Louisiana",
    "Maine",
    "Maryland",
    "Massachusetts",
    "Michigan",
    "Minnesota",
    "Mississippi",
    "Missouri",
    "Montana",
    "Nebraska",
    "Nevada",
    "New Hampshire",
    "New Jersey",
    "New Mexico",
    "New York",
    "North Carolina",
    "North Dakota",
    "Ohio",
    "Oklahoma",
    "Oregon",
    "Pennsylvania",
    "Rhode Island",
    "South Carolina",
    "South Dakota",
    "Tennessee",
    "Texas",
    "Utah",
    "Vermont",
    "Virginia",
    "Washington",
    "West Virginia",
    "Wisconsin",
    "Wyoming",
)

_US_STATE_PATTERN = "|".join(re.escape(s) for s in US_STATES)


# =============================================================================
# CONTACT PATTERNS
# =============================================================================


@dataclass(frozen=True)
class ContactPatterns:
    """
    Regex patterns for contact fields in the resume header.

    EMAIL is only ever applied to single whitespace-delimited tokens
    (see field_extractors.extract_email).
    """

    EMAIL: re.Pattern = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

    # (415) 555-2671, 415-555-2671, 415.555.2671, 415 555 2671
    PHONE: re.Pattern = re.compile(r"\(?\d{3}\)?\s*[-.\s]?\d{3}[-.\s]?\d{4}")

    # Emails are at most 254 characters; longer tokens are never tested
    MAX_EMAIL_TOKEN_LENGTH: int = 320


@dataclass(frozen=True)
class LinkPatterns:
    """
    Regex patterns for profile and website links.

    Precedence when classifying a URL: LinkedIn, then GitHub, then generic website.
    """

    LINKEDIN: re.Pattern = re.compile(r"linkedin\.com/in/([^\s/]+)", re.IGNORECASE)
    GITHUB: re.Pattern = re.compile(r"github\.com/([^\s/]+)", re.IGNORECASE)
    WEBSITE: re.Pattern = re.compile(r"https?://[^\s]+", re.IGNORECASE)

    # Hosts claimed by the dedicated link fields
    PROFILE_HOSTS: tuple = ("linkedin.com", "github.com")

    # Punctuation that commonly trails a URL in prose
    TRAILING_PUNCTUATION: str = ".,;:)]>'\""


# =============================================================================
# NAME PATTERNS
# =============================================================================


@dataclass(frozen=True)
class NamePatterns:
    """Constraints for recognizing a name line in the resume header."""

    NAME_TOKEN: re.Pattern = re.compile(r"^[A-Za-z][A-Za-z\s.'-]*$")

    # Only the first few lines are considered
    CANDIDATE_LINES: int = 3
    MIN_LINE_LENGTH: int = 3
    MAX_LINE_LENGTH: int = 50
    MIN_TOKENS: int = 2
    MAX_TOKENS: int = 4

    # Lines containing any of these (case-insensitive) are never names
    REJECT_MARKERS: tuple = ("@", "http", "resume", "curriculum")


# =============================================================================
# LOCATION PATTERNS
# =============================================================================


@dataclass(frozen=True)
class LocationPatterns:
    """
    Regex patterns for the candidate's location in the resume header.

    Supports:
    - City, ST (two-letter state code)
    - City, State Name (full state name)
    """

    # City, State (2-letter abbreviation) - e.g., "Baltimore, MD"
    CITY_STATE_ABBREV: re.Pattern = re.compile(
        r"\b([A-Z][a-z]+(?:\s[A-Z][a-z]+)*),\s?([A-Z]{2})\b"
    )

    # City, State (full name) - e.g., "Baltimore, Maryland"
    CITY_STATE_FULL: re.Pattern = re.compile(
        rf"\b([A-Z][a-z]+(?:\s[A-Z][a-z]+)*),\s?({_US_STATE_PATTERN})\b"
    )

    CANDIDATE_LINES: int = 5
    MAX_LINE_LENGTH: int = 120


# Full state names first so "Portland, Oregon" is not cut to "Portland, Or"
LOCATION_PATTERNS = [
    LocationPatterns.CITY_STATE_FULL,
    LocationPatterns.CITY_STATE_ABBREV,
]


# =============================================================================
# SECTION CONTENT PATTERNS
# =============================================================================


@dataclass(frozen=True)
class ExperiencePatterns:
    """Patterns for lines inside the experience section."""

    # 2019 - 2021, 2019 – Present, 2019-current
    YEAR_RANGE: re.Pattern = re.compile(r"(\d{4})\s*[-–]\s*(\d{4}|present|current)", re.IGNORECASE)

    # "Title - Company", "Title @ Company", "Title | Company"
    # An en dash alone does not mark a role line; it only splits one
    ROLE_DELIMITERS: tuple = ("@", "|", "-")
    ROLE_SPLIT: re.Pattern = re.compile(r"[@|–-]")

    ONGOING_MARKERS: tuple = ("present", "current")
    MIN_DESCRIPTION_LENGTH: int = 20


@dataclass(frozen=True)
class EducationPatterns:
    """Patterns for lines inside the education section."""

    DEGREE: re.Pattern = re.compile(
        r"(bachelor|master|phd|doctorate|associate|diploma|certificate)", re.IGNORECASE
    )
    SPLIT: re.Pattern = re.compile(r"[-–@|]")


@dataclass(frozen=True)
class SkillPatterns:
    """Patterns for lines inside the skills section."""

    SPLIT: re.Pattern = re.compile(r"[,;|•·]")
    MIN_LENGTH: int = 2
    MAX_LENGTH: int = 29
    REJECT_MARKERS: tuple = ("@", "http")
    MAX_SKILLS: int = 15


@dataclass(frozen=True)
class ProjectPatterns:
    """Patterns for lines inside the projects section."""

    # Name ends at the first dash or the start of a URL
    NAME_END: re.Pattern = re.compile(r"[-–]|http", re.IGNORECASE)
    URL: re.Pattern = re.compile(r"https?://\S+", re.IGNORECASE)
    BULLET_PREFIX: re.Pattern = re.compile(r"^[\s\-–•·*]+")
    MAX_PROJECTS: int = 5
