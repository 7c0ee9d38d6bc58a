"""
Single-value field extractors for resume text.

Each extractor reads a LineStream and returns at most one value. Extractors
are independent of each other and never raise: a field that cannot be found
is returned as its empty value ("" or None).
"""

from typing import Optional, Tuple

from vitae.contexts.intake.normalizer import LineStream
from vitae.contexts.intake.patterns import (
    LOCATION_PATTERNS,
    ContactPatterns,
    LinkPatterns,
    LocationPatterns,
    NamePatterns,
)
from vitae.contexts.templating.resume_data_structure import PersonalInfo

# =============================================================================
# NAME
# =============================================================================


def _is_name_line(line: str) -> bool:
    lowered = line.lower()
    if any(marker in lowered for marker in NamePatterns.REJECT_MARKERS):
        return False
    if not NamePatterns.MIN_LINE_LENGTH <= len(line) <= NamePatterns.MAX_LINE_LENGTH:
        return False

    tokens = line.split()
    if not NamePatterns.MIN_TOKENS <= len(tokens) <= NamePatterns.MAX_TOKENS:
        return False
    if not all(len(token) > 1 and NamePatterns.NAME_TOKEN.match(token) for token in tokens):
        return False
    return any(token[0].isupper() for token in tokens)


def extract_name(lines: LineStream) -> Tuple[str, str]:
    """
    Find the candidate's name in the first few lines.

    The first acceptable line wins: first token is the first name, the
    remaining tokens form the last name.

    Args:
        lines: Normalized LineStream

    Returns:
        (first_name, last_name), or ("", "") if no line qualifies

    Example:
        >>> extract_name(("Jane A. Doe", "Software Engineer"))
        ('Jane', 'A. Doe')
    """
    for line in lines[: NamePatterns.CANDIDATE_LINES]:
        if _is_name_line(line):
            tokens = line.split()
            return tokens[0], " ".join(tokens[1:])
    return "", ""


# =============================================================================
# CONTACT FIELDS
# =============================================================================


def extract_email(lines: LineStream) -> str:
    """
    First email address in document order, or "".

    Only whitespace-delimited tokens containing "@" are tested, so long lines
    without an address are skipped in linear time.
    """
    for line in lines:
        if "@" not in line:
            continue
        for token in line.split():
            if "@" not in token or len(token) > ContactPatterns.MAX_EMAIL_TOKEN_LENGTH:
                continue
            match = ContactPatterns.EMAIL.search(token)
            if match:
                return match.group(0)
    return ""


def extract_phone(lines: LineStream) -> str:
    """First phone number in document order, or ""."""
    for line in lines:
        match = ContactPatterns.PHONE.search(line)
        if match:
            return match.group(0).strip()
    return ""


def extract_location(lines: LineStream, skip: Tuple[str, ...] = ()) -> str:
    """
    "City, ST" or "City, State" from the resume header, or "".

    Args:
        lines: Normalized LineStream
        skip: Lines to ignore (e.g., the line already used as the name)
    """
    for line in lines[: LocationPatterns.CANDIDATE_LINES]:
        if line in skip or len(line) > LocationPatterns.MAX_LINE_LENGTH:
            continue
        if "@" in line or "http" in line.lower():
            continue
        for pattern in LOCATION_PATTERNS:
            match = pattern.search(line)
            if match:
                return f"{match.group(1)}, {match.group(2)}"
    return ""


# =============================================================================
# LINKS
# =============================================================================


def extract_linkedin(lines: LineStream) -> Optional[str]:
    """First LinkedIn profile as "linkedin.com/in/<handle>", or None."""
    for line in lines:
        match = LinkPatterns.LINKEDIN.search(line)
        if match:
            return f"linkedin.com/in/{match.group(1)}"
    return None


def extract_github(lines: LineStream) -> Optional[str]:
    """First GitHub profile as "github.com/<handle>", or None."""
    for line in lines:
        match = LinkPatterns.GITHUB.search(line)
        if match:
            return f"github.com/{match.group(1)}"
    return None


def _is_profile_url(url: str) -> bool:
    lowered = url.lower()
    return any(host in lowered for host in LinkPatterns.PROFILE_HOSTS)


def extract_website(lines: LineStream) -> Optional[str]:
    """
    First http(s) URL that is not a LinkedIn or GitHub link, or None.

    LinkedIn and GitHub URLs belong to their dedicated fields, so a resume
    whose only URL is a LinkedIn profile has no website.
    """
    for line in lines:
        if "http" not in line.lower():
            continue
        for match in LinkPatterns.WEBSITE.finditer(line):
            url = match.group(0).rstrip(LinkPatterns.TRAILING_PUNCTUATION)
            if not _is_profile_url(url):
                return url
    return None


# =============================================================================
# ALL FIELDS
# =============================================================================


def extract_personal_info(lines: LineStream) -> PersonalInfo:
    """Run every field extractor and assemble the contact block."""
    first_name, last_name = extract_name(lines)
    name_line = (f"{first_name} {last_name}",) if first_name else ()

    return PersonalInfo(
        first_name=first_name,
        last_name=last_name,
        email=extract_email(lines),
        phone=extract_phone(lines),
        location=extract_location(lines, skip=name_line),
        website=extract_website(lines),
        linkedin=extract_linkedin(lines),
        github=extract_github(lines),
    )
