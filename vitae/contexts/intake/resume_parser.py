"""
Heuristic resume parser (document assembler).

Normalizes raw text into a LineStream, runs every field and section
extractor, applies fallbacks, and returns one ResumeDocument.

parse_resume_text is total and deterministic: any string (empty, garbage,
multi-megabyte) yields a document, and the same input always yields the same
document. It performs no I/O.
"""

from pathlib import PurePath
from typing import Optional, Union

from vitae.contexts.intake.field_extractors import extract_personal_info
from vitae.contexts.intake.normalizer import is_blank, to_line_stream
from vitae.contexts.intake.section_extractors import (
    extract_education,
    extract_experience,
    extract_projects,
    extract_skills,
    extract_summary,
)
from vitae.contexts.templating.resume_data_structure import ResumeDocument

EMPTY_RESUME_TITLE = "Empty Resume"
NO_CONTENT_TITLE = "No Content Found"
IMPORTED_RESUME_TITLE = "Imported Resume"
FALLBACK_SUMMARY = "Professional with diverse experience and skills."


def title_from_filename(filename: Optional[str]) -> str:
    """Filename without directory or extension, or the generic import title."""
    if not filename:
        return IMPORTED_RESUME_TITLE
    stem = PurePath(filename).stem.strip()
    return stem or IMPORTED_RESUME_TITLE


def parse_resume_text(
    raw_text: Union[str, bytes, None], filename: Optional[str] = None
) -> ResumeDocument:
    """
    Parse extracted resume text into a ResumeDocument.

    Args:
        raw_text: Text extracted from the uploaded file
        filename: Original filename, used for the document title

    Returns:
        A freshly allocated ResumeDocument. Blank input yields a default
        document titled "Empty Resume"; text that normalizes to nothing
        yields one titled "No Content Found". Neither gets the summary
        fallback.

    Example:
        >>> doc = parse_resume_text("Jane Doe\\njane@example.com")
        >>> doc.personal_info.email
        'jane@example.com'
    """
    if is_blank(raw_text):
        return ResumeDocument(title=EMPTY_RESUME_TITLE)

    lines = to_line_stream(raw_text)
    if not lines:
        return ResumeDocument(title=NO_CONTENT_TITLE)

    return ResumeDocument(
        title=title_from_filename(filename),
        personal_info=extract_personal_info(lines),
        summary=extract_summary(lines) or FALLBACK_SUMMARY,
        experience=extract_experience(lines),
        education=extract_education(lines),
        skills=extract_skills(lines),
        projects=extract_projects(lines),
    )
