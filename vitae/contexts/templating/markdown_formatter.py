"""
Markdown Utilities

Helper functions for formatting resume documents as markdown. Used for
previews and as the resume representation sent to LLM prompts.
"""

from typing import List


def format_contact_line(personal_info) -> str:
    """'email | phone | location | links', skipping empty fields."""
    fields = [
        personal_info.email,
        personal_info.phone,
        personal_info.location,
        personal_info.website,
        personal_info.linkedin,
        personal_info.github,
    ]
    return " | ".join(value for value in fields if value)


def format_experience_markdown(entry) -> str:
    """
    Format single experience entry as markdown.

    Position is formatted as ### (section header added separately by caller).

    Args:
        entry: ExperienceEntry

    Returns:
        Markdown-formatted experience entry (without section header)
    """
    heading = " | ".join(part for part in (entry.position, entry.company) if part)
    parts = [f"### {heading or 'Position'}"]

    if entry.date_range:
        parts.append(f"*{entry.date_range}*")
    if entry.description:
        parts.append("")
        parts.append(entry.description)
    if entry.achievements:
        parts.append("")
        parts.extend(f"- {item}" for item in entry.achievements)

    return "\n".join(parts)


def format_education_markdown(entry) -> str:
    """Format single education entry as markdown."""
    parts = [f"### {entry.title or 'Degree'}"]

    details = [part for part in (entry.institution, entry.date_range) if part]
    if details:
        parts.append(" | ".join(details))
    if entry.gpa:
        parts.append(f"GPA: {entry.gpa}")
    if entry.honors:
        parts.append(entry.honors)

    return "\n".join(parts)


def format_project_markdown(entry) -> str:
    parts = [f"### {entry.name or 'Project'}"]
    if entry.description:
        parts.append(entry.description)
    if entry.technologies:
        parts.append(f"*Technologies: {', '.join(entry.technologies)}*")
    if entry.url:
        parts.append(entry.url)
    return "\n".join(parts)


def format_list_markdown(items: List[str], section_name: str) -> str:
    """Format a flat list as a '## Section' followed by bullet items."""
    lines = [f"## {section_name}\n"]
    lines.extend(f"- {item}" for item in items)
    return "\n".join(lines)


def format_resume_markdown(resume) -> str:
    """
    Format a complete resume as markdown.

    Sections without content are omitted.

    Args:
        resume: ResumeDocument

    Returns:
        Markdown text with a # name header and ## section headers
    """
    info = resume.personal_info
    parts = [f"# {info.full_name or resume.title}"]

    contact = format_contact_line(info)
    if contact:
        parts.append(contact)

    if resume.summary:
        parts.append(f"## Professional Summary\n\n{resume.summary}")

    if resume.experience:
        entries = "\n\n".join(format_experience_markdown(entry) for entry in resume.experience)
        parts.append(f"## Experience\n\n{entries}")

    if resume.education:
        entries = "\n\n".join(format_education_markdown(entry) for entry in resume.education)
        parts.append(f"## Education\n\n{entries}")

    if resume.skills:
        parts.append(format_list_markdown(resume.skills, "Skills"))

    if resume.projects:
        entries = "\n\n".join(format_project_markdown(entry) for entry in resume.projects)
        parts.append(f"## Projects\n\n{entries}")

    return "\n\n".join(parts) + "\n"
