"""
LaTeX Generator

Renders a ResumeDocument to LaTeX source with one of the catalog templates.
"""

import unicodedata
from typing import Any, Optional

from jinja2 import TemplateError

from vitae.contexts.templating.exceptions import TemplateRenderError
from vitae.contexts.templating.markdown_formatter import format_contact_line
from vitae.contexts.templating.registries import TemplateRegistry
from vitae.contexts.templating.resume_data_structure import ResumeDocument

# Characters with special meaning in LaTeX text mode
LATEX_SPECIAL_CHARS = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}

# Typographic characters outside the T1/utf8 comfort zone
LATEX_UNICODE_CHARS = {
    "–": "--",
    "—": "---",
    "•": r"\textbullet{}",
    "·": r"\textperiodcentered{}",
    "…": r"\ldots{}",
    "‘": "`",
    "’": "'",
    "“": "``",
    "”": "''",
}

# Latin-1 and Latin Extended-A are handled by inputenc + T1 fontenc
_MAX_NATIVE_CODEPOINT = 0x17F


def _escape_char(char: str) -> str:
    if char in LATEX_SPECIAL_CHARS:
        return LATEX_SPECIAL_CHARS[char]
    if char in LATEX_UNICODE_CHARS:
        return LATEX_UNICODE_CHARS[char]
    if ord(char) <= _MAX_NATIVE_CODEPOINT:
        return char
    # Fall back to the unaccented form (e.g. "ș" -> "s"); drop what has none
    decomposed = unicodedata.normalize("NFKD", char)
    return "".join(c for c in decomposed if ord(c) < 0x80)


def escape_latex(value: Any) -> Any:
    r"""
    Escape a value for LaTeX text mode.

    Strings are escaped character by character; None renders as an empty
    string; other values pass through unchanged.

    Example:
        escape_latex("R&D at 100%")  # R\&D at 100\%
    """
    if value is None:
        return ""
    if not isinstance(value, str):
        return value
    return "".join(_escape_char(char) for char in value)


_default_registry: Optional[TemplateRegistry] = None


def get_registry() -> TemplateRegistry:
    """Shared registry with LaTeX escaping enabled (created on first use)."""
    global _default_registry
    if _default_registry is None:
        _default_registry = TemplateRegistry(finalize=escape_latex)
    return _default_registry


def generate_latex(
    resume: ResumeDocument,
    template_id: Optional[str] = None,
    registry: Optional[TemplateRegistry] = None,
) -> str:
    """
    Render a resume to LaTeX source.

    Args:
        resume: Document to render
        template_id: Catalog id (default: the resume's own template_id)
        registry: Template registry (default: shared escaping registry)

    Returns:
        Complete LaTeX document as a string

    Raises:
        UnknownTemplateError: Template id not in the catalog
        TemplateRenderError: Jinja2 failed while rendering
    """
    registry = registry or get_registry()
    template_id = template_id or resume.template_id
    template = registry.get_template(template_id)
    info = resume.personal_info

    context = {
        "name": info.full_name or resume.title,
        "contact": format_contact_line(info),
        "personal_info": info,
        "summary": resume.summary,
        "experience": resume.experience,
        "education": resume.education,
        "skills": resume.skills,
        "projects": resume.projects,
        "style": registry.catalog.get(template_id),
    }

    try:
        return template.render(**context)
    except TemplateError as e:
        raise TemplateRenderError(
            f"Failed to render resume '{resume.title}'",
            template_id=template_id,
            template_path=registry.get_template_path(template_id),
            original_error=e,
        ) from e
