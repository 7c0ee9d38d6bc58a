"""
Cover letter drafting.

generate_cover_letter_llm asks an LLM for a tailored letter.
compose_cover_letter fills a fixed template from the resume and needs no
network. write_cover_letter prefers the LLM and falls back to the template.
"""

from dataclasses import dataclass
from typing import Optional

from jinja2 import Environment, StrictUndefined
from loguru import logger

from vitae.contexts.templating.resume_data_structure import ResumeDocument
from vitae.utils.llm import LLMError, LLMProvider, get_provider

DEFAULT_SIGNATURE = "Candidate"
DEFAULT_BACKGROUND = (
    "I am a dedicated professional with a track record of delivering results "
    "and a passion for continuous learning."
)

# =============================================================================
# OFFLINE TEMPLATE
# =============================================================================

_LETTER_TEMPLATE = """\
Dear Hiring Manager,

I am writing to express my strong interest in the {{ job_title }} position at {{ company_name }}. \
{% if top_skills %}With my background in {{ top_skills|join(", ") }}, {% else %}With my professional background, {% endif %}\
I am excited about the opportunity to contribute to your team.

{{ background }}
{% if highlights %}

My key qualifications include:
{% for line in highlights %}
• {{ line }}
{% endfor %}
{% endif %}

I am particularly drawn to this role because it aligns with my career goals and allows me to \
leverage my skills in a meaningful way. I would welcome the opportunity to discuss how my \
experience and enthusiasm can contribute to {{ company_name }}'s continued success.

Thank you for your consideration. I look forward to hearing from you.

Best regards,
{{ signature }}
"""

_env = Environment(undefined=StrictUndefined, trim_blocks=True, keep_trailing_newline=True)
_letter = _env.from_string(_LETTER_TEMPLATE)

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

_SYSTEM_PROMPT = """\
You are a professional cover letter writer. Write compelling, specific cover letters
grounded in the candidate's actual resume. Return only the letter text."""

_USER_PROMPT_TEMPLATE = """\
Create a cover letter for the following job application.

Job Title: {job_title}
Company: {company_name}
Job Description:
{job_description}

Candidate Resume:
{resume}

Write a professional cover letter that:
1. Is personalized to the specific job and company
2. Highlights relevant experience and skills from the resume
3. Shows enthusiasm for the role
4. Is between 250-400 words
5. Uses a professional but engaging tone
6. Includes specific examples when possible

Format the cover letter with proper business letter structure."""


@dataclass
class CoverLetterDraft:
    """
    A drafted cover letter.

    Attributes:
        content: Letter text
        source: "llm" or "template"
    """

    content: str
    source: str


def _signature(resume: ResumeDocument) -> str:
    info = resume.personal_info
    if info.first_name and info.last_name:
        return info.full_name
    return DEFAULT_SIGNATURE


def compose_cover_letter(job_title: str, company_name: str, resume: ResumeDocument) -> str:
    """
    Fill the offline cover letter template from a resume.

    Uses the top 3 skills in the opening, the summary (or a generic
    sentence), up to 2 experience highlights and the top 5 skills.

    Args:
        job_title: Position applied for
        company_name: Hiring company
        resume: Candidate's resume

    Returns:
        Plain-text letter signed with the candidate's full name or "Candidate"
    """
    highlights = []
    for entry in resume.experience[:2]:
        line = " at ".join(part for part in (entry.position, entry.company) if part)
        if entry.description:
            line = f"{line}: {entry.description}" if line else entry.description
        if line:
            highlights.append(line)
    if resume.skills:
        highlights.append(f"Technical expertise in {', '.join(resume.skills[:5])}")

    return _letter.render(
        job_title=job_title,
        company_name=company_name,
        top_skills=resume.skills[:3],
        background=resume.summary or DEFAULT_BACKGROUND,
        highlights=highlights,
        signature=_signature(resume),
    )


def generate_cover_letter_llm(
    job_title: str,
    company_name: str,
    job_description: str,
    resume: ResumeDocument,
    provider: LLMProvider,
) -> str:
    """
    Generate a tailored cover letter with an LLM.

    Raises:
        LLMError: Provider call failed
        ValueError: The model returned an empty letter
    """
    response = provider.generate(
        _SYSTEM_PROMPT,
        _USER_PROMPT_TEMPLATE.format(
            job_title=job_title,
            company_name=company_name,
            job_description=job_description,
            resume=resume.text,
        ),
    )
    content = response.content.strip()
    if not content:
        raise ValueError("LLM returned an empty cover letter")
    return content


def write_cover_letter(
    job_title: str,
    company_name: str,
    job_description: str,
    resume: ResumeDocument,
    provider: Optional[LLMProvider] = None,
    use_llm: bool = True,
) -> CoverLetterDraft:
    """
    Draft a cover letter, preferring the LLM and falling back to the template.

    Args:
        job_title: Position applied for
        company_name: Hiring company
        job_description: Job posting text
        resume: Candidate's resume
        provider: LLM provider (default: get_provider() from environment)
        use_llm: Skip the LLM entirely when False

    Returns:
        CoverLetterDraft with the letter and which path produced it
    """
    if use_llm:
        try:
            if provider is None:
                provider = get_provider()
            content = generate_cover_letter_llm(
                job_title, company_name, job_description, resume, provider
            )
        except (LLMError, ValueError, ImportError) as e:
            logger.warning(f"LLM cover letter failed ({e}); using template")
        else:
            return CoverLetterDraft(content=content, source="llm")

    return CoverLetterDraft(
        content=compose_cover_letter(job_title, company_name, resume), source="template"
    )
