"""
LLM-based resume parsing with heuristic fallback.

The LLM path is preferred when a provider is configured. Any provider,
JSON or schema failure falls back to the heuristic parser on the same input,
so an import always produces a document.
"""

from dataclasses import dataclass
from typing import Optional, Union

from vitae.contexts.intake.logger import _log_debug, log_fallback, log_parse_result
from vitae.contexts.intake.normalizer import to_line_stream
from vitae.contexts.intake.resume_parser import (
    FALLBACK_SUMMARY,
    parse_resume_text,
    title_from_filename,
)
from vitae.contexts.templating.resume_data_structure import ResumeDocument
from vitae.utils.llm import LLMError, LLMProvider, get_provider, parse_object_response

MIN_TEXT_LENGTH = 20

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

_SYSTEM_PROMPT = """\
You are an expert resume parser. Parse the provided resume text into structured JSON.
Return ONLY valid JSON: no markdown formatting, explanations, or code blocks.

Required JSON structure:
{
  "personalInfo": {
    "firstName": "string",
    "lastName": "string",
    "email": "string",
    "phone": "string",
    "location": "string",
    "website": "string (optional)",
    "linkedin": "string (optional)",
    "github": "string (optional)"
  },
  "summary": "string - professional summary/objective",
  "experience": [{
    "id": "string - unique identifier",
    "company": "string",
    "position": "string",
    "startDate": "string - MM/YYYY format",
    "endDate": "string - MM/YYYY format or empty if current",
    "current": boolean,
    "description": "string - brief role description",
    "achievements": ["key achievements/responsibilities"]
  }],
  "education": [{
    "id": "string - unique identifier",
    "institution": "string",
    "degree": "string",
    "field": "string (optional)",
    "startDate": "string - MM/YYYY format",
    "endDate": "string - MM/YYYY format",
    "gpa": "string (optional)",
    "honors": "string (optional)"
  }],
  "skills": ["individual skills"],
  "projects": [{
    "id": "string - unique identifier",
    "name": "string",
    "description": "string",
    "technologies": ["technologies used"],
    "url": "string (optional)"
  }]
}

Guidelines:
- Extract all available information accurately
- Use empty strings or empty arrays for missing information
- Generate unique IDs for experience, education, and projects
- Use MM/YYYY dates consistently
- List skills as individual items, not groups
- Remove formatting artifacts from the text"""

_USER_PROMPT_TEMPLATE = """\
Parse this resume text into structured JSON:

{content}"""


class InsufficientTextError(ValueError):
    """Raised when too little readable text remains to send to the LLM."""


def prepare_text(raw_text: Union[str, bytes, None]) -> str:
    """Normalized text for the prompt: printable, single-spaced, one line per line."""
    return "\n".join(to_line_stream(raw_text))


def parse_resume_with_llm(
    raw_text: Union[str, bytes, None],
    provider: LLMProvider,
    filename: Optional[str] = None,
) -> ResumeDocument:
    """
    Parse resume text with an LLM.

    Args:
        raw_text: Text extracted from the uploaded file
        provider: LLM provider to call
        filename: Original filename, used for the document title

    Returns:
        ResumeDocument built from the model's JSON payload

    Raises:
        InsufficientTextError: Fewer than 20 readable characters
        LLMError: Provider call failed
        ValueError: Response held no JSON object, or the payload has the wrong shape
    """
    text = prepare_text(raw_text)
    if len(text) < MIN_TEXT_LENGTH:
        raise InsufficientTextError("Insufficient readable text for AI parsing")

    _log_debug(f"Sending {len(text)} characters to {provider.name}")
    response = provider.generate(_SYSTEM_PROMPT, _USER_PROMPT_TEMPLATE.format(content=text))
    _log_debug(f"LLM usage: {response.input_tokens} in / {response.output_tokens} out")

    resume = ResumeDocument.from_dict(parse_object_response(response.content))
    resume.title = title_from_filename(filename)
    if not resume.summary:
        resume.summary = FALLBACK_SUMMARY
    return resume


@dataclass
class ImportResult:
    """
    Outcome of importing resume text.

    Attributes:
        resume: The parsed document
        source: "llm" or "heuristic"
    """

    resume: ResumeDocument
    source: str

    @property
    def needs_review(self) -> bool:
        """True when the document is sparse enough that the user should check it."""
        return self.resume.is_sparse


def import_resume(
    raw_text: Union[str, bytes, None],
    filename: Optional[str] = None,
    provider: Optional[LLMProvider] = None,
    use_llm: bool = True,
) -> ImportResult:
    """
    Import resume text, preferring the LLM parser.

    Args:
        raw_text: Text extracted from the uploaded file
        filename: Original filename, used for the document title
        provider: LLM provider (default: get_provider() from environment)
        use_llm: Skip the LLM entirely when False

    Returns:
        ImportResult with the document and which parser produced it
    """
    if use_llm:
        try:
            if provider is None:
                provider = get_provider()
            resume = parse_resume_with_llm(raw_text, provider, filename)
        except (LLMError, ValueError, ImportError) as e:
            log_fallback(e)
        else:
            log_parse_result(resume, source="llm")
            return ImportResult(resume=resume, source="llm")

    resume = parse_resume_text(raw_text, filename)
    log_parse_result(resume, source="heuristic")
    return ImportResult(resume=resume, source="heuristic")
