"""
Job-match analysis with an LLM, falling back to the offline scorer.

Both paths return a JobAnalysisResult so callers never need to know which
one produced it.
"""

from typing import Optional

from loguru import logger

from vitae.contexts.targeting.job_matcher import (
    KEYWORDS_LIMIT,
    extract_keywords,
    score_job_match,
)
from vitae.contexts.templating.resume_data_structure import JobAnalysisResult, ResumeDocument
from vitae.utils.llm import LLMError, LLMProvider, get_provider, parse_object_response

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

_SYSTEM_PROMPT = """\
You are an expert resume analyzer and career coach. Analyze how well a resume matches
a job description. Return ONLY a JSON object, with no markdown formatting or commentary."""

_USER_PROMPT_TEMPLATE = """\
Job Description:
{job_description}

Resume:
{resume}

Return your analysis as JSON:
{{
  "matchScore": <number between 0-100>,
  "keySkills": [<skills from the resume that the job asks for>],
  "strengths": [<3-5 key strengths that align with the job>],
  "improvements": [<3-5 specific areas for improvement>],
  "missingSkills": [<3-5 skills in the job description but missing from the resume>],
  "keywords": [<important keywords from the job description>],
  "optimizedSummary": "<professional summary rewritten for this job>"
}}

Focus on technical skills alignment, experience relevance, education requirements,
soft skills mentioned, and industry-specific requirements."""


def analyze_job_match_llm(
    job_description: str, resume: ResumeDocument, provider: LLMProvider
) -> JobAnalysisResult:
    """
    Analyze a job match with an LLM.

    Fields the model leaves empty (key skills, keywords) are filled from the
    offline keyword extraction so the result shape matches the offline scorer.

    Raises:
        LLMError: Provider call failed
        ValueError: Response held no usable JSON object
    """
    response = provider.generate(
        _SYSTEM_PROMPT,
        _USER_PROMPT_TEMPLATE.format(job_description=job_description, resume=resume.text),
    )
    result = JobAnalysisResult.from_dict(parse_object_response(response.content))

    if not result.keywords:
        result.keywords = extract_keywords(job_description)[:KEYWORDS_LIMIT]
    if not result.key_skills:
        result.key_skills = score_job_match(job_description, resume).key_skills
    return result


def analyze_job_match(
    job_description: str,
    resume: ResumeDocument,
    provider: Optional[LLMProvider] = None,
    use_llm: bool = True,
) -> JobAnalysisResult:
    """
    Analyze a job match, preferring the LLM and falling back to the offline scorer.

    Args:
        job_description: Job posting text
        resume: Resume to compare
        provider: LLM provider (default: get_provider() from environment)
        use_llm: Skip the LLM entirely when False

    Returns:
        JobAnalysisResult with match_score in [0, 100]
    """
    if use_llm and job_description and job_description.strip():
        try:
            if provider is None:
                provider = get_provider()
            return analyze_job_match_llm(job_description, resume, provider)
        except (LLMError, ValueError, ImportError) as e:
            logger.warning(f"LLM job analysis failed ({e}); using offline scorer")

    return score_job_match(job_description, resume)
