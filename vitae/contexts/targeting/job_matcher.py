"""
Offline job-match scorer.

Keyword-overlap heuristic comparing a job description against a resume.
Used directly when no LLM is available and as the fallback for the LLM
analysis in job_analysis.py; both return the same JobAnalysisResult shape.

Pure and deterministic: no I/O, safe to call concurrently.
"""

import re
from typing import List

from vitae.contexts.templating.resume_data_structure import (
    JobAnalysisResult,
    ResumeDocument,
    dedupe,
)

# =============================================================================
# SCORING CONSTANTS
# =============================================================================

_TOKEN_SPLIT = re.compile(r"\W+")

MIN_KEYWORD_LENGTH = 4

# Function words long enough to survive the length filter
STOP_WORDS = frozenset(
    {
        "about",
        "also",
        "been",
        "both",
        "could",
        "each",
        "from",
        "have",
        "into",
        "more",
        "most",
        "must",
        "other",
        "over",
        "should",
        "some",
        "such",
        "than",
        "that",
        "their",
        "them",
        "then",
        "there",
        "these",
        "they",
        "this",
        "those",
        "very",
        "were",
        "what",
        "when",
        "where",
        "which",
        "while",
        "will",
        "with",
        "within",
        "would",
        "your",
    }
)

# Display caps
KEY_SKILLS_LIMIT = 10
MISSING_SKILLS_LIMIT = 8
STRENGTHS_LIMIT = 6
IMPROVEMENTS_LIMIT = 3
KEYWORDS_LIMIT = 15
SUGGESTED_SKILLS_LIMIT = 3

EMPTY_DESCRIPTION_MESSAGE = "Please provide a job description to analyze"
NO_STRENGTHS_MESSAGE = "Complete your resume with relevant skills and experience"
GENERAL_IMPROVEMENTS = [
    "Include quantifiable achievements and metrics in your experience",
    "Expand on relevant projects that demonstrate your capabilities",
    "Tailor your summary to highlight skills mentioned in the job posting",
]


# =============================================================================
# SCORING
# =============================================================================


def extract_keywords(job_description: str) -> List[str]:
    """
    Candidate keywords from a job description.

    Lowercases, splits on non-word characters, keeps tokens longer than
    3 characters that are not stop words, and de-duplicates in order.
    """
    tokens = _TOKEN_SPLIT.split(job_description.lower())
    return dedupe(
        [token for token in tokens if len(token) >= MIN_KEYWORD_LENGTH and token not in STOP_WORDS]
    )


def resume_corpus(resume: ResumeDocument) -> str:
    """Lowercased summary, experience descriptions and skills as one string."""
    parts = [resume.summary]
    parts.extend(entry.description for entry in resume.experience)
    parts.extend(resume.skills)
    return " ".join(parts).lower()


def _strength(keyword: str) -> str:
    return f"Strong experience with {keyword[:1].upper()}{keyword[1:]}"


def score_job_match(job_description: str, resume: ResumeDocument) -> JobAnalysisResult:
    """
    Score how well a resume covers the keywords of a job description.

    A keyword matches when any resume skill contains it or the resume corpus
    contains it. The score is the rounded percentage of matching keywords.

    Args:
        job_description: Job posting text
        resume: Finished resume document

    Returns:
        JobAnalysisResult with match_score in [0, 100]

    Example:
        >>> result = score_job_match("Python developer", resume)
        >>> 0 <= result.match_score <= 100
        True
    """
    if not job_description or not job_description.strip():
        return JobAnalysisResult(match_score=0, improvements=[EMPTY_DESCRIPTION_MESSAGE])

    keywords = extract_keywords(job_description)
    skills = [skill.lower() for skill in resume.skills]
    corpus = resume_corpus(resume)

    matching = []
    missing = []
    for keyword in keywords:
        if keyword in corpus or any(keyword in skill for skill in skills):
            matching.append(keyword)
        else:
            missing.append(keyword)

    # JobAnalysisResult rounds half-up and clamps into [0, 100]
    score = 100 * len(matching) / max(len(keywords), 1)

    if missing:
        first_tip = f"Consider adding skills: {', '.join(missing[:SUGGESTED_SKILLS_LIMIT])}"
    else:
        first_tip = "Add more specific technical skills"

    return JobAnalysisResult(
        match_score=score,
        key_skills=matching[:KEY_SKILLS_LIMIT],
        missing_skills=missing[:MISSING_SKILLS_LIMIT],
        strengths=[_strength(keyword) for keyword in matching[:STRENGTHS_LIMIT]]
        or [NO_STRENGTHS_MESSAGE],
        improvements=([first_tip] + GENERAL_IMPROVEMENTS)[:IMPROVEMENTS_LIMIT],
        keywords=keywords[:KEYWORDS_LIMIT],
    )
