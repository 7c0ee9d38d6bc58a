"""
Resume improvement suggestions.

The LLM path asks a resume coach prompt for tips in three groups. The
offline path applies a handful of rules (missing numbers, weak verbs,
thin sections) so the caller always gets the same dict shape.
"""

import json
import re
from typing import Dict, List, Optional

from loguru import logger

from vitae.contexts.templating.resume_data_structure import ResumeDocument
from vitae.utils.llm import LLMError, LLMProvider, parse_dict_response

SUGGESTION_GROUPS = ("summaryTips", "experienceTips", "skillsTips")

MIN_SUMMARY_LENGTH = 150
MIN_SKILLS = 5
MAX_SKILLS = 15

_HAS_NUMBER = re.compile(r"\d")
_WEAK_OPENERS = ("responsible for", "worked on", "helped", "assisted", "involved in", "duties")

_SYSTEM_PROMPT = """\
You are a professional resume coach. Return ONLY a JSON object, with no markdown
formatting or commentary."""

_USER_PROMPT_TEMPLATE = """\
Analyze this resume and provide specific improvement suggestions.
{target_line}
Resume Data:
{resume_json}

Return suggestions as JSON:
{{
  "summaryTips": [<2-3 specific tips to improve the professional summary>],
  "experienceTips": [<3-5 tips to improve work experience descriptions>],
  "skillsTips": [<2-3 tips to improve the skills section>]
}}

Focus on:
1. Making achievements more quantifiable
2. Using stronger action verbs
3. Highlighting relevant keywords
4. Improving clarity and impact"""


def _summary_tips(resume: ResumeDocument, target_role: Optional[str]) -> List[str]:
    tips = []
    summary = resume.summary.strip()
    if not summary:
        tips.append("Add a 2-3 sentence professional summary that states your focus and experience level.")
    elif len(summary) < MIN_SUMMARY_LENGTH:
        tips.append("Expand your summary with your years of experience and one concrete achievement.")
    if target_role and target_role.lower() not in summary.lower():
        tips.append(f"Mention the {target_role} role explicitly in your summary.")
    if not tips:
        tips.append("Lead your summary with the outcome you are best known for.")
    return tips


def _experience_tips(resume: ResumeDocument) -> List[str]:
    if not resume.experience:
        return ["Add your work experience with company, position, dates and a short description."]

    tips = []
    for entry in resume.experience:
        label = entry.position or entry.company or "this role"
        description = entry.description.strip()
        if not description:
            tips.append(f"Describe what you accomplished as {label}.")
            continue
        if not _HAS_NUMBER.search(description):
            tips.append(f"Quantify your impact as {label} (percentages, revenue, users, time saved).")
        if description.lower().startswith(_WEAK_OPENERS):
            tips.append(f"Open the {label} description with a strong action verb such as 'Led' or 'Built'.")
        if not entry.start_date:
            tips.append(f"Add start and end dates for {label}.")

    if not tips:
        tips.append("Order each role's achievements by relevance to the job you want next.")
    return tips[:5]


def _skills_tips(resume: ResumeDocument, target_role: Optional[str]) -> List[str]:
    tips = []
    if len(resume.skills) < MIN_SKILLS:
        tips.append(f"List at least {MIN_SKILLS} skills, mixing tools, technologies and methods.")
    elif len(resume.skills) > MAX_SKILLS:
        tips.append(f"Trim your skills to the {MAX_SKILLS} most relevant to keep the section scannable.")
    if target_role:
        tips.append(f"Mirror the keywords from {target_role} postings in your skills section.")
    if not tips:
        tips.append("Group related skills (languages, frameworks, tools) so they scan quickly.")
    return tips


def offline_suggestions(
    resume: ResumeDocument, target_role: Optional[str] = None
) -> Dict[str, List[str]]:
    """Rule-based tips for each suggestion group, no network needed."""
    return {
        "summaryTips": _summary_tips(resume, target_role),
        "experienceTips": _experience_tips(resume),
        "skillsTips": _skills_tips(resume, target_role),
    }


def generate_resume_suggestions(
    resume: ResumeDocument,
    target_role: Optional[str] = None,
    provider: Optional[LLMProvider] = None,
) -> Dict[str, List[str]]:
    """
    Suggest resume improvements.

    Args:
        resume: Resume to review
        target_role: Optional role the candidate is aiming for
        provider: LLM provider; offline rules are used when None or on failure

    Returns:
        Dict with summaryTips, experienceTips and skillsTips lists
    """
    fallback = offline_suggestions(resume, target_role)
    if provider is None:
        return fallback

    user_prompt = _USER_PROMPT_TEMPLATE.format(
        target_line=f"\nTarget Role: {target_role}\n" if target_role else "",
        resume_json=json.dumps(resume.to_dict(), indent=2),
    )
    try:
        response = provider.generate(_SYSTEM_PROMPT, user_prompt)
    except LLMError as e:
        logger.warning(f"LLM suggestions failed ({e}); using offline rules")
        return fallback

    parsed = parse_dict_response(response.content)
    if not any(parsed.get(group) for group in SUGGESTION_GROUPS):
        logger.warning("LLM suggestions held no tips; using offline rules")
        return fallback
    return {group: parsed.get(group, []) for group in SUGGESTION_GROUPS}
