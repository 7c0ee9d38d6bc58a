"""
Resume Document Structure

Defines the structured representation of resume content for VITAE.
This structure is the interface between every context:

- Intake produces ResumeDocument instances from raw text (heuristic or LLM)
- Templating renders them to LaTeX and markdown
- Targeting and Drafting read them for job matching and cover letters
- Workspace stores them

Attribute names are snake_case. The dict form (to_dict/from_dict) uses the
camelCase schema shared with the LLM parser, so both parsing paths produce
interchangeable payloads.
"""

import copy
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from omegaconf import OmegaConf

from vitae.contexts.templating.exceptions import InvalidResumeStructureError

DEFAULT_TEMPLATE_ID = "professional"
DEFAULT_TITLE = "Untitled Resume"


# =============================================================================
# COERCION HELPERS
# =============================================================================


def _as_str(value: Any) -> str:
    """Coerce a scalar payload value to a trimmed string (None -> "")."""
    if value is None:
        return ""
    return str(value).strip()


def _as_optional_str(value: Any) -> Optional[str]:
    """Coerce to a trimmed string, keeping absence (None or blank) as None."""
    text = _as_str(value)
    return text or None


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return bool(value)


def _as_str_list(value: Any, key: str = "") -> List[str]:
    """Coerce a list payload to a list of non-empty strings."""
    if value is None:
        return []
    if isinstance(value, str):
        # LLMs occasionally return comma-joined strings instead of arrays
        return [part.strip() for part in value.split(",") if part.strip()]
    if not isinstance(value, (list, tuple)):
        raise InvalidResumeStructureError(f"Expected a list for '{key}', got {type(value).__name__}")
    return [_as_str(item) for item in value if _as_str(item)]


def _as_mapping_list(value: Any, key: str) -> List[Dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise InvalidResumeStructureError(f"Expected a list for '{key}', got {type(value).__name__}")
    return [item for item in value if isinstance(item, dict)]


def dedupe(items: List[str]) -> List[str]:
    """Ordered, case-sensitive de-duplication."""
    return list(dict.fromkeys(items))


def _repair_ids(entries: list, prefix: str) -> None:
    """Give every entry a non-empty id unique within the list (positional fallback)."""
    seen = set()
    counter = 0
    for entry in entries:
        if entry.id and entry.id not in seen:
            seen.add(entry.id)
            continue
        counter += 1
        while f"{prefix}-{counter}" in seen:
            counter += 1
        entry.id = f"{prefix}-{counter}"
        seen.add(entry.id)


# =============================================================================
# RECORDS
# =============================================================================


@dataclass
class PersonalInfo:
    """Contact block. Link fields stay None when unset."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    website: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "location": self.location,
        }
        for key in ("website", "linkedin", "github"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersonalInfo":
        return cls(
            first_name=_as_str(data.get("firstName")),
            last_name=_as_str(data.get("lastName")),
            email=_as_str(data.get("email")),
            phone=_as_str(data.get("phone")),
            location=_as_str(data.get("location")),
            website=_as_optional_str(data.get("website")),
            linkedin=_as_optional_str(data.get("linkedin")),
            github=_as_optional_str(data.get("github")),
        )


@dataclass
class ExperienceEntry:
    """
    One position held.

    When current is True, end_date is ignored by consumers; the heuristic
    parser leaves it empty in that case.
    """

    id: str = ""
    company: str = ""
    position: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""
    achievements: List[str] = field(default_factory=list)

    @property
    def display_end_date(self) -> str:
        return "Present" if self.current else self.end_date

    @property
    def date_range(self) -> str:
        """'start - end' for display, omitting missing sides."""
        parts = [part for part in (self.start_date, self.display_end_date) if part]
        return " - ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "company": self.company,
            "position": self.position,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "current": self.current,
            "description": self.description,
            "achievements": list(self.achievements),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExperienceEntry":
        return cls(
            id=_as_str(data.get("id")),
            company=_as_str(data.get("company")),
            position=_as_str(data.get("position")),
            start_date=_as_str(data.get("startDate")),
            end_date=_as_str(data.get("endDate")),
            current=_as_bool(data.get("current", False)),
            description=_as_str(data.get("description")),
            achievements=_as_str_list(data.get("achievements"), "achievements"),
        )


@dataclass
class EducationEntry:
    """One degree or credential."""

    id: str = ""
    institution: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: str = ""
    gpa: str = ""
    honors: str = ""

    @property
    def title(self) -> str:
        """'degree in field', or just the degree."""
        if self.degree and self.field:
            return f"{self.degree} in {self.field}"
        return self.degree or self.field

    @property
    def date_range(self) -> str:
        return " - ".join(part for part in (self.start_date, self.end_date) if part)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "institution": self.institution,
            "degree": self.degree,
            "field": self.field,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "gpa": self.gpa,
            "honors": self.honors,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EducationEntry":
        return cls(
            id=_as_str(data.get("id")),
            institution=_as_str(data.get("institution")),
            degree=_as_str(data.get("degree")),
            field=_as_str(data.get("field")),
            start_date=_as_str(data.get("startDate")),
            end_date=_as_str(data.get("endDate")),
            gpa=_as_str(data.get("gpa")),
            honors=_as_str(data.get("honors")),
        )


@dataclass
class ProjectEntry:
    """A portfolio item."""

    id: str = ""
    name: str = ""
    description: str = ""
    technologies: List[str] = field(default_factory=list)
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "technologies": list(self.technologies),
        }
        if self.url is not None:
            data["url"] = self.url
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectEntry":
        return cls(
            id=_as_str(data.get("id")),
            name=_as_str(data.get("name")),
            description=_as_str(data.get("description")),
            technologies=_as_str_list(data.get("technologies"), "technologies"),
            url=_as_optional_str(data.get("url")),
        )


@dataclass
class ResumeDocument:
    """
    A complete resume.

    Invariants maintained on construction:
    - list fields are never None
    - skills contain no exact (case-sensitive) duplicates
    - entry ids are non-empty and unique within each list

    Attributes:
        title: Display title (usually derived from the uploaded filename)
        personal_info: Contact block
        summary: Professional summary paragraph
        experience: Positions, most recent first as found in the source
        education: Degrees and credentials
        skills: Flat skill list
        projects: Portfolio items
        template_id: Catalog id of the visual template
    """

    title: str = DEFAULT_TITLE
    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    summary: str = ""
    experience: List[ExperienceEntry] = field(default_factory=list)
    education: List[EducationEntry] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    projects: List[ProjectEntry] = field(default_factory=list)
    template_id: str = DEFAULT_TEMPLATE_ID

    def __post_init__(self):
        self.experience = list(self.experience or [])
        self.education = list(self.education or [])
        self.projects = list(self.projects or [])
        self.skills = dedupe(list(self.skills or []))
        _repair_ids(self.experience, "exp")
        _repair_ids(self.education, "edu")
        _repair_ids(self.projects, "proj")

    def add_skill(self, skill: str) -> bool:
        """Append a skill unless already present. Returns True if added."""
        skill = skill.strip()
        if not skill or skill in self.skills:
            return False
        self.skills.append(skill)
        return True

    def copy(self) -> "ResumeDocument":
        """Deep copy; the result shares no mutable state with self."""
        return copy.deepcopy(self)

    @property
    def is_sparse(self) -> bool:
        """True when key fields are missing and the user should review the import."""
        info = self.personal_info
        has_identity = bool(info.first_name or info.last_name)
        has_history = bool(self.experience or self.education)
        return not (has_identity and info.email and has_history)

    @property
    def text(self) -> str:
        """Markdown representation for previews and LLM prompts."""
        # Imported here: the formatter only needs the duck-typed document
        from vitae.contexts.templating.markdown_formatter import format_resume_markdown

        return format_resume_markdown(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "personalInfo": self.personal_info.to_dict(),
            "summary": self.summary,
            "experience": [entry.to_dict() for entry in self.experience],
            "education": [entry.to_dict() for entry in self.education],
            "skills": list(self.skills),
            "projects": [entry.to_dict() for entry in self.projects],
            "templateId": self.template_id,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Any) -> "ResumeDocument":
        """
        Build a document from the camelCase payload, coercing loose types.

        Missing keys take their defaults; unknown keys are ignored.

        Raises:
            InvalidResumeStructureError: If data is not a mapping or a section
                has the wrong container type
        """
        if not isinstance(data, dict):
            raise InvalidResumeStructureError(
                f"Resume payload must be an object, got {type(data).__name__}"
            )

        personal = data.get("personalInfo") or {}
        if not isinstance(personal, dict):
            raise InvalidResumeStructureError("'personalInfo' must be an object")

        return cls(
            title=_as_str(data.get("title")) or DEFAULT_TITLE,
            personal_info=PersonalInfo.from_dict(personal),
            summary=_as_str(data.get("summary")),
            experience=[
                ExperienceEntry.from_dict(item)
                for item in _as_mapping_list(data.get("experience"), "experience")
            ],
            education=[
                EducationEntry.from_dict(item)
                for item in _as_mapping_list(data.get("education"), "education")
            ],
            skills=_as_str_list(data.get("skills"), "skills"),
            projects=[
                ProjectEntry.from_dict(item)
                for item in _as_mapping_list(data.get("projects"), "projects")
            ],
            template_id=_as_str(data.get("templateId")) or DEFAULT_TEMPLATE_ID,
        )

    @classmethod
    def from_file(cls, path: Path) -> "ResumeDocument":
        """
        Load a resume from a YAML or JSON file.

        Args:
            path: Path to .yaml/.yml/.json file using the camelCase schema

        Returns:
            ResumeDocument instance
        """
        path = Path(path)
        if path.suffix.lower() == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        else:
            data = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
        return cls.from_dict(data)

    def save(self, path: Path) -> Path:
        """Write the document as YAML (or JSON when the suffix is .json)."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix.lower() == ".json":
            path.write_text(self.to_json() + "\n", encoding="utf-8")
        else:
            OmegaConf.save(OmegaConf.create(self.to_dict()), path)
        return path


def clamp_score(value: Any) -> int:
    """Round half-up to an integer and clamp into [0, 100]. Non-numeric -> 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if number != number:  # NaN
        return 0
    number = max(0.0, min(100.0, number))
    return int(number + 0.5)


@dataclass
class JobAnalysisResult:
    """
    Outcome of matching a resume against a job description.

    match_score is clamped into [0, 100] on construction regardless of source
    (offline scorer or LLM).
    """

    match_score: int = 0
    key_skills: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    improvements: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    optimized_summary: Optional[str] = None

    def __post_init__(self):
        self.match_score = clamp_score(self.match_score)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "matchScore": self.match_score,
            "keySkills": list(self.key_skills),
            "missingSkills": list(self.missing_skills),
            "strengths": list(self.strengths),
            "improvements": list(self.improvements),
            "keywords": list(self.keywords),
        }
        if self.optimized_summary is not None:
            data["optimizedSummary"] = self.optimized_summary
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "JobAnalysisResult":
        if not isinstance(data, dict):
            raise InvalidResumeStructureError(
                f"Job analysis payload must be an object, got {type(data).__name__}"
            )
        return cls(
            match_score=data.get("matchScore", 0),
            key_skills=_as_str_list(data.get("keySkills"), "keySkills"),
            missing_skills=_as_str_list(data.get("missingSkills"), "missingSkills"),
            strengths=_as_str_list(data.get("strengths"), "strengths"),
            improvements=_as_str_list(data.get("improvements"), "improvements"),
            keywords=_as_str_list(data.get("keywords"), "keywords"),
            optimized_summary=_as_optional_str(data.get("optimizedSummary")),
        )
