"""
Stored record types.

Records wrap the domain objects (ResumeDocument, JobAnalysisResult) with
ownership and timestamps. Repositories assign id and created_at on create.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from vitae.contexts.templating.resume_data_structure import JobAnalysisResult, ResumeDocument


@dataclass
class User:
    email: str
    firebase_uid: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    id: int = 0
    created_at: str = ""


@dataclass
class ResumeRecord:
    """A resume owned by a user. updated_at changes on every update."""

    user_id: int
    document: ResumeDocument = field(default_factory=ResumeDocument)
    id: int = 0
    created_at: str = ""
    updated_at: str = ""

    @property
    def title(self) -> str:
        return self.document.title

    def to_dict(self) -> Dict[str, Any]:
        data = {"id": self.id, "userId": self.user_id}
        data.update(self.document.to_dict())
        data["createdAt"] = self.created_at
        data["updatedAt"] = self.updated_at
        return data


@dataclass
class CoverLetterRecord:
    user_id: int
    job_title: str
    company_name: str
    content: str
    resume_id: Optional[int] = None
    job_description: Optional[str] = None
    source: str = "template"
    id: int = 0
    created_at: str = ""


@dataclass
class JobAnalysisRecord:
    user_id: int
    job_description: str
    result: JobAnalysisResult = field(default_factory=JobAnalysisResult)
    resume_id: Optional[int] = None
    id: int = 0
    created_at: str = ""

    @property
    def match_score(self) -> int:
        return self.result.match_score
