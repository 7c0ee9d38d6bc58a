"""
Resume workspace service.

ResumeWorkspace ties the contexts together for one storage backend:
users own resumes, and cover letters and job analyses are generated from
a stored resume and stored alongside it.

LLM features are used only when the workspace is given a provider. Without
one every operation runs offline and deterministically.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from vitae.contexts.drafting.cover_letter import write_cover_letter
from vitae.contexts.drafting.suggestions import generate_resume_suggestions
from vitae.contexts.intake.llm_parser import ImportResult, import_resume
from vitae.contexts.intake.normalizer import is_blank
from vitae.contexts.rendering.compiler import CompilationResult, render_resume_pdf
from vitae.contexts.targeting.job_analysis import analyze_job_match
from vitae.contexts.templating.resume_data_structure import ResumeDocument
from vitae.contexts.workspace.exceptions import (
    DuplicateRecordError,
    MissingFieldsError,
    RecordNotFoundError,
)
from vitae.contexts.workspace.records import (
    CoverLetterRecord,
    JobAnalysisRecord,
    ResumeRecord,
    User,
)
from vitae.contexts.workspace.repository import Storage
from vitae.utils.llm import LLMProvider


def _require(**values: Any) -> None:
    """Raise MissingFieldsError naming every empty value."""
    missing = [
        name
        for name, value in values.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise MissingFieldsError(missing)


class ResumeWorkspace:
    """
    Application service over a Storage.

    Args:
        storage: Repositories to use (default: fresh in-memory storage)
        provider: LLM provider for parsing, letters, analysis and suggestions
    """

    def __init__(self, storage: Optional[Storage] = None, provider: Optional[LLMProvider] = None):
        self.storage = storage or Storage()
        self.provider = provider

    @property
    def use_llm(self) -> bool:
        return self.provider is not None

    # =========================================================================
    # USERS
    # =========================================================================

    def _check_unique(self, exclude_id: Optional[int] = None, **keys: Any) -> None:
        """Raise DuplicateRecordError if another user already has any of the given keys."""
        for key, value in keys.items():
            if not value:
                continue
            if any(user.id != exclude_id for user in self.storage.users.list(**{key: value})):
                raise DuplicateRecordError(f"User already exists with {key}: {value}")

    def create_user(
        self,
        email: str,
        firebase_uid: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> User:
        _require(email=email)
        self._check_unique(email=email, firebase_uid=firebase_uid)
        return self.storage.users.create(
            User(email=email, firebase_uid=firebase_uid, first_name=first_name, last_name=last_name)
        )

    def get_user(self, user_id: int) -> User:
        user = self.storage.users.get(user_id)
        if user is None:
            raise RecordNotFoundError("User", user_id)
        return user

    def get_user_by_email(self, email: str) -> User:
        matches = self.storage.users.list(email=email)
        if not matches:
            raise RecordNotFoundError("User", email)
        return matches[0]

    def get_user_by_firebase_uid(self, firebase_uid: str) -> User:
        _require(firebase_uid=firebase_uid)
        matches = self.storage.users.list(firebase_uid=firebase_uid)
        if not matches:
            raise RecordNotFoundError("User", firebase_uid)
        return matches[0]

    def update_user(self, user_id: int, **changes: Any) -> User:
        if "email" in changes:
            _require(email=changes["email"])
        self._check_unique(
            exclude_id=user_id,
            **{key: changes[key] for key in ("email", "firebase_uid") if key in changes},
        )
        user = self.storage.users.update(user_id, **changes)
        if user is None:
            raise RecordNotFoundError("User", user_id)
        return user

    # =========================================================================
    # RESUMES
    # =========================================================================

    def create_resume(self, user_id: int, document: ResumeDocument) -> ResumeRecord:
        """Store a resume for an existing user. The document needs a title."""
        self.get_user(user_id)
        _require(title=document.title if document is not None else None)
        return self.storage.resumes.create(ResumeRecord(user_id=user_id, document=document))

    def get_resume(self, resume_id: int) -> ResumeRecord:
        record = self.storage.resumes.get(resume_id)
        if record is None:
            raise RecordNotFoundError("Resume", resume_id)
        return record

    def list_resumes(self, user_id: int) -> List[ResumeRecord]:
        return self.storage.resumes.list(user_id=user_id)

    def update_resume(self, resume_id: int, document: ResumeDocument) -> ResumeRecord:
        _require(title=document.title if document is not None else None)
        record = self.storage.resumes.update(resume_id, document=document)
        if record is None:
            raise RecordNotFoundError("Resume", resume_id)
        return record

    def delete_resume(self, resume_id: int) -> None:
        if not self.storage.resumes.delete(resume_id):
            raise RecordNotFoundError("Resume", resume_id)

    def import_resume(
        self, user_id: int, raw_text: str, filename: Optional[str] = None
    ) -> tuple[ResumeRecord, ImportResult]:
        """
        Parse resume text and store the result for a user.

        Returns:
            (stored record, ImportResult) so callers can check needs_review

        Raises:
            MissingFieldsError: raw_text is empty
            RecordNotFoundError: Unknown user
        """
        self.get_user(user_id)
        if is_blank(raw_text):
            raise MissingFieldsError(["resume text"])
        result = import_resume(
            raw_text, filename=filename, provider=self.provider, use_llm=self.use_llm
        )
        record = self.storage.resumes.create(ResumeRecord(user_id=user_id, document=result.resume))
        return record, result

    # =========================================================================
    # COVER LETTERS
    # =========================================================================

    def generate_cover_letter(
        self,
        resume_id: int,
        job_title: str,
        company_name: str,
        job_description: Optional[str] = None,
    ) -> CoverLetterRecord:
        """Draft a cover letter from a stored resume and file it under the resume's owner."""
        _require(resume_id=resume_id, job_title=job_title, company_name=company_name)
        record = self.get_resume(resume_id)
        draft = write_cover_letter(
            job_title,
            company_name,
            job_description or "",
            record.document,
            provider=self.provider,
            use_llm=self.use_llm,
        )
        logger.info(f"Generated cover letter for {job_title} at {company_name} ({draft.source})")
        return self.storage.cover_letters.create(
            CoverLetterRecord(
                user_id=record.user_id,
                resume_id=resume_id,
                job_title=job_title,
                company_name=company_name,
                job_description=job_description,
                content=draft.content,
                source=draft.source,
            )
        )

    def list_cover_letters(self, user_id: int) -> List[CoverLetterRecord]:
        return self.storage.cover_letters.list(user_id=user_id)

    def delete_cover_letter(self, cover_letter_id: int) -> None:
        if not self.storage.cover_letters.delete(cover_letter_id):
            raise RecordNotFoundError("Cover letter", cover_letter_id)

    # =========================================================================
    # JOB ANALYSES
    # =========================================================================

    def analyze_job(self, resume_id: int, job_description: str) -> JobAnalysisRecord:
        """Score a stored resume against a job and file the result under the resume's owner."""
        _require(resume_id=resume_id, job_description=job_description)
        record = self.get_resume(resume_id)
        result = analyze_job_match(
            job_description, record.document, provider=self.provider, use_llm=self.use_llm
        )
        return self.storage.job_analyses.create(
            JobAnalysisRecord(
                user_id=record.user_id,
                resume_id=resume_id,
                job_description=job_description,
                result=result,
            )
        )

    def list_job_analyses(self, user_id: int) -> List[JobAnalysisRecord]:
        return self.storage.job_analyses.list(user_id=user_id)

    def delete_job_analysis(self, analysis_id: int) -> None:
        if not self.storage.job_analyses.delete(analysis_id):
            raise RecordNotFoundError("Job analysis", analysis_id)

    # =========================================================================
    # SUGGESTIONS AND EXPORT
    # =========================================================================

    def suggest_improvements(
        self, resume_id: int, target_role: Optional[str] = None
    ) -> Dict[str, List[str]]:
        resume = self.get_resume(resume_id).document
        return generate_resume_suggestions(resume, target_role=target_role, provider=self.provider)

    def export_pdf(
        self,
        resume_id: int,
        output_dir: Optional[Path] = None,
        template_id: Optional[str] = None,
    ) -> CompilationResult:
        """Render a stored resume to PDF. Check .success on the result."""
        resume = self.get_resume(resume_id).document
        return render_resume_pdf(resume, output_dir=output_dir, template_id=template_id)
