"""Shared fixtures: sample resume text, documents and a scripted LLM provider."""

from typing import List, Optional, Union

import pytest

from vitae.contexts.templating.resume_data_structure import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ProjectEntry,
    ResumeDocument,
)
from vitae.utils.llm import LLMProvider, LLMResponse

SAMPLE_RESUME_TEXT = """\
Jane A. Doe
Baltimore, MD
jane.doe@example.com | (415) 555-2671
https://linkedin.com/in/janedoe https://github.com/janedoe https://janedoe.dev

SUMMARY
Backend engineer with eight years building data platforms and APIs.
Focused on reliable distributed systems and developer tooling at scale.

EXPERIENCE
2019 - Present
Senior Engineer - Acme Corp
Led the migration of batch pipelines to streaming, cutting latency by 60%.
2015 - 2019
Software Engineer @ Initech
Built internal APIs in Python and PostgreSQL for the billing team.

EDUCATION
Bachelor of Science in Computer Science - University of Maryland

SKILLS
Python, SQL, Kubernetes, Python
Docker | Terraform

PROJECTS
- Pipeline Kit - open source ETL toolkit https://github.com/janedoe/pipeline-kit
- Resume Builder - LaTeX resume generator
"""


class ScriptedProvider(LLMProvider):
    """
    LLM provider that replays canned responses instead of calling an API.

    Each generate() call pops the next response. An exception instance in
    the script is raised instead of returned.
    """

    _provider_prefix = "scripted"
    _retry_message = "scripted retry"

    class TransientError(Exception):
        pass

    class APIError(Exception):
        pass

    def __init__(self, responses: List[Union[str, Exception]], model: str = "test-model"):
        self._retryable_exception = self.TransientError
        self._api_error = self.APIError
        self.responses = list(responses)
        self.calls: List[tuple] = []
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        self.calls.append((system_prompt, user_prompt))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return LLMResponse(content=response, model=self.model, input_tokens=10, output_tokens=20)


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_RESUME_TEXT


@pytest.fixture
def scripted_provider():
    """Factory: scripted_provider("...", "...") -> ScriptedProvider."""

    def factory(*responses: Union[str, Exception], model: Optional[str] = None):
        return ScriptedProvider(list(responses), model=model or "test-model")

    return factory


@pytest.fixture
def sample_resume() -> ResumeDocument:
    return ResumeDocument(
        title="Jane Doe Resume",
        personal_info=PersonalInfo(
            first_name="Jane",
            last_name="Doe",
            email="jane.doe@example.com",
            phone="(415) 555-2671",
            location="Baltimore, MD",
            linkedin="linkedin.com/in/janedoe",
        ),
        summary="Backend engineer building data platforms with Python and Kubernetes.",
        experience=[
            ExperienceEntry(
                company="Acme Corp",
                position="Senior Engineer",
                start_date="2019",
                current=True,
                description="Led migration of batch pipelines to streaming with Kafka.",
                achievements=["Cut latency by 60%"],
            ),
            ExperienceEntry(
                company="Initech",
                position="Software Engineer",
                start_date="2015",
                end_date="2019",
                description="Built internal APIs with PostgreSQL.",
            ),
        ],
        education=[
            EducationEntry(
                institution="University of Maryland",
                degree="Bachelor of Science",
                field="Computer Science",
                end_date="2015",
            )
        ],
        skills=["Python", "SQL", "Kubernetes", "Docker", "Terraform"],
        projects=[
            ProjectEntry(
                name="Pipeline Kit",
                description="Open source ETL toolkit",
                technologies=["Python"],
                url="https://github.com/janedoe/pipeline-kit",
            )
        ],
    )
