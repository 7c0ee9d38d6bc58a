"""Custom exceptions for the templating context."""

from pathlib import Path
from typing import Optional


class UnknownTemplateError(KeyError):
    """
    Exception raised when a template id is not in the template catalog.

    Attributes:
        template_id: The requested template id
        available: Template ids present in the catalog
    """

    def __init__(self, template_id: str, available: Optional[list] = None):
        self.template_id = template_id
        self.available = list(available or [])
        message = f"Unknown template '{template_id}'"
        if self.available:
            message += f". Available templates: {', '.join(self.available)}"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return self.args[0]


class TemplateRenderError(Exception):
    """
    Exception raised when template rendering fails.

    Attributes:
        message: Error description
        template_id: Id of the template being rendered
        template_path: Path to the template file
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        template_id: Optional[str] = None,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_id = template_id
        self.template_path = template_path
        self.original_error = original_error

        parts = [message]

        if template_id and template_path:
            parts.append(f"\nTemplate: {template_path}")
            parts.append(f"Template id: {template_id}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))


class InvalidResumeStructureError(ValueError):
    """
    Exception raised when a resume payload cannot be coerced into a ResumeDocument.

    Raised for non-mapping payloads (e.g., an LLM returning a JSON list) or for
    sections with the wrong container type (e.g., 'experience' given as a string).
    """

    pass
