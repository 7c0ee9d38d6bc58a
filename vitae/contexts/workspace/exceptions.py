"""
Exceptions for the workspace context.
"""

from typing import Iterable


class MissingFieldsError(ValueError):
    """Raised when a workspace operation is called without its required fields."""

    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")


class RecordNotFoundError(LookupError):
    """Raised when an id or lookup key matches no stored record."""

    def __init__(self, kind: str, key):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} not found: {key}")


class DuplicateRecordError(ValueError):
    """Raised when creating a record would break a uniqueness constraint."""
