"""
Record repositories.

Repository is the storage seam: the workspace service only talks to this
interface, so a database-backed implementation can replace the in-memory
one without touching callers.
"""

import copy
import dataclasses
import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

from vitae.contexts.workspace.records import (
    CoverLetterRecord,
    JobAnalysisRecord,
    ResumeRecord,
    User,
)
from vitae.utils.timestamp import now_exact

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """CRUD interface over one record type keyed by integer id."""

    @abstractmethod
    def get(self, record_id: int) -> Optional[T]:
        """Return the record, or None if the id is unknown."""

    @abstractmethod
    def list(self, **filters: Any) -> List[T]:
        """Return records whose attributes equal every filter value, in id order."""

    @abstractmethod
    def create(self, record: T) -> T:
        """Store a new record, assigning id and timestamps."""

    @abstractmethod
    def update(self, record_id: int, **changes: Any) -> Optional[T]:
        """Apply attribute changes. Returns None if the id is unknown."""

    @abstractmethod
    def delete(self, record_id: int) -> bool:
        """Remove a record. Returns False if the id is unknown."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every record."""


class InMemoryRepository(Repository[T]):
    """
    Dict-backed repository.

    Ids start at 1 and are never reused, even after delete or clear.
    Records go in and come out as deep copies, so callers mutating a
    returned record never change what is stored.
    """

    def __init__(self):
        self._records: Dict[int, T] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._records)

    def get(self, record_id: int) -> Optional[T]:
        record = self._records.get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def list(self, **filters: Any) -> List[T]:
        return [
            copy.deepcopy(record)
            for _, record in sorted(self._records.items())
            if all(getattr(record, key) == value for key, value in filters.items())
        ]

    def create(self, record: T) -> T:
        stamp = now_exact()
        changes = {"id": next(self._ids), "created_at": stamp}
        if hasattr(record, "updated_at"):
            changes["updated_at"] = stamp
        stored = dataclasses.replace(copy.deepcopy(record), **changes)
        self._records[stored.id] = stored
        return copy.deepcopy(stored)

    def update(self, record_id: int, **changes: Any) -> Optional[T]:
        record = self._records.get(record_id)
        if record is None:
            return None
        for protected in ("id", "created_at"):
            changes.pop(protected, None)
        if hasattr(record, "updated_at"):
            changes["updated_at"] = now_exact()
        stored = dataclasses.replace(record, **copy.deepcopy(changes))
        self._records[record_id] = stored
        return copy.deepcopy(stored)

    def delete(self, record_id: int) -> bool:
        return self._records.pop(record_id, None) is not None

    def clear(self) -> None:
        self._records.clear()


@dataclass
class Storage:
    """One repository per record type. In-memory unless others are injected."""

    users: Repository[User] = field(default_factory=InMemoryRepository)
    resumes: Repository[ResumeRecord] = field(default_factory=InMemoryRepository)
    cover_letters: Repository[CoverLetterRecord] = field(default_factory=InMemoryRepository)
    job_analyses: Repository[JobAnalysisRecord] = field(default_factory=InMemoryRepository)

    def clear(self) -> None:
        for repository in (self.users, self.resumes, self.cover_letters, self.job_analyses):
            repository.clear()
