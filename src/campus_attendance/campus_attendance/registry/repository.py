from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Department, Subject


class RegistryRepository(Protocol):
    """Read-only lookup of known subjects and departments.

    Session issuing only needs to resolve ids; CRUD lives elsewhere.
    """

    def get_subject(self, subject_id: str) -> Optional[Subject]:
        raise NotImplementedError

    def has_department(self, name: str) -> bool:
        raise NotImplementedError

    def list_subjects(self) -> Sequence[Subject]:
        raise NotImplementedError

    def list_departments(self) -> Sequence[Department]:
        raise NotImplementedError
