from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .model import Department, Subject
from .repository import RegistryRepository

DEFAULT_DEPARTMENTS = ("Computer Science", "Commerce", "Management", "Science", "Arts")
DEFAULT_SUBJECTS = (
    Subject(subject_id="CS801", name="Distributed Systems"),
    Subject(subject_id="CS802", name="Cloud Computing"),
    Subject(subject_id="CS803", name="Mobile Application Development"),
    Subject(subject_id="MGMT101", name="Principles of Management"),
)


class LocalRegistryRepository(RegistryRepository):
    """Static registry used when the remote database is unavailable."""

    def __init__(
        self,
        subjects: Iterable[Subject] = DEFAULT_SUBJECTS,
        departments: Iterable[str] = DEFAULT_DEPARTMENTS,
    ):
        self._subjects = {s.subject_id: s for s in subjects}
        self._departments = list(dict.fromkeys(departments))

    def get_subject(self, subject_id: str) -> Optional[Subject]:
        return self._subjects.get(subject_id)

    def has_department(self, name: str) -> bool:
        return name in self._departments

    def list_subjects(self) -> Sequence[Subject]:
        return list(self._subjects.values())

    def list_departments(self) -> Sequence[Department]:
        return [Department(name=n) for n in self._departments]
