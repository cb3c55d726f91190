from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Subject:
    subject_id: str
    name: str


@dataclass(frozen=True)
class Department:
    name: str
