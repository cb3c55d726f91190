from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Department, Subject
from .repository import RegistryRepository


class MySQLRegistryRepository(RegistryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_subject(self, subject_id: str) -> Optional[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT subject_id, name FROM subjects WHERE subject_id=%s", (subject_id,))
            r = fetchone(cur)
            if not r:
                return None
            return Subject(subject_id=r["subject_id"], name=r["name"])

    def has_department(self, name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM departments WHERE name=%s", (name,))
            return fetchone(cur) is not None

    def list_subjects(self) -> Sequence[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT subject_id, name FROM subjects ORDER BY subject_id")
            return [Subject(subject_id=r["subject_id"], name=r["name"]) for r in fetchall(cur)]

    def list_departments(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT name FROM departments ORDER BY name")
            return [Department(name=r["name"]) for r in fetchall(cur)]
