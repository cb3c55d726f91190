from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import PersistenceFailure, RemoteUnavailable, UniqueViolation
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

_UNREACHABLE_ERRNOS = {
    errorcode.CR_CONN_HOST_ERROR,
    errorcode.CR_CONNECTION_ERROR,
    errorcode.CR_SERVER_GONE_ERROR,
    errorcode.CR_SERVER_LOST,
    errorcode.CR_UNKNOWN_HOST,
}


def translate_mysql_error(exc: mysql.connector.Error) -> PersistenceFailure:
    """Map connector errors onto the persistence taxonomy."""

    if isinstance(exc, mysql.connector.errors.IntegrityError) and exc.errno == errorcode.ER_DUP_ENTRY:
        return UniqueViolation(str(exc))
    if isinstance(exc, (mysql.connector.errors.InterfaceError, mysql.connector.errors.OperationalError)):
        return RemoteUnavailable(str(exc))
    if exc.errno in _UNREACHABLE_ERRNOS:
        return RemoteUnavailable(str(exc))
    return PersistenceFailure(str(exc))


def _rollback_quietly(conn) -> None:
    # The original error is what the caller needs to see.
    try:
        conn.rollback()
    except mysql.connector.Error as e:
        logger.warning("Rollback failed: %s", e)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise translate_mysql_error(e) from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        _rollback_quietly(conn)
        raise translate_mysql_error(e) from e
    except Exception:
        _rollback_quietly(conn)
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
