from __future__ import annotations

import logging
from pathlib import Path

from ..core.enums import StorageBackend
from ..database.connection import DatabaseConnection
from ..registry.local_registry_repository import LocalRegistryRepository
from ..registry.mysql_registry_repository import MySQLRegistryRepository
from ..registry.repository import RegistryRepository
from .gateway import AttendanceGateway
from .local_gateway import LocalAttendanceGateway
from .mysql_gateway import MySQLAttendanceGateway

logger = logging.getLogger(__name__)


def select_gateway(
    conn: DatabaseConnection | None,
    *,
    backend: StorageBackend = StorageBackend.AUTO,
    local_path: str | Path | None = None,
) -> tuple[AttendanceGateway, RegistryRepository]:
    """Pick the store once, at startup.

    AUTO probes MySQL and falls back to the local store when it cannot be
    reached. MYSQL never falls back; LOCAL never touches the network.
    """

    if backend == StorageBackend.LOCAL or conn is None:
        logger.info("Using local attendance store (path=%s)", local_path)
        return LocalAttendanceGateway(local_path), LocalRegistryRepository()

    if backend == StorageBackend.MYSQL or conn.ping():
        logger.info("Using MySQL attendance store")
        return MySQLAttendanceGateway(conn), MySQLRegistryRepository(conn)

    logger.warning("MySQL unreachable, falling back to local attendance store (path=%s)", local_path)
    return LocalAttendanceGateway(local_path), LocalRegistryRepository()
