from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.service import AttendanceRecorder
from .attendance.window import OperatingWindow
from .core.constants import DEFAULT_QR_PREFIX, DEFAULT_SESSION_MINUTES
from .core.enums import StorageBackend
from .database.connection import DBConfig, DatabaseConnection
from .geo.model import CampusLocation
from .geo.verifier import LocationVerifier
from .insights.generator import GeminiInsightGenerator
from .insights.service import InsightService
from .registry.repository import RegistryRepository
from .sessions.issuer import SessionIssuer
from .storage.gateway import AttendanceGateway
from .storage.probe import select_gateway


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    gateway: AttendanceGateway
    registry: RegistryRepository
    location_verifier: LocationVerifier

    session_issuer: SessionIssuer
    attendance_recorder: AttendanceRecorder
    insight_service: InsightService

    default_session_minutes: int = DEFAULT_SESSION_MINUTES


def build_container(
    *,
    db_config: Optional[dict],
    campus_location: dict,
    storage_backend: str = StorageBackend.AUTO.value,
    local_store_path: Optional[str] = None,
    qr_prefix: str = DEFAULT_QR_PREFIX,
    window_open: Optional[str] = None,
    window_close: Optional[str] = None,
    default_session_minutes: int = DEFAULT_SESSION_MINUTES,
    gemini_api_key: Optional[str] = None,
    gemini_model: str = "gemini-2.0-flash",
    insight_timeout: float = 15,
) -> Container:
    backend = StorageBackend(storage_backend)
    conn = None
    if db_config and backend != StorageBackend.LOCAL:
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    gateway, registry = select_gateway(conn, backend=backend, local_path=local_store_path or None)

    location_verifier = LocationVerifier(CampusLocation.from_config(campus_location))
    session_issuer = SessionIssuer(gateway, registry, qr_prefix=qr_prefix)
    attendance_recorder = AttendanceRecorder(
        gateway,
        location_verifier,
        window=OperatingWindow.from_strings(window_open, window_close),
    )

    generator = None
    if gemini_api_key:
        generator = GeminiInsightGenerator(gemini_api_key, model=gemini_model, timeout=insight_timeout)
    insight_service = InsightService(gateway, generator)

    return Container(
        conn=conn,
        gateway=gateway,
        registry=registry,
        location_verifier=location_verifier,
        session_issuer=session_issuer,
        attendance_recorder=attendance_recorder,
        insight_service=insight_service,
        default_session_minutes=int(default_session_minutes),
    )


def build_container_from_settings(settings) -> Container:
    return build_container(
        db_config=getattr(settings, "DB_CONFIG", None),
        campus_location=getattr(settings, "CAMPUS_LOCATION"),
        storage_backend=getattr(settings, "STORAGE_BACKEND", StorageBackend.AUTO.value),
        local_store_path=getattr(settings, "LOCAL_STORE_PATH", None),
        qr_prefix=getattr(settings, "QR_PREFIX", DEFAULT_QR_PREFIX),
        window_open=getattr(settings, "CHECKIN_WINDOW_OPEN", None),
        window_close=getattr(settings, "CHECKIN_WINDOW_CLOSE", None),
        default_session_minutes=getattr(settings, "DEFAULT_SESSION_MINUTES", DEFAULT_SESSION_MINUTES),
        gemini_api_key=getattr(settings, "GEMINI_API_KEY", None),
        gemini_model=getattr(settings, "GEMINI_MODEL", "gemini-2.0-flash"),
        insight_timeout=getattr(settings, "INSIGHT_TIMEOUT", 15),
    )
