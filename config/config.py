"""Settings shared by every environment; environment modules override them."""

import os


def _flag(name: str, default: str) -> bool:
    return bool(int(os.getenv(name, default)))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "change-me"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "campus_attendance")
    DB_CONNECT_TIMEOUT = int(os.environ.get("DB_CONNECT_TIMEOUT", "5"))

    # auto | mysql | local
    STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "auto").lower()
    LOCAL_STORE_PATH = os.environ.get("LOCAL_STORE_PATH", "instance/attendance_store.json")

    CAMPUS_LATITUDE = float(os.environ.get("CAMPUS_LATITUDE", "11.0827"))
    CAMPUS_LONGITUDE = float(os.environ.get("CAMPUS_LONGITUDE", "77.0003"))
    CAMPUS_RADIUS_M = float(os.environ.get("CAMPUS_RADIUS_M", "800"))

    QR_PREFIX = os.environ.get("QR_PREFIX", "CAMPUS_SESS")
    DEFAULT_SESSION_MINUTES = int(os.environ.get("DEFAULT_SESSION_MINUTES", "15"))

    # Empty disables the daily check-in window.
    CHECKIN_WINDOW_OPEN = os.environ.get("CHECKIN_WINDOW_OPEN", "")
    CHECKIN_WINDOW_CLOSE = os.environ.get("CHECKIN_WINDOW_CLOSE", "")

    GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
    GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.0-flash")
    INSIGHT_TIMEOUT = float(os.environ.get("INSIGHT_TIMEOUT", "15"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    AUTO_INIT_DB = _flag("AUTO_INIT_DB", "0")
    AUTO_SEED_DB = _flag("AUTO_SEED_DB", "0")


SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
    "connect_timeout": Config.DB_CONNECT_TIMEOUT,
}

STORAGE_BACKEND = Config.STORAGE_BACKEND
LOCAL_STORE_PATH = Config.LOCAL_STORE_PATH

CAMPUS_LOCATION = {
    "latitude": Config.CAMPUS_LATITUDE,
    "longitude": Config.CAMPUS_LONGITUDE,
    "radius_m": Config.CAMPUS_RADIUS_M,
}

QR_PREFIX = Config.QR_PREFIX
DEFAULT_SESSION_MINUTES = Config.DEFAULT_SESSION_MINUTES
CHECKIN_WINDOW_OPEN = Config.CHECKIN_WINDOW_OPEN
CHECKIN_WINDOW_CLOSE = Config.CHECKIN_WINDOW_CLOSE

GEMINI_API_KEY = Config.GEMINI_API_KEY
GEMINI_MODEL = Config.GEMINI_MODEL
INSIGHT_TIMEOUT = Config.INSIGHT_TIMEOUT

LOG_LEVEL = Config.LOG_LEVEL

DEBUG = _flag("DEBUG", "1")

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB
