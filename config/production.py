import os

from config.config import *  # noqa: F401,F403

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

# Production never silently degrades to the local store unless asked to.
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql").lower()

CHECKIN_WINDOW_OPEN = os.getenv("CHECKIN_WINDOW_OPEN", "08:00")
CHECKIN_WINDOW_CLOSE = os.getenv("CHECKIN_WINDOW_CLOSE", "18:00")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
