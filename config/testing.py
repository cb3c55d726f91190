from config.config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

STORAGE_BACKEND = "local"
LOCAL_STORE_PATH = ""

CHECKIN_WINDOW_OPEN = ""
CHECKIN_WINDOW_CLOSE = ""

GEMINI_API_KEY = ""

AUTO_INIT_DB = False
AUTO_SEED_DB = False
