import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

API_URL = os.getenv("API_URL", "")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "30"))

STORAGE_DIR = os.getenv("STORAGE_DIR", "/var/lib/school_attendance")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

START_ONLINE = bool(int(os.getenv("START_ONLINE", "1")))
AUTO_LOAD = bool(int(os.getenv("AUTO_LOAD", "1")))
