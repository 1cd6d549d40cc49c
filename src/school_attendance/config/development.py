import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Spreadsheet web-app endpoint; empty means it is set at runtime through the API
API_URL = os.getenv("API_URL", "")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "30"))

STORAGE_DIR = os.getenv("STORAGE_DIR", ".local_storage")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

START_ONLINE = bool(int(os.getenv("START_ONLINE", "1")))
# Fetch getData when the app is created
AUTO_LOAD = bool(int(os.getenv("AUTO_LOAD", "1")))
