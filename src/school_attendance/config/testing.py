import os

SECRET_KEY = "test-secret"

API_URL = os.getenv("API_URL", "")
API_TIMEOUT = 5.0

STORAGE_DIR = os.getenv("STORAGE_DIR", ".local_storage_test")

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

START_ONLINE = True
AUTO_LOAD = False
