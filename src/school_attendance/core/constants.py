"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DATA_CACHE_KEY = "frequencia_escolar_data_cache"
QUEUE_CACHE_KEY = "frequencia_escolar_offline_queue"
API_URL_KEY = "frequencia_escolar_api_url"

UNSPECIFIED_SUBJECT = "Não informada"
NO_CLASS_LABEL = "Sem Turma"

RISK_THRESHOLD = 75.0
EXCELLENT_THRESHOLD = 90.0

MAX_WIRE_LESSON_INDEX = 20
DEFAULT_ACTIVE_INDICES = (0,)
DEFAULT_TOP_STUDENTS = 10
DEFAULT_API_TIMEOUT = 30

ALL = "ALL"
ANNUAL = "ANNUAL"
