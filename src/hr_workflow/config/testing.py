SECRET_KEY = "test-secret"

STORAGE_BACKEND = "memory"

DB_CONFIG = {}

LATE_GRACE_MINUTES = 5
EFFICIENCY_CEILING = 150

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = False
