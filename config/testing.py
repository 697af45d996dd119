from config.config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"
STORE_BACKEND = "memory"
AUTO_INIT_DB = False
LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True
