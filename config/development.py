from config.config import *  # noqa: F401,F403
from config.config import Config

DEBUG = True
LOG_LEVEL = "DEBUG" if Config.LOG_LEVEL == "INFO" else Config.LOG_LEVEL
