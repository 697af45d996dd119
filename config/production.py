import os

from config.config import *  # noqa: F401,F403

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

DEBUG = False
