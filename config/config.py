"""Shared settings; environment modules import from here and override."""

import os


def _flag(name: str, default: str) -> bool:
    return bool(int(os.environ.get(name, default)))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "hr-console-dev-key"

    # Document store: "memory" (process-local) or "mysql" (JSON documents table)
    STORE_BACKEND = os.environ.get("STORE_BACKEND", "memory")
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "hr_console")

    AUTO_INIT_DB = _flag("AUTO_INIT_DB", "0")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Attendance rules
    PRESENT_HOURS = float(os.environ.get("PRESENT_HOURS", "9"))
    HALF_DAY_HOURS = float(os.environ.get("HALF_DAY_HOURS", "4.5"))

    # Payroll defaults (tax and penalty can be overridden per payslip)
    STANDARD_MONTHLY_HOURS = float(os.environ.get("STANDARD_MONTHLY_HOURS", "198"))
    DEFAULT_TAX_PERCENT = float(os.environ.get("DEFAULT_TAX_PERCENT", "5"))
    DEFAULT_PENALTY_PER_ABSENCE = float(os.environ.get("DEFAULT_PENALTY_PER_ABSENCE", "200"))

    # Compare-and-swap attempts when a leave approval patches a monthly summary
    SUMMARY_WRITE_RETRIES = int(os.environ.get("SUMMARY_WRITE_RETRIES", "5"))


DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}

SECRET_KEY = Config.SECRET_KEY
STORE_BACKEND = Config.STORE_BACKEND
AUTO_INIT_DB = Config.AUTO_INIT_DB
LOG_LEVEL = Config.LOG_LEVEL
PRESENT_HOURS = Config.PRESENT_HOURS
HALF_DAY_HOURS = Config.HALF_DAY_HOURS
STANDARD_MONTHLY_HOURS = Config.STANDARD_MONTHLY_HOURS
DEFAULT_TAX_PERCENT = Config.DEFAULT_TAX_PERCENT
DEFAULT_PENALTY_PER_ABSENCE = Config.DEFAULT_PENALTY_PER_ABSENCE
SUMMARY_WRITE_RETRIES = Config.SUMMARY_WRITE_RETRIES
