"""Settings, overridable from the environment or a .env file."""

import os

from dotenv import load_dotenv

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


REPORTS_ROOT = os.getenv("REPORT_CHECKER_ROOT", ".")
LOG_LEVEL = os.getenv("REPORT_CHECKER_LOG_LEVEL", "INFO").upper()
STRICT_INSURER = env_flag("REPORT_CHECKER_STRICT_INSURER")
