"""
Runtime settings for the FitPlan API, read from the environment (.env is
loaded if present).
"""

import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Internal error messages are echoed to clients only outside production.
EXPOSE_ERROR_DETAILS = APP_ENV != "production"


def _parse_seed(raw: Optional[str]) -> Optional[int]:
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"PLAN_RANDOM_SEED must be an integer, got {raw!r}")


PLAN_RANDOM_SEED: Optional[int] = _parse_seed(os.getenv("PLAN_RANDOM_SEED"))

CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]
