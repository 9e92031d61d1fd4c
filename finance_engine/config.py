"""Engine defaults.

Every value can be overridden through the environment so a host app can
tune reports without touching code. Bad values fall back to the default.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

_PROJECT_ROOT = Path(__file__).parent.parent.resolve()


def _env_int(name: str, default: int, low: int | None = None, high: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default
    if (low is not None and value < low) or (high is not None and value > high):
        logger.warning("Ignoring %s=%r: out of range", name, raw)
        return default
    return value


# 0 = Monday ... 6 = Sunday
WEEK_START = _env_int("FINANCE_WEEK_START", 0, 0, 6)

DEFAULT_PERIOD_COUNT = _env_int("FINANCE_PERIOD_COUNT", 12, 1)
DEFAULT_TOP_N = _env_int("FINANCE_TOP_N", 6, 0)
TRAILING_WINDOW = _env_int("FINANCE_TRAILING_WINDOW", 3, 1)

BASE_CURRENCY = os.getenv("FINANCE_BASE_CURRENCY", "USD") or "USD"

SEED_PATH = Path(os.getenv("FINANCE_SEED_PATH", _PROJECT_ROOT / "data" / "seed.json"))

OTHER_LABEL = "Other"
TRANSFER_LABEL = "Transfer"
