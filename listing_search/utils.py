# listing_search/utils.py
"""Shared utilities: logging setup and small parsing helpers.

Logging is configured once from ``LOG_LEVEL`` and every module logs through the
same named logger.
"""
import os
import logging
import re
import math
from dotenv import load_dotenv

load_dotenv()

def get_logger(name=__name__):
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        level=getattr(logging, level, logging.INFO)
    )
    return logging.getLogger(name)

logger = get_logger("listing-search")

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]+")
_TRUTHY = {"1", "true", "yes", "on"}
MAX_SAFE_INT = 2 ** 53


def clean_text(value):
    """Strip control characters and surrounding whitespace; blank becomes None."""
    if not isinstance(value, str):
        return None
    cleaned = _CONTROL_CHARS.sub("", value).strip()
    return cleaned or None


def parse_int(value):
    """Parse ``value`` to an int rounding half up.

    Returns None for anything that is not a finite number inside the range a
    double represents exactly (+-2**53).
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    rounded = math.floor(number + 0.5)
    if abs(rounded) > MAX_SAFE_INT:
        return None
    return int(rounded)


def parse_flag(value):
    if value is True:
        return True
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return False


def clamp(n, lo, hi):
    return max(lo, min(hi, n))
