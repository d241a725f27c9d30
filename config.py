"""Configuration from environment."""

import os

from dotenv import load_dotenv

# Load .env from project root (same dir as this file) before any setting is read
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), ".env"))

API_TITLE = "Ranked Work Queue"
API_VERSION = "1.0.0"

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = os.environ.get("LOG_FORMAT", "%(asctime)s %(levelname)s %(name)s %(message)s")

# RANK_TRACE=1 logs every rank computation at DEBUG level
RANK_TRACE = (os.environ.get("RANK_TRACE") or "").strip().lower() in ("1", "true", "yes", "on")

# Rank floors for the time-decayed classes
PRIORITY_RANK_FLOOR = 3.0
VIP_RANK_FLOOR = 4.0
VIP_RANK_FACTOR = 2.0


def get_log_level() -> str:
    return (os.environ.get("LOG_LEVEL") or LOG_LEVEL).strip().upper()

# Item ids are 64-bit signed integers
ITEM_ID_MIN = -(2**63)
ITEM_ID_MAX = 2**63 - 1
