import os
import secrets

# Project root directory (stockview/)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

LOGS_DIR = os.path.join(BASE_DIR, "logs")


def _env_flag(name, default=False):
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name):
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return None
    try:
        return float(raw_value)
    except ValueError:
        return None


# Prediction endpoint; the only required deployment setting
PREDICTION_API_URL = os.getenv("PREDICTION_API_URL") or None

# Outbound timeout in seconds (None waits indefinitely)
PREDICTION_API_TIMEOUT = _env_float("PREDICTION_API_TIMEOUT")

# Apply only the newest submission's response instead of whichever resolves last
DISCARD_STALE_RESPONSES = _env_flag("DISCARD_STALE_RESPONSES")

# Show request failures in the page instead of only logging them
SURFACE_REQUEST_ERRORS = _env_flag("SURFACE_REQUEST_ERRORS")

# Upper bound on per-visitor view states kept in memory (least recently used go first)
MAX_VISITORS = int(os.getenv("STOCKVIEW_MAX_VISITORS", "1000"))

SECRET_KEY = os.getenv("STOCKVIEW_SECRET_KEY") or secrets.token_hex(32)

HOST = os.getenv("STOCKVIEW_HOST", "127.0.0.1")
PORT = int(os.getenv("STOCKVIEW_PORT", "5000"))

# Ensure required local directories exist
os.makedirs(LOGS_DIR, exist_ok=True)
