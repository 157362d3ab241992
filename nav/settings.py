# nav/settings.py
import os

LOG_LEVEL = os.environ.get("HEXROUTE_LOG_LEVEL", "INFO").upper()

# "auto" picks per topology (see nav.router.select_strategy); "scan" or "bucket" forces one.
DEFAULT_STRATEGY = os.environ.get("HEXROUTE_DEFAULT_STRATEGY", "auto").strip().lower()

# Upper bound on boards accepted over HTTP. The search itself has no limit.
MAX_MAP_SIZE = int(os.environ.get("HEXROUTE_MAX_MAP_SIZE", "256"))

DEFAULT_MAP_SIZE = 8


def default_strategy():
    """None means 'choose by topology'."""
    if DEFAULT_STRATEGY in ("", "auto"):
        return None
    return DEFAULT_STRATEGY
