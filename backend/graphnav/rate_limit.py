"""Shared slowapi limiter for the notes API.

Kept out of ``main`` so routers can import it without a cycle.
"""

import os

from slowapi import Limiter
from slowapi.util import get_remote_address

# Saves are whole-record writes to one file; reads are not limited
NOTES_WRITE_LIMIT = "60/minute"


def rate_limit_enabled() -> bool:
    """False when GRAPHNAV_NO_RATE_LIMIT=true (the test suite sets it)."""
    return os.environ.get("GRAPHNAV_NO_RATE_LIMIT", "").strip().lower() != "true"


limiter = Limiter(key_func=get_remote_address, enabled=rate_limit_enabled())
