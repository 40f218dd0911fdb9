"""Timezone-aware clock utilities.

The assessment engine never reads the clock; observation timestamps are
explicit inputs.  Only the HTTP edge and overdue checks need "now", and
they take it from here so tests can monkey-patch it trivially.
"""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)
