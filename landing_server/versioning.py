"""Small helpers for session identifiers and timestamps."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4


def now_utc_iso() -> str:
    """UTC timestamp with millisecond precision and a ``Z`` suffix."""

    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def new_id(prefix: str) -> str:
    # Each call draws a fresh uuid4; callers needing two ids call twice.
    return f"{prefix}_{uuid4()}"
