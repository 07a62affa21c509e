"""UTC-focused helpers for failure timestamps."""

from __future__ import annotations

import time
from datetime import datetime, timezone


def current_time_millis() -> int:
    return time.time_ns() // 1_000_000


def utc_timestamp_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat(timespec="milliseconds")
