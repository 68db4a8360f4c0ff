import time
from datetime import datetime, timezone


def utc_timestamp() -> str:
    """
    Current UTC instant in ISO 8601 with millisecond precision,
    e.g. `2025-01-31T09:15:02.123Z`.
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def elapsed_ms(started_at: float) -> int:
    """Whole milliseconds elapsed since a `time.perf_counter()` reading."""
    return int((time.perf_counter() - started_at) * 1000)
