from datetime import datetime, timezone
import time


def utc_timestamp() -> str:
    """Current time as ISO-8601 UTC with milliseconds, e.g. ``2025-01-25T10:00:00.000Z``."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def epoch_millis() -> int:
    return int(time.time() * 1000)
