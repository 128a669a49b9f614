"""Time Payload: one clock reading -> {datetime, timestamp} at millisecond precision.

Invariants:
    - Both fields derive from ONE sampled instant, truncated to milliseconds
    - datetime is ISO-8601 UTC with exactly 3 fractional digits and a 'Z' suffix
    - parse(datetime) in epoch milliseconds == timestamp
"""

from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_time_payload(now: datetime) -> dict:
    """Format an aware clock reading as the /api/time JSON body."""
    if now.tzinfo is None:
        raise ValueError("clock reading must be timezone-aware")
    instant = now.astimezone(timezone.utc)
    instant = instant.replace(microsecond=instant.microsecond // 1000 * 1000)
    return {
        "datetime": instant.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        "timestamp": (instant - EPOCH) // _ONE_MS,
    }
