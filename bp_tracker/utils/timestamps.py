import re
from datetime import datetime, timezone
from typing import Any

FRACTIONAL_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"
WHOLE_SECONDS_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

# strptime only takes up to six fractional digits; the server may send nanoseconds.
_LONG_FRACTION = re.compile(r"(\.\d{6})\d+")


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO 8601 wire timestamp into an aware datetime.

    Fractional seconds are tried first, then the whole-seconds form.
    Raises ValueError naming the offending string when neither matches.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            raise ValueError(f"Invalid date format: {value.isoformat()}")
        return value
    if not isinstance(value, str):
        raise ValueError(f"Invalid date format: {value!r}")
    text = _LONG_FRACTION.sub(r"\1", value.strip())
    for fmt in (FRACTIONAL_FORMAT, WHOLE_SECONDS_FORMAT):
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ValueError(f"Invalid date format: {value}")


def format_timestamp(value: datetime) -> str:
    """Format an aware datetime the way the API sends it (UTC, milliseconds, Z)."""
    dt = value.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"
