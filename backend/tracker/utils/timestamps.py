from datetime import datetime, timezone

# Fixed-width microseconds keep stored values sortable as text
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
_WHOLE_SECONDS_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    # Naive datetimes are taken as UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime:
    fmt = TIMESTAMP_FORMAT if "." in value else _WHOLE_SECONDS_FORMAT
    return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
