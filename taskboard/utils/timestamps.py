from datetime import datetime, UTC


def utcnow() -> datetime:
    """Current UTC time truncated to milliseconds.

    Both backends persist the same precision, so a task reads back with
    identical timestamps whichever store holds it.
    """
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond - now.microsecond % 1000)


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything we write is UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def format_timestamp(value: datetime) -> str:
    return as_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    return as_utc(datetime.fromisoformat(value))
