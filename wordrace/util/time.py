from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def as_utc(moment: datetime) -> datetime:
    # SQLite hands back naive datetimes for timezone-aware columns.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


def seconds_since(start: datetime, now: datetime) -> int:
    return int((as_utc(now) - as_utc(start)).total_seconds())
