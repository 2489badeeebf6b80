from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as naive UTC, the form every stored timestamp uses"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
