"""
Date helpers shared by the task classifier and the API.

Naive datetimes are read as UTC. Calendar-day comparisons are made in the
timezone of the reference "now", so a deadline's day is the day the viewer
sees on the wall clock.
"""

from datetime import datetime, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from taskboard.config.settings import settings
from taskboard.exceptions import InvalidTimestamp

Timestamp = Union[datetime, str]


def app_timezone():
    try:
        return ZoneInfo(settings.APP_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


def now(tz=None) -> datetime:
    """Current time, timezone-aware, in `tz` or the configured application zone"""
    return datetime.now(tz or app_timezone())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_aware(value: datetime) -> datetime:
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: Optional[Timestamp], field: str = "timestamp") -> datetime:
    """Read a datetime or ISO-8601 string into an aware datetime.

    Raises InvalidTimestamp for missing values, unsupported types and
    strings that are not valid ISO-8601 (a trailing ``Z`` is accepted).
    """
    if value is None:
        raise InvalidTimestamp(field, value, "is missing")
    if isinstance(value, datetime):
        return as_aware(value)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return as_aware(datetime.fromisoformat(text))
        except ValueError as e:
            raise InvalidTimestamp(field, value) from e
    raise InvalidTimestamp(field, value, f"unsupported type {type(value).__name__}")


def is_past(value: datetime, reference: datetime) -> bool:
    """Strictly before the reference instant"""
    return as_aware(value) < as_aware(reference)


def is_same_day(value: datetime, reference: datetime) -> bool:
    """Same calendar day as `reference`, in the reference's timezone"""
    reference = as_aware(reference)
    return as_aware(value).astimezone(reference.tzinfo).date() == reference.date()


def to_utc(value: datetime) -> datetime:
    """Stored timestamps are kept in UTC"""
    return as_aware(value).astimezone(timezone.utc)


def request_time() -> datetime:
    """FastAPI dependency: the instant a request is evaluated at"""
    return now()
