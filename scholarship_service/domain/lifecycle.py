"""Application lifecycle rules.

Everything that decides whether an application may move between statuses,
and how instants are normalized for storage and day-range queries, lives
here so the use cases never compare statuses or timezones themselves.
"""
import uuid
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from .entities import ApplicationStatus
from .errors import InvalidObjectId, InvalidTransition


def new_object_id() -> str:
    return uuid.uuid4().hex


def parse_object_id(raw: str) -> str:
    """Canonical form of a store id, or InvalidObjectId if it is not one."""
    try:
        return uuid.UUID(raw).hex
    except (ValueError, AttributeError, TypeError):
        raise InvalidObjectId(raw)


def utcnow() -> datetime:
    # stored instants are naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc(value: datetime, tz: ZoneInfo) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=tz)
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def normalize_deadline(value: datetime | date | str | None, tz: ZoneInfo) -> datetime | None:
    """Turn a submitted deadline into an absolute UTC instant.

    Date-only values mean local midnight; naive datetimes are local time.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    return to_utc(value, tz)


def day_range(day: date, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Half-open [local midnight, next local midnight) of a day, in UTC.

    Covers 00:00:00.000 through 23:59:59.999 and any sub-millisecond
    instant after it.
    """
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return to_utc(start, tz), to_utc(end, tz)


def check_transition(current: ApplicationStatus, target: ApplicationStatus) -> None:
    """Raise InvalidTransition when `current -> target` is not allowed.

    Any status may follow any other, except that an application never
    goes back to Pending once it has left it.
    """
    if target is ApplicationStatus.PENDING and current.rank > target.rank:
        raise InvalidTransition(current.value, target.value)
