"""
Unlock condition validation.
Pure checks on a create request; no I/O, the caller supplies "now".
"""
from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import Optional

from app.core.exceptions import (
    InvalidRadius,
    InvalidUnlockCondition,
    UnlockDateTooFar,
    UnlockDateTooSoon,
)
from app.schema.postcard import PostcardCreateIn

MIN_UNLOCK_RADIUS_M = 10.0
MAX_UNLOCK_RADIUS_M = 1000.0


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def tomorrow_midnight(now: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Local midnight at the start of tomorrow (server timezone unless tz given)."""
    local_now = as_utc(now).astimezone(tz)
    tomorrow = (local_now + timedelta(days=1)).date()
    if tz is None:
        # Resolve the server offset at midnight itself, not at "now" (DST)
        return datetime.combine(tomorrow, time.min).astimezone()
    return datetime.combine(tomorrow, time.min, tzinfo=tz)


def one_year_later(now: datetime) -> datetime:
    try:
        return now.replace(year=now.year + 1)
    except ValueError:
        # Feb 29 rolls over to Mar 1
        return now.replace(year=now.year + 1, month=3, day=1)


def has_geo_lock(request: PostcardCreateIn) -> bool:
    return request.unlock_latitude is not None and request.unlock_longitude is not None


def validate_unlock_condition(request: PostcardCreateIn, now: datetime, tz: Optional[tzinfo] = None) -> None:
    """
    Enforce exactly one unlock condition and its bounds.

    Raises:
        InvalidUnlockCondition: neither or both conditions, or coordinates out of range
        UnlockDateTooSoon: unlock date before tomorrow's local midnight
        UnlockDateTooFar: unlock date more than one year after now
    """
    has_date = request.unlock_date is not None
    has_geo = has_geo_lock(request)

    if not has_date and not has_geo:
        raise InvalidUnlockCondition()
    if has_date and has_geo:
        raise InvalidUnlockCondition(
            "Cannot specify both unlock date AND unlock location. Choose one unlock condition."
        )

    if has_date:
        now = as_utc(now)
        unlock_date = as_utc(request.unlock_date)
        if unlock_date < tomorrow_midnight(now, tz):
            raise UnlockDateTooSoon()
        if unlock_date > one_year_later(now):
            raise UnlockDateTooFar()
        return

    if not -90 <= request.unlock_latitude <= 90:
        raise InvalidUnlockCondition("Unlock latitude must be between -90 and 90")
    if not -180 <= request.unlock_longitude <= 180:
        raise InvalidUnlockCondition("Unlock longitude must be between -180 and 180")


def validate_unlock_radius(radius: Optional[float], default: float) -> float:
    """Return the radius to store, falling back to default when omitted."""
    if radius is None:
        return default
    if not MIN_UNLOCK_RADIUS_M <= radius <= MAX_UNLOCK_RADIUS_M:
        raise InvalidRadius()
    return float(radius)
