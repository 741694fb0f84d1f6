from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from app.core.exceptions import (
    InvalidRadius,
    InvalidUnlockCondition,
    UnlockDateTooFar,
    UnlockDateTooSoon,
)
from app.schema.postcard import PostcardCreateIn
from app.service.unlock_validator import (
    one_year_later,
    tomorrow_midnight,
    validate_unlock_condition,
    validate_unlock_radius,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
TOMORROW_MIDNIGHT = datetime(2026, 10, 20, 0, 0, tzinfo=timezone.utc)


def _validate(**fields) -> None:
    validate_unlock_condition(PostcardCreateIn(**fields), NOW, timezone.utc)


def test_requires_an_unlock_condition() -> None:
    with pytest.raises(InvalidUnlockCondition):
        _validate(message="hello")


def test_rejects_both_conditions() -> None:
    with pytest.raises(InvalidUnlockCondition) as exc:
        _validate(unlock_date=NOW + timedelta(days=30), unlock_latitude=10.5, unlock_longitude=106.5)
    assert exc.value.detail["code"] == "INVALID_UNLOCK_CONDITION"
    assert "both" in exc.value.detail["message"]


def test_single_coordinate_is_not_a_geo_lock() -> None:
    with pytest.raises(InvalidUnlockCondition):
        _validate(unlock_latitude=10.5)
    with pytest.raises(InvalidUnlockCondition):
        _validate(unlock_longitude=106.5)


def test_date_lock_alone_is_valid() -> None:
    _validate(unlock_date=NOW + timedelta(days=30))


def test_geo_lock_alone_is_valid() -> None:
    _validate(unlock_latitude=10.762622, unlock_longitude=106.660172)


def test_date_with_single_coordinate_is_a_date_lock() -> None:
    _validate(unlock_date=NOW + timedelta(days=30), unlock_latitude=10.5)


def test_just_before_tomorrow_midnight_is_too_soon() -> None:
    with pytest.raises(UnlockDateTooSoon):
        _validate(unlock_date=TOMORROW_MIDNIGHT - timedelta(seconds=1))


def test_tomorrow_midnight_is_accepted() -> None:
    _validate(unlock_date=TOMORROW_MIDNIGHT)


def test_past_date_is_too_soon() -> None:
    with pytest.raises(UnlockDateTooSoon):
        _validate(unlock_date=datetime(2020, 1, 1, tzinfo=timezone.utc))


def test_366_days_ahead_is_too_far() -> None:
    with pytest.raises(UnlockDateTooFar):
        _validate(unlock_date=NOW + timedelta(days=366))


def test_exactly_one_year_ahead_is_accepted() -> None:
    _validate(unlock_date=one_year_later(NOW))


def test_naive_dates_are_treated_as_utc() -> None:
    _validate(unlock_date=datetime(2026, 11, 18, 9, 0))
    with pytest.raises(UnlockDateTooSoon):
        _validate(unlock_date=datetime(2026, 10, 19, 23, 59))


def test_tomorrow_midnight_uses_the_given_timezone() -> None:
    plus_ten = timezone(timedelta(hours=10))
    # 12:00 UTC is 22:00 at +10, so tomorrow there starts at 2026-10-20 00:00+10:00
    assert tomorrow_midnight(NOW, plus_ten) == datetime(2026, 10, 20, 0, 0, tzinfo=plus_ten)
    assert tomorrow_midnight(NOW, timezone.utc) == TOMORROW_MIDNIGHT


def test_one_year_later_handles_leap_day() -> None:
    leap = datetime(2028, 2, 29, 8, 0, tzinfo=timezone.utc)
    assert one_year_later(leap) == datetime(2029, 3, 1, 8, 0, tzinfo=timezone.utc)


def test_leap_day_bound_accepts_the_first_of_march() -> None:
    leap = datetime(2028, 2, 29, 8, 0, tzinfo=timezone.utc)
    request = PostcardCreateIn(unlock_date=datetime(2029, 3, 1, 8, 0, tzinfo=timezone.utc))
    validate_unlock_condition(request, leap, timezone.utc)


# 2026-11-01 01:00 EDT, an hour before New York falls back to EST
BEFORE_FALL_BACK = datetime(2026, 11, 1, 5, 0, tzinfo=timezone.utc)
NEXT_MIDNIGHT_EST = datetime(2026, 11, 2, 5, 0, tzinfo=timezone.utc)


@pytest.fixture()
def new_york_server(monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is unavailable on this platform")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    if time.tzname[0] != "EST":
        monkeypatch.undo()
        time.tzset()
        pytest.skip("system timezone database has no America/New_York")
    yield
    monkeypatch.undo()
    time.tzset()


def test_tomorrow_midnight_across_dst_with_a_zone() -> None:
    new_york = ZoneInfo("America/New_York")
    midnight = tomorrow_midnight(BEFORE_FALL_BACK, new_york)
    assert midnight == NEXT_MIDNIGHT_EST
    assert midnight.utcoffset() == timedelta(hours=-5)


def test_tomorrow_midnight_across_dst_in_server_time(new_york_server) -> None:
    midnight = tomorrow_midnight(BEFORE_FALL_BACK)
    assert midnight == NEXT_MIDNIGHT_EST
    assert midnight.utcoffset() == timedelta(hours=-5)


@pytest.mark.parametrize("lat,lon", [(90.5, 0.0), (-91.0, 0.0), (0.0, 180.5), (0.0, -181.0)])
def test_coordinates_out_of_range(lat: float, lon: float) -> None:
    with pytest.raises(InvalidUnlockCondition):
        _validate(unlock_latitude=lat, unlock_longitude=lon)


def test_radius_defaults_when_omitted() -> None:
    assert validate_unlock_radius(None, 50.0) == 50.0


@pytest.mark.parametrize("radius", [10, 10.0, 500, 1000])
def test_radius_bounds_are_inclusive(radius: float) -> None:
    assert validate_unlock_radius(radius, 50.0) == float(radius)


@pytest.mark.parametrize("radius", [9.99, 0, -5, 1000.01, float("nan")])
def test_radius_out_of_range(radius: float) -> None:
    with pytest.raises(InvalidRadius):
        validate_unlock_radius(radius, 50.0)
