from __future__ import annotations

import math
from datetime import timedelta, timezone

import pytest

from app.model import Postcard, PostcardStatus
from app.notification import EVENT_POSTCARD_UNLOCKED
from app.schema.postcard import PostcardCreateIn
from app.service.geo_lock_checker import GeoLockChecker
from app.service.postcard_service import PostcardService
from app.utils.geo import EARTH_RADIUS_M, distance_meters

SPOT = (10.762622, 106.660172)


def _north_of(lat: float, lon: float, meters: float) -> tuple[float, float]:
    return lat + math.degrees(meters / EARTH_RADIUS_M), lon


@pytest.fixture()
def service(db, notifier, clock) -> PostcardService:
    return PostcardService(db, notifier=notifier, clock=clock, tz=timezone.utc)


@pytest.fixture()
def checker(db, notifier) -> GeoLockChecker:
    return GeoLockChecker(db, notifier=notifier)


def _geo_postcard(service, sender, recipient, radius: float = 100, at=SPOT, message: str = "found it"):
    return service.create(
        sender.id,
        PostcardCreateIn(
            recipient_id=recipient.id,
            message=message,
            unlock_latitude=at[0],
            unlock_longitude=at[1],
            unlock_radius=radius,
        ),
    )


def test_unlocks_at_the_spot_then_returns_nothing(service, checker, db, users, notifier) -> None:
    alice, bob = users["alice"], users["bob"]
    created = _geo_postcard(service, alice, bob)

    [item] = checker.check_and_unlock(bob.id, *SPOT)
    assert item.id == created.id
    assert item.sender_name == "Alice"
    assert item.distance_meters == 0

    assert db.get(Postcard, created.id).status == PostcardStatus.UNLOCKED
    assert checker.check_and_unlock(bob.id, *SPOT) == []

    [(user_id, _, payload)] = notifier.events(EVENT_POSTCARD_UNLOCKED)
    assert user_id == bob.id
    assert payload["trigger"] == "geo"

    assert service.get_by_id(created.id, bob.id).message == "found it"


def test_far_away_stays_locked(service, checker, db, users) -> None:
    alice, bob = users["alice"], users["bob"]
    created = _geo_postcard(service, alice, bob)

    assert checker.check_and_unlock(bob.id, 48.8566, 2.3522) == []
    assert db.get(Postcard, created.id).status == PostcardStatus.LOCKED


def test_radius_boundary(service, checker, db, users) -> None:
    alice, bob = users["alice"], users["bob"]
    here = _north_of(*SPOT, 250.0)
    radius = distance_meters(*here, *SPOT)
    on_boundary = _geo_postcard(service, alice, bob, radius=radius)

    just_outside = _north_of(*SPOT, radius + 1)
    assert checker.check_and_unlock(bob.id, *just_outside) == []
    assert db.get(Postcard, on_boundary.id).status == PostcardStatus.LOCKED

    [item] = checker.check_and_unlock(bob.id, *here)
    assert item.id == on_boundary.id
    assert item.distance_meters == 250


def test_only_the_callers_postcards_are_checked(service, checker, db, users) -> None:
    alice, bob = users["alice"], users["bob"]
    for_bob = _geo_postcard(service, alice, bob)
    to_self = _geo_postcard(service, alice, alice, message="mine")

    # alice is the sender of bob's postcard, not its recipient
    [item] = checker.check_and_unlock(alice.id, *SPOT)
    assert item.id == to_self.id
    assert db.get(Postcard, for_bob.id).status == PostcardStatus.LOCKED


def test_unlocks_every_postcard_in_range(service, checker, users) -> None:
    alice, bob = users["alice"], users["bob"]
    near = _geo_postcard(service, alice, bob, radius=50)
    wide = _geo_postcard(service, alice, bob, radius=1000, at=_north_of(*SPOT, 600))
    _geo_postcard(service, alice, bob, radius=10, at=_north_of(*SPOT, 30))

    unlocked = checker.check_and_unlock(bob.id, *SPOT)
    assert {item.id for item in unlocked} == {near.id, wide.id}


def test_time_locks_and_drafts_are_ignored(service, checker, db, users, clock) -> None:
    alice, bob = users["alice"], users["bob"]
    timed = service.create(alice.id, PostcardCreateIn(recipient_id=bob.id, unlock_date=clock.now + timedelta(days=3)))
    draft = service.save_draft(
        alice.id,
        PostcardCreateIn(recipient_id=bob.id, unlock_latitude=SPOT[0], unlock_longitude=SPOT[1]),
    )

    assert checker.check_and_unlock(bob.id, *SPOT) == []
    assert db.get(Postcard, timed.id).status == PostcardStatus.LOCKED
    assert db.get(Postcard, draft.id).status == PostcardStatus.DRAFT


def test_notification_failure_still_reports_the_unlock(service, db, users, failing_notifier) -> None:
    alice, bob = users["alice"], users["bob"]
    created = _geo_postcard(service, alice, bob)
    checker = GeoLockChecker(db, notifier=failing_notifier)

    [item] = checker.check_and_unlock(bob.id, *SPOT)
    assert item.id == created.id
    assert db.get(Postcard, created.id).status == PostcardStatus.UNLOCKED
