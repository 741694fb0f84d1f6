from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

import pytest

from app.core.exceptions import AccessDenied
from app.model import Postcard, PostcardStatus, User
from app.service.visibility import ensure_participant, hides_content, project

SENDER = User(id=uuid.uuid4(), email="s@example.com", name="Sender", avatar_url="https://cdn.example.com/s.png")
RECIPIENT = User(id=uuid.uuid4(), email="r@example.com", name="Recipient")


def _postcard(status: PostcardStatus, recipient: Optional[User] = None) -> Postcard:
    recipient = recipient or RECIPIENT
    return Postcard(
        id=uuid.uuid4(),
        sender_id=SENDER.id,
        recipient_id=recipient.id,
        sender=SENDER,
        recipient=recipient,
        message="see you in a year",
        media_url="https://cdn.example.com/photo.jpg",
        unlock_date=datetime(2027, 1, 1, tzinfo=timezone.utc),
        unlock_radius=50.0,
        status=status,
        created_at=datetime(2026, 10, 19, tzinfo=timezone.utc),
    )


def test_locked_postcard_hides_content_from_recipient() -> None:
    view = project(_postcard(PostcardStatus.LOCKED), RECIPIENT.id).model_dump(exclude_unset=True)
    assert "message" not in view
    assert "media_url" not in view
    assert view["status"] == PostcardStatus.LOCKED
    assert view["unlock_date"] == datetime(2027, 1, 1, tzinfo=timezone.utc)
    assert view["sender"]["name"] == "Sender"


def test_locked_postcard_shows_content_to_sender() -> None:
    view = project(_postcard(PostcardStatus.LOCKED), SENDER.id)
    assert view.message == "see you in a year"
    assert view.media_url == "https://cdn.example.com/photo.jpg"


def test_unlocked_postcard_shows_content_to_recipient() -> None:
    view = project(_postcard(PostcardStatus.UNLOCKED), RECIPIENT.id)
    assert view.message == "see you in a year"
    assert view.media_url == "https://cdn.example.com/photo.jpg"


def test_self_postcard_shows_content_while_locked() -> None:
    postcard = _postcard(PostcardStatus.LOCKED, recipient=SENDER)
    assert not hides_content(postcard, SENDER.id)
    assert project(postcard, SENDER.id).message == "see you in a year"


def test_record_keeps_payload_when_hidden() -> None:
    postcard = _postcard(PostcardStatus.LOCKED)
    project(postcard, RECIPIENT.id)
    assert postcard.message == "see you in a year"


def test_sender_block_can_be_dropped() -> None:
    view = project(_postcard(PostcardStatus.LOCKED), SENDER.id, include_sender=False)
    dumped = view.model_dump(exclude_unset=True)
    assert "sender" not in dumped
    assert dumped["recipient"]["name"] == "Recipient"


def test_only_participants_may_view() -> None:
    postcard = _postcard(PostcardStatus.UNLOCKED)
    ensure_participant(postcard, SENDER.id)
    ensure_participant(postcard, RECIPIENT.id)
    with pytest.raises(AccessDenied):
        ensure_participant(postcard, uuid.uuid4())
