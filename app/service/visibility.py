"""
Read-time visibility rules for postcards.
"""
import uuid

from app.core.exceptions import AccessDenied
from app.model.postcard import Postcard, PostcardStatus
from app.schema.postcard import PostcardResponse, UserDisplay


def is_participant(postcard: Postcard, viewer_id: uuid.UUID) -> bool:
    return viewer_id in (postcard.sender_id, postcard.recipient_id)


def ensure_participant(postcard: Postcard, viewer_id: uuid.UUID) -> None:
    """Only the sender or the recipient may see a postcard at all."""
    if not is_participant(postcard, viewer_id):
        raise AccessDenied()


def hides_content(postcard: Postcard, viewer_id: uuid.UUID) -> bool:
    """
    Content is hidden only from a recipient who is not also the sender,
    and only while the postcard is LOCKED.
    """
    is_sender = postcard.sender_id == viewer_id
    is_recipient = postcard.recipient_id == viewer_id
    return postcard.status == PostcardStatus.LOCKED and is_recipient and not is_sender


def project(postcard: Postcard, viewer_id: uuid.UUID, include_sender: bool = True) -> PostcardResponse:
    """Build the view of a postcard for viewer_id."""
    data = {
        "id": postcard.id,
        "sender_id": postcard.sender_id,
        "recipient_id": postcard.recipient_id,
        "status": postcard.status,
        "unlock_date": postcard.unlock_date,
        "unlock_latitude": postcard.unlock_latitude,
        "unlock_longitude": postcard.unlock_longitude,
        "unlock_radius": postcard.unlock_radius,
        "created_at": postcard.created_at,
        "viewed_at": postcard.viewed_at,
    }
    if not hides_content(postcard, viewer_id):
        data["message"] = postcard.message
        data["media_url"] = postcard.media_url
    if include_sender and postcard.sender is not None:
        data["sender"] = UserDisplay.model_validate(postcard.sender)
    if postcard.recipient is not None:
        data["recipient"] = UserDisplay.model_validate(postcard.recipient)
    return PostcardResponse(**data)
