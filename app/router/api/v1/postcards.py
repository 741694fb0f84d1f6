"""
Postcards API: create, draft, list received/sent, geo check, get by id.
"""
import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import get_current_user_id
from app.schema.postcard import (
    GeoCheckIn,
    GeoCheckResponse,
    PostcardCreateIn,
    PostcardResponse,
)
from app.service.geo_lock_checker import GeoLockChecker
from app.service.postcard_service import PostcardService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "",
    response_model=PostcardResponse,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_postcard(
    body: PostcardCreateIn,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Create and send a LOCKED postcard. Exactly one of unlock_date or
    (unlock_latitude, unlock_longitude) is required. Requires Bearer token.
    """
    return PostcardService(db).create(user_id, body)


@router.post(
    "/draft",
    response_model=PostcardResponse,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
async def save_draft(
    body: PostcardCreateIn,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Save a postcard as draft (unlock condition optional). Requires Bearer token."""
    return PostcardService(db).save_draft(user_id, body)


@router.get("/received", response_model=List[PostcardResponse], response_model_exclude_unset=True)
async def list_received(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Postcards addressed to the current user (newest first). Locked content is hidden."""
    return PostcardService(db).list_received(user_id)


@router.get("/sent", response_model=List[PostcardResponse], response_model_exclude_unset=True)
async def list_sent(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Postcards sent by the current user (newest first), content included."""
    return PostcardService(db).list_sent(user_id)


@router.post("/check-geo", response_model=GeoCheckResponse)
async def check_geo(
    body: GeoCheckIn,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Unlock the current user's geo-locked postcards within range of the reported location."""
    unlocked = GeoLockChecker(db).check_and_unlock(user_id, body.latitude, body.longitude)
    return GeoCheckResponse(unlocked_count=len(unlocked), unlocked=unlocked)


@router.get("/{postcard_id}", response_model=PostcardResponse, response_model_exclude_unset=True)
async def get_postcard(
    postcard_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Get a postcard by id (sender or recipient only). Requires Bearer token."""
    return PostcardService(db).get_by_id(postcard_id, user_id)
