"""
Postcard schemas.
"""
from datetime import datetime
from typing import List, Optional
import uuid
from pydantic import BaseModel, Field

from app.model.postcard import PostcardStatus


class PostcardCreateIn(BaseModel):
    """JSON body for POST /postcards and POST /postcards/draft."""
    recipient_id: Optional[uuid.UUID] = Field(None, description="Defaults to the sender (self-postcard).")
    message: Optional[str] = None
    media_url: Optional[str] = None
    # Time-lock and geo-lock are mutually exclusive; checked by the service.
    unlock_date: Optional[datetime] = None
    unlock_latitude: Optional[float] = None
    unlock_longitude: Optional[float] = None
    unlock_radius: Optional[float] = Field(None, description="Meters, 10-1000. Defaults to 50.")


class UserDisplay(BaseModel):
    """Sender / recipient display block."""
    id: uuid.UUID
    name: Optional[str] = None
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True


class PostcardResponse(BaseModel):
    """
    Externally visible postcard.
    message / media_url are left unset (and so omitted) while locked for the recipient.
    """
    id: uuid.UUID
    sender_id: uuid.UUID
    recipient_id: uuid.UUID
    status: PostcardStatus
    unlock_date: Optional[datetime] = None
    unlock_latitude: Optional[float] = None
    unlock_longitude: Optional[float] = None
    unlock_radius: float
    created_at: Optional[datetime] = None
    viewed_at: Optional[datetime] = None
    message: Optional[str] = None
    media_url: Optional[str] = None
    sender: Optional[UserDisplay] = None
    recipient: Optional[UserDisplay] = None


class GeoCheckIn(BaseModel):
    """Current location reported by the caller."""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class GeoUnlockedItem(BaseModel):
    id: uuid.UUID
    sender_name: Optional[str] = None
    distance_meters: float


class GeoCheckResponse(BaseModel):
    unlocked_count: int
    unlocked: List[GeoUnlockedItem]
