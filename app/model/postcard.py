"""
Postcard model.
Message and media are always stored as-is; lock state only gates what readers see.
"""
import enum
import uuid

from sqlalchemy import Boolean, Column, DateTime, Enum, Float, ForeignKey, String, Text, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.core.database import Base


class PostcardStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    LOCKED = "LOCKED"
    UNLOCKED = "UNLOCKED"


class Postcard(Base):
    __tablename__ = "postcards"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    sender_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    recipient_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    message = Column(Text, nullable=True)
    media_url = Column(String, nullable=True)

    # Exactly one of unlock_date / (unlock_latitude, unlock_longitude) once LOCKED
    unlock_date = Column(DateTime(timezone=True), nullable=True, index=True)
    unlock_latitude = Column(Float, nullable=True)
    unlock_longitude = Column(Float, nullable=True)
    unlock_radius = Column(Float, nullable=False, default=50.0)

    status = Column(
        Enum(PostcardStatus, name="postcard_status"),
        nullable=False,
        default=PostcardStatus.DRAFT,
        index=True,
    )
    unlock_notification_sent = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    viewed_at = Column(DateTime(timezone=True), nullable=True)

    sender = relationship("User", foreign_keys=[sender_id])
    recipient = relationship("User", foreign_keys=[recipient_id])
