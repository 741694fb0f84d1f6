"""
Application exceptions.
Each maps to an HTTP status with a {"code", "message"} detail body.
"""
from typing import Optional
from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base for errors surfaced to API callers."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "BAD_REQUEST"
    message: str = "Bad request"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(
            status_code=self.status_code,
            detail={"code": self.code, "message": self.message},
        )


# --- Session

class NotAuthenticated(AppException):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "NOT_AUTHENTICATED"
    message = "Authentication required"


class SessionExpired(AppException):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "SESSION_EXPIRED"
    message = "Session expired or invalid. Please log in again."


# --- Unlock condition validation

class InvalidUnlockCondition(AppException):
    code = "INVALID_UNLOCK_CONDITION"
    message = "Must specify either an unlock date OR an unlock location (latitude + longitude)"


class UnlockDateTooSoon(AppException):
    code = "UNLOCK_DATE_TOO_SOON"
    message = "Unlock date must be at least tomorrow"


class UnlockDateTooFar(AppException):
    code = "UNLOCK_DATE_TOO_FAR"
    message = "Unlock date cannot be more than 1 year in the future"


class InvalidRadius(AppException):
    code = "INVALID_RADIUS"
    message = "Unlock radius must be between 10 and 1000 meters"


# --- Recipient

class RecipientNotFound(AppException):
    status_code = status.HTTP_404_NOT_FOUND
    code = "RECIPIENT_NOT_FOUND"
    message = "Recipient user not found"


class RecipientNotFollowed(AppException):
    status_code = status.HTTP_403_FORBIDDEN
    code = "RECIPIENT_NOT_FOLLOWED"
    message = "You can only send postcards to users you follow"


# --- Access

class NotFound(AppException):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"

    def __init__(self, resource: str = "Resource"):
        super().__init__(message=f"{resource} not found")


class AccessDenied(AppException):
    status_code = status.HTTP_403_FORBIDDEN
    code = "ACCESS_DENIED"
    message = "You do not have access to this postcard"
