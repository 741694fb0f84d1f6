"""
FastAPI dependencies for route protection.
"""
import uuid
from fastapi import Request, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.core.exceptions import NotAuthenticated, SessionExpired
from typing import Dict, Any

# Security scheme for OpenAPI docs (shows lock icon and Authorization header)
bearer_scheme = HTTPBearer(
    scheme_name="Bearer",
    description="Session token issued by the identity service",
    auto_error=False,
)


async def validate_session(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)
) -> Dict[str, Any]:
    """
    Validates session loaded by middleware.

    Returns:
        Session data dict with at least user_id

    Raises:
        NotAuthenticated: No token provided
        SessionExpired: Token not found in Redis
    """
    if not request.state.token:
        raise NotAuthenticated()

    if not request.state.session:
        raise SessionExpired()

    return request.state.session


async def get_current_user_id(
    current_user: Dict[str, Any] = Depends(validate_session),
) -> uuid.UUID:
    """Caller identity used by postcard routes."""
    try:
        return uuid.UUID(str(current_user["user_id"]))
    except (KeyError, ValueError):
        raise SessionExpired()
