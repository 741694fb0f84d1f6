"""
Session Middleware - loads session from Redis for each request.
"""
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from typing import Callable
from app.session import extract_token, get_session

logger = logging.getLogger(__name__)


class SessionMiddleware(BaseHTTPMiddleware):
    """Loads session from Redis based on Authorization header."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.session = {}
        request.state.token = extract_token(request.headers.get("authorization"))

        if request.state.token:
            try:
                user_data = get_session(request.state.token)
            except Exception as e:
                # Store unreachable: treat as no session, validate_session rejects.
                logger.warning(f"Session lookup failed: {e}")
                user_data = None
            if user_data:
                request.state.session = user_data

        return await call_next(request)
