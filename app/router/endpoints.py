"""
API Router - all endpoints.
"""
from fastapi import APIRouter
from app.router.api.v1 import notifications, postcards

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(
    postcards.router,
    prefix="/postcards",
    tags=["Postcards"],
)

api_router.include_router(
    notifications.router,
    prefix="/notifications",
    tags=["Notifications"],
)
