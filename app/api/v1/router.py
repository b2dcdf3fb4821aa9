"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import recovery, up_next

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    recovery.router, prefix="/recovery", tags=["Recovery"]
)
api_router.include_router(
    up_next.router, prefix="/up-next", tags=["Up next"]
)
