"""Main API router"""

from fastapi import APIRouter

from .routes import auth, email, submissions, users
from ..core.config import settings

# Main API router
api_router = APIRouter()

# Include all routes
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(submissions.router, prefix="/submissions", tags=["submissions"])
api_router.include_router(email.router, prefix="/email", tags=["email"])


@api_router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "version": settings.VERSION, "authMode": settings.AUTH_MODE.value}
