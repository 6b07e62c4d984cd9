"""API router configuration."""

from fastapi import APIRouter

from app.api.endpoints import auth, health, profiles, users

api_router = APIRouter()

# Include routers
api_router.include_router(health.router)
api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(users.router)
api_router.include_router(profiles.router)
