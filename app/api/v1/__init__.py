"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import archives, auth, dashboard, health, profile, reports, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
router.include_router(archives.router, prefix="/archives", tags=["archives"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(profile.router, prefix="/profile", tags=["profile"])
router.include_router(reports.router, prefix="/reports", tags=["reports"])
