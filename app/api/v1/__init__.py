"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, health, members

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(members.router, prefix="/members", tags=["Members"])
