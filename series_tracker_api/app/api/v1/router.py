"""
Top-level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.  When
new domains are introduced, update this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import health, series, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(series.router, prefix="/series", tags=["series"])
router.include_router(health.router, prefix="/health", tags=["health"])
