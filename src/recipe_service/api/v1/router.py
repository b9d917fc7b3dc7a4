"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under the configured ``api.v1_prefix``.
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_service.api.v1.endpoints import admin, ai, auth, health, recipes


router = APIRouter()

router.include_router(health.router)
router.include_router(auth.router)
router.include_router(recipes.router)
router.include_router(ai.router)
router.include_router(admin.router)
