"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under the ``api.v1_prefix`` setting (``/api/v1``).
"""

from __future__ import annotations

from fastapi import APIRouter

from microblog.api.v1.endpoints import (
    auth,
    feed,
    health,
    microposts,
    relationships,
    root,
    users,
)


router = APIRouter()

router.include_router(root.router)
router.include_router(health.router)
router.include_router(auth.router)
router.include_router(users.router)
router.include_router(microposts.router)
router.include_router(feed.router)
router.include_router(relationships.router)
