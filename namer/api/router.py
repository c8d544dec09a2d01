"""
Main API router. Mounts all sub-routers.
"""

from fastapi import APIRouter

router = APIRouter()


# ── Health ───────────────────────────────────────────────────────────

@router.get("/health")
async def health():
    return {"status": "ok", "service": "namer"}


# ── V1 routes ────────────────────────────────────────────────────────

from .identities import identities_router
from .favorites import favorites_router
from .auth import auth_router

router.include_router(identities_router, prefix="/v1")
router.include_router(favorites_router, prefix="/v1")
router.include_router(auth_router, prefix="/v1")
