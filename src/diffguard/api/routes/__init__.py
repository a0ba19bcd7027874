"""API route registration for diffguard."""

from fastapi import APIRouter

from . import diff, meta

router = APIRouter()
router.include_router(meta.router)
router.include_router(diff.router)

__all__ = ["router"]
