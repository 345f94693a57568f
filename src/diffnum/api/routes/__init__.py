"""API route registration for diffnum."""

from fastapi import APIRouter

from . import annotate, meta

router = APIRouter()
router.include_router(meta.router)
router.include_router(annotate.router)

__all__ = ["router"]
