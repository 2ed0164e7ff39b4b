"""
API Router

Chart data endpoints for the frontend.
"""

from fastapi import APIRouter

from app.api.endpoints import bars

router = APIRouter()

# Chart endpoints live at the root, next to /health
router.include_router(bars.router, tags=["Chart Data"])
