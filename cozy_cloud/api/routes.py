"""
API Routes for Cozy Cloud.
"""
from fastapi import APIRouter

from .events import router as events_router
from .personal import router as personal_router
from .trips import router as trips_router


router = APIRouter(prefix="/api")

router.include_router(trips_router)
router.include_router(events_router)
router.include_router(personal_router)
