"""
Content routers - everything the public site renders and staff maintain.
- /api/menu/* - Categories and items
- /api/events/* - Events
- /api/reservations/* - Reservation requests
- /api/settings/* - Site settings
- /api/upload - Image upload
"""

from fastapi import APIRouter

from .menu import router as menu_router
from .events import router as events_router
from .reservations import router as reservations_router
from .settings import router as settings_router
from .uploads import router as uploads_router


router = APIRouter(prefix="/api")

router.include_router(menu_router)
router.include_router(events_router)
router.include_router(reservations_router)
router.include_router(settings_router)
router.include_router(uploads_router)

__all__ = ["router"]
