"""
Admin API router - combines the admin-only sub-routers.

- users: Back-office account management
- audit: Audit log viewing

All routes are prefixed with /api and require the admin role.
"""

from fastapi import APIRouter

from .users import router as users_router
from .audit import router as audit_router


router = APIRouter(prefix="/api")

router.include_router(users_router)
router.include_router(audit_router)

__all__ = ["router"]
