"""
Public routers - No authentication required.
- /api/health - Health check
- /api/scores - Live scores feed
"""

from .health import router as health_router
from .scores import router as scores_router

__all__ = ["health_router", "scores_router"]
