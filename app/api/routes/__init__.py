from __future__ import annotations

from app.api.routes.fortune import router as fortune_router
from app.api.routes.frame import router as frame_router
from app.api.routes.health import router as health_router

__all__ = ["fortune_router", "frame_router", "health_router"]
