"""FastAPI dependencies exposing per-app services to route handlers.

The fortune store is constructed explicitly by the app factory and kept on
``app.state``; handlers receive it through these dependencies instead of a
module-level global, so each app instance (and each test) owns its state.
"""

from __future__ import annotations

from fastapi import Request

from app.adapters.fortune_store.base import AbstractFortuneStore
from app.adapters.fortune_store.in_memory import InMemoryFortuneStore
from app.core.config import settings
from app.services.fortune_service import FortuneService


def build_fortune_store() -> AbstractFortuneStore:
    """Create the default store from configuration."""

    return InMemoryFortuneStore(cooldown_hours=settings.fortune.fortune_cooldown_hours)


def get_fortune_service(request: Request) -> FortuneService:
    """Return the FortuneService attached to the running app."""

    return request.app.state.fortune_service
