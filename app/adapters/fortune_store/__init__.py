"""Fortune storage adapters.

The service starts with a per-process in-memory store; the abstract interface
lets a shared key-value backend take its place without touching the routes.
"""

from app.adapters.fortune_store.base import AbstractFortuneStore, User, UserFortune
from app.adapters.fortune_store.in_memory import InMemoryFortuneStore

__all__ = ["AbstractFortuneStore", "InMemoryFortuneStore", "User", "UserFortune"]
