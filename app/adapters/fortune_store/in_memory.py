"""In-memory fortune store.

Notes:
- Per-process only: running multiple workers gives each worker its own users.
- Thread-safe: uses a lock around shared state.
"""

from __future__ import annotations

import itertools
import threading
import time
from datetime import datetime, timedelta, timezone
from typing import Callable

from app.adapters.fortune_store.base import AbstractFortuneStore, User, UserFortune


class InMemoryFortuneStore(AbstractFortuneStore):
    """Store users and their latest fortune in process memory.

    Only the most recent fortune per user is kept. Records are never evicted,
    so memory grows with the number of distinct user ids for the lifetime of
    the process.
    """

    def __init__(
        self,
        *,
        cooldown_hours: float = 24.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the in-memory store.

        Args:
            cooldown_hours: Minimum hours between grants for the same user.
            clock: Time source function returning UNIX time in seconds.

        Raises:
            ValueError: If cooldown_hours is negative.
        """
        if cooldown_hours < 0:
            raise ValueError("cooldown_hours must be >= 0")

        self._cooldown_hours = float(cooldown_hours)
        self._clock = clock
        self._lock = threading.RLock()
        self._users: dict[str, User] = {}
        self._fortunes: dict[str, UserFortune] = {}
        self._user_ids = itertools.count(1)
        self._fortune_ids = itertools.count(1)

    @property
    def cooldown_hours(self) -> float:
        return self._cooldown_hours

    def _now(self) -> datetime:
        return datetime.fromtimestamp(self._clock(), tz=timezone.utc)

    def get_user(self, user_id: str) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def get_user_fortune(self, user_id: str) -> UserFortune | None:
        with self._lock:
            return self._fortunes.get(user_id)

    def _eligible_locked(self, user_id: str, now: datetime) -> bool:
        return self._cooldown_end_locked(user_id, now) is None

    def can_user_get_fortune(self, user_id: str) -> bool:
        now = self._now()
        with self._lock:
            return self._eligible_locked(user_id, now)

    def _cooldown_end_locked(self, user_id: str, now: datetime) -> datetime | None:
        user = self._users.get(user_id)
        if user is None or user.last_fortune_at is None:
            return None
        end = user.last_fortune_at + timedelta(hours=self._cooldown_hours)
        return end if now < end else None

    def next_fortune_at(self, user_id: str) -> datetime | None:
        now = self._now()
        with self._lock:
            return self._cooldown_end_locked(user_id, now)

    def cooldown_remaining(self, user_id: str) -> timedelta | None:
        now = self._now()
        with self._lock:
            end = self._cooldown_end_locked(user_id, now)
        return end - now if end is not None else None

    def _touch_user_locked(self, user_id: str, now: datetime) -> User:
        existing = self._users.get(user_id)
        user_pk = existing.id if existing else next(self._user_ids)
        user = User(id=user_pk, user_id=user_id, last_fortune_at=now)
        self._users[user_id] = user
        return user

    def _create_locked(self, user_id: str, fortune_text: str, now: datetime) -> UserFortune:
        fortune = UserFortune(
            id=next(self._fortune_ids),
            user_id=user_id,
            fortune_text=fortune_text,
            created_at=now,
        )
        self._fortunes[user_id] = fortune
        self._touch_user_locked(user_id, now)
        return fortune

    def create_user_fortune(self, user_id: str, fortune_text: str) -> UserFortune:
        """Store a fortune for the user, replacing the previous one.

        Raises:
            ValueError: If user_id is empty.
        """
        if not user_id:
            raise ValueError("user_id must be a non-empty string")

        now = self._now()
        with self._lock:
            return self._create_locked(user_id, fortune_text, now)

    def grant_fortune(self, user_id: str, fortune_text: str) -> UserFortune | None:
        """Check the cooldown and store the fortune under a single lock.

        Raises:
            ValueError: If user_id is empty.
        """
        if not user_id:
            raise ValueError("user_id must be a non-empty string")

        now = self._now()
        with self._lock:
            if not self._eligible_locked(user_id, now):
                return None
            return self._create_locked(user_id, fortune_text, now)
