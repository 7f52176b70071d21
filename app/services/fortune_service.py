"""Fortune service orchestrating the store and the fortune picker.

Handles the three fortune flows:
- status lookup for a user
- rate-limited grant for web clients
- anonymous, unlimited grant for Frame clients
"""

from __future__ import annotations

import logging
import math
import random
import string
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from app.adapters.fortune_store.base import AbstractFortuneStore, UserFortune
from app.core.errors import FortuneCooldownError
from app.core.logging import hash_identifier
from app.services.fortune_picker import get_random_fortune

logger = logging.getLogger(__name__)

FRAME_USER_PREFIX = "farcaster"
_ANON_ALPHABET = string.digits + string.ascii_lowercase


@dataclass(frozen=True)
class FortuneStatus:
    can_get_fortune: bool
    current_fortune: str | None
    last_fortune_at: datetime | None


def to_epoch_ms(value: datetime | None) -> int | None:
    if value is None:
        return None
    return int(value.timestamp() * 1000)


class FortuneService:
    """Business logic for granting and inspecting fortunes."""

    def __init__(
        self,
        store: AbstractFortuneStore,
        picker: Callable[[], str] = get_random_fortune,
        *,
        clock: Callable[[], float] = time.time,
        rng: random.Random | None = None,
    ) -> None:
        self._store = store
        self._picker = picker
        self._clock = clock
        self._rng = rng or random.Random()

    @property
    def store(self) -> AbstractFortuneStore:
        return self._store

    def get_status(self, user_id: str) -> FortuneStatus:
        """Report eligibility and, while blocked, the user's current fortune."""
        can_get = self._store.can_user_get_fortune(user_id)

        current = None
        if not can_get:
            fortune = self._store.get_user_fortune(user_id)
            if fortune:
                current = fortune.fortune_text

        user = self._store.get_user(user_id)
        last_at = user.last_fortune_at if user else None

        return FortuneStatus(
            can_get_fortune=can_get,
            current_fortune=current,
            last_fortune_at=last_at,
        )

    def grant_web_fortune(self, user_id: str) -> UserFortune:
        """Grant a fortune to a web user, honoring the cooldown.

        Raises:
            FortuneCooldownError: If the user already drew within the cooldown.
        """
        fortune = self._store.grant_fortune(user_id, self._picker())
        if fortune is None:
            next_at = self._store.next_fortune_at(user_id)
            remaining = self._store.cooldown_remaining(user_id)
            retry_after = 0
            if remaining is not None:
                retry_after = max(0, math.ceil(remaining.total_seconds()))
            logger.info(
                "fortune.cooldown_active",
                extra={
                    "user_hash": hash_identifier(user_id),
                    "next_fortune_at": next_at.isoformat() if next_at else None,
                    "retry_after_s": retry_after,
                    "cooldown_hours": self._store.cooldown_hours,
                },
            )
            raise FortuneCooldownError(user_id, next_at, retry_after)

        logger.info(
            "fortune.granted",
            extra={
                "channel": "web",
                "user_hash": hash_identifier(user_id),
                "fortune_id": fortune.id,
            },
        )
        return fortune

    def new_frame_user_id(self) -> str:
        """Build a one-shot identity such as ``farcaster_1700000000000_k3j9x0a``."""
        millis = int(self._clock() * 1000)
        suffix = "".join(self._rng.choice(_ANON_ALPHABET) for _ in range(7))
        return f"{FRAME_USER_PREFIX}_{millis}_{suffix}"

    def grant_frame_fortune(self) -> UserFortune:
        """Grant a fortune to an anonymous Frame viewer; never rate limited."""
        user_id = self.new_frame_user_id()
        fortune = self._store.create_user_fortune(user_id, self._picker())
        logger.info(
            "fortune.granted",
            extra={
                "channel": "frame",
                "user_hash": hash_identifier(user_id),
                "fortune_id": fortune.id,
            },
        )
        return fortune
