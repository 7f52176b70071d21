"""Fortune store interfaces and records.

Routes and services depend on this abstraction (not the concrete
implementation) so the storage backend can be swapped later.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class User:
    """A user known to the store.

    Attributes:
        id: Sequential identifier assigned on creation.
        user_id: Caller-supplied identity (unique key).
        last_fortune_at: UTC time of the most recent granted fortune.
    """

    id: int
    user_id: str
    last_fortune_at: datetime | None


@dataclass(frozen=True)
class UserFortune:
    """The most recent fortune granted to a user.

    Attributes:
        id: Sequential identifier assigned on creation.
        user_id: Owner of the fortune.
        fortune_text: The fortune message.
        created_at: UTC time the fortune was granted.
    """

    id: int
    user_id: str
    fortune_text: str
    created_at: datetime


class AbstractFortuneStore(ABC):
    """Interface for user/fortune stores."""

    @property
    @abstractmethod
    def cooldown_hours(self) -> float:
        """Minimum hours between two grants for the same user."""
        raise NotImplementedError

    @abstractmethod
    def get_user(self, user_id: str) -> User | None:
        """Return the user record, or None if the user was never seen."""
        raise NotImplementedError

    @abstractmethod
    def get_user_fortune(self, user_id: str) -> UserFortune | None:
        """Return the user's most recent fortune, or None."""
        raise NotImplementedError

    @abstractmethod
    def can_user_get_fortune(self, user_id: str) -> bool:
        """Check whether the user's cooldown has elapsed.

        Args:
            user_id: User identity.

        Returns:
            True for unknown users or when at least ``cooldown_hours`` have
            passed since the last grant.
        """
        raise NotImplementedError

    @abstractmethod
    def next_fortune_at(self, user_id: str) -> datetime | None:
        """Return when the user becomes eligible again, or None if eligible now."""
        raise NotImplementedError

    @abstractmethod
    def cooldown_remaining(self, user_id: str) -> timedelta | None:
        """Return the time left until the user is eligible, measured on the store's clock."""
        raise NotImplementedError

    @abstractmethod
    def create_user_fortune(self, user_id: str, fortune_text: str) -> UserFortune:
        """Store a fortune for the user, replacing any previous one.

        The cooldown is not checked here; use ``grant_fortune`` when the
        check and the write must happen together.
        """
        raise NotImplementedError

    @abstractmethod
    def grant_fortune(self, user_id: str, fortune_text: str) -> UserFortune | None:
        """Atomically check the cooldown and store the fortune.

        Returns:
            The new UserFortune, or None if the cooldown is still active.
        """
        raise NotImplementedError
