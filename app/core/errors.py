"""Application-level exception types.

This module defines domain errors used across services and routes, enabling
consistent error handling, logging, and API responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    parameter: str
    content_type: str


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when request input is missing or malformed."""


class FortuneCooldownError(Exception):
    """Raised when a user asks for a fortune before their cooldown expires.

    This is an expected rejection rather than a failure; routes translate it
    into a 403 response.
    """

    def __init__(
        self,
        user_id: str,
        next_fortune_at: datetime | None,
        retry_after_seconds: int = 0,
    ) -> None:
        super().__init__(f"Cooldown active for user until {next_fortune_at}")
        self.user_id = user_id
        self.next_fortune_at = next_fortune_at
        self.retry_after_seconds = retry_after_seconds
