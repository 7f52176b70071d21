"""Pydantic schemas for the fortune JSON API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FortuneStatusResponse(BaseModel):
    """Whether a user may draw a fortune, and what they drew last."""

    model_config = ConfigDict(populate_by_name=True)

    can_get_fortune: bool = Field(
        ...,
        alias="canGetFortune",
        description="True if the user's cooldown has elapsed.",
    )
    current_fortune: str | None = Field(
        None,
        alias="currentFortune",
        description="Latest fortune text while the cooldown is active, else null.",
    )
    last_fortune_at: int | None = Field(
        None,
        alias="lastFortuneAt",
        description="UNIX epoch milliseconds of the latest grant, or null.",
    )


class NewFortuneResponse(BaseModel):
    """A freshly granted fortune."""

    fortune: str = Field(..., description="The fortune message.")
    timestamp: datetime = Field(..., description="UTC time the fortune was granted.")
