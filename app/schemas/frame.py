"""Pydantic schemas for Farcaster Frame payloads and the app manifest."""

from __future__ import annotations

from pydantic import BaseModel, Field


class FrameButton(BaseModel):
    """A single button rendered under the Frame image."""

    label: str = Field(..., description="Button caption shown in the Frame.")


class FrameMetadata(BaseModel):
    """Frame action response returned to Frame clients."""

    image: str = Field(..., description="Absolute URL of the Frame image.")
    text: str = Field(..., description="Message shown with the Frame.")
    buttons: list[FrameButton] = Field(
        default_factory=list,
        description="Buttons offered for the next action.",
    )


class Manifest(BaseModel):
    """Static app manifest served at /.well-known/warpcast.json."""

    name: str = Field(..., description="Display name of the app.")
    description: str = Field(..., description="Short app description.")
    image: str = Field(..., description="Absolute URL of the app image.")
    external_url: str = Field(..., description="Public base URL of the app.")
