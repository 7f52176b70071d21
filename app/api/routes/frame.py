from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from app.schemas.frame import Manifest
from app.services.frame_formatter import (
    FrameHtmlOptions,
    build_manifest,
    generate_frame_html,
    get_base_url,
)

router = APIRouter(tags=["Frame"])


@router.get("/.well-known/warpcast.json", response_model=Manifest)
@router.get("/warpcast.json", response_model=Manifest, include_in_schema=False)
async def warpcast_manifest(request: Request) -> Manifest:
    """Serve the app manifest (also exposed at /warpcast.json for testing)."""

    return build_manifest(get_base_url(request))


@router.get("/frame", response_class=HTMLResponse)
async def frame_page(request: Request) -> HTMLResponse:
    """Main Frame page to share in Warpcast."""

    html = generate_frame_html(
        get_base_url(request),
        FrameHtmlOptions(
            title="Drunk Fortune Cookie",
            description="Get your daily humorous drunk fortune with a wobbling text effect",
            button_text="Get My Fortune",
        ),
    )
    return HTMLResponse(content=html)


@router.get("/minimal-frame", response_class=HTMLResponse)
async def minimal_frame_page(request: Request) -> HTMLResponse:
    """Minimal Frame used to test the integration."""

    html = generate_frame_html(
        get_base_url(request),
        FrameHtmlOptions(
            title="Drunk Fortune Cookie (Minimal)",
            description="Simple test frame for Farcaster",
            button_text="Break Cookie",
            aspect_ratio="1.91:1",
        ),
    )
    return HTMLResponse(content=html)
