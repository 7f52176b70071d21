import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from app.core.dependencies import get_fortune_service
from app.core.errors import FortuneCooldownError, ValidationAppError
from app.schemas.fortune import FortuneStatusResponse, NewFortuneResponse
from app.schemas.frame import FrameMetadata
from app.services.fortune_service import FortuneService, to_epoch_ms
from app.services.frame_formatter import (
    FrameMetadataOptions,
    create_frame_metadata,
    fortune_image_url,
    get_base_url,
)
from app.services.request_classifier import is_frame_request, read_request_body

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/fortune", tags=["Fortune"])

COOLDOWN_MESSAGE = "You've already received your fortune today. Come back tomorrow!"


def _require_user_id(value: object) -> str:
    if isinstance(value, str):
        value = value.strip()
    if not value:
        raise ValidationAppError(
            code="missing_user_id",
            message="Missing userId parameter",
            details={"parameter": "userId"},
        )
    return str(value)


@router.get("/status", response_model=FortuneStatusResponse)
async def fortune_status(
    service: Annotated[FortuneService, Depends(get_fortune_service)],
    user_id: Annotated[str | None, Query(alias="userId")] = None,
) -> FortuneStatusResponse:
    """Report whether the user may draw a new fortune.

    Raises:
        ValidationAppError: 400 if userId is missing.
    """
    uid = _require_user_id(user_id)
    result = service.get_status(uid)
    return FortuneStatusResponse(
        can_get_fortune=result.can_get_fortune,
        current_fortune=result.current_fortune,
        last_fortune_at=to_epoch_ms(result.last_fortune_at),
    )


@router.post(
    "/new",
    response_model=NewFortuneResponse | FrameMetadata,
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "userId missing or body malformed"},
        status.HTTP_403_FORBIDDEN: {"description": "Cooldown still active for this user"},
    },
)
async def new_fortune(
    request: Request,
    service: Annotated[FortuneService, Depends(get_fortune_service)],
) -> NewFortuneResponse | FrameMetadata:
    """Draw a new fortune.

    Frame clients always get a Frame payload (200) without rate limiting.
    Web clients must send ``userId`` and are limited to one fortune per
    cooldown window.
    """
    try:
        body = await read_request_body(request)
    except ValidationAppError:
        # Frame clients always get a 200, even with an unreadable body
        if not is_frame_request(request.headers, None):
            raise
        body = {}

    if is_frame_request(request.headers, body):
        logger.info(
            "frame.request",
            extra={
                "body_fields": sorted(body.keys()),
                "user_agent": request.headers.get("user-agent"),
            },
        )
        fortune = service.grant_frame_fortune()
        base_url = get_base_url(request)
        return create_frame_metadata(
            base_url,
            FrameMetadataOptions(
                image=fortune_image_url(base_url),
                fortune_text=fortune.fortune_text,
                button_text="Get Another Fortune",
            ),
        )

    uid = _require_user_id(body.get("userId"))
    try:
        fortune = service.grant_web_fortune(uid)
    except FortuneCooldownError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=COOLDOWN_MESSAGE,
            headers={"Retry-After": str(exc.retry_after_seconds)},
        ) from exc

    return NewFortuneResponse(fortune=fortune.fortune_text, timestamp=fortune.created_at)
