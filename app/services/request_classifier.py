"""Detection of Farcaster Frame requests versus plain web clients."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from fastapi import Request

from app.core.errors import ValidationAppError

logger = logging.getLogger(__name__)

# Top-level body fields that only Frame action payloads carry
FRAME_BODY_FIELDS: tuple[str, ...] = ("untrustedData", "trustedData", "frameData", "fid")

# User-Agent fragments sent by Frame-capable clients
FRAME_USER_AGENTS: tuple[str, ...] = ("Warpcast",)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def is_frame_request(headers: Mapping[str, str], body: Mapping[str, Any] | None) -> bool:
    """Determine whether a request comes from a Farcaster Frame.

    Args:
        headers: Request headers. Starlette ``Headers`` match case-insensitively;
            plain dicts are expected to use lowercase names.
        body: Parsed request body (may be empty or None).

    Returns:
        True if the body carries any Frame marker field, or the User-Agent
        names a Frame client.
    """
    if body and any(body.get(field) for field in FRAME_BODY_FIELDS):
        return True

    user_agent = headers.get("user-agent") or ""
    return any(marker in user_agent for marker in FRAME_USER_AGENTS)


async def read_request_body(request: Request) -> dict[str, Any]:
    """Read a JSON or form request body into a dict.

    Args:
        request: Incoming request.

    Returns:
        Parsed body; an empty body (or an unsupported content type) yields {}.

    Raises:
        ValidationAppError: If a JSON body is malformed or not an object.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        return dict(form.items())

    raw = await request.body()
    if not raw.strip():
        return {}

    if content_type and not content_type.endswith("json"):
        logger.debug("request_body.ignored", extra={"content_type": content_type})
        return {}

    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValidationAppError(
            code="invalid_request_body",
            message="Request body is not valid JSON",
            details={"content_type": content_type or "unknown"},
        ) from exc

    if not isinstance(payload, dict):
        raise ValidationAppError(
            code="invalid_request_body",
            message="Request body must be a JSON object",
            details={"content_type": content_type or "unknown"},
        )

    return payload
