"""Response shaping for Farcaster Frames.

Builds the Frame action payload, the HTML document carrying Frame and
OpenGraph meta tags, and the app manifest. The public base URL is resolved
dynamically so the same build works on any hosting platform.
"""

from __future__ import annotations

from dataclasses import dataclass
from html import escape

from fastapi import Request

from app.core.config import FortuneSettings, settings
from app.schemas.frame import FrameButton, FrameMetadata, Manifest

FALLBACK_SCHEME = "http"
FALLBACK_HOST = "localhost:3000"

APP_NAME = "Drunk Fortune Cookie"
APP_DESCRIPTION = "Get your daily drunk fortune cookie with a wobbling, humorous prediction."

IMAGE_PATH = "/assets/fortune-cookie.png"
POST_PATH = "/api/fortune/new"


def fortune_image_url(base_url: str) -> str:
    return f"{base_url}{IMAGE_PATH}"


def get_base_url(request: Request, fortune_settings: FortuneSettings | None = None) -> str:
    """Resolve the public base URL of the current deployment.

    Precedence:
    1. ``BASE_URL`` configured explicitly
    2. ``VERCEL_URL`` provided by the platform (always https)
    3. ``X-Forwarded-Proto`` / ``X-Forwarded-Host`` headers, falling back to
       the request scheme and ``Host`` header
    4. ``http://localhost:3000``

    Args:
        request: Incoming request.
        fortune_settings: Settings to read; defaults to the global settings.

    Returns:
        Base URL without a trailing slash.
    """
    cfg = fortune_settings or settings.fortune

    if cfg.base_url:
        return cfg.base_url.rstrip("/")

    if cfg.vercel_url:
        return f"https://{cfg.vercel_url}"

    headers = request.headers
    scheme = (
        headers.get("x-forwarded-proto")
        or request.scope.get("scheme")
        or FALLBACK_SCHEME
    )
    host = headers.get("x-forwarded-host") or headers.get("host") or FALLBACK_HOST
    # Proxies may append a chain such as "https,http"; the first hop is the client's
    scheme = scheme.split(",")[0].strip()
    host = host.split(",")[0].strip()

    return f"{scheme}://{host}"


@dataclass(frozen=True)
class FrameMetadataOptions:
    """Overrides for the Frame action payload.

    Attributes:
        image: Image URL; defaults to the fortune cookie image under base_url.
        fortune_text: Fortune to display; empty shows the "break the cookie" prompt.
        button_text: Button label; defaults to "Get Another Fortune".
    """

    image: str | None = None
    fortune_text: str = ""
    button_text: str | None = None


DEFAULT_METADATA_BUTTON = "Get Another Fortune"


def create_frame_metadata(
    base_url: str,
    options: FrameMetadataOptions | None = None,
) -> FrameMetadata:
    """Build the Frame action payload.

    Args:
        base_url: Public base URL used for the default image.
        options: Caller overrides applied over the defaults.

    Returns:
        FrameMetadata with image, text and a single button.
    """
    opts = options or FrameMetadataOptions()

    if opts.fortune_text:
        text = f'🥠 Your drunk fortune says:\n\n"{opts.fortune_text}"\n\n'
    else:
        text = "Break the cookie to receive your fortune!"

    return FrameMetadata(
        image=opts.image or fortune_image_url(base_url),
        text=text,
        buttons=[FrameButton(label=opts.button_text or DEFAULT_METADATA_BUTTON)],
    )


@dataclass(frozen=True)
class FrameHtmlOptions:
    """Parameters of the Frame HTML document.

    Unset URL fields are derived from the base URL: the image defaults to the
    fortune cookie image and the post URL to the new-fortune endpoint.
    """

    title: str = APP_NAME
    description: str = "Get your daily humorous drunk fortune"
    image_url: str | None = None
    post_url: str | None = None
    button_text: str = "Get My Fortune"
    aspect_ratio: str = "1:1"
    bg_color: str = "#2F2013"
    text_color: str = "#f5e6c9"
    accent_color: str = "#DAA520"


def generate_frame_html(base_url: str, options: FrameHtmlOptions | None = None) -> str:
    """Render an HTML document with Frame and OpenGraph meta tags.

    Args:
        base_url: Public base URL used for default image and post URLs.
        options: Document parameters.

    Returns:
        Complete HTML document. Output is deterministic for the same inputs.
    """
    opts = options or FrameHtmlOptions()

    title = escape(opts.title)
    description = escape(opts.description)
    image_url = escape(opts.image_url or fortune_image_url(base_url))
    post_url = escape(opts.post_url or f"{base_url}{POST_PATH}")
    button_text = escape(opts.button_text)
    aspect_ratio = escape(opts.aspect_ratio)
    bg_color = escape(opts.bg_color)
    text_color = escape(opts.text_color)
    accent_color = escape(opts.accent_color)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>

  <!-- Farcaster Frame Meta Tags -->
  <meta property="fc:frame" content="vNext" />
  <meta property="fc:frame:init" content="true" />
  <meta property="fc:frame:image" content="{image_url}" />
  <meta property="fc:frame:button:1" content="{button_text}" />
  <meta property="fc:frame:post_url" content="{post_url}" />
  <meta property="fc:frame:aspect_ratio" content="{aspect_ratio}" />

  <!-- OpenGraph Tags -->
  <meta property="og:title" content="{title}" />
  <meta property="og:description" content="{description}" />
  <meta property="og:image" content="{image_url}" />
</head>
<body style="font-family: system-ui, sans-serif; margin: 0; padding: 20px; background-color: {bg_color}; color: {text_color}; display: flex; flex-direction: column; align-items: center; justify-content: center; min-height: 100vh; text-align: center;">
  <div style="max-width: 600px; margin: 0 auto;">
    <h1 style="margin-bottom: 20px; color: {accent_color};">{title}</h1>
    <div style="background-color: #3B271A; border-radius: 8px; padding: 20px; margin-bottom: 20px; box-shadow: 0 4px 6px rgba(0, 0, 0, 0.3);">
      <img src="{image_url}" alt="Fortune Cookie" style="max-width: 150px; margin-bottom: 15px;">
      <p style="margin-bottom: 20px;">{description}</p>
      <div style="background-color: #251811; border-radius: 4px; padding: 15px; font-family: monospace; text-align: left; margin-bottom: 20px;">
        <p style="color: {text_color}; margin: 0 0 10px 0;"><strong>Instructions:</strong></p>
        <ol style="color: {text_color}; padding-left: 20px; margin: 0;">
          <li>Share this URL in Warpcast</li>
          <li>Click the "{button_text}" button in the frame</li>
          <li>Get your hilariously inebriated fortune</li>
          <li>Share with friends for more laughs</li>
        </ol>
      </div>
    </div>

    <p style="margin-top: 30px; font-size: 0.9em; color: {text_color};">
      Made with ❤️ for Farcaster
    </p>
  </div>
</body>
</html>"""


def build_manifest(base_url: str) -> Manifest:
    """Build the app manifest for the given base URL."""
    return Manifest(
        name=APP_NAME,
        description=APP_DESCRIPTION,
        image=fortune_image_url(base_url),
        external_url=base_url,
    )
