"""Webpage screenshots via the hosted thum.io rendering service.

Nothing is rendered locally.  The target URL is appended to the service URL
verbatim, without percent-encoding, which is the form thum.io expects.
"""

from __future__ import annotations

from nexara.client import request
from nexara.config import settings

DEFAULT_WIDTH = 1200
DEFAULT_CROP = 800


def screenshot_url(url: str, width: int = DEFAULT_WIDTH, crop: int = DEFAULT_CROP) -> str:
    """Return the rendering-service URL that captures *url*."""
    endpoint = settings.screenshot_endpoint.rstrip("/")
    return f"{endpoint}/width/{width}/crop/{crop}/{url}"


def capture_screenshot(url: str, width: int = DEFAULT_WIDTH, crop: int = DEFAULT_CROP) -> bytes:
    """Fetch a *width* px wide, *crop* px tall screenshot of *url* as image bytes.

    Raises:
        FetchError: Propagated from the request primitive.
    """
    return request(screenshot_url(url, width, crop)).content


ssweb = capture_screenshot
