"""
Remote image proxy.

Fetches an image from another site on behalf of the browser, which cannot
read cross-origin image bytes itself (drag-and-drop from another tab).
"""
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote, urlparse

import httpx

from app.config import get_settings
from app.exceptions import ProxyError, ValidationError
from app.utils.prometheus_metrics import proxy_requests_total
from app.utils.retry import retry_with_backoff

logger = logging.getLogger("app.proxy")

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


@dataclass
class ProxiedImage:
    """Image fetched through the proxy."""

    content: bytes
    content_type: str
    filename: str


def filename_from_url(url: str, default: str = "image.jpg") -> str:
    """Last path segment of a URL, ignoring the query string."""
    segment = unquote(urlparse(url).path.rsplit("/", 1)[-1])
    return segment or default


class ImageProxyService:
    """
    Downloads remote images with httpx.
    Transport errors are retried; HTTP errors and non-image responses are not.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = get_settings()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.proxy_timeout_seconds,
            follow_redirects=True,
            transport=self._transport,
            headers={"User-Agent": USER_AGENT, "Accept": "image/*"},
        )

    async def fetch_image(self, url: str) -> ProxiedImage:
        """
        Fetch an image.

        Raises:
            ValidationError: the URL is not http(s)
            ProxyError: the remote answered with an error, a non-image
                content type or an empty body, or could not be reached
        """
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValidationError("URL must be an absolute http(s) URL")

        async def _get() -> httpx.Response:
            async with self._client() as client:
                return await client.get(url)

        try:
            response = await retry_with_backoff(
                _get,
                max_attempts=self.settings.proxy_max_attempts,
                retryable_exceptions=(httpx.TransportError,),
                target="proxy.fetch",
            )
        except httpx.HTTPError as e:
            proxy_requests_total.labels(result="failure").inc()
            logger.error(
                "Proxy fetch failed",
                extra={"event": "proxy", "host": parsed.netloc, "error_type": type(e).__name__},
            )
            raise ProxyError("Could not reach the remote host") from e

        if response.status_code != 200:
            proxy_requests_total.labels(result="failure").inc()
            logger.warning(
                "Proxy upstream error",
                extra={"event": "proxy", "host": parsed.netloc, "status": response.status_code},
            )
            raise ProxyError(f"Remote host answered {response.status_code}")

        content_type = response.headers.get("content-type", "").split(";")[0].strip()
        if not content_type.startswith("image/"):
            proxy_requests_total.labels(result="failure").inc()
            raise ProxyError("URL does not point to an image")

        if not response.content:
            proxy_requests_total.labels(result="failure").inc()
            raise ProxyError("Remote image is empty")

        proxy_requests_total.labels(result="success").inc()
        return ProxiedImage(
            content=response.content,
            content_type=content_type,
            filename=filename_from_url(url),
        )
