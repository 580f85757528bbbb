"""
Turning dropped content into uploads.

A drop can carry local files, a URL dragged from another tab (fetched
through the server's proxy) or an inline ``data:image/...`` URL.
"""
import base64
import binascii
import logging
import re
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
from urllib.parse import unquote, urlsplit

import httpx

logger = logging.getLogger("app.client.drop")

_IMAGE_PATH = re.compile(r"\.(jpg|jpeg|png|gif|webp)$", re.IGNORECASE)
_DATA_URL = re.compile(r"^data:(?P<mime>[^;,]+)?(?P<params>(;[^;,]*)*),(?P<data>.*)$", re.DOTALL)

# Anything this short is UI text, not an image address
MIN_URL_LENGTH = 20


@dataclass
class DroppedFile:
    filename: str
    content: bytes
    content_type: str


@dataclass
class DropResult:
    """Files accepted from one drop, plus the reasons anything was skipped."""

    files: List[DroppedFile] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def is_droppable_image_url(url: str) -> bool:
    """
    True for absolute http(s) image URLs.
    In-app links (anything mentioning ``album``) are ignored.
    """
    if not url or not url.startswith(("http://", "https://")):
        return False
    if len(url) <= MIN_URL_LENGTH or "album" in url:
        return False
    return bool(_IMAGE_PATH.search(url.split("?", 1)[0]))


def decode_data_url(data_url: str) -> Tuple[str, bytes]:
    """
    Split a ``data:`` URL into its MIME type and decoded bytes.

    Raises:
        ValueError: not a data URL or the payload does not decode
    """
    match = _DATA_URL.match(data_url or "")
    if not match:
        raise ValueError("Not a data URL")
    mime = match.group("mime") or "text/plain"
    params = match.group("params") or ""
    data = match.group("data")
    if ";base64" in params:
        try:
            return mime, base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("Invalid base64 payload") from e
    return mime, unquote(data).encode("utf-8")


def filename_from_url(url: str, now_ms: Optional[int] = None) -> str:
    """Last path segment of the URL, or ``image_from_<ms>.jpg``."""
    segment = urlsplit(url.split("?", 1)[0]).path.rsplit("/", 1)[-1]
    if segment:
        return unquote(segment)
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"image_from_{stamp}.jpg"


async def collect_drop(
    client,
    files: Sequence[DroppedFile] = (),
    uri_list: str = "",
    plain_text: str = "",
) -> DropResult:
    """
    Gather every image carried by a drop.

    Args:
        client: AlbumsClient used for the proxy
        files: Local files; non-images are skipped
        uri_list: ``text/uri-list`` data
        plain_text: ``text/plain`` data
    """
    result = DropResult()
    result.files.extend(f for f in files if f.content_type.startswith("image/"))

    url = (uri_list or plain_text).strip()
    if url.startswith("http"):
        if is_droppable_image_url(url):
            try:
                content_type, content = await client.proxy_image(url)
            except httpx.HTTPError as e:
                logger.warning(
                    "Proxy download failed",
                    extra={"event": "drop", "url": url, "error_type": type(e).__name__},
                )
                result.errors.append(f"Could not download {url}")
            else:
                if content_type.startswith("image/") and content:
                    result.files.append(
                        DroppedFile(filename_from_url(url), content, content_type)
                    )
                else:
                    result.errors.append(f"{url} is not an image")
        else:
            logger.debug("Ignoring dropped text", extra={"event": "drop", "url": url})

    if plain_text.startswith("data:image/"):
        try:
            mime, content = decode_data_url(plain_text)
        except ValueError as e:
            result.errors.append(str(e))
        else:
            stamp = int(time.time() * 1000)
            result.files.append(DroppedFile(f"image_from_data_{stamp}.jpg", content, mime))

    return result


async def upload_drop(client, album_id: int, result: DropResult) -> List[dict]:
    """Upload the files of a drop into an album, in drop order."""
    uploaded = []
    for dropped in result.files:
        uploaded.append(
            await client.upload_photo(
                album_id, dropped.filename, dropped.content, dropped.content_type
            )
        )
    return uploaded
